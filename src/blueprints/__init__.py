"""
Flask blueprints for the conversion tools and per-user activity.
"""
