"""
Static configuration: tool catalog and settings loading.
"""
