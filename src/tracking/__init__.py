"""
Per-user history and favorites plus per-tool usage analytics.
"""

from .activity import ActivityStore, activity_store, record_tool_use, validate_identifier

__all__ = [
    'ActivityStore',
    'activity_store',
    'record_tool_use',
    'validate_identifier'
]
