#!/usr/bin/env python3
"""
Tool activity backend
Keeps per-user history and favorites plus per-tool usage counts in memory
"""

import logging
import re
import threading
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 20
MAX_STORED_HISTORY = 500
PREVIEW_LENGTH = 100

_IDENTIFIER_RE = re.compile(r'^[A-Za-z0-9_-]{1,64}$')


def validate_identifier(value: Any) -> bool:
    """Validate a user or tool identifier"""
    return isinstance(value, str) and bool(_IDENTIFIER_RE.match(value))


def _require_identifier(value: Any, kind: str) -> str:
    if not validate_identifier(value):
        raise ValueError(f"Invalid {kind}: {value!r}")
    return value


def generate_preview(data: Optional[str], max_length: int = PREVIEW_LENGTH) -> Optional[str]:
    """Collapse whitespace and cut the preview to max_length characters"""
    if data is None:
        return None
    preview = ' '.join(str(data).split())
    return preview[:max_length]


class ActivityStore:
    def __init__(self, history_limit: int = DEFAULT_HISTORY_LIMIT, max_entries: int = MAX_STORED_HISTORY):
        # history_limit is the default page size on read, max_entries caps storage per user
        self.history_limit = history_limit
        self.max_entries = max_entries
        self.history_data: Dict[str, List[Dict[str, Any]]] = {}
        self.favorites: Dict[str, Dict[str, str]] = {}
        self.analytics: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def add_history(self, user_id: str, tool_id: str, input_preview: Optional[str] = None) -> Dict[str, Any]:
        """Record a tool use for a user, newest first"""
        try:
            _require_identifier(user_id, 'user id')
            _require_identifier(tool_id, 'tool id')
        except ValueError as e:
            logger.warning("Rejected history entry: %s", e)
            return {"success": False, "error": str(e)}

        entry = {
            "id": str(uuid.uuid4())[:8],
            "user_id": user_id,
            "tool_id": tool_id,
            "input_preview": generate_preview(input_preview),
            "used_at": datetime.now().isoformat()
        }

        with self._lock:
            history = self.history_data.setdefault(user_id, [])
            history.insert(0, entry)
            del history[self.max_entries:]

        return {
            "success": True,
            "entry_id": entry["id"],
            "message": "History entry added"
        }

    def get_history(self, user_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Get a user's history entries, most recent first (history_limit when no limit is given)"""
        if limit is None:
            limit = self.history_limit
        _require_identifier(user_id, 'user id')
        with self._lock:
            history = list(self.history_data.get(user_id, []))
        if limit >= 0:
            history = history[:limit]
        return [dict(entry) for entry in history]

    def clear_history(self, user_id: str) -> Dict[str, Any]:
        """Clear all history for a user"""
        _require_identifier(user_id, 'user id')
        with self._lock:
            self.history_data.pop(user_id, None)

        return {
            "success": True,
            "message": f"History cleared for {user_id}"
        }

    def toggle_favorite(self, user_id: str, tool_id: str) -> bool:
        """Add or remove a favorite. Returns True when the tool is now a favorite"""
        _require_identifier(user_id, 'user id')
        _require_identifier(tool_id, 'tool id')
        with self._lock:
            user_favorites = self.favorites.setdefault(user_id, {})
            if tool_id in user_favorites:
                del user_favorites[tool_id]
                return False
            user_favorites[tool_id] = datetime.now().isoformat()
            return True

    def get_favorites(self, user_id: str) -> List[str]:
        _require_identifier(user_id, 'user id')
        with self._lock:
            return list(self.favorites.get(user_id, {}))

    def increment_usage(self, tool_id: str) -> int:
        """Bump the usage counter of a tool and return the new count"""
        _require_identifier(tool_id, 'tool id')
        now = datetime.now().isoformat()
        with self._lock:
            stats = self.analytics.setdefault(tool_id, {
                "tool_id": tool_id,
                "usage_count": 0,
                "last_used": None,
                "updated_at": None
            })
            stats["usage_count"] += 1
            stats["last_used"] = now
            stats["updated_at"] = now
            return stats["usage_count"]

    def get_analytics(self) -> List[Dict[str, Any]]:
        """Usage statistics for every tool, most used first"""
        with self._lock:
            rows = [dict(stats) for stats in self.analytics.values()]
        return sorted(rows, key=lambda row: row["usage_count"], reverse=True)

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about stored activity"""
        with self._lock:
            return {
                "users_with_history": len(self.history_data),
                "total_history_entries": sum(len(h) for h in self.history_data.values()),
                "total_favorites": sum(len(f) for f in self.favorites.values()),
                "total_usage": sum(s["usage_count"] for s in self.analytics.values()),
                "history_limit": self.history_limit,
                "max_entries": self.max_entries
            }

    def reset(self) -> None:
        """Drop all stored activity"""
        with self._lock:
            self.history_data.clear()
            self.favorites.clear()
            self.analytics.clear()


# Global store instance
activity_store = ActivityStore()


def record_tool_use(tool_id: str, user_id: Optional[str] = None, input_preview: Optional[str] = None) -> None:
    """Count a tool use and, for signed-in users, add it to their history"""
    activity_store.increment_usage(tool_id)
    if user_id:
        result = activity_store.add_history(user_id, tool_id, input_preview)
        if not result["success"]:
            logger.warning("History not recorded for %s: %s", tool_id, result["error"])
