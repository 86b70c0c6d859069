"""
Tool Data Store
In-memory per-user storage for saved tool data, favorites and usage counters
"""

import json
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_DATA_LIMIT = 20
DEFAULT_FAVORITES_LIMIT = 50
DEFAULT_MAX_INPUT_SIZE = 1024 * 1024


class ToolDataStore:
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.saved_data: Dict[str, List[Dict[str, Any]]] = {}  # user id -> entries, newest first
        self.favorites: Dict[str, List[str]] = {}  # user id -> tool ids in insertion order
        self.usage: Dict[str, Dict[str, Dict[str, Any]]] = {}  # user id -> tool id -> counter
        self.config = config or {}

    def _get_data_limit(self, tool_id: str) -> int:
        """Get saved data limit for a specific tool"""
        return self.config.get("data_limits", {}).get(tool_id, DEFAULT_DATA_LIMIT)

    def _get_favorites_limit(self) -> int:
        return self.config.get("favorites_limit", DEFAULT_FAVORITES_LIMIT)

    # ========== Usage Counters ==========

    def record_usage(self, user_id: str, tool_id: str, tool_name: Optional[str] = None) -> Dict[str, Any]:
        """Increment the usage counter of a tool for a user"""
        counters = self.usage.setdefault(user_id, {})
        now = datetime.now().isoformat()

        if tool_id not in counters:
            counters[tool_id] = {
                "tool_id": tool_id,
                "tool_name": tool_name or tool_id,
                "usage_count": 0,
                "created_at": now
            }

        counter = counters[tool_id]
        counter["usage_count"] += 1
        counter["last_used"] = now
        if tool_name:
            counter["tool_name"] = tool_name

        return dict(counter)

    def get_usage(self, user_id: str) -> List[Dict[str, Any]]:
        """Get usage counters for a user, most used first"""
        counters = self.usage.get(user_id, {}).values()
        return sorted((dict(c) for c in counters), key=lambda c: (-c["usage_count"], c["tool_id"]))

    # ========== Saved Data ==========

    def save_data(self, user_id: str, tool_id: str, title: str, content: Any,
                  description: str = "") -> Dict[str, Any]:
        """Store a tool output verbatim under a user-provided title"""
        entries = self.saved_data.setdefault(user_id, [])
        now = datetime.now().isoformat()

        entry = {
            "id": str(uuid.uuid4())[:8],
            "tool_id": tool_id,
            "title": title,
            "description": description,
            "content": content,
            "preview": self._generate_preview(content),
            "created_at": now,
            "updated_at": now
        }
        entries.insert(0, entry)

        # Maintain data limit per tool, oldest entries go first
        limit = self._get_data_limit(tool_id)
        tool_entries = [e for e in entries if e["tool_id"] == tool_id]
        if len(tool_entries) > limit:
            dropped = {e["id"] for e in tool_entries[limit:]}
            self.saved_data[user_id] = [e for e in entries if e["id"] not in dropped]
            logger.debug("Dropped %d saved entries for %s/%s", len(dropped), user_id, tool_id)

        return {
            "success": True,
            "entry_id": entry["id"],
            "message": "Data entry added"
        }

    def get_saved_data(self, user_id: str, tool_id: Optional[str] = None,
                       limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Get saved entries for a user, optionally for a single tool"""
        entries = self.saved_data.get(user_id, [])
        if tool_id:
            entries = [e for e in entries if e["tool_id"] == tool_id]
        if limit:
            entries = entries[:limit]

        return [
            {
                "id": entry["id"],
                "tool_id": entry["tool_id"],
                "title": entry["title"],
                "description": entry["description"],
                "preview": entry["preview"],
                "created_at": entry["created_at"],
                "formatted_date": self._format_date(entry["created_at"])
            }
            for entry in entries
        ]

    def get_saved_entry(self, user_id: str, entry_id: str) -> Optional[Dict[str, Any]]:
        for entry in self.saved_data.get(user_id, []):
            if entry["id"] == entry_id:
                return dict(entry)
        return None

    def delete_saved_data(self, user_id: str, entry_id: str) -> bool:
        """Delete a saved entry. Entries of other users are never touched."""
        if user_id not in self.saved_data:
            return False

        original_count = len(self.saved_data[user_id])
        self.saved_data[user_id] = [
            entry for entry in self.saved_data[user_id]
            if entry["id"] != entry_id
        ]
        return len(self.saved_data[user_id]) < original_count

    # ========== Favorites ==========

    def get_favorites(self, user_id: str) -> List[str]:
        return list(self.favorites.get(user_id, []))

    def add_favorite(self, user_id: str, tool_id: str) -> bool:
        """Add a tool to the favorites set. Returns False if it was already there."""
        favorites = self.favorites.setdefault(user_id, [])
        if tool_id in favorites:
            return False

        limit = self._get_favorites_limit()
        if len(favorites) >= limit:
            raise ValueError(f"Favorites limit reached. Maximum: {limit}")

        favorites.append(tool_id)
        return True

    def remove_favorite(self, user_id: str, tool_id: str) -> bool:
        favorites = self.favorites.get(user_id, [])
        if tool_id not in favorites:
            return False
        favorites.remove(tool_id)
        return True

    def clear(self):
        """Drop everything held for every user"""
        self.saved_data.clear()
        self.favorites.clear()
        self.usage.clear()

    def _generate_preview(self, data: Any, max_length: int = 100) -> str:
        """Generate a preview of the data"""
        if not isinstance(data, str):
            data = json.dumps(data, ensure_ascii=False)
        # Remove excessive whitespace and newlines
        preview = ' '.join(data.split())

        if len(preview) <= max_length:
            return preview

        return preview[:max_length] + "..."

    def _format_date(self, iso_timestamp: str) -> str:
        """Format ISO timestamp to readable format"""
        try:
            dt = datetime.fromisoformat(iso_timestamp.replace('Z', '+00:00'))
        except ValueError:
            return "Unknown"

        diff = datetime.now() - dt.replace(tzinfo=None)
        if diff.days > 0:
            return f"{diff.days} day{'s' if diff.days > 1 else ''} ago"
        elif diff.seconds > 3600:
            hours = diff.seconds // 3600
            return f"{hours} hour{'s' if hours > 1 else ''} ago"
        elif diff.seconds > 60:
            minutes = diff.seconds // 60
            return f"{minutes} minute{'s' if minutes > 1 else ''} ago"
        else:
            return "Just now"


def validate_tool_name(tool_name: str) -> bool:
    """Validate tool id format"""
    if not tool_name:
        return False

    # Allow alphanumeric, hyphens, and underscores
    allowed_chars = set('abcdefghijklmnopqrstuvwxyz0123456789-_')
    return all(c.lower() in allowed_chars for c in tool_name)


def sanitize_data(data: Any, max_size: int = DEFAULT_MAX_INPUT_SIZE) -> str:
    """Sanitize and validate input data"""
    if not isinstance(data, str):
        data = str(data)

    if len(data) > max_size:
        raise ValueError(f"Data too large. Maximum size: {max_size} characters")

    return data
