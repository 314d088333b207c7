import hashlib
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

FEEDBACK_STATUSES = ('open', 'in_progress', 'completed')
DEFAULT_STATUS = 'open'

DEFAULT_CATEGORY = {
    'id': 'general',
    'name': 'General',
    'description': 'General feedback',
}


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a trailing Z."""
    now = datetime.now(timezone.utc)
    return now.strftime('%Y-%m-%dT%H:%M:%S.') + f"{now.microsecond // 1000:03d}Z"


def hash_identifier(user_agent: Optional[str]) -> str:
    """
    Opaque per-submission hash of the user agent and the current time in
    milliseconds. It depends on when the submission arrives, so it is not a
    stable client identifier.
    """
    timestamp = str(int(time.time() * 1000))
    return hashlib.sha256(((user_agent or '') + timestamp).encode('utf-8')).hexdigest()


# --- Lookups ---

def find_by_id(items: List[Dict[str, Any]], key: str, value: str) -> Optional[Dict[str, Any]]:
    return next((item for item in items if item.get(key) == value), None)


def index_of(items: List[Dict[str, Any]], key: str, value: str) -> int:
    """Position of the first item whose `key` equals `value`, or -1."""
    for idx, item in enumerate(items):
        if item.get(key) == value:
            return idx
    return -1


def resolve_category_id(categories: List[Dict[str, Any]], value: Any) -> Optional[str]:
    """
    Resolve a category reference to a category id.

    Accepts an id, or a category name (case-insensitive) for clients that
    still send names.
    """
    by_id = find_by_id(categories, 'id', value)
    if by_id:
        return by_id['id']
    wanted = str(value).lower()
    for category in categories:
        if str(category.get('name', '')).lower() == wanted:
            return category['id']
    return None


def category_in_use(feedback: List[Dict[str, Any]], category_id: str) -> bool:
    return any(f.get('category') == category_id for f in feedback)


def entry_status(entry: Dict[str, Any]) -> str:
    return entry.get('status') or DEFAULT_STATUS


# --- Constructors ---

def new_feedback_entry(category_id: str, rating: int, comment: str, user_agent: Optional[str]) -> Dict[str, Any]:
    return {
        'feedback_id': str(uuid.uuid4()),
        'category': category_id,
        'rating': rating,
        'comment': comment,
        'status': DEFAULT_STATUS,
        'admin_note': '',
        'timestamp': utc_now_iso(),
        'hash': hash_identifier(user_agent),
    }


def new_category(name: str, description: Optional[str] = None) -> Dict[str, Any]:
    return {
        'id': str(uuid.uuid4()),
        'name': name,
        'description': description or '',
    }
