import csv
import io
import logging
from typing import Any, Dict, Iterable, List

from portal import models
from portal.review.filters import FeedbackQuery
from portal.review.schemas import FeedbackUpdate
from portal.storage import JsonStore

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ['ID', 'Category', 'Rating', 'Comment', 'Status', 'Admin Note', 'Timestamp']


class FeedbackNotFound(Exception):
    pass


class InvalidUpdate(ValueError):
    pass


def query_feedback(store: JsonStore, query: FeedbackQuery) -> List[Dict[str, Any]]:
    return query.apply(store.read_feedback())


def get_feedback(store: JsonStore, feedback_id: str) -> Dict[str, Any]:
    entry = models.find_by_id(store.read_feedback(), 'feedback_id', feedback_id)
    if entry is None:
        raise FeedbackNotFound(feedback_id)
    return entry


def update_feedback(store: JsonStore, feedback_id: str, update: FeedbackUpdate) -> Dict[str, Any]:
    """
    Apply status, note and category changes to one entry.

    Every provided field is validated before anything is written, so a
    rejected update leaves the file unchanged.
    """
    feedback = store.read_feedback()
    idx = models.index_of(feedback, 'feedback_id', feedback_id)
    if idx == -1:
        raise FeedbackNotFound(feedback_id)

    fields = update.model_fields_set
    changes: Dict[str, Any] = {}

    if 'status' in fields and update.status is not None:
        if update.status not in models.FEEDBACK_STATUSES:
            raise InvalidUpdate("Invalid status")
        changes['status'] = update.status

    if 'admin_note' in fields and update.admin_note is not None:
        changes['admin_note'] = str(update.admin_note)

    if 'category' in fields and update.category is not None:
        if models.find_by_id(store.read_categories(), 'id', update.category) is None:
            raise InvalidUpdate("Invalid category")
        changes['category'] = update.category

    feedback[idx].update(changes)
    store.write_feedback(feedback)
    logger.info(f"Updated feedback {feedback_id}: {sorted(changes)}")
    return feedback[idx]


def delete_feedback(store: JsonStore, feedback_id: str) -> int:
    feedback = store.read_feedback()
    if models.find_by_id(feedback, 'feedback_id', feedback_id) is None:
        raise FeedbackNotFound(feedback_id)
    store.write_feedback([f for f in feedback if f.get('feedback_id') != feedback_id])
    return 1


def bulk_delete_feedback(store: JsonStore, ids: Iterable[str]) -> int:
    """Remove every entry whose id is listed. Unknown ids are ignored."""
    wanted = set(ids)
    feedback = store.read_feedback()
    remaining = [f for f in feedback if f.get('feedback_id') not in wanted]
    deleted = len(feedback) - len(remaining)
    store.write_feedback(remaining)
    logger.info(f"Bulk delete removed {deleted} of {len(wanted)} requested feedback entries")
    return deleted


def export_csv(feedback: List[Dict[str, Any]]) -> str:
    """Render feedback as CSV with a header row. Categories are written as ids."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator='\n')
    writer.writerow(EXPORT_COLUMNS)
    for f in feedback:
        writer.writerow([
            f.get('feedback_id', ''),
            f.get('category', ''),
            f.get('rating', ''),
            f.get('comment') or '',
            models.entry_status(f),
            f.get('admin_note') or '',
            f.get('timestamp', ''),
        ])
    return buf.getvalue()
