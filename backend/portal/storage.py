import json
import logging
import os
from typing import Any, Dict, List

from portal.config.settings import settings
from portal.models import DEFAULT_CATEGORY

logger = logging.getLogger(__name__)

FEEDBACK_FILE = 'feedback.json'
CATEGORIES_FILE = 'categories.json'


class JsonStore:
    """
    Flat-file persistence for the two collections.

    Every call reads or writes the whole file. Nothing is cached between
    calls and there is no locking between concurrent writers.
    """

    def __init__(self, data_dir: str):
        self.data_dir = data_dir
        self.feedback_path = os.path.join(data_dir, FEEDBACK_FILE)
        self.categories_path = os.path.join(data_dir, CATEGORIES_FILE)

    def _read(self, path: str) -> List[Dict[str, Any]]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {path}, treating it as empty: {e}")
            return []
        if not isinstance(data, list):
            logger.warning(f"{path} does not hold a JSON array, treating it as empty")
            return []
        return data

    def _write(self, path: str, items: List[Dict[str, Any]]) -> None:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(items, f, indent=2)

    def read_feedback(self) -> List[Dict[str, Any]]:
        return self._read(self.feedback_path)

    def write_feedback(self, feedback: List[Dict[str, Any]]) -> None:
        self._write(self.feedback_path, feedback)

    def read_categories(self) -> List[Dict[str, Any]]:
        return self._read(self.categories_path)

    def write_categories(self, categories: List[Dict[str, Any]]) -> None:
        self._write(self.categories_path, categories)


def get_store() -> JsonStore:
    """FastAPI dependency to get the flat-file store."""
    return JsonStore(settings.DATA_DIR)


def init_store(store: JsonStore) -> None:
    """Create the data directory and seed both files if they don't exist."""
    os.makedirs(store.data_dir, exist_ok=True)

    if not os.path.exists(store.feedback_path):
        logger.info(f"Creating empty feedback file at {store.feedback_path}")
        store.write_feedback([])

    if not os.path.exists(store.categories_path):
        logger.info(f"Seeding categories file at {store.categories_path}")
        store.write_categories([dict(DEFAULT_CATEGORY)])


def normalize(store: JsonStore) -> bool:
    """
    One-time cleanup of records written by older versions.

    Feedback whose category holds a category name instead of an id is
    pointed at that id, and missing status / admin_note fields are filled in.
    Returns True when the feedback file was rewritten.
    """
    try:
        categories = store.read_categories()
        by_name = {c['name'].lower(): c['id'] for c in categories if isinstance(c.get('name'), str)}
        by_id = {c['id'] for c in categories}
        feedback = store.read_feedback()
        changed = False

        for entry in feedback:
            category = entry.get('category')
            if category not in by_id and isinstance(category, str):
                category_id = by_name.get(category.lower())
                if category_id:
                    entry['category'] = category_id
                    changed = True
            if not entry.get('status'):
                entry['status'] = 'open'
                changed = True
            if 'admin_note' not in entry or entry['admin_note'] is None:
                entry['admin_note'] = ''
                changed = True

        if changed:
            store.write_feedback(feedback)
            logger.info(f"Normalized {len(feedback)} feedback records")
        return changed
    except Exception as e:
        logger.warning(f"Normalization skipped: {e}")
        return False
