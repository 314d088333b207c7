"""Aggregate statistics over the feedback collection.

Everything is computed from a full read of both files on each call;
there are no cached or precomputed metrics.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Union

from portal.config.settings import settings
from portal.models import entry_status
from portal.storage import JsonStore

logger = logging.getLogger(__name__)


def _word_pattern(min_length: int) -> re.Pattern:
    return re.compile(r"\b\w{%d,}\b" % min_length, re.ASCII)


def average_rating(feedback: List[Dict[str, Any]]) -> Union[str, int]:
    """
    Mean rating rounded half up to one decimal and returned as a string
    ("4.5"). Rounding is done on the exact value of the float mean.
    Returns the integer 0 when there is no feedback.
    """
    if not feedback:
        return 0
    total = sum(_numeric_rating(f) for f in feedback)
    mean = Decimal(total / len(feedback)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return str(mean)


def _numeric_rating(entry: Dict[str, Any]) -> float:
    rating = entry.get("rating")
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        return 0
    return rating


def count_by(feedback: List[Dict[str, Any]], key) -> Dict[str, int]:
    """Occurrence count of `key(entry)`, keyed by its string form, in first-seen order."""
    counts: Dict[str, int] = {}
    for entry in feedback:
        value = str(key(entry))
        counts[value] = counts.get(value, 0) + 1
    return counts


MAX_INDEX_KEY = 2 ** 32 - 2


def _is_index_key(word: str) -> bool:
    """Canonical non-negative integer strings ("2024", not "0042") up to 2**32 - 2."""
    if not word.isdigit() or not word.isascii():
        return False
    if len(word) > 1 and word.startswith("0"):
        return False
    return int(word) <= MAX_INDEX_KEY


def common_words(
    comments: List[str],
    limit: int = 10,
    min_length: int = 4,
) -> List[Dict[str, Any]]:
    """
    Most frequent words across all comments.

    Comments are joined and lowercased; a word is a run of at least
    `min_length` ASCII word characters. Among equal counts, purely numeric
    words such as years come first in ascending order, then the rest in
    first-seen order.
    """
    text = " ".join(c for c in comments if isinstance(c, str)).lower()
    counts = Counter(_word_pattern(min_length).findall(text))
    numeric = sorted((w for w in counts if _is_index_key(w)), key=int)
    ordered = numeric + [w for w in counts if not _is_index_key(w)]
    ranked = sorted(ordered, key=lambda w: counts[w], reverse=True)
    return [{"word": word, "count": counts[word]} for word in ranked[:limit]]


def get_analytics(store: JsonStore) -> Dict[str, Any]:
    feedback = store.read_feedback()
    categories = store.read_categories()

    analytics = {
        "totalFeedback": len(feedback),
        "averageRating": average_rating(feedback),
        "categoryStats": count_by(feedback, lambda f: f.get("category")),
        "categoryMap": {str(c.get("id")): str(c.get("name", "")) for c in categories},
        "ratingStats": count_by(feedback, lambda f: f.get("rating")),
        "statusStats": count_by(feedback, entry_status),
        "commonWords": common_words(
            [f.get("comment") for f in feedback],
            limit=settings.COMMON_WORDS_LIMIT,
            min_length=settings.COMMON_WORDS_MIN_LENGTH,
        ),
    }
    logger.debug(f"Computed analytics over {len(feedback)} feedback entries")
    return analytics
