"""Composable filters for the admin feedback listing.

Each filter narrows the list it is given. Filters with an absent value or
the value ``all`` are skipped, so any subset of them can be combined.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from portal.models import entry_status

logger = logging.getLogger(__name__)

ALL = "all"


class InvalidFilter(ValueError):
    """A filter value that cannot be interpreted."""


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 date or datetime into an aware UTC datetime.

    A bare date means midnight UTC, a trailing ``Z`` is accepted, and naive
    datetimes are taken as UTC.
    """
    text = value.strip()
    if not text:
        raise InvalidFilter("Invalid date")
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed_date = date.fromisoformat(text)
        except ValueError as exc:
            raise InvalidFilter("Invalid date") from exc
        parsed = datetime(parsed_date.year, parsed_date.month, parsed_date.day)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _entry_time(entry: Dict[str, Any]) -> Optional[datetime]:
    raw = entry.get("timestamp")
    if not isinstance(raw, str):
        return None
    try:
        return parse_timestamp(raw)
    except InvalidFilter:
        logger.debug(f"Feedback {entry.get('feedback_id')} has an unparseable timestamp: {raw!r}")
        return None


def _within(entry: Dict[str, Any], start: Optional[datetime] = None, end: Optional[datetime] = None) -> bool:
    entry_time = _entry_time(entry)
    if entry_time is None:
        return False
    if start is not None and entry_time < start:
        return False
    if end is not None and entry_time > end:
        return False
    return True


def _is_set(value: Optional[str]) -> bool:
    return value is not None and value != "" and value != ALL


@dataclass
class FeedbackQuery:
    category: Optional[str] = None
    rating: Optional[str] = None
    status: Optional[str] = None
    search: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    def apply(self, feedback: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Run every active filter, then sort newest first."""
        result = list(feedback)

        if _is_set(self.category):
            result = [f for f in result if f.get("category") == self.category]

        if _is_set(self.rating):
            try:
                wanted_rating = int(self.rating)
            except ValueError as exc:
                raise InvalidFilter("Invalid rating") from exc
            result = [f for f in result if f.get("rating") == wanted_rating]

        if _is_set(self.status):
            result = [f for f in result if entry_status(f) == self.status]

        if self.start_date:
            start = parse_timestamp(self.start_date)
            result = [f for f in result if _within(f, start=start)]

        if self.end_date:
            end = parse_timestamp(self.end_date)
            result = [f for f in result if _within(f, end=end)]

        if self.search:
            needle = self.search.lower()
            result = [
                f for f in result
                if needle in (f.get("comment") or "").lower()
                or needle in (f.get("admin_note") or "").lower()
            ]

        return sort_newest_first(result)


def sort_newest_first(feedback: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    epoch = datetime.min.replace(tzinfo=timezone.utc)
    return sorted(feedback, key=lambda f: _entry_time(f) or epoch, reverse=True)
