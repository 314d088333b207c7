from datetime import datetime, timezone

import pytest

from portal.review.filters import FeedbackQuery, InvalidFilter, parse_timestamp

from conftest import make_entry

FEEDBACK = [
    make_entry("a", category="general", rating=5, comment="Excellent trainer", status="completed",
               timestamp="2024-01-10T09:00:00.000Z"),
    make_entry("b", category="course", rating=2, comment="Slides were outdated", admin_note="Ask trainer to refresh",
               timestamp="2024-02-15T12:30:00.000Z"),
    make_entry("c", category="course", rating=5, comment="Loved the labs", status="in_progress",
               timestamp="2024-03-01T00:00:00.000Z"),
]


def ids(entries):
    return [e["feedback_id"] for e in entries]


def test_no_filters_sorts_newest_first():
    assert ids(FeedbackQuery().apply(FEEDBACK)) == ["c", "b", "a"]


def test_all_means_no_filter():
    query = FeedbackQuery(category="all", rating="all", status="all")
    assert ids(query.apply(FEEDBACK)) == ["c", "b", "a"]


def test_filters_compose():
    assert ids(FeedbackQuery(category="course").apply(FEEDBACK)) == ["c", "b"]
    assert ids(FeedbackQuery(category="course", rating="5").apply(FEEDBACK)) == ["c"]
    assert ids(FeedbackQuery(rating="5", status="completed").apply(FEEDBACK)) == ["a"]


def test_missing_status_counts_as_open():
    legacy = dict(make_entry("legacy"))
    del legacy["status"]

    assert ids(FeedbackQuery(status="open").apply(FEEDBACK + [legacy])) == ["b", "legacy"]


def test_search_matches_comment_or_note_case_insensitively():
    assert ids(FeedbackQuery(search="TRAINER").apply(FEEDBACK)) == ["b", "a"]
    assert ids(FeedbackQuery(search="labs").apply(FEEDBACK)) == ["c"]
    assert FeedbackQuery(search="nothing like this").apply(FEEDBACK) == []


def test_date_range_is_inclusive():
    query = FeedbackQuery(start_date="2024-02-15T12:30:00Z", end_date="2024-03-01")
    assert ids(query.apply(FEEDBACK)) == ["c", "b"]


def test_bare_end_date_means_midnight():
    assert ids(FeedbackQuery(end_date="2024-02-15").apply(FEEDBACK)) == ["a"]


def test_invalid_date_is_rejected():
    with pytest.raises(InvalidFilter):
        FeedbackQuery(start_date="yesterday").apply(FEEDBACK)


def test_invalid_rating_is_rejected():
    with pytest.raises(InvalidFilter):
        FeedbackQuery(rating="five").apply(FEEDBACK)


def test_apply_does_not_mutate_input():
    original = list(FEEDBACK)
    FeedbackQuery(category="course").apply(FEEDBACK)
    assert FEEDBACK == original


def test_parse_timestamp_normalizes_to_utc():
    assert parse_timestamp("2024-01-01") == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert parse_timestamp("2024-01-01T05:00:00+05:00") == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert parse_timestamp("2024-01-01T00:00:00.500Z").microsecond == 500000
