import hashlib
import re
from types import SimpleNamespace

import pytest

from portal import models
from portal.feedback.service import parse_rating


def test_submit_feedback(client, store):
    response = client.post(
        "/api/feedback",
        json={"category": "general", "rating": 4, "comment": "Great course, thanks!"},
        headers={"User-Agent": "pytest-browser"},
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["message"] == "Feedback submitted successfully"

    stored = store.read_feedback()
    assert len(stored) == 1
    entry = stored[0]
    assert entry["feedback_id"] == body["feedback_id"]
    assert entry["category"] == "general"
    assert entry["rating"] == 4
    assert entry["comment"] == "Great course, thanks!"
    assert entry["status"] == "open"
    assert entry["admin_note"] == ""
    assert entry["timestamp"].endswith("Z")
    assert re.fullmatch(r"[0-9a-f]{64}", entry["hash"])


def test_rating_string_is_stored_as_int(client, store):
    response = client.post("/api/feedback", json={"category": "general", "rating": "5", "comment": "Loved it"})

    assert response.status_code == 201
    assert store.read_feedback()[0]["rating"] == 5


def test_category_name_is_resolved_to_id(client, store):
    response = client.post("/api/feedback", json={"category": "GENERAL", "rating": 3, "comment": "By name"})

    assert response.status_code == 201
    assert store.read_feedback()[0]["category"] == "general"


@pytest.mark.parametrize("payload", [
    {"rating": 3, "comment": "no category"},
    {"category": "general", "comment": "no rating"},
    {"category": "general", "rating": 3},
    {"category": "", "rating": 3, "comment": "empty category"},
    {"category": "general", "rating": 0, "comment": "zero rating"},
    {"category": "general", "rating": 3, "comment": ""},
])
def test_missing_fields_are_rejected(client, payload):
    response = client.post("/api/feedback", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "All fields are required"


def test_short_comment_is_rejected(client, store):
    response = client.post("/api/feedback", json={"category": "general", "rating": 3, "comment": "meh"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Comment must be at least 5 characters long"
    assert store.read_feedback() == []


@pytest.mark.parametrize("rating", [6, -1, "ten", 5.5, "5.9", 5.999])
def test_out_of_range_rating_is_rejected(client, rating):
    response = client.post("/api/feedback", json={"category": "general", "rating": rating, "comment": "Rating check"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Rating must be between 1 and 5"


def test_unknown_category_is_rejected(client, store):
    response = client.post("/api/feedback", json={"category": "nope", "rating": 3, "comment": "Unknown cat"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid category"
    assert store.read_feedback() == []


def test_each_submission_gets_its_own_id(client, store):
    for _ in range(2):
        client.post(
            "/api/feedback",
            json={"category": "general", "rating": 2, "comment": "Same client twice"},
            headers={"User-Agent": "same-agent"},
        )

    first, second = store.read_feedback()
    assert first["feedback_id"] != second["feedback_id"]


def test_whole_number_float_rating_is_stored_as_int(client, store):
    response = client.post("/api/feedback", json={"category": "general", "rating": 4.0, "comment": "Float rating"})

    assert response.status_code == 201
    assert store.read_feedback()[0]["rating"] == 4


def test_hash_is_recomputed_for_each_submission(client, store, monkeypatch):
    now = {"t": 1700000000.0}
    monkeypatch.setattr(models, "time", SimpleNamespace(time=lambda: now["t"]))

    for t in (1700000000.0, 1700000000.5):
        now["t"] = t
        response = client.post(
            "/api/feedback",
            json={"category": "general", "rating": 2, "comment": "Same client twice"},
            headers={"User-Agent": "same-agent"},
        )
        assert response.status_code == 201

    first, second = store.read_feedback()
    assert first["hash"] != second["hash"]
    assert first["hash"] == hashlib.sha256(b"same-agent1700000000000").hexdigest()
    assert second["hash"] == hashlib.sha256(b"same-agent1700000000500").hexdigest()


def test_parse_rating():
    assert parse_rating(3) == 3
    assert parse_rating("4") == 4
    assert parse_rating("4.7") == 4.7
    assert parse_rating(2.9) == 2.9
    assert parse_rating("nan") is None
    assert parse_rating("abc") is None
    assert parse_rating(True) is None


def test_resolve_category_id():
    categories = [{"id": "a1", "name": "Trainer Quality"}, {"id": "b2", "name": "Others"}]

    assert models.resolve_category_id(categories, "a1") == "a1"
    assert models.resolve_category_id(categories, "trainer quality") == "a1"
    assert models.resolve_category_id(categories, "missing") is None
