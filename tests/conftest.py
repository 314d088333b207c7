import json
import os

import pytest
from fastapi.testclient import TestClient

from portal.config.settings import settings
from portal.storage import JsonStore

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "test-password"


@pytest.fixture()
def data_dir(tmp_path, monkeypatch):
    """
    Points the app at a fresh, empty data directory and non-production
    settings so session cookies are sent over plain http.
    """
    directory = tmp_path / "data"
    monkeypatch.setattr(settings, "DATA_DIR", str(directory))
    monkeypatch.setattr(settings, "APP_ENV", "test")
    monkeypatch.setattr(settings, "ADMIN_USERNAME", ADMIN_USERNAME)
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", ADMIN_PASSWORD)
    return directory


@pytest.fixture()
def store(data_dir):
    return JsonStore(str(data_dir))


@pytest.fixture()
def app(data_dir):
    from portal.main import create_app
    return create_app()


@pytest.fixture()
def client(app):
    """
    Anonymous client. Entering the context runs the startup hook, which
    seeds the data files.
    """
    with TestClient(app) as client_instance:
        yield client_instance


@pytest.fixture()
def admin_client(app):
    """
    Provides a client whose session is already logged in as admin.
    """
    with TestClient(app) as client_instance:
        response = client_instance.post(
            "/api/admin/login",
            json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
        )
        if response.status_code != 200:
            pytest.fail(f"Failed to login for tests. Status: {response.status_code}, Response: {response.text}", pytrace=False)
        yield client_instance


@pytest.fixture()
def write_json(data_dir):
    """Write raw records straight into a data file before the app starts."""
    def _write(filename, records):
        os.makedirs(data_dir, exist_ok=True)
        with open(os.path.join(data_dir, filename), "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2)
    return _write


def make_entry(feedback_id, category="general", rating=3, comment="Some comment", status="open",
               admin_note="", timestamp="2024-01-01T00:00:00.000Z"):
    return {
        "feedback_id": feedback_id,
        "category": category,
        "rating": rating,
        "comment": comment,
        "status": status,
        "admin_note": admin_note,
        "timestamp": timestamp,
        "hash": "0" * 64,
    }
