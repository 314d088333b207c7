import json

from portal.storage import JsonStore, init_store, normalize

from conftest import make_entry


def test_init_store_seeds_files(store):
    init_store(store)

    assert store.read_feedback() == []
    assert store.read_categories() == [
        {"id": "general", "name": "General", "description": "General feedback"}
    ]


def test_init_store_keeps_existing_files(store, write_json):
    write_json("categories.json", [{"id": "c1", "name": "Course", "description": ""}])
    write_json("feedback.json", [make_entry("f1", category="c1")])

    init_store(store)

    assert [c["id"] for c in store.read_categories()] == ["c1"]
    assert [f["feedback_id"] for f in store.read_feedback()] == ["f1"]


def test_files_are_pretty_printed(store):
    init_store(store)
    store.write_feedback([make_entry("f1")])

    with open(store.feedback_path, encoding="utf-8") as f:
        raw = f.read()
    assert raw.startswith("[\n  {")
    assert json.loads(raw)[0]["feedback_id"] == "f1"


def test_malformed_file_reads_as_empty(store, data_dir):
    init_store(store)
    with open(store.feedback_path, "w", encoding="utf-8") as f:
        f.write("{not json")

    assert store.read_feedback() == []


def test_missing_file_reads_as_empty(tmp_path):
    store = JsonStore(str(tmp_path / "nowhere"))
    assert store.read_categories() == []


def test_normalize_maps_names_and_fills_defaults(store, write_json):
    write_json("categories.json", [
        {"id": "general", "name": "General", "description": ""},
        {"id": "c-course", "name": "Course Content", "description": ""},
    ])
    legacy = {"feedback_id": "old", "category": "course content", "rating": 4,
              "comment": "Legacy record", "timestamp": "2023-05-01T10:00:00.000Z"}
    write_json("feedback.json", [legacy, make_entry("new")])

    assert normalize(store) is True

    entries = {f["feedback_id"]: f for f in store.read_feedback()}
    assert entries["old"]["category"] == "c-course"
    assert entries["old"]["status"] == "open"
    assert entries["old"]["admin_note"] == ""
    assert entries["new"] == make_entry("new")


def test_normalize_leaves_clean_data_alone(store, write_json):
    write_json("categories.json", [{"id": "general", "name": "General", "description": ""}])
    write_json("feedback.json", [make_entry("f1")])

    assert normalize(store) is False


def test_normalize_keeps_unknown_category(store, write_json):
    write_json("categories.json", [{"id": "general", "name": "General", "description": ""}])
    write_json("feedback.json", [make_entry("f1", category="Vanished")])

    normalize(store)

    assert store.read_feedback()[0]["category"] == "Vanished"
