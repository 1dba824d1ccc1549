import logging

import pytest

from eduverse.core.database import build_engine
from eduverse.core.store import DatabaseStore, MemoryStore, PersistedSlot


@pytest.fixture(params=["memory", "database"])
def any_store(request):
    if request.param == "memory":
        return MemoryStore()
    return DatabaseStore(build_engine("sqlite://"))


def test_read_missing_key_returns_default(any_store):
    assert any_store.read("missing", []) == []
    assert any_store.read("missing") is None


def test_write_then_read(any_store):
    value = [{"id": "u1", "tags": ["a", "b"]}, {"id": "u2", "nested": {"n": 1}}]
    any_store.write("users", value)
    assert any_store.read("users", []) == value


def test_write_replaces_previous_value(any_store):
    any_store.write("current_user", {"id": "u1"})
    any_store.write("current_user", None)
    assert any_store.read("current_user", {"id": "default"}) is None


def test_read_returns_independent_copies(any_store):
    any_store.write("courses", [{"id": "c1"}])
    first = any_store.read("courses")
    first.append({"id": "c2"})
    assert any_store.read("courses") == [{"id": "c1"}]


def test_persisted_slot(any_store):
    slot = any_store.slot("reviews", [])
    assert isinstance(slot, PersistedSlot)
    assert slot.get() == []

    slot.set([{"id": "r1"}])
    assert slot.get() == [{"id": "r1"}]
    assert any_store.read("reviews") == [{"id": "r1"}]


def test_database_store_shares_engine_between_instances():
    engine = build_engine("sqlite://")
    DatabaseStore(engine).write("enrollments", [{"user_id": "u1"}])
    assert DatabaseStore(engine).read("enrollments") == [{"user_id": "u1"}]


def test_database_store_on_file(tmp_path):
    url = f"sqlite:///{tmp_path / 'eduverse.db'}"
    DatabaseStore(build_engine(url)).write("quizzes", [{"id": "q1"}])
    assert DatabaseStore(build_engine(url)).read("quizzes") == [{"id": "q1"}]


def test_write_many_is_all_or_nothing(any_store):
    any_store.write("users", [{"id": "u1"}])

    with pytest.raises(TypeError):
        any_store.write_many({"users": [{"id": "u2"}], "courses": object()})

    assert any_store.read("users") == [{"id": "u1"}]
    assert any_store.read("courses") is None


def test_database_store_logs_failed_write(caplog):
    store = DatabaseStore(build_engine("sqlite://"))

    with caplog.at_level(logging.ERROR, logger="eduverse.core.store"):
        with pytest.raises(TypeError):
            store.write_many({"reviews": [], "quizzes": {1, 2}})

    record = next(r for r in caplog.records if r.name == "eduverse.core.store")
    assert "reviews" in record.getMessage()
    assert record.exc_info is not None
    assert store.read("reviews") is None
