import itertools
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from eduverse.core.store import MemoryStore
from eduverse.main import create_app
from eduverse.services import StateManager, demo_state


FIXED_NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"{next(counter):04d}"


@pytest.fixture
def manager(store, clock, id_factory):
    return StateManager(
        store,
        initial=demo_state(FIXED_NOW),
        clock=clock,
        id_factory=id_factory,
        key_prefix="eduverse_",
        passing_score=80,
    )


@pytest.fixture
def client(manager):
    return TestClient(create_app(manager=manager))


def login(client, user_id):
    response = client.post("/auth/login", json={"user_id": user_id})
    assert response.status_code == 200
    return response.json()["current_user"]
