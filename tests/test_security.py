from eduverse.core.config import settings
from eduverse.core.security import (
    create_certificate_token, load_secret_key, verify_certificate_token
)
from eduverse.core.store import MemoryStore


def test_generated_secret_key_is_kept_in_store(monkeypatch):
    monkeypatch.setattr(settings, "SECRET_KEY", None)
    store = MemoryStore()

    secret_key = load_secret_key(store, "eduverse_")
    assert secret_key
    assert store.read("eduverse_secret_key") == secret_key
    assert load_secret_key(store, "eduverse_") == secret_key
    assert load_secret_key(MemoryStore(), "eduverse_") != secret_key


def test_configured_secret_key_wins(monkeypatch):
    monkeypatch.setattr(settings, "SECRET_KEY", "configured")
    store = MemoryStore()

    assert load_secret_key(store, "eduverse_") == "configured"
    assert store.keys() == []


def test_certificate_token_needs_matching_key():
    token = create_certificate_token("cert1", "u1", "c1", "first-key")

    assert verify_certificate_token(token, "first-key") == {
        "certificate_id": "cert1", "user_id": "u1", "course_id": "c1"
    }
    assert verify_certificate_token(token, "second-key") is None
    assert verify_certificate_token("not-a-token", "first-key") is None
