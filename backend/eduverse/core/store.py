"""
Persisted key-value storage for EduVerse.

Every store implements the same synchronous contract:

- ``read(key, default)`` returns the stored value, or ``default`` when the
  key has never been written.
- ``write_many(items)`` replaces several values at once. Either every key
  is written or none is.
- ``write(key, value)`` replaces a single value.

Values are JSON-compatible Python data and are round-tripped through JSON
text, so both implementations hand back fresh copies. There is no schema
versioning: whatever shape was written is what comes back.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional
import json
import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from .config import settings
from .database import build_engine, build_session_factory, create_all_tables


logger = logging.getLogger(__name__)


class BaseStore(ABC):
    """Key-value store contract."""

    @abstractmethod
    def read(self, key: str, default: Any = None) -> Any:
        ...

    @abstractmethod
    def write_many(self, items: Mapping[str, Any]) -> None:
        ...

    def write(self, key: str, value: Any) -> None:
        self.write_many({key: value})

    def slot(self, key: str, default: Any = None) -> "PersistedSlot":
        """Get a readable/writable slot for one key."""
        return PersistedSlot(self, key, default)

    @staticmethod
    def _dumps(value: Any) -> str:
        return json.dumps(value, separators=(",", ":"))


class MemoryStore(BaseStore):
    """
    Store that keeps serialized values in a dict.

    Used for tests and when STORAGE_BACKEND is "memory".
    """

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def read(self, key: str, default: Any = None) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return default
        return json.loads(raw)

    def write_many(self, items: Mapping[str, Any]) -> None:
        # Serialize everything before touching the dict
        encoded = {key: self._dumps(value) for key, value in items.items()}
        self._data.update(encoded)

    def keys(self):
        return list(self._data)


class DatabaseStore(BaseStore):
    """
    Durable store backed by the ``stored_values`` table.

    ``write_many`` runs in one session and one commit.
    """

    def __init__(self, engine: Optional[Engine] = None) -> None:
        self.engine = engine or build_engine()
        self.session_factory: sessionmaker = build_session_factory(self.engine)
        create_all_tables(self.engine)

    def read(self, key: str, default: Any = None) -> Any:
        from eduverse.models.storage import StoredValue

        db = self.session_factory()
        try:
            row = db.get(StoredValue, key)
            if row is None:
                return default
            return json.loads(row.value)
        finally:
            db.close()

    def write_many(self, items: Mapping[str, Any]) -> None:
        from eduverse.models.storage import StoredValue

        db = self.session_factory()
        try:
            for key, value in items.items():
                text = self._dumps(value)
                row = db.get(StoredValue, key)
                if row is None:
                    db.add(StoredValue(key=key, value=text))
                else:
                    row.value = text
            db.commit()
        except Exception:
            db.rollback()
            logger.exception(f"Failed to write keys: {', '.join(items)}")
            raise
        finally:
            db.close()


class PersistedSlot:
    """
    A single key in a store, with a default for when it was never written.
    """

    def __init__(self, store: BaseStore, key: str, default: Any = None) -> None:
        self.store = store
        self.key = key
        self.default = default

    def get(self) -> Any:
        return self.store.read(self.key, self.default)

    def set(self, value: Any) -> None:
        self.store.write(self.key, value)

    def __repr__(self) -> str:
        return f"<PersistedSlot(key='{self.key}')>"


def get_store() -> BaseStore:
    """
    Build the store selected by settings.

    Returns:
        BaseStore: MemoryStore when testing or configured, else DatabaseStore
    """
    if settings.uses_memory_store:
        logger.info("Using in-memory store")
        return MemoryStore()

    logger.info(f"Using database store at {settings.STORAGE_URL}")
    return DatabaseStore(build_engine(settings.STORAGE_URL))
