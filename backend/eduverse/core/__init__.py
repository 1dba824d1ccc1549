"""
Core module for EduVerse.

This module contains core functionality including:
- Configuration management
- Key-value persistence (memory and database backed)
- Domain error types
- Certificate token signing
"""

from .config import settings
from .exceptions import EduverseError, NotAuthenticated, NotFound
from .store import BaseStore, MemoryStore, DatabaseStore, PersistedSlot, get_store
from .security import create_certificate_token, load_secret_key, verify_certificate_token

__all__ = [
    "settings",
    "EduverseError",
    "NotAuthenticated",
    "NotFound",
    "BaseStore",
    "MemoryStore",
    "DatabaseStore",
    "PersistedSlot",
    "get_store",
    "create_certificate_token",
    "load_secret_key",
    "verify_certificate_token"
]
