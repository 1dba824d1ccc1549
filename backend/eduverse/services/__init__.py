"""
Services for EduVerse.

- state_manager: the only code that mutates application state
- catalog: read-only queries for views
- seed: demo initial data
"""

from .state_manager import StateManager
from .catalog import CatalogService, ALL_CATEGORIES
from .seed import demo_state

__all__ = [
    "StateManager",
    "CatalogService",
    "ALL_CATEGORIES",
    "demo_state"
]
