"""
FastAPI application for EduVerse.

Builds one StateManager over the configured store and mounts the routers.
"""

from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eduverse.core.config import settings
from eduverse.core.security import load_secret_key
from eduverse.core.store import BaseStore, get_store
from eduverse.models import LearningState
from eduverse.navigation import Navigator
from eduverse.routers import api_router
from eduverse.services import StateManager, demo_state


logger = logging.getLogger(__name__)


def setup_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def create_app(
    manager: Optional[StateManager] = None,
    store: Optional[BaseStore] = None
) -> FastAPI:
    """
    Create the application.

    Args:
        manager: Use this state manager instead of building one
        store: Store for a newly built manager (defaults to settings)

    Returns:
        FastAPI: The configured application
    """
    if manager is None:
        initial = demo_state() if settings.SEED_DEMO_DATA else LearningState()
        manager = StateManager(store or get_store(), initial=initial)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=settings.DESCRIPTION
    )

    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.state.manager = manager
    app.state.secret_key = load_secret_key(manager.store, manager.key_prefix)
    app.state.navigator = Navigator()
    app.include_router(api_router)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok", "version": settings.VERSION}

    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} ready")
    return app


if __name__ == "__main__":
    import uvicorn

    setup_logging()
    uvicorn.run(create_app(), host="127.0.0.1", port=8000)
