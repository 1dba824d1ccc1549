"""
API routers for EduVerse.

This module contains all API endpoint routers:
- auth: Session endpoints (user picker, login, logout)
- courses: Catalog, course details, enrollment, lessons and reviews
- quizzes: Quiz questions and submissions
- progress: Dashboard, attempts and certificates
- notifications: User notifications
- state: Read-only state projection and view navigation
- admin: Course, quiz and user authoring
"""

from fastapi import APIRouter

# Import individual routers
from .auth import router as auth_router
from .courses import router as courses_router
from .quizzes import router as quizzes_router
from .progress import router as progress_router
from .notifications import router as notifications_router
from .state import router as state_router

# Import admin sub-routers
from .admin import admin_router

# Create main API router
api_router = APIRouter()

# Include all routers with their prefixes
api_router.include_router(
    auth_router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    courses_router,
    prefix="/courses",
    tags=["courses"]
)

api_router.include_router(
    quizzes_router,
    prefix="/quizzes",
    tags=["quizzes"]
)

api_router.include_router(
    progress_router,
    prefix="/progress",
    tags=["progress"]
)

api_router.include_router(
    notifications_router,
    prefix="/notifications",
    tags=["notifications"]
)

api_router.include_router(
    state_router,
    tags=["state"]
)

api_router.include_router(
    admin_router,
    prefix="/admin",
    tags=["admin"]
)

# Export all routers
__all__ = [
    "api_router",
    "auth_router",
    "courses_router",
    "quizzes_router",
    "progress_router",
    "notifications_router",
    "state_router",
    "admin_router"
]
