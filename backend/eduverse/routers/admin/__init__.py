"""
Admin routers for EduVerse.

This module contains the authoring and administration endpoints:
- courses: Course builder (create and replace courses)
- quizzes: Quiz builder
- users: User management (admins only)
"""

from fastapi import APIRouter, Depends

from eduverse.models import UserRole
from eduverse.routers.auth import require_roles

# Import admin sub-routers
from .courses import router as courses_router
from .quizzes import router as quizzes_router
from .users import router as users_router


# Course and quiz builders are open to instructors and admins
get_current_builder_user = require_roles(UserRole.INSTRUCTOR, UserRole.ADMIN)

# User management is admin only
get_current_admin_user = require_roles(UserRole.ADMIN)


# Create admin router
admin_router = APIRouter()

# Include all admin sub-routers
admin_router.include_router(
    courses_router,
    prefix="/courses",
    tags=["admin-courses"],
    dependencies=[Depends(get_current_builder_user)]
)

admin_router.include_router(
    quizzes_router,
    prefix="/quizzes",
    tags=["admin-quizzes"],
    dependencies=[Depends(get_current_builder_user)]
)

admin_router.include_router(
    users_router,
    prefix="/users",
    tags=["admin-users"],
    dependencies=[Depends(get_current_admin_user)]
)


__all__ = [
    "admin_router",
    "get_current_builder_user",
    "get_current_admin_user"
]
