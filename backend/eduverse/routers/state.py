"""
State and navigation router for EduVerse.

Exposes the read-only projection of all state and the in-memory
navigation selector.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from eduverse.models import LearningState, User
from eduverse.navigation import AdminView, BuilderView, Navigator
from eduverse.routers.auth import get_current_user, get_navigator, get_state_manager
from eduverse.services import StateManager
from eduverse.schemas.navigation import NavigationRequest, NavigationState


router = APIRouter()


@router.get("/state", response_model=LearningState, response_model_exclude={"quiz_attempts"})
async def get_state(
    manager: StateManager = Depends(get_state_manager)
) -> LearningState:
    """
    Read-only projection of users, courses, quizzes, enrollments, reviews,
    notifications, certificates and the current user.
    """
    return manager.snapshot()


@router.get("/navigation", response_model=NavigationState)
async def get_navigation(
    current_user: User = Depends(get_current_user),
    navigator: Navigator = Depends(get_navigator)
) -> NavigationState:
    """
    Current view and the sidebar links the user may follow.
    """
    return NavigationState(
        current=navigator.current,
        links=navigator.nav_links(current_user)
    )


@router.post("/navigation", response_model=NavigationState)
async def navigate(
    request_data: NavigationRequest,
    current_user: User = Depends(get_current_user),
    navigator: Navigator = Depends(get_navigator)
) -> NavigationState:
    """
    Switch to another view. Builder and admin pages are role gated.
    """
    view = request_data.view
    if isinstance(view, BuilderView) and not current_user.can_build_courses:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Course builder requires an instructor or admin"
        )
    if isinstance(view, AdminView) and not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )

    navigator.navigate(view)
    return NavigationState(
        current=navigator.current,
        links=navigator.nav_links(current_user)
    )
