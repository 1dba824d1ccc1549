"""
Authentication router for EduVerse.

Handles the single local session: picking a user to log in as, logging
out, and reading the current user. Also provides the dependencies other
routers use to reach the state manager and enforce roles.
"""

from typing import Callable, List
from fastapi import APIRouter, Depends, HTTPException, Request, status
import logging

from eduverse.models import User, UserRole
from eduverse.navigation import Navigator
from eduverse.services import CatalogService, StateManager
from eduverse.schemas.auth import LoginRequest, SessionResponse


logger = logging.getLogger(__name__)

router = APIRouter()


# Dependencies
def get_state_manager(request: Request) -> StateManager:
    """
    Get the application's state manager.
    """
    return request.app.state.manager


def get_navigator(request: Request) -> Navigator:
    return request.app.state.navigator


def get_secret_key(request: Request) -> str:
    """
    Get the certificate signing key loaded at startup.
    """
    return request.app.state.secret_key


def get_catalog(manager: StateManager = Depends(get_state_manager)) -> CatalogService:
    return CatalogService(manager)


def get_current_user(
    manager: StateManager = Depends(get_state_manager)
) -> User:
    """
    Get the session user, or 401 when nobody is logged in.
    """
    user = manager.current_user
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not logged in"
        )
    return user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """
    Build a dependency that only admits session users with one of the roles.
    """
    allowed: List[UserRole] = list(roles)

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {', '.join(r.value for r in allowed)}"
            )
        return current_user

    return dependency


# Endpoints
@router.get("/users", response_model=List[User])
async def list_login_users(
    manager: StateManager = Depends(get_state_manager)
) -> List[User]:
    """
    List users available on the login screen.
    """
    return manager.users


@router.post("/login", response_model=SessionResponse)
async def login(
    login_data: LoginRequest,
    manager: StateManager = Depends(get_state_manager),
    navigator: Navigator = Depends(get_navigator)
) -> SessionResponse:
    """
    Log in as an existing user. Unknown ids leave the session unchanged.
    """
    manager.login(login_data.user_id)

    current_user = manager.current_user
    if current_user is None or current_user.id != login_data.user_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    navigator.reset()
    logger.info(f"User logged in: {current_user.id}")
    return SessionResponse(current_user=current_user)


@router.post("/logout", response_model=SessionResponse)
async def logout(
    manager: StateManager = Depends(get_state_manager),
    navigator: Navigator = Depends(get_navigator)
) -> SessionResponse:
    """
    End the session.
    """
    manager.logout()
    navigator.reset()
    return SessionResponse(current_user=None)


@router.get("/me", response_model=User)
async def get_me(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Get the session user.
    """
    return current_user
