"""
Admin users router for EduVerse.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
import logging

from eduverse.models import User, UserProfile
from eduverse.routers.auth import get_state_manager
from eduverse.services import StateManager


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=List[User])
async def list_users(
    manager: StateManager = Depends(get_state_manager)
) -> List[User]:
    return manager.users


@router.post("/", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserProfile,
    manager: StateManager = Depends(get_state_manager)
) -> User:
    """
    Add a user. The id and avatar are generated.
    """
    if any(u.email.lower() == user_data.email.lower() for u in manager.users):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    user_id = manager.add_user(user_data)
    logger.info(f"User created: {user_id} ({user_data.role.value})")
    return manager.get_user(user_id)
