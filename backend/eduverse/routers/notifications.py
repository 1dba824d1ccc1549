"""
Notifications router for EduVerse.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from eduverse.models import Notification, User
from eduverse.routers.auth import get_catalog, get_current_user, get_state_manager
from eduverse.services import CatalogService, StateManager


router = APIRouter()


@router.get("/", response_model=List[Notification])
async def list_notifications(
    unread_only: bool = False,
    current_user: User = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog)
) -> List[Notification]:
    """
    The user's notifications, newest first.
    """
    return catalog.notifications_for(current_user, unread_only=unread_only)


@router.post("/{notification_id}/read", response_model=Notification)
async def mark_read(
    notification_id: str,
    current_user: User = Depends(get_current_user),
    manager: StateManager = Depends(get_state_manager),
    catalog: CatalogService = Depends(get_catalog)
) -> Notification:
    """
    Mark a notification as read.
    """
    manager.mark_notification_read(notification_id)

    notification = next(
        (n for n in catalog.notifications_for(current_user) if n.id == notification_id),
        None
    )
    if notification is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found"
        )
    return notification
