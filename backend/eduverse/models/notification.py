"""
Notification model for EduVerse.
"""

from datetime import datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel


class LinkPage(str, Enum):
    """Pages a notification can deep-link to."""
    COURSE = "course"
    CERTIFICATE = "certificate"


class NotificationLink(BaseModel):
    page: LinkPage
    id: str


class Notification(BaseModel):
    """
    A message addressed to one user. Kept newest first.
    """
    id: str
    user_id: str
    message: str
    is_read: bool = False
    timestamp: datetime
    link: Optional[NotificationLink] = None

    def __repr__(self) -> str:
        return f"<Notification(id='{self.id}', user_id='{self.user_id}', is_read={self.is_read})>"
