from typing import Optional
from pydantic import BaseModel

from eduverse.models import User


class LoginRequest(BaseModel):
    user_id: str


class SessionResponse(BaseModel):
    current_user: Optional[User] = None
