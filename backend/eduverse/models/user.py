"""
User model for EduVerse.

Defines the User entity and the profile draft used to create one.
"""

from enum import Enum
from pydantic import BaseModel


class UserRole(str, Enum):
    """Roles that gate which actions and views are available."""
    STUDENT = "STUDENT"
    INSTRUCTOR = "INSTRUCTOR"
    ADMIN = "ADMIN"


class UserProfile(BaseModel):
    """
    Fields supplied when adding a user. The id and avatar are generated.
    """
    name: str
    email: str
    role: UserRole = UserRole.STUDENT


class User(UserProfile):
    """
    A person who can log in.
    """
    id: str
    avatar_url: str

    def __repr__(self) -> str:
        return f"<User(id='{self.id}', name='{self.name}', role='{self.role.value}')>"

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def can_build_courses(self) -> bool:
        """Instructors and admins may author courses and quizzes."""
        return self.role in (UserRole.INSTRUCTOR, UserRole.ADMIN)
