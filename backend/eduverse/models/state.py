"""
Aggregate of every collection the state manager owns.
"""

from typing import Optional, List
from pydantic import BaseModel, Field

from .user import User
from .course import Course, Quiz
from .progress import Enrollment, QuizAttempt, Certificate, Review
from .notification import Notification


class LearningState(BaseModel):
    """
    All application state. Also used as the read-only projection handed
    to views and as the bundle of initial data for a fresh store.
    """
    users: List[User] = Field(default_factory=list)
    courses: List[Course] = Field(default_factory=list)
    quizzes: List[Quiz] = Field(default_factory=list)
    enrollments: List[Enrollment] = Field(default_factory=list)
    reviews: List[Review] = Field(default_factory=list)
    notifications: List[Notification] = Field(default_factory=list)
    certificates: List[Certificate] = Field(default_factory=list)
    quiz_attempts: List[QuizAttempt] = Field(default_factory=list)
    current_user: Optional[User] = None


# Field name -> storage key suffix. Order is the load order.
STATE_KEYS = (
    "users",
    "courses",
    "quizzes",
    "enrollments",
    "reviews",
    "notifications",
    "certificates",
    "quiz_attempts",
    "current_user",
)
