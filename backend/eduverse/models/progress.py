"""
Progress tracking models for EduVerse.

Defines Enrollment, QuizAttempt, Certificate and Review.
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field


def percentage(part: int, total: int) -> int:
    """
    Integer percentage rounded half up.

    Computed in integer arithmetic so 12.5 rounds to 13 and 66.66... to 67.
    The caller must ensure total is positive.
    """
    return (200 * part + total) // (2 * total)


class Enrollment(BaseModel):
    """
    Links a user to a course. Identity is (user_id, course_id).
    """
    user_id: str
    course_id: str
    progress: int = Field(0, ge=0, le=100)
    completed_lessons: List[str] = Field(default_factory=list)

    def __repr__(self) -> str:
        return f"<Enrollment(user_id='{self.user_id}', course_id='{self.course_id}', progress={self.progress}%)>"

    def matches(self, user_id: str, course_id: str) -> bool:
        return self.user_id == user_id and self.course_id == course_id

    @property
    def is_complete(self) -> bool:
        return self.progress == 100


class QuizAttempt(BaseModel):
    """
    One quiz submission. Attempts are never overwritten.
    """
    user_id: str
    quiz_id: str
    score: int = Field(ge=0, le=100)
    answers: List[Optional[int]] = Field(default_factory=list)
    submitted_at: Optional[datetime] = None

    def __repr__(self) -> str:
        return f"<QuizAttempt(user_id='{self.user_id}', quiz_id='{self.quiz_id}', score={self.score})>"


class Certificate(BaseModel):
    id: str
    user_id: str
    course_id: str
    issue_date: datetime

    def __repr__(self) -> str:
        return f"<Certificate(id='{self.id}', user_id='{self.user_id}', course_id='{self.course_id}')>"


class Review(BaseModel):
    id: str
    course_id: str
    user_id: str
    rating: int = Field(ge=1, le=5)
    comment: str = ""
    date: datetime
