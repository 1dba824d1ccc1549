"""
Models for EduVerse.

This module contains the domain entities and the storage table:
- User models for sessions and roles
- Course models for lessons and quizzes
- Progress models for enrollments, attempts, certificates and reviews
- Notification model
- StoredValue table for the durable key-value store
"""

from eduverse.core.database import Base

from .user import User, UserProfile, UserRole
from .course import (
    Attachment, AttachmentType, Course, CourseDraft, Lesson, LessonType,
    Question, Quiz, QuizDraft
)
from .progress import Enrollment, QuizAttempt, Certificate, Review, percentage
from .notification import Notification, NotificationLink, LinkPage
from .state import LearningState, STATE_KEYS
from .storage import StoredValue

# Export all models
__all__ = [
    "Base",
    "User",
    "UserProfile",
    "UserRole",
    "Attachment",
    "AttachmentType",
    "Course",
    "CourseDraft",
    "Lesson",
    "LessonType",
    "Question",
    "Quiz",
    "QuizDraft",
    "Enrollment",
    "QuizAttempt",
    "Certificate",
    "Review",
    "percentage",
    "Notification",
    "NotificationLink",
    "LinkPage",
    "LearningState",
    "STATE_KEYS",
    "StoredValue"
]
