"""
Request and response schemas for the EduVerse HTTP views.
"""

from .auth import LoginRequest, SessionResponse
from .course import (
    CourseSummary, CourseDetail, LessonCompletion, ReviewCreate, ReviewResponse
)
from .quiz import QuestionOut, QuizOut, QuizSubmission, QuizResult
from .progress import CertificateOut, DashboardEntry, Dashboard, CertificateVerification
from .navigation import NavigationState, NavigationRequest

__all__ = [
    "LoginRequest",
    "SessionResponse",
    "CourseSummary",
    "CourseDetail",
    "LessonCompletion",
    "ReviewCreate",
    "ReviewResponse",
    "QuestionOut",
    "QuizOut",
    "QuizSubmission",
    "QuizResult",
    "CertificateOut",
    "DashboardEntry",
    "Dashboard",
    "CertificateVerification",
    "NavigationState",
    "NavigationRequest"
]
