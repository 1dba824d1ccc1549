"""
Read-only catalog queries for EduVerse views.

Nothing here mutates state; every method reads copies from the
StateManager and derives what a page needs.
"""

from typing import List, Optional, Tuple

from eduverse.models import (
    Certificate, Course, Enrollment, Notification, QuizAttempt, Review, User
)
from .state_manager import StateManager


ALL_CATEGORIES = "All"


class CatalogService:
    """
    Derived views over the state manager's collections.
    """

    def __init__(self, manager: StateManager) -> None:
        self.manager = manager

    def list_courses(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None
    ) -> List[Course]:
        """
        Filter the catalog by a case-insensitive title substring and
        an exact category ("All" or None disables the category filter).
        """
        term = (search or "").lower()
        courses = self.manager.courses
        return [
            course for course in courses
            if term in course.title.lower()
            and (not category or category == ALL_CATEGORIES or course.category == category)
        ]

    def categories(self) -> List[str]:
        """Return "All" followed by each distinct category in catalog order."""
        seen: List[str] = []
        for course in self.manager.courses:
            if course.category not in seen:
                seen.append(course.category)
        return [ALL_CATEGORIES, *seen]

    def course_reviews(self, course_id: str) -> List[Review]:
        return [r for r in self.manager.reviews if r.course_id == course_id]

    def average_rating(self, course_id: str) -> float:
        reviews = self.course_reviews(course_id)
        if not reviews:
            return 0.0
        return sum(r.rating for r in reviews) / len(reviews)

    def instructors(self, course: Course) -> List[User]:
        """Instructors in the course's listed order, skipping unknown ids."""
        users = {u.id: u for u in self.manager.users}
        return [users[i] for i in course.instructor_ids if i in users]

    def prerequisite(self, course: Course) -> Optional[Course]:
        if not course.prerequisite_course_id:
            return None
        return self.manager.get_course(course.prerequisite_course_id)

    def prerequisite_satisfied(self, user: Optional[User], course: Course) -> bool:
        """
        True when the course has no (resolvable) prerequisite, or the user
        has fully completed it.
        """
        prerequisite = self.prerequisite(course)
        if prerequisite is None:
            return True
        if user is None:
            return False
        enrollment = self.manager.get_enrollment(user.id, prerequisite.id)
        return enrollment is not None and enrollment.is_complete

    def enrolled_courses(self, user: User) -> List[Tuple[Course, Enrollment]]:
        """The user's enrollments paired with their courses, in enrollment order."""
        pairs = []
        for enrollment in self.manager.enrollments:
            if enrollment.user_id != user.id:
                continue
            course = self.manager.get_course(enrollment.course_id)
            if course is not None:
                pairs.append((course, enrollment))
        return pairs

    def notifications_for(self, user: User, unread_only: bool = False) -> List[Notification]:
        return [
            n for n in self.manager.notifications
            if n.user_id == user.id and not (unread_only and n.is_read)
        ]

    def certificates_for(self, user: User) -> List[Certificate]:
        return [c for c in self.manager.certificates if c.user_id == user.id]

    def attempts_for(self, user: User, quiz_id: Optional[str] = None) -> List[QuizAttempt]:
        return [
            a for a in self.manager.quiz_attempts
            if a.user_id == user.id and (quiz_id is None or a.quiz_id == quiz_id)
        ]

    def latest_attempt(self, user: User, quiz_id: str) -> Optional[QuizAttempt]:
        attempts = self.attempts_for(user, quiz_id)
        return attempts[-1] if attempts else None
