"""
Domain state manager for EduVerse.

The StateManager owns every collection (users, courses, quizzes,
enrollments, reviews, notifications, certificates, quiz attempts and the
current session) and is the only code that changes them.

Each action builds the replacement collections first, writes the changed
keys to the store in one batch, and only then swaps in the new
LearningState. Callers never see a half-applied action, and reads always
return copies.

Unmet preconditions (no session, duplicate action, missing target) make an
action a silent no-op. ``submit_quiz`` is the exception: it returns the
attempt the caller depends on, so it raises NotAuthenticated or NotFound.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Optional
import logging
import uuid

from eduverse.core.config import settings
from eduverse.core.exceptions import NotAuthenticated, NotFound
from eduverse.core.store import BaseStore
from eduverse.models import (
    Certificate, Course, CourseDraft, Enrollment, LearningState, LinkPage,
    Notification, NotificationLink, Quiz, QuizAttempt, QuizDraft, Review,
    STATE_KEYS, User, UserProfile, percentage
)


logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def random_token() -> str:
    return uuid.uuid4().hex[:12]


class StateManager:
    """
    Single authority for application state.

    Args:
        store: Where committed collections are mirrored
        initial: Collections to use for keys the store has never held
        clock: Returns the current time (UTC)
        id_factory: Returns the random part of new identifiers
        key_prefix: Prefix for storage keys
        passing_score: Minimum quiz score that earns a certificate
    """

    def __init__(
        self,
        store: BaseStore,
        initial: Optional[LearningState] = None,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
        key_prefix: Optional[str] = None,
        passing_score: Optional[int] = None,
    ) -> None:
        self.store = store
        self.key_prefix = settings.STORAGE_KEY_PREFIX if key_prefix is None else key_prefix
        self.passing_score = settings.CERTIFICATE_PASSING_SCORE if passing_score is None else passing_score
        self._clock = clock or utcnow
        self._id_factory = id_factory or random_token
        self._state = self._load(initial or LearningState())

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def storage_key(self, name: str) -> str:
        return f"{self.key_prefix}{name}"

    def _load(self, initial: LearningState) -> LearningState:
        defaults = initial.model_dump(mode="json")
        data = {
            name: self.store.read(self.storage_key(name), defaults[name])
            for name in STATE_KEYS
        }
        state = LearningState.model_validate(data)
        logger.info(
            f"Loaded state: {len(state.users)} users, {len(state.courses)} courses, "
            f"{len(state.enrollments)} enrollments"
        )
        return state

    def _commit(self, action: str, **updates: Any) -> None:
        """
        Write the updated collections to the store in one batch, then swap
        them in. A failed write leaves the current state untouched.
        """
        candidate = self._state.model_copy(update=updates)
        dumped = candidate.model_dump(mode="json", include=set(updates))
        self.store.write_many({self.storage_key(name): dumped[name] for name in updates})
        self._state = candidate
        logger.info(f"{action}: committed {', '.join(sorted(updates))}")

    def _skip(self, action: str, reason: str) -> None:
        logger.debug(f"{action} ignored: {reason}")

    def _new_id(self, prefix: str, existing: Iterable[str]) -> str:
        taken = set(existing)
        while True:
            candidate = f"{prefix}{self._id_factory()}"
            if candidate not in taken:
                return candidate

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    def snapshot(self) -> LearningState:
        """Read-only projection of all state."""
        return self._state.model_copy(deep=True)

    @property
    def current_user(self) -> Optional[User]:
        user = self._state.current_user
        return user.model_copy(deep=True) if user else None

    @property
    def users(self) -> List[User]:
        return [u.model_copy(deep=True) for u in self._state.users]

    @property
    def courses(self) -> List[Course]:
        return [c.model_copy(deep=True) for c in self._state.courses]

    @property
    def quizzes(self) -> List[Quiz]:
        return [q.model_copy(deep=True) for q in self._state.quizzes]

    @property
    def enrollments(self) -> List[Enrollment]:
        return [e.model_copy(deep=True) for e in self._state.enrollments]

    @property
    def reviews(self) -> List[Review]:
        return [r.model_copy(deep=True) for r in self._state.reviews]

    @property
    def notifications(self) -> List[Notification]:
        return [n.model_copy(deep=True) for n in self._state.notifications]

    @property
    def certificates(self) -> List[Certificate]:
        return [c.model_copy(deep=True) for c in self._state.certificates]

    @property
    def quiz_attempts(self) -> List[QuizAttempt]:
        return [a.model_copy(deep=True) for a in self._state.quiz_attempts]

    def get_user(self, user_id: str) -> Optional[User]:
        user = self._find_user(user_id)
        return user.model_copy(deep=True) if user else None

    def get_course(self, course_id: str) -> Optional[Course]:
        course = self._find_course(course_id)
        return course.model_copy(deep=True) if course else None

    def get_quiz(self, quiz_id: str) -> Optional[Quiz]:
        quiz = self._find_quiz(quiz_id)
        return quiz.model_copy(deep=True) if quiz else None

    def get_enrollment(self, user_id: str, course_id: str) -> Optional[Enrollment]:
        enrollment = self._find_enrollment(user_id, course_id)
        return enrollment.model_copy(deep=True) if enrollment else None

    def _find_user(self, user_id: str) -> Optional[User]:
        return next((u for u in self._state.users if u.id == user_id), None)

    def _find_course(self, course_id: Optional[str]) -> Optional[Course]:
        return next((c for c in self._state.courses if c.id == course_id), None)

    def _find_quiz(self, quiz_id: str) -> Optional[Quiz]:
        return next((q for q in self._state.quizzes if q.id == quiz_id), None)

    def _find_enrollment(self, user_id: str, course_id: str) -> Optional[Enrollment]:
        return next((e for e in self._state.enrollments if e.matches(user_id, course_id)), None)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def login(self, user_id: str) -> None:
        """Start a session as the given user. Unknown ids are ignored."""
        user = self._find_user(user_id)
        if user is None:
            self._skip("login", f"unknown user {user_id}")
            return
        self._commit("login", current_user=user)

    def logout(self) -> None:
        self._commit("logout", current_user=None)

    # ------------------------------------------------------------------
    # Learner actions
    # ------------------------------------------------------------------

    def enroll_in_course(self, course_id: str) -> None:
        """Enroll the session user once per course."""
        user = self._state.current_user
        if user is None:
            self._skip("enroll_in_course", "no session")
            return
        if self._find_course(course_id) is None:
            self._skip("enroll_in_course", f"unknown course {course_id}")
            return
        if self._find_enrollment(user.id, course_id) is not None:
            self._skip("enroll_in_course", f"{user.id} already enrolled in {course_id}")
            return

        enrollment = Enrollment(user_id=user.id, course_id=course_id)
        self._commit(
            "enroll_in_course",
            enrollments=[*self._state.enrollments, enrollment]
        )

    def complete_lesson(self, course_id: str, lesson_id: str) -> None:
        """
        Mark a lesson complete and recompute progress.

        Progress uses the course's lesson count at call time, so a course
        whose lesson list was edited since earlier completions gets a
        percentage based on the new list. A course without lessons leaves
        progress unchanged.
        """
        user = self._state.current_user
        if user is None:
            self._skip("complete_lesson", "no session")
            return

        enrollment = self._find_enrollment(user.id, course_id)
        if enrollment is None:
            self._skip("complete_lesson", f"{user.id} not enrolled in {course_id}")
            return
        if lesson_id in enrollment.completed_lessons:
            self._skip("complete_lesson", f"lesson {lesson_id} already complete")
            return

        course = self._find_course(course_id)
        if course is not None and course.get_lesson(lesson_id) is None:
            self._skip("complete_lesson", f"lesson {lesson_id} not in course {course_id}")
            return

        completed = [*enrollment.completed_lessons, lesson_id]
        progress = enrollment.progress
        if course is not None and course.lessons:
            progress = min(100, percentage(len(completed), len(course.lessons)))

        updated = enrollment.model_copy(update={
            "completed_lessons": completed,
            "progress": progress,
        })
        self._commit(
            "complete_lesson",
            enrollments=[updated if e is enrollment else e for e in self._state.enrollments]
        )

    def submit_review(self, course_id: str, rating: int, comment: str) -> None:
        """Add a review, newest first. Users may review a course repeatedly."""
        user = self._state.current_user
        if user is None:
            self._skip("submit_review", "no session")
            return
        if self._find_course(course_id) is None:
            self._skip("submit_review", f"unknown course {course_id}")
            return

        review = Review(
            id=self._new_id("r", (r.id for r in self._state.reviews)),
            course_id=course_id,
            user_id=user.id,
            rating=rating,
            comment=comment,
            date=self._clock(),
        )
        self._commit("submit_review", reviews=[review, *self._state.reviews])

    def submit_quiz(self, quiz_id: str, answers: List[Optional[int]]) -> QuizAttempt:
        """
        Score a quiz submission and record the attempt.

        Answer i is correct when it equals question i's correct option;
        missing answers never count. When the score passes, the user has
        finished every lesson of the course the quiz belongs to, and holds
        no certificate for it yet, a certificate and a notification are
        issued as part of the same commit.

        Raises:
            NotAuthenticated: No active session
            NotFound: quiz_id does not resolve to a quiz
        """
        user = self._state.current_user
        if user is None:
            raise NotAuthenticated()
        quiz = self._find_quiz(quiz_id)
        if quiz is None:
            raise NotFound("Quiz", quiz_id)

        now = self._clock()
        total = len(quiz.questions)
        score = percentage(quiz.count_correct(answers), total) if total else 0
        attempt = QuizAttempt(
            user_id=user.id,
            quiz_id=quiz_id,
            score=score,
            answers=list(answers),
            submitted_at=now,
        )
        updates: dict = {"quiz_attempts": [*self._state.quiz_attempts, attempt]}

        course = next((c for c in self._state.courses if c.quiz_id == quiz_id), None)
        if course is not None and score >= self.passing_score:
            enrollment = self._find_enrollment(user.id, course.id)
            already_certified = any(
                c.user_id == user.id and c.course_id == course.id
                for c in self._state.certificates
            )
            if enrollment is not None and enrollment.is_complete and not already_certified:
                certificate = Certificate(
                    id=self._new_id("cert", (c.id for c in self._state.certificates)),
                    user_id=user.id,
                    course_id=course.id,
                    issue_date=now,
                )
                notification = Notification(
                    id=self._new_id("n", (n.id for n in self._state.notifications)),
                    user_id=user.id,
                    message=f"Congratulations! You've earned a certificate for {course.title}.",
                    timestamp=now,
                    link=NotificationLink(page=LinkPage.CERTIFICATE, id=certificate.id),
                )
                updates["certificates"] = [*self._state.certificates, certificate]
                updates["notifications"] = [notification, *self._state.notifications]
                logger.info(f"Certificate {certificate.id} issued to {user.id} for {course.id}")

        self._commit("submit_quiz", **updates)
        return attempt.model_copy(deep=True)

    def mark_notification_read(self, notification_id: str) -> None:
        """Mark one of the session user's notifications as read."""
        user = self._state.current_user
        if user is None:
            self._skip("mark_notification_read", "no session")
            return

        target = next(
            (n for n in self._state.notifications
             if n.id == notification_id and n.user_id == user.id),
            None
        )
        if target is None or target.is_read:
            self._skip("mark_notification_read", f"nothing to mark for {notification_id}")
            return

        updated = target.model_copy(update={"is_read": True})
        self._commit(
            "mark_notification_read",
            notifications=[updated if n is target else n for n in self._state.notifications]
        )

    # ------------------------------------------------------------------
    # Authoring actions
    # ------------------------------------------------------------------

    def add_user(self, profile: UserProfile) -> str:
        """Add a user with a generated id and avatar. Returns the id."""
        user_id = self._new_id("u", (u.id for u in self._state.users))
        user = User(
            id=user_id,
            avatar_url=settings.AVATAR_URL_TEMPLATE.format(seed=user_id),
            **profile.model_dump(),
        )
        self._commit("add_user", users=[*self._state.users, user])
        return user_id

    def add_course(self, draft: CourseDraft) -> str:
        """Add a course with a generated id. Returns the id."""
        course_id = self._new_id("c", (c.id for c in self._state.courses))
        course = Course(id=course_id, **draft.model_dump())
        self._commit("add_course", courses=[*self._state.courses, course])
        return course_id

    def add_quiz(self, draft: QuizDraft) -> str:
        """Add a quiz with a generated id so a course can reference it."""
        quiz_id = self._new_id("q", (q.id for q in self._state.quizzes))
        quiz = Quiz(id=quiz_id, **draft.model_dump())
        self._commit("add_quiz", quizzes=[*self._state.quizzes, quiz])
        return quiz_id

    def update_course(self, course: Course) -> None:
        """
        Replace the stored course with the same id. No partial merge.
        Existing enrollments are not recomputed until their next completion.
        """
        existing = self._find_course(course.id)
        if existing is None:
            self._skip("update_course", f"unknown course {course.id}")
            return

        replacement = course.model_copy(deep=True)
        self._commit(
            "update_course",
            courses=[replacement if c is existing else c for c in self._state.courses]
        )
