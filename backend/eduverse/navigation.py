"""
In-memory view navigation for EduVerse.

A View is a tagged variant keyed on ``page``; each page carries only the
parameters it needs. The Navigator keeps the current view in memory. It is
never persisted and has no history.
"""

from typing import Annotated, List, Literal, Optional, Union
import logging

from pydantic import BaseModel, Field, TypeAdapter

from eduverse.models import Course, User


logger = logging.getLogger(__name__)


class DashboardView(BaseModel):
    page: Literal["dashboard"] = "dashboard"


class CatalogView(BaseModel):
    page: Literal["catalog"] = "catalog"


class AdminView(BaseModel):
    page: Literal["admin"] = "admin"


class BuilderView(BaseModel):
    page: Literal["builder"] = "builder"
    id: Optional[str] = None


class CourseView(BaseModel):
    page: Literal["course"] = "course"
    id: str


class LessonView(BaseModel):
    page: Literal["lesson"] = "lesson"
    course_id: str
    lesson_id: str


class QuizView(BaseModel):
    page: Literal["quiz"] = "quiz"
    course_id: str
    quiz_id: str


View = Annotated[
    Union[DashboardView, CatalogView, AdminView, BuilderView, CourseView, LessonView, QuizView],
    Field(discriminator="page")
]

view_adapter: TypeAdapter = TypeAdapter(View)


class NavLink(BaseModel):
    label: str
    view: View


def parse_view(data: dict) -> View:
    """Validate a ``{"page": ..., **params}`` mapping into its View variant."""
    return view_adapter.validate_python(data)


def after_lesson(course: Course, lesson_id: str) -> View:
    """
    Where to go once a lesson is marked complete: the next lesson, else the
    course quiz, else back to the course page.
    """
    next_lesson = course.next_lesson(lesson_id)
    if next_lesson is not None:
        return LessonView(course_id=course.id, lesson_id=next_lesson.id)
    if course.quiz_id:
        return QuizView(course_id=course.id, quiz_id=course.quiz_id)
    return CourseView(id=course.id)


class Navigator:
    """
    Holds the current view. Starts on the dashboard.
    """

    def __init__(self) -> None:
        self.current: View = DashboardView()

    def navigate(self, view: View) -> View:
        logger.debug(f"Navigating to {view.page}")
        self.current = view
        return self.current

    def reset(self) -> None:
        self.current = DashboardView()

    def nav_links(self, user: Optional[User]) -> List[NavLink]:
        """Sidebar links; the builder is for non-students, admin for admins."""
        if user is None:
            return []

        links = [
            NavLink(label="Dashboard", view=DashboardView()),
            NavLink(label="All Courses", view=CatalogView()),
        ]
        if not user.is_student:
            links.append(NavLink(label="Course Builder", view=BuilderView()))
        if user.is_admin:
            links.append(NavLink(label="Admin", view=AdminView()))
        return links
