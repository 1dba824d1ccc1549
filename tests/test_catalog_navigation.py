import pytest
from pydantic import ValidationError

from eduverse.models import Question, UserProfile, UserRole
from eduverse.navigation import (
    AdminView, BuilderView, CourseView, DashboardView, LessonView, Navigator,
    QuizView, after_lesson, parse_view
)
from eduverse.services import CatalogService


@pytest.fixture
def catalog(manager):
    return CatalogService(manager)


def test_search_is_case_insensitive_on_title(catalog):
    assert [c.id for c in catalog.list_courses(search="react")] == ["c1"]
    assert [c.id for c in catalog.list_courses(search="HTML")] == ["c3"]


def test_category_filter(catalog):
    assert [c.id for c in catalog.list_courses(category="Web Development")] == ["c1", "c3"]
    assert len(catalog.list_courses(category="All")) == 3
    assert catalog.list_courses(search="css", category="Web Development") == []


def test_categories_start_with_all(catalog):
    assert catalog.categories() == ["All", "Web Development", "Web Design"]


def test_average_rating(catalog):
    assert catalog.average_rating("c3") == 4.5
    assert catalog.average_rating("c1") == 0.0


def test_prerequisite_satisfied(manager, catalog):
    course = manager.get_course("c2")
    assert catalog.prerequisite(course).id == "c3"
    assert catalog.prerequisite_satisfied(manager.get_user("u1"), course) is True

    new_id = manager.add_user(UserProfile(name="New", email="new@edu.com"))
    assert catalog.prerequisite_satisfied(manager.get_user(new_id), course) is False
    assert catalog.prerequisite_satisfied(None, course) is False
    assert catalog.prerequisite_satisfied(None, manager.get_course("c1")) is True


def test_enrolled_courses(manager, catalog):
    pairs = catalog.enrolled_courses(manager.get_user("u1"))
    assert [(course.id, enrollment.progress) for course, enrollment in pairs] == [("c1", 33), ("c3", 100)]


def test_latest_attempt(manager, catalog):
    manager.login("u2")
    manager.submit_quiz("q1", [0, None, None])
    manager.submit_quiz("q1", [0, 1, None])
    assert catalog.latest_attempt(manager.get_user("u2"), "q1").score == 67
    assert catalog.latest_attempt(manager.get_user("u1"), "q1") is None


def test_question_rejects_out_of_range_answer():
    with pytest.raises(ValidationError):
        Question(id="x", text="?", options=["a", "b"], correct_answer_index=2)


def test_after_lesson_moves_through_course(manager):
    course = manager.get_course("c1")
    assert after_lesson(course, "c1l1") == LessonView(course_id="c1", lesson_id="c1l2")
    assert after_lesson(course, "c1l3") == QuizView(course_id="c1", quiz_id="q1")

    no_quiz = manager.get_course("c3")
    assert after_lesson(no_quiz, "c3l1") == CourseView(id="c3")


def test_parse_view_picks_variant():
    assert parse_view({"page": "lesson", "course_id": "c1", "lesson_id": "c1l1"}) == LessonView(
        course_id="c1", lesson_id="c1l1"
    )
    assert parse_view({"page": "builder"}) == BuilderView()
    with pytest.raises(ValidationError):
        parse_view({"page": "course"})
    with pytest.raises(ValidationError):
        parse_view({"page": "settings"})


def test_nav_links_are_role_gated(manager):
    navigator = Navigator()
    assert navigator.current == DashboardView()

    def pages(user_id):
        return [link.view.page for link in navigator.nav_links(manager.get_user(user_id))]

    assert pages("u1") == ["dashboard", "catalog"]
    assert pages("u3") == ["dashboard", "catalog", "builder"]
    assert pages("u4") == ["dashboard", "catalog", "builder", "admin"]
    assert navigator.nav_links(None) == []


def test_navigator_navigate_and_reset():
    navigator = Navigator()
    navigator.navigate(AdminView())
    assert navigator.current.page == "admin"
    navigator.reset()
    assert navigator.current == DashboardView()
