"""
Demo catalog used as the initial state of a fresh store.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from eduverse.models import (
    Attachment, AttachmentType, Course, Enrollment, LearningState, Lesson,
    LessonType, Notification, Question, Quiz, Review, User, UserRole
)


def _avatar(seed: str) -> str:
    return f"https://picsum.photos/seed/{seed}/100"


def _thumbnail(seed: str) -> str:
    return f"https://picsum.photos/seed/{seed}/400/225"


def demo_state(now: Optional[datetime] = None) -> LearningState:
    """
    Build the demo users, catalog, enrollments, reviews and notifications.

    Args:
        now: Reference time for review dates and notification timestamps
    """
    now = now or datetime.now(timezone.utc)

    users = [
        User(id="u1", name="Alice Johnson", email="alice@edu.com", role=UserRole.STUDENT, avatar_url=_avatar("u1")),
        User(id="u2", name="Bob Williams", email="bob@edu.com", role=UserRole.STUDENT, avatar_url=_avatar("u2")),
        User(id="u3", name="Dr. Carol Davis", email="carol@edu.com", role=UserRole.INSTRUCTOR, avatar_url=_avatar("u3")),
        User(id="u4", name="Admin User", email="admin@edu.com", role=UserRole.ADMIN, avatar_url=_avatar("u4")),
        User(id="u5", name="Dr. David Smith", email="david@edu.com", role=UserRole.INSTRUCTOR, avatar_url=_avatar("u5")),
    ]

    quizzes = [
        Quiz(id="q1", title="React Basics Quiz", questions=[
            Question(id="q1q1", text="What is JSX?",
                     options=["A JavaScript syntax extension", "A CSS preprocessor",
                              "A database query language", "A templating engine"],
                     correct_answer_index=0),
            Question(id="q1q2", text="How do you pass data to a component?",
                     options=["State", "Props", "Variables", "Functions"],
                     correct_answer_index=1),
            Question(id="q1q3", text="What hook is used for state management in functional components?",
                     options=["useEffect", "useContext", "useState", "useReducer"],
                     correct_answer_index=2),
        ]),
        Quiz(id="q2", title="Advanced CSS Quiz", questions=[
            Question(id="q2q1", text="What does CSS stand for?",
                     options=["Cascading Style Sheets", "Creative Style Sheets",
                              "Computer Style Sheets", "Colorful Style Sheets"],
                     correct_answer_index=0),
            Question(id="q2q2", text="Which property is used to change the background color?",
                     options=["color", "bgcolor", "background-color", "background"],
                     correct_answer_index=2),
        ]),
    ]

    courses = [
        Course(
            id="c1", title="Introduction to React", category="Web Development",
            description="Learn the fundamentals of React, including components, state, props, and hooks. "
                        "This course is perfect for beginners.",
            instructor_ids=["u3"], thumbnail_url=_thumbnail("c1"), quiz_id="q1",
            lessons=[
                Lesson(id="c1l1", title="Course Introduction", type=LessonType.VIDEO,
                       content="intro.mp4", duration_minutes=5),
                Lesson(id="c1l2", title="What is React?", type=LessonType.TEXT,
                       content="React is a JavaScript library for building user interfaces.",
                       duration_minutes=15,
                       attachments=[Attachment(id="a1", name="React_Docs.pdf", type=AttachmentType.PDF, url="#")]),
                Lesson(id="c1l3", title="Components and Props", type=LessonType.VIDEO,
                       content="components.mp4", duration_minutes=25),
            ],
        ),
        Course(
            id="c2", title="Advanced CSS and Sass", category="Web Design",
            description="Dive deep into modern CSS features like Flexbox, Grid, and animations. "
                        "Also, learn how to use Sass for more maintainable stylesheets.",
            instructor_ids=["u5"], thumbnail_url=_thumbnail("c2"),
            prerequisite_course_id="c3", quiz_id="q2",
            lessons=[
                Lesson(id="c2l1", title="Flexbox Fundamentals", type=LessonType.VIDEO,
                       content="flexbox.mp4", duration_minutes=30),
                Lesson(id="c2l2", title="CSS Grid Layout", type=LessonType.VIDEO,
                       content="grid.mp4", duration_minutes=45),
            ],
        ),
        Course(
            id="c3", title="HTML5 for Beginners", category="Web Development",
            description="Start your web development journey by mastering the structure of web pages with HTML5.",
            instructor_ids=["u5"], thumbnail_url=_thumbnail("c3"),
            lessons=[
                Lesson(id="c3l1", title="HTML Basics", type=LessonType.TEXT,
                       content="Learn the basic tags of HTML.", duration_minutes=20),
            ],
        ),
    ]

    enrollments = [
        Enrollment(user_id="u1", course_id="c1", progress=33, completed_lessons=["c1l1"]),
        Enrollment(user_id="u1", course_id="c3", progress=100, completed_lessons=["c3l1"]),
        Enrollment(user_id="u2", course_id="c3", progress=100, completed_lessons=["c3l1"]),
    ]

    # Newest first
    reviews = [
        Review(id="r2", course_id="c3", user_id="u2", rating=4,
               comment="Very helpful, but could use more examples.", date=now - timedelta(days=1)),
        Review(id="r1", course_id="c3", user_id="u1", rating=5,
               comment="Great introductory course!", date=now - timedelta(days=2)),
    ]

    notifications = [
        Notification(id="n1", user_id="u3",
                     message="Alice Johnson enrolled in your course: Introduction to React",
                     timestamp=now),
    ]

    return LearningState(
        users=users,
        courses=courses,
        quizzes=quizzes,
        enrollments=enrollments,
        reviews=reviews,
        notifications=notifications,
    )
