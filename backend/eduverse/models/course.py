"""
Course models for EduVerse.

Defines Course, Lesson, Attachment, Quiz and Question, plus the drafts used
when authoring new courses and quizzes.
"""

from typing import Optional, List
from enum import Enum
from pydantic import BaseModel, Field, model_validator


class LessonType(str, Enum):
    """Kinds of lesson content."""
    VIDEO = "VIDEO"
    TEXT = "TEXT"


class AttachmentType(str, Enum):
    """File types a lesson attachment may have."""
    PDF = "PDF"
    ZIP = "ZIP"
    DOCX = "DOCX"


class Attachment(BaseModel):
    id: str
    name: str
    type: AttachmentType
    url: str


class Lesson(BaseModel):
    """
    A single unit of course content. Content is a video reference for
    VIDEO lessons and text for TEXT lessons.
    """
    id: str
    title: str
    type: LessonType
    content: str
    duration_minutes: int = Field(0, ge=0)
    attachments: List[Attachment] = Field(default_factory=list)


class Question(BaseModel):
    id: str
    text: str
    options: List[str]
    correct_answer_index: int

    @model_validator(mode="after")
    def validate_correct_answer_index(self) -> "Question":
        if not 0 <= self.correct_answer_index < len(self.options):
            raise ValueError("correct_answer_index must reference an existing option")
        return self

    def is_correct(self, answer: Optional[int]) -> bool:
        """A missing answer never matches."""
        return answer is not None and answer == self.correct_answer_index


class QuizDraft(BaseModel):
    title: str
    questions: List[Question] = Field(default_factory=list)


class Quiz(QuizDraft):
    """
    An ordered set of multiple-choice questions. A quiz attaches to at most
    one course through Course.quiz_id.
    """
    id: str

    def __repr__(self) -> str:
        return f"<Quiz(id='{self.id}', title='{self.title}', questions={len(self.questions)})>"

    def count_correct(self, answers: List[Optional[int]]) -> int:
        """Count answers matching the question at the same index."""
        correct = 0
        for i, question in enumerate(self.questions):
            answer = answers[i] if i < len(answers) else None
            if question.is_correct(answer):
                correct += 1
        return correct


class CourseDraft(BaseModel):
    """
    Everything about a course except its id.
    """
    title: str
    description: str = ""
    category: str = ""
    instructor_ids: List[str] = Field(default_factory=list)
    lessons: List[Lesson] = Field(default_factory=list)
    quiz_id: Optional[str] = None
    prerequisite_course_id: Optional[str] = None
    thumbnail_url: str = ""


class Course(CourseDraft):
    """
    A course in the catalog. Lesson order defines progression.
    """
    id: str

    def __repr__(self) -> str:
        return f"<Course(id='{self.id}', title='{self.title}')>"

    @property
    def lesson_ids(self) -> List[str]:
        return [lesson.id for lesson in self.lessons]

    def get_lesson(self, lesson_id: str) -> Optional[Lesson]:
        return next((lesson for lesson in self.lessons if lesson.id == lesson_id), None)

    def next_lesson(self, lesson_id: str) -> Optional[Lesson]:
        """Get the lesson after lesson_id, or None if it is the last one."""
        ids = self.lesson_ids
        if lesson_id not in ids:
            return None
        index = ids.index(lesson_id)
        if index + 1 < len(self.lessons):
            return self.lessons[index + 1]
        return None

    @property
    def total_duration_minutes(self) -> int:
        return sum(lesson.duration_minutes for lesson in self.lessons)
