from typing import List, Optional
from pydantic import BaseModel, Field

from eduverse.models import Quiz, QuizAttempt


class QuestionOut(BaseModel):
    """A question as shown to a learner, without its answer."""
    id: str
    text: str
    options: List[str]


class QuizOut(BaseModel):
    id: str
    title: str
    questions: List[QuestionOut]

    @classmethod
    def from_quiz(cls, quiz: Quiz) -> "QuizOut":
        return cls(
            id=quiz.id,
            title=quiz.title,
            questions=[
                QuestionOut(id=q.id, text=q.text, options=q.options)
                for q in quiz.questions
            ]
        )


class QuizSubmission(BaseModel):
    answers: List[Optional[int]] = Field(default_factory=list)


class QuizResult(BaseModel):
    attempt: QuizAttempt
    correct_count: int
    question_count: int
    passed: bool
    certificate_id: Optional[str] = None
