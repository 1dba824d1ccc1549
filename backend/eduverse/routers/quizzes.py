"""
Quizzes router for EduVerse.

Serves quiz questions and scores submissions.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from eduverse.core.exceptions import NotAuthenticated, NotFound
from eduverse.models import User
from eduverse.routers.auth import get_current_user, get_state_manager
from eduverse.services import StateManager
from eduverse.schemas.quiz import QuizOut, QuizResult, QuizSubmission


router = APIRouter()


@router.get("/{quiz_id}", response_model=QuizOut)
async def get_quiz(
    quiz_id: str,
    current_user: User = Depends(get_current_user),
    manager: StateManager = Depends(get_state_manager)
) -> QuizOut:
    """
    Get a quiz's questions without their answers.
    """
    quiz = manager.get_quiz(quiz_id)
    if quiz is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Quiz not found"
        )
    return QuizOut.from_quiz(quiz)


@router.post("/{quiz_id}/submit", response_model=QuizResult)
async def submit_quiz(
    quiz_id: str,
    submission: QuizSubmission,
    manager: StateManager = Depends(get_state_manager)
) -> QuizResult:
    """
    Score a submission. A passing score on a completed course issues a
    certificate once.
    """
    certificates_before = {c.id for c in manager.certificates}

    try:
        attempt = manager.submit_quiz(quiz_id, submission.answers)
    except NotAuthenticated as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message
        )
    except NotFound as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )

    quiz = manager.get_quiz(quiz_id)
    new_certificate = next(
        (c for c in manager.certificates
         if c.id not in certificates_before and c.user_id == attempt.user_id),
        None
    )

    return QuizResult(
        attempt=attempt,
        correct_count=quiz.count_correct(attempt.answers),
        question_count=len(quiz.questions),
        passed=attempt.score >= manager.passing_score,
        certificate_id=new_certificate.id if new_certificate else None
    )
