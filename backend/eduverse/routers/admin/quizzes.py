"""
Admin quizzes router for EduVerse.
"""

from typing import List
from fastapi import APIRouter, Depends, status

from eduverse.models import Quiz, QuizDraft
from eduverse.routers.auth import get_state_manager
from eduverse.services import StateManager


router = APIRouter()


@router.get("/", response_model=List[Quiz])
async def list_quizzes(
    manager: StateManager = Depends(get_state_manager)
) -> List[Quiz]:
    """
    List all quizzes including correct answers.
    """
    return manager.quizzes


@router.post("/", response_model=Quiz, status_code=status.HTTP_201_CREATED)
async def create_quiz(
    quiz_data: QuizDraft,
    manager: StateManager = Depends(get_state_manager)
) -> Quiz:
    """
    Create a quiz. Attach it to a course by setting the course's quiz_id.
    """
    quiz_id = manager.add_quiz(quiz_data)
    return manager.get_quiz(quiz_id)
