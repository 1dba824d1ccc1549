"""
Admin courses router for EduVerse.

Handles the course builder: listing, creating and replacing courses.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
import logging

from eduverse.models import Course, CourseDraft
from eduverse.routers.auth import get_state_manager
from eduverse.services import StateManager


logger = logging.getLogger(__name__)

router = APIRouter()


def _check_references(manager: StateManager, draft: CourseDraft, course_id: Optional[str] = None) -> None:
    """
    Reject drafts pointing at quizzes, courses or instructors that do not exist.
    """
    if draft.quiz_id and manager.get_quiz(draft.quiz_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown quiz: {draft.quiz_id}"
        )

    if draft.quiz_id:
        owner = next(
            (c for c in manager.courses if c.quiz_id == draft.quiz_id and c.id != course_id),
            None
        )
        if owner is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Quiz {draft.quiz_id} is already attached to course {owner.id}"
            )

    if draft.prerequisite_course_id:
        if draft.prerequisite_course_id == course_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A course cannot be its own prerequisite"
            )
        if manager.get_course(draft.prerequisite_course_id) is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown prerequisite course: {draft.prerequisite_course_id}"
            )

    known_users = {u.id for u in manager.users}
    missing = [i for i in draft.instructor_ids if i not in known_users]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown instructors: {', '.join(missing)}"
        )


@router.get("/", response_model=List[Course])
async def list_courses(
    manager: StateManager = Depends(get_state_manager)
) -> List[Course]:
    """
    List all courses with full lesson content.
    """
    return manager.courses


@router.post("/", response_model=Course, status_code=status.HTTP_201_CREATED)
async def create_course(
    course_data: CourseDraft,
    manager: StateManager = Depends(get_state_manager)
) -> Course:
    """
    Create a new course.
    """
    _check_references(manager, course_data)

    course_id = manager.add_course(course_data)
    logger.info(f"Course created: {course_id}")
    return manager.get_course(course_id)


@router.put("/{course_id}", response_model=Course)
async def update_course(
    course_id: str,
    course_data: CourseDraft,
    manager: StateManager = Depends(get_state_manager)
) -> Course:
    """
    Replace a course. Every field is overwritten.
    """
    if manager.get_course(course_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Course not found"
        )

    _check_references(manager, course_data, course_id)

    manager.update_course(Course(id=course_id, **course_data.model_dump()))
    return manager.get_course(course_id)
