"""
Courses router for EduVerse.

Handles the catalog, course details, enrollment, lesson completion
and reviews.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query

from eduverse.models import Course, Enrollment, Lesson, User
from eduverse.navigation import Navigator, after_lesson
from eduverse.routers.auth import (
    get_catalog, get_current_user, get_navigator, get_state_manager
)
from eduverse.services import CatalogService, StateManager
from eduverse.schemas.course import (
    CourseDetail,
    CourseSummary,
    LessonCompletion,
    ReviewCreate,
    ReviewResponse
)


router = APIRouter()


def _get_course_or_404(manager: StateManager, course_id: str) -> Course:
    course = manager.get_course(course_id)
    if course is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Course not found"
        )
    return course


def _review_responses(manager: StateManager, catalog: CatalogService, course_id: str) -> List[ReviewResponse]:
    names = {u.id: u.name for u in manager.users}
    return [
        ReviewResponse(
            id=review.id,
            course_id=review.course_id,
            user_id=review.user_id,
            user_name=names.get(review.user_id),
            rating=review.rating,
            comment=review.comment,
            date=review.date
        )
        for review in catalog.course_reviews(course_id)
    ]


@router.get("/", response_model=List[CourseSummary])
async def list_courses(
    search: Optional[str] = Query(None, max_length=200),
    category: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    manager: StateManager = Depends(get_state_manager),
    catalog: CatalogService = Depends(get_catalog)
) -> List[CourseSummary]:
    """
    List catalog courses filtered by title search and category.
    """
    summaries = []
    for course in catalog.list_courses(search=search, category=category):
        instructors = catalog.instructors(course)
        summaries.append(CourseSummary(
            id=course.id,
            title=course.title,
            description=course.description,
            category=course.category,
            thumbnail_url=course.thumbnail_url,
            lesson_count=len(course.lessons),
            instructor=instructors[0] if instructors else None,
            enrollment=manager.get_enrollment(current_user.id, course.id)
        ))
    return summaries


@router.get("/categories", response_model=List[str])
async def list_categories(
    catalog: CatalogService = Depends(get_catalog)
) -> List[str]:
    """
    Category filter options, starting with "All".
    """
    return catalog.categories()


@router.get("/{course_id}", response_model=CourseDetail)
async def get_course(
    course_id: str,
    current_user: User = Depends(get_current_user),
    manager: StateManager = Depends(get_state_manager),
    catalog: CatalogService = Depends(get_catalog)
) -> CourseDetail:
    """
    Get a course with instructors, reviews, prerequisite and the user's enrollment.
    """
    course = _get_course_or_404(manager, course_id)

    return CourseDetail(
        course=course,
        instructors=catalog.instructors(course),
        reviews=_review_responses(manager, catalog, course_id),
        average_rating=catalog.average_rating(course_id),
        prerequisite=catalog.prerequisite(course),
        prerequisite_satisfied=catalog.prerequisite_satisfied(current_user, course),
        enrollment=manager.get_enrollment(current_user.id, course_id)
    )


@router.post("/{course_id}/enroll", response_model=Enrollment)
async def enroll(
    course_id: str,
    current_user: User = Depends(get_current_user),
    manager: StateManager = Depends(get_state_manager),
    catalog: CatalogService = Depends(get_catalog)
) -> Enrollment:
    """
    Enroll in a course. Enrolling twice returns the existing enrollment.
    """
    course = _get_course_or_404(manager, course_id)

    if manager.get_enrollment(current_user.id, course_id) is None:
        if not catalog.prerequisite_satisfied(current_user, course):
            prerequisite = catalog.prerequisite(course)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires completion of: {prerequisite.title if prerequisite else course.prerequisite_course_id}"
            )
        manager.enroll_in_course(course_id)

    return manager.get_enrollment(current_user.id, course_id)


@router.get("/{course_id}/lessons/{lesson_id}", response_model=Lesson)
async def get_lesson(
    course_id: str,
    lesson_id: str,
    current_user: User = Depends(get_current_user),
    manager: StateManager = Depends(get_state_manager)
) -> Lesson:
    """
    Get a lesson. Only enrolled users can open lessons.
    """
    course = _get_course_or_404(manager, course_id)
    lesson = course.get_lesson(lesson_id)
    if lesson is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Lesson not found"
        )
    if manager.get_enrollment(current_user.id, course_id) is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enrolled in this course"
        )
    return lesson


@router.post("/{course_id}/lessons/{lesson_id}/complete", response_model=LessonCompletion)
async def complete_lesson(
    course_id: str,
    lesson_id: str,
    current_user: User = Depends(get_current_user),
    manager: StateManager = Depends(get_state_manager),
    navigator: Navigator = Depends(get_navigator)
) -> LessonCompletion:
    """
    Mark a lesson complete and move on to whatever follows it.
    """
    course = _get_course_or_404(manager, course_id)
    lesson = course.get_lesson(lesson_id)
    if lesson is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Lesson not found"
        )
    if manager.get_enrollment(current_user.id, course_id) is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enrolled in this course"
        )

    manager.complete_lesson(course_id, lesson_id)
    next_view = navigator.navigate(after_lesson(course, lesson_id))

    return LessonCompletion(
        enrollment=manager.get_enrollment(current_user.id, course_id),
        lesson=lesson,
        next_view=next_view
    )


@router.get("/{course_id}/reviews", response_model=List[ReviewResponse])
async def list_reviews(
    course_id: str,
    manager: StateManager = Depends(get_state_manager),
    catalog: CatalogService = Depends(get_catalog)
) -> List[ReviewResponse]:
    """
    Reviews for a course, newest first.
    """
    _get_course_or_404(manager, course_id)
    return _review_responses(manager, catalog, course_id)


@router.post("/{course_id}/reviews", response_model=List[ReviewResponse], status_code=status.HTTP_201_CREATED)
async def submit_review(
    course_id: str,
    review_data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    manager: StateManager = Depends(get_state_manager),
    catalog: CatalogService = Depends(get_catalog)
) -> List[ReviewResponse]:
    """
    Add a review and return the course's reviews.
    """
    _get_course_or_404(manager, course_id)
    manager.submit_review(course_id, review_data.rating, review_data.comment)
    return _review_responses(manager, catalog, course_id)
