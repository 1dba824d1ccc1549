from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from eduverse.models import Course, Enrollment, Lesson, User
from eduverse.navigation import View


class CourseSummary(BaseModel):
    """Catalog card: course basics, lead instructor and the user's progress."""
    id: str
    title: str
    description: str
    category: str
    thumbnail_url: str
    lesson_count: int
    instructor: Optional[User] = None
    enrollment: Optional[Enrollment] = None


class ReviewResponse(BaseModel):
    id: str
    course_id: str
    user_id: str
    user_name: Optional[str] = None
    rating: int
    comment: str
    date: datetime


class CourseDetail(BaseModel):
    course: Course
    instructors: List[User]
    reviews: List[ReviewResponse]
    average_rating: float
    prerequisite: Optional[Course] = None
    prerequisite_satisfied: bool
    enrollment: Optional[Enrollment] = None


class ReviewCreate(BaseModel):
    rating: int = Field(ge=1, le=5)
    comment: str = ""


class LessonCompletion(BaseModel):
    enrollment: Enrollment
    lesson: Lesson
    next_view: View
