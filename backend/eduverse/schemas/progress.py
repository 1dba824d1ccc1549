from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

from eduverse.models import Certificate, Enrollment, User


class CertificateOut(BaseModel):
    certificate: Certificate
    course_title: Optional[str] = None
    verification_token: str


class DashboardEntry(BaseModel):
    course_id: str
    course_title: str
    category: str
    enrollment: Enrollment
    has_certificate: bool


class Dashboard(BaseModel):
    user: User
    courses: List[DashboardEntry]
    certificates: List[CertificateOut]
    unread_notifications: int


class CertificateVerification(BaseModel):
    valid: bool
    certificate_id: Optional[str] = None
    user_id: Optional[str] = None
    course_id: Optional[str] = None
    issue_date: Optional[datetime] = None
