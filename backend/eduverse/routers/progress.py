"""
Progress router for EduVerse.

Handles the learner dashboard, quiz attempt history, certificates and
certificate verification.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query

from eduverse.core.security import create_certificate_token, verify_certificate_token
from eduverse.models import Certificate, QuizAttempt, User
from eduverse.routers.auth import (
    get_catalog, get_current_user, get_secret_key, get_state_manager
)
from eduverse.services import CatalogService, StateManager
from eduverse.schemas.progress import (
    CertificateOut,
    CertificateVerification,
    Dashboard,
    DashboardEntry
)


router = APIRouter()


def _certificate_out(manager: StateManager, certificate: Certificate, secret_key: str) -> CertificateOut:
    course = manager.get_course(certificate.course_id)
    return CertificateOut(
        certificate=certificate,
        course_title=course.title if course else None,
        verification_token=create_certificate_token(
            certificate.id, certificate.user_id, certificate.course_id, secret_key
        )
    )


@router.get("/dashboard", response_model=Dashboard)
async def get_dashboard(
    current_user: User = Depends(get_current_user),
    manager: StateManager = Depends(get_state_manager),
    catalog: CatalogService = Depends(get_catalog),
    secret_key: str = Depends(get_secret_key)
) -> Dashboard:
    """
    Get the user's enrolled courses with progress, certificates and unread count.
    """
    certificates = catalog.certificates_for(current_user)
    certified_courses = {c.course_id for c in certificates}

    entries = [
        DashboardEntry(
            course_id=course.id,
            course_title=course.title,
            category=course.category,
            enrollment=enrollment,
            has_certificate=course.id in certified_courses
        )
        for course, enrollment in catalog.enrolled_courses(current_user)
    ]

    return Dashboard(
        user=current_user,
        courses=entries,
        certificates=[_certificate_out(manager, c, secret_key) for c in certificates],
        unread_notifications=len(catalog.notifications_for(current_user, unread_only=True))
    )


@router.get("/attempts", response_model=List[QuizAttempt])
async def list_attempts(
    quiz_id: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog)
) -> List[QuizAttempt]:
    """
    The user's quiz attempts in submission order.
    """
    return catalog.attempts_for(current_user, quiz_id)


@router.get("/certificates", response_model=List[CertificateOut])
async def list_certificates(
    current_user: User = Depends(get_current_user),
    manager: StateManager = Depends(get_state_manager),
    catalog: CatalogService = Depends(get_catalog),
    secret_key: str = Depends(get_secret_key)
) -> List[CertificateOut]:
    """
    The user's certificates with verification tokens.
    """
    return [_certificate_out(manager, c, secret_key) for c in catalog.certificates_for(current_user)]


@router.get("/certificates/{certificate_id}", response_model=CertificateOut)
async def get_certificate(
    certificate_id: str,
    current_user: User = Depends(get_current_user),
    manager: StateManager = Depends(get_state_manager),
    catalog: CatalogService = Depends(get_catalog),
    secret_key: str = Depends(get_secret_key)
) -> CertificateOut:
    """
    Get one of the user's certificates.
    """
    certificate = next(
        (c for c in catalog.certificates_for(current_user) if c.id == certificate_id),
        None
    )
    if certificate is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Certificate not found"
        )
    return _certificate_out(manager, certificate, secret_key)


@router.get("/verify", response_model=CertificateVerification)
async def verify_certificate(
    token: str = Query(..., min_length=1),
    manager: StateManager = Depends(get_state_manager),
    secret_key: str = Depends(get_secret_key)
) -> CertificateVerification:
    """
    Check a certificate verification token. No session needed.
    """
    claims = verify_certificate_token(token, secret_key)
    if claims is None:
        return CertificateVerification(valid=False)

    certificate = next(
        (c for c in manager.certificates if c.id == claims["certificate_id"]),
        None
    )
    if (
        certificate is None
        or certificate.user_id != claims["user_id"]
        or certificate.course_id != claims["course_id"]
    ):
        return CertificateVerification(valid=False)

    return CertificateVerification(
        valid=True,
        certificate_id=certificate.id,
        user_id=certificate.user_id,
        course_id=certificate.course_id,
        issue_date=certificate.issue_date
    )
