"""
Security utilities for EduVerse.

Handles signed certificate verification tokens. A token lets anyone holding
it confirm that a certificate was issued by this installation, so the
signing key has to outlive the process: unless SECRET_KEY is configured, a
generated key is kept in the store.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
import logging
import secrets

from .config import settings
from .store import BaseStore


logger = logging.getLogger(__name__)

CERTIFICATE_TOKEN_TYPE = "certificate"
SECRET_KEY_NAME = "secret_key"


def load_secret_key(store: BaseStore, key_prefix: str = "") -> str:
    """
    Get the signing key.

    Args:
        store: Store holding the generated key
        key_prefix: Prefix for the storage key

    Returns:
        str: SECRET_KEY when configured, else the stored key (generated and
        saved on first use)
    """
    if settings.SECRET_KEY:
        return settings.SECRET_KEY

    slot = store.slot(f"{key_prefix}{SECRET_KEY_NAME}")
    secret_key = slot.get()
    if not secret_key:
        secret_key = secrets.token_urlsafe(32)
        slot.set(secret_key)
        logger.info("Generated a new certificate signing key")
    return secret_key


def create_token(
    subject: str,
    secret_key: str,
    expires_delta: Optional[timedelta] = None,
    additional_claims: Optional[Dict[str, Any]] = None
) -> str:
    """
    Create a signed JWT.

    Args:
        subject: The subject of the token
        secret_key: Signing key
        expires_delta: Optional custom expiration time
        additional_claims: Optional additional claims to include in the token

    Returns:
        str: The encoded JWT token
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.CERTIFICATE_TOKEN_EXPIRE_DAYS)

    to_encode: Dict[str, Any] = {"sub": subject, "exp": now + expires_delta, "iat": now}

    # Add additional claims if provided
    if additional_claims:
        to_encode.update(additional_claims)

    return jwt.encode(
        to_encode,
        secret_key,
        algorithm=settings.ALGORITHM
    )


def verify_token(token: str, secret_key: str) -> Optional[Dict[str, Any]]:
    """
    Verify and decode a JWT token.

    Args:
        token: The JWT token to verify
        secret_key: Key the token must be signed with

    Returns:
        Optional[Dict[str, Any]]: The decoded token payload if valid, None otherwise
    """
    try:
        return jwt.decode(
            token,
            secret_key,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None


def create_certificate_token(
    certificate_id: str,
    user_id: str,
    course_id: str,
    secret_key: str
) -> str:
    """
    Create a verification token for an issued certificate.

    Args:
        certificate_id: The certificate being vouched for
        user_id: Holder of the certificate
        course_id: Course the certificate was issued for
        secret_key: Signing key

    Returns:
        str: The verification token
    """
    return create_token(
        subject=certificate_id,
        secret_key=secret_key,
        additional_claims={
            "type": CERTIFICATE_TOKEN_TYPE,
            "user_id": user_id,
            "course_id": course_id,
        }
    )


def verify_certificate_token(token: str, secret_key: str) -> Optional[Dict[str, str]]:
    """
    Verify a certificate verification token.

    Returns:
        Optional[Dict[str, str]]: certificate_id, user_id and course_id if valid
    """
    payload = verify_token(token, secret_key)
    if not payload or payload.get("type") != CERTIFICATE_TOKEN_TYPE:
        return None
    return {
        "certificate_id": payload.get("sub"),
        "user_id": payload.get("user_id"),
        "course_id": payload.get("course_id"),
    }
