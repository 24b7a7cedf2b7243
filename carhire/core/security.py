"""
Admin token verification.

Users sign in on the hosted auth platform, which issues HS256 JWTs signed
with the shared ``jwt_secret``.  Back-office endpoints only accept tokens
whose ``role`` claim is ``admin``.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from carhire.core.config import settings

ADMIN_ROLE = "admin"


def decode_token(token: str) -> dict:
    """Decode and verify a JWT.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired.
        jwt.InvalidTokenError: If the token is otherwise invalid.
    """
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
    )


def verify_admin_token(token: str) -> str:
    """Return the admin's subject, or raise ``ValueError``."""
    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError:
        raise ValueError("Access token has expired.")
    except jwt.InvalidTokenError:
        raise ValueError("Invalid access token.")

    if payload.get("role") != ADMIN_ROLE:
        raise ValueError("Administrator access required.")
    subject = payload.get("sub")
    if not subject:
        raise ValueError("Invalid access token: missing subject.")
    return str(subject)


def create_admin_token(subject: str, expires_in: timedelta = timedelta(hours=1)) -> str:
    """Issue an admin token (used by scripts and tests)."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "role": ADMIN_ROLE,
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
