"""Unit tests for admin token verification."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from carhire.core.config import settings
from carhire.core.security import create_admin_token, verify_admin_token


def _token(payload: dict, secret: str = None) -> str:
    return jwt.encode(payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


class TestVerifyAdminToken:

    def test_admin_token_returns_subject(self):
        assert verify_admin_token(create_admin_token("admin-1")) == "admin-1"

    def test_non_admin_role_rejected(self):
        token = _token({"sub": "user-1", "role": "customer"})
        with pytest.raises(ValueError, match="Administrator access required"):
            verify_admin_token(token)

    def test_expired_token_rejected(self):
        token = create_admin_token("admin-1", expires_in=timedelta(seconds=-10))
        with pytest.raises(ValueError, match="expired"):
            verify_admin_token(token)

    def test_wrong_secret_rejected(self):
        token = _token({"sub": "admin-1", "role": "admin"}, secret="a-different-secret-of-sufficient-length")
        with pytest.raises(ValueError, match="Invalid access token"):
            verify_admin_token(token)

    def test_missing_subject_rejected(self):
        token = _token({"role": "admin", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)})
        with pytest.raises(ValueError, match="missing subject"):
            verify_admin_token(token)
