"""
Unit tests for bearer token handling and identity checks.
"""

from datetime import timedelta

import jwt
import pytest

from careercoach.core.exceptions import UnauthorizedError
from careercoach.core.security import (
    Identity,
    create_access_token,
    identity_from_claims,
    require_identity,
    verify_token,
)


class TestTokens:
    """Test suite for JWT creation and verification."""

    def test_round_trip(self, test_settings):
        token = create_access_token({"sub": "user_1", "email": "a@example.com"}, test_settings)

        claims = verify_token(token, test_settings)

        assert claims["sub"] == "user_1"
        assert claims["email"] == "a@example.com"

    def test_expired_token_rejected(self, test_settings):
        token = create_access_token({"sub": "user_1"}, test_settings, expires_delta=timedelta(seconds=-1))
        assert verify_token(token, test_settings) is None

    def test_wrong_key_rejected(self, test_settings):
        token = jwt.encode({"sub": "user_1"}, "another-key", algorithm="HS256")
        assert verify_token(token, test_settings) is None

    def test_garbage_rejected(self, test_settings):
        assert verify_token("not-a-token", test_settings) is None


class TestIdentity:

    def test_identity_from_claims(self):
        identity = identity_from_claims(
            {"sub": "user_1", "email": "a@example.com", "name": "A", "picture": "https://img.test/a.png"}
        )
        assert identity == Identity(
            subject="user_1", email="a@example.com", name="A", image_url="https://img.test/a.png"
        )

    def test_claims_without_subject(self):
        assert identity_from_claims({"email": "a@example.com"}) is None

    def test_require_identity(self):
        identity = Identity(subject="user_1")
        assert require_identity(identity) is identity
        with pytest.raises(UnauthorizedError):
            require_identity(None)
