"""
Inventory API: Token Service Unit Tests
=========================================

What:  Tests for issuing and verifying bearer tokens.
How:   Real HS256 signing with a test secret; no HTTP involved.
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.exceptions import AuthenticationError
from app.services.token_service import TokenService

SECRET = "unit-test-secret-0123456789"


class TestTokenService:

    def setup_method(self):
        self.tokens = TokenService(secret=SECRET, expire_hours=24)

    def test_issue_and_verify(self):
        token = self.tokens.issue(7, "user@example.com")

        payload = self.tokens.verify(token)

        assert payload.id_user == 7
        assert payload.email == "user@example.com"

    def test_expiry_is_24_hours_after_issue(self):
        issued = datetime(2024, 6, 10, 9, 0, tzinfo=timezone.utc)
        token = self.tokens.issue(1, "a@example.com", now=issued)

        claims = jwt.get_unverified_claims(token)

        assert claims["exp"] - claims["iat"] == 24 * 3600

    def test_expired_token_rejected(self):
        token = self.tokens.issue(
            1, "a@example.com", now=datetime.now(timezone.utc) - timedelta(hours=25)
        )
        with pytest.raises(AuthenticationError, match="Token tidak valid"):
            self.tokens.verify(token)

    def test_wrong_secret_rejected(self):
        other = TokenService(secret="another-secret-0123456789")
        token = other.issue(1, "a@example.com")

        with pytest.raises(AuthenticationError):
            self.tokens.verify(token)

    def test_garbage_rejected(self):
        with pytest.raises(AuthenticationError):
            self.tokens.verify("not-a-token")

    def test_missing_exp_rejected(self):
        token = jwt.encode({"id_user": 1, "email": "a@example.com"}, SECRET, algorithm="HS256")

        with pytest.raises(AuthenticationError):
            self.tokens.verify(token)

    @pytest.mark.parametrize(
        "claims",
        [
            {"email": "a@example.com"},
            {"id_user": 1},
            {"id_user": "1", "email": "a@example.com"},
            {"id_user": True, "email": "a@example.com"},
        ],
    )
    def test_missing_or_malformed_identity_rejected(self, claims):
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({**claims, "exp": exp}, SECRET, algorithm="HS256")

        with pytest.raises(AuthenticationError):
            self.tokens.verify(token)
