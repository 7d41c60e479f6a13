"""
Inventory API: Access Token Issuer/Verifier
=============================================

What:  Creates and verifies signed, time-limited bearer tokens.
How:   HS256 JWTs via python-jose. Claims: id_user, email, iat, exp.
Who:   AuthService issues tokens at login; the auth dependency verifies them
       on every protected request.

There is no session store: a token stays valid until `exp` even after
logout. No refresh tokens, no revocation list, no key rotation.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request
from jose import JWTError, jwt

from app.config import Settings
from app.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenPayload:
    id_user: int
    email: str
    expires_at: datetime


class TokenService:
    def __init__(self, secret: str, algorithm: str = "HS256", expire_hours: int = 24):
        self._secret = secret
        self.algorithm = algorithm
        self.expire_delta = timedelta(hours=expire_hours)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expire_hours=settings.jwt_expire_hours,
        )

    def issue(self, id_user: int, email: str, now: Optional[datetime] = None) -> str:
        """Signs a token for the given user that expires expire_delta from now."""
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "id_user": id_user,
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.expire_delta,
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenPayload:
        """
        Validates signature and expiry and returns the embedded identity.

        Raises:
            AuthenticationError for a bad signature, an expired token, a
            malformed token, or a payload without id_user/email.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require_exp": True},
            )
        except JWTError as e:
            logger.info("Token rejected: %s", str(e))
            raise AuthenticationError(message="Token tidak valid") from e

        id_user = payload.get("id_user")
        email = payload.get("email")
        # bool is an int subclass; a True id is not an id
        if not isinstance(id_user, int) or isinstance(id_user, bool) or not isinstance(email, str):
            logger.info("Token rejected: missing identity claims")
            raise AuthenticationError(message="Token tidak valid")

        return TokenPayload(
            id_user=id_user,
            email=email,
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )


def get_token_service(request: Request) -> TokenService:
    """FastAPI dependency: the TokenService built by create_app()."""
    return request.app.state.token_service
