"""
Inventory API: Authorization Dependency
=========================================

What:  Guards every protected route with a bearer token check.
How:   A FastAPI dependency attached at router level
       (`APIRouter(dependencies=[Depends(require_user)])`), so it runs before
       the handler and any failure short-circuits with 401.
Who:   The kategori, produk and stok routers, and /api/auth/logout and /me.

Outcomes:
    No Authorization header             → 401 "Token tidak ditemukan"
    Scheme other than Bearer, no token  → 401 "Token tidak ditemukan"
    Bad signature / expired / garbage   → 401 "Token tidak valid"
    Valid token                         → AuthenticatedUser on request.state.user

There are no roles: any valid token grants access to every protected route.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.exceptions import AuthenticationError
from app.services.token_service import TokenService, get_token_service

logger = logging.getLogger(__name__)

# auto_error=False: missing/malformed headers raise our AuthenticationError
# (401 with the standard error body) instead of FastAPI's own response
bearer_scheme = HTTPBearer(
    auto_error=False,
    description="Token from POST /api/auth/login",
)


@dataclass(frozen=True)
class AuthenticatedUser:
    id_user: int
    email: str


async def require_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> AuthenticatedUser:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(message="Token tidak ditemukan")

    payload = tokens.verify(credentials.credentials)

    user = AuthenticatedUser(id_user=payload.id_user, email=payload.email)
    request.state.user = user
    logger.debug("Authenticated id_user=%d for %s", user.id_user, request.url.path)
    return user
