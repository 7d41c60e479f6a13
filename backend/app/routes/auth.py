"""
Inventory API: Auth Route Handlers
====================================

What:  POST /api/auth/register, POST /api/auth/login, POST /api/auth/logout,
       GET /api/auth/me.
How:   Thin handlers: parse the JSON body, delegate to AuthService, return
       the response model. Errors propagate to the global handlers.
Who:   Any client; logout and me need a bearer token.

Logout is stateless. The server keeps no session, so it only acknowledges
the call; the client discards its token.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import AuthenticationError, NotFoundError
from app.middleware.auth import AuthenticatedUser, require_user
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserPublic,
)
from app.schemas.common import ErrorResponse, MessageResponse
from app.services.auth_service import auth_service
from app.services.token_service import TokenService, get_token_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid body or email taken", "model": ErrorResponse}},
    summary="Register a new user",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> RegisterResponse:
    return await auth_service.register(db, payload)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"description": "Wrong email or password", "model": ErrorResponse}},
    summary="Exchange credentials for a bearer token",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    tokens: TokenService = Depends(get_token_service),
) -> LoginResponse:
    return await auth_service.login(db, payload, tokens)


@router.post(
    "/logout",
    response_model=MessageResponse,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Acknowledge logout",
)
async def logout(user: AuthenticatedUser = Depends(require_user)) -> MessageResponse:
    logger.info("Logout: id_user=%d", user.id_user)
    return MessageResponse(message="Logout berhasil")


@router.get(
    "/me",
    response_model=UserPublic,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Current user",
)
async def me(
    user: AuthenticatedUser = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserPublic:
    """
    Returns the token holder's public profile.

    A token that outlives its user (account row deleted) is treated as
    invalid rather than as a missing resource.
    """
    try:
        return await auth_service.get_user(db, user.id_user)
    except NotFoundError as e:
        raise AuthenticationError(message="Token tidak valid") from e
