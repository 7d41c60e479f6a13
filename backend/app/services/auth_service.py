"""
Inventory API: Auth Service
=============================

What:  Registration, login and current-user lookup against tbl_user.
Who:   Called by the /api/auth route handlers.

Password handling:
    passlib CryptContext with the bcrypt scheme at cost factor 10. Hashing
    and verification are CPU-bound (tens of milliseconds each), so they run
    in Starlette's threadpool instead of on the event loop.

Login failure:
    Unknown email and wrong password produce the same AuthenticationError.
    For an unknown email a dummy verification still runs, so both paths take
    about the same time.
"""

import logging

from passlib.context import CryptContext
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.exceptions import AuthenticationError, ConflictError, DatabaseError, NotFoundError
from app.models.user import User
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserPublic,
)
from app.services.token_service import TokenService

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)

EMAIL_TAKEN_MESSAGE = "Email sudah terdaftar"
BAD_CREDENTIALS_MESSAGE = "Email atau password salah"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """
    Stateless: every call receives its session (and token service) from the
    route, so one instance serves all requests.
    """

    async def _find_by_email(self, db: AsyncSession, email: str):
        result = await db.execute(
            select(User).where(func.lower(User.email) == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def register(self, db: AsyncSession, payload: RegisterRequest) -> RegisterResponse:
        """
        Creates an account.

        Raises:
            ConflictError: the email is already registered (also when a
                concurrent registration wins the unique index)
            DatabaseError: any other store failure
        """
        email = normalize_email(payload.email)
        try:
            if await self._find_by_email(db, email) is not None:
                raise ConflictError(message=EMAIL_TAKEN_MESSAGE, context={"email": email})

            hashed = await run_in_threadpool(hash_password, payload.password)
            user = User(nama_user=payload.nama_user, email=email, password=hashed)
            db.add(user)
            await db.flush()
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            raise ConflictError(message=EMAIL_TAKEN_MESSAGE, context={"email": email}) from e
        except SQLAlchemyError as e:
            logger.error("Database error registering %s: %s", email, str(e), exc_info=True)
            raise DatabaseError(context={"operation": "register"}) from e

        logger.info("User registered: id_user=%d", user.id_user)
        return RegisterResponse(id_user=user.id_user)

    async def login(
        self,
        db: AsyncSession,
        payload: LoginRequest,
        tokens: TokenService,
    ) -> LoginResponse:
        """
        Verifies credentials and issues a 24-hour token.

        Raises:
            AuthenticationError: unknown email or wrong password (same message)
            DatabaseError: the lookup failed
        """
        try:
            user = await self._find_by_email(db, payload.email)
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "login"}) from e

        if user is None:
            await run_in_threadpool(pwd_context.dummy_verify)
            raise AuthenticationError(message=BAD_CREDENTIALS_MESSAGE)

        if not await run_in_threadpool(verify_password, payload.password, user.password):
            logger.info("Login failed for id_user=%d", user.id_user)
            raise AuthenticationError(message=BAD_CREDENTIALS_MESSAGE)

        token = tokens.issue(user.id_user, user.email)
        logger.info("Login succeeded for id_user=%d", user.id_user)
        return LoginResponse(token=token, user=UserPublic.model_validate(user))

    async def get_user(self, db: AsyncSession, id_user: int) -> UserPublic:
        """Public projection of one user; NotFoundError when the row is gone."""
        try:
            user = await db.get(User, id_user)
        except SQLAlchemyError as e:
            logger.error("Database error fetching user %d: %s", id_user, str(e))
            raise DatabaseError(context={"id_user": id_user}) from e

        if user is None:
            raise NotFoundError(resource="User", resource_id=id_user)
        return UserPublic.model_validate(user)


auth_service = AuthService()
