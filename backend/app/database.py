"""
Inventory API: Database Session Management
============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   A `Database` object owns the engine (and with it the connection pool).
       The app factory constructs one from Settings and stores it on
       `app.state.database`; the per-request dependency reads it from there.
       Nothing in this module opens a connection at import time.
Who:   Route handlers via FastAPI's dependency injection; tests construct
       their own Database against SQLite.

Transactions:
    Each request gets one session. Services commit their own writes, so a
    multi-statement write (product + initial stock, product + its stock rows)
    is a single transaction. Any exception rolls the session back before it
    is closed.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, used by Alembic for migrations and by
    Database.create_all() for local bootstrap and tests.
    """
    pass


class Database:
    """
    Explicitly constructed database client.

    Pool settings only apply to server databases; SQLite engines use the
    dialect's default pool.
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        engine_kwargs = {"echo": echo, "pool_pre_ping": pool_pre_ping}
        if not url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

        # expire_on_commit=False: attributes stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.sqlalchemy_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    async def create_all(self) -> None:
        """Creates every table known to Base.metadata (tests, local bootstrap)."""
        # Import for side effects: registers the models on Base.metadata
        from app.models import category, product, stock, user  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Runs SELECT 1; returns False instead of raising when unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Closes all pooled connections (application shutdown)."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Looks up the Database on app.state
        2. Yields a new session to the route handler
        3. On error: rolls back, then re-raises for the global handlers
        4. On success: commits anything a service left pending
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/kategori")
        async def list_categories(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
