"""Database Session Manager — async engine, per-request sessions, failure mapping.

Invariants:
    - A session that sees any exception is rolled back before it is closed
    - Quiz errors (SongQuizError) propagate unchanged after the rollback
    - Every SQLAlchemyError leaves this module as DatabaseError (503), never raw
    - PostgreSQL connections are pre-pinged and recycled hourly

Design Decisions:
    - Module-level db_manager set by init_db() in the FastAPI lifespan; tests
      swap it for one bound to their in-memory engine
    - expire_on_commit=False: handlers build records from rows after commit,
      and async sessions cannot lazy-load expired attributes
    - SQLite URLs get no pool sizing: aiosqlite picks its own pool class
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from songquiz.core.errors import DatabaseError, SongQuizError

logger = logging.getLogger(__name__)


# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_FAILURE_KINDS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)


def to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    """Classify a SQLAlchemy failure without leaking driver text to clients."""
    for kind, message, operation in _FAILURE_KINDS:
        if isinstance(exc, kind):
            return DatabaseError(message, operation)
    return DatabaseError("Database operation failed", "unknown")


def _engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that clean up after themselves."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        echo: bool = False,
    ):
        self.engine = create_async_engine(
            database_url,
            echo=echo,
            **_engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SongQuizError:
            await session.rollback()
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            error = to_database_error(e)
            logger.error(
                f"{error.message} ({type(e).__name__}: {e})",
                extra={"error_code": error.code.value},
            )
            raise error from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query round-trips (readiness check)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> None:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
