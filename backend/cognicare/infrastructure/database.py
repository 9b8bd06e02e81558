"""Database Session Manager — async connection pool, stored-function execution and driver error mapping.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - Driver errors reaching a repository become DatabaseError carrying SQLSTATE, message and detail
    - fetch_all/fetch_one return plain dicts keyed by the column names PostgreSQL reports

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Raw text() statements over ORM models: every operation is a call to a CC.* function or view
      whose tables this service does not own
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause

from cognicare.core.errors import DatabaseError, DatabaseUnavailableError

logger = logging.getLogger(__name__)

_UNAVAILABLE_MESSAGE = "La base de datos no está disponible en este momento."


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Request-scoped session; anything raised inside rolls the transaction back.

        Repositories already translate statement failures; what reaches this
        block is a failure at commit or connection level.
        """
        session = self._session_factory()
        try:
            yield session
        except DBAPIError as e:
            await session.rollback()
            if e.connection_invalidated:
                logger.error(f"Lost database connection: {e}")
                raise DatabaseUnavailableError(_UNAVAILABLE_MESSAGE) from e
            logger.error(f"Database error outside a repository call: {e}")
            raise to_database_error(e, "session") from e
        except SQLAlchemyError:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """SELECT 1 through the pool (readiness probe)."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def close_db() -> None:
    global db_manager
    if db_manager:
        await db_manager.dispose()
    db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session


# ─── Driver error mapping ───────────────────────────────────────

def extract_pg_error(exc: DBAPIError) -> tuple[str | None, str, str | None]:
    """(sqlstate, message, detail) from a DBAPIError raised through asyncpg.

    SQLAlchemy wraps the asyncpg exception; the original is chained as
    ``exc.orig.__cause__`` and exposes ``sqlstate``, ``message`` and ``detail``.
    """
    orig = exc.orig
    cause = getattr(orig, "__cause__", None)
    sqlstate = (
        getattr(orig, "sqlstate", None)
        or getattr(orig, "pgcode", None)
        or getattr(cause, "sqlstate", None)
    )
    message = getattr(cause, "message", None) or str(orig or exc)
    detail = getattr(cause, "detail", None)
    return sqlstate, message, detail


def to_database_error(exc: DBAPIError, operation: str) -> DatabaseError:
    sqlstate, message, detail = extract_pg_error(exc)
    return DatabaseError(message, operation, sqlstate=sqlstate, detail=detail)


# ─── Statement helpers used by repositories ─────────────────────

async def _execute(
    db: AsyncSession, statement: TextClause, params: dict[str, Any],
    operation: str, commit: bool,
):
    try:
        result = await db.execute(statement, params)
        if commit:
            await db.commit()
        return result
    except DBAPIError as e:
        await db.rollback()
        if e.connection_invalidated:
            logger.error(f"{operation} failed, connection lost: {e}", extra={"operation": operation})
            raise DatabaseUnavailableError(_UNAVAILABLE_MESSAGE) from e
        error = to_database_error(e, operation)
        logger.error(
            f"{operation} failed: {error.message}",
            extra={"error_code": error.sqlstate, "operation": operation},
        )
        raise error from e


async def fetch_all(
    db: AsyncSession, statement: TextClause, params: dict[str, Any] | None = None,
    *, operation: str, commit: bool = False,
) -> list[dict[str, Any]]:
    """Run a statement and return every row as a dict."""
    result = await _execute(db, statement, params or {}, operation, commit)
    return [dict(row) for row in result.mappings().all()]


async def fetch_one(
    db: AsyncSession, statement: TextClause, params: dict[str, Any] | None = None,
    *, operation: str, commit: bool = False,
) -> dict[str, Any] | None:
    """First row as a dict, or None. Stored functions return at most one row."""
    rows = await fetch_all(
        db, statement, params, operation=operation, commit=commit,
    )
    return rows[0] if rows else None


async def fetch_scalar(
    db: AsyncSession, statement: TextClause, params: dict[str, Any] | None = None,
    *, operation: str, commit: bool = False,
) -> Any:
    result = await _execute(db, statement, params or {}, operation, commit)
    return result.scalar_one_or_none()
