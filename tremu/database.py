"""
Tremu Backend — Database Session Management
=============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine with connection pooling, provides a session
       dependency that commits on success and rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Transaction boundary:
    Every request runs inside exactly one transaction. Services only
    ``flush()``; the commit happens in ``get_db_session`` after the handler
    returns. A multi-row reorder (primary row + sibling renumbering) is
    therefore either fully committed or fully rolled back.

    Routes declare ``Depends(get_db_session, scope="function")`` so the
    commit finishes before the response is sent. A failed commit
    reaches the SQLAlchemyError handler and the client gets a 500.
"""

from contextlib import contextmanager
from typing import AsyncGenerator, Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from tremu.config import settings
from tremu.exceptions import DatabaseError


def _engine_options() -> dict:
    """Pool options for server databases; SQLite pools take no sizing args."""
    options = {"echo": settings.log_level == "DEBUG"}
    if settings.is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
        return options
    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
    )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit without a
# lazy reload (which is not allowed on an AsyncSession)
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models and Alembic.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction (before the response is sent
           when declared with scope="function")
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@contextmanager
def persistence_errors(action: str) -> Iterator[None]:
    """
    Translate SQLAlchemy failures into DatabaseError for the error handlers.

    Usage:
        with persistence_errors("creating a board"):
            db.add(board)
            await db.flush()
    """
    try:
        yield
    except SQLAlchemyError as e:
        raise DatabaseError(
            message=f"An error occurred while {action}",
            context={"original_error": str(e)},
        ) from e


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Closes all pooled connections. Called from the app lifespan on shutdown."""
    await engine.dispose()
