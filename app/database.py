"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the library catalog.

Session Management Pattern
==========================
We use the "session per unit of work" pattern:
1. A request asks for the session factory (a FastAPI dependency)
2. Each independent read or write opens its own session from the factory
3. The session commits (writes) or is just closed (reads) when the work ends

One session per unit of work is what lets a single page issue several
independent reads at the same time: SQLAlchemy sessions must never be
shared between threads.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# Key parameters:
# - pool_size: Number of connections to keep open permanently
# - max_overflow: How many extra connections can be created during high load
# - pool_pre_ping: Test connection health before using (prevents stale connections)
# - echo: Log all SQL statements (useful for debugging, disable in production)

engine = create_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=True,
    echo=settings.debug,
)


# =============================================================================
# Session Factory
# =============================================================================
# - autoflush=False: Don't auto-flush before queries (more predictable behavior)
# - expire_on_commit=False: Records stay readable after the session commits,
#   so a view model can be built from them once the session is closed

SessionLocal = sessionmaker(
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover the catalog tables.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_session_factory() -> sessionmaker:
    """
    Session factory dependency for FastAPI.

    Routes never hold a session themselves. They hand the factory to
    app.services.gather, which opens one session per unit of work.
    Tests override this dependency to point at a throwaway database.

    Usage in Routes:
        from app.dependencies import Sessions

        @router.get("/authors")
        async def author_list(request: Request, sessions: Sessions):
            authors = await run_query(sessions, catalog.list_authors)

    Returns:
        The application sessionmaker
    """
    return SessionLocal


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    Useful for development and the seed script.
    In production, use Alembic migrations instead!
    """
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Only use in development.
    """
    Base.metadata.drop_all(bind=engine)
