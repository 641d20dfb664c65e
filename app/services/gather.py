"""
Concurrent Read Service

Many pages need several independent lookups: an author and that author's
books, a book plus its copies, every count on the landing page. These are
issued at the same time and joined before rendering.

HOW IT WORKS
============
Each branch is a plain function taking a SQLAlchemy Session:

    def books_by_author(db: Session, author_id: str) -> list[Book]: ...

gather() opens one session per branch and runs every branch in
Starlette's threadpool, then waits for all of them with asyncio.gather.
The join is "all must succeed": the first exception propagates to the
caller and the results of the other branches are discarded.

    results = await gather(
        sessions,
        author=partial(catalog.get_author, author_id=author_id),
        author_books=partial(catalog.books_by_author, author_id=author_id),
    )
    results["author"], results["author_books"]
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _in_session(sessions: sessionmaker, fn: Callable[[Session], T]) -> T:
    with sessions() as db:
        return fn(db)


async def run_query(sessions: sessionmaker, fn: Callable[[Session], T]) -> T:
    """
    Run one unit of work in its own session without blocking the event loop.

    Args:
        sessions: Session factory (see app.database.get_session_factory)
        fn: Function receiving the session; its return value is passed through

    Returns:
        Whatever fn returns
    """
    return await run_in_threadpool(_in_session, sessions, fn)


async def gather(sessions: sessionmaker, **branches: Callable[[Session], Any]) -> dict[str, Any]:
    """
    Run independent reads concurrently and join on all of them.

    Args:
        sessions: Session factory
        **branches: Named functions, each receiving its own session

    Returns:
        Dict mapping each branch name to its result

    Raises:
        Exception: The first failure among the branches
    """
    tasks = [
        asyncio.ensure_future(run_query(sessions, fn))
        for fn in branches.values()
    ]
    try:
        results = await asyncio.gather(*tasks)
    except Exception:
        for task in tasks:
            task.cancel()
        logger.debug(f"Concurrent read failed ({', '.join(branches)})")
        raise
    return dict(zip(branches, results))
