"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle, and tests replace
them through app.dependency_overrides.

Instead of writing:
    async def author_list(sessions: sessionmaker = Depends(get_session_factory)):

You can write:
    async def author_list(sessions: Sessions):
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import sessionmaker

from app.database import get_session_factory

Sessions = Annotated[sessionmaker, Depends(get_session_factory)]
