"""
Pydantic Schemas Package

This package contains Pydantic view models handed to the templates.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Control: Templates see exactly the fields a page needs
2. Decoupling: Record references are resolved into nested schemas
   (a book's author, a copy's book) instead of traversing the database
3. Safety: Views are built after the session is closed

Schema Naming Convention:
- XxxSummary: Fields shown in lists and as an attached reference
- XxxDetail: Every field, for detail and update pages
"""

from app.schemas.author import AuthorDetail, AuthorSummary
from app.schemas.book import BookDetail, BookSummary
from app.schemas.bookinstance import (
    BookInstanceDetail,
    BookInstanceSummary,
    CatalogCounts,
)
from app.schemas.genre import GenreSummary

__all__ = [
    # Author schemas
    "AuthorSummary",
    "AuthorDetail",
    # Genre schemas
    "GenreSummary",
    # Book schemas
    "BookSummary",
    "BookDetail",
    # BookInstance schemas
    "BookInstanceSummary",
    "BookInstanceDetail",
    "CatalogCounts",
]
