"""
SQLAlchemy Models Package

This package contains all database models for the library catalog.

Record References:
- Book -> Author: Book.author_id (exactly one)
- Book -> Genre: book_genres association rows (zero or more, ordered)
- BookInstance -> Book: BookInstance.book_id (exactly one)

References are identifiers only; they are resolved by explicit lookups.

Import all models here to:
1. Make them available as: from app.models import Book, Author, Genre
2. Ensure Alembic discovers them for migrations
"""

from app.models.author import Author
from app.models.genre import Genre
from app.models.book import Book, book_genres
from app.models.bookinstance import BookInstance, BookInstanceStatus

__all__ = [
    "Author",
    "Genre",
    "Book",
    "book_genres",
    "BookInstance",
    "BookInstanceStatus",
]
