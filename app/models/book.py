"""
Book Model

The central model of the catalog.

This file also contains the association table linking books to genres.

WHY plain identifier columns?
=============================
A book references exactly one author (author_id) and any number of genres
(book_genres rows). These are stored as identifiers only. Pages resolve them
with an explicit "fetch by id, then attach" step in app.services.catalog,
so a reference that no longer resolves simply shows up as missing.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.utils import new_id


# =============================================================================
# Association Table
# =============================================================================
# position keeps the genres in the order they were submitted.

book_genres = Table(
    "book_genres",
    Base.metadata,
    Column(
        "book_id",
        String(32),
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("genre_id", String(32), primary_key=True, index=True),
    Column("position", Integer, nullable=False, default=0),
    comment="Association table linking books to their genres",
)


class Book(Base):
    """
    Book model representing titles in the library.

    Table: books

    Fields:
    - title: Book title (required)
    - summary: Short description (required)
    - isbn: International Standard Book Number, stored as free text (required)
    - author_id: Identifier of the book's Author (required)

    Example:
        book = Book(
            title="The Name of the Wind",
            summary="I have stolen princesses back from sleeping barrow kings...",
            isbn="9781473211896",
            author_id=author.id,
        )
    """

    __tablename__ = "books"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)

    title: Mapped[str] = mapped_column(
        Text,
        index=True,
        nullable=False,
        comment="Book title"
    )

    summary: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Book summary"
    )

    isbn: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="International Standard Book Number"
    )

    author_id: Mapped[str] = mapped_column(
        String(32),
        index=True,
        nullable=False,
        comment="Identifier of the book's author"
    )

    @property
    def url(self) -> str:
        return f"/catalog/books/{self.id}"

    def __repr__(self) -> str:
        return f"Book(id='{self.id}', title='{self.title}', isbn='{self.isbn}')"
