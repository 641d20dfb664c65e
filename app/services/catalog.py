"""
Catalog Queries and Writes

Every function here takes a SQLAlchemy Session as its first argument and does
one unit of work, so it can be used directly as a branch of
app.services.gather.gather() or with run_query().

Record references are resolved explicitly:
1. load the records that hold the identifiers (books, copies)
2. fetch the referenced records by id in one query
3. attach them to the view schemas (missing ids attach as None)

Reads return view schemas from app.schemas, never live ORM objects.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any, TypeVar

from sqlalchemy import delete, func, insert, select
from sqlalchemy.orm import Session

from app.database import Base
from app.models import Author, Book, BookInstance, BookInstanceStatus, Genre, book_genres
from app.schemas import (
    AuthorDetail,
    AuthorSummary,
    BookDetail,
    BookInstanceDetail,
    BookInstanceSummary,
    BookSummary,
    GenreSummary,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


# =============================================================================
# Reference Resolution
# =============================================================================
def _by_id(db: Session, model: type[ModelT], ids: Sequence[str]) -> dict[str, ModelT]:
    """Fetch records of one kind by identifier, keyed by id."""
    wanted = set(ids)
    if not wanted:
        return {}
    rows = db.execute(select(model).where(model.id.in_(wanted))).scalars()
    return {row.id: row for row in rows}


def attach_authors(db: Session, books: Sequence[Book]) -> list[BookSummary]:
    """Build book summaries with each book's author attached."""
    authors = _by_id(db, Author, [b.author_id for b in books])
    summaries = []
    for book in books:
        author = authors.get(book.author_id)
        summaries.append(
            BookSummary.model_validate(book).model_copy(
                update={"author": AuthorSummary.model_validate(author) if author else None}
            )
        )
    return summaries


def genre_ids_of(db: Session, book_id: str) -> list[str]:
    """Genre identifiers of a book, in the order they were submitted."""
    stmt = (
        select(book_genres.c.genre_id)
        .where(book_genres.c.book_id == book_id)
        .order_by(book_genres.c.position)
    )
    return list(db.execute(stmt).scalars())


def attach_book_references(db: Session, book: Book) -> BookDetail:
    """Resolve a book's author and genres and build its detail schema."""
    genre_ids = genre_ids_of(db, book.id)
    genres = _by_id(db, Genre, genre_ids)
    summary = attach_authors(db, [book])[0]
    return BookDetail.model_validate(book).model_copy(
        update={
            "author": summary.author,
            "genre_ids": genre_ids,
            "genres": [
                GenreSummary.model_validate(genres[gid]) for gid in genre_ids if gid in genres
            ],
        }
    )


def attach_books(db: Session, instances: Sequence[BookInstance]) -> list[BookInstanceSummary]:
    """Build copy summaries with each copy's book attached."""
    books = _by_id(db, Book, [i.book_id for i in instances])
    return [
        BookInstanceSummary.model_validate(instance).model_copy(
            update={
                "book": BookSummary.model_validate(books[instance.book_id])
                if instance.book_id in books
                else None
            }
        )
        for instance in instances
    ]


# =============================================================================
# Authors
# =============================================================================
def list_authors(db: Session) -> list[AuthorSummary]:
    stmt = select(Author).order_by(Author.family_name, Author.first_name)
    return [AuthorSummary.model_validate(a) for a in db.execute(stmt).scalars()]


def get_author(db: Session, author_id: str) -> AuthorDetail | None:
    author = db.get(Author, author_id)
    return AuthorDetail.model_validate(author) if author else None


def books_by_author(db: Session, author_id: str) -> list[BookSummary]:
    stmt = select(Book).where(Book.author_id == author_id).order_by(Book.title)
    return [BookSummary.model_validate(b) for b in db.execute(stmt).scalars()]


# =============================================================================
# Genres
# =============================================================================
def list_genres(db: Session) -> list[GenreSummary]:
    stmt = select(Genre).order_by(Genre.name)
    return [GenreSummary.model_validate(g) for g in db.execute(stmt).scalars()]


def get_genre(db: Session, genre_id: str) -> GenreSummary | None:
    genre = db.get(Genre, genre_id)
    return GenreSummary.model_validate(genre) if genre else None


def find_genre_by_name(db: Session, name: str) -> GenreSummary | None:
    """Exact, case-sensitive name lookup."""
    stmt = select(Genre).where(Genre.name == name).order_by(Genre.id).limit(1)
    genre = db.execute(stmt).scalar_one_or_none()
    return GenreSummary.model_validate(genre) if genre else None


def books_with_genre(db: Session, genre_id: str) -> list[BookSummary]:
    stmt = (
        select(Book)
        .join(book_genres, book_genres.c.book_id == Book.id)
        .where(book_genres.c.genre_id == genre_id)
        .order_by(Book.title)
    )
    return attach_authors(db, list(db.execute(stmt).scalars()))


# =============================================================================
# Books
# =============================================================================
def list_books(db: Session) -> list[BookSummary]:
    stmt = select(Book).order_by(Book.title)
    return attach_authors(db, list(db.execute(stmt).scalars()))


def get_book(db: Session, book_id: str) -> BookDetail | None:
    book = db.get(Book, book_id)
    return attach_book_references(db, book) if book else None


def instances_of_book(db: Session, book_id: str) -> list[BookInstanceSummary]:
    stmt = select(BookInstance).where(BookInstance.book_id == book_id).order_by(BookInstance.due_back)
    return [BookInstanceSummary.model_validate(i) for i in db.execute(stmt).scalars()]


# =============================================================================
# Book Instances
# =============================================================================
def list_book_instances(db: Session) -> list[BookInstanceSummary]:
    stmt = select(BookInstance).order_by(BookInstance.due_back)
    return attach_books(db, list(db.execute(stmt).scalars()))


def get_book_instance(db: Session, instance_id: str) -> BookInstanceDetail | None:
    instance = db.get(BookInstance, instance_id)
    if instance is None:
        return None
    summary = attach_books(db, [instance])[0]
    return BookInstanceDetail.model_validate(instance).model_copy(update={"book": summary.book})


# =============================================================================
# Counts
# =============================================================================
def count(db: Session, model: type[Base], **filters: Any) -> int:
    """Count records of one kind, optionally filtered by column equality."""
    stmt = select(func.count()).select_from(model).where(
        *(getattr(model, name) == value for name, value in filters.items())
    )
    return db.execute(stmt).scalar_one()


def count_branches() -> dict[str, Callable[[Session], int]]:
    """One gather branch per landing-page count, named as in CatalogCounts."""
    return {
        "book_count": lambda db: count(db, Book),
        "book_instance_count": lambda db: count(db, BookInstance),
        "book_instance_available_count": lambda db: count(
            db, BookInstance, status=BookInstanceStatus.AVAILABLE.value
        ),
        "author_count": lambda db: count(db, Author),
        "genre_count": lambda db: count(db, Genre),
    }


# =============================================================================
# Writes
# =============================================================================
def _save(db: Session, model: type[ModelT], fields: dict[str, Any], record_id: str | None) -> ModelT | None:
    """
    Insert a new record, or overwrite the record with the given id.

    Updates always name the record explicitly; a missing record is reported
    as None instead of being created.
    """
    if record_id is None:
        record = model(**fields)
        db.add(record)
    else:
        record = db.get(model, record_id)
        if record is None:
            return None
        for name, value in fields.items():
            setattr(record, name, value)
    db.flush()
    return record


def save_author(db: Session, values: dict[str, Any], author_id: str | None = None) -> AuthorDetail | None:
    author = _save(
        db,
        Author,
        {
            "first_name": values["first_name"],
            "family_name": values["family_name"],
            "date_of_birth": values.get("date_of_birth"),
            "date_of_death": values.get("date_of_death"),
        },
        author_id,
    )
    if author is None:
        return None
    db.commit()
    logger.info(f"Saved author {author.id}")
    return AuthorDetail.model_validate(author)


def save_genre(db: Session, values: dict[str, Any], genre_id: str | None = None) -> GenreSummary | None:
    genre = _save(db, Genre, {"name": values["name"]}, genre_id)
    if genre is None:
        return None
    db.commit()
    logger.info(f"Saved genre {genre.id}")
    return GenreSummary.model_validate(genre)


def save_book(db: Session, values: dict[str, Any], book_id: str | None = None) -> BookDetail | None:
    book = _save(
        db,
        Book,
        {
            "title": values["title"],
            "author_id": values["author"],
            "summary": values["summary"],
            "isbn": values["isbn"],
        },
        book_id,
    )
    if book is None:
        return None

    # Replace the genre links, keeping submission order and dropping repeats
    # and identifiers that do not resolve to a genre
    submitted = list(dict.fromkeys(values.get("genre") or []))
    known = _by_id(db, Genre, submitted)
    genre_ids = [gid for gid in submitted if gid in known]
    db.execute(delete(book_genres).where(book_genres.c.book_id == book.id))
    if genre_ids:
        db.execute(
            insert(book_genres),
            [
                {"book_id": book.id, "genre_id": gid, "position": position}
                for position, gid in enumerate(genre_ids)
            ],
        )
    db.commit()
    logger.info(f"Saved book {book.id} with {len(genre_ids)} genre(s)")
    return attach_book_references(db, book)


def save_book_instance(
    db: Session,
    values: dict[str, Any],
    instance_id: str | None = None,
) -> BookInstanceDetail | None:
    instance = _save(
        db,
        BookInstance,
        {
            "book_id": values["book"],
            "imprint": values["imprint"],
            "status": values.get("status") or BookInstanceStatus.MAINTENANCE.value,
            "due_back": values.get("due_back") or date.today(),
        },
        instance_id,
    )
    if instance is None:
        return None
    db.commit()
    logger.info(f"Saved book instance {instance.id}")
    return BookInstanceDetail.model_validate(instance)


# =============================================================================
# Deletes
# =============================================================================
@dataclass
class DeleteOutcome:
    """
    Result of a delete request.

    Exactly one of the flags describes what happened:
    - missing: the record did not exist (nothing to do)
    - deleted: the record was removed
    - blocked: dependents still reference it; they are listed in `dependents`
    """

    missing: bool = False
    deleted: bool = False
    dependents: list = field(default_factory=list)

    @property
    def blocked(self) -> bool:
        return bool(self.dependents)


def delete_unless_referenced(
    db: Session,
    model: type[Base],
    record_id: str,
    dependents: Callable[[Session, str], list] | None = None,
) -> DeleteOutcome:
    """
    Delete a record only when nothing references it.

    Args:
        db: Session
        model: Model class of the record
        record_id: Identifier of the record
        dependents: Function listing the records that reference it

    Returns:
        DeleteOutcome describing what happened
    """
    record = db.get(model, record_id)
    if record is None:
        return DeleteOutcome(missing=True)

    found = dependents(db, record_id) if dependents else []
    if found:
        logger.info(
            f"Refusing to delete {model.__name__} {record_id}: "
            f"{len(found)} dependent record(s)"
        )
        return DeleteOutcome(dependents=found)

    if model is Book:
        db.execute(delete(book_genres).where(book_genres.c.book_id == record_id))
    db.delete(record)
    db.commit()
    logger.info(f"Deleted {model.__name__} {record_id}")
    return DeleteOutcome(deleted=True)


def author_dependents(db: Session, author_id: str) -> list[BookSummary]:
    return books_by_author(db, author_id)


def genre_dependents(db: Session, genre_id: str) -> list[BookSummary]:
    return books_with_genre(db, genre_id)


def book_dependents(db: Session, book_id: str) -> list[BookInstanceSummary]:
    return instances_of_book(db, book_id)
