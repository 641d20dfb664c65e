"""
pytest Fixtures for Library Catalog Tests

This file contains shared fixtures used across all test files.

DATABASE FIXTURES
=================
Pages issue several reads at the same time, each in its own session and
thread. An in-memory SQLite database lives on a single connection, so
every test gets its own SQLite *file* instead (under pytest's tmp_path):
- Isolated: each test starts from empty tables
- Thread-safe: every session gets its own connection
- Simple: no external database needed

The app's session factory dependency is overridden to point at that file.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["DATABASE_URL"] = "sqlite:///./.pytest-catalog.sqlite"
os.environ["ENVIRONMENT"] = "development"

from collections.abc import Generator
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, insert
from sqlalchemy.orm import Session, sessionmaker

from app.database import Base, get_session_factory
from app.main import app
from app.models import Author, Book, BookInstance, Genre, book_genres


@pytest.fixture
def engine(tmp_path):
    """
    Create a SQLite engine on a fresh database file.

    check_same_thread=False lets the threadpool workers use the connections.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'catalog.sqlite'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    engine.dispose()


@pytest.fixture
def sessions(engine) -> sessionmaker:
    """Session factory bound to the test database."""
    return sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)


@pytest.fixture
def db_session(sessions: sessionmaker) -> Generator[Session, None, None]:
    """A session for arranging data and checking what the app wrote."""
    with sessions() as session:
        yield session


@pytest.fixture
def client(sessions: sessionmaker) -> Generator[TestClient, None, None]:
    """
    Create a test client that uses the test database.

    We override the get_session_factory dependency with our test factory.
    """
    app.dependency_overrides[get_session_factory] = lambda: sessions

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def failing_client(sessions: sessionmaker) -> Generator[TestClient, None, None]:
    """Test client that returns 500 pages instead of re-raising server errors."""
    app.dependency_overrides[get_session_factory] = lambda: sessions

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
def _add(db: Session, record):
    db.add(record)
    db.commit()
    return record


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author for testing."""
    return _add(
        db_session,
        Author(
            first_name="Patrick",
            family_name="Rothfuss",
            date_of_birth=date(1973, 6, 6),
        ),
    )


@pytest.fixture
def sample_genre(db_session: Session) -> Genre:
    """Create a sample genre for testing."""
    return _add(db_session, Genre(name="Fantasy"))


@pytest.fixture
def sample_book(db_session: Session, sample_author: Author, sample_genre: Genre) -> Book:
    """
    Create a sample book by sample_author, in sample_genre.

    pytest automatically resolves the fixture dependencies.
    """
    book = _add(
        db_session,
        Book(
            title="The Name of the Wind",
            summary="I have stolen princesses back from sleeping barrow kings.",
            isbn="9781473211896",
            author_id=sample_author.id,
        ),
    )
    db_session.execute(
        insert(book_genres).values(book_id=book.id, genre_id=sample_genre.id, position=0)
    )
    db_session.commit()
    return book


@pytest.fixture
def sample_book_instance(db_session: Session, sample_book: Book) -> BookInstance:
    """Create a loaned copy of sample_book."""
    return _add(
        db_session,
        BookInstance(
            book_id=sample_book.id,
            imprint="London Gollancz, 2014.",
            status="Loaned",
            due_back=date(2026, 11, 1),
        ),
    )
