#!/usr/bin/env python3
"""
Database Seed Script

Populates the catalog with sample authors, genres, books and copies.

USAGE:
    # From the project root with the virtualenv activated
    python scripts/seed_data.py

Every record goes through the same rule tables and save functions as the
web forms, so seeded text is sanitized exactly like submitted text.
"""

import sys
from pathlib import Path
from typing import Any

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.database import SessionLocal, create_tables
from app.models import Author, Book, BookInstance, Genre, book_genres
from app.services import catalog
from app.validation import (
    AUTHOR_RULES,
    BOOK_INSTANCE_RULES,
    BOOK_RULES,
    GENRE_RULES,
    FieldRule,
    validate,
)


def clean(form: dict[str, Any], rules: tuple[FieldRule, ...]) -> dict[str, Any]:
    """Validate seed data like a submitted form; seed data must be valid."""
    result = validate(form, rules)
    if not result.ok:
        raise ValueError(f"Invalid seed record {form}: {result.errors}")
    return result.values


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(BookInstance))
    db.execute(delete(book_genres))
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.execute(delete(Genre))
    db.commit()
    print("Data cleared.")


def create_authors(db: Session) -> dict[str, str]:
    """Create sample authors. Returns family name -> id."""
    print("Creating authors...")
    authors_data = [
        {"first_name": "Patrick", "family_name": "Rothfuss", "date_of_birth": "1973-06-06"},
        {"first_name": "Ben", "family_name": "Bova", "date_of_birth": "1932-11-08"},
        {"first_name": "Isaac", "family_name": "Asimov", "date_of_birth": "1920-01-02",
         "date_of_death": "1992-04-06"},
        {"first_name": "Bob", "family_name": "Billings"},
        {"first_name": "Jim", "family_name": "Jones", "date_of_birth": "1971-12-16"},
    ]

    authors = {}
    for data in authors_data:
        author = catalog.save_author(db, clean(data, AUTHOR_RULES))
        authors[author.family_name] = author.id

    print(f"Created {len(authors)} authors.")
    return authors


def create_genres(db: Session) -> dict[str, str]:
    """Create sample genres. Returns name -> id."""
    print("Creating genres...")
    genres = {}
    for name in ["Fantasy", "Science Fiction", "French Poetry"]:
        genre = catalog.save_genre(db, clean({"name": name}, GENRE_RULES))
        genres[name] = genre.id

    print(f"Created {len(genres)} genres.")
    return genres


def create_books(db: Session, authors: dict[str, str], genres: dict[str, str]) -> dict[str, str]:
    """Create sample books. Returns title -> id."""
    print("Creating books...")
    books_data = [
        ("The Name of the Wind (The Kingkiller Chronicle, #1)", "Rothfuss", ["Fantasy"],
         "9781473211896",
         "I have stolen princesses back from sleeping barrow kings. I burned down the "
         "town of Trebon. I have spent the night with Felurian and left with both my "
         "sanity and my life."),
        ("The Wise Man's Fear (The Kingkiller Chronicle, #2)", "Rothfuss", ["Fantasy"],
         "9788401352836",
         "Picking up the tale of Kvothe Kingkiller once again, we follow him into exile, "
         "into political intrigue, courtship, adventure, love and magic."),
        ("The Slow Regard of Silent Things (Kingkiller Chronicle)", "Rothfuss", ["Fantasy"],
         "9780756411336",
         "Deep below the University, there is a dark place. Few people know of it."),
        ("Apes and Angels", "Bova", ["Science Fiction"], "9780765379528",
         "Humankind headed out to the stars not for conquest, nor exploration, nor even "
         "for curiosity."),
        ("Death Wave", "Bova", ["Science Fiction"], "9780765379504",
         "In Ben Bova's previous novel New Earth, Jordan Kell led the first human "
         "mission beyond the solar system."),
        ("Test Book 1", "Billings", ["Fantasy", "Science Fiction"], "ISBN111111",
         "Summary of test book 1"),
        ("Test Book 2", "Billings", [], "ISBN222222", "Summary of test book 2"),
    ]

    books = {}
    for title, family_name, genre_names, isbn, summary in books_data:
        form = {
            "title": title,
            "author": authors[family_name],
            "summary": summary,
            "isbn": isbn,
            "genre": [genres[name] for name in genre_names],
        }
        book = catalog.save_book(db, clean(form, BOOK_RULES))
        books[title] = book.id

    print(f"Created {len(books)} books.")
    return books


def create_book_instances(db: Session, books: dict[str, str]) -> int:
    """Create sample copies."""
    print("Creating book copies...")
    instances_data = [
        ("The Name of the Wind (The Kingkiller Chronicle, #1)", "London Gollancz, 2014.", "Available"),
        ("The Wise Man's Fear (The Kingkiller Chronicle, #2)", " Gollancz, 2011.", "Loaned"),
        ("The Slow Regard of Silent Things (Kingkiller Chronicle)", " Gollancz, 2015.", ""),
        ("Apes and Angels", "New York Tom Doherty Associates, 2016.", "Available"),
        ("Apes and Angels", "New York Tom Doherty Associates, 2016.", "Available"),
        ("Death Wave", "New York, NY Tom Doherty Associates, LLC, 2015.", "Available"),
        ("Death Wave", "New York, NY Tom Doherty Associates, LLC, 2015.", "Maintenance"),
        ("Test Book 1", "Imprint XXX2", "Loaned"),
        ("Test Book 2", "Imprint XXX3", ""),
    ]

    for title, imprint, status in instances_data:
        form = {"book": books[title], "imprint": imprint, "status": status}
        catalog.save_book_instance(db, clean(form, BOOK_INSTANCE_RULES))

    print(f"Created {len(instances_data)} book copies.")
    return len(instances_data)


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()

    with SessionLocal() as db:
        try:
            if clear_existing:
                clear_data(db)

            authors = create_authors(db)
            genres = create_genres(db)
            books = create_books(db, authors, genres)
            copies = create_book_instances(db, books)
        except Exception as e:
            print(f"Error seeding database: {e}")
            db.rollback()
            raise

    print("=" * 60)
    print("Database seeding completed successfully!")
    print("=" * 60)
    print("\nSummary:")
    print(f"  - Authors: {len(authors)}")
    print(f"  - Genres: {len(genres)}")
    print(f"  - Books: {len(books)}")
    print(f"  - Copies: {copies}")
    print("\nYou can now browse the catalog at http://localhost:8001/catalog")


if __name__ == "__main__":
    seed_database()
