#!/usr/bin/env python3
"""
Database Seed Script

Populates the catalog with sample books for development.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

    # Keep the books already in the database
    python scripts/seed_data.py --keep

This script:
1. Connects to the database using app settings
2. Clears existing books (unless --keep is given)
3. Creates sample books of every type through BookRepository
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from book_catalog.config import get_settings
from book_catalog.database import Database
from book_catalog.models import Book
from book_catalog.repositories import BookRepository

SAMPLE_BOOKS = [
    {
        "title": "Treasure Island",
        "author": "Robert Louis Stevenson",
        "type": "Adventure",
        "description": "A boy, a map and Long John Silver's hunt for buried gold.",
    },
    {
        "title": "The Call of the Wild",
        "author": "Jack London",
        "type": "Adventure",
        "description": "A domesticated dog is dragged north into the Klondike Gold Rush.",
    },
    {
        "title": "The Murder of Roger Ackroyd",
        "author": "Agatha Christie",
        "type": "Crime",
        "description": "Hercule Poirot investigates a death in the village of King's Abbot.",
    },
    {
        "title": "The Big Sleep",
        "author": "Raymond Chandler",
        "type": "Crime",
        "description": "Philip Marlowe takes a blackmail case that keeps getting bigger.",
    },
    {
        "title": "The Hobbit",
        "author": "J.R.R. Tolkien",
        "type": "Fantasy",
        "description": "Bilbo Baggins is swept into a quest to reclaim a dragon's hoard.",
    },
    {
        "title": "A Wizard of Earthsea",
        "author": "Ursula K. Le Guin",
        "type": "Fantasy",
        "description": "A young mage unleashes a shadow and must hunt it down.",
    },
    {
        "title": "Dracula",
        "author": "Bram Stoker",
        "type": "Horror",
        "description": "An epistolary account of the Count's journey to England.",
    },
    {
        "title": "The Haunting of Hill House",
        "author": "Shirley Jackson",
        "type": "Horror",
        "description": "Four visitors spend a summer in a house that does not want them.",
    },
]


def clear_data(db: Session) -> None:
    """Delete every book."""
    print("Clearing existing books...")
    db.execute(delete(Book))
    db.commit()
    print("Books cleared.")


def create_books(repository: BookRepository) -> list[Book]:
    """Create the sample books, oldest entry first."""
    print("Creating books...")
    books = []
    for data in SAMPLE_BOOKS:
        book = Book(**data)
        repository.create(book)
        books.append(book)

    print(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing books before seeding.
    """
    settings = get_settings()

    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    database = Database(settings.database_url)
    database.verify_connection()

    # Create tables if they don't exist
    database.create_tables()

    db = database.session()

    try:
        if clear_existing:
            clear_data(db)

        books = create_books(BookRepository(db))

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print(f"\nSummary:")
        print(f"  - Books: {len(books)}")
        print(f"\nYou can now browse the catalog at http://{settings.host}:{settings.port}/")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    seed_database(clear_existing="--keep" not in sys.argv[1:])
