"""
SQLAlchemy Models Package

Import all models here to:
1. Make them available as: from book_catalog.models import Book
2. Ensure Alembic discovers them for migrations
"""

from book_catalog.models.book import BOOK_TYPES, MAX_TEXT_LENGTH, Book, BookType

__all__ = [
    "Book",
    "BookType",
    "BOOK_TYPES",
    "MAX_TEXT_LENGTH",
]
