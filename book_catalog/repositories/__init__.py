"""
Repositories Package

Data access classes. Each repository receives a database session in its
constructor and is the only place where statements for its table are built.
"""

from book_catalog.repositories.books import BookRepository

__all__ = ["BookRepository"]
