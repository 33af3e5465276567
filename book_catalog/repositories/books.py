"""
Book Repository

The only component allowed to issue statements against the books table.

Every operation is a single statement built with SQLAlchemy expressions,
so user input always travels as bound parameters and is never spliced
into SQL text.

Return Values
=============
- create/update/delete return True/False for success/failure
- find_by_id returns None when the book does not exist
- find_all/search return lists, newest first

Errors
======
- ValidationError: the book is not fit to be written (checked before
  any statement is issued)
- StorageError: the database failed; the session is rolled back and the
  original SQLAlchemy error is chained. Nothing is retried.
"""

import logging
from datetime import UTC, datetime
from typing import NoReturn

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from book_catalog.exceptions import StorageError, ValidationError
from book_catalog.models import Book

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class BookRepository:
    """
    Data access for books.

    The session is passed in by the caller (one per request), so the
    repository never opens connections of its own.

    Usage:
        repository = BookRepository(db)
        book = Book(title="Dune", author="Frank Herbert", type="Fantasy")
        repository.create(book)
        repository.find_by_id(book.id)
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------
    def _fail(self, action: str, exc: SQLAlchemyError) -> NoReturn:
        """Roll back, log and re-raise a database error as StorageError."""
        self.db.rollback()
        logger.error(f"Database error while {action}: {exc}")
        raise StorageError(f"Error {action}") from exc

    @staticmethod
    def _newest_first(stmt):
        # id breaks ties between books created within the same clock tick
        return stmt.order_by(Book.created_at.desc(), Book.id.desc())

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------
    def create(self, book: Book) -> bool:
        """
        Insert a new book.

        The generated id and both timestamps are written back onto the
        entity; created_at and updated_at are identical on insert.

        Raises:
            ValidationError: If the book is not valid
            StorageError: If the insert fails
        """
        if not book.is_valid():
            raise ValidationError("Invalid book data")

        now = utcnow()
        book.created_at = now
        book.updated_at = now

        try:
            self.db.add(book)
            self.db.commit()
            self.db.refresh(book)
        except SQLAlchemyError as exc:
            self._fail("creating book", exc)

        logger.info(f"Created book {book.id}: {book.title!r}")
        return book.is_persisted

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------
    def find_by_id(self, book_id: int) -> Book | None:
        """Return the book with this id, or None."""
        stmt = select(Book).where(Book.id == book_id)
        try:
            return self.db.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            self._fail("finding book", exc)

    def find_all(self) -> list[Book]:
        """Return every book, newest first."""
        stmt = self._newest_first(select(Book))
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as exc:
            self._fail("fetching books", exc)

    def search(self, term: str) -> list[Book]:
        """
        Case-insensitive substring search on title or author, newest first.

        Wildcard characters in the term (% and _) are matched literally.
        An empty term matches every book.
        """
        pattern = term.lower()
        stmt = self._newest_first(
            select(Book).where(
                or_(
                    func.lower(Book.title).contains(pattern, autoescape=True),
                    func.lower(Book.author).contains(pattern, autoescape=True),
                )
            )
        )
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as exc:
            self._fail("searching books", exc)

    def exists(self, book_id: int) -> bool:
        """Check whether a book with this id exists."""
        return self.find_by_id(book_id) is not None

    def discard(self, book: Book) -> None:
        """Forget unsaved changes made to a loaded book."""
        if book in self.db:
            self.db.expire(book)

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------
    def update(self, book: Book) -> bool:
        """
        Write the book's mutable fields and refresh updated_at.

        Returns False when no row has the book's id. id and created_at are
        never touched.

        Raises:
            ValidationError: If the book has no id or is not valid
            StorageError: If the update fails
        """
        if not book.id:
            raise ValidationError("Book ID is required for update")

        if not book.is_valid():
            raise ValidationError("Invalid book data")

        now = utcnow()
        stmt = (
            update(Book)
            .where(Book.id == book.id)
            .values(
                title=book.title,
                author=book.author,
                type=book.type,
                description=book.description or "",
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )

        try:
            result = self.db.execute(stmt)
            if result.rowcount == 0:
                self.db.rollback()
                return False

            if book in self.db:
                # The UPDATE above already wrote the pending changes; expiring
                # drops them so commit does not flush a second UPDATE and the
                # next access reloads the stored row.
                self.db.expire(book)
            else:
                book.updated_at = now

            self.db.commit()
        except SQLAlchemyError as exc:
            self._fail("updating book", exc)

        logger.info(f"Updated book {book.id}")
        return True

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------
    def delete(self, book_id: int) -> bool:
        """
        Permanently remove a book.

        Returns False when no row has this id; a missing row is not an error.
        """
        stmt = (
            delete(Book)
            .where(Book.id == book_id)
            .execution_options(synchronize_session=False)
        )

        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as exc:
            self._fail("deleting book", exc)

        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Deleted book {book_id}")
        return deleted
