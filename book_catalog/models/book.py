"""
Book Model

The only entity of the catalog: one row of the books table plus the rules
every field must satisfy.

Validation On Assignment
========================
Field rules are attached with SQLAlchemy's @validates, which runs on every
attribute assignment, including keyword arguments to the constructor:

    book = Book(title="Dune", author="Frank Herbert", type="Fantasy")
    book.title = "   "      # raises ValidationError, title stays "Dune"
    book.type = "Romance"   # raises ValidationError, type stays "Fantasy"

Rows loaded from the database bypass validators (SQLAlchemy populates
them directly), so the repository never re-validates fields one by one;
it only asks is_valid() before writing.
"""

from datetime import datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, validates

from book_catalog.database import Base
from book_catalog.exceptions import ValidationError

MAX_TEXT_LENGTH = 255


class BookType(StrEnum):
    """The fixed set of book types. No other value is ever stored."""

    ADVENTURE = "Adventure"
    CRIME = "Crime"
    FANTASY = "Fantasy"
    HORROR = "Horror"


BOOK_TYPES: tuple[str, ...] = tuple(book_type.value for book_type in BookType)


def _valid_text(value: Any) -> bool:
    """Title/author rule: a string, non-empty after trimming, at most 255 characters."""
    if not isinstance(value, str):
        return False
    cleaned = value.strip()
    return 0 < len(cleaned) <= MAX_TEXT_LENGTH


def _valid_type(value: Any) -> bool:
    return isinstance(value, str) and value in BOOK_TYPES


class Book(Base):
    """
    Book entity representing one catalog record.

    Table: books

    Fields:
    - id: Server-assigned identifier, set only once the book is persisted
    - title: Required, 1-255 characters after trimming
    - author: Required, 1-255 characters after trimming
    - type: One of BookType (Adventure, Crime, Fantasy, Horror)
    - description: Free text, trimmed, may be empty
    - created_at: Set on insert, never changes
    - updated_at: Set on insert, refreshed on every update

    The type column is a plain string: the enum is enforced here, not by
    a database constraint.
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(MAX_TEXT_LENGTH),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str] = mapped_column(
        String(MAX_TEXT_LENGTH),
        index=True,
        nullable=False,
        comment="Author name"
    )

    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="Book type: Adventure, Crime, Fantasy or Horror"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Book description or summary"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    # The repository sets both explicitly so created_at == updated_at on insert;
    # the server defaults cover rows written outside the application.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        index=True,
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @validates("title", "author")
    def validate_text(self, key: str, value: Any) -> str:
        """Trim title/author and reject empty or over-long values."""
        if not _valid_text(value):
            raise ValidationError(
                f"{key.capitalize()} must be between 1 and {MAX_TEXT_LENGTH} characters"
            )
        return value.strip()

    @validates("type")
    def validate_type(self, key: str, value: Any) -> str:
        """Accept only the fixed book types."""
        if not _valid_type(value):
            raise ValidationError(
                f"Invalid book type. Must be one of: {', '.join(BOOK_TYPES)}"
            )
        return str(value)

    @validates("description")
    def validate_description(self, key: str, value: Any) -> str:
        return (value or "").strip()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    @property
    def is_persisted(self) -> bool:
        """True once the database has assigned an identifier."""
        return bool(self.id)

    def is_valid(self) -> bool:
        """Check that title, author and type all satisfy their rules."""
        return (
            _valid_text(self.title)
            and _valid_text(self.author)
            and _valid_type(self.type)
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert the book to a plain dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "type": self.type,
            "description": self.description,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def __str__(self) -> str:
        return f"Book: {self.title} by {self.author} ({self.type})"

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', type='{self.type}')"
