"""
Book Request Handler

One method per catalog action. Every method follows the same shape:

    validate the request → delegate to the repository → return an Outcome

An Outcome says what should happen next (render a list, render one book,
redirect, show an error with a status code). Methods never raise for the
known error taxonomy: ValidationError, InvalidInput, NotFound and
StorageError are turned into outcomes by the @returns_outcome decorator,
so the router has to handle every kind explicitly.

Preconditions checked here, not in the repository:
- show/edit/delete need a positive numeric id
- create/update only act on the submission method (POST)
- update/delete need the id to resolve to an existing book
- blank searches redirect to the listing without querying
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from functools import wraps

from fastapi import status

from book_catalog.exceptions import InvalidInput, NotFound, StorageError, ValidationError
from book_catalog.models import Book
from book_catalog.repositories import BookRepository
from book_catalog.schemas import BookForm, BookRequest
from book_catalog.services.notices import NoticeStore

logger = logging.getLogger(__name__)

LIST_LOCATION = "/"

# Largest value a 64-bit signed integer primary key can hold
MAX_BOOK_ID = 2**63 - 1


# =============================================================================
# Outcomes
# =============================================================================
class OutcomeKind(StrEnum):
    """Everything a handler action can end in."""

    RENDER_LIST = "render_list"
    RENDER_BOOK = "render_book"
    RENDER_FORM = "render_form"
    RENDER_SEARCH = "render_search"
    REDIRECT = "redirect"

    VALIDATION_ERROR = "validation_error"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    STORAGE_ERROR = "storage_error"


STATUS_CODES: dict[OutcomeKind, int] = {
    OutcomeKind.RENDER_LIST: status.HTTP_200_OK,
    OutcomeKind.RENDER_BOOK: status.HTTP_200_OK,
    OutcomeKind.RENDER_FORM: status.HTTP_200_OK,
    OutcomeKind.RENDER_SEARCH: status.HTTP_200_OK,
    OutcomeKind.REDIRECT: status.HTTP_303_SEE_OTHER,
    OutcomeKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    OutcomeKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    OutcomeKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    OutcomeKind.STORAGE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@dataclass
class Outcome:
    """
    Result of one handler action.

    Attributes:
        kind: What happened
        books: Books to list (RENDER_LIST, RENDER_SEARCH)
        book: The book to show or edit (RENDER_BOOK, RENDER_FORM)
        message: Error message safe to show to the user
        notices: One-shot notices to display (RENDER_LIST)
        search_term: The term that was searched for (RENDER_SEARCH)
        location: Where to go next (REDIRECT)
    """

    kind: OutcomeKind
    books: list[Book] = field(default_factory=list)
    book: Book | None = None
    message: str | None = None
    notices: dict[str, str] = field(default_factory=dict)
    search_term: str | None = None
    location: str | None = None

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400

    @classmethod
    def redirect(cls, location: str = LIST_LOCATION) -> "Outcome":
        return cls(OutcomeKind.REDIRECT, location=location)


def returns_outcome(failure_message: str) -> Callable:
    """
    Convert the error taxonomy raised inside a handler action into outcomes.

    StorageError details are logged but never shown: the user only sees
    failure_message.
    """

    def decorator(action: Callable[..., Outcome]) -> Callable[..., Outcome]:
        @wraps(action)
        def wrapper(*args, **kwargs) -> Outcome:
            try:
                return action(*args, **kwargs)
            except ValidationError as exc:
                return Outcome(
                    OutcomeKind.VALIDATION_ERROR,
                    message=f"Validation Error: {exc.message}",
                )
            except InvalidInput as exc:
                return Outcome(OutcomeKind.INVALID_INPUT, message=exc.message)
            except NotFound as exc:
                return Outcome(OutcomeKind.NOT_FOUND, message=exc.message)
            except StorageError as exc:
                logger.error(f"{failure_message}: {exc.message}")
                return Outcome(OutcomeKind.STORAGE_ERROR, message=failure_message)

        return wrapper

    return decorator


# =============================================================================
# Parameter helpers
# =============================================================================
def parse_book_id(raw: str | None) -> int:
    """
    Turn a raw id parameter into a positive integer.

    Raises:
        InvalidInput: If the id is missing, not numeric, not positive or
            too large to be stored
    """
    cleaned = (raw or "").strip()
    if not (cleaned.isascii() and cleaned.isdigit()):
        raise InvalidInput("Valid book ID is required")

    book_id = int(cleaned)
    if not 0 < book_id <= MAX_BOOK_ID:
        raise InvalidInput("Valid book ID is required")
    return book_id


def apply_form(book: Book, form: BookForm) -> None:
    """
    Copy submitted fields onto a book through its validating setters.

    Raises:
        ValidationError: On the first field that breaks its rule
    """
    book.title = form.title
    book.author = form.author
    book.type = form.type
    book.description = form.description


# =============================================================================
# Handler
# =============================================================================
class BookHandler:
    """
    Orchestrates the catalog actions.

    Usage:
        handler = BookHandler(BookRepository(db))
        outcome = handler.show(BookRequest(book_id="3"))
        if outcome.kind is OutcomeKind.RENDER_BOOK:
            ...
    """

    def __init__(self, repository: BookRepository) -> None:
        self.repository = repository

    def _find_or_404(self, book_id: int) -> Book:
        book = self.repository.find_by_id(book_id)
        if book is None:
            raise NotFound("Book not found")
        return book

    # -------------------------------------------------------------------------
    # Read actions
    # -------------------------------------------------------------------------
    @returns_outcome("Error loading books")
    def list_books(self, notices: NoticeStore) -> Outcome:
        """All books, newest first, plus any pending notices."""
        books = self.repository.find_all()
        return Outcome(
            OutcomeKind.RENDER_LIST,
            books=books,
            notices=notices.consume_all(),
        )

    @returns_outcome("Error loading book")
    def show(self, request: BookRequest) -> Outcome:
        book = self._find_or_404(parse_book_id(request.book_id))
        return Outcome(OutcomeKind.RENDER_BOOK, book=book)

    def create_form(self) -> Outcome:
        return Outcome(OutcomeKind.RENDER_FORM)

    @returns_outcome("Error loading book for edit")
    def edit_form(self, request: BookRequest) -> Outcome:
        book = self._find_or_404(parse_book_id(request.book_id))
        return Outcome(OutcomeKind.RENDER_FORM, book=book)

    @returns_outcome("Error searching books")
    def search(self, request: BookRequest) -> Outcome:
        """Search title and author; a blank term goes back to the listing."""
        term = (request.search or "").strip()
        if not term:
            return Outcome.redirect()

        books = self.repository.search(term)
        return Outcome(OutcomeKind.RENDER_SEARCH, books=books, search_term=term)

    # -------------------------------------------------------------------------
    # Mutating actions
    # -------------------------------------------------------------------------
    @returns_outcome("Error creating book")
    def create(self, request: BookRequest, notices: NoticeStore) -> Outcome:
        if not request.is_submission:
            return Outcome.redirect()

        book = Book()
        apply_form(book, request.form or BookForm())

        if not self.repository.create(book):
            raise StorageError("Failed to create book")

        notices.set_once("create", "Book added successfully!")
        return Outcome.redirect()

    @returns_outcome("Error updating book")
    def update(self, request: BookRequest, notices: NoticeStore) -> Outcome:
        if not request.is_submission:
            return Outcome.redirect()

        book = self._find_or_404(parse_book_id(request.book_id))

        try:
            apply_form(book, request.form or BookForm())
        except ValidationError:
            self.repository.discard(book)
            raise

        if not self.repository.update(book):
            raise StorageError("Failed to update book")

        notices.set_once("update", "Book updated successfully!")
        return Outcome.redirect()

    @returns_outcome("Error deleting book")
    def delete(self, request: BookRequest, notices: NoticeStore) -> Outcome:
        book_id = parse_book_id(request.book_id)

        if not self.repository.exists(book_id):
            raise NotFound("Book not found")

        if not self.repository.delete(book_id):
            raise StorageError("Failed to delete book")

        notices.set_once("delete", "Book deleted successfully!")
        return Outcome.redirect()
