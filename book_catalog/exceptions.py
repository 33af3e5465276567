"""
Error Taxonomy

Every failure the application knows how to report is one of these.

- ValidationError: a field value or precondition is wrong (client error)
- InvalidInput: a request parameter is missing or malformed (client error)
- NotFound: an identifier does not resolve to a book
- StorageError: the database could not execute a statement (server error)
- StoreUnavailable: the database cannot be reached at startup (fatal)

The request handler converts the first four into outcomes; only
StoreUnavailable is allowed to stop the process.
"""


class BookCatalogError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BookCatalogError):
    """A book field or required precondition is invalid."""


class InvalidInput(BookCatalogError):
    """A request parameter is missing or malformed."""


class NotFound(BookCatalogError):
    """The requested book does not exist."""


class StorageError(BookCatalogError):
    """A database statement failed. The original error is chained as __cause__."""


class StoreUnavailable(BookCatalogError):
    """The database could not be reached when the application started."""
