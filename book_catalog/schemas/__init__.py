"""
Pydantic Schemas Package

Request parameter structures. The router builds one of these from the
HTTP request and hands it to the request handler, which never reads the
raw request itself.
"""

from book_catalog.schemas.book import BookForm, BookRequest

__all__ = [
    "BookForm",
    "BookRequest",
]
