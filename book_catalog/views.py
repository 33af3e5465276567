"""
Book Views

HTML presentation for the catalog, rendered with Jinja2 templates from
the templates/ directory next to this file.

Each method renders one page and returns a TemplateResponse. Jinja2
autoescaping is on for .html templates, so titles, authors and error
messages are always escaped.
"""

from datetime import datetime
from pathlib import Path

from fastapi import Request, status
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from book_catalog.models import BOOK_TYPES, Book

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

NOTICE_STYLES = {
    "create": "success",
    "update": "success",
    "delete": "warning",
}


def format_datetime(value: datetime | str | None, fmt: str = "%b %d, %Y") -> str:
    """Jinja filter: format a timestamp, tolerating strings and None."""
    if value is None:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    return value.strftime(fmt)


class BookView:
    """
    Renders catalog pages.

    Usage:
        view = BookView(app_name="Book Catalog")
        return view.book_list(request, books, notices)
    """

    def __init__(self, app_name: str, directory: Path = TEMPLATES_DIR) -> None:
        self.app_name = app_name
        self.templates = Jinja2Templates(directory=str(directory))
        self.templates.env.filters["datetime"] = format_datetime

    def _render(
        self,
        request: Request,
        name: str,
        context: dict,
        status_code: int = status.HTTP_200_OK,
    ) -> Response:
        context = {"app_name": self.app_name, **context}
        return self.templates.TemplateResponse(
            request,
            name,
            context,
            status_code=status_code,
        )

    def book_list(
        self,
        request: Request,
        books: list[Book],
        notices: dict[str, str] | None = None,
    ) -> Response:
        """Listing page with search box, notices and the books table."""
        return self._render(
            request,
            "list.html",
            {
                "books": books,
                "notices": notices or {},
                "notice_styles": NOTICE_STYLES,
            },
        )

    def book_details(self, request: Request, book: Book) -> Response:
        return self._render(request, "detail.html", {"book": book})

    def create_form(self, request: Request) -> Response:
        return self._render(
            request,
            "form.html",
            {
                "book": None,
                "types": BOOK_TYPES,
                "action": "/books/create",
                "heading": "Add New Book",
                "submit_label": "Add Book",
            },
        )

    def edit_form(self, request: Request, book: Book) -> Response:
        return self._render(
            request,
            "form.html",
            {
                "book": book,
                "types": BOOK_TYPES,
                "action": "/books/update",
                "heading": "Edit Book",
                "submit_label": "Update Book",
            },
        )

    def search_results(
        self,
        request: Request,
        books: list[Book],
        search_term: str,
    ) -> Response:
        return self._render(
            request,
            "search.html",
            {"books": books, "search_term": search_term},
        )

    def error(
        self,
        request: Request,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> Response:
        """Error page with a link back to the listing."""
        return self._render(
            request,
            "error.html",
            {"message": message, "status_code": status_code},
            status_code=status_code,
        )
