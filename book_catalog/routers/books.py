"""
Books Router

HTTP routes for the catalog pages.

Each route does three things and nothing else:
1. Build a BookRequest from the HTTP request (query string / form body)
2. Call the matching BookHandler action
3. Turn the returned Outcome into a response with present()

| Route                       | Action                          |
|-----------------------------|---------------------------------|
| GET  /                      | list all books                  |
| GET  /books/view?id=        | show one book                   |
| GET  /books/create          | empty form                      |
| POST /books/create          | create                          |
| GET  /books/edit?id=        | pre-filled form                 |
| GET  /books/update          | redirect (updates need POST)    |
| POST /books/update          | update                          |
| GET/POST /books/delete?id=  | delete                          |
| GET  /books/search?search=  | search title and author         |

Ids are read as raw strings so that a missing or non-numeric id is
reported by the handler as a 400 page, not a JSON validation error.
"""

from typing import Annotated

from fastapi import APIRouter, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.responses import Response

from book_catalog.dependencies import Handler, Notices, View
from book_catalog.schemas import BookForm, BookRequest
from book_catalog.services.books import Outcome, OutcomeKind
from book_catalog.views import BookView

router = APIRouter(
    tags=["Books"],
    default_response_class=HTMLResponse,
)

BookId = Annotated[str | None, Query(alias="id", description="Book ID")]


# =============================================================================
# Outcome → Response
# =============================================================================
def present(request: Request, view: BookView, outcome: Outcome) -> Response:
    """
    Render exactly one response for a handler outcome.

    Redirects use 303 so the browser follows them with GET after a form POST.
    """
    if outcome.kind is OutcomeKind.REDIRECT:
        return RedirectResponse(outcome.location, status_code=outcome.status_code)

    if outcome.kind is OutcomeKind.RENDER_LIST:
        return view.book_list(request, outcome.books, outcome.notices)

    if outcome.kind is OutcomeKind.RENDER_BOOK:
        return view.book_details(request, outcome.book)

    if outcome.kind is OutcomeKind.RENDER_FORM:
        if outcome.book is None:
            return view.create_form(request)
        return view.edit_form(request, outcome.book)

    if outcome.kind is OutcomeKind.RENDER_SEARCH:
        return view.search_results(request, outcome.books, outcome.search_term)

    return view.error(request, outcome.message, outcome.status_code)


# =============================================================================
# Read Routes
# =============================================================================
@router.get("/", summary="List all books")
def list_books(
    request: Request,
    handler: Handler,
    notices: Notices,
    view: View,
) -> Response:
    """All books, newest first, with any pending notices."""
    return present(request, view, handler.list_books(notices))


@router.get("/books/view", summary="Show a book")
def show_book(
    request: Request,
    handler: Handler,
    view: View,
    book_id: BookId = None,
) -> Response:
    outcome = handler.show(BookRequest(method=request.method, book_id=book_id))
    return present(request, view, outcome)


@router.get("/books/search", summary="Search books by title or author")
def search_books(
    request: Request,
    handler: Handler,
    view: View,
    search: Annotated[str | None, Query(description="Search term")] = None,
) -> Response:
    outcome = handler.search(BookRequest(method=request.method, search=search))
    return present(request, view, outcome)


@router.get("/books/edit", summary="Edit form")
def edit_book_form(
    request: Request,
    handler: Handler,
    view: View,
    book_id: BookId = None,
) -> Response:
    outcome = handler.edit_form(BookRequest(method=request.method, book_id=book_id))
    return present(request, view, outcome)


# =============================================================================
# Create
# =============================================================================
@router.get("/books/create", summary="Create form")
def create_book_form(
    request: Request,
    handler: Handler,
    view: View,
) -> Response:
    return present(request, view, handler.create_form())


@router.post("/books/create", summary="Create a book")
def create_book(
    request: Request,
    handler: Handler,
    notices: Notices,
    view: View,
    title: Annotated[str, Form()] = "",
    author: Annotated[str, Form()] = "",
    book_type: Annotated[str, Form(alias="type")] = "",
    description: Annotated[str, Form()] = "",
) -> Response:
    """Create a book from the submitted form, then redirect to the listing."""
    book_request = BookRequest(
        method=request.method,
        form=BookForm(
            title=title,
            author=author,
            type=book_type,
            description=description,
        ),
    )
    return present(request, view, handler.create(book_request, notices))


# =============================================================================
# Update
# =============================================================================
@router.get("/books/update", summary="Update (non-submission)")
def update_book_redirect(
    request: Request,
    handler: Handler,
    notices: Notices,
    view: View,
) -> Response:
    """Updates only happen on POST; anything else goes back to the listing."""
    outcome = handler.update(BookRequest(method=request.method), notices)
    return present(request, view, outcome)


@router.post("/books/update", summary="Update a book")
def update_book(
    request: Request,
    handler: Handler,
    notices: Notices,
    view: View,
    book_id: Annotated[str | None, Form(alias="id")] = None,
    title: Annotated[str, Form()] = "",
    author: Annotated[str, Form()] = "",
    book_type: Annotated[str, Form(alias="type")] = "",
    description: Annotated[str, Form()] = "",
) -> Response:
    book_request = BookRequest(
        method=request.method,
        book_id=book_id,
        form=BookForm(
            title=title,
            author=author,
            type=book_type,
            description=description,
        ),
    )
    return present(request, view, handler.update(book_request, notices))


# =============================================================================
# Delete
# =============================================================================
@router.api_route("/books/delete", methods=["GET", "POST"], summary="Delete a book")
def delete_book(
    request: Request,
    handler: Handler,
    notices: Notices,
    view: View,
    book_id: BookId = None,
) -> Response:
    """
    Permanently delete a book.

    Reachable with GET because the listing links to it directly (guarded
    by a confirm() prompt in the page).
    """
    outcome = handler.delete(BookRequest(method=request.method, book_id=book_id), notices)
    return present(request, view, outcome)
