"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Everything a route needs is built per request from objects the app
factory placed on app.state:

    Database (app.state.database) → Session → BookRepository → BookHandler
    request.session                → NoticeStore
    BookView (app.state.view)

Instead of writing:
    def show_book(handler: BookHandler = Depends(get_handler)):

routes write:
    def show_book(handler: Handler):
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from book_catalog.database import get_db
from book_catalog.repositories import BookRepository
from book_catalog.services.books import BookHandler
from book_catalog.services.notices import NoticeStore
from book_catalog.views import BookView

DbSession = Annotated[Session, Depends(get_db)]


def get_repository(db: DbSession) -> BookRepository:
    """Repository bound to this request's session."""
    return BookRepository(db)


Repository = Annotated[BookRepository, Depends(get_repository)]


def get_handler(repository: Repository) -> BookHandler:
    return BookHandler(repository)


Handler = Annotated[BookHandler, Depends(get_handler)]


def get_notices(request: Request) -> NoticeStore:
    """
    Notice store over this request's session.

    request.session is provided by SessionMiddleware (see main.create_app).
    """
    return NoticeStore(request.session)


Notices = Annotated[NoticeStore, Depends(get_notices)]


def get_view(request: Request) -> BookView:
    return request.app.state.view


View = Annotated[BookView, Depends(get_view)]
