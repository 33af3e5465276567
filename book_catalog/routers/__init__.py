"""
Routers Package

FastAPI routers that handle HTTP endpoints. Each router is imported and
registered in main.py.

Router Structure:
- books.py: catalog pages (list, show, create, edit, update, delete, search)
"""

from book_catalog.routers.books import router as books_router

__all__ = [
    "books_router",
]
