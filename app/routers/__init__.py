"""
Routers Package

This package contains the FastAPI routers that serve the catalog pages.

Router Structure:
- index.py: / and /catalog (landing page with record counts)
- authors.py: /catalog/authors/* pages
- genres.py: /catalog/genres/* pages
- books.py: /catalog/books/* pages
- bookinstances.py: /catalog/bookinstances/* pages

Each router is imported and registered in main.py.
"""

from app.routers.authors import router as authors_router
from app.routers.bookinstances import router as bookinstances_router
from app.routers.books import router as books_router
from app.routers.genres import router as genres_router
from app.routers.index import router as index_router

__all__ = [
    "index_router",
    "authors_router",
    "genres_router",
    "books_router",
    "bookinstances_router",
]
