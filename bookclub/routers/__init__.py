"""
API Routers Package

Router Structure:
- auth.py: /signup, /login, /protected
- clubs.py: /clubs/* endpoints
- threads.py: /clubs/{club_id}/threads/* endpoints
- books.py: /books/search

Each router is imported and registered in main.py.
"""

from bookclub.routers.auth import router as auth_router
from bookclub.routers.books import router as books_router
from bookclub.routers.clubs import router as clubs_router
from bookclub.routers.threads import router as threads_router

__all__ = [
    "auth_router",
    "books_router",
    "clubs_router",
    "threads_router",
]
