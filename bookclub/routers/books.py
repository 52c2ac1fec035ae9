"""
Books Router

GET /books/search proxies the Google Books catalog. Nothing is stored.

Example:
    GET /books/search?query=dune&page=2&limit=5
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from bookclub.dependencies import BookSearch
from bookclub.responses import respond
from bookclub.schemas import ApiResponse, Book

router = APIRouter(
    prefix="/books",
    tags=["Books"],
)


@router.get(
    "/search",
    response_model=ApiResponse[list[Book]],
    summary="Search the book catalog",
    responses={
        400: {"description": "Missing query or invalid paging"},
        404: {"description": "No books found"},
        500: {"description": "Catalog unavailable"},
    },
)
async def search_books(
    books: BookSearch,
    query: str = Query(default="", description="Search text", examples=["dune"]),
    page: int = Query(default=1, description="Page number (1-indexed)"),
    limit: int = Query(default=10, description="Results per page"),
) -> JSONResponse:
    return respond(await books.search(query, page=page, limit=limit))
