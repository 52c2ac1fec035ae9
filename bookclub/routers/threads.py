"""
Threads Router

Discussion threads and their comments, nested under a club:

- GET    /clubs/{club_id}/threads
- POST   /clubs/{club_id}/threads                                   (bearer)
- GET    /clubs/{club_id}/threads/{thread_id}
- DELETE /clubs/{club_id}/threads/{thread_id}                       (bearer, author)
- POST   /clubs/{club_id}/threads/{thread_id}/comments              (bearer)
- DELETE /clubs/{club_id}/threads/{thread_id}/comments/{comment_id} (bearer, author)
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from bookclub.dependencies import ActorEmail, Threads
from bookclub.responses import respond
from bookclub.schemas import (
    ApiResponse,
    Comment,
    CommentCreate,
    CommentDeletedResponse,
    Thread,
    ThreadCreate,
    ThreadDeletedResponse,
)

router = APIRouter(
    prefix="/clubs/{club_id}/threads",
    tags=["Threads"],
    responses={
        400: {"description": "Bad request"},
        404: {"description": "Club, thread or comment not found"},
    },
)


@router.get(
    "",
    response_model=ApiResponse[list[Thread]],
    summary="List a club's threads",
    description="Threads are returned oldest first.",
)
def list_threads(club_id: str, threads: Threads) -> JSONResponse:
    return respond(threads.list_threads(club_id))


@router.post(
    "",
    response_model=ApiResponse[Thread],
    status_code=status.HTTP_201_CREATED,
    summary="Open a thread",
)
def create_thread(
    club_id: str,
    body: ThreadCreate,
    actor: ActorEmail,
    threads: Threads,
) -> JSONResponse:
    return respond(
        threads.create_thread(actor, club_id, body),
        success_status=status.HTTP_201_CREATED,
    )


@router.get(
    "/{thread_id}",
    response_model=ApiResponse[Thread],
    summary="Get a thread",
)
def get_thread(club_id: str, thread_id: str, threads: Threads) -> JSONResponse:
    return respond(threads.get_thread(club_id, thread_id))


@router.delete(
    "/{thread_id}",
    response_model=ApiResponse[ThreadDeletedResponse],
    summary="Delete a thread",
    description="""
    Delete a thread and all of its comments. Only the thread's author may
    delete it.

    Comments are removed before the thread; if the store fails part-way
    the error reports how many comments were already removed.
    """,
    responses={403: {"description": "Caller is not the author"}},
)
def delete_thread(
    club_id: str,
    thread_id: str,
    actor: ActorEmail,
    threads: Threads,
) -> JSONResponse:
    return respond(threads.delete_thread(actor, club_id, thread_id))


@router.post(
    "/{thread_id}/comments",
    response_model=ApiResponse[Comment],
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a thread",
)
def add_comment(
    club_id: str,
    thread_id: str,
    body: CommentCreate,
    actor: ActorEmail,
    threads: Threads,
) -> JSONResponse:
    return respond(
        threads.add_comment(actor, club_id, thread_id, body),
        success_status=status.HTTP_201_CREATED,
    )


@router.delete(
    "/{thread_id}/comments/{comment_id}",
    response_model=ApiResponse[CommentDeletedResponse],
    summary="Delete a comment",
    responses={403: {"description": "Caller is not the author"}},
)
def delete_comment(
    club_id: str,
    thread_id: str,
    comment_id: str,
    actor: ActorEmail,
    threads: Threads,
) -> JSONResponse:
    return respond(threads.delete_comment(actor, club_id, thread_id, comment_id))
