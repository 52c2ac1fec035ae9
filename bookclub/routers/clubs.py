"""
Clubs Router

Endpoints:
- GET    /clubs                    list clubs
- POST   /clubs                    create a club (bearer)
- POST   /clubs/{id}/join          join (bearer)
- DELETE /clubs/{id}/leave         leave (bearer)
- DELETE /clubs/{id}               delete, creator only (bearer)
- PATCH  /clubs/{id}/currentBook   set current book
- DELETE /clubs/{id}/currentBook   clear current book

The currentBook routes accept but do not require a bearer token; when one
is present the caller is only recorded in the logs.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from bookclub.dependencies import ActorEmail, Clubs, OptionalActor
from bookclub.responses import respond
from bookclub.schemas import (
    ApiResponse,
    Club,
    ClubCreate,
    ClubDeletedResponse,
    CurrentBookResponse,
    CurrentBookUpdate,
    MembershipResponse,
)

router = APIRouter(
    prefix="/clubs",
    tags=["Clubs"],
    responses={
        400: {"description": "Bad request"},
        404: {"description": "Club not found"},
    },
)


@router.get(
    "",
    response_model=ApiResponse[list[Club]],
    summary="List clubs",
)
def list_clubs(clubs: Clubs) -> JSONResponse:
    return respond(clubs.list_clubs())


@router.post(
    "",
    response_model=ApiResponse[Club],
    status_code=status.HTTP_201_CREATED,
    summary="Create a club",
    description="""
    Create a club owned by the caller.

    The caller is always added to `members`; blank and duplicate member
    emails are dropped.
    """,
)
def create_club(body: ClubCreate, actor: ActorEmail, clubs: Clubs) -> JSONResponse:
    return respond(clubs.create_club(actor, body), success_status=status.HTTP_201_CREATED)


@router.post(
    "/{club_id}/join",
    response_model=ApiResponse[MembershipResponse],
    summary="Join a club",
)
def join_club(club_id: str, actor: ActorEmail, clubs: Clubs) -> JSONResponse:
    return respond(clubs.join_club(actor, club_id))


@router.delete(
    "/{club_id}/leave",
    response_model=ApiResponse[MembershipResponse],
    summary="Leave a club",
    responses={403: {"description": "The creator cannot leave"}},
)
def leave_club(club_id: str, actor: ActorEmail, clubs: Clubs) -> JSONResponse:
    return respond(clubs.leave_club(actor, club_id))


@router.patch(
    "/{club_id}/currentBook",
    response_model=ApiResponse[CurrentBookResponse],
    summary="Set the current book",
)
def set_current_book(
    club_id: str,
    body: CurrentBookUpdate,
    clubs: Clubs,
    actor: OptionalActor,
) -> JSONResponse:
    return respond(clubs.set_current_book(club_id, body.current_book, actor=actor))


@router.delete(
    "/{club_id}/currentBook",
    response_model=ApiResponse[CurrentBookResponse],
    summary="Clear the current book",
)
def clear_current_book(club_id: str, clubs: Clubs, actor: OptionalActor) -> JSONResponse:
    return respond(clubs.clear_current_book(club_id, actor=actor))


@router.delete(
    "/{club_id}",
    response_model=ApiResponse[ClubDeletedResponse],
    summary="Delete a club",
    description="Only the club's creator may delete it. Threads are not removed.",
    responses={403: {"description": "Caller is not the creator"}},
)
def delete_club(club_id: str, actor: ActorEmail, clubs: Clubs) -> JSONResponse:
    return respond(clubs.delete_club(actor, club_id))
