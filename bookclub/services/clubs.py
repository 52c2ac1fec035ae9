"""
Club Service

Owns club lifecycle and membership.

Business Rules:
===============
- The creator is always a member (cannot leave) and is the only one who
  may delete the club
- Joining twice / leaving twice are informational no-ops, not errors
- Joining uses the store's atomic array union so concurrent joins never
  lose each other's updates; leaving uses the atomic array remove
- Deleting a club does not remove its threads/comments subcollections
- Current book changes are not restricted to members
"""

import logging
from datetime import UTC, datetime
from typing import Optional

from bookclub.results import Err, ErrorKind, Ok, Result
from bookclub.schemas.club import (
    Club,
    ClubCreate,
    ClubDeletedResponse,
    CurrentBookResponse,
    MembershipResponse,
)
from bookclub.services.common import (
    load_document,
    parse_documents,
    require_ids,
    store_guard,
)
from bookclub.store import DocumentStore
from bookclub.store.base import club_document, clubs_collection

logger = logging.getLogger(__name__)

CLUB_NOT_FOUND = "Club not found"
MISSING_CLUB_ID = "Missing club ID"


def get_club(store: DocumentStore, club_id: str) -> Optional[Club]:
    """
    Look up a club by id.

    The single club existence check shared by club and thread operations.
    """
    return load_document(Club, store.get(club_document(club_id)))


class ClubService:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def _get_club(self, club_id: str) -> Optional[Club]:
        return get_club(self.store, club_id)

    @store_guard("fetch clubs")
    def list_clubs(self) -> Result[list[Club]]:
        return Ok(parse_documents(Club, self.store.list(clubs_collection())))

    @store_guard("create club")
    def create_club(self, actor: str, request: ClubCreate) -> Result[Club]:
        """
        Create a club owned by actor.

        Members are the provided emails followed by the creator, with blanks
        dropped and duplicates removed (first occurrence wins).
        """
        name = request.name.strip()
        if not name:
            return Err(ErrorKind.BAD_REQUEST, "Club name must not be blank")

        candidates = [*(request.members or []), actor]
        members = list(dict.fromkeys(m.strip() for m in candidates if m and m.strip()))

        current_book = request.current_book
        if current_book is not None and not current_book.strip():
            current_book = None

        club = Club(
            id=self.store.new_id(clubs_collection()),
            name=name,
            description=request.description,
            created_by=actor,
            members=members,
            current_book=current_book,
            created_at=datetime.now(UTC),
        )
        self.store.set(club_document(club.id), club.model_dump(by_alias=True, exclude_none=True))

        logger.info(f"Club {club.id} '{club.name}' created by {actor}")
        return Ok(club)

    @store_guard("join club", not_found=CLUB_NOT_FOUND)
    def join_club(self, actor: str, club_id: str) -> Result[MembershipResponse]:
        if error := require_ids(MISSING_CLUB_ID, club_id):
            return error

        club = self._get_club(club_id)
        if club is None:
            return Err(ErrorKind.NOT_FOUND, CLUB_NOT_FOUND)

        if actor in club.members:
            return Ok(MembershipResponse(message="Already a member", club_id=club.id))

        self.store.array_union(club_document(club_id), "members", [actor])

        logger.info(f"{actor} joined club {club_id}")
        return Ok(MembershipResponse(message="Joined club!", club_id=club.id))

    @store_guard("leave club", not_found=CLUB_NOT_FOUND)
    def leave_club(self, actor: str, club_id: str) -> Result[MembershipResponse]:
        if error := require_ids(MISSING_CLUB_ID, club_id):
            return error

        club = self._get_club(club_id)
        if club is None:
            return Err(ErrorKind.NOT_FOUND, CLUB_NOT_FOUND)

        if actor not in club.members:
            return Ok(MembershipResponse(message="You are not a member of this club", club_id=club.id))

        if actor == club.created_by:
            return Err(ErrorKind.FORBIDDEN, "The club creator cannot leave; delete the club instead")

        self.store.array_remove(club_document(club_id), "members", [actor])

        logger.info(f"{actor} left club {club_id}")
        return Ok(MembershipResponse(message="Left the club", club_id=club.id))

    @store_guard("delete club", not_found=CLUB_NOT_FOUND)
    def delete_club(self, actor: str, club_id: str) -> Result[ClubDeletedResponse]:
        if error := require_ids(MISSING_CLUB_ID, club_id):
            return error

        club = self._get_club(club_id)
        if club is None:
            return Err(ErrorKind.NOT_FOUND, CLUB_NOT_FOUND)

        if club.created_by != actor:
            logger.warning(f"{actor} refused deletion of club {club_id}")
            return Err(ErrorKind.FORBIDDEN, "Not authorized to delete this club")

        self.store.delete(club_document(club_id))

        logger.info(f"Club {club_id} deleted by {actor}")
        return Ok(ClubDeletedResponse(message="Club deleted!", deleted_club_id=club_id))

    @store_guard("update current book", not_found=CLUB_NOT_FOUND)
    def set_current_book(
        self,
        club_id: str,
        current_book: str,
        actor: Optional[str] = None,
    ) -> Result[CurrentBookResponse]:
        if error := require_ids(MISSING_CLUB_ID, club_id):
            return error

        club = self._get_club(club_id)
        if club is None:
            return Err(ErrorKind.NOT_FOUND, CLUB_NOT_FOUND)

        if not current_book or not current_book.strip():
            return Err(ErrorKind.BAD_REQUEST, "Current book must not be blank")

        self.store.update(club_document(club_id), {"currentBook": current_book})

        logger.info(f"Club {club_id} current book set to '{current_book}' by {actor or 'anonymous'}")
        return Ok(CurrentBookResponse(
            message="Current book updated!",
            club_id=club.id,
            current_book=current_book,
        ))

    @store_guard("remove current book", not_found=CLUB_NOT_FOUND)
    def clear_current_book(
        self,
        club_id: str,
        actor: Optional[str] = None,
    ) -> Result[CurrentBookResponse]:
        if error := require_ids(MISSING_CLUB_ID, club_id):
            return error

        club = self._get_club(club_id)
        if club is None:
            return Err(ErrorKind.NOT_FOUND, CLUB_NOT_FOUND)

        self.store.delete_field(club_document(club_id), "currentBook")

        logger.info(f"Club {club_id} current book cleared by {actor or 'anonymous'}")
        return Ok(CurrentBookResponse(message="Current book removed from club", club_id=club_id))
