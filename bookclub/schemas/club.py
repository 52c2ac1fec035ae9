"""
Club Pydantic Schemas

Schemas:
- ClubCreate: Request body for POST /clubs
- CurrentBookUpdate: Request body for PATCH /clubs/{id}/currentBook
- Club: Stored club document and API representation
- MembershipResponse / ClubDeletedResponse / CurrentBookResponse: results
  of the mutating club endpoints

Business Rules:
- The creator is always a member
- currentBook is either a non-blank string or absent
"""

from datetime import datetime

from pydantic import Field

from bookclub.schemas.common import CamelModel, MessageResponse


class ClubCreate(CamelModel):
    """
    Schema for creating a club.

    Example request body:
    {
        "name": "Sci-Fi",
        "description": "Space operas and beyond",
        "currentBook": "Dune",
        "members": ["bob@example.com"]
    }
    """

    name: str = Field(
        ...,
        max_length=200,
        description="Club name",
        examples=["Sci-Fi"],
    )
    description: str = Field(
        default="",
        max_length=2000,
        description="What the club is about",
    )
    current_book: str | None = Field(
        default=None,
        max_length=500,
        description="Title or identifier of the book being read",
        examples=["Dune"],
    )
    members: list[str] | None = Field(
        default=None,
        description="Initial member emails (the creator is always added)",
    )


class CurrentBookUpdate(CamelModel):
    """Schema for changing a club's current book."""

    current_book: str = Field(
        ...,
        max_length=500,
        description="Title or identifier of the new current book",
        examples=["Hyperion"],
    )


class Club(CamelModel):
    """
    A book club as stored under clubs/{id}.

    Stored clubs are read leniently: every field except id has a default,
    so a document missing fields still loads as a club.
    """

    id: str = Field(..., description="Unique club identifier")
    name: str = Field(default="", description="Club name")
    description: str = Field(default="", description="Club description")
    created_by: str = Field(default="", description="Email of the creator (owner)")
    members: list[str] = Field(default_factory=list, description="Member emails")
    current_book: str | None = Field(
        default=None,
        description="Current book; absent when the club has none",
    )
    created_at: datetime | None = Field(
        default=None,
        description="When the club was created; absent on clubs stored without it",
    )


class MembershipResponse(MessageResponse):
    """Outcome of joining or leaving a club."""

    club_id: str


class ClubDeletedResponse(MessageResponse):
    """Outcome of deleting a club."""

    deleted_club_id: str


class CurrentBookResponse(MessageResponse):
    """Outcome of setting or clearing a club's current book."""

    club_id: str
    current_book: str | None = None
