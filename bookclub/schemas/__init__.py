"""
Pydantic Schemas Package

Request bodies, stored document shapes and response payloads.

Schema Naming Convention:
- XxxCreate: Fields accepted when creating a record
- Xxx: Stored/returned representation
- XxxResponse: Result payload of a mutating operation
"""

from bookclub.schemas.auth import (
    LoginRequest,
    SignupRequest,
    SignupResponse,
    TokenResponse,
)
from bookclub.schemas.book import Book
from bookclub.schemas.club import (
    Club,
    ClubCreate,
    ClubDeletedResponse,
    CurrentBookResponse,
    CurrentBookUpdate,
    MembershipResponse,
)
from bookclub.schemas.common import ApiResponse, CamelModel, MessageResponse
from bookclub.schemas.thread import (
    Comment,
    CommentCreate,
    CommentDeletedResponse,
    Thread,
    ThreadCreate,
    ThreadDeletedResponse,
)

__all__ = [
    # Envelope
    "ApiResponse",
    "CamelModel",
    "MessageResponse",
    # Auth schemas
    "LoginRequest",
    "SignupRequest",
    "SignupResponse",
    "TokenResponse",
    # Book schemas
    "Book",
    # Club schemas
    "Club",
    "ClubCreate",
    "ClubDeletedResponse",
    "CurrentBookResponse",
    "CurrentBookUpdate",
    "MembershipResponse",
    # Thread schemas
    "Comment",
    "CommentCreate",
    "CommentDeletedResponse",
    "Thread",
    "ThreadCreate",
    "ThreadDeletedResponse",
]
