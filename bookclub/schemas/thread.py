"""
Thread and Comment Pydantic Schemas

Threads live under clubs/{clubId}/threads/{threadId}; comments live under
clubs/{clubId}/threads/{threadId}/comments/{commentId}.
"""

from datetime import datetime

from pydantic import Field

from bookclub.schemas.common import CamelModel, MessageResponse


class ThreadCreate(CamelModel):
    """Request body for opening a discussion thread."""

    title: str = Field(..., max_length=300, description="Thread title")
    content: str = Field(..., max_length=10000, description="Opening post")


class Thread(CamelModel):
    """A discussion thread nested under a club."""

    id: str = Field(..., description="Thread identifier (unique within its club)")
    club_id: str = Field(..., description="Owning club")
    title: str
    content: str
    created_by: str = Field(..., description="Email of the author")
    created_at: datetime


class CommentCreate(CamelModel):
    """Request body for replying to a thread."""

    content: str = Field(..., max_length=5000, description="Comment text")


class Comment(CamelModel):
    """A reply nested under a thread."""

    id: str = Field(..., description="Comment identifier (unique within its thread)")
    content: str
    created_by: str = Field(..., description="Email of the author")
    created_at: datetime


class ThreadDeletedResponse(MessageResponse):
    deleted_thread_id: str


class CommentDeletedResponse(MessageResponse):
    deleted_comment_id: str
