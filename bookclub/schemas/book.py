"""
Book Schema

Books are never persisted: they are mapped from the external catalog's
volume records and returned as-is.
"""

from pydantic import Field

from bookclub.schemas.common import CamelModel

DEFAULT_TITLE = "No Title"
DEFAULT_AUTHOR = "Unknown Author"


class Book(CamelModel):
    """A catalog search hit."""

    title: str = Field(default=DEFAULT_TITLE, description="Book title")
    authors: list[str] = Field(
        default_factory=lambda: [DEFAULT_AUTHOR],
        description="Authors in catalog order",
    )
    thumbnail: str | None = Field(default=None, description="Cover thumbnail URL")
