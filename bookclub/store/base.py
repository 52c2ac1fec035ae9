"""
Document Store Gateway

Uniform access to the hierarchical collection/document store.

Paths are tuples of alternating collection and document segments:

    ("clubs",)                                    collection
    ("clubs", club_id)                            document
    ("clubs", club_id, "threads")                 collection
    ("clubs", club_id, "threads", thread_id)      document

A collection path has odd length, a document path has even length.
Documents are plain dicts; get() and list() always include the document
ID under the "id" key.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

Path = tuple[str, ...]
Document = dict[str, Any]

CLUBS = "clubs"
THREADS = "threads"
COMMENTS = "comments"


# =============================================================================
# Path Helpers
# =============================================================================


def clubs_collection() -> Path:
    return (CLUBS,)


def club_document(club_id: str) -> Path:
    return (CLUBS, club_id)


def threads_collection(club_id: str) -> Path:
    return (CLUBS, club_id, THREADS)


def thread_document(club_id: str, thread_id: str) -> Path:
    return (CLUBS, club_id, THREADS, thread_id)


def comments_collection(club_id: str, thread_id: str) -> Path:
    return (CLUBS, club_id, THREADS, thread_id, COMMENTS)


def comment_document(club_id: str, thread_id: str, comment_id: str) -> Path:
    return (CLUBS, club_id, THREADS, thread_id, COMMENTS, comment_id)


def check_document_path(path: Path) -> None:
    if not path or len(path) % 2 != 0 or not all(path):
        raise ValueError(f"Not a document path: {'/'.join(path)}")


def check_collection_path(path: Path) -> None:
    if not path or len(path) % 2 != 1 or not all(path):
        raise ValueError(f"Not a collection path: {'/'.join(path)}")


# =============================================================================
# Errors
# =============================================================================


class StoreError(Exception):
    """A store operation failed."""


class DocumentNotFoundError(StoreError):
    """An update targeted a document that does not exist."""


class StoreTimeoutError(StoreError):
    """A store operation exceeded the configured timeout."""


class PartialDeleteError(StoreError):
    """A multi-document delete failed after removing some documents."""

    def __init__(self, message: str, deleted: int) -> None:
        super().__init__(message)
        self.deleted = deleted


# =============================================================================
# Gateway Interface
# =============================================================================


class DocumentStore(ABC):
    """Operations the services perform against the document store."""

    @abstractmethod
    def get(self, path: Path) -> Optional[Document]:
        """Return the document at path, or None if it does not exist."""

    @abstractmethod
    def list(self, collection: Path) -> List[Document]:
        """Return every document directly inside a collection."""

    @abstractmethod
    def new_id(self, collection: Path) -> str:
        """Generate a fresh document ID for a collection."""

    @abstractmethod
    def set(self, path: Path, data: Document) -> None:
        """Create or replace the document at path."""

    @abstractmethod
    def update(self, path: Path, fields: Document) -> None:
        """Merge fields into an existing document (DocumentNotFoundError if absent)."""

    @abstractmethod
    def array_union(self, path: Path, field: str, values: Iterable[Any]) -> None:
        """Atomically append values not already present in an array field."""

    @abstractmethod
    def array_remove(self, path: Path, field: str, values: Iterable[Any]) -> None:
        """Atomically remove every occurrence of values from an array field."""

    @abstractmethod
    def delete_field(self, path: Path, field: str) -> None:
        """Remove a field entirely from an existing document."""

    @abstractmethod
    def delete(self, path: Path) -> None:
        """Delete a document. Subcollections are left in place."""

    @abstractmethod
    def delete_all(self, paths: List[Path]) -> int:
        """
        Delete several documents in order and return how many were removed.

        Raises PartialDeleteError when a failure happens after some
        documents were already deleted.
        """
