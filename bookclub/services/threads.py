"""
Thread and Comment Service

Owns discussion content nested under a club:

    clubs/{clubId}/threads/{threadId}
    clubs/{clubId}/threads/{threadId}/comments/{commentId}

Business Rules:
===============
- Threads are created only under an existing club
- Only a thread's author may delete it; deleting a thread removes all of
  its comments first, then the thread
- Only a comment's author may delete it
"""

import logging
from datetime import UTC, datetime
from typing import Optional

from bookclub.results import Err, ErrorKind, Ok, Result
from bookclub.schemas.thread import (
    Comment,
    CommentCreate,
    CommentDeletedResponse,
    Thread,
    ThreadCreate,
    ThreadDeletedResponse,
)
from bookclub.services.clubs import get_club
from bookclub.services.common import (
    parse_document,
    parse_documents,
    require_ids,
    store_guard,
)
from bookclub.store import DocumentStore, PartialDeleteError
from bookclub.store.base import (
    comment_document,
    comments_collection,
    thread_document,
    threads_collection,
)

logger = logging.getLogger(__name__)

CLUB_NOT_FOUND = "Club not found"
THREAD_NOT_FOUND = "Thread not found"
COMMENT_NOT_FOUND = "Comment not found"


class ThreadService:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def _club_exists(self, club_id: str) -> bool:
        return get_club(self.store, club_id) is not None

    def _get_thread(self, club_id: str, thread_id: str) -> Optional[Thread]:
        return parse_document(Thread, self.store.get(thread_document(club_id, thread_id)))

    # -------------------------------------------------------------------------
    # Threads
    # -------------------------------------------------------------------------

    @store_guard("fetch threads")
    def list_threads(self, club_id: str) -> Result[list[Thread]]:
        """Return a club's threads, oldest first."""
        if error := require_ids("Missing club ID", club_id):
            return error
        if not self._club_exists(club_id):
            return Err(ErrorKind.NOT_FOUND, CLUB_NOT_FOUND)

        threads = parse_documents(Thread, self.store.list(threads_collection(club_id)))
        return Ok(sorted(threads, key=lambda thread: thread.created_at))

    @store_guard("create thread")
    def create_thread(self, actor: str, club_id: str, request: ThreadCreate) -> Result[Thread]:
        if error := require_ids("Missing club ID", club_id):
            return error
        if not self._club_exists(club_id):
            return Err(ErrorKind.NOT_FOUND, CLUB_NOT_FOUND)

        if not request.title.strip() or not request.content.strip():
            return Err(ErrorKind.BAD_REQUEST, "Thread title and content must not be blank")

        collection = threads_collection(club_id)
        thread = Thread(
            id=self.store.new_id(collection),
            club_id=club_id,
            title=request.title,
            content=request.content,
            created_by=actor,
            created_at=datetime.now(UTC),
        )
        self.store.set(
            thread_document(club_id, thread.id),
            thread.model_dump(by_alias=True),
        )

        logger.info(f"Thread {thread.id} created in club {club_id} by {actor}")
        return Ok(thread)

    @store_guard("fetch thread")
    def get_thread(self, club_id: str, thread_id: str) -> Result[Thread]:
        if error := require_ids("Missing club ID or thread ID", club_id, thread_id):
            return error
        if not self._club_exists(club_id):
            return Err(ErrorKind.NOT_FOUND, CLUB_NOT_FOUND)

        thread = self._get_thread(club_id, thread_id)
        if thread is None:
            return Err(ErrorKind.NOT_FOUND, THREAD_NOT_FOUND)
        return Ok(thread)

    @store_guard("delete thread", not_found=THREAD_NOT_FOUND)
    def delete_thread(self, actor: str, club_id: str, thread_id: str) -> Result[ThreadDeletedResponse]:
        """
        Delete a thread and every comment under it.

        Comments are removed before the thread. There is no rollback: if the
        store fails part-way, the comments already removed stay removed and
        the error says how many there were.
        """
        if error := require_ids("Missing club ID or thread ID", club_id, thread_id):
            return error
        if not self._club_exists(club_id):
            return Err(ErrorKind.NOT_FOUND, CLUB_NOT_FOUND)

        thread = self._get_thread(club_id, thread_id)
        if thread is None:
            return Err(ErrorKind.NOT_FOUND, THREAD_NOT_FOUND)

        if thread.created_by != actor:
            logger.warning(f"{actor} refused deletion of thread {thread_id}")
            return Err(ErrorKind.FORBIDDEN, "Not authorized to delete this thread")

        comments = self.store.list(comments_collection(club_id, thread_id))
        paths = [comment_document(club_id, thread_id, comment["id"]) for comment in comments]
        paths.append(thread_document(club_id, thread_id))

        try:
            self.store.delete_all(paths)
        except PartialDeleteError as exc:
            logger.error(f"Thread {thread_id} cascade stopped after {exc.deleted} deletions: {exc}")
            return Err(
                ErrorKind.INTERNAL,
                f"Failed to delete thread: removed {min(exc.deleted, len(comments))} of "
                f"{len(comments)} comments before error: {exc}",
            )

        logger.info(f"Thread {thread_id} and {len(comments)} comments deleted by {actor}")
        return Ok(ThreadDeletedResponse(message="Thread deleted!", deleted_thread_id=thread_id))

    # -------------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------------

    @store_guard("add comment")
    def add_comment(
        self,
        actor: str,
        club_id: str,
        thread_id: str,
        request: CommentCreate,
    ) -> Result[Comment]:
        if error := require_ids("Missing club ID or thread ID", club_id, thread_id):
            return error
        if not self._club_exists(club_id):
            return Err(ErrorKind.NOT_FOUND, CLUB_NOT_FOUND)
        if self._get_thread(club_id, thread_id) is None:
            return Err(ErrorKind.NOT_FOUND, THREAD_NOT_FOUND)

        if not request.content.strip():
            return Err(ErrorKind.BAD_REQUEST, "Comment content must not be blank")

        collection = comments_collection(club_id, thread_id)
        comment = Comment(
            id=self.store.new_id(collection),
            content=request.content,
            created_by=actor,
            created_at=datetime.now(UTC),
        )
        self.store.set(
            comment_document(club_id, thread_id, comment.id),
            comment.model_dump(by_alias=True),
        )

        logger.info(f"Comment {comment.id} added to thread {thread_id} by {actor}")
        return Ok(comment)

    @store_guard("delete comment", not_found=COMMENT_NOT_FOUND)
    def delete_comment(
        self,
        actor: str,
        club_id: str,
        thread_id: str,
        comment_id: str,
    ) -> Result[CommentDeletedResponse]:
        if error := require_ids(
            "Missing club ID, thread ID, or comment ID", club_id, thread_id, comment_id
        ):
            return error
        if not self._club_exists(club_id):
            return Err(ErrorKind.NOT_FOUND, CLUB_NOT_FOUND)

        comment = parse_document(
            Comment, self.store.get(comment_document(club_id, thread_id, comment_id))
        )
        if comment is None:
            return Err(ErrorKind.NOT_FOUND, COMMENT_NOT_FOUND)

        if comment.created_by != actor:
            logger.warning(f"{actor} refused deletion of comment {comment_id}")
            return Err(ErrorKind.FORBIDDEN, "You are not authorized to delete this comment")

        self.store.delete(comment_document(club_id, thread_id, comment_id))

        logger.info(f"Comment {comment_id} deleted by {actor}")
        return Ok(CommentDeletedResponse(message="Comment deleted!", deleted_comment_id=comment_id))
