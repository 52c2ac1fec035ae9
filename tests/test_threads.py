"""
Tests for Thread and Comment Endpoints

- Threads only exist under existing clubs
- Only authors may delete threads/comments
- Deleting a thread removes its comments
"""

from datetime import UTC, datetime

from fastapi import status

from bookclub.schemas import CommentCreate, ThreadCreate
from bookclub.services.threads import ThreadService
from bookclub.store import InMemoryDocumentStore, PartialDeleteError, StoreError
from bookclub.store.base import comment_document, comments_collection, thread_document

from tests.conftest import ALICE, BOB


class TestListThreads:
    def test_unknown_club(self, client):
        response = client.get("/clubs/missing/threads")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "Club not found"

    def test_ordered_oldest_first(self, client, sample_club, store):
        base = ("clubs", sample_club.id, "threads")
        for thread_id, day in (("late", 3), ("early", 1), ("middle", 2)):
            store.set(base + (thread_id,), {
                "clubId": sample_club.id,
                "title": thread_id,
                "content": "c",
                "createdBy": ALICE,
                "createdAt": datetime(2024, 1, day, tzinfo=UTC),
            })

        response = client.get(f"/clubs/{sample_club.id}/threads")

        assert response.status_code == status.HTTP_200_OK
        assert [t["id"] for t in response.json()["data"]] == ["early", "middle", "late"]

    def test_malformed_documents_skipped(self, client, sample_club, store):
        store.set(("clubs", sample_club.id, "threads", "broken"), {"title": "no author"})

        response = client.get(f"/clubs/{sample_club.id}/threads")

        assert response.json() == {"success": True, "data": []}


class TestCreateThread:
    def test_create_thread(self, client, sample_club, bob_headers, store):
        response = client.post(
            f"/clubs/{sample_club.id}/threads",
            json={"title": "Arrakis", "content": "Spice must flow"},
            headers=bob_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["clubId"] == sample_club.id
        assert data["createdBy"] == BOB
        assert data["title"] == "Arrakis"
        assert store.get(thread_document(sample_club.id, data["id"])) is not None

    def test_nonexistent_club_persists_nothing(self, client, bob_headers, store):
        response = client.post(
            "/clubs/ghost/threads",
            json={"title": "Hello", "content": "Anyone?"},
            headers=bob_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert store.list(("clubs", "ghost", "threads")) == []

    def test_blank_title(self, client, sample_club, bob_headers):
        response = client.post(
            f"/clubs/{sample_club.id}/threads",
            json={"title": " ", "content": "body"},
            headers=bob_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_requires_token(self, client, sample_club):
        response = client.post(
            f"/clubs/{sample_club.id}/threads",
            json={"title": "t", "content": "c"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestGetThread:
    def test_get_thread(self, client, sample_thread):
        response = client.get(f"/clubs/{sample_thread.club_id}/threads/{sample_thread.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["title"] == "Chapter 1"

    def test_unknown_thread(self, client, sample_club):
        response = client.get(f"/clubs/{sample_club.id}/threads/missing")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "Thread not found"

    def test_unknown_club(self, client, sample_thread):
        response = client.get(f"/clubs/missing/threads/{sample_thread.id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "Club not found"


class TestDeleteThread:
    def test_author_deletes_thread_and_comments(self, client, sample_thread, alice_headers, bob_headers, store):
        url = f"/clubs/{sample_thread.club_id}/threads/{sample_thread.id}"
        for text in ("first", "second"):
            client.post(f"{url}/comments", json={"content": text}, headers=bob_headers)

        response = client.delete(url, headers=alice_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"] == {
            "message": "Thread deleted!",
            "deletedThreadId": sample_thread.id,
        }
        assert store.get(thread_document(sample_thread.club_id, sample_thread.id)) is None
        assert store.list(comments_collection(sample_thread.club_id, sample_thread.id)) == []
        assert client.get(url).status_code == status.HTTP_404_NOT_FOUND

    def test_other_user_forbidden(self, client, sample_thread, bob_headers, store):
        response = client.delete(
            f"/clubs/{sample_thread.club_id}/threads/{sample_thread.id}",
            headers=bob_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["error"] == "Not authorized to delete this thread"
        assert store.get(thread_document(sample_thread.club_id, sample_thread.id)) is not None

    def test_unknown_thread(self, client, sample_club, alice_headers):
        response = client.delete(f"/clubs/{sample_club.id}/threads/missing", headers=alice_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND


class FailingDeleteStore(InMemoryDocumentStore):
    """Memory store whose cascading delete stops after one document."""

    def delete_all(self, paths):
        self.delete(paths[0])
        raise PartialDeleteError("deadline exceeded", deleted=1)


class TestDeleteThreadPartialFailure:
    def test_reports_comments_removed_before_failure(self):
        store = FailingDeleteStore()
        store.set(("clubs", "c1"), {"name": "n", "createdBy": ALICE, "members": [ALICE],
                                    "createdAt": datetime.now(UTC)})
        service = ThreadService(store)
        thread = service.create_thread(ALICE, "c1", ThreadCreate(title="t", content="c")).value
        for text in ("a", "b", "c"):
            service.add_comment(BOB, "c1", thread.id, CommentCreate(content=text))

        result = service.delete_thread(ALICE, "c1", thread.id)

        assert result.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert result.message.startswith("Failed to delete thread: removed 1 of 3 comments")
        assert len(store.list(comments_collection("c1", thread.id))) == 2
        assert store.get(thread_document("c1", thread.id)) is not None

    def test_store_failure_becomes_internal_error(self):
        class BrokenStore(InMemoryDocumentStore):
            def list(self, collection):
                raise StoreError("Firestore error: unavailable")

        store = BrokenStore()
        store.set(("clubs", "c1"), {"name": "n"})

        result = ThreadService(store).list_threads("c1")

        assert result.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert result.message == "Failed to fetch threads: Firestore error: unavailable"


class TestComments:
    def test_add_comment(self, client, sample_thread, bob_headers, store):
        response = client.post(
            f"/clubs/{sample_thread.club_id}/threads/{sample_thread.id}/comments",
            json={"content": "Great start"},
            headers=bob_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["content"] == "Great start"
        assert data["createdBy"] == BOB
        stored = store.get(comment_document(sample_thread.club_id, sample_thread.id, data["id"]))
        assert stored["content"] == "Great start"

    def test_comment_on_unknown_thread(self, client, sample_club, bob_headers):
        response = client.post(
            f"/clubs/{sample_club.id}/threads/missing/comments",
            json={"content": "hi"},
            headers=bob_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "Thread not found"

    def test_blank_comment(self, client, sample_thread, bob_headers):
        response = client.post(
            f"/clubs/{sample_thread.club_id}/threads/{sample_thread.id}/comments",
            json={"content": ""},
            headers=bob_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_only_author_deletes_comment(self, client, sample_thread, alice_headers, bob_headers, store):
        base = f"/clubs/{sample_thread.club_id}/threads/{sample_thread.id}/comments"
        comment_id = client.post(base, json={"content": "mine"}, headers=bob_headers).json()["data"]["id"]

        refused = client.delete(f"{base}/{comment_id}", headers=alice_headers)
        assert refused.status_code == status.HTTP_403_FORBIDDEN
        assert refused.json()["error"] == "You are not authorized to delete this comment"

        response = client.delete(f"{base}/{comment_id}", headers=bob_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"] == {
            "message": "Comment deleted!",
            "deletedCommentId": comment_id,
        }
        assert store.get(comment_document(sample_thread.club_id, sample_thread.id, comment_id)) is None

    def test_delete_unknown_comment(self, client, sample_thread, bob_headers):
        response = client.delete(
            f"/clubs/{sample_thread.club_id}/threads/{sample_thread.id}/comments/missing",
            headers=bob_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "Comment not found"
