"""
Firestore Document Store

Production backend built on the google-cloud-firestore client that
firebase-admin hands out.

- Every call carries the configured timeout
- Array membership changes use the ArrayUnion/ArrayRemove transforms, so
  concurrent joins never lose updates
- Field removal uses the DELETE_FIELD sentinel
- Multi-document deletes run as atomic write batches (Firestore caps a
  batch at 500 writes)
- Google API errors are translated into StoreError subclasses
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Iterable, List, Optional

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from bookclub.store.base import (
    Document,
    DocumentNotFoundError,
    DocumentStore,
    PartialDeleteError,
    Path,
    StoreError,
    StoreTimeoutError,
    check_collection_path,
    check_document_path,
)

logger = logging.getLogger(__name__)

MAX_BATCH_WRITES = 500


@contextmanager
def _translate_errors(action: str, path: Path) -> Iterator[None]:
    location = "/".join(path)
    try:
        yield
    except google_exceptions.NotFound as exc:
        raise DocumentNotFoundError(f"{location} not found") from exc
    except google_exceptions.DeadlineExceeded as exc:
        raise StoreTimeoutError(f"Firestore {action} timed out for {location}") from exc
    except google_exceptions.GoogleAPIError as exc:
        logger.error(f"Firestore {action} failed for {location}: {exc}")
        raise StoreError(f"Firestore error: {exc}") from exc


class FirestoreDocumentStore(DocumentStore):
    """DocumentStore backed by a Firestore client."""

    def __init__(self, client: firestore.Client, timeout: float) -> None:
        self._client = client
        self._timeout = timeout

    def _document(self, path: Path) -> firestore.DocumentReference:
        check_document_path(path)
        return self._client.document(*path)

    def _collection(self, path: Path) -> firestore.CollectionReference:
        check_collection_path(path)
        return self._client.collection(*path)

    def get(self, path: Path) -> Optional[Document]:
        with _translate_errors("get", path):
            snapshot = self._document(path).get(timeout=self._timeout)
        if not snapshot.exists:
            return None
        return {**(snapshot.to_dict() or {}), "id": snapshot.id}

    def list(self, collection: Path) -> List[Document]:
        with _translate_errors("list", collection):
            return [
                {**(snapshot.to_dict() or {}), "id": snapshot.id}
                for snapshot in self._collection(collection).stream(timeout=self._timeout)
            ]

    def new_id(self, collection: Path) -> str:
        return self._collection(collection).document().id

    def set(self, path: Path, data: Document) -> None:
        with _translate_errors("set", path):
            self._document(path).set(data, timeout=self._timeout)

    def update(self, path: Path, fields: Document) -> None:
        with _translate_errors("update", path):
            self._document(path).update(fields, timeout=self._timeout)

    def array_union(self, path: Path, field: str, values: Iterable[Any]) -> None:
        self.update(path, {field: firestore.ArrayUnion(list(values))})

    def array_remove(self, path: Path, field: str, values: Iterable[Any]) -> None:
        self.update(path, {field: firestore.ArrayRemove(list(values))})

    def delete_field(self, path: Path, field: str) -> None:
        self.update(path, {field: firestore.DELETE_FIELD})

    def delete(self, path: Path) -> None:
        with _translate_errors("delete", path):
            self._document(path).delete(timeout=self._timeout)

    def delete_all(self, paths: List[Path]) -> int:
        references = [self._document(path) for path in paths]
        deleted = 0
        for start in range(0, len(references), MAX_BATCH_WRITES):
            chunk = references[start:start + MAX_BATCH_WRITES]
            batch = self._client.batch()
            for reference in chunk:
                batch.delete(reference)
            try:
                with _translate_errors("batch delete", paths[start]):
                    batch.commit(timeout=self._timeout)
            except StoreError as exc:
                if deleted == 0:
                    raise
                raise PartialDeleteError(str(exc), deleted=deleted) from exc
            deleted += len(chunk)
        return deleted
