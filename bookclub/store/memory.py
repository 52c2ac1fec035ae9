"""
In-Memory Document Store

Process-local backend used for local development and tests
(STORAGE_BACKEND=memory).

Request handlers run concurrently in FastAPI's threadpool, so every
operation holds a single re-entrant lock. Documents are deep-copied on the
way in and out so callers never share mutable state with the store.
"""

import copy
import logging
import threading
import uuid
from typing import Any, Iterable, List, Optional

from bookclub.store.base import (
    Document,
    DocumentNotFoundError,
    DocumentStore,
    Path,
    check_collection_path,
    check_document_path,
)

logger = logging.getLogger(__name__)


class InMemoryDocumentStore(DocumentStore):
    """Nested-dict store with Firestore-like semantics."""

    def __init__(self) -> None:
        # collection path -> {document id -> fields}; dicts keep insertion order
        self._collections: dict[Path, dict[str, Document]] = {}
        self._lock = threading.RLock()

    def _locate(self, path: Path) -> tuple[dict[str, Document], str]:
        check_document_path(path)
        return self._collections.setdefault(path[:-1], {}), path[-1]

    def _existing(self, path: Path) -> Document:
        documents, doc_id = self._locate(path)
        if doc_id not in documents:
            raise DocumentNotFoundError(f"No document to update: {'/'.join(path)}")
        return documents[doc_id]

    def get(self, path: Path) -> Optional[Document]:
        with self._lock:
            documents, doc_id = self._locate(path)
            data = documents.get(doc_id)
            if data is None:
                return None
            return {**copy.deepcopy(data), "id": doc_id}

    def list(self, collection: Path) -> List[Document]:
        check_collection_path(collection)
        with self._lock:
            documents = self._collections.get(collection, {})
            return [
                {**copy.deepcopy(data), "id": doc_id}
                for doc_id, data in documents.items()
            ]

    def new_id(self, collection: Path) -> str:
        check_collection_path(collection)
        return uuid.uuid4().hex

    def set(self, path: Path, data: Document) -> None:
        with self._lock:
            documents, doc_id = self._locate(path)
            documents[doc_id] = copy.deepcopy(data)

    def update(self, path: Path, fields: Document) -> None:
        with self._lock:
            self._existing(path).update(copy.deepcopy(fields))

    def array_union(self, path: Path, field: str, values: Iterable[Any]) -> None:
        with self._lock:
            document = self._existing(path)
            current = list(document.get(field) or [])
            for value in values:
                if value not in current:
                    current.append(value)
            document[field] = current

    def array_remove(self, path: Path, field: str, values: Iterable[Any]) -> None:
        with self._lock:
            document = self._existing(path)
            removed = set(values)
            document[field] = [v for v in document.get(field) or [] if v not in removed]

    def delete_field(self, path: Path, field: str) -> None:
        with self._lock:
            self._existing(path).pop(field, None)

    def delete(self, path: Path) -> None:
        with self._lock:
            documents, doc_id = self._locate(path)
            documents.pop(doc_id, None)

    def delete_all(self, paths: List[Path]) -> int:
        with self._lock:
            for path in paths:
                check_document_path(path)
            deleted = 0
            for path in paths:
                documents, doc_id = self._locate(path)
                if documents.pop(doc_id, None) is not None:
                    deleted += 1
            logger.debug(f"Deleted {deleted} of {len(paths)} documents")
            return deleted
