"""
Document Store Package

Two interchangeable backends behind the DocumentStore interface:
- firestore.py: hosted Firestore (production)
- memory.py: thread-safe in-process store (development, tests)

create_store() picks one according to Settings.storage_backend.
"""

import logging

from bookclub.config import Settings
from bookclub.store.base import (
    DocumentNotFoundError,
    DocumentStore,
    PartialDeleteError,
    StoreError,
    StoreTimeoutError,
)
from bookclub.store.memory import InMemoryDocumentStore

logger = logging.getLogger(__name__)


def create_store(settings: Settings) -> DocumentStore:
    """Build the document store selected by configuration."""
    if settings.uses_memory_store:
        logger.warning("Using in-memory document store - data is lost on restart")
        return InMemoryDocumentStore()

    # Imported lazily so the memory backend runs without Google credentials
    from firebase_admin import firestore as firebase_firestore

    from bookclub.firebase import get_firebase_app
    from bookclub.store.firestore import FirestoreDocumentStore

    client = firebase_firestore.client(get_firebase_app(settings))
    logger.info("Firestore document store ready")
    return FirestoreDocumentStore(client, timeout=settings.external_timeout_seconds)


__all__ = [
    "DocumentNotFoundError",
    "DocumentStore",
    "InMemoryDocumentStore",
    "PartialDeleteError",
    "StoreError",
    "StoreTimeoutError",
    "create_store",
]
