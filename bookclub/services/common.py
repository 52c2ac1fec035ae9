"""
Shared service helpers.

- store_guard: converts store failures raised inside a service method into
  Err results, so no store exception crosses the service boundary
- parse_documents: maps raw documents onto a schema, skipping malformed ones
- load_document: strict single-document read; a document that exists but
  does not fit its schema raises MalformedDocumentError
- require_ids: rejects blank path identifiers
"""

import logging
from functools import wraps
from typing import Callable, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from bookclub.results import Err, ErrorKind
from bookclub.store import DocumentNotFoundError, StoreError
from bookclub.store.base import Document

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def store_guard(action: str, not_found: str = "Not found") -> Callable:
    """
    Decorate a service method so store failures become Err results.

    DocumentNotFoundError means the target vanished between the existence
    check and the write (e.g. a concurrent delete) and maps to NOT_FOUND.

    Args:
        action: Verb phrase used in the error message ("fetch clubs")
        not_found: Message used when the target document disappeared
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except DocumentNotFoundError as exc:
                logger.warning(f"Document vanished during '{action}': {exc}")
                return Err(ErrorKind.NOT_FOUND, not_found)
            except StoreError as exc:
                logger.error(f"Failed to {action}: {exc}")
                return Err(ErrorKind.INTERNAL, f"Failed to {action}: {exc}")

        return wrapper

    return decorator


class MalformedDocumentError(StoreError):
    """A stored document exists but does not match its schema."""


def load_document(model: type[M], document: Optional[Document]) -> Optional[M]:
    """
    Validate a single document for a lookup by id.

    Returns None only when the document is absent. A present document that
    fails validation raises MalformedDocumentError, which store_guard reports
    as an internal error rather than NOT_FOUND.
    """
    if document is None:
        return None
    try:
        return model.model_validate(document)
    except ValidationError as exc:
        raise MalformedDocumentError(
            f"Malformed {model.__name__} document {document.get('id')}: {exc}"
        ) from exc


def parse_document(model: type[M], document: Optional[Document]) -> Optional[M]:
    """Validate a single document, returning None when absent or malformed."""
    if document is None:
        return None
    try:
        return model.model_validate(document)
    except ValidationError as exc:
        logger.warning(f"Skipping malformed {model.__name__} document {document.get('id')}: {exc}")
        return None


def parse_documents(model: type[M], documents: list[Document]) -> list[M]:
    parsed = (parse_document(model, document) for document in documents)
    return [item for item in parsed if item is not None]


def require_ids(message: str, *ids: str) -> Optional[Err]:
    """Return a BAD_REQUEST Err if any identifier is blank."""
    if any(not (value or "").strip() for value in ids):
        return Err(ErrorKind.BAD_REQUEST, message)
    return None
