"""
pytest Fixtures for Book Club API Tests

Shared fixtures used across all test files.

Every test runs against fresh in-memory collaborators:
- store: InMemoryDocumentStore instead of Firestore
- identity: InMemoryIdentityProvider instead of Firebase Auth
- the Google Books client is replaced per test with one whose HTTP
  transport is an httpx.MockTransport (see test_books.py)

The real collaborators are swapped through app.dependency_overrides, the
same way production code receives them.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# This selects the memory backend and sets a test secret key
import os

os.environ["STORAGE_BACKEND"] = "memory"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from bookclub.dependencies import get_identity_provider, get_store
from bookclub.main import app
from bookclub.schemas import Club, ClubCreate, Thread, ThreadCreate
from bookclub.services.clubs import ClubService
from bookclub.services.identity import InMemoryIdentityProvider
from bookclub.services.security import create_access_token
from bookclub.services.threads import ThreadService
from bookclub.store import InMemoryDocumentStore

ALICE = "alice@x.com"
BOB = "bob@x.com"


# =============================================================================
# COLLABORATOR FIXTURES
# =============================================================================


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Fresh, empty document store for each test."""
    return InMemoryDocumentStore()


@pytest.fixture
def identity() -> InMemoryIdentityProvider:
    return InMemoryIdentityProvider()


@pytest.fixture
def client(
    store: InMemoryDocumentStore,
    identity: InMemoryIdentityProvider,
) -> Generator[TestClient, None, None]:
    """
    Create a test client wired to the test store and identity provider.

    We override the collaborator dependencies so every request in a test
    sees the same store instance the test inspects.
    """
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_identity_provider] = lambda: identity

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# AUTH FIXTURES
# =============================================================================


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Build an Authorization header carrying a valid token for an email."""

    def _headers(email: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(email)}"}

    return _headers


@pytest.fixture
def alice_headers(auth_headers) -> dict[str, str]:
    return auth_headers(ALICE)


@pytest.fixture
def bob_headers(auth_headers) -> dict[str, str]:
    return auth_headers(BOB)


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_club(store: InMemoryDocumentStore) -> Club:
    """A club created by alice and currently reading Dune."""
    result = ClubService(store).create_club(
        ALICE,
        ClubCreate(name="Sci-Fi", description="d", current_book="Dune"),
    )
    return result.value


@pytest.fixture
def sample_thread(store: InMemoryDocumentStore, sample_club: Club) -> Thread:
    """A thread opened by alice in sample_club."""
    result = ThreadService(store).create_thread(
        ALICE,
        sample_club.id,
        ThreadCreate(title="Chapter 1", content="Thoughts on the opening?"),
    )
    return result.value
