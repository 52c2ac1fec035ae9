"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Shared collaborators (document store, identity provider) are built once in
the application lifespan and kept on app.state; the providers below hand
them to the services. Tests swap any of them through app.dependency_overrides.

Authentication:
===============
Protected routes read "Authorization: Bearer <token>". The token is
verified by bookclub.services.security and the route receives the email
asserted by the token (the "actor").
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bookclub.config import get_settings
from bookclub.services.auth import AuthService
from bookclub.services.books import GoogleBooksClient
from bookclub.services.clubs import ClubService
from bookclub.services.identity import IdentityProvider
from bookclub.services.security import verify_access_token
from bookclub.services.threads import ThreadService
from bookclub.store import DocumentStore

# =============================================================================
# Bearer Authentication
# =============================================================================
# auto_error=False so a missing header reaches get_current_email, which
# answers with 401 (HTTPBearer on its own answers 403).

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_email(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """
    Return the email asserted by a valid bearer token.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    email = verify_access_token(credentials.credentials)
    if email is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return email


def get_optional_email(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    """Return the token's email if a valid bearer token is present, None otherwise."""
    if credentials is None:
        return None
    return verify_access_token(credentials.credentials)


# Type aliases for cleaner route signatures
ActorEmail = Annotated[str, Depends(get_current_email)]
OptionalActor = Annotated[str | None, Depends(get_optional_email)]


# =============================================================================
# Shared Collaborators
# =============================================================================
def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity


def get_book_search() -> GoogleBooksClient:
    """Catalog client built from the current settings."""
    return GoogleBooksClient.from_settings(get_settings())


# =============================================================================
# Services
# =============================================================================
def get_club_service(store: DocumentStore = Depends(get_store)) -> ClubService:
    return ClubService(store)


def get_thread_service(store: DocumentStore = Depends(get_store)) -> ThreadService:
    return ThreadService(store)


def get_auth_service(
    identity: IdentityProvider = Depends(get_identity_provider),
) -> AuthService:
    return AuthService(identity)


Clubs = Annotated[ClubService, Depends(get_club_service)]
Threads = Annotated[ThreadService, Depends(get_thread_service)]
Auth = Annotated[AuthService, Depends(get_auth_service)]
BookSearch = Annotated[GoogleBooksClient, Depends(get_book_search)]
