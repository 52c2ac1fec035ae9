"""
Identity Provider

Account creation and custom-token minting are delegated to an identity
provider:

- FirebaseIdentityProvider: Firebase Authentication via firebase-admin
- InMemoryIdentityProvider: process-local stand-in for the memory backend,
  reproducing the Firebase validation rules the API depends on

Both raise IdentityError with the provider's message on failure.
"""

import logging
import secrets
import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass

from bookclub.config import Settings

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class IdentityError(Exception):
    """The identity provider rejected the request."""


@dataclass
class IdentityUser:
    uid: str
    email: str


class IdentityProvider(ABC):
    @abstractmethod
    def create_user(self, email: str, password: str) -> IdentityUser:
        """Create an account and return its identity."""

    @abstractmethod
    def create_custom_token(self, uid: str) -> str:
        """Mint a client sign-in token for uid."""


class FirebaseIdentityProvider(IdentityProvider):
    """Firebase Authentication accounts."""

    def __init__(self, app) -> None:
        self._app = app

    def create_user(self, email: str, password: str) -> IdentityUser:
        from firebase_admin import auth
        from firebase_admin.exceptions import FirebaseError

        try:
            record = auth.create_user(email=email, password=password, app=self._app)
        except (FirebaseError, ValueError) as exc:
            raise IdentityError(str(exc)) from exc
        return IdentityUser(uid=record.uid, email=record.email)

    def create_custom_token(self, uid: str) -> str:
        from firebase_admin import auth
        from firebase_admin.exceptions import FirebaseError

        try:
            token = auth.create_custom_token(uid, app=self._app)
        except (FirebaseError, ValueError) as exc:
            raise IdentityError(str(exc)) from exc
        return token.decode() if isinstance(token, bytes) else token


class InMemoryIdentityProvider(IdentityProvider):
    """Accounts kept in a dict keyed by email."""

    def __init__(self) -> None:
        self._users: dict[str, IdentityUser] = {}
        self._lock = threading.Lock()

    def create_user(self, email: str, password: str) -> IdentityUser:
        if not email or not email.strip():
            raise IdentityError("email must be a non-empty string.")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise IdentityError(
                f"password must be a string at least {MIN_PASSWORD_LENGTH} characters long."
            )

        with self._lock:
            if email in self._users:
                raise IdentityError("The user with the provided email already exists (EMAIL_EXISTS).")
            user = IdentityUser(uid=uuid.uuid4().hex[:28], email=email)
            self._users[email] = user

        return user

    def create_custom_token(self, uid: str) -> str:
        if not uid or not uid.strip():
            raise IdentityError("uid must be a string between 1 and 128 characters.")
        return secrets.token_urlsafe(32)


def create_identity_provider(settings: Settings) -> IdentityProvider:
    """Build the identity provider matching the storage backend."""
    if settings.uses_memory_store:
        logger.warning("Using in-memory identity provider - accounts are lost on restart")
        return InMemoryIdentityProvider()

    from bookclub.firebase import get_firebase_app

    return FirebaseIdentityProvider(get_firebase_app(settings))
