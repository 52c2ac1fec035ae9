"""
Authentication Service

Handles account creation and bearer token issuance.

Login note:
===========
login() does NOT check the password against stored credentials. It asks
the identity provider for a custom token (used by clients signing in to
Firebase directly) and, once that succeeds, issues a backend bearer token
for the supplied email. Password verification is expected to happen
client-side against Firebase.
"""

import logging

from bookclub.results import Err, ErrorKind, Ok, Result
from bookclub.schemas.auth import (
    LoginRequest,
    SignupRequest,
    SignupResponse,
    TokenResponse,
)
from bookclub.services.identity import IdentityError, IdentityProvider
from bookclub.services.security import create_access_token

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, identity: IdentityProvider) -> None:
        self.identity = identity

    def signup(self, request: SignupRequest) -> Result[SignupResponse]:
        """Create an account through the identity provider."""
        try:
            user = self.identity.create_user(request.email, request.password)
        except IdentityError as exc:
            logger.warning(f"Signup failed for {request.email}: {exc}")
            return Err(ErrorKind.UNPROCESSABLE, f"Signup failed: {exc}")

        logger.info(f"New user registered: {user.email}")
        return Ok(SignupResponse(uid=user.uid, email=user.email))

    def login(self, request: LoginRequest) -> Result[TokenResponse]:
        """Issue a bearer token for the supplied email."""
        try:
            # Custom token is for client-side Firebase sign-in; the backend discards it
            self.identity.create_custom_token(request.email)
        except IdentityError as exc:
            logger.warning(f"Login failed for {request.email}: {exc}")
            return Err(ErrorKind.UNAUTHORIZED, f"Login failed: {exc}")

        logger.info(f"User logged in: {request.email}")
        return Ok(TokenResponse(token=create_access_token(request.email)))
