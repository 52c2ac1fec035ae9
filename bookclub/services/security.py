"""
Security Service

Issues and verifies the bearer tokens handed out by /login.

Token format:
=============
Compact JWT signed with HS256 using SECRET_KEY, carrying:
- iss: JWT_ISSUER ("bookclub")
- email: the caller's identity
- exp: only when TOKEN_EXPIRE_MINUTES is configured

Verification fails closed: any problem (bad signature, wrong issuer,
missing email, expired) yields None, which callers treat as anonymous.

Usage:
    from bookclub.services.security import create_access_token, verify_access_token

    token = create_access_token("alice@example.com")
    verify_access_token(token)  # 'alice@example.com'
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from bookclub.config import get_settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
EMAIL_CLAIM = "email"


def create_access_token(email: str) -> str:
    """
    Create a signed bearer token asserting the given email.

    Example:
        >>> token = create_access_token("alice@example.com")
        >>> token.count(".") == 2  # JWT format: header.payload.signature
        True
    """
    settings = get_settings()
    to_encode = {"iss": settings.jwt_issuer, EMAIL_CLAIM: email}

    if settings.token_expire_minutes:
        expire = datetime.now(UTC) + timedelta(minutes=settings.token_expire_minutes)
        to_encode["exp"] = expire

    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_token(token: str) -> dict | None:
    """
    Decode and validate a token's signature, issuer and expiry.

    Returns:
        Decoded payload if valid, None otherwise
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[ALGORITHM],
            issuer=settings.jwt_issuer,
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None


def verify_access_token(token: str) -> str | None:
    """
    Return the email asserted by a valid token, or None.

    Args:
        token: The raw bearer token

    Returns:
        Email claim if the token is valid and carries a non-blank email
    """
    payload = decode_token(token)
    if payload is None:
        return None

    email = payload.get(EMAIL_CLAIM)
    if not isinstance(email, str) or not email.strip():
        logger.warning("Token rejected: missing email claim")
        return None

    return email
