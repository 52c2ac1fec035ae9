"""
Authentication Schemas

Schemas:
- SignupRequest / LoginRequest: credentials posted by clients
- SignupResponse: identity created by the identity provider
- TokenResponse: bearer token issued by /login

Email format is left to the identity provider, which reports its own
validation errors.
"""

from pydantic import Field

from bookclub.schemas.common import CamelModel


class SignupRequest(CamelModel):
    email: str = Field(..., description="Account email", examples=["alice@example.com"])
    password: str = Field(..., description="Account password")


class LoginRequest(CamelModel):
    email: str = Field(..., description="Account email", examples=["alice@example.com"])
    password: str = Field(..., description="Account password")


class SignupResponse(CamelModel):
    uid: str = Field(..., description="Identity provider user ID")
    email: str


class TokenResponse(CamelModel):
    token: str = Field(..., description="Bearer token for protected endpoints")
