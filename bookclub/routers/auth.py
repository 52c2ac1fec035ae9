"""
Authentication Router

Handles account endpoints:
- POST /signup: create an account with the identity provider
- POST /login: exchange credentials for a bearer token
- GET /protected: echo the identity carried by a bearer token

Security:
=========
- Passwords are passed straight to the identity provider, never stored or logged
- /login does not verify the password (see bookclub.services.auth)
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from bookclub.dependencies import ActorEmail, Auth
from bookclub.responses import respond
from bookclub.results import Ok
from bookclub.schemas import (
    ApiResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    SignupResponse,
    TokenResponse,
)

router = APIRouter(
    tags=["Authentication"],
    responses={
        400: {"description": "Bad request"},
        401: {"description": "Unauthorized"},
    },
)


@router.post(
    "/signup",
    response_model=ApiResponse[SignupResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    description="Register an email/password account with the identity provider.",
    responses={422: {"description": "Identity provider rejected the account"}},
)
def signup(body: SignupRequest, auth: Auth) -> JSONResponse:
    return respond(auth.signup(body), success_status=status.HTTP_201_CREATED)


@router.post(
    "/login",
    response_model=ApiResponse[TokenResponse],
    summary="Obtain a bearer token",
    description="""
    Issue a bearer token for the given email.

    Use the token as `Authorization: Bearer <token>` on protected endpoints.
    """,
)
def login(body: LoginRequest, auth: Auth) -> JSONResponse:
    return respond(auth.login(body))


@router.get(
    "/protected",
    response_model=ApiResponse[MessageResponse],
    summary="Check a bearer token",
)
def protected(email: ActorEmail) -> JSONResponse:
    """Greet the caller identified by the bearer token."""
    return respond(Ok(MessageResponse(message=f"Welcome, {email}! This is a protected route.")))
