"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Tests can build fresh instances and override dependencies

2. Lifespan Events
   - startup: build the document store and identity provider once and keep
     them on app.state
   - shutdown: log and let the clients go

3. Uniform Envelope
   - Service results become {"success": ..., "data"|"error": ...} through
     bookclub.responses.respond()
   - The exception handlers below give framework errors (401 from the
     bearer dependency, 404 for unknown routes, body validation) and
     unexpected faults the same shape
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookclub.config import get_settings
from bookclub.responses import error_response
from bookclub.routers import auth_router, books_router, clubs_router, threads_router
from bookclub.services.identity import create_identity_provider
from bookclub.store import create_store

# =============================================================================
# Logging Configuration
# =============================================================================
# Configure logging before creating the app
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Storage backend: {settings.storage_backend}")

    app.state.store = create_store(settings)
    app.state.identity = create_identity_provider(settings)

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into 'body.name: Field required; ...'."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Book Club API

Backend for reading groups.

### Features
- **Accounts**: sign up and obtain a bearer token
- **Clubs**: create, join, leave and delete clubs; track the current book
- **Threads**: discussion threads and comments inside a club
- **Books**: search the Google Books catalog

### Authentication
Mutating endpoints require `Authorization: Bearer <token>` from `/login`.

### Responses
Every JSON response is an envelope: `{"success": true, "data": ...}` or
`{"success": false, "error": "..."}`.
        """,
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Wrap HTTP errors (401 bearer failures, unknown routes) in the envelope."""
        if exc.status_code >= 500:
            logger.error(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
        return error_response(
            exc.status_code,
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Missing body fields and malformed parameters are bad requests."""
        message = _describe_validation_error(exc)
        logger.info(f"Rejected request to {request.url.path}: {message}")
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An internal error occurred.",
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(auth_router)
    app.include_router(clubs_router)
    app.include_router(threads_router)
    app.include_router(books_router)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and healthy.",
    )
    async def health_check() -> dict:
        """Used by load balancers and Cloud Run probes."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.api_version,
            "storage": settings.storage_backend,
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="Liveness",
        response_class=PlainTextResponse,
    )
    async def root() -> str:
        return "Book Club API is running!"

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookclub.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# This allows running the app directly with: python -m bookclub.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookclub.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
