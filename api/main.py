"""
api/main.py -- FastAPI application entry point for DevConnector.

Exposes accounts, profiles and the posts feed as a JSON REST API under /api.

Run with:  uvicorn asgi:app --reload
           python asgi.py

Middleware stack (outermost to innermost):
  1. CORSMiddleware -- adds CORS headers for allowed browser origins, and
                       lets the x-auth-token header through preflight
  2. log_requests   -- one log line per request with status and latency

Lifespan creates the shared Engine, the stores, the TokenService and the
three services, and stores them on app.state. Route handlers read services
from request.app.state; nothing is constructed per request.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException

from api.models import ErrorDetail, ErrorResponse, FieldError, HealthResponse
from api.routes.auth import router as auth_router
from api.routes.posts import router as posts_router
from api.routes.profile import router as profile_router
from api.routes.users import router as users_router
from auth.dependencies import TOKEN_HEADER
from auth.service import AuthService
from auth.store import UserStore
from auth.tokens import TokenService
from core.config import Settings, get_settings
from core.database import create_db_engine
from core.errors import AppError, ValidationError
from posts.service import PostService
from posts.store import PostStore
from profiles.service import ProfileService
from profiles.store import ProfileStore

VERSION = "1.0.0"

settings = get_settings()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("devconnector.api")


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


def init_app_state(app: FastAPI, engine: Engine, settings: Settings) -> None:
    """Build stores and services on one Engine and attach them to app.state.

    Split out of lifespan so tests can wire the same graph onto an
    in-memory database.
    """
    users = UserStore(engine)
    profiles = ProfileStore(engine)
    posts = PostStore(engine)
    tokens = TokenService(settings.secret_key, settings.token_expire_seconds)

    app.state.engine = engine
    app.state.tokens = tokens
    app.state.auth_service = AuthService(users, tokens)
    app.state.profile_service = ProfileService(
        profiles,
        users,
        github_api_url=settings.github_api_url,
        github_token=settings.github_token,
    )
    app.state.post_service = PostService(posts, users)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the database engine and services on startup; dispose on shutdown."""
    logger.info("DevConnector API starting up")
    engine = create_db_engine(settings.database_url)
    init_app_state(app, engine, settings)
    logger.info("Storage initialized (%s)", engine.url.render_as_string(hide_password=True))

    yield

    engine.dispose()
    logger.info("DevConnector API shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="DevConnector API",
    description="Developer profiles, experience and education, and a posts feed with likes and comments.",
    version=VERSION,
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Middleware stack
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", TOKEN_HEADER],
    max_age=3600,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """One access-log line per request.

    Unhandled exceptions reach the catch-all handler outside this middleware,
    so they are logged here as 500 before being re-raised.
    """
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        ms = (time.perf_counter() - start) * 1000
        logger.error(
            "%s %s 500 %.1fms %s",
            request.method,
            request.url.path,
            ms,
            request.client.host if request.client else "unknown",
        )
        raise
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        response.status_code,
        ms,
        request.client.host if request.client else "unknown",
    )
    return response


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(users_router, prefix="/api", tags=["Users"])
app.include_router(auth_router, prefix="/api", tags=["Auth"])
app.include_router(profile_router, prefix="/api", tags=["Profiles"])
app.include_router(posts_router, prefix="/api", tags=["Posts"])


# ---------------------------------------------------------------------------
# Exception handlers
#
# All handlers return the same ErrorResponse envelope so API clients can parse
# errors uniformly without inspecting status codes to choose a schema.
# ---------------------------------------------------------------------------


def _error_response(status_code: int, detail: ErrorDetail) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=detail).model_dump(exclude_none=True),
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map any domain error onto its status code and envelope."""
    if exc.status_code >= 500:
        logger.error("%s on %s %s", exc.code, request.method, request.url.path, exc_info=exc)
    fields = None
    if isinstance(exc, ValidationError):
        fields = [FieldError(**f) for f in exc.fields]
    return _error_response(
        exc.status_code,
        ErrorDetail(code=exc.code, message=exc.message, detail=exc.detail, fields=fields),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 listing every invalid field when a request body fails validation."""
    return await app_error_handler(request, ValidationError.from_pydantic(exc.errors()))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Structured error for framework-raised HTTP exceptions (404 unknown route, 405, ...)."""
    return _error_response(
        exc.status_code,
        ErrorDetail(code=f"http_{exc.status_code}", message=str(exc.detail)),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected server errors.

    The raw exception is written to the log only, never to the response body.
    """
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error_response(500, ErrorDetail(code="internal_error", message="Server error"))


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------


@app.get("/api/health", tags=["Health"])
async def health() -> HealthResponse:
    """Return API liveness and current version."""
    return HealthResponse(version=VERSION)
