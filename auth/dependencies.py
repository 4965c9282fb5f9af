"""
auth/dependencies.py -- FastAPI Depends() helper guarding private routes.

The gate reads the bearer token from the x-auth-token header (the header the
web client sends), verifies it with the TokenService on app.state, and stores
the resolved identity on request.state.user_id. It has two outcomes only:
pass (identity returned, handler runs) or reject (AppError raised, handler
never runs).

Layer rule: no imports from api/, profiles/, or posts/.
  auth/dependencies.py may import from fastapi (for Request) because this
  module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Request

from auth.tokens import TokenService
from core.errors import Unauthenticated

TOKEN_HEADER = "x-auth-token"


def get_current_user_id(request: Request) -> str:
    """Require a valid token. Returns the caller's user id.

    Raises Unauthenticated (401) if the header is missing or blank and
    InvalidToken (401) if verification fails.

    Use as a FastAPI dependency:
        @router.get("/private")
        def route(user_id: str = Depends(get_current_user_id)): ...
    """
    token = request.headers.get(TOKEN_HEADER, "").strip()
    if not token:
        raise Unauthenticated()

    tokens: TokenService = request.app.state.tokens
    user_id = tokens.verify(token)
    request.state.user_id = user_id
    return user_id
