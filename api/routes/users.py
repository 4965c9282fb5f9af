"""
api/routes/users.py -- Account registration.

Routes:
  POST /api/users -- register; returns a token so the client is logged in at once

Public: registration produces the token the auth gate later checks.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from api.models import TokenResponse
from auth.schemas import RegisterRequest
from auth.service import AuthService

router = APIRouter()


@router.post("/users", response_model=TokenResponse)
def register(request: Request, body: RegisterRequest) -> TokenResponse:
    """Register a user.

    Validation failures (all fields at once) -> 400 validation_error.
    Email already registered -> 400 user_exists.
    """
    auth_service: AuthService = request.app.state.auth_service
    return TokenResponse(token=auth_service.register(body))
