"""
api/routes/auth.py -- Login and current-user endpoints.

Routes:
  POST /api/auth -- password login; returns a token (public)
  GET  /api/auth -- the caller's account without the password hash (private)

Security:
  AuthService.login() goes through authenticate_user(), which runs bcrypt
  even for unknown emails. Unknown email and wrong password return the same
  400 invalid_credentials body.
  Cache-Control: no-store on login responses so tokens are not cached.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.models import TokenResponse, UserResponse
from auth.dependencies import get_current_user_id
from auth.schemas import LoginRequest
from auth.service import AuthService

router = APIRouter()


@router.post("/auth", response_model=TokenResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with email and password and return a token."""
    auth_service: AuthService = request.app.state.auth_service
    token = auth_service.login(body)
    resp = JSONResponse(content=TokenResponse(token=token).model_dump())
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.get("/auth", response_model=UserResponse)
def me(request: Request, user_id: str = Depends(get_current_user_id)) -> UserResponse:
    """Return the account the token was issued for."""
    auth_service: AuthService = request.app.state.auth_service
    return UserResponse.from_user(auth_service.get_me(user_id))
