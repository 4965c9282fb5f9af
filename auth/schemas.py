"""
auth/schemas.py -- Input schemas for registration and login.

Missing fields default to "" with validate_default=True so an absent field
and an empty one produce the same message, and every failing field is
reported together. Passwords are never stripped, and are capped at
72 UTF-8 bytes (not characters) because that is all bcrypt accepts.
"""

from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

from core.validators import email_address, max_bytes, min_length, required

_PASSWORD_TOO_LONG = "Password must be at most 72 bytes"

_Email = Annotated[
    str,
    StringConstraints(strip_whitespace=True, max_length=255),
    email_address("Please include a valid email"),
]


class RegisterRequest(BaseModel):
    """Body for POST /api/users."""

    name: Annotated[str, StringConstraints(strip_whitespace=True, max_length=255), required("Name is required")] = (
        Field(default="", validate_default=True)
    )
    email: _Email = Field(default="", validate_default=True)
    password: Annotated[
        str,
        min_length(6, "Please enter a password with 6 or more characters"),
        max_bytes(72, _PASSWORD_TOO_LONG),
    ] = Field(default="", validate_default=True)


class LoginRequest(BaseModel):
    """Body for POST /api/auth."""

    email: _Email = Field(default="", validate_default=True)
    password: Annotated[str, required("Password is required"), max_bytes(72, _PASSWORD_TOO_LONG)] = Field(
        default="", validate_default=True
    )
