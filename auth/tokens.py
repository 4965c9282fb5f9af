"""
auth/tokens.py -- JWT issuance/verification and password hashing.

Security design decisions:
  JWT: python-jose with HS256. Tokens carry {"user": {"id": ...}}, iat and
       exp. TokenService.verify() raises InvalidToken on any failure (bad
       signature, malformed payload, expiry) -- the error handler turns that
       into a 401. Tokens are stateless: nothing is persisted at issue time.

  Passwords: bcrypt directly (no passlib wrapper). Cost factor comes from
       Settings.bcrypt_rounds. The _DUMMY_HASH constant enables timing
       equalization in authenticate_user() so response time does not reveal
       whether an email is registered.

Layer rule: no imports from api/, profiles/, or posts/. Import from core/
is allowed -- core/ is the kernel and has no reverse dependencies.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import bcrypt
from jose import JWTError, jwt

from core.config import get_settings
from core.errors import InvalidToken

if TYPE_CHECKING:
    from auth.models import User
    from auth.store import UserStore

logger = logging.getLogger("devconnector.auth")

_settings = get_settings()

_ALGORITHM = "HS256"

# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """Return a bcrypt hash of the given plaintext password.

    gensalt() draws a fresh random salt on every call, so two users with the
    same password never share a hash. bcrypt rejects input over 72 bytes
    (ValueError); the request schemas cap the UTF-8 length at exactly that.
    """
    salt = bcrypt.gensalt(rounds=_settings.bcrypt_rounds)
    return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash in storage -- treat as a mismatch.
        return False


# Computed once at module load so the first login attempt is not measurably
# slower than subsequent ones.
_DUMMY_HASH: str = hash_password("devconnector_timing_dummy")


def authenticate_user(store: UserStore, email: str, password: str) -> tuple[User | None, str]:
    """Authenticate an email/password login with timing equalization.

    Always runs bcrypt whether or not the email exists:
    - Unknown email: bcrypt runs against _DUMMY_HASH (same cost as a real check)
    - Wrong password: bcrypt runs against the real hash

    Returns (user, "") on success, or (None, reason) where reason is
    "unknown_email" or "bad_password". The reason is for logging only.
    """
    user = store.get_by_email(email)
    if user is None:
        verify_password(password, _DUMMY_HASH)
        return None, "unknown_email"
    if not verify_password(password, user.hashed_password):
        return None, "bad_password"
    return user, ""


# ---------------------------------------------------------------------------
# JWT issue / verify
# ---------------------------------------------------------------------------


class TokenService:
    """Issues and verifies signed, time-limited bearer tokens.

    Usage:
        tokens = TokenService(settings.secret_key, settings.token_expire_seconds)
        token = tokens.issue(user.id)
        user_id = tokens.verify(token)   # raises InvalidToken
    """

    def __init__(self, secret_key: str, expire_seconds: int) -> None:
        self._secret_key = secret_key
        self.expire_seconds = expire_seconds

    def issue(self, user_id: str) -> str:
        """Encode a signed JWT for user_id that expires expire_seconds from now."""
        now = datetime.now(timezone.utc)
        payload = {
            "user": {"id": user_id},
            "iat": now,
            "exp": now + timedelta(seconds=self.expire_seconds),
        }
        return jwt.encode(payload, self._secret_key, algorithm=_ALGORITHM)

    def verify(self, token: str) -> str:
        """Decode and verify a JWT, returning the user id it was issued for.

        jose checks the signature and the exp claim. A token that decodes but
        lacks user.id is rejected the same way as a forged one.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[_ALGORITHM])
        except JWTError as exc:
            logger.debug("Token rejected: %s", exc)
            raise InvalidToken() from exc
        user = payload.get("user")
        user_id = user.get("id") if isinstance(user, dict) else None
        if not isinstance(user_id, str) or not user_id:
            raise InvalidToken()
        return user_id
