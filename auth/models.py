"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors
profiles/models.py and posts/models.py -- dataclasses own domain shape; stores
and services do the work.

Layer rule: no imports from api/, profiles/, or posts/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered account.

    email is stored lower-cased and is unique across all users; it is the
    login identifier. avatar is derived from the email at registration and
    snapshotted onto posts and comments the user writes.

    id is None before the record is written to the database.
    """

    name: str
    email: str
    hashed_password: str
    avatar: str = ""
    id: str | None = None
    created_at: str | None = None  # ISO 8601, set by store on insert
