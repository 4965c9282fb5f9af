"""
auth/store.py -- SQLAlchemy Core persistence layer for user accounts.

Pattern: Repository + Data Mapper (same as profiles/store.py, posts/store.py).
UserStore is the repository; _row_to_user is the mapper. Service and
dependency code never touches SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.

  UNIQUE(email) backs the duplicate check in AuthService.register(): two
  concurrent registrations for the same address cannot both insert.

Layer rule: no imports from api/, profiles/, or posts/.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import Column, MetaData, String, Table, Text
from sqlalchemy.engine import Engine

from auth.models import User
from core.database import connect, new_id, now_iso

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_users = Table(
    "users",
    _metadata,
    Column("id", String(24), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("avatar", Text),
    Column("hashed_password", Text, nullable=False),
    Column("created_at", String(32), nullable=False),
)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class UserStore:
    """Repository for User records.

    Usage:
        store = UserStore(engine)
        user_id = store.create_user(User(name="Ada", email="ada@x.com", hashed_password=...))
        user = store.get_by_email("ada@x.com")
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        _metadata.create_all(self.engine)

    def create_user(self, user: User) -> str:
        """Insert a new user and return its assigned id.

        Raises StorageError if the email already exists (the UNIQUE
        constraint fires). AuthService checks get_by_email() first, so this
        only happens when two registrations race.
        """
        user_id = new_id()
        with connect(self.engine) as conn:
            conn.execute(
                _users.insert().values(
                    id=user_id,
                    name=user.name,
                    email=user.email,
                    avatar=user.avatar,
                    hashed_password=user.hashed_password,
                    created_at=now_iso(),
                )
            )
            conn.commit()
        return user_id

    def get_by_email(self, email: str) -> User | None:
        """Look up a user by email (stored lower-cased). Returns None if not found."""
        with connect(self.engine) as conn:
            row = conn.execute(_users.select().where(_users.c.email == email.lower())).fetchone()
        return _row_to_user(row) if row is not None else None

    def get_by_id(self, user_id: str) -> User | None:
        """Look up a user by primary key. Returns None if not found."""
        with connect(self.engine) as conn:
            row = conn.execute(_users.select().where(_users.c.id == user_id)).fetchone()
        return _row_to_user(row) if row is not None else None

    def get_by_ids(self, user_ids: Iterable[str]) -> dict[str, User]:
        """Batch lookup keyed by id. Missing ids are simply absent from the result."""
        ids = list(set(user_ids))
        if not ids:
            return {}
        with connect(self.engine) as conn:
            rows = conn.execute(_users.select().where(_users.c.id.in_(ids))).fetchall()
        return {row.id: _row_to_user(row) for row in rows}

    def delete_user(self, user_id: str) -> bool:
        """Permanently delete a user record. Returns True if deleted, False if not found.

        Profiles and posts owned by the user are not touched here; the caller
        decides what else goes with the account.
        """
        with connect(self.engine) as conn:
            result = conn.execute(_users.delete().where(_users.c.id == user_id))
            conn.commit()
        return result.rowcount > 0


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_user(row) -> User:
    return User(
        id=row.id,
        name=row.name,
        email=row.email,
        avatar=row.avatar or "",
        hashed_password=row.hashed_password,
        created_at=row.created_at,
    )
