"""
core/database.py -- Engine construction and helpers shared by every store.

DevConnector keeps its data document-shaped: each collection (users, profiles,
posts) is one table, scalar fields are columns, and nested arrays or
sub-objects are JSON serialized into Text columns. The stores in auth/,
profiles/ and posts/ all sit on one Engine created here.

SQLAlchemy Core (not ORM) keeps the dataclasses in */models.py the
authoritative domain representation. Swapping SQLite for PostgreSQL is a
DATABASE_URL change.

Usage:
    engine = create_db_engine("sqlite:///devconnector.db")
    users = UserStore(engine)
    ...
    engine.dispose()
"""

from __future__ import annotations

import json
import logging
import secrets
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from core.errors import StorageError

logger = logging.getLogger("devconnector.db")


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode for concurrent read safety.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool. In-memory databases ignore it.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


def create_db_engine(db_url: str) -> Engine:
    """Create the Engine every store shares.

    check_same_thread=False is required for SQLite because FastAPI runs sync
    route handlers on a thread pool.
    """
    connect_args: dict = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(db_url, connect_args=connect_args)
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", _set_wal_mode)
    return engine


@contextmanager
def connect(engine: Engine) -> Iterator[Connection]:
    """Yield a connection; any SQLAlchemyError leaves as StorageError.

    Callers commit explicitly, same as a bare engine.connect() block.
    """
    try:
        with engine.connect() as conn:
            yield conn
    except SQLAlchemyError as exc:
        logger.error("Storage failure: %s", exc)
        raise StorageError() from exc


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def new_id() -> str:
    """Return a fresh 24-hex-char document id (96 random bits)."""
    return secrets.token_hex(12)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def dump_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def load_json(raw: str | None, default: Any) -> Any:
    if not raw:
        return default
    return json.loads(raw)
