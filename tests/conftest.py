"""
tests/conftest.py -- Shared test fixtures for DevConnector integration tests.

This module provides:
  - engine: an isolated in-memory database per test
  - client: TestClient over the real app, with the lifespan replaced so the
    services sit on the test engine
  - register: factory that signs a user up through the API and returns
    (token, user_id, headers)

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker thread.
The named URI format (file:name?mode=memory&cache=shared&uri=true) shares one
in-memory instance across all connections in the same process.

DEBUG must be set before any auth/core import so get_settings() generates a
SECRET_KEY instead of raising. BCRYPT_ROUNDS drops to the minimum so the
suite does not spend its time hashing.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Callable, Generator
from contextlib import asynccontextmanager

# CRITICAL: set before any auth/core import -- settings are read at import time.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from api.main import app, init_app_state
from core.config import get_settings
from core.database import create_db_engine

RegisterFn = Callable[..., tuple[str, str, dict[str, str]]]


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    eng = create_db_engine(f"sqlite:///file:test_{uuid.uuid4().hex}?mode=memory&cache=shared&uri=true")
    yield eng
    eng.dispose()


def _patch_lifespan(engine: Engine):
    """Return a lifespan that wires the services onto the test engine.

    The engine is owned by the fixture, so shutdown does not dispose it.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        init_app_state(app, engine, get_settings())
        yield

    return test_lifespan


@pytest.fixture
def client(engine: Engine) -> Generator[TestClient, None, None]:
    app.router.lifespan_context = _patch_lifespan(engine)
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


@pytest.fixture
def register(client: TestClient) -> RegisterFn:
    """Sign a user up via POST /api/users.

    Usage:
        token, user_id, headers = register("Ada", "ada@mail.com")
    """

    def _register(name: str = "Ada Lovelace", email: str = "ada@mail.com", password: str = "secret123"):
        resp = client.post("/api/users", json={"name": name, "email": email, "password": password})
        assert resp.status_code == 200, resp.text
        token = resp.json()["token"]
        user_id = app.state.tokens.verify(token)
        return token, user_id, {"x-auth-token": token}

    return _register
