"""
tests/conftest.py -- Shared test fixtures for SessionGate.

This module provides:
  - _make_test_store(): creates an isolated named shared-memory UserStore
  - _patch_lifespan(): wires the test store into app.state, bypassing real startup
  - store: module-scoped UserStore seeded with admin/admin and alice
  - web_client: function-scoped TestClient with follow_redirects=False and a
    fresh cookie jar, so every test starts Anonymous

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker thread.

Environment variables must be set before any project import: get_settings()
is cached at first call and several modules read it at import time.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager

# CRITICAL: Set before any auth/core import.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("ALLOWED_HOSTS", '["testserver", "localhost"]')
os.environ.setdefault("LOGIN_RATE_LIMIT", "1000/minute")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from api.main import configure_auth
from asgi import app
from auth.models import User
from auth.passwords import hash_password
from auth.store import UserStore, seed_default_user
from core.config import get_settings

ADMIN = ("admin", "admin")
ALICE = ("alice", "wonderland-42")


def _make_test_store(db_suffix: str) -> UserStore:
    """Create an isolated named shared-memory SQLite store.

    Args:
        db_suffix: Unique string appended to the DB name so test modules
                   don't share state.
    """
    return UserStore(db_url=f"sqlite:///file:test_auth_{db_suffix}?mode=memory&cache=shared&uri=true")


def _patch_lifespan(store: UserStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        configure_auth(app, store, get_settings())
        yield

    return test_lifespan


@pytest.fixture(scope="module")
def store(request) -> Generator[UserStore, None, None]:
    """UserStore holding the seed admin/admin user plus alice."""
    user_store = _make_test_store(request.module.__name__.rsplit(".", 1)[-1])
    seed_default_user(user_store, *ADMIN)
    user_store.create_user(User(username=ALICE[0], hashed_password=hash_password(ALICE[1])))
    yield user_store
    user_store.close()


@pytest.fixture
def web_client(store: UserStore) -> Generator[TestClient, None, None]:
    """Yield a TestClient bound to the test store.

    follow_redirects=False is essential: tests assert on redirect Location
    headers, which are invisible once the client follows the redirect.
    """
    app.router.lifespan_context = _patch_lifespan(store)
    with TestClient(app, follow_redirects=False, raise_server_exceptions=True) as client:
        yield client


def login(client: TestClient, username: str, password: str):
    """POST the login form and return the (unfollowed) response."""
    return client.post("/auth/login", data={"username": username, "password": password})
