"""Integration tests for the per-IP limit on POST /auth/login.

conftest raises LOGIN_RATE_LIMIT so ordinary tests never trip it; here the
limit is lowered on the cached settings, which the route reads per request.
The shared in-memory counters are reset around each test.
"""

import pytest
from fastapi.testclient import TestClient

from api.limiter import limiter
from conftest import ADMIN, login
from core.config import get_settings


@pytest.fixture(autouse=True)
def low_login_limit(monkeypatch):
    monkeypatch.setattr(get_settings(), "login_rate_limit", "2/minute")
    limiter.reset()
    yield
    limiter.reset()


def test_login_over_limit_returns_429(web_client: TestClient) -> None:
    assert login(web_client, "admin", "wrong").status_code == 302
    assert login(web_client, "admin", "wrong").status_code == 302

    resp = login(web_client, *ADMIN)
    assert resp.status_code == 429
    assert "retry-after" in resp.headers
    assert resp.json()["error"]["code"] == "rate_limited"


def test_limited_login_does_not_authenticate(web_client: TestClient) -> None:
    login(web_client, "admin", "wrong")
    login(web_client, "admin", "wrong")
    login(web_client, *ADMIN)
    assert web_client.get("/protected").status_code == 302


def test_other_routes_are_not_limited(web_client: TestClient) -> None:
    for _ in range(5):
        assert web_client.get("/auth/login").status_code == 200
    assert login(web_client, *ADMIN).status_code == 302
