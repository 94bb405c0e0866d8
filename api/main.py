"""
api/main.py -- FastAPI application entry point for SessionGate.

Run with:      uvicorn asgi:app --reload
               python main.py serve

Middleware stack (outermost to innermost):
  1. TrustedHostMiddleware -- rejects requests with unexpected Host headers
  2. SessionMiddleware     -- signed cookie session (itsdangerous, SECRET_KEY)
  3. SlowAPIMiddleware     -- api.limiter state; the login limit is checked by its route decorator

Lifespan opens the user store, seeds the bootstrap account on an empty
database, builds the configured verifier and the gate, and disposes the store
on shutdown.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import Response

from api.limiter import limiter
from api.models import ErrorDetail, ErrorResponse, HealthResponse
from auth.errors import AuthenticationRequired
from auth.gate import SessionGate
from auth.store import UserStore, seed_default_user
from auth.verifier import build_verifier
from core.config import Settings, get_settings

__version__ = "0.1.0"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("sessiongate.api")

_settings = get_settings()


def configure_auth(app: FastAPI, store: UserStore, settings: Settings) -> SessionGate:
    """Attach the store, verifier and gate to app.state.

    Shared by the real lifespan and the test lifespan so both wire the gate
    the same way.
    """
    verifier = build_verifier(settings.auth_strategy, store)
    gate = SessionGate(store, verifier, settings)
    app.state.user_store = store
    app.state.gate = gate
    return gate


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the user store for the server lifetime and close it on shutdown."""
    logger.info("SessionGate starting up")
    store = UserStore(_settings.database_url)
    seed_default_user(store, _settings.seed_username, _settings.seed_password)
    configure_auth(app, store, _settings)
    logger.info("Auth initialized (strategy=%s, users=%d)", _settings.auth_strategy, store.count())

    yield

    app.state.user_store.close()
    logger.info("SessionGate shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="SessionGate",
    description="Session-based login, logout and protected routes.",
    version=__version__,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
)

# ---------------------------------------------------------------------------
# Middleware stack
# ---------------------------------------------------------------------------

app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    SessionMiddleware,
    secret_key=_settings.secret_key,
    session_cookie=_settings.session_cookie,
    max_age=_settings.session_max_age,
    same_site="lax",
    https_only=_settings.secure_cookies,
)

app.add_middleware(TrustedHostMiddleware, allowed_hosts=_settings.allowed_hosts)

# SlowAPI looks for app.state.limiter by convention.
app.state.limiter = limiter


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        response.status_code,
        ms,
        request.client.host if request.client else "unknown",
    )
    return response


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------


@app.exception_handler(AuthenticationRequired)
async def authentication_required_handler(request: Request, exc: AuthenticationRequired) -> Response:
    """Hand anonymous access to a protected route to the gate's failure hook."""
    gate: SessionGate = request.app.state.gate
    return gate.fail(request, exc.failure)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 with a structured error when a rate limit is exceeded."""
    retry_after = int(getattr(exc, "retry_after", 60))
    response = JSONResponse(
        status_code=429,
        content=ErrorResponse(
            error=ErrorDetail(
                code="rate_limited",
                message="Too many requests.",
                detail=str(exc),
            )
        ).model_dump(),
    )
    response.headers["Retry-After"] = str(retry_after)
    return response


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=ErrorDetail(
                code=f"http_{exc.status_code}",
                message=str(exc.detail),
            )
        ).model_dump(),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected server errors.

    The raw exception is written to the log only, never to the response body.
    """
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error=ErrorDetail(
                code="internal_error",
                message="An unexpected error occurred.",
            )
        ).model_dump(),
    )


# ---------------------------------------------------------------------------
# Health endpoint
#
# No rate limit and no auth: load balancers must always reach it.
# ---------------------------------------------------------------------------


@app.get("/health", tags=["Health"])
def health(request: Request) -> HealthResponse:
    """Return liveness, version and a database ping."""
    store: UserStore = request.app.state.user_store
    db_ok = store.ping()
    return HealthResponse(
        status="healthy" if db_ok else "degraded",
        version=__version__,
        components={"app": "ok", "database": "ok" if db_ok else "error"},
    )
