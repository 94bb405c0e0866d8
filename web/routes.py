"""
web/routes.py -- Jinja2 template routes for the SessionGate web UI.

These routes are thin: every authentication decision is made by the gate in
request.app.state.gate. The handlers only render pages or hand form data to
the gate and return whatever response it produces.

Routes:
  GET  /                      -- landing page (public)
  GET  /auth/login            -- login form
  POST /auth/login            -- handle password login (rate limited)
  GET  /auth/logout           -- clear session, redirect to landing page
  POST /auth/unauthenticated  -- failure hook target: remember path, flash, redirect to login
  GET  /protected             -- example protected page (auth required)
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from api.limiter import limiter
from auth.dependencies import get_gate, require_user, try_get_current_user
from auth.errors import AuthFailure
from auth.models import UserIdentity
from auth.session import get_flashed_messages
from core.config import get_settings

logger = logging.getLogger("sessiongate.web")

_settings = get_settings()

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
# Exposed as globals so layout.html can show the current user and pending
# flashes without every handler adding them to the context.
templates.env.globals["try_get_current_user"] = try_get_current_user
templates.env.globals["get_flashed_messages"] = get_flashed_messages
router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def index(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html")


@router.get("/auth/login", response_class=HTMLResponse)
def login_form(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "login.html")


def _login_rate_limit() -> str:
    return get_settings().login_rate_limit


# @router sits outermost so the registered endpoint is the limited wrapper and
# the limit holds however the router is mounted.
@router.post("/auth/login")
@limiter.limit(_login_rate_limit)
def login_post(
    request: Request,
    username: str = Form(default=""),
    password: str = Form(default=""),
) -> Response:
    """Handle the login form. Missing fields arrive as "" and fail verification."""
    return get_gate(request).login(request, username, password)


@router.get("/auth/logout")
def logout(request: Request) -> Response:
    return get_gate(request).logout(request)


@router.post("/auth/unauthenticated")
def unauthenticated(
    request: Request,
    attempted_path: str = Form(default=""),
    error: str = Form(default=""),
) -> Response:
    """Run the gate's failure hook for an externally reported failure.

    `error` is mapped through the configured message whitelist; unknown codes
    fall back to the default "must log in" text so no request text is ever
    reflected into a flash message.
    """
    message = _settings.messages.for_code(error) if error else None
    failure = AuthFailure(attempted_path=attempted_path or None, message=message, code=error if message else "must_log_in")
    return get_gate(request).fail(request, failure)


@router.get("/protected", response_class=HTMLResponse)
def protected(request: Request, user: UserIdentity = Depends(require_user)) -> HTMLResponse:
    return templates.TemplateResponse(request, "protected.html", {"user": user})
