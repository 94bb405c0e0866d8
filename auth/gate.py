"""
auth/gate.py -- Session authentication gate.

The gate owns the two session states and every transition between them:

  Anonymous     --protected route-->  Anonymous       record path (first wins), fail()
  Anonymous     --login ok-------->   Authenticated   store user_id, redirect return_to or landing
  Anonymous     --login failed---->   Anonymous       fail() with the AuthError message
  Authenticated --logout---------->   Anonymous       clear session, redirect landing
  Authenticated --protected route-->  Authenticated   pass-through, no re-verification

Failure handling is an explicit hook rather than a framework-level rewrite of
the request: fail() records the attempted path and hands the request and an
AuthFailure to `failure_app`, a plain callable returning a Response. The
default failure app flashes the message and redirects to the login page.
Every authentication failure resolves to a redirect -- nothing raised here
reaches the generic 500 handler.

Layer rule: no imports from api/ or web/.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from auth import session
from auth.errors import AuthenticationRequired, AuthError, AuthFailure
from auth.models import UserIdentity
from auth.store import UserStore
from auth.verifier import Verifier
from core.config import Settings

logger = logging.getLogger("sessiongate.auth")

FailureApp = Callable[[Request, AuthFailure], Response]


class GateState(str, Enum):
    anonymous = "anonymous"
    authenticated = "authenticated"


def safe_next(next_url: Optional[str], default: str = "/") -> str:
    """Validate a post-login redirect target. Only accept relative paths.

    Rejects absolute URLs and protocol-relative "//host" URLs, which would
    redirect off-site after login.
    """
    if next_url and next_url.startswith("/") and not next_url.startswith("//"):
        return next_url
    return default


def _attempted_path(request: Request) -> str:
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return path


class SessionGate:
    """Enforces that protected routes require an authenticated session.

    Usage (wired in the app lifespan):
        gate = SessionGate(store, build_verifier("password", store), settings)
        app.state.gate = gate
    """

    def __init__(
        self,
        store: UserStore,
        verifier: Verifier,
        settings: Settings,
        failure_app: Optional[FailureApp] = None,
    ) -> None:
        self.store = store
        self.verifier = verifier
        self.settings = settings
        self.failure_app: FailureApp = failure_app or self.redirect_to_login

    # ------------------------------------------------------------------
    # Session -> identity
    # ------------------------------------------------------------------

    def current_user(self, request: Request) -> UserIdentity | None:
        """Load the identity referenced by the session, or None if anonymous.

        A user_id whose record has since been deleted is dropped from the
        session so the stale cookie stops costing a lookup per request.
        """
        user_id = session.get_user_id(request)
        if user_id is None:
            return None
        user = self.store.get_by_id(user_id)
        if user is None:
            logger.info("Session referenced missing user id=%d, dropping it", user_id)
            session.forget_user_id(request)
            return None
        return UserIdentity(id=user.id, username=user.username)

    def state(self, request: Request) -> GateState:
        if self.current_user(request) is None:
            return GateState.anonymous
        return GateState.authenticated

    def authenticate(self, request: Request) -> UserIdentity:
        """Protected-route check. Raises AuthenticationRequired when anonymous."""
        user = self.current_user(request)
        if user is None:
            raise AuthenticationRequired(AuthFailure(attempted_path=_attempted_path(request)))
        return user

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def login(self, request: Request, username: str, password: str) -> Response:
        """Verify a login submission and move the session to Authenticated."""
        try:
            user = self.verifier.verify(username, password)
        except AuthError as exc:
            logger.warning("Login failed (%s) for username %r", exc.code, username)
            return self.fail(
                request,
                AuthFailure(message=self.settings.messages.for_code(exc.code), code=exc.code),
            )

        return_to = session.pop_return_to(request)
        # Fresh session on privilege change; nothing from the anonymous session carries over.
        request.session.clear()
        session.set_user_id(request, user.id)
        session.flash(request, self.settings.messages.login_success, "success")
        logger.info("User %r (id=%d) logged in", user.username, user.id)
        target = safe_next(return_to, default=self.settings.landing_path)
        return RedirectResponse(target, status_code=302)

    def logout(self, request: Request) -> Response:
        """Clear the session whatever it held and redirect to the landing page."""
        user_id = session.get_user_id(request)
        request.session.clear()
        session.flash(request, self.settings.messages.logout_success, "success")
        if user_id is not None:
            logger.info("User id=%d logged out", user_id)
        return RedirectResponse(self.settings.landing_path, status_code=302)

    def fail(self, request: Request, failure: AuthFailure) -> Response:
        """Failure hook: remember the attempted path, then run the failure app."""
        if failure.attempted_path:
            path = safe_next(failure.attempted_path, default="")
            if path and session.remember_return_to(request, path):
                logger.debug("Recorded return path %s", path)
        return self.failure_app(request, failure)

    def redirect_to_login(self, request: Request, failure: AuthFailure) -> Response:
        """Default failure app: flash the reason and send the browser to the login form."""
        session.flash(request, failure.message or self.settings.messages.must_log_in, "error")
        return RedirectResponse(self.settings.login_path, status_code=302)
