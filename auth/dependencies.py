"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

try_get_current_user() is the soft variant (returns None when anonymous).
require_user() raises AuthenticationRequired, which the app-level exception
handler turns into SessionGate.fail() -- a redirect to the login form with the
requested path remembered.

Both read the gate from request.app.state.gate, wired in the app lifespan.

Layer rule: no imports from api/ or web/.
"""

from __future__ import annotations

from fastapi import Request

from auth.gate import SessionGate
from auth.models import UserIdentity


def get_gate(request: Request) -> SessionGate:
    return request.app.state.gate


def try_get_current_user(request: Request) -> UserIdentity | None:
    """Return the session's identity, or None. Never raises."""
    return get_gate(request).current_user(request)


def require_user(request: Request) -> UserIdentity:
    """Require an authenticated session.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(user: UserIdentity = Depends(require_user)): ...
    """
    return get_gate(request).authenticate(request)
