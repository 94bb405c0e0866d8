"""
auth/errors.py -- Authentication failure taxonomy.

Every AuthError is a recoverable, user-facing input error. The gate catches
them at its boundary and turns them into a redirect plus a flash message;
none of them is ever allowed to reach the generic 500 handler.

The `code` attribute keys the configurable message text in
core.config.Messages, so the wording lives in configuration, not here.

Layer rule: no imports from api/ or web/.
"""

from __future__ import annotations

from dataclasses import dataclass


class AuthError(Exception):
    """Base class for credential verification failures."""

    code = "auth_error"


class MissingUsername(AuthError):
    code = "missing_username"


class MissingPassword(AuthError):
    code = "missing_password"


class UnknownUser(AuthError):
    code = "unknown_user"


class InvalidCredentials(AuthError):
    code = "invalid_credentials"


@dataclass(frozen=True)
class AuthFailure:
    """Context handed to the gate's failure hook.

    attempted_path is the protected path the anonymous request asked for, or
    None when the failure came from a login submission. message is the text
    to show; None means the configured "must log in" default.
    """

    attempted_path: str | None = None
    message: str | None = None
    code: str = "must_log_in"


class AuthenticationRequired(Exception):
    """Raised by the require_user dependency for anonymous requests.

    The app-level exception handler passes exc.failure to SessionGate.fail(),
    which always resolves to a redirect.
    """

    def __init__(self, failure: AuthFailure) -> None:
        super().__init__(failure.attempted_path or "authentication required")
        self.failure = failure
