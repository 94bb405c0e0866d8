"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Dataclasses own domain
shape; the store, verifier and gate do the work.

Layer rule: no imports from api/ or web/.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class User:
    """A stored account.

    hashed_password is a bcrypt hash. The plaintext password never reaches
    this object. Username uniqueness is enforced by the users table.
    """

    username: str
    hashed_password: str
    id: int | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class UserIdentity:
    """The authenticated identity handed out by the verifier and the gate."""

    id: int
    username: str


@dataclass(frozen=True)
class AuthAttempt:
    """One username/password submission. Never persisted."""

    username: str
    password: str = field(repr=False)
