"""
auth/verifier.py -- Credential verification strategies.

A Verifier turns a username/password pair into a UserIdentity or raises an
AuthError subclass naming the reason. Strategies are plain classes listed in
STRATEGIES and picked by name from configuration (AUTH_STRATEGY) through
build_verifier(); there is no runtime registration.

PasswordVerifier check order:
  1. empty username  -> MissingUsername      (no store access)
  2. empty password  -> MissingPassword      (no store access)
  3. unknown user    -> UnknownUser          (bcrypt still runs on DUMMY_HASH)
  4. hash mismatch   -> InvalidCredentials
  5. otherwise       -> UserIdentity(id, username)

Verification is read-only: one lookup, one bcrypt comparison, nothing written.

Layer rule: no imports from api/ or web/.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from auth.errors import InvalidCredentials, MissingPassword, MissingUsername, UnknownUser
from auth.models import AuthAttempt, UserIdentity
from auth.passwords import DUMMY_HASH, verify_password
from auth.store import UserStore


class Verifier(ABC):
    """Capability: check one credential pair against the user store."""

    name: str = ""

    def __init__(self, store: UserStore) -> None:
        self.store = store

    @abstractmethod
    def verify(self, username: str, password: str) -> UserIdentity:
        """Return the matching identity or raise an AuthError subclass."""

    def verify_attempt(self, attempt: AuthAttempt) -> UserIdentity:
        return self.verify(attempt.username, attempt.password)


class PasswordVerifier(Verifier):
    """Username + bcrypt password check against UserStore."""

    name = "password"

    def verify(self, username: str, password: str) -> UserIdentity:
        if not username:
            raise MissingUsername()
        if not password:
            raise MissingPassword()

        user = self.store.get_by_username(username)
        if user is None:
            # Equalize timing -- pay for one bcrypt round before reporting.
            verify_password(password, DUMMY_HASH)
            raise UnknownUser(username)
        if not verify_password(password, user.hashed_password):
            raise InvalidCredentials(username)
        return UserIdentity(id=user.id, username=user.username)


STRATEGIES: dict[str, type[Verifier]] = {
    PasswordVerifier.name: PasswordVerifier,
}


def build_verifier(name: str, store: UserStore) -> Verifier:
    """Instantiate the strategy configured under `name`.

    Raises ValueError for unknown names so a typo in AUTH_STRATEGY fails at
    startup rather than on the first login.
    """
    try:
        strategy = STRATEGIES[name]
    except KeyError:
        known = ", ".join(sorted(STRATEGIES))
        raise ValueError(f"Unknown auth strategy {name!r}. Known strategies: {known}.") from None
    return strategy(store)
