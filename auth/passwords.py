"""
auth/passwords.py -- bcrypt password hashing.

Security design decisions:
  bcrypt is used directly rather than through passlib[bcrypt]: passlib's
  wrap-bug detection builds a password longer than 72 bytes, which bcrypt 4.x
  rejects with an explicit error. Direct usage has no compatibility shim.

  The cost factor comes from Settings.bcrypt_rounds (BCRYPT_ROUNDS). Tests
  lower it to 4; production keeps the default of 12.

  DUMMY_HASH enables timing equalization in the verifier: an unknown username
  still pays for one bcrypt comparison, so response time alone does not tell
  an attacker which branch was taken.

Layer rule: no imports from api/ or web/. Import from core/ is allowed.
"""

from __future__ import annotations

import bcrypt

from core.config import get_settings

_settings = get_settings()


def hash_password(plain: str) -> str:
    """Return a salted bcrypt hash of the given plaintext password.

    Raises ValueError if the password is longer than 72 bytes once encoded;
    bcrypt cannot represent it without truncation.
    """
    encoded = plain.encode("utf-8")
    if len(encoded) > 72:
        raise ValueError("Password must be at most 72 bytes.")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=_settings.bcrypt_rounds)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash.

    bcrypt.checkpw compares in constant time. Inputs bcrypt refuses (over-long
    passwords, malformed hashes) count as a mismatch.
    """
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


# Computed once at module load so the first unknown-user attempt is not
# measurably slower than later ones.
DUMMY_HASH: str = hash_password("sessiongate_timing_dummy")
