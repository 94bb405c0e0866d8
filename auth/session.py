"""
auth/session.py -- Helpers over the signed session blob.

The session itself is Starlette's SessionMiddleware dict: JSON, signed with
SECRET_KEY via itsdangerous and held in a cookie. These helpers are the only
code that knows the key names, so the gate and the templates never index
request.session directly.

Keys:
  user_id    -- id of the authenticated user (the only identity data stored)
  return_to  -- path to resume after the next successful login
  _flashes   -- pending one-shot messages as [category, message] pairs
"""

from __future__ import annotations

from starlette.requests import Request

USER_ID_KEY = "user_id"
RETURN_TO_KEY = "return_to"
FLASHES_KEY = "_flashes"


def get_user_id(request: Request) -> int | None:
    value = request.session.get(USER_ID_KEY)
    return value if isinstance(value, int) else None


def set_user_id(request: Request, user_id: int) -> None:
    request.session[USER_ID_KEY] = user_id


def forget_user_id(request: Request) -> None:
    request.session.pop(USER_ID_KEY, None)


def remember_return_to(request: Request, path: str) -> bool:
    """Record `path` as the post-login target unless one is already recorded.

    Returns True if the path was stored. The first protected path an
    anonymous visitor asked for wins.
    """
    if request.session.get(RETURN_TO_KEY) is not None:
        return False
    request.session[RETURN_TO_KEY] = path
    return True


def pop_return_to(request: Request) -> str | None:
    return request.session.pop(RETURN_TO_KEY, None)


def flash(request: Request, message: str, category: str = "info") -> None:
    """Queue a message for the next rendered page."""
    flashes = request.session.get(FLASHES_KEY) or []
    flashes.append([category, message])
    request.session[FLASHES_KEY] = flashes


def get_flashed_messages(request: Request) -> list[tuple[str, str]]:
    """Return and clear pending messages as (category, message) tuples."""
    flashes = request.session.pop(FLASHES_KEY, None) or []
    return [(category, message) for category, message in flashes]
