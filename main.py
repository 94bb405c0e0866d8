#!/usr/bin/env python3
"""
SessionGate -- management commands.

Usage:
  python main.py serve [--host 127.0.0.1] [--port 8000] [--reload]
  python main.py routes
  python main.py seed
  python main.py verify admin

Environment variables are read through core.config (SECRET_KEY, DEBUG,
DATABASE_URL, SEED_USERNAME, SEED_PASSWORD, ...). Set DEBUG=true for local use
without a SECRET_KEY.
"""

import argparse
import getpass
import inspect
import sys
from typing import Optional

from auth.errors import AuthError
from auth.store import UserStore, seed_default_user
from auth.verifier import build_verifier
from core.config import get_settings


def _open_store() -> UserStore:
    return UserStore(get_settings().database_url)


def _endpoint_location(endpoint) -> str:
    """Return "module:line" for a route endpoint, or just the module if the source is unavailable."""
    func = inspect.unwrap(endpoint)
    module = getattr(func, "__module__", "?")
    try:
        _, line = inspect.getsourcelines(func)
    except (OSError, TypeError):
        return module
    return f"{module}:{line}"


def _iter_routes(routes):
    """Yield routes that carry a path, descending into included routers."""
    for route in routes:
        nested = getattr(route, "original_router", None)
        if nested is not None:
            yield from _iter_routes(nested.routes)
        elif getattr(route, "path", None) is not None:
            yield route


def print_routes() -> int:
    """List every registered route -- methods, path, name and where it is defined."""
    from asgi import app

    print("─" * 40)
    for route in _iter_routes(app.routes):
        methods = ",".join(sorted(getattr(route, "methods", None) or [])) or "-"
        endpoint = getattr(route, "endpoint", None)
        location = _endpoint_location(endpoint) if endpoint is not None else "-"
        name = getattr(route, "name", None) or "-"
        print(f"  {methods:<10} {route.path:<28} {name:<28} {location}")
    print("─" * 40)
    return 0


def seed() -> int:
    settings = get_settings()
    store = _open_store()
    try:
        user_id = seed_default_user(store, settings.seed_username, settings.seed_password)
    finally:
        store.close()
    if user_id is None:
        print("  Store already has users (or SEED_USERNAME is empty); nothing seeded.")
    else:
        print(f"  Created user {settings.seed_username!r} (id={user_id}).")
    return 0


def verify(username: str) -> int:
    """Prompt for a password and run the configured verifier against the store."""
    settings = get_settings()
    password = getpass.getpass(f"Password for {username}: ")
    store = _open_store()
    try:
        verifier = build_verifier(settings.auth_strategy, store)
        try:
            identity = verifier.verify(username, password)
        except AuthError as exc:
            print(f"  [!] {settings.messages.for_code(exc.code)} ({exc.code})")
            return 1
    finally:
        store.close()
    print(f"  OK: {identity.username} (id={identity.id})")
    return 0


def serve(host: str, port: int, reload: bool) -> int:
    import uvicorn

    uvicorn.run("asgi:app", host=host, port=port, reload=reload)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="sessiongate",
        description="Session-based login demo: management commands.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  DEBUG=true python main.py serve --reload
  python main.py routes
  python main.py seed
  python main.py verify admin
        """,
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    p_serve = sub.add_parser("serve", help="Run the web app under uvicorn")
    p_serve.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    p_serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    sub.add_parser("routes", help="List registered routes")
    sub.add_parser("seed", help="Create the seed user if the store is empty")

    p_verify = sub.add_parser("verify", help="Check a username/password pair against the store")
    p_verify.add_argument("username", help="Username to verify; the password is prompted for")

    args = parser.parse_args(argv)

    if args.command == "serve":
        return serve(args.host, args.port, args.reload)
    if args.command == "routes":
        return print_routes()
    if args.command == "seed":
        return seed()
    if args.command == "verify":
        return verify(args.username)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
