"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for SessionGate happen here. No module should
call os.getenv() or os.environ.get() directly -- import get_settings() instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. secret_key -> SECRET_KEY). Nested models use "__" as delimiter
      (e.g. MESSAGES__MUST_LOG_IN).

  @model_validator(mode="after"): Runs cross-field validation after all fields
      are resolved. Dev mode generates a SECRET_KEY with a warning; production
      mode refuses to start without one.

Security notes:
  SECRET_KEY signs the session cookie. A key shorter than 32 chars is rejected
  outright, and a missing key outside DEBUG is a hard startup failure so a
  restart never silently invalidates every session.

Layer rule: core/ is the kernel. This module may not import from api/, web/,
or auth/.
"""

import logging
import secrets
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("sessiongate.config")

_DEFAULT_DB_URL = f"sqlite:///{Path(__file__).resolve().parent.parent / 'auth' / 'sessiongate.db'}"


class Messages(BaseModel):
    """User-visible flash texts. Keys of the auth error messages match AuthError.code."""

    must_log_in: str = "You must log in"
    login_success: str = "Successfully logged in"
    logout_success: str = "Successfully logged out"
    missing_username: str = "Please enter your username."
    missing_password: str = "Please enter your password."
    unknown_user: str = "The username you entered does not exist."
    invalid_credentials: str = "The username and password combination you entered is not valid."

    def for_code(self, code: str) -> str | None:
        """Return the message for an auth error code, or None for unknown codes.

        Used as a whitelist: raw codes from requests are never rendered.
        """
        if code not in _ERROR_CODES:
            return None
        return getattr(self, code)


_ERROR_CODES = frozenset({"must_log_in", "missing_username", "missing_password", "unknown_user", "invalid_credentials"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in test
    environments without a real .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    # Empty string is the sentinel for "not configured". The model_validator
    # below either generates a dev key or raises, so callers never see "".
    secret_key: str = ""
    database_url: str = _DEFAULT_DB_URL
    allowed_hosts: list[str] = ["localhost", "127.0.0.1", "*.localhost"]

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    session_cookie: str = "sessiongate"
    session_max_age: int = Field(default=14 * 24 * 60 * 60, gt=0)
    secure_cookies: bool = False

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    auth_strategy: str = "password"
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    login_rate_limit: str = "10/minute"
    landing_path: str = "/"
    login_path: str = "/auth/login"

    # Seed user created on first startup when the user table is empty.
    # An empty SEED_USERNAME disables seeding.
    seed_username: str = "admin"
    seed_password: str = "admin"

    messages: Messages = Messages()

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def validate_secret_key(self) -> "Settings":
        """Enforce the SECRET_KEY policy.

        Dev mode (DEBUG=true): auto-generate a random key with a warning.
            Sessions will not survive restart -- acceptable for local dev.

        Production mode (DEBUG=false or not set): refuse to start if
            SECRET_KEY is missing.

        Both modes: reject keys shorter than 32 characters.
        """
        if not self.secret_key:
            if self.debug:
                self.secret_key = secrets.token_hex(32)
                logger.warning(
                    "WARNING: Using auto-generated SECRET_KEY. " "Sessions will not persist across restarts."
                )
            else:
                raise ValueError(
                    "SECRET_KEY is required in production mode. "
                    "Set SECRET_KEY in your environment or .env file. "
                    "To run in development mode, set DEBUG=true."
                )
        if len(self.secret_key) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters.")
        return self

    @model_validator(mode="after")
    def validate_paths(self) -> "Settings":
        """Landing and login paths must be server-local so redirects never leave the site."""
        for name in ("landing_path", "login_path"):
            value = getattr(self, name)
            if not value.startswith("/") or value.startswith("//"):
                raise ValueError(f"{name.upper()} must be a relative path starting with '/', got {value!r}.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    Uses lru_cache so Settings() is instantiated exactly once -- at first call.
    All modules should call get_settings() rather than constructing Settings() directly.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
