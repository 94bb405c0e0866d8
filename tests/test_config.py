"""Unit tests for core/config.py -- Settings validation.

Settings are constructed directly (not via get_settings()) with _env_file=None
so a developer's local .env cannot leak into the assertions. Init kwargs take
priority over the DEBUG/... variables conftest puts in the environment.
"""

import pytest
from pydantic import ValidationError

from core.config import Messages, Settings

_KEY = "k" * 32


class TestSecretKey:
    def test_production_requires_secret_key(self):
        with pytest.raises(ValidationError, match="SECRET_KEY is required"):
            Settings(_env_file=None, debug=False, secret_key="")

    def test_debug_generates_secret_key(self):
        settings = Settings(_env_file=None, debug=True, secret_key="")
        assert len(settings.secret_key) >= 32

    def test_short_secret_key_rejected(self):
        with pytest.raises(ValidationError, match="at least 32 characters"):
            Settings(_env_file=None, debug=True, secret_key="short")

    def test_explicit_key_kept(self):
        assert Settings(_env_file=None, debug=False, secret_key=_KEY).secret_key == _KEY


class TestPaths:
    @pytest.mark.parametrize("value", ["https://example.com/", "//example.com", "login"])
    def test_offsite_login_path_rejected(self, value):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, secret_key=_KEY, login_path=value)

    def test_custom_landing_path(self):
        assert Settings(_env_file=None, secret_key=_KEY, landing_path="/home").landing_path == "/home"


class TestBcryptRounds:
    @pytest.mark.parametrize("rounds", [3, 32])
    def test_out_of_range_rejected(self, rounds):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, secret_key=_KEY, bcrypt_rounds=rounds)


class TestMessages:
    def test_default_notice_texts(self):
        messages = Messages()
        assert messages.must_log_in == "You must log in"
        assert messages.login_success == "Successfully logged in"
        assert messages.logout_success == "Successfully logged out"

    def test_for_code_whitelist(self):
        messages = Messages()
        assert messages.for_code("unknown_user") == messages.unknown_user
        assert messages.for_code("login_success") is None
        assert messages.for_code("__class__") is None

    def test_nested_env_override(self, monkeypatch):
        monkeypatch.setenv("MESSAGES__MUST_LOG_IN", "Please sign in first")
        settings = Settings(_env_file=None, secret_key=_KEY)
        assert settings.messages.must_log_in == "Please sign in first"
        assert settings.messages.login_success == "Successfully logged in"
