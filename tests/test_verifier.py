"""Unit tests for auth/verifier.py -- PasswordVerifier and strategy selection.

Covers:
- correct credentials return the matching identity
- wrong password -> InvalidCredentials, unknown user -> UnknownUser
- empty username / password short-circuit before any store lookup
- username matching is exact (case-sensitive)
- build_verifier() picks strategies by name and rejects unknown names
"""

from unittest.mock import MagicMock

import pytest

from auth.errors import AuthError, InvalidCredentials, MissingPassword, MissingUsername, UnknownUser
from auth.models import AuthAttempt, UserIdentity
from auth.verifier import PasswordVerifier, build_verifier
from conftest import ADMIN, ALICE


@pytest.fixture
def verifier(store):
    return PasswordVerifier(store)


class TestPasswordVerifier:
    def test_seed_user_verifies(self, verifier, store):
        identity = verifier.verify(*ADMIN)
        assert identity == UserIdentity(id=store.get_by_username("admin").id, username="admin")

    @pytest.mark.parametrize("username,password", [ADMIN, ALICE])
    def test_registered_pairs_succeed(self, verifier, username, password):
        assert verifier.verify(username, password).username == username

    def test_wrong_password(self, verifier):
        with pytest.raises(InvalidCredentials):
            verifier.verify("admin", "wrong")

    def test_other_users_password_is_rejected(self, verifier):
        with pytest.raises(InvalidCredentials):
            verifier.verify("admin", ALICE[1])

    def test_unknown_user(self, verifier):
        with pytest.raises(UnknownUser):
            verifier.verify("nobody", "x")

    def test_username_match_is_case_sensitive(self, verifier):
        with pytest.raises(UnknownUser):
            verifier.verify("Admin", "admin")

    def test_empty_username(self, verifier):
        with pytest.raises(MissingUsername):
            verifier.verify("", "x")

    def test_empty_password(self, verifier):
        with pytest.raises(MissingPassword):
            verifier.verify("admin", "")

    def test_both_empty_reports_username_first(self, verifier):
        with pytest.raises(MissingUsername):
            verifier.verify("", "")

    def test_overlong_password_is_invalid_not_an_error(self, verifier):
        with pytest.raises(InvalidCredentials):
            verifier.verify("admin", "a" * 200)

    def test_errors_share_base_class_and_codes(self, verifier):
        with pytest.raises(AuthError) as excinfo:
            verifier.verify("nobody", "x")
        assert excinfo.value.code == "unknown_user"

    def test_verify_attempt_delegates(self, verifier):
        assert verifier.verify_attempt(AuthAttempt(*ALICE)).username == "alice"

    def test_repeat_verification_is_idempotent(self, verifier):
        assert verifier.verify(*ALICE) == verifier.verify(*ALICE)


class TestShortCircuit:
    """Missing* checks must happen before the store is touched."""

    @pytest.mark.parametrize(
        "username,password,error",
        [("", "x", MissingUsername), ("admin", "", MissingPassword), ("", "", MissingUsername)],
    )
    def test_no_lookup_on_empty_fields(self, username, password, error):
        mock_store = MagicMock()
        with pytest.raises(error):
            PasswordVerifier(mock_store).verify(username, password)
        mock_store.get_by_username.assert_not_called()

    def test_single_lookup_per_attempt(self):
        mock_store = MagicMock()
        mock_store.get_by_username.return_value = None
        with pytest.raises(UnknownUser):
            PasswordVerifier(mock_store).verify("ghost", "pw")
        mock_store.get_by_username.assert_called_once_with("ghost")


class TestBuildVerifier:
    def test_password_strategy(self, store):
        verifier = build_verifier("password", store)
        assert isinstance(verifier, PasswordVerifier)
        assert verifier.store is store

    def test_unknown_strategy_raises(self, store):
        with pytest.raises(ValueError, match="Unknown auth strategy 'ldap'"):
            build_verifier("ldap", store)


def test_attempt_repr_hides_password():
    assert "wonderland" not in repr(AuthAttempt(*ALICE))
