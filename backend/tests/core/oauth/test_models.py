"""Tests for wire models and account mapping."""

import pytest
from pydantic import ValidationError

from identity_gate.core.oauth.models import Account, AccessTokenGrant, ProviderError, User


def _grant(scope: str) -> AccessTokenGrant:
    return AccessTokenGrant(access_token="abc", scope=scope, token_type="bearer")


class TestAccessTokenGrant:
    @pytest.mark.parametrize(
        "scope",
        ["user:email", "user:email,read:org", "repo,user:email", "repo,,user:email"],
    )
    def test_has_scope(self, scope):
        assert _grant(scope).has_scope("user:email")

    @pytest.mark.parametrize(
        "scope",
        ["", "user:emailx", "xuser:email", "user", "repo,,read:org", " user:email ", "repo, user:email", "user:email\n"],
    )
    def test_lacks_scope(self, scope):
        assert not _grant(scope).has_scope("user:email")

    def test_scopes_keep_raw_entries(self):
        assert _grant("repo,,user:email,").scopes == ["repo", "", "user:email", ""]
        assert _grant("repo, user:email").scopes == ["repo", " user:email"]


class TestProviderError:
    def test_str(self):
        err = ProviderError(error="bad_verification_code", error_description="expired", error_uri="https://x")

        assert str(err) == "err=bad_verification_code, desc=expired, uri=https://x"


class TestUserToAccount:
    def test_copies_login_and_email(self, user_payload):
        user = User.model_validate(user_payload)

        assert user.to_account() == Account(name="octocat", email="octocat@github.com")

    def test_email_left_unset_when_absent(self):
        user = User(login="hubot", id=2)

        account = user.to_account()

        assert account.name == "hubot"
        assert account.email is None
        assert account.to_dict() == {"name": "hubot", "email": None}

    def test_models_are_immutable(self):
        user = User(login="hubot", id=2)

        with pytest.raises(ValidationError):
            user.login = "other"
