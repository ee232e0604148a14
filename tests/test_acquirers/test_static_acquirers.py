"""Tests for the no-op, fixed-value, and Basic acquirers."""

from __future__ import annotations

import base64

import pytest

from authacquire.exceptions import ConfigError, EmptyCredentialsError, MissingCredentialsError
from authacquire.models import AuthConfig
from authacquire.plugins.basic import BasicAcquirer, encode_basic_credentials
from authacquire.plugins.fixed import FixedValueAcquirer
from authacquire.plugins.noop import DefaultAcquirer


# ---------------------------------------------------------------------------
# DefaultAcquirer
# ---------------------------------------------------------------------------


class TestDefaultAcquirer:
    def test_returns_empty_credential(self) -> None:
        assert DefaultAcquirer().acquire() == ""

    def test_from_config(self) -> None:
        acquirer = DefaultAcquirer.from_config(AuthConfig(type="none"))
        assert isinstance(acquirer, DefaultAcquirer)


# ---------------------------------------------------------------------------
# FixedValueAcquirer
# ---------------------------------------------------------------------------


class TestFixedValueAcquirer:
    def test_returns_value_verbatim(self) -> None:
        assert FixedValueAcquirer("Basic xyz==").acquire() == "Basic xyz=="

    def test_empty_value_rejected(self) -> None:
        with pytest.raises(EmptyCredentialsError):
            FixedValueAcquirer("")

    def test_from_config_resolves_source(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AUTH_HEADER", "Token t-123")
        acquirer = FixedValueAcquirer.from_config(AuthConfig(type="fixed", source="env:AUTH_HEADER"))
        assert acquirer.acquire() == "Token t-123"

    def test_from_config_missing_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("AUTH_HEADER", raising=False)
        with pytest.raises(ConfigError):
            FixedValueAcquirer.from_config(AuthConfig(type="fixed", source="env:AUTH_HEADER"))

    def test_validate_config(self) -> None:
        assert FixedValueAcquirer.validate_config(AuthConfig(type="fixed")) != []
        assert FixedValueAcquirer.validate_config(AuthConfig(type="fixed", source="value:x")) == []


# ---------------------------------------------------------------------------
# BasicAcquirer
# ---------------------------------------------------------------------------


class TestBasicAcquirer:
    def test_auth_type(self) -> None:
        assert BasicAcquirer.auth_type == "basic"

    @pytest.mark.parametrize("credentials", ["test credentials", "Z29waGVyOmhlbGxv", "x"])
    def test_encoded_credentials_returned_with_scheme(self, credentials: str) -> None:
        assert BasicAcquirer(credentials).acquire() == f"Basic {credentials}"

    def test_plain_text_matches_pre_encoded(self) -> None:
        plain = BasicAcquirer.from_plain_text("gopher", "hello")
        encoded = BasicAcquirer("Z29waGVyOmhlbGxv")
        assert plain.acquire() == encoded.acquire()

    @pytest.mark.parametrize(
        ("username", "password"),
        [("user", "pass"), ("", ""), ("ünïcødé", "p:a:ss"), ("a", "")],
    )
    def test_plain_text_equivalence(self, username: str, password: str) -> None:
        expected = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
        assert BasicAcquirer.from_plain_text(username, password).acquire() == BasicAcquirer(expected).acquire()

    def test_empty_credentials_fail_at_acquire(self) -> None:
        acquirer = BasicAcquirer("")
        with pytest.raises(MissingCredentialsError):
            acquirer.acquire()

    def test_encode_helper(self) -> None:
        assert encode_basic_credentials("gopher", "hello") == "Z29waGVyOmhlbGxv"

    def test_repr_hides_credentials(self) -> None:
        assert "Z29w" not in repr(BasicAcquirer("Z29waGVyOmhlbGxv"))

    def test_from_config_encoded_source(self) -> None:
        acquirer = BasicAcquirer.from_config(AuthConfig(type="basic", source="value:abc=="))
        assert acquirer.acquire() == "Basic abc=="

    def test_from_config_plain_pair(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BASIC_PASSWORD", "hello")
        config = AuthConfig(type="basic", username="gopher", password_source="env:BASIC_PASSWORD")
        assert BasicAcquirer.from_config(config).acquire() == "Basic Z29waGVyOmhlbGxv"

    def test_validate_config_requires_source_or_pair(self) -> None:
        assert BasicAcquirer.validate_config(AuthConfig(type="basic")) != []

    def test_validate_config_username_needs_password(self) -> None:
        errors = BasicAcquirer.validate_config(AuthConfig(type="basic", username="u"))
        assert any("password_source" in e for e in errors)
