"""Tests for the remote bearer response parsers."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from authacquire.exceptions import ParseError
from authacquire.plugins.remote_bearer import (
    default_expiration_parser,
    default_token_parser,
    expires_in_parser,
    raw_token_expiration_parser,
    raw_token_parser,
)


_KEY = "k" * 32


def _body(**fields: object) -> bytes:
    return json.dumps(fields).encode("utf-8")


class TestDefaultParsers:
    def test_token(self) -> None:
        assert default_token_parser(_body(expires_in=60, serviceAccessToken="abc")) == "abc"

    def test_expiration_relative_to_clock(self, clock) -> None:
        parse = expires_in_parser(clock)
        assert parse(_body(expires_in=90, serviceAccessToken="abc")) == clock.now + timedelta(seconds=90)

    def test_fractional_expires_in(self, clock) -> None:
        parse = expires_in_parser(clock)
        assert parse(_body(expires_in=1.5, serviceAccessToken="abc")) == clock.now + timedelta(seconds=1.5)

    def test_default_expiration_uses_wall_clock(self) -> None:
        before = datetime.now(timezone.utc)
        expires = default_expiration_parser(_body(expires_in=60, serviceAccessToken="abc"))
        after = datetime.now(timezone.utc)
        assert before + timedelta(seconds=60) <= expires <= after + timedelta(seconds=60)

    @pytest.mark.parametrize(
        "payload",
        [
            b"{not json",
            b"[]",
            _body(expires_in=60),
            _body(serviceAccessToken="abc"),
            _body(expires_in="soon", serviceAccessToken="abc"),
        ],
    )
    def test_invalid_payloads(self, payload: bytes) -> None:
        with pytest.raises(ParseError):
            default_token_parser(payload)
        with pytest.raises(ParseError):
            default_expiration_parser(payload)


class TestRawParsers:
    def test_raw_token_strips_whitespace(self) -> None:
        assert raw_token_parser(b"  abc.def.ghi\n") == "abc.def.ghi"

    def test_raw_token_rejects_empty_body(self) -> None:
        with pytest.raises(ParseError):
            raw_token_parser(b"   ")

    def test_raw_token_rejects_invalid_utf8(self) -> None:
        with pytest.raises(ParseError):
            raw_token_parser(b"\xff\xfe")

    def test_exp_claim(self) -> None:
        token = jwt.encode({"exp": 1_900_000_000}, _KEY, algorithm="HS256")
        expires = raw_token_expiration_parser(token.encode("ascii"))
        assert expires == datetime.fromtimestamp(1_900_000_000, tz=timezone.utc)

    def test_expired_token_still_parses(self) -> None:
        token = jwt.encode({"exp": 1_000_000}, _KEY, algorithm="HS256")
        expires = raw_token_expiration_parser(token.encode("ascii"))
        assert expires.year == 1970

    def test_signature_is_not_verified(self) -> None:
        token = jwt.encode({"exp": 1_900_000_000}, "a" * 32, algorithm="HS256")
        tampered = token[:-2] + ("AA" if not token.endswith("AA") else "BB")
        assert raw_token_expiration_parser(tampered.encode("ascii")).year > 2000

    def test_missing_exp_claim(self) -> None:
        token = jwt.encode({"sub": "svc"}, _KEY, algorithm="HS256")
        with pytest.raises(ParseError, match="exp"):
            raw_token_expiration_parser(token.encode("ascii"))

    def test_not_a_jwt(self) -> None:
        with pytest.raises(ParseError):
            raw_token_expiration_parser(b"definitely-not-a-jwt")
