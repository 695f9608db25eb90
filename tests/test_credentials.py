"""Tests for httpsh.credentials -- the Basic credential codec."""

from __future__ import annotations

import base64

import pytest

from httpsh.credentials import (
    build_authorization_header,
    decode_authorization_header,
    decode_userinfo,
    encode_userinfo,
    escape_userinfo_component,
)
from httpsh.exceptions import InvalidCredentialsError
from httpsh.models import BasicCredentials, Credentials


class TestBuildAuthorizationHeader:
    def test_username_and_password(self) -> None:
        assert build_authorization_header("njonsson", "123") == (
            "Authorization",
            "Basic bmpvbnNzb246MTIz",
        )

    def test_absent_password_is_encoded_as_empty(self) -> None:
        assert build_authorization_header("njonsson") == (
            "Authorization",
            "Basic bmpvbnNzb246",
        )

    def test_empty_username_is_accepted(self) -> None:
        assert build_authorization_header("", None)[1] == "Basic Og=="

    def test_absent_username_is_rejected(self) -> None:
        with pytest.raises(InvalidCredentialsError):
            build_authorization_header(None, "123")

    def test_percent_escapes_are_decoded(self) -> None:
        assert build_authorization_header("n%40", "123")[1] == "Basic bkA6MTIz"

    def test_escapes_decode_to_raw_bytes(self) -> None:
        expected = base64.b64encode(b"\xff:x").decode("ascii")
        assert build_authorization_header("%FF", "x")[1] == f"Basic {expected}"


class TestDecodeAuthorizationHeader:
    def test_basic(self) -> None:
        assert decode_authorization_header("Basic bmpvbnNzb246MTIz") == BasicCredentials(
            username=b"njonsson", password=b"123"
        )

    def test_scheme_is_case_insensitive(self) -> None:
        credentials = decode_authorization_header("basic YWxpY2U6czNjcmV0")
        assert credentials == BasicCredentials(username=b"alice", password=b"s3cret")

    def test_empty_password(self) -> None:
        assert decode_authorization_header("Basic YWxpY2U6") == BasicCredentials(
            username=b"alice", password=b""
        )

    def test_splits_on_first_colon(self) -> None:
        assert decode_authorization_header("Basic YTpiOmM=") == BasicCredentials(
            username=b"a", password=b"b:c"
        )

    def test_payload_need_not_be_utf8(self) -> None:
        value = "Basic " + base64.b64encode(b"caf\xe9:x").decode("ascii")
        assert decode_authorization_header(value) == BasicCredentials(
            username=b"caf\xe9", password=b"x"
        )

    @pytest.mark.parametrize("value", ["Bearer abc.def", "Digest username=x", "Token"])
    def test_other_schemes_are_skipped(self, value: str) -> None:
        assert decode_authorization_header(value) is None

    @pytest.mark.parametrize(
        "value",
        ["Basic !!!notbase64", "Basic bm9jb2xvbg==", "Basic", "Basic /w=="],
    )
    def test_malformed_payload_is_rejected(self, value: str) -> None:
        with pytest.raises(InvalidCredentialsError):
            decode_authorization_header(value)

    def test_round_trips_build(self) -> None:
        _, value = build_authorization_header("n%40", "123")
        assert decode_authorization_header(value) == BasicCredentials(
            username=b"n@", password=b"123"
        )


class TestUserinfo:
    def test_encode_with_password(self) -> None:
        assert encode_userinfo("njonsson", "123") == "njonsson:123"

    def test_encode_without_password(self) -> None:
        assert encode_userinfo("njonsson") == "njonsson"

    def test_encode_is_verbatim(self) -> None:
        assert encode_userinfo("n%40", "1%3A2") == "n%40:1%3A2"

    def test_decode_with_password(self) -> None:
        assert decode_userinfo("njonsson:123") == Credentials(
            username="njonsson", password="123"
        )

    def test_decode_without_password(self) -> None:
        assert decode_userinfo("njonsson") == Credentials(username="njonsson")

    def test_decode_keeps_escapes_and_later_colons(self) -> None:
        assert decode_userinfo("n%40:a:b") == Credentials(username="n%40", password="a:b")

    @pytest.mark.parametrize(
        "raw, escaped",
        [
            (b"njonsson", "njonsson"),
            (b"n@", "n%40"),
            (b"a:b", "a%3Ab"),
            (b"50%", "50%25"),
            ("café".encode("utf-8"), "caf%C3%A9"),
            (b"caf\xe9", "caf%E9"),
            (b"it's+ok", "it's+ok"),
        ],
    )
    def test_escape_component(self, raw: bytes, escaped: str) -> None:
        assert escape_userinfo_component(raw) == escaped
