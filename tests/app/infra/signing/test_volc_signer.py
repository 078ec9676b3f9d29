"""Testes do assinador HMAC-SHA256 (canonical request)."""

from __future__ import annotations

import hashlib
import hmac
from datetime import UTC, datetime, timedelta, timezone

import pytest

from app.infra.signing import VolcRequestSigner, canonical_query
from utils.errors import ConfigError

AK = "AKLTexample"
SK = "c2VjcmV0LWtleQ=="
NOW = datetime(2024, 3, 5, 7, 8, 9, tzinfo=UTC)


def _hmac(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode(), hashlib.sha256).digest()


def _signer() -> VolcRequestSigner:
    return VolcRequestSigner(AK, SK, clock=lambda: NOW)


class TestCanonicalQuery:
    def test_sorted_by_key(self) -> None:
        assert canonical_query({"b": "2", "a": "1", "Action": "X"}) == "Action=X&a=1&b=2"

    def test_rfc3986_encoding(self) -> None:
        assert canonical_query({"k": "a b/c~d*"}) == "k=a%20b%2Fc~d%2A"

    def test_lists_are_expanded_and_sorted_by_value(self) -> None:
        assert canonical_query({"id": ["2", "1"]}) == "id=1&id=2"

    def test_none_and_empty_query(self) -> None:
        assert canonical_query(None) == ""
        assert canonical_query({"a": None}) == ""

    def test_bools_are_lowercase(self) -> None:
        assert canonical_query({"on": True, "off": False}) == "off=false&on=true"


class TestVolcRequestSigner:
    def test_requires_credentials(self) -> None:
        with pytest.raises(ConfigError):
            VolcRequestSigner("", SK)
        with pytest.raises(ConfigError):
            VolcRequestSigner(AK, "")

    def test_signature_follows_hmac_chain(self) -> None:
        """Recalcula a assinatura passo a passo e compara."""
        query = {"Action": "STSToken", "Version": "2022-03-01"}
        context = _signer().sign("GET", "/", query)

        body_hash = hashlib.sha256(b"").hexdigest()
        canonical_request = (
            "GET\n/\nAction=STSToken&Version=2022-03-01\n"
            "host:open.volcengineapi.com\n"
            "x-date:20240305T070809Z\n"
            f"x-content-sha256:{body_hash}\n"
            "content-type:application/x-www-form-urlencoded\n"
            "\n"
            "host;x-date;x-content-sha256;content-type\n"
            f"{body_hash}"
        )
        scope = "20240305/cn-north-1/veGame/request"
        string_to_sign = (
            "HMAC-SHA256\n20240305T070809Z\n"
            f"{scope}\n{hashlib.sha256(canonical_request.encode()).hexdigest()}"
        )
        k_signing = _hmac(_hmac(_hmac(_hmac(SK.encode(), "20240305"), "cn-north-1"), "veGame"), "request")
        expected = hmac.new(k_signing, string_to_sign.encode(), hashlib.sha256).hexdigest()

        assert context.canonical_request == canonical_request
        assert context.credential_scope == scope
        assert context.signature == expected
        assert context.authorization == (
            f"HMAC-SHA256 Credential={AK}/{scope}, "
            f"SignedHeaders=host;x-date;x-content-sha256;content-type, Signature={expected}"
        )

    def test_sign_is_deterministic(self) -> None:
        signer = _signer()
        args = ("POST", "/", {"Action": "List"}, b'{"a":1}')
        assert signer.sign(*args).authorization == signer.sign(*args).authorization

    def test_body_changes_signature(self) -> None:
        signer = _signer()
        first = signer.sign("POST", "/", {"Action": "List"}, b'{"a":1}')
        second = signer.sign("POST", "/", {"Action": "List"}, b'{"a":2}')
        assert first.signature != second.signature

    def test_signed_headers_share_x_date_with_signature(self) -> None:
        headers = _signer().signed_headers("GET", "/", {"Action": "X"})

        assert set(headers) == {"Host", "Content-Type", "X-Date", "X-Content-Sha256", "Authorization"}
        assert headers["X-Date"] == "20240305T070809Z"
        assert headers["Host"] == "open.volcengineapi.com"
        assert "Credential=AKLTexample/20240305/" in headers["Authorization"]

    def test_non_utc_time_is_converted(self) -> None:
        local = NOW.astimezone(timezone(timedelta(hours=8)))
        assert _signer().sign("GET", "/", now=local).x_date == "20240305T070809Z"

    def test_method_is_uppercased(self) -> None:
        assert _signer().sign("get", "/").canonical_request.startswith("GET\n/\n")
