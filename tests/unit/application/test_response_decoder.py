"""Unit tests for the two-phase response decode protocol."""

from __future__ import annotations

import json

import pytest

from mintclient.application.mint.dtos import (
    FeeQuote,
    KeysetDirectory,
    MeltOutcome,
    MintMetadata,
    MintQuote,
)
from mintclient.application.shared.response import MintHttpResponse
from mintclient.application.shared.response_decoder import (
    decode_mint_response,
    interpret_json_value,
)
from mintclient.domain.errors import MintDecodeError, MintProtocolError


def response(body: object, status: int = 200) -> MintHttpResponse:
    return MintHttpResponse(status_code=status, content=json.dumps(body).encode())


class TestSuccessPath:
    """A body matching the success model is returned as-is."""

    def test_success_shape_is_decoded(self) -> None:
        quote = decode_mint_response(
            response({"pr": "lnbc100n1", "hash": "abc"}), MintQuote
        )
        assert quote == MintQuote(pr="lnbc100n1", hash="abc")

    def test_success_wins_when_body_also_carries_error_like_fields(self) -> None:
        # MintMetadata has a free-form parameter dict; a success body is never
        # reinterpreted as an error
        body = {"name": "mint", "parameter": {"code": 1, "detail": "x"}}
        info = decode_mint_response(response(body), MintMetadata)
        assert info.name == "mint"

    def test_optional_fields_default_to_none(self) -> None:
        outcome = decode_mint_response(response({"paid": False}), MeltOutcome)
        assert outcome.paid is False
        assert outcome.preimage is None
        assert outcome.change is None


class TestProtocolErrors:
    """A body matching only the error model becomes a MintProtocolError."""

    def test_detail_is_preserved(self) -> None:
        with pytest.raises(MintProtocolError) as exc_info:
            decode_mint_response(
                response({"code": 11, "detail": "Token already spent"}), MeltOutcome
            )
        assert exc_info.value.code == 11
        assert exc_info.value.detail == "Token already spent"

    def test_legacy_error_field_is_preserved(self) -> None:
        with pytest.raises(MintProtocolError) as exc_info:
            decode_mint_response(
                response({"code": 0, "error": "Lightning invoice not paid yet."}),
                KeysetDirectory,
            )
        assert exc_info.value.code == 0
        assert exc_info.value.is_invoice_not_paid

    def test_error_body_never_passes_as_all_optional_success(self) -> None:
        with pytest.raises(MintProtocolError):
            decode_mint_response(
                response({"code": 20, "detail": "unknown"}), MintMetadata
            )

    def test_error_body_under_error_status(self) -> None:
        with pytest.raises(MintProtocolError) as exc_info:
            decode_mint_response(
                response({"code": 12, "detail": "invalid amount"}, status=400),
                FeeQuote,
            )
        assert exc_info.value.detail == "invalid amount"

    def test_other_errors_are_not_invoice_not_paid(self) -> None:
        error = MintProtocolError(11, "Token already spent")
        assert not error.is_invoice_not_paid


class TestDecodeErrors:
    """A body matching neither model becomes a MintDecodeError with raw text."""

    def test_json_string_body(self) -> None:
        raw = '"not json shape at all"'
        with pytest.raises(MintDecodeError) as exc_info:
            decode_mint_response(
                MintHttpResponse(status_code=200, content=raw.encode()), MintQuote
            )
        assert exc_info.value.raw == raw
        assert "not json shape at all" in exc_info.value.raw

    def test_raw_text_is_kept_byte_for_byte(self) -> None:
        raw = '{ "pr" : 5,\n  "unexpected": [1, 2] }'
        with pytest.raises(MintDecodeError) as exc_info:
            decode_mint_response(
                MintHttpResponse(status_code=200, content=raw.encode()), MintQuote
            )
        assert exc_info.value.raw == raw
        assert exc_info.value.status_code == 200

    def test_non_json_body(self) -> None:
        raw = "<html>502 Bad Gateway</html>"
        with pytest.raises(MintDecodeError) as exc_info:
            decode_mint_response(
                MintHttpResponse(status_code=502, content=raw.encode()), MintQuote
            )
        assert exc_info.value.raw == raw
        assert exc_info.value.status_code == 502

    def test_empty_body(self) -> None:
        with pytest.raises(MintDecodeError) as exc_info:
            decode_mint_response(
                MintHttpResponse(status_code=200, content=b""), FeeQuote
            )
        assert exc_info.value.raw == ""

    def test_extra_fields_are_rejected(self) -> None:
        with pytest.raises(MintDecodeError):
            decode_mint_response(response({"fee": 1, "unit": "sat"}), FeeQuote)

    def test_negative_amount_is_rejected(self) -> None:
        with pytest.raises(MintDecodeError):
            decode_mint_response(response({"fee": -1}), FeeQuote)


class TestStatusPrecedence:
    """A non-2xx status is never a success, whatever the body looks like."""

    def test_success_shape_under_error_status_is_decode_error(self) -> None:
        body = {"pr": "lnbc1", "hash": "abc"}
        with pytest.raises(MintDecodeError) as exc_info:
            decode_mint_response(response(body, status=500), MintQuote)
        assert exc_info.value.status_code == 500
        assert "HTTP 500" in str(exc_info.value)

    def test_interpret_json_value_directly(self) -> None:
        raw = '{"fee": 3}'
        assert interpret_json_value({"fee": 3}, raw, FeeQuote) == FeeQuote(fee=3)
        with pytest.raises(MintDecodeError):
            interpret_json_value({"fee": 3}, raw, FeeQuote, status_code=404)


class TestEncoding:
    """Bodies are parsed strictly as UTF-8."""

    def test_invalid_utf8_success_shape_is_decode_error(self) -> None:
        content = b'{"pr": "lnbc\xff\xfe", "hash": "abc"}'
        with pytest.raises(MintDecodeError) as exc_info:
            decode_mint_response(
                MintHttpResponse(status_code=200, content=content), MintQuote
            )
        assert exc_info.value.reason == "body is not JSON"
        assert exc_info.value.content == content

    def test_invalid_utf8_error_shape_is_decode_error(self) -> None:
        content = b'{"code": 11, "detail": "spent \xff"}'
        with pytest.raises(MintDecodeError) as exc_info:
            decode_mint_response(
                MintHttpResponse(status_code=400, content=content), MeltOutcome
            )
        assert exc_info.value.content == content

    def test_non_ascii_utf8_is_kept(self) -> None:
        body = {"name": "Münze ₿"}
        info = decode_mint_response(
            MintHttpResponse(
                status_code=200,
                content=json.dumps(body, ensure_ascii=False).encode("utf-8"),
            ),
            MintMetadata,
        )
        assert info.name == "Münze ₿"
