"""Tests for the client exception hierarchy."""

import pytest

from correios.errors import (
    CEPLookupError,
    CEPNotFoundError,
    ConfigurationError,
    CorreiosError,
    DecodeError,
    PartialResultError,
    TransportError,
    UnsupportedCharsetError,
)
from correios.services.frete_types import ServiceResult, ShippingResponse


@pytest.mark.parametrize("cls", [
    ConfigurationError, TransportError, DecodeError, PartialResultError,
    CEPLookupError, CEPNotFoundError, UnsupportedCharsetError,
])
def test_all_errors_share_base(cls):
    assert issubclass(cls, CorreiosError)


def test_transport_error_keeps_status():
    err = TransportError("http status: 503 Service Unavailable", status_code=503)
    assert err.status_code == 503
    assert err.message == "http status: 503 Service Unavailable"
    assert TransportError("boom").status_code is None


def test_decode_error_keeps_body():
    err = DecodeError("bad xml", raw_body=b"<html>")
    assert err.raw_body == b"<html>"
    assert str(err) == "bad xml"


def test_unsupported_charset_message():
    err = UnsupportedCharsetError("Shift-JIS", raw_body=b"x")
    assert str(err) == "unexpected charset: 'Shift-JIS'"
    assert err.raw_body == b"x"


def test_partial_result_carries_response():
    partial = ShippingResponse()
    partial.add(ServiceResult(service="04014"))
    err = PartialResultError("service 04510 failed", response=partial)
    assert "04014" in err.response


def test_cep_not_found_message():
    err = CEPNotFoundError("99999999")
    assert err.cep == "99999999"
    assert "99999999" in str(err)
