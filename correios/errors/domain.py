"""Typed exceptions raised by the Correios client.

Transport and decode failures abort the affected call. Carrier-side
rejections for a single service are NOT exceptions: they arrive as data
on ``ServiceResult.error`` so callers can tell "no usable quotes because
the call failed" apart from "one service was rejected by the carrier".

Usage:
    try:
        response = await svc.calcular_frete(request)
    except PartialResultError as e:
        usable = e.response.quotes()
    except TransportError as e:
        logger.warning("Correios offline: %s", e)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from correios.services.frete_types import ShippingResponse


class CorreiosError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(CorreiosError):
    """Invalid request object or unusable client configuration."""


class TransportError(CorreiosError):
    """Network failure, timeout or non-2xx HTTP status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(CorreiosError):
    """Response body could not be decoded.

    The raw body is kept for diagnostics.
    """

    def __init__(self, message: str, raw_body: bytes = b"") -> None:
        super().__init__(message)
        self.raw_body = raw_body


class UnsupportedCharsetError(DecodeError):
    """The XML document declared an encoding we cannot decode."""

    def __init__(self, charset: str, raw_body: bytes = b"") -> None:
        super().__init__(f"unexpected charset: {charset!r}", raw_body=raw_body)
        self.charset = charset


class PartialResultError(CorreiosError):
    """The last fan-out sub-call failed after earlier ones succeeded.

    ``response`` holds every service collected before the failure; the
    failing error is chained as ``__cause__``.
    """

    def __init__(self, message: str, response: ShippingResponse) -> None:
        super().__init__(message)
        self.response = response


class CEPLookupError(CorreiosError):
    """The CEP endpoint answered with ``erro: true``."""


class CEPNotFoundError(CorreiosError):
    """The CEP endpoint returned no address records."""

    def __init__(self, cep: str) -> None:
        super().__init__(f"correios: no results for CEP '{cep}'")
        self.cep = cep
