"""Error handling for the Correios client.

This package provides:
- Exception taxonomy (transport, decode, configuration, partial fan-out)
- Carrier error code registry with an open integer lookup
"""

from correios.errors.domain import (
    CEPLookupError,
    CEPNotFoundError,
    ConfigurationError,
    CorreiosError,
    DecodeError,
    PartialResultError,
    TransportError,
    UnsupportedCharsetError,
)
from correios.errors.registry import (
    CARRIER_ERROR_REGISTRY,
    UNKNOWN_ERROR_MESSAGE,
    CarrierErrorCode,
    describe_carrier_error,
    is_retryable_carrier_error,
    lookup_carrier_error,
)

__all__ = [
    # Exceptions
    "CorreiosError",
    "ConfigurationError",
    "TransportError",
    "DecodeError",
    "UnsupportedCharsetError",
    "PartialResultError",
    "CEPLookupError",
    "CEPNotFoundError",
    # Registry
    "CarrierErrorCode",
    "CARRIER_ERROR_REGISTRY",
    "UNKNOWN_ERROR_MESSAGE",
    "lookup_carrier_error",
    "describe_carrier_error",
    "is_retryable_carrier_error",
]
