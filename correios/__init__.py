"""Client for the Correios public web endpoints.

- Frete: prices packages per shipping service via CalcPrecoPrazo
- CEP: resolves a CEP to street, district, city and UF
"""

from correios.config import CEPConfig, CorreiosConfig, FreteConfig, load_config
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
from correios.services import (
    CEPResult,
    CEPService,
    FreteService,
    RequestMode,
    ServiceCode,
    ServiceError,
    ServiceResult,
    ShippingRequest,
    ShippingResponse,
)

__version__ = "0.3.0"

__all__ = [
    "CEPConfig",
    "CorreiosConfig",
    "FreteConfig",
    "load_config",
    "CorreiosError",
    "ConfigurationError",
    "TransportError",
    "DecodeError",
    "UnsupportedCharsetError",
    "PartialResultError",
    "CEPLookupError",
    "CEPNotFoundError",
    "CEPResult",
    "CEPService",
    "FreteService",
    "RequestMode",
    "ServiceCode",
    "ServiceError",
    "ServiceResult",
    "ShippingRequest",
    "ShippingResponse",
]
