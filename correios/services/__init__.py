"""Correios service layer: pricing (frete) and CEP lookup."""

from correios.services.cep_service import CEPResult, CEPService, filter_cep
from correios.services.frete_service import FreteService, build_params
from correios.services.frete_types import (
    RequestMode,
    ServiceError,
    ServiceResult,
    ShippingRequest,
    ShippingResponse,
)
from correios.services.service_codes import ServiceCode

__all__ = [
    "CEPResult",
    "CEPService",
    "filter_cep",
    "FreteService",
    "build_params",
    "RequestMode",
    "ServiceCode",
    "ServiceError",
    "ServiceResult",
    "ShippingRequest",
    "ShippingResponse",
]
