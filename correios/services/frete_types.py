"""Request and response types for the Correios pricing engine.

All values are constructed per call. ``ShippingRequest`` is mutable only
through ``set_services``/``append_service``; fan-out builds per-service
clones with ``with_services`` instead of mutating the caller's request.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator

from correios.errors.registry import (
    ERR_INDETERMINADO,
    describe_carrier_error,
    is_retryable_carrier_error,
)
from correios.services.service_codes import DEFAULT_SERVICES, ServiceCode, service_value

if TYPE_CHECKING:
    from correios.errors.domain import CorreiosError


class RequestMode(str, Enum):
    """How services are batched into remote calls."""

    AUTO = "auto"  # fan out unless account credentials are set
    SINGLE = "single"  # always one call per service
    COMBINED = "combined"  # always one call listing every service


def to_decimal(value: Any) -> Decimal:
    """Coerce str/int/float/Decimal to Decimal via its string form."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _unique(codes: Any) -> tuple[str, ...]:
    seen: list[str] = []
    for code in codes:
        value = service_value(code)
        if value not in seen:
            seen.append(value)
    return tuple(seen)


@dataclass
class ShippingRequest:
    """A pricing request for one package between two CEPs.

    Defaults match the carrier's smallest box: 0.5 kg, 16 x 11 x 5 cm,
    priced for SEDEX and PAC retail.
    """

    origin_cep: str
    destination_cep: str
    weight_kg: Decimal = Decimal("0.5")
    length_cm: Decimal = Decimal("16")
    height_cm: Decimal = Decimal("5")
    width_cm: Decimal = Decimal("11")
    services: tuple[str, ...] = tuple(code.value for code in DEFAULT_SERVICES)
    declared_value: Decimal = Decimal("0")
    receipt_notice: bool = False
    own_hand: bool = False
    company_code: str = ""
    password: str = ""
    mode: RequestMode = RequestMode.AUTO

    def __post_init__(self) -> None:
        for name in ("weight_kg", "length_cm", "height_cm", "width_cm", "declared_value"):
            setattr(self, name, to_decimal(getattr(self, name)))
        self.services = _unique(self.services)
        self.mode = RequestMode(self.mode)

    @property
    def has_credentials(self) -> bool:
        """True when a carrier account (código administrativo) is set."""
        return bool(self.company_code)

    def set_services(self, *codes: ServiceCode | str) -> ShippingRequest:
        """Replace the requested services, dropping duplicates."""
        self.services = _unique(codes)
        return self

    def append_service(self, code: ServiceCode | str) -> ShippingRequest:
        """Append a service unless it is already requested."""
        self.services = _unique((*self.services, code))
        return self

    def with_services(self, *codes: ServiceCode | str) -> ShippingRequest:
        """Return a copy requesting only ``codes``; other fields are shared."""
        return dataclasses.replace(self, services=_unique(codes))


@dataclass(frozen=True)
class ServiceError:
    """Carrier-side rejection of a single service.

    Attributes:
        code: Integer from the ``Erro`` element, never 0.
        message: ``MsgErro`` text, verbatim.
    """

    code: int
    message: str = ""

    def describe(self) -> str:
        """Registry description for the code (handles unknown codes)."""
        return describe_carrier_error(self.code)

    @property
    def is_retryable(self) -> bool:
        return is_retryable_carrier_error(self.code)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message or self.describe()}"


@dataclass
class ServiceResult:
    """Price and delivery estimate for one service.

    When ``error`` is set the numeric fields hold whatever the carrier
    sent (usually zero) and are not a valid quote.
    """

    service: str
    price: Decimal = Decimal("0")
    delivery_days: int = 0
    price_without_extras: Decimal = Decimal("0")
    own_hand_fee: Decimal = Decimal("0")
    receipt_notice_fee: Decimal = Decimal("0")
    declared_value_fee: Decimal = Decimal("0")
    home_delivery: bool = False
    saturday_delivery: bool = False
    error: ServiceError | None = None

    @property
    def is_quote(self) -> bool:
        return self.error is None


@dataclass
class ShippingResponse:
    """Results of one orchestration call keyed by service code.

    ``failures`` records fan-out sub-calls that failed and were skipped.
    """

    services: dict[str, ServiceResult] = field(default_factory=dict)
    failures: dict[str, CorreiosError] = field(default_factory=dict)

    def __getitem__(self, code: ServiceCode | str) -> ServiceResult:
        return self.services[service_value(code)]

    def __contains__(self, code: object) -> bool:
        if not isinstance(code, str):
            return False
        return service_value(code) in self.services

    def __len__(self) -> int:
        return len(self.services)

    def __iter__(self) -> Iterator[str]:
        return iter(self.services)

    def get(self, code: ServiceCode | str) -> ServiceResult | None:
        return self.services.get(service_value(code))

    def add(self, result: ServiceResult) -> None:
        self.services[result.service] = result

    def merge(self, other: ShippingResponse) -> None:
        """Copy every result from ``other``; last write wins."""
        self.services.update(other.services)

    def quotes(self) -> dict[str, ServiceResult]:
        """Results without a carrier error."""
        return {k: v for k, v in self.services.items() if v.is_quote}

    def any(self) -> ServiceResult:
        """Return the first result, or a synthetic error result when empty."""
        for result in self.services.values():
            return result
        return ServiceResult(
            service="",
            error=ServiceError(code=ERR_INDETERMINADO, message="nenhum serviço encontrado"),
        )
