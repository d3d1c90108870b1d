"""Canonical Correios service code definitions.

Single source of truth for service code enums, aliases, display names
and the resolver used by the CLI.

Update 2017-05-05: the carrier renumbered its retail services without
notice (PAC 41106 -> 04510, SEDEX 40010 -> 04014). Unknown numeric codes
are therefore passed through by ``resolve_service_code`` instead of
being rejected.
"""

from enum import Enum


class ServiceCode(str, Enum):
    """Correios service codes accepted by ``nCdServico``."""

    SEDEX_VAREJO = "04014"
    SEDEX_A_COBRAR_VAREJO = "40045"
    SEDEX_10_VAREJO = "40215"
    SEDEX_HOJE_VAREJO = "40290"
    PAC_VAREJO = "04510"
    PAC_COM_CONTRATO = "04669"
    SEDEX_COM_CONTRATO = "04162"


SERVICE_ALIASES: dict[str, ServiceCode] = {
    # SEDEX
    "sedex": ServiceCode.SEDEX_VAREJO,
    "sedex varejo": ServiceCode.SEDEX_VAREJO,
    "sedex contrato": ServiceCode.SEDEX_COM_CONTRATO,
    "sedex com contrato": ServiceCode.SEDEX_COM_CONTRATO,
    "sedex a cobrar": ServiceCode.SEDEX_A_COBRAR_VAREJO,
    "sedex 10": ServiceCode.SEDEX_10_VAREJO,
    "sedex10": ServiceCode.SEDEX_10_VAREJO,
    "sedex hoje": ServiceCode.SEDEX_HOJE_VAREJO,
    # PAC
    "pac": ServiceCode.PAC_VAREJO,
    "pac varejo": ServiceCode.PAC_VAREJO,
    "pac contrato": ServiceCode.PAC_COM_CONTRATO,
    "pac com contrato": ServiceCode.PAC_COM_CONTRATO,
}

CODE_TO_SERVICE: dict[str, ServiceCode] = {code.value: code for code in ServiceCode}

SERVICE_CODE_NAMES: dict[str, str] = {
    "04014": "SEDEX",
    "40045": "SEDEX a Cobrar",
    "40215": "SEDEX 10",
    "40290": "SEDEX Hoje",
    "04510": "PAC",
    "04669": "PAC (contrato)",
    "04162": "SEDEX (contrato)",
}

DEFAULT_SERVICES: tuple[ServiceCode, ...] = (
    ServiceCode.SEDEX_VAREJO,
    ServiceCode.PAC_VAREJO,
)


def service_value(code: "ServiceCode | str") -> str:
    """Return the raw carrier code string for an enum member or string."""
    if isinstance(code, ServiceCode):
        return code.value
    return str(code).strip()


def resolve_service_code(value: str) -> str:
    """Resolve a code, alias or enum name to a carrier service code.

    Args:
        value: "04014", "sedex", "SEDEX_VAREJO", "pac contrato", ...

    Returns:
        Carrier code string. Unknown all-digit values pass through.

    Raises:
        ValueError: If the value is neither a known alias nor numeric.
    """
    raw = value.strip()
    if raw in CODE_TO_SERVICE or raw.isdigit():
        return raw
    key = raw.lower().replace("_", " ").replace("-", " ")
    if key in SERVICE_ALIASES:
        return SERVICE_ALIASES[key].value
    member = ServiceCode.__members__.get(raw.upper())
    if member is not None:
        return member.value
    raise ValueError(f"Unknown Correios service: {value!r}")


def get_service_name(code: str) -> str:
    """Return the display name for a service code, or the code itself."""
    return SERVICE_CODE_NAMES.get(service_value(code), service_value(code))
