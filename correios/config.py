"""YAML configuration loader with env var resolution and Pydantic validation.

Loads config from (priority order):
1. explicit path (``--config`` CLI flag)
2. ./correios.yaml or ./correios.yml (working directory)
3. ~/.correios/config.yaml (user home)

Environment variables override YAML: CORREIOS_<SECTION>_<KEY>.
${VAR} references in YAML values resolve from environment at load time.

The services take their section (``FreteConfig``, ``CEPConfig``) as an
explicit object; nothing here is process-global.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)

DEFAULT_FRETE_ENDPOINT = "http://ws.correios.com.br/calculador/CalcPrecoPrazo.aspx"
DEFAULT_CEP_URL = "https://buscacepinter.correios.com.br/app/endereco/carrega-cep-endereco.php"
DEFAULT_CEP_REFERER = "https://buscacepinter.correios.com.br/app/endereco/index.php"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/14.1 Safari/605.1.15"
)

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def resolve_env_vars(value: str) -> str:
    """Resolve ${VAR} references in a string from environment variables.

    Missing env vars resolve to empty string.
    """
    def _replace(match: re.Match) -> str:
        return os.environ.get(match.group(1), "")

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, str):
        return resolve_env_vars(data)
    elif isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    return data


class FreteConfig(BaseModel):
    """Pricing endpoint and fallback policy.

    ``timeout_seconds`` applies to each network call when the caller does
    not pass its own timeout; None disables it. ``always_use_fallback``
    routes every call to the service's fallback function.
    """

    endpoint: str = DEFAULT_FRETE_ENDPOINT
    timeout_seconds: float | None = 30.0
    always_use_fallback: bool = False

    @field_validator("timeout_seconds")
    @classmethod
    def non_negative_timeout(cls, v: float | None) -> float | None:
        """Treat 0 as "no timeout"; reject negatives."""
        if v is None or v == 0:
            return None
        if v < 0:
            raise ValueError("timeout_seconds must be >= 0")
        return v


class CEPConfig(BaseModel):
    """CEP lookup endpoint and fixed browser headers."""

    url: str = DEFAULT_CEP_URL
    referer: str = DEFAULT_CEP_REFERER
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = 30.0


class AccountConfig(BaseModel):
    """Carrier contract credentials (código administrativo + senha)."""

    company_code: str = ""
    password: str = ""


class LoggingConfig(BaseModel):
    """Logging setup applied by the CLI."""

    level: Literal["debug", "info", "warning", "error"] = "warning"
    format: str = "%(levelname)s:%(name)s:%(message)s"


class CorreiosConfig(BaseModel):
    """Top-level configuration for the Correios client."""

    frete: FreteConfig = FreteConfig()
    cep: CEPConfig = CEPConfig()
    account: AccountConfig | None = None
    logging: LoggingConfig = LoggingConfig()


def _find_config_file() -> Path | None:
    candidates = [
        Path.cwd() / "correios.yaml",
        Path.cwd() / "correios.yml",
        Path.home() / ".correios" / "config.yaml",
        Path.home() / ".correios" / "config.yml",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply CORREIOS_<SECTION>_<KEY> env var overrides to config data.

    For example, ``CORREIOS_FRETE_ALWAYS_USE_FALLBACK=true`` maps to
    section ``frete``, field ``always_use_fallback``.

    Args:
        data: Parsed YAML config dict.

    Returns:
        Config dict with env var overrides applied.
    """
    prefix = "CORREIOS_"
    known_sections = sorted(
        CorreiosConfig.model_fields.keys(), key=len, reverse=True
    )
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        suffix = key[len(prefix):].lower()
        matched_section = None
        matched_field = None
        for section in known_sections:
            section_prefix = section + "_"
            if suffix.startswith(section_prefix):
                matched_section = section
                matched_field = suffix[len(section_prefix):]
                break
        if matched_section is None or not matched_field:
            continue
        if data.get(matched_section) is None:
            data[matched_section] = {}
        if isinstance(data[matched_section], dict):
            # Pydantic coerces numeric strings; only booleans need help
            if value.lower() in ("true", "false"):
                data[matched_section][matched_field] = value.lower() == "true"
            else:
                data[matched_section][matched_field] = value
    return data


def load_config(config_path: str | None = None) -> CorreiosConfig | None:
    """Load configuration from YAML file with env var resolution.

    Args:
        config_path: Explicit path to config file. If None, searches
            standard locations (cwd, then ~/.correios/).

    Returns:
        Parsed and validated CorreiosConfig, or None if no config found.

    Raises:
        FileNotFoundError: If ``config_path`` does not exist.
    """
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        path = _find_config_file()
        if path is None:
            return None

    logger.info("Loading config from %s", path)

    with open(path) as f:
        raw_data = yaml.safe_load(f) or {}

    data = _resolve_env_vars_recursive(raw_data)
    data = _apply_env_overrides(data)
    return CorreiosConfig(**data)
