"""CEP lookup through the Correios "busca CEP" web endpoint.

The endpoint backs the carrier's public web form, so requests mimic a
browser: URL-encoded form body plus fixed Referer and User-Agent headers.

Example:
    async with CEPService() as svc:
        address = await svc.consulta_cep("13056-535")
        print(address.logradouro, address.cidade, address.uf)
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

import httpx

from correios.config import CEPConfig
from correios.errors.domain import (
    CEPLookupError,
    CEPNotFoundError,
    DecodeError,
    TransportError,
)

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


def filter_cep(cep: str) -> str:
    """Keep only the digits of a CEP ("13056-535" -> "13056535")."""
    return _NON_DIGITS.sub("", cep)


@dataclass
class CEPResult:
    """Address resolved from a CEP."""

    cep: str
    uf: str
    cidade: str
    bairro: str
    logradouro: str = ""

    @classmethod
    def from_api(cls, record: dict[str, Any]) -> "CEPResult":
        """Build from the first ``dados`` record, tolerating extra fields.

        The street comes from ``logradouroDNEC`` when present, falling
        back to ``logradouroTexto``.
        """
        return cls(
            cep=record.get("cep", ""),
            uf=record.get("uf", ""),
            cidade=record.get("localidade", ""),
            bairro=record.get("bairro", ""),
            logradouro=record.get("logradouroDNEC") or record.get("logradouroTexto") or "",
        )


class CEPService:
    """Client for the CEP lookup endpoint."""

    def __init__(
        self,
        config: CEPConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or CEPConfig()
        self._client = client
        self._owns_client = False

    async def __aenter__(self) -> "CEPService":
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._config.timeout_seconds)
            self._owns_client = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    def _headers(self) -> dict[str, str]:
        return {
            "Referer": self._config.referer,
            "User-Agent": self._config.user_agent,
            "Content-Type": "application/x-www-form-urlencoded; charset=utf-8",
        }

    @staticmethod
    def _form(cep: str) -> dict[str, str]:
        return {
            "pagina": "/app/endereco/index.php",
            "cepaux": "",
            "mensagem_alerta": "",
            "endereco": filter_cep(cep),
            "tipoCEP": "ALL",
        }

    async def consulta_cep(self, cep: str) -> CEPResult:
        """Return the street, district, city and UF of a CEP.

        Args:
            cep: CEP with or without punctuation.

        Returns:
            CEPResult for the first matching record.

        Raises:
            TransportError: Network failure or non-200 status.
            DecodeError: Body is not valid JSON.
            CEPLookupError: The carrier answered ``erro: true``.
            CEPNotFoundError: No records for the CEP.
        """
        try:
            if self._client is not None:
                resp = await self._client.post(
                    self._config.url, data=self._form(cep), headers=self._headers(),
                )
            else:
                async with httpx.AsyncClient(timeout=self._config.timeout_seconds) as client:
                    resp = await client.post(
                        self._config.url, data=self._form(cep), headers=self._headers(),
                    )
        except httpx.HTTPError as e:
            raise TransportError(f"request failed: {e}") from e

        if resp.status_code != 200:
            raise TransportError(
                f"http status: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
            )

        try:
            raw = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"decode json error: {e}", raw_body=resp.content) from e

        if not isinstance(raw, dict):
            raise DecodeError("decode json error: expected an object", raw_body=resp.content)
        if raw.get("erro"):
            raise CEPLookupError("correios: " + str(raw.get("mensagem", "")))

        dados = raw.get("dados") or []
        if not raw.get("total") or not dados:
            logger.info("No results for CEP %s", cep)
            raise CEPNotFoundError(cep)

        return CEPResult.from_api(dados[0])
