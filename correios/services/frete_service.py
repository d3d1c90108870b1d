"""Pricing orchestration for the Correios CalcPrecoPrazo endpoint.

Since 2019 the carrier rejects multi-service requests unless a contract
(código administrativo + senha) is supplied, so requests without
credentials are fanned out into one call per service and merged.

Example:
    async with FreteService(FreteConfig()) as svc:
        request = ShippingRequest("01243000", "65299970")
        response = await svc.calcular_frete(request)
        sedex = response[ServiceCode.SEDEX_VAREJO]

Fan-out sub-calls run sequentially; the carrier throttles bursts.
"""

import asyncio
import inspect
import logging
import time
from decimal import Decimal
from typing import Awaitable, Callable, Union

import httpx

from correios.config import FreteConfig
from correios.errors.domain import (
    ConfigurationError,
    DecodeError,
    PartialResultError,
    TransportError,
)
from correios.services.frete_parser import parse_frete_response
from correios.services.frete_types import RequestMode, ShippingRequest, ShippingResponse
from correios.utils.redaction import redact_for_logging

logger = logging.getLogger(__name__)

FORMATO_CAIXA = "1"  # box/package format

FallbackFunc = Callable[
    [dict[str, str]], Union[ShippingResponse, Awaitable[ShippingResponse]]
]

_UNSET = object()


def format_decimal(value: Decimal) -> str:
    """Render a Decimal in plain notation without trailing zeros.

    Decimal("16.0") -> "16", Decimal("0.50") -> "0.5", Decimal("1E+1") -> "10".
    """
    text = format(value.normalize(), "f")
    return "0" if text in ("-0", "") else text


def trim_cep(cep: str) -> str:
    """Strip hyphens from both ends of a CEP."""
    return cep.strip("-")


def build_params(request: ShippingRequest) -> dict[str, str]:
    """Build CalcPrecoPrazo query parameters for a request.

    Account credentials and the optional service flags are only sent
    when set.
    """
    params = {
        "sCepOrigem": trim_cep(request.origin_cep),
        "sCepDestino": trim_cep(request.destination_cep),
        "nVlPeso": format_decimal(request.weight_kg),
        "nCdFormato": FORMATO_CAIXA,
        "nVlComprimento": format_decimal(request.length_cm),
        "nVlAltura": format_decimal(request.height_cm),
        "nVlLargura": format_decimal(request.width_cm),
        "StrRetorno": "xml",
        "nCdServico": ",".join(request.services),
        "nVlValorDeclarado": format_decimal(request.declared_value),
    }
    if request.receipt_notice:
        params["sCdAvisoRecebimento"] = "S"
    if request.own_hand:
        params["sCdMaoPropria"] = "S"
    if request.has_credentials:
        params["nCdEmpresa"] = request.company_code
        params["sDsSenha"] = request.password
    return params


def should_fan_out(request: ShippingRequest) -> bool:
    """Decide whether to issue one call per service.

    True for multi-service requests in SINGLE mode, or in AUTO mode when
    no carrier account is configured.
    """
    if len(request.services) <= 1:
        return False
    if request.mode == RequestMode.SINGLE:
        return True
    return request.mode == RequestMode.AUTO and not request.has_credentials


class FreteService:
    """Client for the Correios pricing engine.

    Holds the endpoint, the global timeout and the fallback policy; each
    ``calcular_frete`` call is otherwise stateless. Use as an async context
    manager to share one HTTP client across calls, or inject a client.
    """

    def __init__(
        self,
        config: FreteConfig | None = None,
        fallback: FallbackFunc | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            config: Endpoint, timeout and always-use-fallback flag.
            fallback: Substitute for the live call. Receives the query
                parameters and returns a ShippingResponse (sync or async).
            client: Pre-built httpx client (tests, custom transports).
        """
        self._config = config or FreteConfig()
        self._fallback = fallback
        self._client = client
        self._owns_client = False

    @property
    def config(self) -> FreteConfig:
        return self._config

    async def __aenter__(self) -> "FreteService":
        if self._client is None:
            self._client = httpx.AsyncClient()
            self._owns_client = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    async def calcular_frete(
        self,
        request: ShippingRequest | None,
        timeout: float | None | object = _UNSET,
    ) -> ShippingResponse:
        """Price a request, fanning out per service when required.

        Args:
            request: The package, CEPs and services to price.
            timeout: Budget in seconds for the whole call, fan-out
                included. Defaults to ``config.timeout_seconds``; pass
                None to disable.

        Returns:
            ShippingResponse keyed by service code. Carrier rejections
            appear as ``ServiceResult.error``, not as exceptions.

        Raises:
            ConfigurationError: Missing request, no services, or
                ``always_use_fallback`` without a fallback.
            TransportError: Network failure, timeout or non-2xx status.
            DecodeError: Unparseable response body.
            PartialResultError: The last fan-out sub-call failed or the
                budget ran out mid fan-out; the exception carries the
                services collected so far.
        """
        if request is None:
            raise ConfigurationError("nil request")
        if not request.services:
            raise ConfigurationError("request has no services")
        if timeout is _UNSET:
            timeout = self._config.timeout_seconds
        deadline = None if timeout is None else time.monotonic() + timeout

        if should_fan_out(request):
            return await self._fan_out(request, deadline)
        return await self._request(build_params(request), deadline)

    async def _fan_out(
        self, request: ShippingRequest, deadline: float | None
    ) -> ShippingResponse:
        """Issue one call per service, in order, and merge the results."""
        clones = [request.with_services(code) for code in request.services]
        merged = ShippingResponse()
        logger.info(
            "Fanning out %d services for %s -> %s",
            len(clones), request.origin_cep, request.destination_cep,
        )

        for i, clone in enumerate(clones):
            code = clone.services[0]
            if _remaining(deadline) == 0:
                skipped = [c.services[0] for c in clones[i:]]
                for pending in skipped:
                    merged.failures[pending] = TransportError("budget exhausted")
                logger.warning("Budget exhausted, skipping services %s", skipped)
                raise PartialResultError(
                    f"budget exhausted before service {code}", response=merged
                )
            try:
                sub = await self._request(build_params(clone), deadline)
            except (TransportError, DecodeError) as e:
                merged.failures[code] = e
                if i == len(clones) - 1:
                    raise PartialResultError(
                        f"service {code} failed: {e}", response=merged
                    ) from e
                logger.warning("Service %s failed, continuing: %s", code, e)
                continue
            merged.merge(sub)

        return merged

    async def _request(
        self, params: dict[str, str], deadline: float | None
    ) -> ShippingResponse:
        """Run one remote call, honoring the fallback policy."""
        if self._config.always_use_fallback:
            if self._fallback is None:
                raise ConfigurationError("always_use_fallback is set but no fallback is configured")
            return await self._call_fallback(params)

        try:
            return await self._fetch(params, deadline)
        except TransportError as e:
            if self._fallback is None:
                raise
            logger.warning("Correios unavailable, using fallback: %s", e)
            return await self._call_fallback(params)

    async def _call_fallback(self, params: dict[str, str]) -> ShippingResponse:
        result = self._fallback(dict(params))
        if inspect.isawaitable(result):
            result = await result
        return result

    async def _fetch(
        self, params: dict[str, str], deadline: float | None
    ) -> ShippingResponse:
        """HTTP GET the endpoint within the remaining budget and parse the body."""
        logger.debug("GET %s %s", self._config.endpoint, redact_for_logging(params))

        timeout = _remaining(deadline)
        if timeout == 0:
            raise TransportError("budget exhausted")

        try:
            resp = await asyncio.wait_for(self._get(params, timeout), timeout)
        except asyncio.TimeoutError as e:
            raise TransportError(f"timed out after {timeout:.3f}s") from e
        except httpx.TimeoutException as e:
            raise TransportError(f"timed out after {timeout}s: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"request failed: {e}") from e

        if not resp.is_success:
            raise TransportError(
                f"http status: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
            )

        return parse_frete_response(resp.content)

    async def _get(self, params: dict[str, str], timeout: float | None) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(
                self._config.endpoint, params=params, timeout=timeout,
            )
        async with httpx.AsyncClient() as client:
            return await client.get(
                self._config.endpoint, params=params, timeout=timeout,
            )


def _remaining(deadline: float | None) -> float | None:
    """Seconds left before ``deadline``; None when unbounded, never negative."""
    if deadline is None:
        return None
    return max(deadline - time.monotonic(), 0.0)
