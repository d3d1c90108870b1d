"""Response parser for the CalcPrecoPrazo XML envelope.

Expected document:

    <?xml version="1.0" encoding="ISO-8859-1" ?>
    <Servicos>
      <cServico>
        <Codigo>04014</Codigo>
        <Valor>21,50</Valor>
        <PrazoEntrega>1</PrazoEntrega>
        <ValorSemAdicionais>21,50</ValorSemAdicionais>
        <ValorMaoPropria>0,00</ValorMaoPropria>
        <ValorAvisoRecebimento>0,00</ValorAvisoRecebimento>
        <ValorValorDeclarado>0,00</ValorValorDeclarado>
        <EntregaDomiciliar>S</EntregaDomiciliar>
        <EntregaSabado>S</EntregaSabado>
        <Erro>0</Erro>
        <MsgErro></MsgErro>
      </cServico>
    </Servicos>

Prices use a comma as the fractional separator. A price that fails to
parse is left at zero: the ``Erro`` element, not numeric parse success,
decides whether a service failed.
"""

import io
import logging
from decimal import Decimal, InvalidOperation
from typing import Any
from xml.parsers.expat import ExpatError

import xmltodict

from correios.errors.domain import DecodeError, UnsupportedCharsetError
from correios.services.charset import charset_reader, declared_encoding, drain
from correios.services.frete_types import ServiceError, ServiceResult, ShippingResponse

logger = logging.getLogger(__name__)

ROOT_ELEMENT = "Servicos"
SERVICE_ELEMENT = "cServico"


def fix_decimal(text: str) -> str:
    """Replace the carrier's fractional comma with a period."""
    return text.replace(",", ".")


def parse_price(text: str | None) -> Decimal:
    """Parse a carrier price string; unparseable values become zero."""
    if not text:
        return Decimal("0")
    try:
        return Decimal(fix_decimal(text.strip()))
    except InvalidOperation:
        return Decimal("0")


def _text(record: dict[str, Any], key: str) -> str:
    value = record.get(key)
    if value is None:
        return ""
    if isinstance(value, dict):
        # element carrying attributes; content lives under "#text"
        value = value.get("#text") or ""
    return str(value).strip()


def _int(record: dict[str, Any], key: str, raw_body: bytes) -> int:
    text = _text(record, key)
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        raise DecodeError(
            f"invalid integer in <{key}>: {text!r}", raw_body=raw_body
        ) from None


def decode_body(body: bytes) -> bytes:
    """Re-encode a response body to UTF-8 according to its XML declaration.

    Raises:
        UnsupportedCharsetError: If the declared encoding is not supported.
    """
    charset = declared_encoding(body)
    try:
        reader = charset_reader(charset, io.BytesIO(body))
    except UnsupportedCharsetError as e:
        e.raw_body = body
        raise
    return drain(reader)


def parse_service(record: dict[str, Any], raw_body: bytes = b"") -> ServiceResult:
    """Convert one ``cServico`` record into a ServiceResult."""
    result = ServiceResult(
        service=_text(record, "Codigo"),
        price=parse_price(_text(record, "Valor")),
        delivery_days=_int(record, "PrazoEntrega", raw_body),
        price_without_extras=parse_price(_text(record, "ValorSemAdicionais")),
        own_hand_fee=parse_price(_text(record, "ValorMaoPropria")),
        receipt_notice_fee=parse_price(_text(record, "ValorAvisoRecebimento")),
        declared_value_fee=parse_price(_text(record, "ValorValorDeclarado")),
        home_delivery=_text(record, "EntregaDomiciliar") == "S",
        saturday_delivery=_text(record, "EntregaSabado") == "S",
    )
    code = _int(record, "Erro", raw_body)
    if code != 0:
        result.error = ServiceError(code=code, message=_text(record, "MsgErro"))
    return result


def parse_frete_response(body: bytes) -> ShippingResponse:
    """Parse a CalcPrecoPrazo response body.

    Args:
        body: Raw HTTP response body.

    Returns:
        ShippingResponse with one entry per ``cServico`` element.

    Raises:
        DecodeError: Malformed XML, missing ``Servicos`` root, non-numeric
            ``PrazoEntrega``/``Erro``, a text-only ``cServico`` or an
            unsupported charset. The raw body is attached as ``raw_body``.
    """
    try:
        document = xmltodict.parse(
            decode_body(body),
            encoding="utf-8",
            force_list=(SERVICE_ELEMENT,),
        )
        if ROOT_ELEMENT not in document:
            root = next(iter(document), "")
            raise DecodeError(
                f"expected element <{ROOT_ELEMENT}> but have <{root}>", raw_body=body
            )
        root_content = document[ROOT_ELEMENT]
        records: list[Any] = []
        if isinstance(root_content, dict):
            records = root_content.get(SERVICE_ELEMENT) or []

        response = ShippingResponse()
        for record in records:
            if record is not None and not isinstance(record, dict):
                raise DecodeError(
                    f"unexpected <{SERVICE_ELEMENT}> content", raw_body=body
                )
            response.add(parse_service(record or {}, raw_body=body))
    except ExpatError as e:
        logger.error("CORREIOS: malformed response: %s", body.decode("latin-1"))
        raise DecodeError(f"malformed XML: {e}", raw_body=body) from e
    except DecodeError:
        logger.error("CORREIOS: undecodable response: %s", body.decode("latin-1"))
        raise

    return response
