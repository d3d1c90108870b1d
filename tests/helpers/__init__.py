"""Test helpers for the Correios client."""

from tests.helpers.mock_correios import (
    RecordingTransport,
    ok_for_each_service,
    servico_xml,
    servicos_body,
)

__all__ = [
    "RecordingTransport",
    "ok_for_each_service",
    "servico_xml",
    "servicos_body",
]
