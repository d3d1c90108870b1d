"""Unit tests for correios/errors/registry.py.

Tests verify:
- Documented codes resolve to their carrier messages
- Colliding codes keep both names and both meanings
- Unknown codes fall back to a descriptive message
"""

import pytest

from correios.errors import registry
from correios.errors.registry import (
    CARRIER_ERROR_REGISTRY,
    ERR_AREA_DE_RISCO_CEPS,
    ERR_AREA_PRAZO_DIFERENCIADO,
    ERR_INDISPONIVEL,
    ERR_LARGURA_INFERIOR_2,
    ERR_LARGURA_SUPERIOR_60,
    ERR_LOCALIDADE_DESTINO,
    UNKNOWN_ERROR_MESSAGE,
    describe_carrier_error,
    get_errors_by_name,
    is_retryable_carrier_error,
    lookup_carrier_error,
)


@pytest.mark.parametrize(
    "code,name",
    [
        (-1, "ERR_TIPO_SERVICO_INVALIDO"),
        (-3, "ERR_CEP_DESTINO_INVALIDO"),
        (-33, "ERR_SISTEMA_INDISPONIVEL"),
        (-888, "ERR_CALCULO_TARIFA"),
        (6, "ERR_LOCALIDADE_ORIGEM"),
        (9, "ERR_AREA_DE_RISCO_CEP_INICIAL"),
        (99, "ERR_INDETERMINADO"),
    ],
)
def test_documented_codes_registered(code, name):
    definitions = lookup_carrier_error(code)
    assert [d.name for d in definitions] == [name]
    assert definitions[0].code == code


def test_constants_match_definitions():
    """Every registered name is also a module constant with the same value."""
    for name, definition in get_errors_by_name().items():
        assert getattr(registry, name) == definition.code


class TestCollisions:
    """Codes the carrier documents with two meanings."""

    def test_minus_44_is_shared(self):
        assert ERR_LARGURA_INFERIOR_2 == ERR_LARGURA_SUPERIOR_60 == -44
        names = {d.name for d in lookup_carrier_error(-44)}
        assert names == {"ERR_LARGURA_INFERIOR_2", "ERR_LARGURA_SUPERIOR_60"}

    def test_seven_is_shared(self):
        assert ERR_LOCALIDADE_DESTINO == ERR_INDISPONIVEL == 7
        assert len(CARRIER_ERROR_REGISTRY[7]) == 2

    def test_description_lists_every_meaning(self):
        description = describe_carrier_error(-44)
        assert "inferior a 11 cm" in description
        assert "maior que 60 cm" in description
        assert " / " in description

    def test_names_stay_distinct(self):
        by_name = get_errors_by_name()
        assert by_name["ERR_LOCALIDADE_DESTINO"] is not by_name["ERR_INDISPONIVEL"]


class TestPositiveCodes:
    """Newer three-digit codes use their decimal values."""

    def test_ten_and_eleven(self):
        assert ERR_AREA_PRAZO_DIFERENCIADO == 10
        assert ERR_AREA_DE_RISCO_CEPS == 11
        assert "Área de Risco" in describe_carrier_error(11)


class TestUnknownCodes:

    @pytest.mark.parametrize("code", [0, -19, 12, 12345])
    def test_unknown_code_has_fallback_description(self, code):
        assert lookup_carrier_error(code) == ()
        assert describe_carrier_error(code) == f"{UNKNOWN_ERROR_MESSAGE}: {code}"
        assert not is_retryable_carrier_error(code)


class TestRetryable:

    @pytest.mark.parametrize("code", [-33, -888, 7, 99])
    def test_transient_codes_are_retryable(self, code):
        assert is_retryable_carrier_error(code)

    @pytest.mark.parametrize("code", [-1, -3, -4, -44, 11])
    def test_input_errors_are_not_retryable(self, code):
        assert not is_retryable_carrier_error(code)
