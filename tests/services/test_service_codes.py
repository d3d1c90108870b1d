"""Tests for Correios service code definitions and resolution."""

import pytest

from correios.services.service_codes import (
    CODE_TO_SERVICE,
    DEFAULT_SERVICES,
    SERVICE_CODE_NAMES,
    ServiceCode,
    get_service_name,
    resolve_service_code,
    service_value,
)


class TestServiceCode:

    def test_retail_codes_after_renumbering(self):
        assert ServiceCode.SEDEX_VAREJO == "04014"
        assert ServiceCode.PAC_VAREJO == "04510"

    def test_every_code_has_display_name(self):
        assert set(SERVICE_CODE_NAMES) == set(CODE_TO_SERVICE)

    def test_defaults_are_sedex_and_pac(self):
        assert DEFAULT_SERVICES == (ServiceCode.SEDEX_VAREJO, ServiceCode.PAC_VAREJO)


class TestResolveServiceCode:

    @pytest.mark.parametrize("value,expected", [
        ("04014", "04014"),
        ("  04510 ", "04510"),
        ("41106", "41106"),  # legacy PAC code passes through
        ("sedex", "04014"),
        ("PAC", "04510"),
        ("sedex 10", "40215"),
        ("Sedex-Hoje", "40290"),
        ("pac_contrato", "04669"),
        ("SEDEX_A_COBRAR_VAREJO", "40045"),
    ])
    def test_resolves(self, value, expected):
        assert resolve_service_code(value) == expected

    @pytest.mark.parametrize("value", ["", "carta", "sedex 12"])
    def test_unknown_raises(self, value):
        with pytest.raises(ValueError, match="Unknown Correios service"):
            resolve_service_code(value)


class TestNames:

    def test_known_name(self):
        assert get_service_name("40215") == "SEDEX 10"
        assert get_service_name(ServiceCode.PAC_COM_CONTRATO) == "PAC (contrato)"

    def test_unknown_code_is_its_own_name(self):
        assert get_service_name("41106") == "41106"

    def test_service_value(self):
        assert service_value(ServiceCode.SEDEX_VAREJO) == "04014"
        assert service_value(" 04510 ") == "04510"
