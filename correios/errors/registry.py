"""Carrier error code registry for the CalcPrecoPrazo pricing engine.

The carrier reports per-service failures as bare integers: legacy negative
codes and newer small positive ones. There is no formal contract and codes
have changed without notice, so lookups are open-ended: any integer is
accepted and unknown codes resolve to a documented fallback description.

Two documented collisions are kept as separate names sharing one value:
- -44: ERR_LARGURA_INFERIOR_2 and ERR_LARGURA_SUPERIOR_60
- 7:   ERR_LOCALIDADE_DESTINO and ERR_INDISPONIVEL
The carrier gives no way to tell them apart, so both are returned by
``lookup_carrier_error``.

Source: manual de implementação do cálculo remoto de preços e prazos.
"""

from dataclasses import dataclass

ERR_TIPO_SERVICO_INVALIDO = -1
ERR_CEP_ORIGEM_INVALIDO = -2
ERR_CEP_DESTINO_INVALIDO = -3
ERR_PESO_EXCEDIDO = -4
ERR_VALOR_DECLARADO_ALTO = -5
ERR_SERVICO_INDISPONIVEL_TRECHO = -6
ERR_VALOR_DECLARADO_OBRIGATORIO = -7
ERR_MAO_PROPRIA_INDISPONIVEL = -8
ERR_AVISO_RECEBIMENTO_INDISPONIVEL = -9
ERR_PRECIFICACAO_INDISPONIVEL = -10
ERR_INFORMAR_DIMENSOES = -11
ERR_COMPRIMENTO = -12
ERR_LARGURA = -13
ERR_ALTURA = -14
ERR_COMPRIMENTO_105 = -15
ERR_LARGURA_105 = -16
ERR_ALTURA_105 = -17
ERR_ALTURA_INFERIOR = -18
ERR_LARGURA_INFERIOR = -20
ERR_COMPRIMENTO_INFERIOR = -22
ERR_DIMENSOES_SOMA = -23
ERR_COMPRIMENTO_2 = -24
ERR_DIAMETRO = -25
ERR_COMPRIMENTO_3 = -26
ERR_DIAMETRO_2 = -27
ERR_COMPRIMENTO_4 = -28
ERR_DIAMETRO_91 = -29
ERR_COMPRIMENTO_18 = -30
ERR_DIAMETRO_5 = -31
ERR_SOMA_DIAMETRO = -32
ERR_SISTEMA_INDISPONIVEL = -33
ERR_CODIGO_OU_SENHA = -34
ERR_SENHA = -35
ERR_SEM_CONTRATO = -36
ERR_SEM_SERVICO_ATIVO = -37
ERR_SERVICO_INDISPONIVEL_ADMIN = -38
ERR_PESO_EXCEDIDO_ENVELOPE = -39
ERR_INFORMAR_DIMENSOES_2 = -40
ERR_COMPRIMENTO_60 = -41
ERR_COMPRIMENTO_16 = -42
ERR_COMPRIMENTO_LARGURA_120 = -43
ERR_LARGURA_INFERIOR_2 = -44
ERR_LARGURA_SUPERIOR_60 = -44
ERR_CALCULO_TARIFA = -888
ERR_LOCALIDADE_ORIGEM = 6
ERR_LOCALIDADE_DESTINO = 7
ERR_SERVICO_INDISPONIVEL_TRECHO_2 = 8
ERR_AREA_DE_RISCO_CEP_INICIAL = 9
ERR_AREA_PRAZO_DIFERENCIADO = 10
ERR_AREA_DE_RISCO_CEPS = 11
ERR_INDISPONIVEL = 7
ERR_INDETERMINADO = 99

UNKNOWN_ERROR_MESSAGE = "Código de erro desconhecido"


@dataclass(frozen=True)
class CarrierErrorCode:
    """Definition of a carrier error code.

    Attributes:
        code: Integer reported in the ``Erro`` element.
        name: Constant name in this module.
        message: Carrier's documented meaning.
        is_retryable: Whether retrying later may succeed without changes.
    """

    code: int
    name: str
    message: str
    is_retryable: bool = False


_DEFINITIONS: tuple[CarrierErrorCode, ...] = (
    CarrierErrorCode(-1, "ERR_TIPO_SERVICO_INVALIDO", "Código de serviço inválido."),
    CarrierErrorCode(-2, "ERR_CEP_ORIGEM_INVALIDO", "CEP de origem inválido."),
    CarrierErrorCode(-3, "ERR_CEP_DESTINO_INVALIDO", "CEP de destino inválido."),
    CarrierErrorCode(-4, "ERR_PESO_EXCEDIDO", "Peso excedido."),
    CarrierErrorCode(
        -5, "ERR_VALOR_DECLARADO_ALTO",
        "O Valor Declarado não deve exceder R$ 10.000,00.",
    ),
    CarrierErrorCode(
        -6, "ERR_SERVICO_INDISPONIVEL_TRECHO",
        "Serviço indisponível para o trecho informado.",
    ),
    CarrierErrorCode(
        -7, "ERR_VALOR_DECLARADO_OBRIGATORIO",
        "O Valor Declarado é obrigatório para este serviço.",
    ),
    CarrierErrorCode(
        -8, "ERR_MAO_PROPRIA_INDISPONIVEL",
        "Este serviço não aceita Mão Própria.",
    ),
    CarrierErrorCode(
        -9, "ERR_AVISO_RECEBIMENTO_INDISPONIVEL",
        "Este serviço não aceita Aviso de Recebimento.",
    ),
    CarrierErrorCode(
        -10, "ERR_PRECIFICACAO_INDISPONIVEL",
        "Precificação indisponível para o trecho informado.",
    ),
    CarrierErrorCode(
        -11, "ERR_INFORMAR_DIMENSOES",
        "Para definição do preço deverão ser informados o comprimento, "
        "a largura e a altura do objeto em centímetros (cm).",
    ),
    CarrierErrorCode(-12, "ERR_COMPRIMENTO", "Comprimento inválido."),
    CarrierErrorCode(-13, "ERR_LARGURA", "Largura inválida."),
    CarrierErrorCode(-14, "ERR_ALTURA", "Altura inválida."),
    CarrierErrorCode(-15, "ERR_COMPRIMENTO_105", "O comprimento não pode ser maior que 105 cm."),
    CarrierErrorCode(-16, "ERR_LARGURA_105", "A largura não pode ser maior que 105 cm."),
    CarrierErrorCode(-17, "ERR_ALTURA_105", "A altura não pode ser maior que 105 cm."),
    CarrierErrorCode(-18, "ERR_ALTURA_INFERIOR", "A altura não pode ser inferior a 2 cm."),
    CarrierErrorCode(-20, "ERR_LARGURA_INFERIOR", "A largura não pode ser inferior a 11 cm."),
    CarrierErrorCode(
        -22, "ERR_COMPRIMENTO_INFERIOR", "O comprimento não pode ser inferior a 16 cm.",
    ),
    CarrierErrorCode(
        -23, "ERR_DIMENSOES_SOMA",
        "A soma resultante do comprimento + largura + altura não deve superar 200 cm.",
    ),
    CarrierErrorCode(-24, "ERR_COMPRIMENTO_2", "Comprimento inválido."),
    CarrierErrorCode(-25, "ERR_DIAMETRO", "Diâmetro inválido."),
    CarrierErrorCode(-26, "ERR_COMPRIMENTO_3", "Informe o comprimento."),
    CarrierErrorCode(-27, "ERR_DIAMETRO_2", "Informe o diâmetro."),
    CarrierErrorCode(-28, "ERR_COMPRIMENTO_4", "O comprimento não pode ser maior que 105 cm."),
    CarrierErrorCode(-29, "ERR_DIAMETRO_91", "O diâmetro não pode ser maior que 91 cm."),
    CarrierErrorCode(-30, "ERR_COMPRIMENTO_18", "O comprimento não pode ser inferior a 18 cm."),
    CarrierErrorCode(-31, "ERR_DIAMETRO_5", "O diâmetro não pode ser inferior a 5 cm."),
    CarrierErrorCode(
        -32, "ERR_SOMA_DIAMETRO",
        "A soma resultante do comprimento + o dobro do diâmetro não deve superar 200 cm.",
    ),
    CarrierErrorCode(
        -33, "ERR_SISTEMA_INDISPONIVEL",
        "Sistema temporariamente fora do ar. Favor tentar mais tarde.",
        is_retryable=True,
    ),
    CarrierErrorCode(-34, "ERR_CODIGO_OU_SENHA", "Código Administrativo ou Senha inválidos."),
    CarrierErrorCode(-35, "ERR_SENHA", "Senha incorreta."),
    CarrierErrorCode(
        -36, "ERR_SEM_CONTRATO", "Cliente não possui contrato vigente com os Correios.",
    ),
    CarrierErrorCode(
        -37, "ERR_SEM_SERVICO_ATIVO", "Cliente não possui serviço ativo em seu contrato.",
    ),
    CarrierErrorCode(
        -38, "ERR_SERVICO_INDISPONIVEL_ADMIN",
        "Serviço indisponível para este código administrativo.",
    ),
    CarrierErrorCode(-39, "ERR_PESO_EXCEDIDO_ENVELOPE", "Peso excedido para o formato envelope."),
    CarrierErrorCode(
        -40, "ERR_INFORMAR_DIMENSOES_2",
        "Para definição do preço deverão ser informados, também, o comprimento, "
        "a largura e a altura do objeto em centímetros (cm).",
    ),
    CarrierErrorCode(-41, "ERR_COMPRIMENTO_60", "O comprimento não pode ser maior que 60 cm."),
    CarrierErrorCode(-42, "ERR_COMPRIMENTO_16", "O comprimento não pode ser inferior a 16 cm."),
    CarrierErrorCode(
        -43, "ERR_COMPRIMENTO_LARGURA_120",
        "A soma resultante do comprimento + largura não deve superar 120 cm.",
    ),
    CarrierErrorCode(-44, "ERR_LARGURA_INFERIOR_2", "A largura não pode ser inferior a 11 cm."),
    CarrierErrorCode(-44, "ERR_LARGURA_SUPERIOR_60", "A largura não pode ser maior que 60 cm."),
    CarrierErrorCode(
        -888, "ERR_CALCULO_TARIFA", "Erro ao calcular a tarifa.", is_retryable=True,
    ),
    CarrierErrorCode(
        6, "ERR_LOCALIDADE_ORIGEM",
        "Localidade de origem não abrange o serviço informado.",
    ),
    CarrierErrorCode(
        7, "ERR_LOCALIDADE_DESTINO",
        "Localidade de destino não abrange o serviço informado.",
    ),
    CarrierErrorCode(
        7, "ERR_INDISPONIVEL", "Serviço indisponível, tente mais tarde.", is_retryable=True,
    ),
    CarrierErrorCode(
        8, "ERR_SERVICO_INDISPONIVEL_TRECHO_2",
        "Serviço indisponível para o trecho informado.",
    ),
    CarrierErrorCode(
        9, "ERR_AREA_DE_RISCO_CEP_INICIAL", "CEP inicial pertencente a Área de Risco.",
    ),
    CarrierErrorCode(
        10, "ERR_AREA_PRAZO_DIFERENCIADO",
        "Área com entrega temporariamente sujeita a prazo diferenciado.",
    ),
    CarrierErrorCode(
        11, "ERR_AREA_DE_RISCO_CEPS", "CEP inicial e final pertencentes a Área de Risco.",
    ),
    CarrierErrorCode(
        99, "ERR_INDETERMINADO", "Outros erros diversos do .Net.", is_retryable=True,
    ),
)


def _build_registry(
    definitions: tuple[CarrierErrorCode, ...],
) -> dict[int, tuple[CarrierErrorCode, ...]]:
    registry: dict[int, tuple[CarrierErrorCode, ...]] = {}
    for definition in definitions:
        registry[definition.code] = registry.get(definition.code, ()) + (definition,)
    return registry


# code -> every definition sharing that code (more than one on collisions)
CARRIER_ERROR_REGISTRY: dict[int, tuple[CarrierErrorCode, ...]] = _build_registry(
    _DEFINITIONS
)


def lookup_carrier_error(code: int) -> tuple[CarrierErrorCode, ...]:
    """Look up every known definition for a carrier error code.

    Args:
        code: Integer from the ``Erro`` element.

    Returns:
        Tuple of matching definitions; empty for unknown codes.
    """
    return CARRIER_ERROR_REGISTRY.get(code, ())


def describe_carrier_error(code: int) -> str:
    """Return a human-readable description for a carrier error code.

    Colliding codes list every documented meaning separated by " / ".
    Unknown codes return ``UNKNOWN_ERROR_MESSAGE`` with the code appended.
    """
    definitions = lookup_carrier_error(code)
    if not definitions:
        return f"{UNKNOWN_ERROR_MESSAGE}: {code}"
    return " / ".join(d.message for d in definitions)


def is_retryable_carrier_error(code: int) -> bool:
    """Check whether any definition for the code is marked retryable."""
    return any(d.is_retryable for d in lookup_carrier_error(code))


def get_errors_by_name() -> dict[str, CarrierErrorCode]:
    """Get all definitions keyed by constant name."""
    return {d.name: d for d in _DEFINITIONS}
