"""CLI output formatters for Rich tables and JSON.

Provides human-readable Rich table output (default) and machine-parseable
JSON output (--json flag). All formatting goes through these functions
so the CLI commands stay clean.
"""

import dataclasses
import json
from decimal import Decimal

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from correios.services.cep_service import CEPResult
from correios.services.frete_types import ServiceResult, ShippingResponse
from correios.services.service_codes import get_service_name

console = Console()


def format_brl(value: Decimal | None) -> str:
    """Format a Decimal as Brazilian reais ("R$ 1.234,56").

    Returns "—" for None.
    """
    if value is None:
        return "—"
    text = f"{value:,.2f}"
    # swap separators: 1,234.56 -> 1.234,56
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {text}"


def _result_to_dict(result: ServiceResult) -> dict:
    data = dataclasses.asdict(result)
    for key, value in data.items():
        if isinstance(value, Decimal):
            data[key] = str(value)
    return data


def format_frete_table(response: ShippingResponse, as_json: bool = False) -> str:
    """Format pricing results as a Rich table or JSON.

    Args:
        response: Results keyed by service code.
        as_json: If True, return JSON string instead of Rich table.

    Returns:
        Formatted string output.
    """
    if as_json:
        return json.dumps(
            {
                "services": {k: _result_to_dict(v) for k, v in response.services.items()},
                "failures": {k: str(v) for k, v in response.failures.items()},
            },
            indent=2,
            ensure_ascii=False,
        )

    if not response.services and not response.failures:
        return "No services returned."

    table = Table(title="Frete", show_lines=True)
    table.add_column("Código", style="cyan", no_wrap=True)
    table.add_column("Serviço", style="white")
    table.add_column("Preço", justify="right")
    table.add_column("Prazo", justify="right")
    table.add_column("Domiciliar")
    table.add_column("Sábado")
    table.add_column("Erro", style="red")

    for code, result in response.services.items():
        if result.error is None:
            price = f"[green]{format_brl(result.price)}[/green]"
            error = ""
        else:
            price = "—"
            error = escape(str(result.error))
        table.add_row(
            code,
            get_service_name(code),
            price,
            f"{result.delivery_days}d" if result.is_quote else "—",
            "S" if result.home_delivery else "N",
            "S" if result.saturday_delivery else "N",
            error,
        )

    for code, failure in response.failures.items():
        table.add_row(code, get_service_name(code), "—", "—", "—", "—", escape(f"falha: {failure}"))

    with console.capture() as capture:
        console.print(table)
    return capture.get()


def format_cep(result: CEPResult, as_json: bool = False) -> str:
    """Format a resolved address as a Rich panel or JSON."""
    if as_json:
        return json.dumps(dataclasses.asdict(result), indent=2, ensure_ascii=False)

    lines = [
        f"[bold]CEP:[/bold]         {result.cep}",
        f"[bold]Logradouro:[/bold]  {result.logradouro or '—'}",
        f"[bold]Bairro:[/bold]      {result.bairro or '—'}",
        f"[bold]Cidade:[/bold]      {result.cidade}",
        f"[bold]UF:[/bold]          {result.uf}",
    ]

    with console.capture() as capture:
        console.print(Panel("\n".join(lines), title="Endereço", border_style="cyan"))
    return capture.get()
