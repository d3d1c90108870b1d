"""Correios CLI — CEP lookup and shipping price quotes.

Usage:
    correios cep 13056-535             Resolve a CEP to an address
    correios frete 01243000 65299970   Price SEDEX and PAC
    correios frete 01243000 65299970 -s sedex10 --peso 1.2 --json
    correios config show               Show resolved configuration
"""

import asyncio
import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional

import typer
from rich.console import Console

from correios import __version__
from correios.config import CorreiosConfig, load_config
from correios.errors.domain import CorreiosError, PartialResultError
from correios.cli.output import format_cep, format_frete_table
from correios.services.cep_service import CEPService
from correios.services.frete_service import FreteService
from correios.services.frete_types import RequestMode, ShippingRequest
from correios.services.service_codes import DEFAULT_SERVICES, resolve_service_code
from correios.utils.redaction import mask_secret

_log = logging.getLogger(__name__)

app = typer.Typer(
    name="correios",
    help="Correios client — CEP lookup and shipping quotes",
    no_args_is_help=True,
)
config_app = typer.Typer(help="Configuration management")
app.add_typer(config_app, name="config")

console = Console()

# --- Global state ---
_config_path: str | None = None


def _load() -> CorreiosConfig:
    """Load config (or defaults) and configure logging from it."""
    try:
        cfg = load_config(config_path=_config_path) or CorreiosConfig()
    except FileNotFoundError as e:
        console.print(f"[red]Config file not found:[/red] {e}")
        raise typer.Exit(1)
    except (ValueError, TypeError) as e:
        console.print(f"[red]Config validation failed:[/red] {e}")
        raise typer.Exit(1)
    logging.basicConfig(
        level=cfg.logging.level.upper(),
        format=cfg.logging.format,
    )
    logging.getLogger("correios").setLevel(cfg.logging.level.upper())
    return cfg


def _emit(output: str, as_json: bool) -> None:
    # JSON bypasses Rich so long lines are never wrapped
    if as_json:
        typer.echo(output)
    else:
        console.print(output)


def _decimal(value: str, name: str) -> Decimal:
    try:
        return Decimal(value.replace(",", "."))
    except InvalidOperation:
        raise typer.BadParameter(f"invalid number: {value!r}", param_hint=name)


@app.callback()
def main(
    config: Optional[str] = typer.Option(
        None, "--config", help="Path to correios.yaml config file"
    ),
):
    """Correios CLI — CEP lookup and shipping quotes."""
    global _config_path
    _config_path = config


@app.command()
def version():
    """Show the client version."""
    console.print(f"[bold]correios[/bold] v{__version__}")


@app.command()
def cep(
    code: str = typer.Argument(help="CEP to look up, e.g. 13056-535"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Resolve a CEP to street, district, city and UF."""
    cfg = _load()

    async def _run():
        async with CEPService(cfg.cep) as svc:
            return await svc.consulta_cep(code)

    try:
        result = asyncio.run(_run())
    except CorreiosError as e:
        console.print(f"[red]CEP lookup failed:[/red] {e}")
        raise typer.Exit(1)
    _emit(format_cep(result, as_json=json_output), json_output)


@app.command()
def frete(
    origem: str = typer.Argument(help="Origin CEP"),
    destino: str = typer.Argument(help="Destination CEP"),
    servico: Optional[List[str]] = typer.Option(
        None, "--servico", "-s", help="Service code or alias (repeatable)"
    ),
    peso: str = typer.Option("0.5", "--peso", help="Weight in kg"),
    comprimento: str = typer.Option("16", "--comprimento", help="Length in cm"),
    altura: str = typer.Option("5", "--altura", help="Height in cm"),
    largura: str = typer.Option("11", "--largura", help="Width in cm"),
    valor_declarado: str = typer.Option("0", "--valor-declarado", help="Declared value in BRL"),
    aviso_recebimento: bool = typer.Option(
        False, "--aviso-recebimento", help="Request delivery receipt (signature)"
    ),
    mao_propria: bool = typer.Option(False, "--mao-propria", help="Deliver to addressee only"),
    mode: RequestMode = typer.Option(RequestMode.AUTO, "--mode", help="Batching mode"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Price a package for one or more Correios services."""
    cfg = _load()

    try:
        services = [resolve_service_code(s) for s in servico] if servico else list(DEFAULT_SERVICES)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--servico")

    account = cfg.account
    request = ShippingRequest(
        origin_cep=origem,
        destination_cep=destino,
        weight_kg=_decimal(peso, "--peso"),
        length_cm=_decimal(comprimento, "--comprimento"),
        height_cm=_decimal(altura, "--altura"),
        width_cm=_decimal(largura, "--largura"),
        services=tuple(services),
        declared_value=_decimal(valor_declarado, "--valor-declarado"),
        receipt_notice=aviso_recebimento,
        own_hand=mao_propria,
        company_code=account.company_code if account else "",
        password=account.password if account else "",
        mode=mode,
    )

    async def _run():
        async with FreteService(cfg.frete) as svc:
            return await svc.calcular_frete(request)

    try:
        response = asyncio.run(_run())
    except PartialResultError as e:
        _emit(format_frete_table(e.response, as_json=json_output), json_output)
        console.print(f"[red]Partial result:[/red] {e}")
        raise typer.Exit(1)
    except CorreiosError as e:
        console.print(f"[red]Pricing failed:[/red] {e}")
        raise typer.Exit(1)

    _emit(format_frete_table(response, as_json=json_output), json_output)


@config_app.command("show")
def config_show():
    """Display resolved configuration (secrets masked)."""
    cfg = _load()

    console.print("[bold]Frete:[/bold]")
    console.print(f"  endpoint: {cfg.frete.endpoint}")
    console.print(f"  timeout_seconds: {cfg.frete.timeout_seconds}")
    console.print(f"  always_use_fallback: {cfg.frete.always_use_fallback}")

    console.print("\n[bold]CEP:[/bold]")
    console.print(f"  url: {cfg.cep.url}")

    if cfg.account:
        console.print("\n[bold]Account:[/bold]")
        console.print(f"  company_code: {cfg.account.company_code}")
        console.print(f"  password: {mask_secret(cfg.account.password)}")


if __name__ == "__main__":
    app()
