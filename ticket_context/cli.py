"""CLI for ticket context extraction and offer matching."""

import asyncio
import json
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ticket_context.config import load_settings, save_disabled_hosts
from ticket_context.extractors.fetch import fetch_page
from ticket_context.extractors.pipeline import extract_page_context
from ticket_context.matching import (
    MatchAPIError,
    MatchClient,
    format_money,
    has_promo,
    offer_price,
    sort_offers,
    source_label,
)
from ticket_context.models import ExtractionResult

app = typer.Typer(
    name="ticket-context",
    help="Extract event context from ticket marketplace pages",
    add_completion=False,
)
console = Console()


def load_source(source: str, url: Optional[str]) -> tuple[str, str]:
    """Return (html, page_url) for a local file or an http(s) URL."""
    if source.startswith(("http://", "https://")):
        result = asyncio.run(fetch_page(source))
        if not result.ok:
            console.print(f"[red]Error: could not fetch {source} ({result.error})[/red]")
            raise typer.Exit(1)
        return result.html, url or result.url or source

    path = Path(source)
    if not path.is_file():
        console.print(f"[red]Error: no such file: {source}[/red]")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8", errors="replace"), url or ""


def print_context(result: ExtractionResult) -> None:
    table = Table(title=f"Event context [dim]({result.source})[/dim]")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    for field, value in result.context.model_dump().items():
        table.add_row(field, escape(value) if value is not None else "[dim]—[/dim]")

    console.print(table)


@app.command()
def extract(
    source: str = typer.Argument(..., help="HTML file path or http(s) URL"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Page URL (for local files)"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw response JSON"),
):
    """Extract the event context of a page."""
    html, page_url = load_source(source, url)
    result = extract_page_context(html, page_url)

    if as_json:
        typer.echo(json.dumps(result.to_response(), indent=2))
    else:
        print_context(result)


@app.command()
def match(
    source: str = typer.Argument(..., help="HTML file path or http(s) URL"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Page URL (for local files)"),
):
    """Extract the page context and look up comparable offers."""
    try:
        settings = load_settings()
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    html, page_url = load_source(source, url)
    host = urlparse(page_url).hostname or ""
    if host and not settings.is_host_enabled(host):
        console.print(f"[yellow]Disabled on {host}[/yellow]")
        raise typer.Exit(0)

    result = extract_page_context(html, page_url)
    print_context(result)

    console.print("[cyan]Matching...[/cyan]")
    try:
        with MatchClient(settings) as client:
            response = client.match(result.context, page_url)
    except MatchAPIError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if not response.matches:
        reason = response.reason or "No match"
        hint = f" • {response.hint}" if response.hint else ""
        console.print(f"[yellow]No match: {reason}{hint}[/yellow]")
        raise typer.Exit(0)

    offers = sort_offers(response.best_offers)
    if not offers:
        console.print("[yellow]No offers found.[/yellow]")
        raise typer.Exit(0)

    title = "Offers"
    if response.confidence is not None:
        title += f" [dim](confidence: {response.confidence})[/dim]"
    table = Table(title=title)
    table.add_column("Source", style="cyan")
    table.add_column("Price", justify="right")
    table.add_column("Promo")
    table.add_column("URL", style="dim")

    for offer in offers:
        promo = ""
        if has_promo(offer):
            parts = []
            if offer.promo_percent is not None:
                parts.append(f"{offer.promo_percent:g}% promo")
            if offer.promo_code:
                parts.append(f"code {offer.promo_code}")
            promo = ", ".join(parts)
        table.add_row(
            source_label(offer.source),
            format_money(offer_price(offer)),
            promo,
            escape(offer.url or ""),
        )

    console.print(table)


@app.command()
def hosts(
    disable: Optional[str] = typer.Option(None, "--disable", help="Turn matching off on this host"),
    enable: Optional[str] = typer.Option(None, "--enable", help="Turn matching back on for this host"),
    env_file: Path = typer.Option(Path(".env"), "--env-file", help="Settings file to read and update"),
):
    """Show (or change) the API base and hosts the matcher is disabled on."""
    try:
        settings = load_settings(env_file=env_file)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if disable or enable:
        if disable:
            settings = settings.with_host(disable, enabled=False)
        if enable:
            settings = settings.with_host(enable, enabled=True)
        save_disabled_hosts(settings, env_file)
        console.print(f"[green]Saved disabled hosts to {env_file}[/green]")

    console.print(f"\n[bold]API base:[/bold] {settings.api_base}")
    console.print(f"[bold]Timeout:[/bold] {settings.timeout:g}s")
    if not settings.disabled_hosts:
        console.print("[dim]Enabled on all hosts[/dim]")
        return
    console.print("[bold]Disabled hosts:[/bold]")
    for host in sorted(settings.disabled_hosts):
        console.print(f"  - {host}")


if __name__ == "__main__":
    app()
