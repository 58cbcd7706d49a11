"""Typer-based CLI for DoiExtraction with Pydantic v2 configuration."""

import json
import logging
import sys
from dataclasses import replace
from typing import Any, Dict, List, Optional

import httpx
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from DocsToDOI.DoiExtraction.config import (
    DoiExtractionConfig,
    export_config_schema,
    load_config,
    validate_config_file,
)
from DocsToDOI.DoiExtraction.errors import DoiExtractionError
from DocsToDOI.DoiExtraction.pipeline import DoiPipeline
from DocsToDOI.DoiExtraction.registry import build_strategies, get_registry
from DocsToDOI.DoiExtraction.scheduling import DelayPolicy, OnceOnlyTrigger, run_once
from DocsToDOI.DoiExtraction.snapshot import (
    DocumentSnapshot,
    capture_from_path,
    fetch_snapshot,
    hostname_from_url,
)
from DocsToDOI.DoiExtraction.types import PipelineOutcome

console = Console()
app = typer.Typer(help="DocsToDOI DoiExtraction")

EXIT_NOT_FOUND = 2

# ============================================================================
# Setup
# ============================================================================


def _setup_logging(verbose: bool) -> None:
    """Setup logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _http_client() -> httpx.Client:
    return httpx.Client(follow_redirects=True)


def _capture(
    source: str,
    cfg: DoiExtractionConfig,
    *,
    url: Optional[str],
    host: Optional[str],
    title: Optional[str],
) -> DocumentSnapshot:
    parser = cfg.snapshot.parser
    if source.startswith(("http://", "https://")):
        with _http_client() as client:
            snapshot = fetch_snapshot(
                source,
                client=client,
                timeout=cfg.snapshot.timeout_s,
                headers=cfg.snapshot.polite_headers,
                parser=parser,
                title=title,
            )
        if host:
            snapshot = replace(snapshot, hostname=host.lower())
        return snapshot
    if source == "-":
        return DocumentSnapshot.from_html(
            sys.stdin.read(), url=url, hostname=host, title=title, parser=parser
        )
    return capture_from_path(source, url=url, hostname=host, title=title, parser=parser)


def _outcome_payload(outcome: PipelineOutcome, hostname: str) -> Dict[str, Any]:
    return {
        "doi": outcome.doi,
        "strategy": outcome.strategy,
        "hostname": hostname,
        "attempts": [
            {
                "strategy": attempt.strategy,
                "found": attempt.found,
                "doi": attempt.doi,
                "reason": attempt.reason,
            }
            for attempt in outcome.attempts
        ],
    }


# ============================================================================
# Commands
# ============================================================================


@app.command()
def extract(
    source: str = typer.Argument(..., help="HTML file, '-' for stdin, or an http(s) URL"),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
        envvar="DOCSTODOI_CONFIG",
    ),
    url: Optional[str] = typer.Option(
        None, "--url", help="Original page URL (for saved files and stdin)"
    ),
    host: Optional[str] = typer.Option(None, "--host", help="Override the page hostname"),
    title: Optional[str] = typer.Option(None, "--title", help="Override the page title"),
    wait: bool = typer.Option(False, "--wait/--no-wait", help="Honour the host delay"),
    explain: bool = typer.Option(False, "--explain", help="Show every strategy attempt"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose"),
) -> None:
    """Extract the DOI of a single page."""
    _setup_logging(verbose)

    try:
        cfg = load_config(path=config)
    except ValueError as e:
        console.print(f"[red]✗ Invalid config: {e}[/red]")
        raise typer.Exit(code=1)

    policy = DelayPolicy.from_config(cfg.scheduling) if wait else DelayPolicy(0, 0)
    shown: List[str] = []
    captured: List[DocumentSnapshot] = []

    def capture() -> DocumentSnapshot:
        snapshot = _capture(source, cfg, url=url, host=host, title=title)
        captured.append(snapshot)
        return snapshot

    delay_host = (host or "").lower() or hostname_from_url(url or source)
    try:
        outcome = run_once(
            capture,
            OnceOnlyTrigger(shown.append),
            hostname=delay_host,
            policy=policy,
            pipeline=DoiPipeline(config=cfg),
        )
    except DoiExtractionError as e:
        console.print(f"[red]✗ Error: {e}[/red]")
        raise typer.Exit(code=1)

    if not captured:
        console.print(f"[red]✗ Could not capture {source}[/red]")
        raise typer.Exit(code=1)
    hostname = captured[0].hostname

    if as_json:
        typer.echo(json.dumps(_outcome_payload(outcome, hostname), indent=2))
    elif explain:
        table = Table(title=f"DOI strategies for {hostname or source}")
        table.add_column("Strategy", style="cyan")
        table.add_column("Result", style="green")
        table.add_column("Detail", style="yellow")
        for attempt in outcome.attempts:
            table.add_row(
                attempt.strategy or "-",
                "found" if attempt.found else "not found",
                attempt.doi if attempt.found else (attempt.reason or ""),
            )
        console.print(table)
    if not as_json:
        if shown:
            typer.echo(shown[0])
        else:
            console.print("[yellow]No DOI found[/yellow]")

    if not shown:
        raise typer.Exit(code=EXIT_NOT_FOUND)


@app.command()
def strategies(
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
        envvar="DOCSTODOI_CONFIG",
    ),
) -> None:
    """Explain strategy configuration and ordering."""
    try:
        cfg = load_config(path=config)
    except ValueError as e:
        console.print(f"[red]✗ Error: {e}[/red]")
        raise typer.Exit(code=1)

    registry = get_registry()
    active = {strategy.name for strategy in build_strategies(cfg)}

    table = Table(title="DOI Strategy Chain")
    table.add_column("Order", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Host scope", style="magenta")
    table.add_column("Enabled", style="yellow")
    table.add_column("Description")
    for idx, name in enumerate(cfg.strategies.order, 1):
        strategy = registry[name]
        scope = strategy.host_scope.describe() if strategy.host_scope else "any"
        table.add_row(
            str(idx),
            name,
            scope,
            "✓" if name in active else "✗",
            strategy.description,
        )
    console.print(table)


@app.command()
def print_config(
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
        envvar="DOCSTODOI_CONFIG",
    ),
    raw: bool = typer.Option(False, "--raw", help="Raw JSON"),
) -> None:
    """Print merged effective config."""
    try:
        cfg = load_config(path=config)
    except ValueError as e:
        console.print(f"[red]✗ Error: {e}[/red]")
        raise typer.Exit(code=1)

    data = cfg.model_dump(mode="json")
    if raw:
        typer.echo(json.dumps(data, indent=2))
    else:
        console.print(
            Panel(json.dumps(data, indent=2), title="DoiExtraction Config", expand=False)
        )


@app.command()
def validate_config(
    config: str = typer.Argument(..., help="Path to config file"),
) -> None:
    """Validate a config file."""
    try:
        validate_config_file(config)
        console.print("[green]✓ Config valid[/green]")
    except ValueError as e:
        console.print(f"[red]✗ Invalid: {e}[/red]")
        raise typer.Exit(code=1)


@app.command()
def export_schema(
    output: str = typer.Option("docstodoi-schema.json", "--output", "-o", help="Output file"),
) -> None:
    """Export the configuration JSON Schema."""
    try:
        export_config_schema(output)
    except OSError as e:
        console.print(f"[red]✗ Error exporting schema: {e}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]✓ Schema exported to {output}[/green]")


def main() -> None:  # pragma: no cover - console script entry point
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
