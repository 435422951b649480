"""CLI for the provider selector.

Provides command-line interface for ranking cloud providers against
weighted criteria.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from . import __version__
from .app_logging import get_logger, setup_logging
from .catalog import resolve_catalog, validate_catalog
from .config import (
    config_search_order,
    find_config_file,
    get_config,
    load_config,
    save_default_config,
)
from .engine import ProviderSelector
from .explainer import reasoning_fragments
from .exceptions import CatalogLoadError
from .schema import AnalysisResult, Criterion, Provider

console = Console()
logger = get_logger("cli")

TRANSFORM_NOTES = {
    Criterion.PRICE.value: "inverted (100 - value), lower price is better",
    Criterion.RELIABILITY.value: "uptime percentage rescaled onto 0-100",
}


def parse_weight_options(values: tuple) -> dict[str, str]:
    """Parse repeated ``key=value`` options into a raw criteria mapping."""
    criteria = {}
    for item in values:
        if "=" not in item:
            raise click.BadParameter(f"'{item}' is not in key=value form", param_hint="--weight")
        key, value = item.split("=", 1)
        criteria[key.strip()] = value.strip()
    return criteria


def _build_selector(catalog: Optional[str]) -> ProviderSelector:
    path = catalog or get_config().catalog_path
    return ProviderSelector(resolve_catalog(path))


@click.group()
@click.version_option(version=__version__, prog_name="provider-selector")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a selector-config.yaml file"
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Override the configured log level"
)
def main(config_path: Optional[str], log_level: Optional[str]):
    """Cloud Provider Selector.

    Scores a catalog of cloud providers against the criteria you care
    about and recommends the best fit, with reasoning.
    """
    path = Path(config_path) if config_path else find_config_file()
    cfg = load_config(path) if path else get_config()
    setup_logging(level=log_level or cfg.logging.level, rich_output=cfg.logging.rich)
    if path:
        logger.debug("Loaded configuration from %s", path)


@main.command("analyze")
@click.option(
    "--weight", "-w",
    "weight",
    multiple=True,
    help="Criterion weight (format: criterion=value), repeatable"
)
@click.option(
    "--catalog", "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a provider catalog (JSON or YAML). Built-in catalog by default"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Also write the JSON payload to this file"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show the weights that were applied"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
def analyze_cmd(
    weight: tuple,
    catalog: Optional[str],
    out: Optional[str],
    verbose: bool,
    json_output: bool,
):
    """Recommend the best provider for the given criteria weights.

    Examples:
        provider-selector analyze -w price=50 -w reliability=50
        provider-selector analyze -w efficiency=100 -j
        provider-selector analyze -c providers.yaml -w security=3 -w support=1 -v
    """
    criteria = parse_weight_options(weight)

    try:
        selector = _build_selector(catalog)
    except CatalogLoadError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    outcome = selector.rank_all(criteria)
    payload = outcome.to_payload()

    if json_output:
        click.echo(json.dumps(payload, indent=2))
    elif isinstance(outcome, AnalysisResult):
        display_result(outcome, selector, verbose)
    else:
        console.print(f"[red]✗ {outcome.error}[/red]")
        console.print(f"[dim]Recognised criteria: {', '.join(Criterion.keys())}[/dim]")

    if out:
        with open(out, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        if not json_output:
            console.print(f"\n[green]Results saved to {out}[/green]")

    if not payload["success"]:
        sys.exit(1)


@main.command("providers")
@click.option(
    "--catalog", "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a provider catalog (JSON or YAML). Built-in catalog by default"
)
@click.option(
    "--id", "provider_id",
    help="Show details for a specific provider"
)
def providers_cmd(catalog: Optional[str], provider_id: Optional[str]):
    """Inspect the provider catalog."""
    try:
        selector = _build_selector(catalog)
    except CatalogLoadError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    cat = selector.catalog
    console.print(f"\n[bold blue]Provider Catalog[/bold blue]")
    console.print(f"Version: {cat.version}")
    console.print(f"Total Providers: {len(cat)}")
    console.print()

    if provider_id:
        provider = cat.get(provider_id)
        if not provider:
            console.print(f"[red]Provider not found: {provider_id}[/red]")
            sys.exit(1)
        display_provider_detail(provider)
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Price", justify="right")
    table.add_column("Reliability", justify="right")
    table.add_column("Description")

    for provider in cat.providers.values():
        price = provider.metric(Criterion.PRICE.value)
        reliability = provider.metric(Criterion.RELIABILITY.value)
        table.add_row(
            provider.id,
            provider.name,
            "-" if price is None else str(price),
            "-" if reliability is None else f"{reliability}%",
            provider.description,
        )

    console.print(table)


@main.command("criteria")
def criteria_cmd():
    """List the recognised criteria and how each is scored."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Label")
    table.add_column("Scoring")

    for criterion in Criterion:
        note = TRANSFORM_NOTES.get(criterion.value, "used as is, higher is better")
        table.add_row(criterion.value, criterion.label, note)

    console.print(table)


@main.command("validate")
@click.option(
    "--catalog", "-c",
    required=True,
    type=click.Path(),
    help="Path to a provider catalog (JSON or YAML)"
)
def validate_cmd(catalog: str):
    """Validate a provider catalog file.

    Examples:
        provider-selector validate -c providers.yaml
    """
    is_valid, issues = validate_catalog(catalog)
    if is_valid:
        console.print(f"[green]✓ Catalog valid: {catalog}[/green]")
        for issue in issues:
            console.print(f"  [yellow]![/yellow] {escape(issue)}")
    else:
        console.print(f"[red]✗ Catalog invalid: {catalog}[/red]")
        for issue in issues:
            console.print(f"  - {escape(issue)}")

    sys.exit(0 if is_valid else 1)


def display_result(result: AnalysisResult, selector: ProviderSelector, verbose: bool):
    """Display an analysis result in formatted text."""
    winner = selector.catalog.providers[result.best_provider]

    console.print(Panel(
        f"Best Provider: [bold cyan]{winner.name}[/bold cyan] ({result.best_provider})\n"
        f"Score: [bold]{result.score:.2f}[/bold] / 100\n\n"
        f"{winner.description}",
        title="Recommendation",
    ))

    if verbose:
        console.print("\n[bold]Weights Applied:[/bold]")
        for key, value in result.weights.items():
            console.print(f"  • {key}: [cyan]{value:g}[/cyan]")

    console.print("\n[bold]Reasoning:[/bold]")
    for fragment in reasoning_fragments(winner, result.weights, selector.neutral_value):
        console.print(f"  [green]•[/green] {fragment}")

    console.print("\n[bold]Ranking:[/bold]\n")
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Provider", style="cyan")
    table.add_column("Name")
    table.add_column("Score", justify="right")

    for i, entry in enumerate(result.all_scores, 1):
        provider = selector.catalog.providers[entry.provider]
        table.add_row(str(i), entry.provider, provider.name, entry.score)

    console.print(table)


def display_provider_detail(provider: Provider):
    """Display detailed provider information."""
    tree = Tree(f"[bold cyan]{provider.name}[/bold cyan]")

    identity = tree.add("[bold]Identity[/bold]")
    identity.add(f"ID: {provider.id}")
    identity.add(f"Description: {provider.description}")

    metrics = tree.add("[bold]Metrics[/bold]")
    for key, value in provider.metrics.items():
        suffix = "% uptime" if key == Criterion.RELIABILITY.value else "/100"
        metrics.add(f"{key.replace('_', ' ')}: {'-' if value is None else f'{value}{suffix}'}")

    console.print(tree)


@main.command("init-config")
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="selector-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default selector configuration file.

    Example:
        provider-selector init-config --out my-config.yaml
    """
    out_path = Path(out)
    if out_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    save_default_config(out_path)
    console.print(f"[green]✓[/green] Config file created: {out}")
    console.print("\nThe selector will look for config in this order:")
    for i, location in enumerate(config_search_order(), 1):
        console.print(f"  {i}. {location}")


if __name__ == "__main__":
    main()
