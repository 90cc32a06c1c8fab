"""
Command-line interface for Candlescan.
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import Config
from .exceptions import RowParseError
from .loader import load_day_records
from .logger import get_scan_adapter, setup_logging
from .models import PatternMatch, PatternName
from .patterns.classifier import PatternClassifier, default_detectors
from .patterns.pattern_config import PatternDetectionConfig, get_pattern_config

console = Console()

ALL_PATTERNS = "all"


@click.group()
@click.version_option(version=__version__, prog_name="candlescan")
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a .env file with configuration overrides"
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging"
)
@click.pass_context
def main(ctx: click.Context, env_file: Optional[str], verbose: bool) -> None:
    """
    Candlescan: candlestick pattern scanner for daily stock prices.

    Reads CSV rows of date, open, high, low, close and reports the days
    that form hammer, three white soldiers or evening star patterns.
    """
    ctx.ensure_object(dict)

    try:
        config = Config.load_from_env(env_file)
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    ctx.obj["config"] = config
    ctx.obj["logger"] = setup_logging(config.logging, verbose=verbose)


@main.command()
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--pattern",
    "-p",
    "pattern_name",
    type=click.Choice([p.value for p in PatternName] + [ALL_PATTERNS]),
    default=PatternName.HAMMER.value,
    show_default=True,
    help="Pattern to scan for"
)
@click.option("--date-format", default=None, help="strptime format of the CSV date column")
@click.option("--strict", is_flag=True, help="Abort on the first invalid row instead of skipping it")
@click.option(
    "--pattern-config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file with pattern thresholds"
)
@click.pass_context
def scan(
    ctx: click.Context,
    csv_file: Path,
    pattern_name: str,
    date_format: Optional[str],
    strict: bool,
    pattern_config: Optional[Path]
) -> None:
    """Scan CSV_FILE for candlestick patterns."""
    config: Config = ctx.obj["config"]
    log = get_scan_adapter(ctx.obj["logger"], pattern=pattern_name, source=str(csv_file))

    loader_config = config.loader.model_copy(update={
        "date_format": date_format or config.loader.date_format,
        "skip_invalid_rows": config.loader.skip_invalid_rows and not strict,
    })

    config_path = pattern_config or config.pattern_config_path
    try:
        thresholds = PatternDetectionConfig.load_from_file(config_path) if config_path else get_pattern_config()
    except (OSError, ValueError) as e:
        console.print(f"[red]✗[/red] Invalid pattern configuration {config_path}: {e}")
        sys.exit(1)

    try:
        result = load_day_records(csv_file, loader_config)
    except RowParseError as e:
        log.error(f"Import aborted: {e}")
        console.print(f"[red]✗[/red] Import aborted: {e}")
        sys.exit(1)

    for rejected in result.rejected:
        console.print(f"[yellow]![/yellow] Skipped {rejected}")

    classifier = PatternClassifier(default_detectors(thresholds))
    names = classifier.supported_patterns() if pattern_name == ALL_PATTERNS else [pattern_name]

    matches: Dict[str, List[PatternMatch]] = {
        name: classifier.find_matches(name, result.records) for name in names
    }

    found = sum(len(m) for m in matches.values())
    log.info(f"Scanned {len(result.records)} day(s), found {found} match(es)")

    console.print(_matches_table(matches, config.report.date_format))
    console.print(
        f"{found} match(es) in {len(result.records)} day(s)"
        f" ({len(result.rejected)} row(s) skipped)"
    )


@main.command()
def patterns() -> None:
    """List the supported patterns."""
    table = Table(title="Supported Patterns", show_header=True)
    table.add_column("Pattern", style="cyan")
    table.add_column("Name")
    table.add_column("Days", justify="right")

    for detector in default_detectors():
        name = detector.get_pattern_name()
        table.add_row(name.value, name.display_name, str(detector.get_required_days()))

    console.print(table)


@main.command("show-config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show the effective configuration."""
    config: Config = ctx.obj["config"]

    table = Table(title="Candlescan Configuration", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for section_name in ("loader", "report", "logging"):
        section = getattr(config, section_name)
        for key, value in section.model_dump().items():
            table.add_row(f"{section_name}.{key}", str(value))
    table.add_row("pattern_config_path", str(config.pattern_config_path or "-"))

    console.print(table)


def _matches_table(matches: Dict[str, List[PatternMatch]], date_format: str) -> Table:
    table = Table(title="Pattern Matches", show_header=True)
    table.add_column("Pattern", style="cyan")
    table.add_column("Start date")
    table.add_column("End date")
    table.add_column("Days", justify="right")

    for name, found in matches.items():
        for match in found:
            table.add_row(
                name,
                match.start_date.strftime(date_format),
                match.end_date.strftime(date_format),
                str(match.day_count)
            )

    return table


if __name__ == "__main__":
    main()
