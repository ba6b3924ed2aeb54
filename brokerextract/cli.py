"""Command-line interface for the broker document extractor."""

import logging
import os
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .parsers.detect import batch_detect_parsers
from .utils.config import get_config
from .utils.logging_config import configure_logging
from .utils.normalize_api import (
    activities_to_dataframe,
    failures_to_dataframe,
    find_pdf_files,
    parse_files,
)

logger = logging.getLogger(__name__)
console = Console()


def _collect_files(paths: Tuple[str, ...], input_dir: str):
    if not paths:
        return find_pdf_files(input_dir) if os.path.isdir(input_dir) else []
    files = []
    for path in paths:
        if os.path.isdir(path):
            files.extend(find_pdf_files(path))
        else:
            files.append(path)
    return files


@click.group()
@click.option("--log-level", default=None, help="Override the configured log level")
@click.option("--config", "config_path", default=None, help="Path to a YAML config file")
@click.pass_context
def cli(ctx, log_level: Optional[str], config_path: Optional[str]):
    """Broker document extractor CLI."""
    config = get_config(config_path)
    if log_level:
        config["log_level"] = log_level.upper()
    configure_logging(config["log_level"])
    ctx.obj = config


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path())
@click.option("--parser", "parser_name", default=None, help="Force a registered parser")
@click.option(
    "--output",
    "-o",
    default=None,
    help="Write activities to a .csv or .json file (relative names go to the output dir)",
)
@click.option(
    "--fail-on-error/--no-fail-on-error",
    default=False,
    help="Exit with an error if any document could not be parsed",
)
@click.pass_obj
def parse(
    config: dict,
    paths: Tuple[str, ...],
    parser_name: Optional[str],
    output: Optional[str],
    fail_on_error: bool,
):
    """Extract activities from broker PDFs (files or directories)."""
    files = _collect_files(paths, config["input_dir"])
    if not files:
        console.print("[red]No PDF files found.[/red]")
        raise click.Abort()

    try:
        result = parse_files(files, parser_name=parser_name)
    except ValueError as e:
        logger.error(f"Error parsing files: {e}")
        console.print(f"[red]{escape(str(e))}[/red]")
        raise click.Abort()

    activities_df = activities_to_dataframe(result.activities)
    if not activities_df.empty:
        table = Table(title="Activities")
        for column in activities_df.columns:
            table.add_column(column)
        for row in activities_df.itertuples(index=False):
            table.add_row(*[escape(str(value)) for value in row])
        console.print(table)

    for failure in result.failures:
        field = f" [{failure.field}]" if failure.field else ""
        message = escape(f"{failure.source}: {failure.code}{field} {failure.message}")
        console.print(f"[red]✗ {message}[/red]")

    if output:
        if not os.path.isabs(output) and not os.path.dirname(output):
            output = os.path.join(config["output_dir"], output)
        out_dir = os.path.dirname(output)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        if output.lower().endswith(".json"):
            with open(output, "w", encoding="utf-8") as f:
                f.write(result.model_dump_json(indent=2))
        else:
            activities_df.to_csv(output, index=False)
            if result.failures:
                failures_path = os.path.splitext(output)[0] + "_failures.csv"
                failures_to_dataframe(result.failures).to_csv(failures_path, index=False)
        console.print(f"[green]Saved output to {escape(output)}[/green]")

    console.print(
        f"{len(result.activities)} activities, {len(result.failures)} failures"
    )
    if fail_on_error and result.failures:
        raise SystemExit(1)


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path())
@click.pass_obj
def detect(config: dict, paths: Tuple[str, ...]):
    """Show which parser recognizes each file."""
    files = _collect_files(paths, config["input_dir"])
    for fp, parser_name in batch_detect_parsers(files).items():
        click.echo(f"{fp}: {parser_name}")


if __name__ == "__main__":
    cli()
