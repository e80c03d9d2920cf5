"""CLI command: accesslens analyze -- analyze an HTML file or URL."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from accesslens.analyzer import analyze as run_analyze
from accesslens.config import AnalyzerConfig
from accesslens.errors import AccessLensError, InputError
from accesslens.fetch import fetch_markup
from accesslens.model.report import Report


def _print_text(report: Report, source: str) -> None:
    click.echo(f"{source}: score {report.score}/100, grade {report.grade}")
    for finding in report.findings:
        click.echo(str(finding))
        if finding.suggestion:
            click.echo(f"    fix: {finding.suggestion}")
    click.echo()
    click.echo(
        f"Summary: {report.critical_count} critical, {report.warning_count} warning(s)"
    )


@click.command()
@click.argument("path", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--url", help="Fetch the document from a URL instead of a file.")
@click.option(
    "--css",
    "css_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Extra stylesheet applied before the document's own styles (repeatable).",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
)
@click.option("--fail-under", type=click.IntRange(0, 100), default=None,
              help="Exit with code 1 if the score is below this value.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def analyze(
    path: str | None,
    url: str | None,
    css_files: tuple[str, ...],
    output_format: str,
    fail_under: int | None,
    verbose: bool,
) -> None:
    """Analyze an HTML document for accessibility problems.

    Prints the report and exits with code 0, or 1 when the score is below
    --fail-under, or 2 when the input cannot be analyzed.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if bool(path) == bool(url):
        raise click.UsageError("Provide exactly one of PATH or --url.")

    config = AnalyzerConfig()
    try:
        if url:
            markup = fetch_markup(url, timeout=config.fetch_timeout, max_bytes=config.max_input_bytes)
            source = url
        else:
            file_path = Path(path)  # type: ignore[arg-type]
            if file_path.stat().st_size > config.max_input_bytes:
                raise InputError(f"{file_path.name} exceeds {config.max_input_bytes} bytes")
            markup = file_path.read_text(encoding="utf-8", errors="replace")
            source = file_path.name
        stylesheets = [Path(p).read_text(encoding="utf-8", errors="replace") for p in css_files]
        report = run_analyze(markup, config=config, extra_stylesheets=stylesheets)
    except AccessLensError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    if output_format == "json":
        click.echo(report.to_json(indent=2))
    else:
        _print_text(report, source)

    if fail_under is not None and report.score < fail_under:
        sys.exit(1)
    sys.exit(0)
