"""accesslens CLI entry point: Click group with subcommands."""

import click

from accesslens import __version__


@click.group()
@click.version_option(version=__version__, prog_name="accesslens")
def cli() -> None:
    """accesslens - static accessibility analysis for HTML documents."""


# Import and register subcommands
from accesslens.cli.analyze import analyze  # noqa: E402
from accesslens.cli.serve import serve  # noqa: E402

cli.add_command(analyze)
cli.add_command(serve)
