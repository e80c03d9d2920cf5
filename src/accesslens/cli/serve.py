"""CLI command: accesslens serve -- run the analysis HTTP service."""

from __future__ import annotations

import logging

import click

from accesslens.config import AnalyzerConfig

_DEFAULTS = AnalyzerConfig()


@click.command()
@click.option("--host", default=_DEFAULTS.host, show_default=True, help="Host to bind to")
@click.option("--port", default=_DEFAULTS.port, show_default=True, type=int, help="Port to bind to")
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
def serve(host: str, port: int, debug: bool) -> None:
    """Start the accesslens web server."""
    from accesslens.web.app import create_app

    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO)
    config = AnalyzerConfig(host=host, port=port)
    app = create_app(analyzer_config=config)
    click.echo(f"Starting accesslens on {host}:{port}")
    app.run(host=config.host, port=config.port, debug=debug)
