"""Analyzer facade: markup text in, Report out."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from accesslens.cascade.resolver import StyleResolver
from accesslens.config import AnalyzerConfig
from accesslens.errors import AccessLensError, InputError, InternalError
from accesslens.markup.parser import parse_markup
from accesslens.model.report import Report
from accesslens.report import aggregate
from accesslens.rules.checks import Check
from accesslens.rules.engine import evaluate
from accesslens.stylesheet.parser import parse_stylesheets

__all__ = ["analyze"]

log = logging.getLogger(__name__)


def analyze(
    markup: str,
    config: AnalyzerConfig | None = None,
    extra_stylesheets: Sequence[str] = (),
    extra_checks: list[Check] | None = None,
) -> Report:
    """Analyze *markup* and return its accessibility :class:`Report`.

    *extra_stylesheets* are applied before the document's own ``<style>``
    blocks, as linked sheets in ``<head>`` would be.

    Raises :class:`InputError` for empty or non-string input and
    :class:`InternalError` for any unexpected fault; no partial report is
    ever returned.
    """
    if not isinstance(markup, str):
        raise InputError(f"Markup must be a string, got {type(markup).__name__}")
    if not markup.strip():
        raise InputError("Markup is empty")

    config = config or AnalyzerConfig()

    try:
        document = parse_markup(markup)
        stylesheet = parse_stylesheets([*extra_stylesheets, *document.stylesheets])
        if stylesheet.recovered:
            log.debug("Recovered from %d malformed style fragment(s)", len(stylesheet.recovered))
        styles = StyleResolver(stylesheet).resolve(document)
        findings = evaluate(document, styles, config=config, extra_checks=extra_checks)
        report = aggregate(findings, config=config)
    except AccessLensError:
        raise
    except Exception as exc:
        log.exception("Analysis failed")
        raise InternalError(cause=exc) from exc

    log.info(
        "Analyzed %d element(s): score=%d critical=%d warnings=%d",
        len(document), report.score, report.critical_count, report.warning_count,
    )
    return report
