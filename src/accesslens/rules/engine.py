"""Rule engine: runs the registered checks and collects their findings."""

from __future__ import annotations

import logging

from accesslens.config import AnalyzerConfig
from accesslens.model.element import Document
from accesslens.model.finding import Finding
from accesslens.model.style import ResolvedStyle
from accesslens.rules.checks import ALL_CHECKS, AnalysisContext, Check

log = logging.getLogger(__name__)


def evaluate(
    document: Document,
    styles: dict[int, ResolvedStyle],
    config: AnalyzerConfig | None = None,
    extra_checks: list[Check] | None = None,
) -> list[Finding]:
    """Run all checks against *document* in registration order.

    A check that raises is logged and skipped; the others still run.
    """
    context = AnalysisContext(document=document, styles=styles, config=config or AnalyzerConfig())
    checks: list[Check] = list(ALL_CHECKS)
    if extra_checks:
        checks.extend(extra_checks)

    findings: list[Finding] = []
    for check in checks:
        name = getattr(check, "__name__", repr(check))
        try:
            found = check(context)
        except Exception:
            log.exception("Check %s failed; skipping it", name)
            continue
        log.debug("Check %s produced %d finding(s)", name, len(found))
        findings.extend(found)
    return findings
