"""Report aggregation: fold findings into a scored, ordered Report."""

from __future__ import annotations

from collections.abc import Iterable

from accesslens.config import AnalyzerConfig
from accesslens.model.finding import Finding
from accesslens.model.report import Report

MAX_SCORE = 100


def compute_score(findings: Iterable[Finding]) -> int:
    """100 minus every penalty, clamped to 0..100."""
    total = MAX_SCORE - sum(f.penalty for f in findings)
    return max(0, min(MAX_SCORE, total))


def aggregate(findings: Iterable[Finding], config: AnalyzerConfig | None = None) -> Report:
    """Build a :class:`Report` from *findings*.

    The result does not depend on the order of *findings*: each severity
    group is sorted by source position, then rule id, then message.
    """
    config = config or AnalyzerConfig()
    findings = list(findings)
    critical = sorted((f for f in findings if f.is_critical), key=Finding.sort_key)
    warnings = sorted((f for f in findings if f.is_warning), key=Finding.sort_key)
    score = compute_score(findings)
    return Report(
        score=score,
        grade=config.grade_for(score),
        critical=tuple(critical),
        warnings=tuple(warnings),
    )
