"""Report model: the scored, ordered result of one analysis."""

from __future__ import annotations

import json
from dataclasses import dataclass

from accesslens.model.finding import Finding


@dataclass(frozen=True)
class Report:
    """Final analysis report.

    ``critical`` and ``warnings`` are each in document source order.
    """

    score: int
    grade: str
    critical: tuple[Finding, ...] = ()
    warnings: tuple[Finding, ...] = ()

    def __post_init__(self) -> None:
        if not 0 <= self.score <= 100:
            raise ValueError(f"Report score must be within 0..100, got {self.score}")

    @property
    def critical_count(self) -> int:
        return len(self.critical)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def findings(self) -> tuple[Finding, ...]:
        return self.critical + self.warnings

    def summary(self) -> dict[str, object]:
        return {
            "score": self.score,
            "grade": self.grade,
            "criticalCount": self.critical_count,
            "warningCount": self.warning_count,
        }

    def to_dict(self) -> dict[str, object]:
        return {
            "summary": self.summary(),
            "critical": [f.to_dict() for f in self.critical],
            "warnings": [f.to_dict() for f in self.warnings],
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
