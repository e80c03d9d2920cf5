"""Finding model: one reported rule violation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from accesslens.model.element import ElementNode, SourceLocation


class Severity(Enum):
    """Severity level for a finding."""

    CRITICAL = "critical"
    WARNING = "warning"


@dataclass(frozen=True)
class ElementLocator:
    """Identifies the element a finding is about.

    Attributes:
        tag: Element tag name.
        index: Arena index of the element, for stable ordering.
        location: Source position of the start tag, if known.
        snippet: Rendered opening tag.
    """

    tag: str
    index: int
    location: SourceLocation | None = None
    snippet: str = ""

    @classmethod
    def for_node(cls, node: ElementNode) -> ElementLocator:
        return cls(
            tag=node.tag,
            index=node.index,
            location=node.location,
            snippet=node.start_tag(),
        )

    def __str__(self) -> str:
        label = self.snippet or f"<{self.tag}>"
        if self.location:
            return f"{label} at {self.location}"
        return label


@dataclass(frozen=True)
class Finding:
    """A single accessibility rule violation.

    Attributes:
        rule: Identifier of the check that produced this finding.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        penalty: Points subtracted from the score for this finding.
        element: The element involved, if any.
        data: Numeric details, e.g. observed and required contrast ratios.
        suggestion: Suggested remediation, if available.
    """

    rule: str
    severity: Severity
    message: str
    penalty: int = 0
    element: ElementLocator | None = None
    data: dict[str, float] = field(default_factory=dict)
    suggestion: str | None = None

    @property
    def is_critical(self) -> bool:
        return self.severity is Severity.CRITICAL

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def sort_key(self) -> tuple:
        """Document source order; element-less findings last."""
        if self.element is None:
            return (1, 0, 0, 0, self.rule, self.message)
        loc = self.element.location
        line = loc.line if loc else 0
        column = loc.column if loc else 0
        return (0, line, column, self.element.index, self.rule, self.message)

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {"rule": self.rule, "description": self.message}
        if self.element is not None:
            out["element"] = self.element.snippet or f"<{self.element.tag}>"
            if self.element.location is not None:
                out["lineNumber"] = self.element.location.line
        if self.suggestion:
            out["suggestion"] = self.suggestion
        return out

    def __str__(self) -> str:
        location = f" [{self.element}]" if self.element else ""
        return f"{self.severity.value.upper()}{location}: {self.message}"
