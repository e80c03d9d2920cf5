from accesslens.model.element import Document, ElementNode, SourceLocation
from accesslens.model.finding import ElementLocator, Finding, Severity
from accesslens.model.report import Report
from accesslens.model.style import Origin, Provenance, ResolvedStyle, ResolvedValue

__all__ = [
    "Document",
    "ElementLocator",
    "ElementNode",
    "Finding",
    "Origin",
    "Provenance",
    "Report",
    "ResolvedStyle",
    "ResolvedValue",
    "Severity",
    "SourceLocation",
]
