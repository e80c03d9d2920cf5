"""Accessibility checks.

Each check is a function taking an :class:`AnalysisContext` and returning a
list of :class:`Finding` objects.  Checks only read the document and the
resolved styles; scoring happens later, in the report aggregator.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from accesslens.color.contrast import contrast_ratio
from accesslens.config import AnalyzerConfig
from accesslens.errors import ColorParseError
from accesslens.model.element import Document, ElementNode
from accesslens.model.finding import ElementLocator, Finding, Severity
from accesslens.model.style import ResolvedStyle

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisContext:
    """Read-only inputs shared by all checks."""

    document: Document
    styles: dict[int, ResolvedStyle]
    config: AnalyzerConfig = field(default_factory=AnalyzerConfig)

    def style(self, node: ElementNode) -> ResolvedStyle:
        return self.styles[node.index]

    def is_rendered(self, node: ElementNode) -> bool:
        """False if the element or any ancestor has ``display: none``."""
        if self.style(node).is_hidden:
            return False
        return not any(self.style(a).is_hidden for a in self.document.ancestors(node))


Check = Callable[[AnalysisContext], list[Finding]]


# ---------------------------------------------------------------------------
# Known value sets
# ---------------------------------------------------------------------------

IMAGE_TAGS = frozenset({"img", "area"})

HEADING_LEVELS = {f"h{n}": n for n in range(1, 7)}

FORM_CONTROL_TAGS = frozenset({"input", "select", "textarea"})

# Input types that are labelled by their own value or are not shown.
UNLABELLED_INPUT_TYPES = frozenset({"hidden", "submit", "reset", "button", "image"})


def _input_type(node: ElementNode) -> str:
    return (node.get("type") or "text").strip().lower()


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


# ---------------------------------------------------------------------------
# Critical rules
# ---------------------------------------------------------------------------


def is_large_text(style: ResolvedStyle, config: AnalyzerConfig) -> bool:
    """Large text: at least 18px, or at least 14px and bold."""
    if style.font_size_px >= config.large_text_px:
        return True
    return style.font_size_px >= config.large_bold_text_px and style.weight >= config.bold_weight


def check_color_contrast(context: AnalysisContext) -> list[Finding]:
    """Visible text must meet the WCAG AA contrast ratio for its size."""
    config = context.config
    findings: list[Finding] = []
    for node in context.document.iter_elements():
        if not node.has_text or not context.is_rendered(node):
            continue
        style = context.style(node)
        foreground, background = style.text_color, style.background
        if foreground is None or background is None:
            log.debug("Contrast indeterminate for <%s> at %s", node.tag, node.location)
            continue
        try:
            ratio = contrast_ratio(foreground, background)
        except ColorParseError:
            log.debug("Skipping <%s>: unparseable color", node.tag)
            continue

        large = is_large_text(style, config)
        required = config.large_text_ratio if large else config.normal_text_ratio
        if ratio >= required:
            continue
        findings.append(
            Finding(
                rule="color-contrast",
                severity=Severity.CRITICAL,
                message=(
                    f"Color contrast is {ratio:.2f}:1, below the required "
                    f"{required:.2f}:1 ({foreground.over(background).hex} on {background.hex})."
                ),
                penalty=config.contrast_penalty,
                element=ElementLocator.for_node(node),
                data={
                    "ratio": round(ratio, 2),
                    "required": required,
                    "fontSize": round(style.font_size_px, 2),
                },
                suggestion=(
                    f"Darken the text or lighten the background to reach at least "
                    f"{required:.2f}:1."
                ),
            )
        )
    return findings


def check_image_alt(context: AnalysisContext) -> list[Finding]:
    """Images (``img``, ``area``, ``input type=image``) need an ``alt`` attribute."""
    findings: list[Finding] = []
    for node in context.document.iter_elements():
        is_image = node.tag in IMAGE_TAGS or (
            node.tag == "input" and _input_type(node) == "image"
        )
        if not is_image or node.has("alt"):
            continue
        findings.append(
            Finding(
                rule="image-alt",
                severity=Severity.CRITICAL,
                message=f"<{node.tag}> element has no alt attribute.",
                penalty=context.config.image_alt_penalty,
                element=ElementLocator.for_node(node),
                suggestion='Add alt text describing the image, or alt="" if it is decorative.',
            )
        )
    return findings


def check_required_attributes(context: AnalysisContext) -> list[Finding]:
    """Per-tag mandatory attributes; one finding per missing attribute."""
    table = context.config.required_attributes
    findings: list[Finding] = []
    for node in context.document.iter_elements():
        required = table.get(node.tag)
        if not required:
            continue
        for attr, (severity, penalty) in required.items():
            if not _blank(node.get(attr)):
                continue
            findings.append(
                Finding(
                    rule="required-attribute",
                    severity=Severity(severity),
                    message=f'<{node.tag}> element is missing the required "{attr}" attribute.',
                    penalty=penalty,
                    element=ElementLocator.for_node(node),
                    suggestion=f'Add a "{attr}" attribute to the <{node.tag}> element.',
                )
            )
    return findings


# ---------------------------------------------------------------------------
# Structural rules (WARNING severity)
# ---------------------------------------------------------------------------


def check_heading_order(context: AnalysisContext) -> list[Finding]:
    """Heading levels should increase by at most one at a time."""
    findings: list[Finding] = []
    previous: int | None = None
    for node in context.document.iter_elements():
        level = HEADING_LEVELS.get(node.tag)
        if level is None or not context.is_rendered(node):
            continue
        if previous is not None and level > previous + 1:
            findings.append(
                Finding(
                    rule="heading-order",
                    severity=Severity.WARNING,
                    message=f"Heading level jumps from h{previous} to h{level}.",
                    penalty=context.config.heading_order_penalty,
                    element=ElementLocator.for_node(node),
                    suggestion=f"Use an h{previous + 1} here or restructure the outline.",
                )
            )
        previous = level
    return findings


def _has_label(context: AnalysisContext, node: ElementNode) -> bool:
    for attr in ("aria-label", "aria-labelledby", "title"):
        if not _blank(node.get(attr)):
            return True
    if any(a.tag == "label" for a in context.document.ancestors(node)):
        return True
    control_id = node.get("id")
    if _blank(control_id):
        return False
    return any(
        label.get("for") == control_id for label in context.document.find_all("label")
    )


def check_label_association(context: AnalysisContext) -> list[Finding]:
    """Form controls must have an associated label."""
    findings: list[Finding] = []
    for node in context.document.iter_elements():
        if node.tag not in FORM_CONTROL_TAGS:
            continue
        if node.tag == "input" and _input_type(node) in UNLABELLED_INPUT_TYPES:
            continue
        if not context.is_rendered(node) or _has_label(context, node):
            continue
        findings.append(
            Finding(
                rule="label-association",
                severity=Severity.WARNING,
                message=f"<{node.tag}> form control has no associated label.",
                penalty=context.config.label_association_penalty,
                element=ElementLocator.for_node(node),
                suggestion='Wrap the control in a <label> or add <label for="...">.',
            )
        )
    return findings


def check_landmark_unique(context: AnalysisContext) -> list[Finding]:
    """A document has at most one main landmark."""
    mains = [
        node
        for node in context.document.iter_elements()
        if (node.tag == "main" or (node.get("role") or "").strip().lower() == "main")
        and context.is_rendered(node)
    ]
    return [
        Finding(
            rule="landmark-unique",
            severity=Severity.WARNING,
            message=f"Additional main landmark ({len(mains)} found).",
            penalty=context.config.landmark_penalty,
            element=ElementLocator.for_node(node),
            suggestion="Keep a single <main> landmark per page.",
        )
        for node in mains[1:]
    ]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

ALL_CHECKS: tuple[Check, ...] = (
    check_color_contrast,
    check_image_alt,
    check_required_attributes,
    check_heading_order,
    check_label_association,
    check_landmark_unique,
)
