"""Resolved (cascade-computed) style of a single element."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from accesslens.color.color import Color


class Origin(Enum):
    """Where a resolved value came from."""

    DEFAULT = "default"
    USER_AGENT = "user-agent"
    RULE = "rule"
    INLINE = "inline"
    INHERITED = "inherited"
    ANCESTOR_BACKGROUND = "ancestor-background"


@dataclass(frozen=True)
class Provenance:
    origin: Origin
    selector: str = ""
    order: int | None = None
    important: bool = False

    def __str__(self) -> str:
        label = self.origin.value
        if self.selector:
            label += f" ({self.selector})"
        if self.important:
            label += " !important"
        return label


@dataclass(frozen=True)
class ResolvedValue:
    value: Any
    provenance: Provenance


@dataclass(frozen=True)
class ResolvedStyle:
    """Final values of the recognized properties for one element.

    ``color`` and ``background_color`` hold :class:`Color` values; the
    background is the painted color behind the element (ancestors already
    composited, always opaque).  ``background_opaque`` is True when the
    element itself paints an opaque background.  Colors may be ``None``
    when a declared value could not be resolved to a concrete color.
    """

    color: ResolvedValue
    background_color: ResolvedValue
    font_size: ResolvedValue  # px, float
    font_weight: ResolvedValue  # 1..1000, int
    text_decoration: ResolvedValue
    display: ResolvedValue
    background_opaque: bool = False

    @property
    def text_color(self) -> Color | None:
        return self.color.value

    @property
    def background(self) -> Color | None:
        return self.background_color.value

    @property
    def font_size_px(self) -> float:
        return self.font_size.value

    @property
    def weight(self) -> int:
        return self.font_weight.value

    @property
    def is_hidden(self) -> bool:
        return self.display.value == "none"
