"""WCAG relative luminance and contrast ratio."""

from __future__ import annotations

from accesslens.color.color import WHITE, Color, parse_color

# sRGB transfer-function breakpoint as published in WCAG 2.x.
_LINEAR_THRESHOLD = 0.03928


def _linearize(channel: float) -> float:
    v = channel / 255.0
    if v <= _LINEAR_THRESHOLD:
        return v / 12.92
    return ((v + 0.055) / 1.055) ** 2.4


def relative_luminance(color: str | Color) -> float:
    """Relative luminance of an opaque color, in 0..1.

    Translucent colors are flattened onto white first.
    """
    c = parse_color(color)
    if not c.is_opaque:
        c = c.over(WHITE)
    return (
        0.2126 * _linearize(c.r)
        + 0.7152 * _linearize(c.g)
        + 0.0722 * _linearize(c.b)
    )


def contrast_ratio(color_a: str | Color, color_b: str | Color) -> float:
    """Contrast ratio between two colors, from 1.0 to 21.0.

    A translucent *color_a* is composited over *color_b*; a translucent
    *color_b* over white.  For opaque colors the result is symmetric.

    Raises :class:`~accesslens.errors.ColorParseError` for unparseable input.
    """
    background = parse_color(color_b)
    if not background.is_opaque:
        background = background.over(WHITE)
    foreground = parse_color(color_a).over(background)

    l1 = relative_luminance(foreground)
    l2 = relative_luminance(background)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)
