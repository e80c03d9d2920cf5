"""Value parsing for the recognized properties.

Each ``*_valid`` predicate decides whether a declared value takes part in
the cascade at all; invalid values are dropped so the next candidate (or
inheritance) applies.
"""

from __future__ import annotations

import re

from accesslens.color.color import is_color

PT_TO_PX = 1.333
REM_PX = 16.0
DEFAULT_FONT_SIZE_PX = 16.0
DEFAULT_FONT_WEIGHT = 400

# Keywords every property accepts.
GLOBAL_KEYWORDS = frozenset({"inherit", "initial", "unset"})

# A background shorthand layer that paints something other than a flat color.
INDETERMINATE = "<indeterminate>"

ABSOLUTE_SIZES = {
    "xx-small": 9.0,
    "x-small": 10.0,
    "small": 13.0,
    "medium": 16.0,
    "large": 18.0,
    "x-large": 24.0,
    "xx-large": 32.0,
    "xxx-large": 48.0,
}
_RELATIVE_SIZE_FACTOR = 1.2

_LENGTH_RE = re.compile(r"^([+]?(?:\d+\.?\d*|\.\d+))(px|pt|rem|em|%)?$")
_WEIGHT_RE = re.compile(r"^\d+(\.\d+)?$")
_DISPLAY_RE = re.compile(r"^[a-z-]+(\s+[a-z-]+)*$")
_IMAGE_RE = re.compile(r"\b(url|image|image-set|cross-fade|element|[a-z-]*gradient)\s*\(", re.IGNORECASE)


def _keyword(value: str) -> str:
    return value.strip().lower()


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------


def color_valid(value: str) -> bool:
    kw = _keyword(value)
    return kw in GLOBAL_KEYWORDS or kw == "currentcolor" or is_color(value)


def _split_top_level(value: str, comma: bool = False) -> list[str]:
    """Split on whitespace (or commas) outside of parentheses."""
    tokens: list[str] = []
    depth = 0
    current = ""
    for ch in value:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth = max(0, depth - 1)
        separator = ch == "," if comma else ch.isspace()
        if separator and depth == 0:
            if current:
                tokens.append(current)
            current = ""
        else:
            current += ch
    if current:
        tokens.append(current)
    return tokens


def background_shorthand_color(value: str) -> str | None:
    """The color a ``background`` shorthand paints.

    Returns the color token, ``"transparent"`` when the shorthand sets no
    color, :data:`INDETERMINATE` when an image or gradient is painted, or
    ``None`` when the value is invalid.
    """
    kw = _keyword(value)
    if kw in GLOBAL_KEYWORDS:
        return kw
    if _IMAGE_RE.search(value):
        return INDETERMINATE
    # Only the final layer carries a color.
    layers = _split_top_level(value, comma=True) or [""]
    colors = [t for t in _split_top_level(layers[-1]) if t.lower() == "currentcolor" or is_color(t)]
    if len(colors) > 1:
        return None
    return colors[0] if colors else "transparent"


# ---------------------------------------------------------------------------
# Font size
# ---------------------------------------------------------------------------


def font_size_valid(value: str) -> bool:
    kw = _keyword(value)
    return (
        kw in GLOBAL_KEYWORDS
        or kw in ABSOLUTE_SIZES
        or kw in ("larger", "smaller")
        or _LENGTH_RE.match(kw) is not None
    )


def font_size_px(value: str, parent_px: float) -> float | None:
    """Normalize a font-size value to pixels.

    ``em`` and ``%`` are relative to *parent_px*; ``rem`` uses the fixed
    16px baseline.  Returns ``None`` for values that cannot be normalized.
    """
    kw = _keyword(value)
    if kw in ABSOLUTE_SIZES:
        return ABSOLUTE_SIZES[kw]
    if kw == "larger":
        return parent_px * _RELATIVE_SIZE_FACTOR
    if kw == "smaller":
        return parent_px / _RELATIVE_SIZE_FACTOR
    match = _LENGTH_RE.match(kw)
    if match is None:
        return None
    number = float(match.group(1))
    unit = match.group(2)
    if unit in (None, "px"):
        return number
    if unit == "pt":
        return number * PT_TO_PX
    if unit == "rem":
        return number * REM_PX
    if unit == "em":
        return number * parent_px
    if unit == "%":
        return number * parent_px / 100.0
    return None


# ---------------------------------------------------------------------------
# Font weight
# ---------------------------------------------------------------------------


def font_weight_valid(value: str) -> bool:
    kw = _keyword(value)
    if kw in GLOBAL_KEYWORDS or kw in ("normal", "bold", "bolder", "lighter"):
        return True
    return _WEIGHT_RE.match(kw) is not None and 1 <= float(kw) <= 1000


def font_weight(value: str, parent_weight: int) -> int | None:
    kw = _keyword(value)
    if kw == "normal":
        return 400
    if kw == "bold":
        return 700
    if kw == "bolder":
        if parent_weight < 350:
            return 400
        if parent_weight < 550:
            return 700
        return 900
    if kw == "lighter":
        if parent_weight < 100:
            return parent_weight
        if parent_weight < 550:
            return 100
        if parent_weight < 750:
            return 400
        return 700
    if _WEIGHT_RE.match(kw):
        return round(float(kw))
    return None


# ---------------------------------------------------------------------------
# Display / text-decoration
# ---------------------------------------------------------------------------


def display_valid(value: str) -> bool:
    return _DISPLAY_RE.match(_keyword(value)) is not None


def text_decoration_valid(value: str) -> bool:
    return bool(value.strip())
