"""Color values and CSS color parsing."""

from __future__ import annotations

import colorsys
import math
import re
from dataclasses import dataclass

from accesslens.color.named import NAMED_COLORS
from accesslens.errors import ColorParseError

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_RE = re.compile(r"^(rgba?|hsla?)\(\s*(.*?)\s*\)$", re.IGNORECASE | re.DOTALL)
_NUMBER_RE = re.compile(r"^([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)(%|deg|grad|rad|turn)?$")

_HUE_UNITS = {None: 1.0, "deg": 1.0, "grad": 0.9, "rad": 180.0 / math.pi, "turn": 360.0}


@dataclass(frozen=True)
class Color:
    """An sRGB color with channels in 0..255 and alpha in 0..1."""

    r: float
    g: float
    b: float
    alpha: float = 1.0

    @property
    def is_opaque(self) -> bool:
        return self.alpha >= 1.0

    @property
    def is_transparent(self) -> bool:
        return self.alpha <= 0.0

    @property
    def hex(self) -> str:
        channels = [round(self.r), round(self.g), round(self.b)]
        if not self.is_opaque:
            channels.append(round(self.alpha * 255))
        return "#" + "".join(f"{c:02x}" for c in channels)

    def over(self, background: Color) -> Color:
        """Composite this color over *background* (source-over)."""
        if self.is_opaque:
            return self
        a = self.alpha
        out_alpha = a + background.alpha * (1.0 - a)
        if out_alpha <= 0.0:
            return TRANSPARENT

        def blend(fg: float, bg: float) -> float:
            return (fg * a + bg * background.alpha * (1.0 - a)) / out_alpha

        return Color(
            r=blend(self.r, background.r),
            g=blend(self.g, background.g),
            b=blend(self.b, background.b),
            alpha=min(1.0, out_alpha),
        )

    def __str__(self) -> str:
        return self.hex


WHITE = Color(255.0, 255.0, 255.0)
BLACK = Color(0.0, 0.0, 0.0)
TRANSPARENT = Color(0.0, 0.0, 0.0, 0.0)


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def _number(token: str) -> tuple[float, str | None]:
    match = _NUMBER_RE.match(token.strip().lower())
    if match is None:
        raise ValueError(token)
    return float(match.group(1)), match.group(2)


def _channel(token: str) -> float:
    value, unit = _number(token)
    if unit == "%":
        value = value * 255.0 / 100.0
    elif unit is not None:
        raise ValueError(token)
    return _clamp(value, 0.0, 255.0)


def _alpha(token: str) -> float:
    value, unit = _number(token)
    if unit == "%":
        value /= 100.0
    elif unit is not None:
        raise ValueError(token)
    return _clamp(value, 0.0, 1.0)


def _percentage(token: str) -> float:
    value, unit = _number(token)
    if unit not in ("%", None):
        raise ValueError(token)
    return _clamp(value / 100.0, 0.0, 1.0)


def _hue(token: str) -> float:
    value, unit = _number(token)
    if unit == "%":
        raise ValueError(token)
    return (value * _HUE_UNITS[unit]) % 360.0


def _split_args(inner: str) -> list[str]:
    """Split legacy comma syntax or modern ``a b c / alpha`` syntax."""
    if "," in inner:
        args = [a.strip() for a in inner.split(",")]
        if len(args) not in (3, 4) or not all(args):
            raise ValueError(inner)
        return args
    alpha = None
    if "/" in inner:
        inner, alpha = inner.split("/", 1)
    args = inner.split()
    if len(args) != 3:
        raise ValueError(inner)
    if alpha is not None:
        args.append(alpha.strip())
    return args


def _parse_hex(digits: str) -> Color:
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    alpha = int(digits[6:8], 16) / 255.0 if len(digits) == 8 else 1.0
    return Color(float(r), float(g), float(b), alpha)


def _parse_function(name: str, inner: str) -> Color:
    args = _split_args(inner)
    alpha = _alpha(args[3]) if len(args) == 4 else 1.0
    if name.startswith("rgb"):
        r, g, b = (_channel(a) for a in args[:3])
        return Color(r, g, b, alpha)
    hue = _hue(args[0])
    saturation = _percentage(args[1])
    lightness = _percentage(args[2])
    r, g, b = colorsys.hls_to_rgb(hue / 360.0, lightness, saturation)
    return Color(r * 255.0, g * 255.0, b * 255.0, alpha)


def parse_color(value: str | Color) -> Color:
    """Parse a CSS color into a :class:`Color`.

    Accepts 3/4/6/8-digit hex, ``rgb()``/``rgba()``, ``hsl()``/``hsla()``,
    named colors and ``transparent``.  Raises :class:`ColorParseError`
    for anything else (including context-dependent keywords such as
    ``currentcolor`` and ``inherit``, which callers resolve first).
    """
    if isinstance(value, Color):
        return value
    if not isinstance(value, str):
        raise ColorParseError(value)
    text = value.strip()
    lowered = text.lower()

    if lowered == "transparent":
        return TRANSPARENT
    if lowered in NAMED_COLORS:
        return _parse_hex(NAMED_COLORS[lowered][1:])

    match = _HEX_RE.match(text)
    if match:
        return _parse_hex(match.group(1))

    match = _FUNC_RE.match(text)
    if match:
        try:
            return _parse_function(match.group(1).lower(), match.group(2))
        except (ValueError, KeyError) as exc:
            raise ColorParseError(value, cause=exc) from exc

    raise ColorParseError(value)


def is_color(value: str) -> bool:
    """True if *value* parses as a color."""
    try:
        parse_color(value)
    except ColorParseError:
        return False
    return True
