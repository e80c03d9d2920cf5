from accesslens.color.color import BLACK, TRANSPARENT, WHITE, Color, is_color, parse_color
from accesslens.color.contrast import contrast_ratio, relative_luminance

__all__ = [
    "BLACK",
    "TRANSPARENT",
    "WHITE",
    "Color",
    "contrast_ratio",
    "is_color",
    "parse_color",
    "relative_luminance",
]
