from accesslens.stylesheet.parser import (
    parse_declarations,
    parse_selector_list,
    parse_stylesheet,
    parse_stylesheets,
)
from accesslens.stylesheet.model import (
    AttributeSelector,
    CompoundSelector,
    Declaration,
    Selector,
    StyleRule,
    Stylesheet,
)

__all__ = [
    "parse_declarations",
    "parse_selector_list",
    "parse_stylesheet",
    "parse_stylesheets",
    "AttributeSelector",
    "CompoundSelector",
    "Declaration",
    "Selector",
    "StyleRule",
    "Stylesheet",
]
