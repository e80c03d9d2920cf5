from accesslens.markup.parser import parse_markup

__all__ = ["parse_markup"]
