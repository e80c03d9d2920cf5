from accesslens.cascade.matching import matches
from accesslens.cascade.resolver import INHERITED_PROPERTIES, StyleResolver, resolve

__all__ = ["INHERITED_PROPERTIES", "StyleResolver", "matches", "resolve"]
