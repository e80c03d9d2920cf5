"""Style resolution: cascade, inheritance, and painted-background lookup.

For every element the resolver gathers candidate declarations from the
user-agent rules, the matched author rules, and the inline ``style``
attribute, drops values that are invalid for their property, and picks the
winner by the key::

    (important, origin, specificity, source order, declaration index)

where origin ranks user-agent < author rule < inline.  Properties without a
winner inherit (``color``, ``font-size``, ``font-weight``) or take their
initial value.  Background is not inherited: the painted background is the
element's own layer composited over its parent's painted background, with
white at the root.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from accesslens.cascade import values
from accesslens.cascade.matching import matches
from accesslens.cascade.useragent import user_agent_rules
from accesslens.color.color import BLACK, TRANSPARENT, WHITE, Color, parse_color
from accesslens.model.element import Document, ElementNode
from accesslens.model.style import Origin, Provenance, ResolvedStyle, ResolvedValue
from accesslens.stylesheet.model import Declaration, Specificity, StyleRule, Stylesheet

__all__ = ["StyleResolver", "resolve"]

log = logging.getLogger(__name__)

_ORIGIN_USER_AGENT = 0
_ORIGIN_RULE = 1
_ORIGIN_INLINE = 2

_ORIGINS = {
    _ORIGIN_USER_AGENT: Origin.USER_AGENT,
    _ORIGIN_RULE: Origin.RULE,
    _ORIGIN_INLINE: Origin.INLINE,
}

INHERITED_PROPERTIES = frozenset({"color", "font-size", "font-weight"})

_VALIDATORS: dict[str, Callable[[str], bool]] = {
    "color": values.color_valid,
    "background-color": values.color_valid,
    "font-size": values.font_size_valid,
    "font-weight": values.font_weight_valid,
    "text-decoration": values.text_decoration_valid,
    "display": values.display_valid,
}

_DEFAULT = Provenance(Origin.DEFAULT)
_INHERITED = Provenance(Origin.INHERITED)


@dataclass(frozen=True)
class _Candidate:
    value: str
    important: bool
    origin: int
    specificity: Specificity
    order: int
    position: int
    selector: str = ""

    @property
    def key(self) -> tuple:
        return (self.important, self.origin, self.specificity, self.order, self.position)

    @property
    def provenance(self) -> Provenance:
        return Provenance(
            origin=_ORIGINS[self.origin],
            selector=self.selector,
            order=self.order if self.origin != _ORIGIN_INLINE else None,
            important=self.important,
        )


def _expand(declaration: Declaration) -> tuple[str, str] | None:
    """Map a declaration to a recognized ``(property, value)``, or ``None``."""
    prop = declaration.property
    value = declaration.value.strip()
    if prop == "background":
        color = values.background_shorthand_color(value)
        return None if color is None else ("background-color", color)
    validator = _VALIDATORS.get(prop)
    if validator is None or not validator(value):
        return None
    return prop, value


class StyleResolver:
    """Resolve the effective style of every element of a document.

    The resolver holds only the rule list; each :meth:`resolve` call keeps
    its working state local, so one instance can serve many documents.
    """

    def __init__(
        self,
        rules: Iterable[StyleRule] | Stylesheet = (),
        *,
        user_agent: bool = True,
    ) -> None:
        if isinstance(rules, Stylesheet):
            rules = rules.rules
        self.rules: tuple[StyleRule, ...] = tuple(
            r for r in rules if r.selector.supported
        )
        self.user_agent_rules: tuple[StyleRule, ...] = user_agent_rules() if user_agent else ()

    # ------------------------------------------------------------------
    # Cascade
    # ------------------------------------------------------------------

    def matched_rules(self, document: Document, node: ElementNode) -> list[StyleRule]:
        """Author rules matching *node*, sorted by (specificity, order)."""
        found = [r for r in self.rules if matches(r.selector, document, node)]
        return sorted(found, key=lambda r: (r.specificity, r.order))

    def _candidates(
        self, document: Document, node: ElementNode
    ) -> dict[str, _Candidate]:
        winners: dict[str, _Candidate] = {}

        def offer(decl: Declaration, origin: int, rule: StyleRule | None, position: int) -> None:
            expanded = _expand(decl)
            if expanded is None:
                if decl.property in _VALIDATORS or decl.property == "background":
                    log.debug(
                        "Ignoring invalid value %r for %s on <%s>",
                        decl.value, decl.property, node.tag,
                    )
                return
            prop, value = expanded
            candidate = _Candidate(
                value=value,
                important=decl.important,
                origin=origin,
                specificity=rule.specificity if rule else (0, 0, 0),
                order=rule.order if rule else 0,
                position=position,
                selector=rule.selector.text if rule else "",
            )
            current = winners.get(prop)
            if current is None or candidate.key >= current.key:
                winners[prop] = candidate

        for rule in self.user_agent_rules:
            if matches(rule.selector, document, node):
                for i, decl in enumerate(rule.declarations):
                    offer(decl, _ORIGIN_USER_AGENT, rule, i)
        for rule in self.matched_rules(document, node):
            for i, decl in enumerate(rule.declarations):
                offer(decl, _ORIGIN_RULE, rule, i)
        for i, decl in enumerate(node.inline_declarations):
            offer(decl, _ORIGIN_INLINE, None, i)
        return winners

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, document: Document) -> dict[int, ResolvedStyle]:
        """Return a mapping of element index to :class:`ResolvedStyle`."""
        resolved: dict[int, ResolvedStyle] = {}
        own_layers: dict[int, ResolvedValue] = {}

        # Arena order is document order, so parents resolve before children.
        for node in document.iter_elements():
            parent = resolved.get(node.parent) if node.parent is not None else None
            winners = self._candidates(document, node)

            color = self._resolve_color(winners.get("color"), parent)
            font_size = self._resolve_font_size(winners.get("font-size"), parent)
            font_weight = self._resolve_font_weight(winners.get("font-weight"), parent)
            text_decoration = self._resolve_keyword(
                winners.get("text-decoration"), parent, "text_decoration", "none"
            )
            display = self._resolve_keyword(winners.get("display"), parent, "display", "inline")

            parent_layer = own_layers.get(node.parent) if node.parent is not None else None
            own = self._own_background(winners.get("background-color"), color, parent_layer)
            own_layers[node.index] = own
            painted = self._painted_background(own, parent)

            resolved[node.index] = ResolvedStyle(
                color=color,
                background_color=painted,
                font_size=font_size,
                font_weight=font_weight,
                text_decoration=text_decoration,
                display=display,
                background_opaque=isinstance(own.value, Color) and own.value.is_opaque,
            )
        return resolved

    @staticmethod
    def _inherit(parent: ResolvedStyle | None, attr: str, default: object) -> ResolvedValue:
        if parent is None:
            return ResolvedValue(default, _DEFAULT)
        return ResolvedValue(getattr(parent, attr).value, _INHERITED)

    def _resolve_color(
        self, winner: _Candidate | None, parent: ResolvedStyle | None
    ) -> ResolvedValue:
        if winner is None:
            return self._inherit(parent, "color", BLACK)
        kw = winner.value.lower()
        if kw in ("inherit", "unset", "currentcolor"):
            return self._inherit(parent, "color", BLACK)
        if kw == "initial":
            return ResolvedValue(BLACK, winner.provenance)
        # Translucent text stays translucent; the contrast check blends it.
        return ResolvedValue(parse_color(winner.value), winner.provenance)

    def _resolve_font_size(
        self, winner: _Candidate | None, parent: ResolvedStyle | None
    ) -> ResolvedValue:
        parent_px = parent.font_size_px if parent else values.DEFAULT_FONT_SIZE_PX
        if winner is None:
            return self._inherit(parent, "font_size", values.DEFAULT_FONT_SIZE_PX)
        kw = winner.value.lower()
        if kw in ("inherit", "unset"):
            return self._inherit(parent, "font_size", values.DEFAULT_FONT_SIZE_PX)
        if kw == "initial":
            return ResolvedValue(values.DEFAULT_FONT_SIZE_PX, winner.provenance)
        px = values.font_size_px(winner.value, parent_px)
        if px is None:
            return self._inherit(parent, "font_size", values.DEFAULT_FONT_SIZE_PX)
        return ResolvedValue(px, winner.provenance)

    def _resolve_font_weight(
        self, winner: _Candidate | None, parent: ResolvedStyle | None
    ) -> ResolvedValue:
        parent_weight = parent.weight if parent else values.DEFAULT_FONT_WEIGHT
        if winner is None:
            return self._inherit(parent, "font_weight", values.DEFAULT_FONT_WEIGHT)
        kw = winner.value.lower()
        if kw in ("inherit", "unset"):
            return self._inherit(parent, "font_weight", values.DEFAULT_FONT_WEIGHT)
        if kw == "initial":
            return ResolvedValue(values.DEFAULT_FONT_WEIGHT, winner.provenance)
        weight = values.font_weight(winner.value, parent_weight)
        if weight is None:
            return self._inherit(parent, "font_weight", values.DEFAULT_FONT_WEIGHT)
        return ResolvedValue(weight, winner.provenance)

    def _resolve_keyword(
        self,
        winner: _Candidate | None,
        parent: ResolvedStyle | None,
        attr: str,
        initial: str,
    ) -> ResolvedValue:
        """Non-inherited keyword properties (display, text-decoration)."""
        if winner is None:
            return ResolvedValue(initial, _DEFAULT)
        kw = winner.value.lower()
        if kw == "inherit":
            return self._inherit(parent, attr, initial)
        if kw in ("initial", "unset"):
            return ResolvedValue(initial, winner.provenance)
        return ResolvedValue(" ".join(kw.split()), winner.provenance)

    def _own_background(
        self,
        winner: _Candidate | None,
        color: ResolvedValue,
        parent_layer: ResolvedValue | None,
    ) -> ResolvedValue:
        """The element's own background layer (not yet composited).

        ``None`` as the value marks an indeterminate layer (image or
        gradient).
        """
        if winner is None:
            return ResolvedValue(TRANSPARENT, _DEFAULT)
        kw = winner.value.lower()
        if kw == "inherit":
            if parent_layer is None:
                return ResolvedValue(TRANSPARENT, _DEFAULT)
            return ResolvedValue(parent_layer.value, _INHERITED)
        if kw in ("initial", "unset"):
            return ResolvedValue(TRANSPARENT, winner.provenance)
        if kw == "currentcolor":
            return ResolvedValue(color.value, winner.provenance)
        if winner.value == values.INDETERMINATE:
            return ResolvedValue(None, winner.provenance)
        return ResolvedValue(parse_color(winner.value), winner.provenance)

    @staticmethod
    def _painted_background(
        own: ResolvedValue, parent: ResolvedStyle | None
    ) -> ResolvedValue:
        layer = own.value
        if layer is None:
            return own
        if layer.is_opaque:
            return own
        if parent is None:
            base = ResolvedValue(WHITE, _DEFAULT)
        else:
            base = parent.background_color
        if base.value is None:
            return base
        if layer.is_transparent:
            if parent is None:
                return base
            return ResolvedValue(
                base.value,
                Provenance(Origin.ANCESTOR_BACKGROUND, selector=base.provenance.selector),
            )
        return ResolvedValue(layer.over(base.value), own.provenance)


def resolve(
    document: Document, rules: Iterable[StyleRule] | Stylesheet = ()
) -> dict[int, ResolvedStyle]:
    """Resolve every element of *document* against *rules*."""
    return StyleResolver(rules).resolve(document)
