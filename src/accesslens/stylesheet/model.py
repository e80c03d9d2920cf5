"""Stylesheet model: Declaration, Selector, StyleRule, and Stylesheet dataclasses."""

from __future__ import annotations

from dataclasses import dataclass

from accesslens.errors import ParseRecoveryWarning

Specificity = tuple[int, int, int]


@dataclass(frozen=True)
class Declaration:
    """A single ``property: value [!important]`` declaration."""

    property: str
    value: str
    important: bool = False


@dataclass(frozen=True)
class AttributeSelector:
    """``[name]`` or ``[name<op>value]``."""

    name: str
    operator: str | None = None  # "=", "~=", "|=", "^=", "$=", "*="
    value: str | None = None


@dataclass(frozen=True)
class CompoundSelector:
    """A run of simple selectors with no combinator between them.

    ``tag`` is ``None`` for a missing or universal type selector.
    """

    tag: str | None = None
    ids: tuple[str, ...] = ()
    classes: tuple[str, ...] = ()
    attributes: tuple[AttributeSelector, ...] = ()
    pseudos: tuple[str, ...] = ()


@dataclass(frozen=True)
class Selector:
    """A complex selector: compounds joined by combinators.

    ``combinators[i]`` joins ``compounds[i]`` and ``compounds[i + 1]`` and is
    one of ``" "`` (descendant), ``">"``, ``"+"`` or ``"~"``.
    """

    compounds: tuple[CompoundSelector, ...]
    combinators: tuple[str, ...] = ()
    text: str = ""

    @property
    def specificity(self) -> Specificity:
        ids = classes = types = 0
        for compound in self.compounds:
            ids += len(compound.ids)
            classes += len(compound.classes) + len(compound.attributes)
            # Pseudo-elements count as types, pseudo-classes as classes.
            for pseudo in compound.pseudos:
                if pseudo.startswith("::"):
                    types += 1
                else:
                    classes += 1
            if compound.tag is not None:
                types += 1
        return (ids, classes, types)

    @property
    def supported(self) -> bool:
        """False when the selector needs pseudo-class or pseudo-element support."""
        return not any(c.pseudos for c in self.compounds)


@dataclass(frozen=True)
class StyleRule:
    """A selector paired with its declarations and cascade position."""

    selector: Selector
    declarations: tuple[Declaration, ...]
    order: int = 0

    @property
    def specificity(self) -> Specificity:
        return self.selector.specificity


@dataclass(frozen=True)
class Stylesheet:
    """Rules parsed from one or more stylesheet sources, in source order."""

    rules: tuple[StyleRule, ...] = ()
    recovered: tuple[ParseRecoveryWarning, ...] = ()
