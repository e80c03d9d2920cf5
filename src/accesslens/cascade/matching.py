"""Selector matching against a Document arena."""

from __future__ import annotations

from accesslens.model.element import Document, ElementNode
from accesslens.stylesheet.model import AttributeSelector, CompoundSelector, Selector


def _matches_attribute(attr: AttributeSelector, node: ElementNode) -> bool:
    actual = node.get(attr.name)
    if actual is None:
        return False
    if attr.operator is None:
        return True
    expected = attr.value or ""
    op = attr.operator
    if op == "=":
        return actual == expected
    if op == "~=":
        return expected in actual.split()
    if op == "|=":
        return actual == expected or actual.startswith(expected + "-")
    # Empty values never match the substring operators.
    if not expected:
        return False
    if op == "^=":
        return actual.startswith(expected)
    if op == "$=":
        return actual.endswith(expected)
    if op == "*=":
        return expected in actual
    return False


def matches_compound(compound: CompoundSelector, node: ElementNode) -> bool:
    if compound.pseudos:
        return False
    if compound.tag is not None and compound.tag != node.tag:
        return False
    if compound.ids and any(node.get("id") != i for i in compound.ids):
        return False
    if compound.classes:
        classes = node.classes
        if any(c not in classes for c in compound.classes):
            return False
    return all(_matches_attribute(a, node) for a in compound.attributes)


def _match_from(
    selector: Selector,
    position: int,
    document: Document,
    node: ElementNode,
    memo: dict[tuple[int, int], bool],
) -> bool:
    key = (position, node.index)
    if key not in memo:
        memo[key] = _match_uncached(selector, position, document, node, memo)
    return memo[key]


def _match_uncached(
    selector: Selector,
    position: int,
    document: Document,
    node: ElementNode,
    memo: dict[tuple[int, int], bool],
) -> bool:
    if not matches_compound(selector.compounds[position], node):
        return False
    if position == 0:
        return True

    combinator = selector.combinators[position - 1]
    if combinator == ">":
        parent = document.parent_of(node)
        return parent is not None and _match_from(selector, position - 1, document, parent, memo)
    if combinator == " ":
        return any(
            _match_from(selector, position - 1, document, ancestor, memo)
            for ancestor in document.ancestors(node)
        )
    previous = document.previous_siblings(node)
    if combinator == "+":
        return bool(previous) and _match_from(selector, position - 1, document, previous[0], memo)
    if combinator == "~":
        return any(
            _match_from(selector, position - 1, document, sibling, memo) for sibling in previous
        )
    return False


def matches(selector: Selector, document: Document, node: ElementNode) -> bool:
    """True if *selector* matches *node*.

    Selectors with pseudo-classes or pseudo-elements never match.  Partial
    results are cached per ``(compound position, element)`` for the call, so
    descendant and sibling combinators stay linear in the document size.
    """
    if not selector.compounds or not selector.supported:
        return False
    return _match_from(selector, len(selector.compounds) - 1, document, node, {})
