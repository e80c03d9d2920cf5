"""Markup ingestion: BeautifulSoup tree -> :class:`Document` arena.

The ``html.parser`` builder records the start-tag position of every
element and recovers from malformed markup (unclosed tags are closed,
stray end tags dropped) without raising.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.exceptions import ParserRejectedMarkup

from accesslens.errors import InputError
from accesslens.model.element import Document, ElementNode, SourceLocation
from accesslens.stylesheet.parser import parse_declarations

__all__ = ["parse_markup"]

log = logging.getLogger(__name__)


def _location(tag: Tag) -> SourceLocation | None:
    line = getattr(tag, "sourceline", None)
    column = getattr(tag, "sourcepos", None)
    if line is None:
        return None
    return SourceLocation(line=line, column=(column or 0) + 1)


def _own_text(tag: Tag) -> str:
    # Exact type check: Comment, Doctype, CData and the script/style string
    # subclasses are not rendered text.
    return "".join(
        str(child) for child in tag.children if type(child) is NavigableString
    )


def _attributes(tag: Tag) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for name, value in tag.attrs.items():
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        attrs[str(name).lower()] = "" if value is None else str(value)
    return attrs


def parse_markup(markup: str) -> Document:
    """Parse *markup* into a :class:`Document`.

    ``<style>`` element contents are collected, in document order, as the
    document's stylesheets.  Raises :class:`InputError` when the markup
    contains no elements or that the HTML parser rejects.
    """
    try:
        soup = BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)
    except ParserRejectedMarkup as exc:
        raise InputError("Markup could not be parsed", cause=exc) from exc
    tags = soup.find_all(True)
    if not tags:
        raise InputError("Markup contains no elements")

    indices = {id(tag): i for i, tag in enumerate(tags)}
    children: dict[int, list[int]] = {i: [] for i in range(len(tags))}
    parents: dict[int, int | None] = {}
    for i, tag in enumerate(tags):
        parent = tag.parent
        parent_index = indices.get(id(parent)) if isinstance(parent, Tag) else None
        parents[i] = parent_index
        if parent_index is not None:
            children[parent_index].append(i)

    elements: list[ElementNode] = []
    stylesheets: list[str] = []
    for i, tag in enumerate(tags):
        attrs = _attributes(tag)
        inline = parse_declarations(attrs["style"]) if "style" in attrs else ()
        if tag.name == "style":
            stylesheets.append(tag.get_text())
        elements.append(
            ElementNode(
                index=i,
                tag=tag.name.lower(),
                attributes=attrs,
                children=tuple(children[i]),
                parent=parents[i],
                location=_location(tag),
                inline_declarations=inline,
                text=_own_text(tag),
            )
        )

    log.debug("Parsed %d elements, %d style blocks", len(elements), len(stylesheets))
    return Document(elements=tuple(elements), stylesheets=tuple(stylesheets))
