"""Document model: an arena of ElementNodes addressed by index."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from accesslens.stylesheet.model import Declaration


@dataclass(frozen=True)
class SourceLocation:
    """1-based line and column of an element's start tag."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


@dataclass(frozen=True)
class ElementNode:
    """A single element of the markup tree.

    Parent and children are arena indices into the owning :class:`Document`,
    never live references.
    """

    index: int
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: tuple[int, ...] = ()
    parent: int | None = None
    location: SourceLocation | None = None
    inline_declarations: tuple[Declaration, ...] = ()
    text: str = ""

    def __post_init__(self) -> None:
        if not self.tag:
            raise ValueError("ElementNode tag must be a non-empty string")

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.attributes.get(name, default)

    def has(self, name: str) -> bool:
        return name in self.attributes

    @property
    def classes(self) -> tuple[str, ...]:
        return tuple(self.attributes.get("class", "").split())

    @property
    def has_text(self) -> bool:
        """True if the element has non-whitespace text of its own."""
        return bool(self.text.strip())

    def start_tag(self, limit: int = 80) -> str:
        """Render the opening tag, truncated to *limit* characters."""
        parts = [self.tag]
        for name, value in self.attributes.items():
            parts.append(f'{name}="{value}"' if value else name)
        rendered = "<" + " ".join(parts) + ">"
        if len(rendered) > limit:
            rendered = rendered[: limit - 4] + "...>"
        return rendered


@dataclass(frozen=True)
class Document:
    """All elements of a parsed document, in document order.

    ``elements[i].index == i`` always holds.
    """

    elements: tuple[ElementNode, ...] = ()
    stylesheets: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for position, node in enumerate(self.elements):
            if node.index != position:
                raise ValueError(
                    f"Element at position {position} has index {node.index}"
                )

    def __len__(self) -> int:
        return len(self.elements)

    def __getitem__(self, index: int) -> ElementNode:
        return self.elements[index]

    def iter_elements(self) -> Iterator[ElementNode]:
        return iter(self.elements)

    def roots(self) -> list[ElementNode]:
        return [n for n in self.elements if n.parent is None]

    def parent_of(self, node: ElementNode) -> ElementNode | None:
        if node.parent is None:
            return None
        return self.elements[node.parent]

    def ancestors(self, node: ElementNode) -> Iterator[ElementNode]:
        """Yield the parent, grandparent, ... up to the root."""
        current = self.parent_of(node)
        while current is not None:
            yield current
            current = self.parent_of(current)

    def siblings(self, node: ElementNode) -> tuple[int, ...]:
        if node.parent is None:
            return tuple(n.index for n in self.elements if n.parent is None)
        return self.elements[node.parent].children

    def previous_siblings(self, node: ElementNode) -> list[ElementNode]:
        """Element siblings before *node*, nearest first."""
        sibling_ids = self.siblings(node)
        position = sibling_ids.index(node.index)
        return [self.elements[i] for i in reversed(sibling_ids[:position])]

    def find_all(self, *tags: str) -> list[ElementNode]:
        wanted = set(tags)
        return [n for n in self.elements if n.tag in wanted]
