"""Parser for stylesheet text and inline ``style`` attributes.

Rule blocks and declarations are scanned by hand; selectors are parsed with
a Lark grammar (``selector.lark``).  Malformed fragments are skipped and
reported as :class:`ParseRecoveryWarning` objects on the returned
:class:`Stylesheet`; parsing itself never fails.

Syntax example:
    h1, .title { color: #222; font-size: 2em; }
    nav > a[href^="http"] { color: navy !important; }
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import LarkError

from accesslens.errors import ParseRecoveryWarning, StyleParseError
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
]

log = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "selector.lark"

_COMMENT_RE = re.compile(r"/\*.*?(\*/|$)", re.DOTALL)
_HTML_COMMENT_TOKENS_RE = re.compile(r"<!--|-->")
_QUOTED_RE = re.compile(r"""("(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')""")
_SPACE_RE = re.compile(r"\s+")
_AROUND_OPERATOR_RE = re.compile(r"\s*([>+~,]|[~|^$*]?=)\s*")
_BRACKET_SPACE_RE = re.compile(r"\[\s+|\s+\]")

# A single declaration: property: value [!important]
_DECL_RE = re.compile(
    r"""
    ^\s*
    (?P<property>-{0,2}[a-zA-Z_][a-zA-Z0-9_-]*)  # property name
    \s*:\s*                                       # colon separator
    (?P<value>.*?)                                # value
    \s*$
    """,
    re.VERBOSE | re.DOTALL,
)
_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


class SelectorTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a selector parse tree into :class:`Selector` objects."""

    def __init__(self, source: str) -> None:
        super().__init__()
        self._source = source

    def tag(self, items: list[Token]) -> tuple[str, str | None]:
        return ("tag", str(items[0]).lower())

    def universal(self, items: list[Token]) -> tuple[str, str | None]:
        return ("tag", None)

    def id_selector(self, items: list[Token]) -> tuple[str, str]:
        return ("id", str(items[0]))

    def class_selector(self, items: list[Token]) -> tuple[str, str]:
        return ("class", str(items[0]))

    def attr_exists(self, items: list[Token]) -> tuple[str, AttributeSelector]:
        return ("attr", AttributeSelector(name=str(items[0]).lower()))

    def attr_match(self, items: list[object]) -> tuple[str, AttributeSelector]:
        name, operator, value = items
        return (
            "attr",
            AttributeSelector(name=str(name).lower(), operator=str(operator), value=str(value)),
        )

    def attr_value(self, items: list[Token]) -> str:
        raw = str(items[0])
        if raw[:1] in ("'", '"'):
            return raw[1:-1].replace('\\"', '"').replace("\\'", "'")
        return raw

    def pseudo(self, items: list[Token]) -> tuple[str, str]:
        return ("pseudo", str(items[0]))

    def compound(self, items: list[tuple[str, object]]) -> CompoundSelector:
        tag: str | None = None
        ids: list[str] = []
        classes: list[str] = []
        attributes: list[AttributeSelector] = []
        pseudos: list[str] = []
        for kind, value in items:
            if kind == "tag":
                tag = value  # type: ignore[assignment]
            elif kind == "id":
                ids.append(value)  # type: ignore[arg-type]
            elif kind == "class":
                classes.append(value)  # type: ignore[arg-type]
            elif kind == "attr":
                attributes.append(value)  # type: ignore[arg-type]
            else:
                pseudos.append(value)  # type: ignore[arg-type]
        return CompoundSelector(
            tag=tag,
            ids=tuple(ids),
            classes=tuple(classes),
            attributes=tuple(attributes),
            pseudos=tuple(pseudos),
        )

    @v_args(meta=True)
    def complex(self, meta, items: list[object]) -> Selector:
        compounds = tuple(i for i in items if isinstance(i, CompoundSelector))
        combinators = tuple(str(i) for i in items if isinstance(i, Token))
        text = self._source[meta.start_pos:meta.end_pos]
        return Selector(compounds=compounds, combinators=combinators, text=text)

    def start(self, items: list[Selector]) -> list[Selector]:
        return list(items)


@lru_cache(maxsize=1)
def _selector_parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        start="start",
        propagate_positions=True,
    )


def _normalize_selector(raw: str) -> str:
    """Collapse whitespace so that any remaining space is a descendant combinator."""
    pieces = _QUOTED_RE.split(raw.strip())
    for i in range(0, len(pieces), 2):
        piece = _SPACE_RE.sub(" ", pieces[i])
        piece = _AROUND_OPERATOR_RE.sub(r"\1", piece)
        pieces[i] = _BRACKET_SPACE_RE.sub(lambda m: m.group(0).strip(), piece)
    return "".join(pieces).strip()


def parse_selector_list(raw: str) -> list[Selector]:
    """Parse a comma-separated selector list.

    Raises :class:`StyleParseError` on invalid syntax.
    """
    source = _normalize_selector(raw)
    if not source:
        raise StyleParseError("Empty selector")
    try:
        tree = _selector_parser().parse(source)
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise StyleParseError(
            f"Invalid selector {raw.strip()!r}", line=line, column=column
        ) from e
    return SelectorTransformer(source).transform(tree)


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


def _split_declarations(body: str) -> Iterator[str]:
    """Split on ``;`` outside of parentheses and quotes."""
    depth = 0
    quote = ""
    start = 0
    for i, ch in enumerate(body):
        if quote:
            if ch == quote and body[i - 1] != "\\":
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth = max(0, depth - 1)
        elif ch == ";" and depth == 0:
            yield body[start:i]
            start = i + 1
    yield body[start:]


def _parse_declarations(
    body: str,
) -> tuple[tuple[Declaration, ...], list[ParseRecoveryWarning]]:
    declarations: list[Declaration] = []
    recovered: list[ParseRecoveryWarning] = []
    for chunk in _split_declarations(body):
        if not chunk.strip():
            continue
        match = _DECL_RE.match(chunk)
        if match is None:
            recovered.append(
                ParseRecoveryWarning("Skipped malformed declaration", chunk.strip())
            )
            continue
        value = match.group("value")
        important = False
        bang = _IMPORTANT_RE.search(value)
        if bang:
            important = True
            value = value[: bang.start()]
        value = value.strip()
        if not value:
            recovered.append(
                ParseRecoveryWarning("Skipped declaration without a value", chunk.strip())
            )
            continue
        declarations.append(
            Declaration(
                property=match.group("property").lower(),
                value=value,
                important=important,
            )
        )
    return tuple(declarations), recovered


def parse_declarations(body: str) -> tuple[Declaration, ...]:
    """Parse a declaration block body or an inline ``style`` attribute."""
    declarations, recovered = _parse_declarations(_COMMENT_RE.sub(" ", body))
    for warning in recovered:
        log.debug("%s: %r", warning, warning.fragment)
    return declarations


# ---------------------------------------------------------------------------
# Rule blocks
# ---------------------------------------------------------------------------


def _matching_brace(text: str, open_pos: int) -> int:
    """Index of the ``}`` closing the ``{`` at *open_pos*, or -1 if unclosed."""
    depth = 0
    for i in range(open_pos, len(text)):
        if text[i] == "{":
            depth += 1
        elif text[i] == "}":
            depth -= 1
            if depth == 0:
                return i
    return -1


def _iter_blocks(
    text: str, recovered: list[ParseRecoveryWarning]
) -> Iterator[tuple[str, str]]:
    """Yield ``(prelude, body)`` for each top-level qualified rule.

    At-rules are skipped whole: ``@media`` and friends are not evaluated.
    """
    pos = 0
    length = len(text)
    while pos < length:
        while pos < length and text[pos].isspace():
            pos += 1
        if pos >= length:
            break

        if text[pos] == "@":
            semi = text.find(";", pos)
            brace = text.find("{", pos)
            if brace == -1 or (semi != -1 and semi < brace):
                log.debug("Skipping at-rule %r", text[pos:semi if semi != -1 else length].strip())
                pos = length if semi == -1 else semi + 1
                continue
            close = _matching_brace(text, brace)
            log.debug("Skipping at-rule block %r", text[pos:brace].strip())
            pos = length if close == -1 else close + 1
            continue

        brace = text.find("{", pos)
        stray = text.find("}", pos)
        if stray != -1 and (brace == -1 or stray < brace):
            recovered.append(
                ParseRecoveryWarning("Skipped text before stray '}'", text[pos:stray + 1].strip())
            )
            pos = stray + 1
            continue
        if brace == -1:
            recovered.append(
                ParseRecoveryWarning("Skipped trailing text without a block", text[pos:].strip())
            )
            break

        close = _matching_brace(text, brace)
        if close == -1:
            # Unclosed block: auto-close at end of input.
            recovered.append(
                ParseRecoveryWarning("Auto-closed unterminated block", text[pos:brace].strip())
            )
            yield text[pos:brace], text[brace + 1:]
            break
        yield text[pos:brace], text[brace + 1:close]
        pos = close + 1


def parse_stylesheet(source: str, start_order: int = 0) -> Stylesheet:
    """Parse stylesheet text into a :class:`Stylesheet`.

    Each rule block gets the source order index ``start_order + n``; every
    selector of a selector list becomes its own :class:`StyleRule` sharing
    that index.
    """
    text = _HTML_COMMENT_TOKENS_RE.sub(" ", _COMMENT_RE.sub(" ", source))
    rules: list[StyleRule] = []
    recovered: list[ParseRecoveryWarning] = []
    order = start_order
    for prelude, body in _iter_blocks(text, recovered):
        try:
            selectors = parse_selector_list(prelude)
        except StyleParseError as exc:
            recovered.append(ParseRecoveryWarning(str(exc), prelude.strip()))
            order += 1
            continue
        declarations, skipped = _parse_declarations(body)
        recovered.extend(skipped)
        if declarations:  # skip rules with no valid declarations
            for selector in selectors:
                rules.append(StyleRule(selector=selector, declarations=declarations, order=order))
        order += 1

    for warning in recovered:
        log.debug("%s: %r", warning, warning.fragment)
    return Stylesheet(rules=tuple(rules), recovered=tuple(recovered))


def parse_stylesheets(sources: Iterable[str]) -> Stylesheet:
    """Parse several sources as one stylesheet, keeping source order across them."""
    rules: list[StyleRule] = []
    recovered: list[ParseRecoveryWarning] = []
    order = 0
    for source in sources:
        sheet = parse_stylesheet(source, start_order=order)
        rules.extend(sheet.rules)
        recovered.extend(sheet.recovered)
        if sheet.rules:
            order = sheet.rules[-1].order + 1
    return Stylesheet(rules=tuple(rules), recovered=tuple(recovered))
