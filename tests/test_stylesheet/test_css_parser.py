"""Tests for the stylesheet parser: selectors, declarations, and recovery."""

from __future__ import annotations

import pytest

from accesslens.errors import ParseRecoveryWarning, StyleParseError
from accesslens.stylesheet import (
    AttributeSelector,
    Declaration,
    parse_declarations,
    parse_selector_list,
    parse_stylesheet,
    parse_stylesheets,
)


def _one(raw: str):
    selectors = parse_selector_list(raw)
    assert len(selectors) == 1
    return selectors[0]


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


class TestSelectorParsing:
    def test_type_selector(self):
        sel = _one("p")
        assert sel.compounds[0].tag == "p"
        assert sel.combinators == ()

    def test_type_is_lowercased(self):
        assert _one("DIV").compounds[0].tag == "div"

    def test_id_and_classes(self):
        compound = _one("a#home.nav.active").compounds[0]
        assert compound.tag == "a"
        assert compound.ids == ("home",)
        assert compound.classes == ("nav", "active")

    def test_universal(self):
        assert _one("*").compounds[0].tag is None

    def test_selector_list(self):
        selectors = parse_selector_list("h1, .title")
        assert [s.text for s in selectors] == ["h1", ".title"]

    def test_combinators(self):
        sel = _one("nav > a + span ~ em")
        assert sel.combinators == (">", "+", "~")
        assert [c.tag for c in sel.compounds] == ["nav", "a", "span", "em"]

    def test_descendant_combinator(self):
        sel = _one("div   p")
        assert sel.combinators == (" ",)
        assert sel.text == "div p"

    def test_whitespace_around_child_combinator(self):
        assert _one("div   >   p").combinators == (">",)

    def test_attribute_exists(self):
        attr = _one("input[required]").compounds[0].attributes[0]
        assert attr == AttributeSelector(name="required")

    def test_attribute_quoted_value(self):
        attr = _one('a[href^="http"]').compounds[0].attributes[0]
        assert attr == AttributeSelector(name="href", operator="^=", value="http")

    def test_attribute_unquoted_value(self):
        attr = _one("input[type=text]").compounds[0].attributes[0]
        assert attr.operator == "="
        assert attr.value == "text"

    def test_quoted_value_keeps_inner_spaces(self):
        attr = _one('[title="two  words"]').compounds[0].attributes[0]
        assert attr.value == "two  words"

    def test_pseudo_class_is_parsed_but_unsupported(self):
        sel = _one("a:hover")
        assert sel.compounds[0].pseudos == (":hover",)
        assert not sel.supported

    def test_invalid_selector_raises(self):
        with pytest.raises(StyleParseError):
            parse_selector_list("p!!")

    def test_empty_selector_raises(self):
        with pytest.raises(StyleParseError):
            parse_selector_list("   ")


class TestSpecificity:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("*", (0, 0, 0)),
            ("p", (0, 0, 1)),
            (".a", (0, 1, 0)),
            ("#a", (1, 0, 0)),
            ("#a .b p", (1, 1, 1)),
            ("ul li.x[href]", (0, 2, 2)),
            ("a:hover", (0, 1, 1)),
            ("p::first-line", (0, 0, 2)),
        ],
    )
    def test_specificity(self, raw, expected):
        assert _one(raw).specificity == expected


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


class TestDeclarations:
    def test_simple(self):
        assert parse_declarations("color: red") == (Declaration("color", "red"),)

    def test_multiple_and_trailing_semicolon(self):
        decls = parse_declarations("color: red; font-size: 12px;")
        assert [d.property for d in decls] == ["color", "font-size"]

    def test_property_lowercased(self):
        assert parse_declarations("COLOR: Red")[0] == Declaration("color", "Red")

    def test_important(self):
        decl = parse_declarations("color: red !important")[0]
        assert decl.important
        assert decl.value == "red"

    def test_important_with_space(self):
        decl = parse_declarations("color: red ! IMPORTANT")[0]
        assert decl.important
        assert decl.value == "red"

    def test_semicolon_inside_parentheses(self):
        decls = parse_declarations("background: url(a;b.png); color: blue")
        assert decls[0].value == "url(a;b.png)"
        assert decls[1] == Declaration("color", "blue")

    def test_comments_removed(self):
        decls = parse_declarations("color: /* brand */ red")
        assert decls[0].value == "red"

    def test_malformed_declaration_skipped(self):
        decls = parse_declarations("color red; font-size: 12px")
        assert decls == (Declaration("font-size", "12px"),)

    def test_empty_value_skipped(self):
        assert parse_declarations("color: ;") == ()


# ---------------------------------------------------------------------------
# Stylesheets
# ---------------------------------------------------------------------------


class TestParseStylesheet:
    def test_single_rule(self):
        sheet = parse_stylesheet("p { color: red; }")
        assert len(sheet.rules) == 1
        rule = sheet.rules[0]
        assert rule.selector.text == "p"
        assert rule.declarations == (Declaration("color", "red"),)
        assert rule.order == 0
        assert sheet.recovered == ()

    def test_selector_list_shares_order(self):
        sheet = parse_stylesheet("h1, h2 { color: navy } p { color: black }")
        assert [(r.selector.text, r.order) for r in sheet.rules] == [
            ("h1", 0),
            ("h2", 0),
            ("p", 1),
        ]

    def test_last_declaration_without_semicolon(self):
        sheet = parse_stylesheet("p { color: red; font-weight: bold }")
        assert sheet.rules[0].declarations[-1] == Declaration("font-weight", "bold")

    def test_comments_and_html_comment_tokens(self):
        sheet = parse_stylesheet("<!-- /* c */ p { color: red } -->")
        assert len(sheet.rules) == 1

    def test_media_block_skipped(self):
        sheet = parse_stylesheet(
            "@media screen { p { color: red } } h1 { color: blue }"
        )
        assert [r.selector.text for r in sheet.rules] == ["h1"]

    def test_statement_at_rule_skipped(self):
        sheet = parse_stylesheet('@import "x.css"; p { color: red }')
        assert [r.selector.text for r in sheet.rules] == ["p"]

    def test_rule_without_declarations_dropped(self):
        sheet = parse_stylesheet("p { } h1 { color: blue }")
        assert [r.selector.text for r in sheet.rules] == ["h1"]
        assert sheet.rules[0].order == 1

    def test_empty_source(self):
        sheet = parse_stylesheet("")
        assert sheet.rules == ()
        assert sheet.recovered == ()

    def test_start_order(self):
        sheet = parse_stylesheet("p { color: red }", start_order=7)
        assert sheet.rules[0].order == 7


class TestRecovery:
    def test_stray_closing_braces(self):
        sheet = parse_stylesheet("p { color: red } }} h1 { color: blue }")
        assert [r.selector.text for r in sheet.rules] == ["p", "h1"]
        assert len(sheet.recovered) == 2
        assert all(isinstance(w, ParseRecoveryWarning) for w in sheet.recovered)

    def test_invalid_selector_skips_block(self):
        sheet = parse_stylesheet("p!! { color: red } h1 { color: blue }")
        assert [r.selector.text for r in sheet.rules] == ["h1"]
        assert sheet.rules[0].order == 1
        assert sheet.recovered[0].fragment == "p!!"

    def test_unclosed_block_is_auto_closed(self):
        sheet = parse_stylesheet("p { color: red")
        assert sheet.rules[0].declarations == (Declaration("color", "red"),)
        assert len(sheet.recovered) == 1

    def test_trailing_text(self):
        sheet = parse_stylesheet("p { color: red } garbage")
        assert len(sheet.rules) == 1
        assert sheet.recovered[0].fragment == "garbage"

    def test_malformed_declaration_recorded(self):
        sheet = parse_stylesheet("p { color red; font-size: 12px }")
        assert sheet.rules[0].declarations == (Declaration("font-size", "12px"),)
        assert sheet.recovered[0].fragment == "color red"


class TestParseStylesheets:
    def test_order_continues_across_sources(self):
        sheet = parse_stylesheets(["p { color: red }", "h1 { color: blue }"])
        assert [r.order for r in sheet.rules] == [0, 1]

    def test_recoveries_are_collected(self):
        sheet = parse_stylesheets(["}", "p { color: red }"])
        assert len(sheet.rules) == 1
        assert len(sheet.recovered) == 1
