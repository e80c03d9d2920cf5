"""Tests for markup ingestion into the Document arena."""

from __future__ import annotations

import pytest

from accesslens.errors import InputError
from accesslens.markup import parse_markup
from accesslens.model import Document, ElementNode, SourceLocation
from accesslens.stylesheet import Declaration


class TestParseMarkup:
    def test_document_order_and_links(self):
        doc = parse_markup("<div id='a'><p>Hi <b>there</b></p><span></span></div>")
        assert [n.tag for n in doc.iter_elements()] == ["div", "p", "b", "span"]
        div, p, b, span = doc.elements
        assert div.parent is None
        assert div.children == (1, 3)
        assert p.parent == 0
        assert p.children == (2,)
        assert b.parent == 1
        assert span.parent == 0

    def test_own_text_only(self):
        doc = parse_markup("<p>Hi <b>there</b></p>")
        assert doc[0].text == "Hi "
        assert doc[1].text == "there"

    def test_comments_are_not_text(self):
        doc = parse_markup("<p><!-- note --></p>")
        assert not doc[0].has_text

    def test_script_text_is_not_rendered_text(self):
        doc = parse_markup("<script>var x = 1;</script>")
        assert not doc[0].has_text

    def test_source_location(self):
        doc = parse_markup("<div>\n  <p>x</p>\n</div>")
        assert doc[0].location == SourceLocation(line=1, column=1)
        assert doc[1].location == SourceLocation(line=2, column=3)

    def test_attributes_are_strings(self):
        doc = parse_markup('<p CLASS="a  b" hidden data-x="1">x</p>')
        node = doc[0]
        assert node.get("class") == "a  b"
        assert node.classes == ("a", "b")
        assert node.get("hidden") == ""
        assert node.has("data-x")

    def test_inline_style_parsed(self):
        doc = parse_markup('<p style="color: red; font-size: 12px !important">x</p>')
        assert doc[0].inline_declarations == (
            Declaration("color", "red"),
            Declaration("font-size", "12px", important=True),
        )

    def test_style_blocks_collected_in_order(self):
        doc = parse_markup(
            "<style>p { color: red }</style><div></div><style>h1 { color: blue }</style>"
        )
        assert doc.stylesheets == ("p { color: red }", "h1 { color: blue }")

    def test_malformed_markup_recovers(self):
        doc = parse_markup("<div><p>unclosed</div></span><i>tail")
        assert [n.tag for n in doc.iter_elements()] == ["div", "p", "i"]

    def test_void_elements_have_no_children(self):
        doc = parse_markup('<img src="a.png"><p>x</p>')
        assert doc[0].children == ()
        assert doc[1].parent is None

    @pytest.mark.parametrize("markup", ["just text", "<!-- only a comment -->"])
    def test_no_elements_raises(self, markup):
        with pytest.raises(InputError):
            parse_markup(markup)

    def test_rejected_markup_raises_input_error(self):
        with pytest.raises(InputError, match="could not be parsed"):
            parse_markup("<p>x</p><![foo[bar]]>")


# ---------------------------------------------------------------------------
# Document model
# ---------------------------------------------------------------------------


class TestDocument:
    @pytest.fixture
    def doc(self):
        return parse_markup(
            "<main><h1>T</h1><ul><li>a</li><li>b</li><li>c</li></ul></main><footer></footer>"
        )

    def test_roots(self, doc):
        assert [n.tag for n in doc.roots()] == ["main", "footer"]

    def test_ancestors(self, doc):
        li = doc.find_all("li")[0]
        assert [a.tag for a in doc.ancestors(li)] == ["ul", "main"]

    def test_previous_siblings_nearest_first(self, doc):
        last = doc.find_all("li")[-1]
        assert [n.text for n in doc.previous_siblings(last)] == ["b", "a"]

    def test_root_siblings(self, doc):
        footer = doc.find_all("footer")[0]
        assert [n.tag for n in doc.previous_siblings(footer)] == ["main"]

    def test_find_all(self, doc):
        assert [n.tag for n in doc.find_all("h1", "footer")] == ["h1", "footer"]

    def test_index_must_match_position(self):
        with pytest.raises(ValueError):
            Document(elements=(ElementNode(index=1, tag="p"),))

    def test_start_tag_truncated(self):
        node = ElementNode(index=0, tag="a", attributes={"href": "x" * 200})
        rendered = node.start_tag()
        assert len(rendered) == 80
        assert rendered.endswith("...>")
