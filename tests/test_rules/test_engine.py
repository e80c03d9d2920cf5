"""Tests for the rule engine."""

from __future__ import annotations

import logging

from accesslens.cascade import StyleResolver
from accesslens.markup import parse_markup
from accesslens.model import Finding, Severity
from accesslens.rules import ALL_CHECKS, evaluate
from accesslens.stylesheet import parse_stylesheets


def _inputs(html: str):
    document = parse_markup(html)
    styles = StyleResolver(parse_stylesheets(document.stylesheets)).resolve(document)
    return document, styles


class TestEvaluate:
    def test_clean_document_has_no_findings(self):
        document, styles = _inputs('<main><h1>Title</h1><img src="a.png" alt="A"></main>')
        assert evaluate(document, styles) == []

    def test_findings_in_check_order(self):
        document, styles = _inputs(
            '<h1>a</h1><h3 style="color: #ddd">b</h3><img src="x.png">'
        )
        rules = [f.rule for f in evaluate(document, styles)]
        assert rules == ["color-contrast", "image-alt", "heading-order"]

    def test_registry_order(self):
        names = [c.__name__ for c in ALL_CHECKS]
        assert names[:2] == ["check_color_contrast", "check_image_alt"]

    def test_extra_checks_run_last(self):
        def check_doctype(context):
            return [Finding(rule="doctype", severity=Severity.WARNING, message="no doctype", penalty=1)]

        document, styles = _inputs('<img src="x.png">')
        findings = evaluate(document, styles, extra_checks=[check_doctype])
        assert [f.rule for f in findings] == ["image-alt", "doctype"]

    def test_failing_check_is_skipped(self, caplog):
        def check_broken(context):
            raise RuntimeError("boom")

        document, styles = _inputs('<img src="x.png">')
        with caplog.at_level(logging.ERROR, logger="accesslens.rules.engine"):
            findings = evaluate(document, styles, extra_checks=[check_broken])
        assert [f.rule for f in findings] == ["image-alt"]
        assert "check_broken" in caplog.text
