"""Tests for the JSON analysis API."""

from __future__ import annotations

import pytest

from accesslens import __version__
from accesslens.config import AnalyzerConfig
from accesslens.errors import InternalError

PAGE = '<img src="logo.png"><p style="color:#AAAAAA">Hello</p>'


class TestAnalyzeEndpoint:
    def test_returns_report(self, client):
        resp = client.post("/api/analyze", json={"html": PAGE, "filename": "index.html"})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["summary"] == {
            "score": 78,
            "grade": "C (Needs Major Improvement)",
            "criticalCount": 2,
            "warningCount": 0,
        }
        assert [f["rule"] for f in data["critical"]] == ["image-alt", "color-contrast"]
        assert data["critical"][0]["lineNumber"] == 1
        assert data["warnings"] == []

    def test_filename_is_optional(self, client):
        resp = client.post("/api/analyze", json={"html": "<p>x</p>"})
        assert resp.status_code == 200
        assert resp.get_json()["summary"]["score"] == 100

    @pytest.mark.parametrize("body", [{}, {"html": ""}, {"html": "   "}, {"html": 5}, ["<p>"]])
    def test_missing_html(self, client, body):
        resp = client.post("/api/analyze", json=body)
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "html content required"}

    def test_non_json_body(self, client):
        resp = client.post("/api/analyze", data="<p>x</p>", content_type="text/html")
        assert resp.status_code == 400

    def test_markup_without_elements(self, client):
        resp = client.post("/api/analyze", json={"html": "plain words"})
        assert resp.status_code == 400
        assert "no elements" in resp.get_json()["error"]

    def test_markup_rejected_by_parser(self, client):
        resp = client.post("/api/analyze", json={"html": "<p>x</p><![foo[bar]]>"})
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Markup could not be parsed"}

    def test_lone_surrogate_in_markup(self, client):
        resp = client.post(
            "/api/analyze",
            data='{"html": "<p>\\ud800</p>"}',
            content_type="application/json",
        )
        assert resp.status_code == 200
        assert resp.get_json()["summary"]["score"] == 100

    def test_internal_error(self, client, monkeypatch):
        def boom(*args, **kwargs):
            raise InternalError(cause=RuntimeError("secret detail"))

        monkeypatch.setattr("accesslens.web.routes.api.analyze", boom)
        resp = client.post("/api/analyze", json={"html": PAGE})
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "internal server error"}

    def test_cors_headers(self, client):
        resp = client.post("/api/analyze", json={"html": PAGE})
        assert resp.headers["Access-Control-Allow-Origin"] == "*"
        assert "POST" in resp.headers["Access-Control-Allow-Methods"]

    def test_preflight(self, client):
        resp = client.options("/api/analyze")
        assert resp.status_code == 204
        assert resp.headers["Access-Control-Allow-Origin"] == "*"


class TestSizeLimit:
    @pytest.fixture
    def analyzer_config(self):
        return AnalyzerConfig(max_input_bytes=100)

    def test_markup_over_limit(self, client):
        resp = client.post("/api/analyze", json={"html": "<p>" + "x" * 150 + "</p>"})
        assert resp.status_code == 413
        assert resp.get_json() == {"error": "document too large"}

    def test_body_over_request_limit(self, client):
        resp = client.post("/api/analyze", json={"html": "<p>" + "x" * 500 + "</p>"})
        assert resp.status_code == 413
        assert resp.get_json() == {"error": "document too large"}

    def test_markup_under_limit(self, client):
        resp = client.post("/api/analyze", json={"html": "<p>short</p>"})
        assert resp.status_code == 200


class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.get_json() == {"status": "ok", "version": __version__}
