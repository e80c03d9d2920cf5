from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request

from accesslens import __version__
from accesslens.analyzer import analyze
from accesslens.errors import InputError, InternalError

log = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.after_request
def add_cors_headers(response):
    """Allow cross-origin requests to the API."""
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    return response


@api_bp.route("/analyze", methods=["OPTIONS"])
def analyze_preflight():
    """Handle CORS preflight for analysis requests."""
    return "", 204


@api_bp.route("/analyze", methods=["POST"])
def analyze_html():
    """Analyze an HTML document posted as JSON ``{"html": ..., "filename": ...}``."""
    data = request.get_json(silent=True)
    html = data.get("html") if isinstance(data, dict) else None
    if not isinstance(html, str) or not html.strip():
        return jsonify({"error": "html content required"}), 400

    config = current_app.extensions["analyzer_config"]
    if len(html.encode("utf-8", "surrogatepass")) > config.max_input_bytes:
        return jsonify({"error": "document too large"}), 413

    filename = data.get("filename") or "unknown"
    try:
        report = analyze(html, config=config)
    except InputError as exc:
        return jsonify({"error": str(exc)}), 400
    except InternalError:
        log.exception("Analysis of %s failed", filename)
        return jsonify({"error": "internal server error"}), 500

    log.info("Analysis complete: %s - score %d", filename, report.score)
    return jsonify(report.to_dict())


@api_bp.route("/health")
def health():
    """Liveness probe."""
    return jsonify({"status": "ok", "version": __version__})
