from __future__ import annotations

from flask import Flask, jsonify

from accesslens.config import AnalyzerConfig


def create_app(
    config: dict | None = None,
    analyzer_config: AnalyzerConfig | None = None,
) -> Flask:
    """Create and configure the Flask app."""
    app = Flask(__name__)
    analyzer_config = analyzer_config or AnalyzerConfig()
    # Leave room for the JSON envelope around the markup itself.
    app.config["MAX_CONTENT_LENGTH"] = analyzer_config.max_input_bytes * 2
    app.config.update(config or {})

    app.extensions["analyzer_config"] = analyzer_config

    from accesslens.web.routes.api import api_bp

    app.register_blueprint(api_bp, url_prefix="/api")

    @app.errorhandler(413)
    def too_large(error):
        return jsonify({"error": "document too large"}), 413

    return app
