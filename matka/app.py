from __future__ import annotations

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from .config import load_settings
from .db import init_db
from .routes.admin import bp as admin_bp
from .routes.bets import bp as bets_bp
from .routes.health import bp as health_bp
from .routes.markets import bp as markets_bp
from .routes.rules import bp as rules_bp


def create_app() -> Flask:
    settings = load_settings()
    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.flask.secret_key
    app.logger.setLevel(settings.log_level.upper())
    init_db()

    app.register_blueprint(health_bp)
    app.register_blueprint(markets_bp, url_prefix="/markets")
    app.register_blueprint(bets_bp, url_prefix="/bets")
    app.register_blueprint(rules_bp)
    app.register_blueprint(admin_bp, url_prefix="/admin/api")

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        details = exc.errors(include_url=False, include_context=False, include_input=False)
        return jsonify({"error": "invalid request", "details": details}), 400

    @app.errorhandler(Exception)
    def handle_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return jsonify({"error": exc.description}), exc.code
        app.logger.exception("Unhandled error: %s", exc)
        return jsonify({"error": str(exc)}), 500

    return app


if __name__ == "__main__":
    create_app().run(debug=load_settings().flask.debug)
