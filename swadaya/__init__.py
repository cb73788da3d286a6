"""
Swadaya ledger – Flask application factory.
"""
import logging
import os
from datetime import date
from decimal import Decimal

from flask import Flask, jsonify
from flask.json.provider import DefaultJSONProvider

from swadaya.config import config
from swadaya.errors import LedgerError
from swadaya.extensions import db, limiter, migrate


class LedgerJSONProvider(DefaultJSONProvider):
    """JSON numbers with a fraction are read as Decimal; dates go out as ISO-8601."""

    @staticmethod
    def default(o):
        if isinstance(o, date):
            return o.isoformat()
        return DefaultJSONProvider.default(o)

    def loads(self, s, **kwargs):
        kwargs.setdefault("parse_float", Decimal)
        return super().loads(s, **kwargs)


def create_app(config_name: str = "default") -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config[config_name])
    app.json = LedgerJSONProvider(app)

    # Ensure instance directory exists (SQLite lives here)
    os.makedirs(app.instance_path, exist_ok=True)

    _configure_logging(app)

    # ── Initialise extensions ────────────────────────────────────────────────
    db.init_app(app)
    limiter.init_app(app)
    migrate.init_app(app, db)

    # ── Register blueprints ──────────────────────────────────────────────────
    from swadaya.blueprints.main import main_bp
    from swadaya.blueprints.customers import customers_bp
    from swadaya.blueprints.billing import billing_bp
    from swadaya.blueprints.installations import installations_bp
    from swadaya.blueprints.reports import reports_bp
    from swadaya.blueprints.settings import settings_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(billing_bp)
    app.register_blueprint(installations_bp)
    app.register_blueprint(reports_bp)
    app.register_blueprint(settings_bp)

    from swadaya.commands import billing_cli
    app.cli.add_command(billing_cli)

    # ── Error handlers ───────────────────────────────────────────────────────
    @app.errorhandler(LedgerError)
    def ledger_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(404)
    def not_found(e):
        return jsonify(error="Resource not found.", code="not_found", applied=False), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify(error="Method not allowed.", code="method_not_allowed", applied=False), 405

    @app.errorhandler(429)
    def rate_limited(e):
        return jsonify(error=f"Rate limit exceeded: {e.description}", code="rate_limited", applied=False), 429

    @app.errorhandler(500)
    def internal_error(e):
        db.session.rollback()
        return jsonify(error="Internal server error.", code="internal", applied=False), 500

    # ── Database + seed ──────────────────────────────────────────────────────
    with app.app_context():
        import importlib
        importlib.import_module("swadaya.models")
        db.create_all()
        _seed_database()

    return app


def _configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    package_logger = logging.getLogger("swadaya")
    package_logger.setLevel(level)
    if not package_logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        package_logger.addHandler(handler)


# ── Seed helper ──────────────────────────────────────────────────────────────
def _seed_database() -> None:
    """Store the billing defaults on first run (runs only if no settings exist)."""
    from swadaya.models.setting import Setting
    from swadaya.utils.settings import default_setting_rows

    if Setting.query.first():
        return  # already seeded

    db.session.add_all(default_setting_rows())
    db.session.commit()
