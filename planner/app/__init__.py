"""Application factory and app-wide configuration."""

from __future__ import annotations

from typing import Optional

from flask import Flask
from flask_cors import CORS

from planner.app.api.routes import api_bp
from planner.core.config import Settings
from planner.core.logging import configure_logging, get_logger
from planner.core.store import ContributionStore

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None, store: Optional[ContributionStore] = None
) -> Flask:
    """Build the Flask app instance around its own settings and store."""
    settings = settings or Settings()
    configure_logging(settings.log_level, format_json=settings.log_json)

    app = Flask(__name__)
    app.extensions["planner.settings"] = settings
    app.extensions["planner.store"] = store if store is not None else ContributionStore()

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info(
        "app_created",
        retirement_age=settings.retirement_age,
        annual_return_rate=settings.annual_return_rate,
    )
    return app
