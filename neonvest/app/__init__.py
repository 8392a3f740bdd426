"""Flask factory for the NeonVest API: env-driven config, log level and CORS."""

import logging
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from neonvest.app.api.routes import api_bp
from neonvest.config import Config

LOG_FORMAT = "%(asctime)s - [%(levelname)s] - %(name)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("neonvest").setLevel(level)


def create_app(config_overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """
    Load `Config` (CORS origins and log level come from the environment),
    apply any overrides, set the `neonvest` log level and allow the configured
    origins on `/api/*` before mounting the API blueprint.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app.config["LOG_LEVEL"])

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
