"""
project: Island World Generator
module: __init__.py
License: MIT

Flask application factory.

Wires the world API blueprint into a Flask app. Configuration is sourced
from environment variables (optionally via a .env file) with defaults
suitable for development. A local `instance/` directory holds runtime files
such as the rotating server log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

__version__ = "0.4.0"

# Load .env if present so `ISLAND_*` settings can be
# supplied without exporting shell variables during development.
load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def create_app(overrides: dict | None = None) -> Flask:
    """Build a Flask app serving generated worlds.

    ``overrides`` is applied on top of the environment-derived config, which
    is how tests toggle TESTING or the world cache.
    """
    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError as exc:
        logging.getLogger(__name__).warning("instance path unavailable: %s", exc)

    app.config.update(
        ISLAND_DISABLE_CACHE=_env_flag("ISLAND_DISABLE_CACHE"),
        ISLAND_CACHE_MAX=int(os.getenv("ISLAND_CACHE_MAX", "8")),
    )
    if overrides:
        app.config.update(overrides)

    from island.routes.world_api import bp_world

    app.register_blueprint(bp_world)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal server error", "error_id": error_id}), 500

    return app
