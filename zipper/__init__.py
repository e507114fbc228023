"""
project: Zipper
module: __init__.py

Flask application setup for the board generation service.

Configuration is sourced from environment variables with reasonable
defaults for development; a local .env file is loaded when present.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

__version__ = "0.4.0"

# Load .env if present so CORS origins, retry counts, etc. can be supplied
# without exporting shell variables during development.
load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Read an integer env var, falling back to default on junk values."""
    raw = os.getenv(name)
    try:
        return int(raw) if raw is not None else default
    except ValueError:
        logging.warning("Ignoring non-integer %s=%r, using %s", name, raw, default)
        return default


app = Flask(__name__)

app.config.update(
    VERSION=__version__,
    CORS_ALLOWED_ORIGINS=os.getenv("CORS_ALLOWED_ORIGINS", "*"),
    # Extra boundary-level retries when the route search gives up
    GENERATION_RETRIES=_env_int("ZIPPER_GENERATION_RETRIES", 1),
)

# Register HTTP blueprints (import after app created)
from zipper.routes.generate_api import bp_generate  # noqa: E402

app.register_blueprint(bp_generate)

# Route map debug output (development aid), opt-in via ZIPPER_SHOW_ROUTE_MAP=1
if os.getenv("ZIPPER_SHOW_ROUTE_MAP", "0") in ("1", "true", "yes"):
    print("Registered routes:")
    print(app.url_map)


def create_app():
    """Return the configured Flask app instance."""
    return app


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal server error", "error_id": error_id}), 500
