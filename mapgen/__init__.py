"""
project: hexmap-generator
module: __init__.py
License: MIT

Flask application factory for the map generation service.

The generation engine itself lives in `mapgen.generation` and has no Flask
dependency at runtime; this module only wires the thin HTTP adapter around it.
Configuration is sourced from environment variables (optionally via a local
.env file); DEFAULT_HEXAGON_COUNT=50 and MAX_HEXAGON_COUNT=200 unless overridden.
"""

import os

from dotenv import load_dotenv
from flask import Flask

from mapgen.version import __version__

# Load .env if present so DEFAULT_HEXAGON_COUNT / MAX_HEXAGON_COUNT etc. can be
# supplied without exporting shell variables during development.
load_dotenv()


def create_app(config=None):
    """Return a configured Flask app with the generation blueprint registered."""
    app = Flask(__name__)
    app.config.update(
        DEFAULT_HEXAGON_COUNT=int(os.getenv("DEFAULT_HEXAGON_COUNT", "50")),
        MAX_HEXAGON_COUNT=int(os.getenv("MAX_HEXAGON_COUNT", "200")),
        CORS_ALLOWED_ORIGINS=os.getenv("CORS_ALLOWED_ORIGINS", "*"),
    )
    if config:
        app.config.update(config)
    # Manifests are emitted in generation order; keep keys as built.
    app.json.sort_keys = False

    from mapgen.routes.generate_api import bp_generate

    app.register_blueprint(bp_generate)
    return app


__all__ = ["create_app", "__version__"]
