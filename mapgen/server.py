"""
project: hexmap-generator
module: server.py
License: MIT

Server bootstrap helpers used by the CLI.
"""

import sys

from mapgen import create_app
from mapgen.logging_utils import log


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Run the Flask development server for the generation API."""
    app = create_app()
    try:
        log.info(event="server_start", host=host, port=port, debug=debug)
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)
