"""
project: Island World Generator
module: server.py
License: MIT

Server bootstrap.

Starts the Flask development server for the world API and configures
application logging to a rotating file plus the console.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from island import create_app
from island.logging_utils import get_logger

log = get_logger("island.server")


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (integration / runtime only)
    """Start the HTTP server.

    When debug=True, Flask's debugger and reloader provide verbose tracebacks.
    Also configures application logging to a rotating file and console.
    """
    app = create_app()
    _configure_logging(app.instance_path)
    log.info(event="server_start", host=host, port=port, debug=debug)
    try:
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(log_dir: str) -> str:
    """Configure logging to both console and a rotating file in ``log_dir``.

    The file is ``<log_dir>/island.log``; a few backups are kept. Returns the
    log file path.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, "island.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(fmt)

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(fmt)

    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path
