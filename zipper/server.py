"""
project: Zipper
module: server.py

Server bootstrap: logging configuration and the development HTTP server.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from zipper import app

LOG_DIR_ENV = "ZIPPER_LOG_DIR"


def start_server(host="0.0.0.0", port=8000, debug: bool = False):  # pragma: no cover (runtime only)
    """Start the Flask server after configuring logging.

    When debug=True, Flask's debugger and reloader provide verbose tracebacks.
    """
    _configure_logging()
    try:
        print(f"[INFO] Starting board server on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(log_dir: str | None = None):
    """Configure logging to both console and a rotating file.

    The file lives at <log_dir>/app.log (default: ZIPPER_LOG_DIR or ./logs).
    Retains a few backups to avoid growth. Safe to call repeatedly.
    """
    log_dir = log_dir or os.getenv(LOG_DIR_ENV, "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, "app.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # Rotating file handler
    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))

    # Console handler (for terminals/tasks that show output)
    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))

    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path
