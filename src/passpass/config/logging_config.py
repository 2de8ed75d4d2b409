"""
Error log for the passpass package.

Only the "passpass" logger is configured, so libraries and test runners
keep their own handlers. Every line starts with a pendulum timestamp.
"""
import logging
import os
import sys
import traceback
from pathlib import Path

import pendulum

from passpass.config.config_vault import LOG_FILE, UTF8

PACKAGE_LOGGER = "passpass"

# Path of the file handler installed by setup_logging.
log_path = Path(LOG_FILE)


def timestamp() -> str:
    """ISO-8601 timestamp used as prefix for every log line."""
    return pendulum.now().to_iso8601_string()


def setup_logging(log_file=LOG_FILE) -> Path:
    """
    Send ERROR records of the package to log_file and log crashes there.

    Calling it again keeps the first configuration.

    Returns:
        The file errors are written to.
    """
    global log_path

    logger = logging.getLogger(PACKAGE_LOGGER)
    if logger.handlers:
        return log_path

    log_path = Path(log_file)
    handler = logging.FileHandler(log_path, mode="a", encoding=UTF8)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.ERROR)

    sys.excepthook = log_uncaught_exceptions
    return log_path


def log_uncaught_exceptions(exctype, value, tb):
    """Excepthook: write a compact traceback, tell the user where it went."""
    frames = [
        f'  File "{os.path.basename(frame.filename)}", line {frame.lineno}, in {frame.name}'
        for frame in traceback.extract_tb(tb)
    ]
    trace_summary = "\n".join(reversed(frames)) or "  <no traceback>"
    error_msg = f"{exctype.__name__}: {value}"

    logging.getLogger(PACKAGE_LOGGER).error(
        f"[{timestamp()}] Uncaught exception: {error_msg}\n"
        f"Traceback (most recent call last):\n"
        f"{trace_summary}\n"
        f"{error_msg}\n"
    )

    print("\nError! Something went wrong.", file=sys.stderr)
    print(f"Details saved to {log_path}\n", file=sys.stderr)
