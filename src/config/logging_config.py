# src/config/logging_config.py

"""Per-session logging for campus_market.

Every launch (CLI query or TUI session) writes to its own file under
``logs/``, stamped with the start time, e.g. ``logs/run_20241017_091500.log``.
Loggers named ``campus_market.*`` propagate to the handlers installed here.

The console only shows warnings and errors, so JSON written to stdout by the
CLI stays machine-readable.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

ROOT_LOGGER_NAME = "campus_market"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    logs_dir: Path | None = None,
    console_level: int = logging.WARNING,
) -> Path:
    """Attach file and console handlers to the ``campus_market`` logger.

    Args:
        logs_dir: Directory for the session log; defaults to
            ``Settings.LOGS_DIR``.
        console_level: Minimum level echoed to stderr.

    Returns:
        The path of the log file for this session.  Repeated calls keep
        the handlers from the first call.
    """
    target_dir = logs_dir or Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = target_dir / f"run_{stamp}.log"

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.debug("Session log opened at %s", log_file)
    return log_file
