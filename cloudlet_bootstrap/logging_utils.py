from __future__ import annotations

import logging
import sys
from pathlib import Path

from .errors import LogSetupFailure

DEFAULT_LOG_DIR = "/var/log/cloudlet"
LOG_FILE_NAME = "bootstrap.log"

LOGGER_NAME = "cloudlet_bootstrap"

SEVERITY_LEVELS = {
    "info": logging.INFO,
    "fail": logging.ERROR,
}

_GREEN = "\033[32m"
_RED = "\033[31m"
_RESET = "\033[0m"


def _severity(record: logging.LogRecord) -> str:
    return "fail" if record.levelno >= logging.WARNING else "info"


class SeverityFormatter(logging.Formatter):
    """Render records as ``  [info] text`` / ``  [fail] text``."""

    def format(self, record: logging.LogRecord) -> str:
        return f"  [{_severity(record)}] {record.getMessage()}"


class ColorSeverityFormatter(SeverityFormatter):
    def format(self, record: logging.LogRecord) -> str:
        color = _RED if _severity(record) == "fail" else _GREEN
        return f"{color}{super().format(record)}{_RESET}"


def configure_logging(
    log_dir: str = DEFAULT_LOG_DIR,
    level: int = logging.INFO,
    console: bool = True,
) -> str:
    """Attach the persistent log file (and optionally the terminal) to the package logger.

    The log directory is created if needed. If that fails there is nowhere to
    record what the run did, so LogSetupFailure is raised and the caller must
    stop.

    Returns the log file path.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_cloudlet_configured", False):
        return getattr(logger, "_cloudlet_log_path")

    try:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_path = str(Path(log_dir) / LOG_FILE_NAME)
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    except OSError as e:
        raise LogSetupFailure(f"Cannot create log directory {log_dir}: {e}") from e

    file_handler.setFormatter(SeverityFormatter())
    logger.addHandler(file_handler)

    if console:
        stream = logging.StreamHandler(sys.stdout)
        stream.setFormatter(ColorSeverityFormatter())
        logger.addHandler(stream)

    setattr(logger, "_cloudlet_configured", True)
    setattr(logger, "_cloudlet_log_path", log_path)

    logger.debug("Logging initialized (path=%s)", log_path)
    return log_path


def reset_logging() -> None:
    """Detach and close handlers added by configure_logging()."""

    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    for attr in ("_cloudlet_configured", "_cloudlet_log_path"):
        if hasattr(logger, attr):
            delattr(logger, attr)


def message(severity: str, text: str) -> None:
    """Log text at the given severity (``info`` or ``fail``)."""

    level = SEVERITY_LEVELS.get(severity, logging.INFO)
    logging.getLogger(LOGGER_NAME).log(level, "%s", text)
