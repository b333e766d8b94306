# Area: Shared
"""
dilemma_client._shared.logging_config — Structured logging setup
=================================================================

Configures dual logging: terminal (colored) + file (JSON).
Provides structured error logging for transport failures.
Presentation mode suppresses standard logs on the terminal while the
terminal presenter owns stdout.
"""

from __future__ import annotations
import logging
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..errors import DilemmaClientError

# Package logger
logger = logging.getLogger("dilemma_client")

DEFAULT_LOG_FILE = "dilemma_client.log"

# Flag to control terminal log output
_presentation_mode_enabled = False


class PresentationFilter(logging.Filter):
    """Filter that suppresses all logs when presentation mode is enabled.

    In presentation mode the terminal presenter draws screens with
    direct print() calls and log lines would corrupt them.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return not is_presentation_mode_enabled()


class TerminalFormatter(logging.Formatter):
    """Colored formatter for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        original = record.levelname
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


class JSONFormatter(logging.Formatter):
    """JSON formatter for file output."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        error_type = getattr(record, "error_type", None)
        if error_type:
            log_data["error_type"] = error_type
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def setup_logging(
    log_file_path: str = DEFAULT_LOG_FILE,
    level: int = logging.INFO,
) -> None:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str
        Path to the log file. Defaults to 'dilemma_client.log' in current dir.
    level : int
        Logging level. Defaults to INFO.
    """
    pkg_logger = logging.getLogger("dilemma_client")
    pkg_logger.setLevel(level)

    # Remove existing handlers
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()

    # Terminal handler with colors
    terminal_handler = logging.StreamHandler(sys.stderr)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
    terminal_handler.addFilter(PresentationFilter())
    pkg_logger.addHandler(terminal_handler)

    # File handler with JSON
    try:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        pkg_logger.addHandler(file_handler)
    except OSError as e:
        pkg_logger.warning(f"Could not create log file: {e}")

    # Prevent propagation to root logger
    pkg_logger.propagate = False


def log_client_error(error: "DilemmaClientError") -> None:
    """
    Log a client error in the structured format.

    Parameters
    ----------
    error : DilemmaClientError
        The error to log (NetworkError, ProtocolError or DecodeError).
    """
    error_block = error.format_error_log()

    # Terminal gets the block only when no presenter owns it
    if not is_presentation_mode_enabled():
        print(error_block, file=sys.stderr)

    logger.error(
        f"Client error: {error}",
        extra={"error_type": error.__class__.__name__},
    )


def enable_presentation_mode() -> None:
    """
    Enable presentation mode.

    In presentation mode:
    - Standard log records are suppressed from the terminal
    - Error blocks are not printed to stderr
    - File logging remains unchanged for debugging
    """
    global _presentation_mode_enabled
    _presentation_mode_enabled = True


def disable_presentation_mode() -> None:
    """Disable presentation mode (restore standard logging)."""
    global _presentation_mode_enabled
    _presentation_mode_enabled = False


def is_presentation_mode_enabled() -> bool:
    """Check if presentation mode is enabled."""
    return _presentation_mode_enabled
