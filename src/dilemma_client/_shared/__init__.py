# Area: Shared
"""
Shared utilities used by the transport and session layers.

This package contains:
- Logging configuration (terminal + JSON file)
- Structured client error logging
"""

from .logging_config import (
    DEFAULT_LOG_FILE,
    setup_logging,
    log_client_error,
    enable_presentation_mode,
    disable_presentation_mode,
    is_presentation_mode_enabled,
)

__all__ = [
    "DEFAULT_LOG_FILE",
    "setup_logging",
    "log_client_error",
    "enable_presentation_mode",
    "disable_presentation_mode",
    "is_presentation_mode_enabled",
]
