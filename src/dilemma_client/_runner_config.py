# Area: Shared
"""
dilemma_client._runner_config — Runner Configuration
=====================================================

Configuration defaults, environment mappings and validation for
MatchRunner.
"""

import logging
from typing import Any, Dict

from ._shared.logging_config import DEFAULT_LOG_FILE
from ._session.controller import DEFAULT_SUMMARY_DELAY_SECONDS, DEFAULT_TOTAL_ROUNDS
from ._transport.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger("dilemma_client")

DEFAULT_CONFIG: Dict[str, Any] = {
    "base_url": DEFAULT_BASE_URL,
    "timeout_seconds": DEFAULT_TIMEOUT_SECONDS,
    "total_rounds": DEFAULT_TOTAL_ROUNDS,
    "summary_delay_seconds": DEFAULT_SUMMARY_DELAY_SECONDS,
    "log_file": DEFAULT_LOG_FILE,
}

# Environment variable -> (config key, converter)
ENV_MAPPINGS = {
    "DILEMMA_BASE_URL": ("base_url", str),
    "DILEMMA_TIMEOUT_SECONDS": ("timeout_seconds", float),
    "DILEMMA_TOTAL_ROUNDS": ("total_rounds", int),
    "DILEMMA_SUMMARY_DELAY_SECONDS": ("summary_delay_seconds", float),
    "DILEMMA_LOG_FILE": ("log_file", str),
}

# Required config keys
REQUIRED_CONFIG_KEYS = [
    "base_url",
]


def validate_config(config: dict) -> None:
    """
    Validate required configuration keys and value ranges.

    Args:
        config: Configuration dict

    Raises:
        ValueError: If required keys are missing or a value is out of range
    """
    missing = [k for k in REQUIRED_CONFIG_KEYS if not config.get(k)]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    timeout = config.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
    if not _is_number(timeout) or timeout <= 0:
        raise ValueError(f"timeout_seconds must be positive, got {timeout!r}")

    rounds = config.get("total_rounds", DEFAULT_TOTAL_ROUNDS)
    if isinstance(rounds, bool) or not isinstance(rounds, int) or rounds <= 0:
        raise ValueError(f"total_rounds must be a positive integer, got {rounds!r}")

    delay = config.get("summary_delay_seconds", DEFAULT_SUMMARY_DELAY_SECONDS)
    if not _is_number(delay) or delay < 0:
        raise ValueError(f"summary_delay_seconds must not be negative, got {delay!r}")


def with_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``config`` with every missing key defaulted."""
    merged = dict(DEFAULT_CONFIG)
    merged.update({k: v for k, v in config.items() if v is not None})
    return merged


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
