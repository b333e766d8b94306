# Area: Transport
"""
Transport layer for the remote match service.

This package contains:
- The aiohttp-based MatchServiceClient
- Defaults for the service base URL and per-call timeout
"""

from .client import MatchServiceClient, DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS

__all__ = [
    "MatchServiceClient",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
]
