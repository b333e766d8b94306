"""
dilemma_client.errors — Custom exception classes
=================================================

Defines the exception hierarchy surfaced by the transport client and the
session controller. Each exception stores full context for structured
logging.

    DilemmaClientError
    ├── ValidationError      local precondition violated (never hits the network)
    └── TransportError
        ├── NetworkError     service unreachable or call timed out
        ├── ProtocolError    non-2xx response with a server-supplied reason
        └── DecodeError      2xx response with a malformed body
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


class DilemmaClientError(Exception):
    """Base exception for all dilemma_client errors."""

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {"type": self.__class__.__name__, "message": str(self)}

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type=self.__class__.__name__,
            details=self.to_dict(),
            body=None,
        )


class ValidationError(DilemmaClientError):
    """Raised when a controller operation's local precondition fails."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class TransportError(DilemmaClientError):
    """Base class for failures of a call against the match service."""

    def __init__(self, method: str, path: str, message: str):
        self.method = method
        self.path = path
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload.update({"method": self.method, "path": self.path})
        return payload


class NetworkError(TransportError):
    """Raised when the service cannot be reached or the call times out."""

    def __init__(self, method: str, path: str, reason: str):
        self.reason = reason
        super().__init__(method, path, f"Network error calling {method} {path}: {reason}")


class ProtocolError(TransportError):
    """Raised on a non-2xx response.

    ``message`` is the server's ``error`` field, or ``"HTTP <status>"``
    when the body is absent or malformed.
    """

    def __init__(self, method: str, path: str, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(method, path, message)

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["status"] = self.status
        return payload


class DecodeError(TransportError):
    """Raised when a successful response body cannot be decoded."""

    def __init__(
        self,
        method: str,
        path: str,
        reason: str,
        raw_body: Optional[str] = None,
    ):
        self.reason = reason
        self.raw_body = raw_body
        super().__init__(method, path, f"Malformed response from {method} {path}: {reason}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type=self.__class__.__name__,
            details=self.to_dict(),
            body=self.raw_body,
        )


def _format_error_block(
    error_type: str,
    details: Dict[str, Any],
    body: Optional[str],
) -> str:
    """Format a structured error block for the log file."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines: List[str] = [
        "",
        "=" * 64,
        " CLIENT ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
    ]

    if "method" in details:
        lines.append(f" Call:         {details['method']} {details['path']}")
    if "status" in details:
        lines.append(f" Status:       {details['status']}")

    lines.append("")
    lines.append(" ── DETAILS " + "─" * 52)
    lines.append(_indent_json(details))

    if body is not None:
        lines.append("")
        lines.append(" ── RESPONSE BODY " + "─" * 46)
        lines.append(" " + body[:2000])

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
