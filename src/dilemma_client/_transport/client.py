# Area: Transport
"""
dilemma_client._transport.client — Match service HTTP client
=============================================================

Thin async wrapper over the match service's JSON-over-HTTP API. Each
method maps 1:1 to one endpoint and either returns a typed payload or
raises a classified TransportError:

    NetworkError   connection failure or per-call timeout
    ProtocolError  non-2xx status ({"error": "..."} or "HTTP <status>")
    DecodeError    2xx body that is not JSON or does not fit the model

The client never retries; retry policy belongs to the caller.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import aiohttp
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as SchemaError

from ..errors import DecodeError, NetworkError, ProtocolError
from ..types import AlgorithmDescriptor, Choice, MatchSummary, RoundResult, Session

logger = logging.getLogger("dilemma_client.transport")

DEFAULT_BASE_URL = "http://localhost:8080/api"
DEFAULT_TIMEOUT_SECONDS = 10.0

ModelT = TypeVar("ModelT", bound=BaseModel)

_CATALOG_ADAPTER = TypeAdapter(List[AlgorithmDescriptor])


class MatchServiceClient:
    """
    Async client for the match service.

    Usage:
        async with MatchServiceClient("http://localhost:8080/api") as client:
            algorithms = await client.list_algorithms()
            session = await client.start_match("tit-for-tat", 10, False)
            result = await client.play_round(session.session_id, Choice.COOPERATE)

    The underlying aiohttp session is created lazily on the first call so
    the client can be constructed outside a running event loop.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Service root including the ``/api`` base path
            timeout_seconds: Total per-call timeout; expiry raises NetworkError
            session: Optional externally owned aiohttp session
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "MatchServiceClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
            )
            self._owns_session = True
        return self._session

    # ──────────────────────────────────────────────────────────────
    # Endpoints
    # ──────────────────────────────────────────────────────────────

    async def list_algorithms(self) -> List[AlgorithmDescriptor]:
        """GET /algorithms — the opponent catalog."""
        path = "/algorithms"
        data = await self._request("GET", path)
        try:
            return _CATALOG_ADAPTER.validate_python(data)
        except SchemaError as e:
            raise DecodeError("GET", path, _schema_reason(e), json.dumps(data)) from e

    async def start_match(
        self, algorithm_id: Optional[str], total_rounds: int, random_mode: bool
    ) -> Session:
        """POST /game/start — create a new session."""
        body = {
            "algorithmId": algorithm_id or "",
            "totalRounds": total_rounds,
            "randomMode": random_mode,
        }
        data = await self._request("POST", "/game/start", body)
        return _decode("POST", "/game/start", data, Session)

    async def play_round(self, session_id: str, choice: Choice) -> RoundResult:
        """POST /game/round — submit the player's move for the next round."""
        body = {"sessionId": session_id, "playerChoice": Choice(choice).value}
        data = await self._request("POST", "/game/round", body)
        return _decode("POST", "/game/round", data, RoundResult)

    async def get_summary(self, session_id: str) -> MatchSummary:
        """GET /game/{sessionId}/summary — full statistics and leaderboard."""
        path = f"/game/{session_id}/summary"
        data = await self._request("GET", path)
        return _decode("GET", path, data, MatchSummary)

    async def delete_session(self, session_id: str) -> None:
        """DELETE /game/{sessionId} — release server-side session state."""
        await self._request("DELETE", f"/game/{session_id}", expect_body=False)

    # ──────────────────────────────────────────────────────────────
    # Plumbing
    # ──────────────────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        expect_body: bool = True,
    ) -> Any:
        """Perform one call and return the decoded JSON body."""
        url = f"{self.base_url}{path}"
        kwargs: Dict[str, Any] = {}
        if body is not None:
            kwargs["data"] = json.dumps(body)
            kwargs["headers"] = {"Content-Type": "application/json"}

        logger.debug(f"→ {method} {path}")
        try:
            async with self._get_session().request(method, url, **kwargs) as response:
                raw = await response.text(errors="replace")
                logger.debug(f"← {response.status} {method} {path}")
                if not 200 <= response.status < 300:
                    raise ProtocolError(
                        method, path, response.status,
                        _error_message(raw, response.status),
                    )
        except asyncio.TimeoutError as e:
            raise NetworkError(method, path, f"timed out after {self.timeout_seconds}s") from e
        except aiohttp.ClientError as e:
            raise NetworkError(method, path, str(e) or e.__class__.__name__) from e

        if not expect_body or not raw.strip():
            if expect_body:
                raise DecodeError(method, path, "empty response body", raw)
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            raise DecodeError(method, path, f"invalid JSON: {e}", raw) from e


def _decode(method: str, path: str, data: Any, model: Type[ModelT]) -> ModelT:
    """Validate a decoded JSON body against a wire model."""
    try:
        return model.model_validate(data)
    except SchemaError as e:
        raise DecodeError(method, path, _schema_reason(e), json.dumps(data, default=str)) from e


def _schema_reason(error: SchemaError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ())) or "<body>"
        parts.append(f"{location}: {item.get('msg', 'invalid')}")
    return "; ".join(parts) or "schema validation failed"


def _error_message(raw: str, status: int) -> str:
    """Extract the server's error reason, falling back to "HTTP <status>"."""
    fallback = f"HTTP {status}"
    if not raw.strip():
        return fallback
    try:
        payload = json.loads(raw)
    except ValueError:
        return fallback
    if isinstance(payload, dict):
        message = payload.get("error")
        if isinstance(message, str) and message:
            return message
    return fallback
