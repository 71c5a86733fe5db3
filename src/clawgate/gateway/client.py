"""
Gateway Client
==============

Single-call RPC to the remote control plane over HTTP.

Request:  POST {gateway_url}/rpc
          {"id": "...", "method": "skills.status", "params": {...}, "timeoutMs": 60000}
Response: {"ok": true, "payload": ...}
          {"ok": false, "error": {"code": "...", "message": "..."}}

No retries: a failed call is reported once, as ``RemoteCallError``.
"""

import time
import uuid
from dataclasses import dataclass
from typing import Any

import httpx

from clawgate.config.settings import GatewayConfig
from clawgate.core.exceptions import ErrorCode, RemoteCallError
from clawgate.core.structured_logger import get_logger
from clawgate.observability.metrics import GATEWAY_CALL_DURATION, GATEWAY_CALLS

logger = get_logger("Gateway")

DEFAULT_TIMEOUT_MS = 60_000
RPC_PATH = "/rpc"


@dataclass
class GatewayCallOptions:
    """Per-invocation connection overrides; unset fields fall back to settings"""

    gateway_url: str | None = None
    gateway_token: str | None = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self) -> None:
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")


class GatewayClient:
    """Issues one JSON request per call; the transport is injectable for tests."""

    def __init__(self, config: GatewayConfig | None = None, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config or GatewayConfig()
        self._transport = transport

    def _resolve(self, options: GatewayCallOptions) -> tuple[str, str | None]:
        url = (options.gateway_url or self.config.url).rstrip("/")
        token = options.gateway_token or self.config.token
        return url + RPC_PATH, token

    async def call(self, method: str, options: GatewayCallOptions, params: dict[str, Any]) -> Any:
        """Send ``method`` with ``params`` and return the response payload.

        Raises:
            RemoteCallError: On transport failure, timeout, HTTP error status,
                an undecodable body or an ``ok: false`` frame
        """
        log = logger.bind(method=method)
        url, token = self._resolve(options)
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        frame = {
            "id": uuid.uuid4().hex,
            "method": method,
            "params": params,
            "timeoutMs": options.timeout_ms,
        }

        start = time.perf_counter()
        outcome = "error"
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=options.timeout_ms / 1000) as client:
                resp = await client.post(url, json=frame, headers=headers)
            payload = self._unwrap(method, resp)
            outcome = "ok"
            return payload
        except httpx.TimeoutException as e:
            outcome = "timeout"
            raise RemoteCallError(
                method, f"Gateway call {method} timed out after {options.timeout_ms}ms", ErrorCode.TIMEOUT
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise RemoteCallError(method, f"Gateway call {method} failed: {e}") from e
        finally:
            elapsed = time.perf_counter() - start
            GATEWAY_CALLS.labels(method=method, outcome=outcome).inc()
            GATEWAY_CALL_DURATION.labels(method=method).observe(elapsed)
            log.info(
                f"Gateway call {method} finished",
                outcome=outcome,
                execution_time_ms=round(elapsed * 1000, 2),
            )

    @staticmethod
    def _unwrap(method: str, resp: httpx.Response) -> Any:
        if resp.status_code >= 400:
            raise RemoteCallError(
                method,
                f"Gateway call {method} failed: HTTP {resp.status_code}",
                details={"status_code": resp.status_code},
            )
        try:
            body = resp.json()
        except ValueError as e:
            raise RemoteCallError(method, f"Gateway call {method} returned invalid JSON") from e
        if not isinstance(body, dict) or "ok" not in body:
            raise RemoteCallError(method, f"Gateway call {method} returned a malformed response frame")
        if not body["ok"]:
            error = body.get("error") or {}
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise RemoteCallError(
                method,
                message or f"Gateway call {method} failed",
                details={"gateway_error": error},
            )
        return body.get("payload")
