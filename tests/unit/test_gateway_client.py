"""Unit tests for GatewayClient using httpx.MockTransport."""

import json

import httpx
import pytest

from clawgate.config.settings import GatewayConfig
from clawgate.core.exceptions import ErrorCode, RemoteCallError
from clawgate.gateway.client import GatewayCallOptions, GatewayClient


def _client(handler, **config) -> GatewayClient:
    return GatewayClient(GatewayConfig(**config), transport=httpx.MockTransport(handler))


class TestGatewayCallOptions:
    def test_defaults(self):
        options = GatewayCallOptions()
        assert options.gateway_url is None
        assert options.timeout_ms == 60_000

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValueError):
            GatewayCallOptions(timeout_ms=0)


class TestGatewayClient:
    @pytest.mark.asyncio
    async def test_ok_frame_returns_payload(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, json={"ok": True, "payload": {"skills": []}})

        client = _client(handler, url="http://gw.local:18789")
        result = await client.call("skills.status", GatewayCallOptions(timeout_ms=1500), {"agentId": "ops"})

        assert result == {"skills": []}
        assert seen["url"] == "http://gw.local:18789/rpc"
        assert seen["body"]["method"] == "skills.status"
        assert seen["body"]["params"] == {"agentId": "ops"}
        assert seen["body"]["timeoutMs"] == 1500
        assert seen["body"]["id"]
        assert seen["auth"] is None

    @pytest.mark.asyncio
    async def test_configured_token_is_sent_as_bearer(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["authorization"] == "Bearer secret"
            return httpx.Response(200, json={"ok": True, "payload": None})

        client = _client(handler, token="secret")
        assert await client.call("skills.bins", GatewayCallOptions(), {}) is None

    @pytest.mark.asyncio
    async def test_call_options_override_config(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert str(request.url) == "http://other:9000/rpc"
            assert request.headers["authorization"] == "Bearer override"
            return httpx.Response(200, json={"ok": True, "payload": 1})

        client = _client(handler, url="http://gw.local:18789", token="secret")
        options = GatewayCallOptions(gateway_url="http://other:9000/", gateway_token="override")
        assert await client.call("skills.bins", options, {}) == 1

    @pytest.mark.asyncio
    async def test_error_frame_raises_with_gateway_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"ok": False, "error": {"code": "NOT_FOUND", "message": "unknown skill"}})

        with pytest.raises(RemoteCallError, match="unknown skill") as exc_info:
            await _client(handler).call("skills.update", GatewayCallOptions(), {"skillKey": "x"})

        assert exc_info.value.method == "skills.update"
        assert exc_info.value.error_code == ErrorCode.GATEWAY_UNAVAILABLE
        assert exc_info.value.details["gateway_error"]["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_http_error_status_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="boom")

        with pytest.raises(RemoteCallError, match="HTTP 500") as exc_info:
            await _client(handler).call("skills.status", GatewayCallOptions(), {})
        assert exc_info.value.details == {"status_code": 500}

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="not json")

        with pytest.raises(RemoteCallError, match="invalid JSON"):
            await _client(handler).call("skills.status", GatewayCallOptions(), {})

    @pytest.mark.asyncio
    async def test_malformed_frame_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=["ok"])

        with pytest.raises(RemoteCallError, match="malformed"):
            await _client(handler).call("skills.status", GatewayCallOptions(), {})

    @pytest.mark.asyncio
    async def test_timeout_maps_to_timeout_code(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(RemoteCallError, match="timed out after 1000ms") as exc_info:
            await _client(handler).call("skills.install", GatewayCallOptions(timeout_ms=1000), {})
        assert exc_info.value.error_code == ErrorCode.TIMEOUT

    @pytest.mark.asyncio
    async def test_connection_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(RemoteCallError, match="refused"):
            await _client(handler).call("skills.status", GatewayCallOptions(), {})

    @pytest.mark.asyncio
    async def test_invalid_url_raises_remote_call_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request may be sent to a malformed URL")

        options = GatewayCallOptions(gateway_url="http://[::1")
        with pytest.raises(RemoteCallError, match="Gateway call skills.status failed") as exc_info:
            await _client(handler).call("skills.status", options, {})
        assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)
