"""
Pytest configuration for clawgate tests — shared fixtures for settings,
extension descriptors, schema sources and a recording gateway client.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from clawgate.config.schema import build_base_schema
from clawgate.config.settings import Settings
from clawgate.extensions.descriptors import (
    ChannelConfigSchema,
    ChannelDescriptor,
    ChannelMeta,
    PluginDescriptor,
    PluginRegistry,
)
from clawgate.gateway.client import GatewayClient
from clawgate.interfaces.web.schema_http import SchemaSources

# =============================================================================
# SHARED FIXTURES
# =============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmp_dir = tempfile.mkdtemp()
    yield Path(tmp_dir)
    shutil.rmtree(tmp_dir, ignore_errors=True)


@pytest.fixture
def settings(temp_dir):
    """Settings with an isolated default workspace."""
    return Settings(agents={"default_workspace": str(temp_dir / "workspace")})


@pytest.fixture
def voice_plugin():
    return PluginDescriptor(
        id="voice-call",
        name="Voice Call",
        description="Place phone calls",
        config_ui_hints={"provider": {"label": "Provider"}},
        config_json_schema={
            "type": "object",
            "properties": {"provider": {"type": "string", "enum": ["twilio", "telnyx"]}},
        },
    )


@pytest.fixture
def memory_plugin():
    return PluginDescriptor(id="memory", name="Memory")


@pytest.fixture
def telegram_channel():
    return ChannelDescriptor(
        id="telegram",
        meta=ChannelMeta(label="Telegram", blurb="Bot API channel"),
        config_schema=ChannelConfigSchema(
            schema={"type": "object", "properties": {"botToken": {"type": "string"}}},
            ui_hints={"botToken": {"sensitive": True}},
        ),
    )


@pytest.fixture
def make_sources():
    """Factory for SchemaSources backed by in-memory collaborators."""

    def _make(
        plugins: list[PluginDescriptor] | None = None,
        channels: list[ChannelDescriptor] | None = None,
        settings: Settings | None = None,
        **overrides: Any,
    ) -> SchemaSources:
        cfg = settings or Settings()
        registry = PluginRegistry(plugins=list(plugins or []))
        values: dict[str, Any] = {
            "load_config": lambda: cfg,
            "resolve_default_agent_id": lambda _settings: "main",
            "resolve_workspace_dir": lambda _settings, _agent_id: Path("/tmp/clawgate-test-workspace"),
            "load_plugins": lambda _settings, _workspace, _logger: registry,
            "list_channels": lambda: list(channels or []),
            "base_schema": build_base_schema,
        }
        values.update(overrides)
        return SchemaSources(**values)

    return _make


@pytest.fixture
def gateway_client():
    """GatewayClient whose ``call`` is an AsyncMock returning ``{"ok": True}``."""
    client = GatewayClient()
    client.call = AsyncMock(return_value={"ok": True})
    return client

