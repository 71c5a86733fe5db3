"""
Config Schema HTTP Handler
==========================

Serves ``GET /openclaw.schema.json``: the config JSON Schema composed from
the base settings schema and every currently loaded plugin and channel.
Config files can point ``"$schema"`` at this URL for editor validation.

The schema is rebuilt on every request; it depends on whatever extensions
are installed right now.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response

from clawgate.agents.scope import resolve_agent_workspace_dir, resolve_default_agent_id
from clawgate.config.schema import build_base_schema
from clawgate.config.settings import Settings, load_settings
from clawgate.core.exceptions import ClawgateError
from clawgate.core.structured_logger import get_logger, trace_context
from clawgate.extensions.channels import list_channel_plugins
from clawgate.extensions.composer import compose_schema, serialize_schema
from clawgate.extensions.descriptors import ChannelDescriptor, PluginRegistry
from clawgate.extensions.discovery import ExtensionLogger, SilentLogger
from clawgate.extensions.normalizer import normalize_descriptors
from clawgate.extensions.plugin_loader import load_plugins
from clawgate.interfaces.web.chain import HandlerOutcome
from clawgate.observability.metrics import SCHEMA_EXTENSIONS, SCHEMA_REQUESTS

logger = get_logger("SchemaHttp")

SCHEMA_PATH = "/openclaw.schema.json"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass
class SchemaSources:
    """Collaborators the schema build depends on; swapped out in tests."""

    load_config: Callable[[], Settings] = load_settings
    resolve_default_agent_id: Callable[[Settings], str] = resolve_default_agent_id
    resolve_workspace_dir: Callable[[Settings, str], Path] = resolve_agent_workspace_dir
    load_plugins: Callable[[Settings, Path, ExtensionLogger], PluginRegistry] = load_plugins
    list_channels: Callable[[], list[ChannelDescriptor]] = list_channel_plugins
    base_schema: Callable[[], dict[str, Any]] = build_base_schema
    plugin_logger: ExtensionLogger = field(default_factory=SilentLogger)


def build_config_schema(sources: SchemaSources) -> dict[str, Any]:
    """Load config, discover extensions and compose the schema document.

    Raises whatever the collaborators or the composer raise.
    """
    settings = sources.load_config()
    agent_id = sources.resolve_default_agent_id(settings)
    workspace_dir = sources.resolve_workspace_dir(settings, agent_id)
    registry = sources.load_plugins(settings, workspace_dir, sources.plugin_logger)
    contributions = normalize_descriptors(registry.plugins, sources.list_channels())
    schema = compose_schema(sources.base_schema(), contributions)
    SCHEMA_EXTENSIONS.set(len(contributions))
    return schema


def _json_response(status_code: int, body: bytes = b"") -> Response:
    return Response(content=body, status_code=status_code, media_type=JSON_CONTENT_TYPE)


class ConfigSchemaHandler:
    """Chain handler for the config schema endpoint."""

    def __init__(self, sources: SchemaSources | None = None) -> None:
        self.sources = sources or SchemaSources()

    async def __call__(self, request: Request) -> HandlerOutcome:
        method = request.method
        if method not in ("GET", "HEAD") or request.url.path != SCHEMA_PATH:
            return HandlerOutcome.not_matched()

        if method == "HEAD":
            SCHEMA_REQUESTS.labels(method=method, status="200").inc()
            return HandlerOutcome.ok(_json_response(200))

        with trace_context():
            try:
                schema = await run_in_threadpool(build_config_schema, self.sources)
            except Exception as e:
                message = e.message if isinstance(e, ClawgateError) else str(e)
                logger.error(f"Config schema build failed: {message}", error_type=type(e).__name__)
                SCHEMA_REQUESTS.labels(method=method, status="500").inc()
                return HandlerOutcome.errored(_json_response(500, serialize_schema({"error": message})))

            logger.debug("Config schema composed")
            SCHEMA_REQUESTS.labels(method=method, status="200").inc()
            return HandlerOutcome.ok(_json_response(200, serialize_schema(schema)))
