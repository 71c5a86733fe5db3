"""Extension descriptors as returned by discovery, and the flat record the composer consumes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ExtensionKind(Enum):
    """Where a contribution came from"""

    PLUGIN = "plugin"
    CHANNEL = "channel"


@dataclass(frozen=True)
class PluginDescriptor:
    """A loaded plugin as reported by the plugin loader"""

    id: str
    name: str = ""
    description: str | None = None
    config_ui_hints: dict[str, Any] | None = None
    config_json_schema: dict[str, Any] | None = None
    source: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], source: str = "") -> PluginDescriptor:
        """Build from a manifest-style mapping (``configSchema``/``uiHints`` keys)."""
        plugin_id = data.get("id")
        if not isinstance(plugin_id, str):
            raise ValueError(f"plugin id must be a string, got {type(plugin_id).__name__}")
        schema = data.get("configSchema", data.get("config_json_schema"))
        hints = data.get("uiHints", data.get("config_ui_hints"))
        if schema is not None and not isinstance(schema, dict):
            raise ValueError(f"plugin {plugin_id!r}: configSchema must be an object")
        if hints is not None and not isinstance(hints, dict):
            raise ValueError(f"plugin {plugin_id!r}: uiHints must be an object")
        return cls(
            id=plugin_id,
            name=str(data.get("name") or plugin_id),
            description=data.get("description"),
            config_ui_hints=hints,
            config_json_schema=schema,
            source=source,
        )


@dataclass(frozen=True)
class ChannelMeta:
    label: str
    blurb: str | None = None


@dataclass(frozen=True)
class ChannelConfigSchema:
    schema: dict[str, Any] | None = None
    ui_hints: dict[str, Any] | None = None


@dataclass(frozen=True)
class ChannelDescriptor:
    """A channel adapter as reported by the channel lister"""

    id: str
    meta: ChannelMeta
    config_schema: ChannelConfigSchema | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ChannelDescriptor:
        channel_id = data.get("id")
        if not isinstance(channel_id, str):
            raise ValueError(f"channel id must be a string, got {type(channel_id).__name__}")
        meta = data.get("meta") or {}
        config = data.get("configSchema")
        return cls(
            id=channel_id,
            meta=ChannelMeta(label=str(meta.get("label") or channel_id), blurb=meta.get("blurb")),
            config_schema=(
                ChannelConfigSchema(schema=config.get("schema"), ui_hints=config.get("uiHints"))
                if config
                else None
            ),
        )


@dataclass
class PluginDiagnostic:
    """A plugin that could not be loaded"""

    source: str
    message: str
    level: str = "error"


@dataclass
class PluginRegistry:
    """Result of one plugin loading pass"""

    plugins: list[PluginDescriptor] = field(default_factory=list)
    diagnostics: list[PluginDiagnostic] = field(default_factory=list)


@dataclass(frozen=True)
class ExtensionContribution:
    """One extension's slice of the composed config schema"""

    id: str
    display_name: str
    description: str | None = None
    schema_fragment: dict[str, Any] | None = None
    ui_hints: dict[str, Any] | None = None
    kind: ExtensionKind = ExtensionKind.PLUGIN
