"""Flatten plugin and channel descriptors into ``ExtensionContribution`` records."""

from collections.abc import Iterable

from clawgate.extensions.descriptors import (
    ChannelDescriptor,
    ExtensionContribution,
    ExtensionKind,
    PluginDescriptor,
)


def _has_id(value: str | None) -> bool:
    return isinstance(value, str) and bool(value.strip())


def plugin_contribution(plugin: PluginDescriptor) -> ExtensionContribution:
    return ExtensionContribution(
        id=plugin.id,
        display_name=plugin.name or plugin.id,
        description=plugin.description,
        schema_fragment=plugin.config_json_schema,
        ui_hints=plugin.config_ui_hints,
        kind=ExtensionKind.PLUGIN,
    )


def channel_contribution(channel: ChannelDescriptor) -> ExtensionContribution:
    config = channel.config_schema
    return ExtensionContribution(
        id=channel.id,
        display_name=channel.meta.label or channel.id,
        description=channel.meta.blurb,
        schema_fragment=config.schema if config else None,
        ui_hints=config.ui_hints if config else None,
        kind=ExtensionKind.CHANNEL,
    )


def normalize_descriptors(
    plugins: Iterable[PluginDescriptor],
    channels: Iterable[ChannelDescriptor],
) -> list[ExtensionContribution]:
    """Plugins first, then channels, each in input order.

    Descriptors without a usable id cannot be namespaced and are dropped.
    """
    contributions = [plugin_contribution(p) for p in plugins if _has_id(p.id)]
    contributions.extend(channel_contribution(c) for c in channels if _has_id(c.id))
    return contributions
