"""
Extensions Package
==================

Discovery of plugins and channel adapters, and composition of their config
schema fragments into the served JSON Schema.

Modules:
--------
- descriptors: plugin/channel descriptors and ExtensionContribution
- normalizer: descriptors -> contributions
- composer: base schema + contributions -> composed schema
- plugin_loader: entry-point and manifest plugin discovery
- channels: entry-point channel discovery
"""

from .composer import compose_schema, serialize_schema
from .descriptors import (
    ChannelConfigSchema,
    ChannelDescriptor,
    ChannelMeta,
    ExtensionContribution,
    ExtensionKind,
    PluginDescriptor,
    PluginRegistry,
)
from .normalizer import normalize_descriptors

__all__ = [
    'ChannelConfigSchema',
    'ChannelDescriptor',
    'ChannelMeta',
    'ExtensionContribution',
    'ExtensionKind',
    'PluginDescriptor',
    'PluginRegistry',
    'compose_schema',
    'normalize_descriptors',
    'serialize_schema',
]
