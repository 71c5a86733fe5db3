"""Tests for clawgate.extensions — descriptor normalization and schema composition."""

import copy

import pytest

from clawgate.config.schema import build_base_schema
from clawgate.core.exceptions import CompositionError, ErrorCode
from clawgate.extensions.composer import compose_schema, serialize_schema
from clawgate.extensions.descriptors import (
    ChannelDescriptor,
    ChannelMeta,
    ExtensionContribution,
    ExtensionKind,
    PluginDescriptor,
)
from clawgate.extensions.normalizer import normalize_descriptors


def _namespace(schema: dict) -> dict:
    return schema["properties"]["extensions"]["properties"]


class TestNormalizeDescriptors:
    def test_plugin_fields_are_renamed(self, voice_plugin):
        [contribution] = normalize_descriptors([voice_plugin], [])
        assert contribution.id == "voice-call"
        assert contribution.display_name == "Voice Call"
        assert contribution.description == "Place phone calls"
        assert contribution.schema_fragment == voice_plugin.config_json_schema
        assert contribution.ui_hints == {"provider": {"label": "Provider"}}
        assert contribution.kind is ExtensionKind.PLUGIN

    def test_channel_label_and_blurb_are_renamed(self, telegram_channel):
        [contribution] = normalize_descriptors([], [telegram_channel])
        assert contribution.display_name == "Telegram"
        assert contribution.description == "Bot API channel"
        assert contribution.schema_fragment["properties"]["botToken"] == {"type": "string"}
        assert contribution.ui_hints == {"botToken": {"sensitive": True}}
        assert contribution.kind is ExtensionKind.CHANNEL

    def test_channel_without_config_schema(self):
        channel = ChannelDescriptor(id="webchat", meta=ChannelMeta(label="Web Chat"))
        [contribution] = normalize_descriptors([], [channel])
        assert contribution.schema_fragment is None
        assert contribution.ui_hints is None
        assert contribution.description is None

    def test_plugins_come_before_channels(self, voice_plugin, memory_plugin, telegram_channel):
        ids = [c.id for c in normalize_descriptors([voice_plugin, memory_plugin], [telegram_channel])]
        assert ids == ["voice-call", "memory", "telegram"]

    def test_empty_ids_are_dropped(self, memory_plugin):
        plugins = [PluginDescriptor(id=""), memory_plugin, PluginDescriptor(id="   ")]
        channels = [ChannelDescriptor(id="", meta=ChannelMeta(label="Nameless"))]
        ids = [c.id for c in normalize_descriptors(plugins, channels)]
        assert ids == ["memory"]


class TestComposeSchema:
    def test_one_entry_per_contribution(self, voice_plugin, memory_plugin, telegram_channel):
        contributions = normalize_descriptors([voice_plugin, memory_plugin], [telegram_channel])
        schema = compose_schema(build_base_schema(), contributions)
        assert set(_namespace(schema)) == {"voice-call", "memory", "telegram"}

    def test_entry_keeps_metadata_beside_fragment(self, voice_plugin):
        schema = compose_schema(build_base_schema(), normalize_descriptors([voice_plugin], []))
        entry = _namespace(schema)["voice-call"]
        assert entry["title"] == "Voice Call"
        assert entry["description"] == "Place phone calls"
        assert entry["x-ui-hints"] == {"provider": {"label": "Provider"}}
        assert entry["x-extension-kind"] == "plugin"
        assert entry["allOf"] == [voice_plugin.config_json_schema]
        assert "x-ui-hints" not in entry["allOf"][0]

    def test_missing_fragment_is_unconstrained(self, memory_plugin):
        schema = compose_schema(build_base_schema(), normalize_descriptors([memory_plugin], []))
        entry = _namespace(schema)["memory"]
        assert entry["allOf"] == [{}]
        assert "x-ui-hints" not in entry
        assert "description" not in entry

    def test_zero_contributions_keeps_base_properties(self):
        base = build_base_schema()
        schema = compose_schema(base, [])
        assert list(schema["properties"]) == list(base["properties"])
        assert _namespace(schema) == {}
        assert schema["$schema"].startswith("https://json-schema.org/")

    def test_base_is_not_mutated(self, voice_plugin):
        base = build_base_schema()
        snapshot = copy.deepcopy(base)
        compose_schema(base, normalize_descriptors([voice_plugin], []))
        assert base == snapshot

    def test_fragment_is_copied(self, voice_plugin):
        schema = compose_schema(build_base_schema(), normalize_descriptors([voice_plugin], []))
        _namespace(schema)["voice-call"]["allOf"][0]["type"] = "string"
        assert voice_plugin.config_json_schema["type"] == "object"

    def test_deterministic_and_order_independent(self, voice_plugin, memory_plugin, telegram_channel):
        forward = normalize_descriptors([voice_plugin, memory_plugin], [telegram_channel])
        first = serialize_schema(compose_schema(build_base_schema(), forward))
        again = serialize_schema(compose_schema(build_base_schema(), forward))
        reversed_order = serialize_schema(compose_schema(build_base_schema(), list(reversed(forward))))
        assert first == again == reversed_order
        assert list(_namespace(compose_schema(build_base_schema(), forward))) == ["memory", "telegram", "voice-call"]

    def test_duplicate_id_raises(self, voice_plugin):
        duplicate = ExtensionContribution(id="voice-call", display_name="Other", kind=ExtensionKind.CHANNEL)
        contributions = normalize_descriptors([voice_plugin], []) + [duplicate]

        with pytest.raises(CompositionError) as exc_info:
            compose_schema(build_base_schema(), contributions)

        assert exc_info.value.extension_id == "voice-call"
        assert "voice-call" in str(exc_info.value)
        assert exc_info.value.error_code == ErrorCode.COMPOSITION_FAILED
        assert exc_info.value.details["kinds"] == ["plugin", "channel"]

    def test_plugin_and_channel_sharing_an_id_collide(self, telegram_channel):
        plugin = PluginDescriptor(id="telegram", name="Telegram plugin")
        with pytest.raises(CompositionError, match="telegram"):
            compose_schema(build_base_schema(), normalize_descriptors([plugin], [telegram_channel]))


class TestSerializeSchema:
    def test_compact_utf8(self):
        body = serialize_schema({"title": "Café", "a": [1, 2]})
        assert body == '{"title":"Café","a":[1,2]}'.encode("utf-8")
