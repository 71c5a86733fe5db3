"""
Config Schema Composer
======================

Merges the static base schema with extension contributions into one JSON
Schema document. Each contribution is namespaced under
``properties.extensions.properties.<id>``:

    {
        "title": "<display name>",
        "description": "<description>",
        "x-ui-hints": {...},
        "x-extension-kind": "plugin",
        "allOf": [<schema fragment or {}>]
    }

Metadata lives beside the fragment, never inside it.
"""

import copy
import json
from collections.abc import Iterable
from typing import Any

from clawgate.config.schema import EXTENSIONS_KEY
from clawgate.core.exceptions import CompositionError
from clawgate.extensions.descriptors import ExtensionContribution

UI_HINTS_KEY = "x-ui-hints"
KIND_KEY = "x-extension-kind"


def _entry(contribution: ExtensionContribution) -> dict[str, Any]:
    fragment = copy.deepcopy(contribution.schema_fragment) if contribution.schema_fragment else {}
    entry: dict[str, Any] = {"title": contribution.display_name}
    if contribution.description:
        entry["description"] = contribution.description
    if contribution.ui_hints:
        entry[UI_HINTS_KEY] = copy.deepcopy(contribution.ui_hints)
    entry[KIND_KEY] = contribution.kind.value
    entry["allOf"] = [fragment]
    return entry


def _index_by_id(contributions: Iterable[ExtensionContribution]) -> dict[str, ExtensionContribution]:
    by_id: dict[str, ExtensionContribution] = {}
    for contribution in contributions:
        if contribution.id in by_id:
            existing = by_id[contribution.id]
            raise CompositionError(
                contribution.id,
                details={"kinds": [existing.kind.value, contribution.kind.value]},
            )
        by_id[contribution.id] = contribution
    return by_id


def compose_schema(
    base: dict[str, Any],
    contributions: Iterable[ExtensionContribution],
) -> dict[str, Any]:
    """Return a new schema document; ``base`` is left untouched.

    Raises:
        CompositionError: If two contributions share an id
    """
    by_id = _index_by_id(contributions)

    schema = copy.deepcopy(base)
    schema.setdefault("type", "object")
    properties = schema.setdefault("properties", {})
    namespace = properties.setdefault(EXTENSIONS_KEY, {"type": "object"})
    namespace["properties"] = {ext_id: _entry(by_id[ext_id]) for ext_id in sorted(by_id)}
    return schema


def serialize_schema(schema: dict[str, Any]) -> bytes:
    """Stable UTF-8 encoding used for HTTP bodies and the CLI."""
    return json.dumps(schema, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
