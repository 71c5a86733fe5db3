"""Static base JSON Schema for the configuration file, generated from ``Settings``."""

from typing import Any

from clawgate.config.settings import Settings, _project_version

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
EXTENSIONS_KEY = "extensions"


def build_base_schema() -> dict[str, Any]:
    """Return the base schema: core configuration keys only, no extension entries.

    Every call returns a fresh dict, so callers may mutate the result.
    """
    schema = Settings.model_json_schema()
    schema["title"] = "clawgate configuration"
    base: dict[str, Any] = {
        "$schema": JSON_SCHEMA_DIALECT,
        "x-clawgate-version": _project_version(),
    }
    base.update(schema)
    return base
