"""
Plugin Loader
=============

Builds a ``PluginRegistry`` for one configuration + workspace pair.

Sources, in order:
1. Python entry points in the ``clawgate.plugins`` group
2. ``clawgate.plugin.json`` manifests one level under
   ``<workspace>/.clawgate/extensions/``
3. The same layout under each ``plugins.load_paths`` directory

Broken plugins are reported and recorded as diagnostics; they never abort
the pass. Duplicate ids are kept so the schema composer can reject them.
"""

import json
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from clawgate.config.settings import Settings
from clawgate.extensions.descriptors import PluginDescriptor, PluginDiagnostic, PluginRegistry
from clawgate.extensions.discovery import ExtensionLogger, load_entry_point_objects

ENTRY_POINT_GROUP = "clawgate.plugins"
MANIFEST_NAME = "clawgate.plugin.json"
WORKSPACE_EXTENSIONS_DIR = Path(".clawgate") / "extensions"


def _as_plugin(obj: Any, source: str) -> PluginDescriptor:
    if isinstance(obj, PluginDescriptor):
        return obj
    if isinstance(obj, Mapping):
        return PluginDescriptor.from_mapping(obj, source=source)
    raise TypeError(f"expected PluginDescriptor or mapping, got {type(obj).__name__}")


def _manifest_paths(root: Path) -> Iterator[Path]:
    if not root.is_dir():
        return
    for child in sorted(root.iterdir()):
        manifest = child / MANIFEST_NAME
        if manifest.is_file():
            yield manifest


def _read_manifest(path: Path) -> PluginDescriptor:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("manifest must be a JSON object")
    return PluginDescriptor.from_mapping(data, source=str(path))


class PluginLoader:
    """One loading pass; create a new instance per call."""

    def __init__(self, settings: Settings, workspace_dir: Path, logger: ExtensionLogger) -> None:
        self.settings = settings
        self.workspace_dir = workspace_dir
        self.logger = logger
        self.registry = PluginRegistry()

    def load(self) -> PluginRegistry:
        config = self.settings.plugins
        if not config.enabled:
            self.logger.debug("Plugins disabled; skipping discovery")
            return self.registry

        candidates = list(load_entry_point_objects(ENTRY_POINT_GROUP, _as_plugin, self._record_failure))
        for root in self._manifest_roots():
            for manifest in _manifest_paths(root):
                try:
                    candidates.append(_read_manifest(manifest))
                except (OSError, ValueError) as e:
                    self._record_failure(str(manifest), e)

        for plugin in candidates:
            if self._is_allowed(plugin.id):
                self.registry.plugins.append(plugin)
                self.logger.debug(f"Loaded plugin {plugin.id}", source=plugin.source)
            else:
                self.logger.info(f"Plugin {plugin.id} disabled by allow/deny list", source=plugin.source)

        self.logger.info(
            f"Plugin registry: {len(self.registry.plugins)} loaded, {len(self.registry.diagnostics)} failed"
        )
        return self.registry

    def _manifest_roots(self) -> list[Path]:
        roots = [self.workspace_dir / WORKSPACE_EXTENSIONS_DIR]
        roots.extend(Path(p).expanduser() for p in self.settings.plugins.load_paths)
        return roots

    def _is_allowed(self, plugin_id: str) -> bool:
        config = self.settings.plugins
        if plugin_id in config.deny:
            return False
        return not config.allow or plugin_id in config.allow

    def _record_failure(self, source: str, exc: Exception) -> None:
        msg = f"{type(exc).__name__} loading plugin from {source}: {exc}"
        self.logger.error(msg)
        self.registry.diagnostics.append(PluginDiagnostic(source=source, message=msg))


def load_plugins(settings: Settings, workspace_dir: Path, logger: ExtensionLogger) -> PluginRegistry:
    return PluginLoader(settings, workspace_dir, logger).load()
