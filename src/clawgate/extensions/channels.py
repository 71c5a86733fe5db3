"""Channel adapter listing via the ``clawgate.channels`` entry-point group."""

import logging
from collections.abc import Mapping
from typing import Any

from clawgate.extensions.descriptors import ChannelDescriptor
from clawgate.extensions.discovery import load_entry_point_objects

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "clawgate.channels"


def _as_channel(obj: Any, source: str) -> ChannelDescriptor:
    if isinstance(obj, ChannelDescriptor):
        return obj
    if isinstance(obj, Mapping):
        return ChannelDescriptor.from_mapping(obj)
    raise TypeError(f"expected ChannelDescriptor or mapping, got {type(obj).__name__}")


def _log_failure(source: str, exc: Exception) -> None:
    logger.warning("Skipping channel from %s: %s: %s", source, type(exc).__name__, exc)


def list_channel_plugins() -> list[ChannelDescriptor]:
    """All installed channel adapters, in entry-point order."""
    return list(load_entry_point_objects(ENTRY_POINT_GROUP, _as_channel, _log_failure))
