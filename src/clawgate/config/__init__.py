"""Configuration: pydantic settings and the base config JSON Schema."""

from .schema import build_base_schema
from .settings import Settings, load_settings

__all__ = ['Settings', 'build_base_schema', 'load_settings']
