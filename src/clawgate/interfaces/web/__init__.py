"""Web interface: handler chain, config schema endpoint, FastAPI app."""

from .chain import HandlerChain, HandlerOutcome, HandlerStatus
from .schema_http import SCHEMA_PATH, ConfigSchemaHandler, SchemaSources, build_config_schema
from .server import create_app

__all__ = [
    'SCHEMA_PATH',
    'ConfigSchemaHandler',
    'HandlerChain',
    'HandlerOutcome',
    'HandlerStatus',
    'SchemaSources',
    'build_config_schema',
    'create_app',
]
