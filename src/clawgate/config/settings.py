"""
Pydantic Settings Configuration
=================================

Type-safe configuration management using Pydantic.
The same models double as the authoritative base of the served config
JSON Schema (see ``clawgate.config.schema``).
"""

import os
from importlib import metadata
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from clawgate.core.exceptions import CollaboratorError

DEFAULT_CONFIG_PATH = Path("~/.clawgate/clawgate.yaml")
CONFIG_PATH_ENV = "CLAWGATE_CONFIG_PATH"


def _project_version() -> str:
    """Resolve the project version from package metadata."""
    try:
        return metadata.version("clawgate")
    except metadata.PackageNotFoundError:
        return "0.0.0-dev"


class GatewayConfig(BaseModel):
    """Remote gateway connection defaults for tool calls"""
    url: str = Field("http://127.0.0.1:18789", description="Gateway base URL")
    token: Optional[str] = Field(None, description="Bearer token sent to the gateway")
    timeout_ms: int = Field(60_000, gt=0, description="Default gateway call timeout in milliseconds")

    model_config = ConfigDict(extra='allow')


class AgentConfig(BaseModel):
    """A single agent definition"""
    id: str = Field(..., min_length=1, description="Agent id")
    name: Optional[str] = Field(None, description="Human-friendly agent name")
    workspace: Optional[Path] = Field(None, description="Agent workspace directory")
    default: bool = Field(False, description="Use this agent when none is specified")

    model_config = ConfigDict(extra='allow')


class AgentsConfig(BaseModel):
    """Agent list and shared agent defaults"""
    default_workspace: Optional[Path] = Field(None, description="Workspace directory of the default agent")
    list: List[AgentConfig] = Field(default_factory=list, description="Configured agents")

    model_config = ConfigDict(extra='allow')


class PluginsConfig(BaseModel):
    """Plugin discovery configuration"""
    enabled: bool = Field(True, description="Load plugins at all")
    allow: List[str] = Field(default_factory=list, description="Plugin ids to load (empty = all)")
    deny: List[str] = Field(default_factory=list, description="Plugin ids never to load")
    load_paths: List[Path] = Field(default_factory=list, description="Extra directories holding plugin manifests")

    model_config = ConfigDict(extra='allow')


class WebConfig(BaseModel):
    """HTTP server configuration"""
    host: str = Field("127.0.0.1", description="Host to bind to")
    port: int = Field(18789, ge=1, le=65535, description="Port to bind to")

    model_config = ConfigDict(extra='allow')


class LoggingConfig(BaseModel):
    """Logging configuration"""
    level: str = Field("INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    format: str = Field("json", description="Log format (json, text)")

    @field_validator('level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level"""
        valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(sorted(valid_levels))}")
        return v_upper

    @field_validator('format')
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in {'json', 'text'}:
            raise ValueError("Log format must be 'json' or 'text'")
        return v

    model_config = ConfigDict(extra='allow')


class Settings(BaseSettings):
    """
    Main application settings with type validation.

    Configuration is loaded from:
    1. YAML config file (if provided)
    2. Environment variables with CLAWGATE_ prefix (override)
    3. Default values (fallback)

    Environment variable mapping uses double-underscore nesting:
      CLAWGATE_GATEWAY__URL
      CLAWGATE_GATEWAY__TOKEN
      CLAWGATE_LOGGING__LEVEL
    """

    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    agents: AgentsConfig = Field(default_factory=AgentsConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    extensions: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict,
        description="Per-extension configuration keyed by plugin or channel id",
    )

    model_config = ConfigDict(
        env_prefix='CLAWGATE_',
        env_nested_delimiter='__',
        extra='allow',
        validate_assignment=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Environment first, so CLAWGATE_ variables override YAML values passed to the constructor."""
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "Settings":
        """
        Load settings from a YAML file.

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If configuration is invalid
        """
        config_path = Path(config_path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}

        if not isinstance(config_data, dict):
            raise ValueError(f"Config file must contain a mapping: {config_path}")

        return cls(**config_data)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables only."""
        return cls()


def load_settings(config_path: Optional[str | Path] = None) -> Settings:
    """
    Load and validate application settings.

    An explicit path (argument or ``CLAWGATE_CONFIG_PATH``) must exist. Without
    one, ``~/.clawgate/clawgate.yaml`` is used when present, otherwise the
    environment alone.

    Raises:
        CollaboratorError: If the file is missing or its content is invalid
    """
    explicit = config_path or os.getenv(CONFIG_PATH_ENV)
    try:
        if explicit:
            return Settings.from_yaml(explicit)
        if DEFAULT_CONFIG_PATH.expanduser().exists():
            return Settings.from_yaml(DEFAULT_CONFIG_PATH)
        return Settings.from_env()
    except (OSError, yaml.YAMLError, ValueError) as e:
        raise CollaboratorError(f"Failed to load configuration: {e}") from e


__all__ = [
    'AgentConfig',
    'AgentsConfig',
    'GatewayConfig',
    'LoggingConfig',
    'PluginsConfig',
    'Settings',
    'WebConfig',
    'load_settings',
]
