"""Configuration management for folderproxy.

Loads settings from a YAML configuration file, environment variables and
explicit overrides (command-line flags), then validates the base directory
and freezes everything into a GatewayConfig for the request handlers.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/folderproxy.yaml")
DEFAULT_PORT = 4455


class ConfigError(Exception):
    """Raised when the configuration cannot be used to start the gateway."""


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for the folderproxy gateway.

    An empty token disables authentication entirely; every request is
    then accepted regardless of its ``token`` parameter.
    """

    model_config = {
        "env_prefix": "FOLDERPROXY_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    base_path: Path = Field(default=Path("."), description="Base directory for allowed paths")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    token: SecretStr = Field(default=SecretStr(""))
    confine_to_base: bool = Field(
        default=True,
        description="Reject names that climb above base_path via '..' segments",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class GatewayConfig(BaseModel):
    """Immutable configuration handed to the HTTP application.

    Built once at startup by :func:`build_gateway_config`; ``base_path``
    is always absolute and known to be an existing directory at that time.
    """

    model_config = ConfigDict(frozen=True)

    base_path: Path
    port: int = DEFAULT_PORT
    token: SecretStr = SecretStr("")
    confine_to_base: bool = True

    @property
    def auth_enabled(self) -> bool:
        return bool(self.token.get_secret_value())


def load_settings(config_path: Path | str | None = None, **overrides: Any) -> Settings:
    """Load settings from YAML + environment variables + overrides.

    Priority: overrides > YAML file > env vars > .env file > defaults.
    Overrides whose value is None are ignored, so unset command-line
    flags can be passed through unchanged.

    Raises:
        ConfigError: If the YAML file is malformed or its top level is
            not a mapping.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data: dict[str, Any] = {}
    if path.exists():
        try:
            with open(path) as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {path}: {e}") from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"{path} must contain a mapping, got {type(loaded).__name__}")
        yaml_data = loaded
        logger.info("Loaded configuration from %s", path)
    else:
        logger.debug("Config file %s not found, using defaults + env vars", path)

    yaml_data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**yaml_data)


def build_gateway_config(settings: Settings) -> GatewayConfig:
    """Resolve and validate the base directory.

    Raises:
        ConfigError: If the base path does not exist, cannot be
            inspected, or is not a directory.
    """
    # Path.absolute() keeps '..' segments; the guard compares lexically.
    base = Path(os.path.normpath(Path(settings.base_path).expanduser().absolute()))
    try:
        st = base.stat()
    except FileNotFoundError as e:
        raise ConfigError(f"base path does not exist: {base}") from e
    except OSError as e:
        raise ConfigError(f"checking base path {base}: {e}") from e
    if not stat.S_ISDIR(st.st_mode):
        raise ConfigError(f"base path is not a directory: {base}")

    logger.debug("Resolved base path to %s", base)
    return GatewayConfig(
        base_path=base,
        port=settings.port,
        token=settings.token,
        confine_to_base=settings.confine_to_base,
    )
