"""Configuration management for folderproxy.

Loads and validates YAML-based configuration with Pydantic models and
turns it into the immutable GatewayConfig handed to the HTTP server.
"""

from folderproxy.config.settings import (
    ConfigError,
    GatewayConfig,
    Settings,
    build_gateway_config,
    load_settings,
)

__all__ = [
    "ConfigError",
    "GatewayConfig",
    "Settings",
    "build_gateway_config",
    "load_settings",
]
