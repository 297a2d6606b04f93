"""
MCP server configuration.

Handles loading server settings from a YAML file (.glab-mcp.yaml by
default) with environment variable overrides.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

import yaml

DEFAULT_CONFIG_FILE = ".glab-mcp.yaml"

_ENV_PREFIX = "GLAB_MCP_"


@dataclass
class MCPConfig:
    """
    MCP server configuration loaded from .glab-mcp.yaml.

    Attributes:
        host: Server bind address (default: "127.0.0.1", SSE only)
        port: Server port for SSE transport (default: 8000)
        transport: Transport mode ("stdio" or "sse", default: "stdio")
        program: glab executable name or path (default: "glab")
        log_level: Logging level name (default: "WARNING")
    """

    host: str = "127.0.0.1"
    port: int = 8000
    transport: Literal["stdio", "sse"] = "stdio"
    program: str = "glab"
    log_level: str = "WARNING"

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "MCPConfig":
        """
        Load MCP configuration from a YAML file.

        Falls back to defaults if the file doesn't exist. Environment
        variables (GLAB_MCP_HOST, GLAB_MCP_PORT, GLAB_MCP_TRANSPORT,
        GLAB_MCP_PROGRAM, GLAB_MCP_LOG_LEVEL) override file values.

        Args:
            config_file: Path to config file (default: ./.glab-mcp.yaml)

        Returns:
            MCPConfig instance with loaded/default values

        Raises:
            ValueError: If config file has invalid format
        """
        if config_file is None:
            config_file = Path.cwd() / DEFAULT_CONFIG_FILE
        config_dict = {}

        if config_file.exists():
            try:
                with open(config_file) as f:
                    config_dict = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid {config_file.name}: {e}") from e

            if not isinstance(config_dict, dict):
                raise ValueError(
                    f"Invalid {config_file.name}: expected a mapping, "
                    f"got {type(config_dict).__name__}"
                )

        for key in ("host", "transport", "program", "log_level"):
            env_name = f"{_ENV_PREFIX}{key.upper()}"
            if env_name in os.environ:
                config_dict[key] = os.environ[env_name]

        if f"{_ENV_PREFIX}PORT" in os.environ:
            config_dict["port"] = os.environ[f"{_ENV_PREFIX}PORT"]

        if "port" in config_dict:
            try:
                config_dict["port"] = int(config_dict["port"])
            except (TypeError, ValueError):
                raise ValueError(
                    f"Invalid port: {config_dict['port']}. Must be an integer."
                )

        return cls(**{k: v for k, v in config_dict.items() if k in cls.__annotations__})
