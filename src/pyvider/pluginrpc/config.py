"""Configuration management for Pyvider Plugin RPC.

This module provides the configuration system for the plugin RPC framework,
allowing for both environment-based and programmatic configuration. It includes:

1. A configuration schema with default values and validation
2. Environment variable reading with appropriate type conversion
3. A lazily created singleton configuration object for global access
4. A simplified configuration helper for common settings

Usage:
    # Get a configuration value
    from pyvider.pluginrpc.config import pluginrpc_config
    version = pluginrpc_config().protocol_version()

    # Use the simplified configuration helper
    from pyvider.pluginrpc import configure
    configure(flag_prefix="buf", inherit_stderr=False)
"""

import json
import os
from pathlib import Path
from typing import Any, cast

import yaml

from pyvider.telemetry import logger

from pyvider.pluginrpc.exception import ConfigError

# The only protocol version currently spoken over `--plugin-protocol`.
DEFAULT_PROTOCOL_VERSION = 1

# Configuration Schema: Defines environment variables, requirements, defaults, and descriptions
CONFIG_SCHEMA: dict[str, dict[str, Any]] = {
    "PLUGIN_PROTOCOL_VERSION": {
        "required": True,
        "default": DEFAULT_PROTOCOL_VERSION,
        "description": "The plugin protocol version reported by servers and required by clients.",
        "type": "int",
    },
    "PLUGIN_FLAG_PREFIX": {
        "required": False,
        "default": None,
        "description": "Default prefix inserted into the --plugin-protocol and --plugin-spec flags.",
        "type": "str",
    },
    "PLUGIN_EXEC_INHERIT_STDERR": {
        "required": True,
        "default": "true",
        "description": "Forward the stderr of plugin processes to the caller's stderr (true/false).",
        "type": "bool",
    },
    "PLUGIN_EXEC_KILL_GRACE": {
        "required": False,
        "default": 1.0,
        "description": "Seconds to wait after terminating a cancelled plugin process before killing it.",
        "type": "float",
    },
}


def fetch_env_variable(key: str, meta: dict[str, Any]) -> Any:
    """
    Fetches and processes an environment variable based on schema metadata.

    This function:
    1. Reads the variable from environment or uses default
    2. Handles file-based values (file://) by reading from the file
    3. Converts to the correct type based on schema information

    Args:
        key: The configuration key to fetch
        meta: Metadata about the configuration value

    Returns:
        The processed configuration value

    Raises:
        ConfigError: If file reading fails or type conversion fails
    """
    value = os.getenv(key, meta["default"])

    if value is None:
        return None

    if isinstance(value, str) and value.startswith("file://"):
        file_path = value[7:]
        try:
            logger.debug(f"⚙️📂🚀 Reading file for {key}: {file_path}")
            with open(file_path, "r", encoding="utf-8") as f:
                value = f.read().strip()
            logger.debug(f"⚙️📂✅ Successfully read file for {key}")
        except OSError as e:
            logger.error(f"⚙️📂❌ Failed to read file for {key}: {file_path}", extra={"error": str(e)})
            raise ConfigError(f"Failed to read file for {key}: {file_path}") from e

    try:
        match meta["type"]:
            case "str":
                return value

            case "int":
                if isinstance(value, int):
                    return value
                return int(value)

            case "float":
                if isinstance(value, float):
                    return value
                return float(value)

            case "bool":
                if isinstance(value, bool):
                    return value
                if isinstance(value, str):
                    return value.lower() in ("true", "yes", "1", "on")
                return bool(value)

            case _:
                logger.warning(f"⚙️⚠️ Unknown type {meta['type']} for {key}, returning raw value")
                return value

    except (ValueError, TypeError) as e:
        logger.error(f"⚙️❌ Type conversion failed for {key}", extra={"error": str(e)})
        raise ConfigError(f"Invalid format for {key}. Expected {meta['type']}, got: {value}") from e


def validate_config_value(key: str, value: Any, meta: dict[str, Any]) -> bool:
    """
    Validates a configuration value against schema requirements.

    Raises:
        ConfigError: For validation failures
    """
    if meta.get("required", False) and value is None:
        logger.error(f"⚙️❌ Missing required configuration: {key}")
        raise ConfigError(f"Missing required configuration: {key}. {meta['description']}")

    if value is None:
        return True

    if "valid_values" in meta and value not in meta["valid_values"]:
        logger.error(
            f"⚙️❌ Invalid value for {key}: {value}",
            extra={"valid_values": meta["valid_values"]},
        )
        raise ConfigError(
            f"Invalid value for {key}: {value}. Valid values: {meta['valid_values']}"
        )

    return True


def get_config() -> dict[str, Any]:
    """
    Retrieves all configuration values from environment, applying defaults and validation.

    Returns:
        Dictionary of configuration key-value pairs

    Raises:
        ConfigError: For invalid configuration
    """
    config = {}
    logger.debug("⚙️🔄 Building configuration from environment and defaults")

    for key, meta in CONFIG_SCHEMA.items():
        value = fetch_env_variable(key, meta)
        validate_config_value(key, value, meta)
        config[key] = value

    logger.debug(f"⚙️✅ Configuration complete with {len(config)} values")
    return config


class PluginRPCConfig:
    """
    Configuration manager for Pyvider Plugin RPC.

    Provides a singleton for accessing configuration values, with methods for
    getting and setting values. Configuration is loaded from environment
    variables and defaults on initialization.

    Attributes:
        config: Dictionary of configuration values
    """

    _instance: "PluginRPCConfig | None" = None

    def __init__(self) -> None:
        self.config: dict[str, Any] = get_config()
        logger.debug("⚙️✅ PluginRPCConfig initialized with environment variables")

    @classmethod
    def instance(cls) -> "PluginRPCConfig":
        """Get or create the singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
            logger.debug("⚙️🔄 Created new PluginRPCConfig singleton instance")
        return cls._instance

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value dynamically.

        Raises:
            ConfigError: If key is not in CONFIG_SCHEMA
        """
        if key not in CONFIG_SCHEMA:
            logger.warning(f"⚙️⚠️ Setting unknown config key: {key}")
            raise ConfigError(f"Unknown configuration key: {key}")

        meta = CONFIG_SCHEMA[key]
        validate_config_value(key, value, meta)
        logger.debug(f"⚙️📝 Updating config {key} -> {value}")
        self.config[key] = value

    def protocol_version(self) -> int:
        return int(cast(int, self.get("PLUGIN_PROTOCOL_VERSION")))

    def flag_prefix(self) -> str | None:
        """Returns the configured default flag prefix, or None when unset or empty."""
        return cast(str | None, self.get("PLUGIN_FLAG_PREFIX")) or None

    def inherit_stderr(self) -> bool:
        value = self.get("PLUGIN_EXEC_INHERIT_STDERR")
        if isinstance(value, str):
            return value.lower() in ("true", "yes", "1", "on")
        return bool(value)

    def kill_grace(self) -> float:
        return float(cast(float, self.get("PLUGIN_EXEC_KILL_GRACE")))


def pluginrpc_config() -> PluginRPCConfig:
    """Returns the global configuration singleton, creating it on first use."""
    return PluginRPCConfig.instance()


def configure(
    protocol_version: int | None = None,
    flag_prefix: str | None = None,
    inherit_stderr: bool | None = None,
    kill_grace: float | None = None,
) -> None:
    """
    Configure Pyvider Plugin RPC with simplified options.

    Args:
        protocol_version: The protocol version servers report and clients require
        flag_prefix: Default prefix for the protocol introspection flags
        inherit_stderr: Forward plugin stderr to the caller's stderr
        kill_grace: Seconds between terminate and kill for cancelled plugins

    Raises:
        ConfigError: For invalid configuration values
    """
    config = pluginrpc_config()
    logger.debug("⚙️🔄 Running simplified configuration")

    if protocol_version is not None:
        config.set("PLUGIN_PROTOCOL_VERSION", protocol_version)
    if flag_prefix is not None:
        config.set("PLUGIN_FLAG_PREFIX", flag_prefix)
    if inherit_stderr is not None:
        config.set("PLUGIN_EXEC_INHERIT_STDERR", "true" if inherit_stderr else "false")
    if kill_grace is not None:
        config.set("PLUGIN_EXEC_KILL_GRACE", kill_grace)

    logger.debug("⚙️✅ Configuration completed successfully")


def load_config_from_file(config_file: str | Path) -> None:
    """
    Load configuration from a file into the environment and rebuild the singleton.

    The file can be a .env file with KEY=VALUE pairs, or a JSON or YAML mapping.

    Raises:
        ConfigError: If the file is missing, has an unsupported format, or fails to load
    """
    path = Path(config_file)

    if not path.exists():
        logger.error(f"⚙️❌ Configuration file not found: {path}")
        raise ConfigError(f"Configuration file not found: {path}")

    logger.debug(f"⚙️📂🚀 Loading configuration from {path}")

    match path.suffix.lower():
        case ".env":
            _load_dotenv_file(path)
        case ".json":
            _load_json_file(path)
        case ".yaml" | ".yml":
            _load_yaml_file(path)
        case _:
            logger.error(f"⚙️❌ Unsupported file format: {path.suffix}")
            raise ConfigError(
                f"Unsupported file format: {path.suffix}. Supported formats: .env, .json, .yaml, .yml"
            )

    pluginrpc_config().config = get_config()
    logger.debug(f"⚙️📂✅ Successfully loaded configuration from {path}")


def _load_dotenv_file(path: Path) -> None:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"⚙️📂❌ Error loading .env file: {path}", extra={"error": str(e)})
        raise ConfigError(f"Error loading .env file: {path}") from e

    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()

        # Remove quotes if present
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]

        os.environ[key] = value
        logger.debug(f"⚙️📂✅ Set environment variable: {key}")


def _load_json_file(path: Path) -> None:
    try:
        with open(path, "r", encoding="utf-8") as f:
            config_data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"⚙️📂❌ Error loading JSON file: {path}", extra={"error": str(e)})
        raise ConfigError(f"Error loading JSON file: {path}") from e

    _set_environment(config_data, path, "JSON")


def _load_yaml_file(path: Path) -> None:
    try:
        with open(path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"⚙️📂❌ Error loading YAML file: {path}", extra={"error": str(e)})
        raise ConfigError(f"Error loading YAML file: {path}") from e

    _set_environment(config_data, path, "YAML")


def _set_environment(config_data: Any, path: Path, source: str) -> None:
    if not isinstance(config_data, dict):
        raise ConfigError(f"{source} configuration must be a mapping: {path}")

    for key, value in config_data.items():
        if isinstance(value, bool):
            os.environ[key] = "true" if value else "false"
        else:
            os.environ[key] = str(value)
        logger.debug(f"⚙️📂✅ Set environment variable from {source}: {key}")

# 🐍🏗️🔌
