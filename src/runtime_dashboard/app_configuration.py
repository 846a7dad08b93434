"""Configuration management for the runtime dashboard."""

import os
import logging
import yaml

logger = logging.getLogger(__name__)

# Default configuration paths
CONFIG_FILE_PATH = "dashboard.yaml"

# Network Configuration (Defaults to localhost)
WEB_ADDRESS = "127.0.0.1"
WEB_PORT = 8081

# Suggested client polling interval in milliseconds
DEFAULT_REFRESH_INTERVAL = 3000

# Worker threads for responders with blocking work
DEFAULT_EXECUTOR_THREADS = 4

DEFAULT_LOG_LEVEL = "INFO"


def default_config() -> dict:
    """Return a fresh copy of the built-in configuration."""
    return {
        "web": {
            "address": WEB_ADDRESS,
            "port": WEB_PORT,
            "refresh-interval": DEFAULT_REFRESH_INTERVAL,
            "executor-threads": DEFAULT_EXECUTOR_THREADS,
        },
        "logging": {
            "level": DEFAULT_LOG_LEVEL,
            "file": None,
        },
    }


def get_config_path() -> str:
    """Get the configuration file path from environment or default."""
    return os.environ.get("RUNTIME_DASHBOARD_CONFIG_PATH", CONFIG_FILE_PATH)


def _apply_env_overrides(config: dict) -> dict:
    """Environment variables win over values from the config file."""
    web = config["web"]
    web["address"] = os.environ.get("RUNTIME_DASHBOARD_ADDR", web["address"])
    web["port"] = os.environ.get("RUNTIME_DASHBOARD_PORT", web["port"])
    web["refresh-interval"] = os.environ.get(
        "RUNTIME_DASHBOARD_REFRESH_INTERVAL", web["refresh-interval"]
    )
    config["logging"]["level"] = os.environ.get("LOG_LEVEL", config["logging"]["level"])
    if os.environ.get("RUNTIME_DASHBOARD_LOG_FILE"):
        config["logging"]["file"] = os.environ["RUNTIME_DASHBOARD_LOG_FILE"]
    return config


def load_config(config_path: str = None) -> dict:
    """Load configuration from YAML file.

    Sections present in the file are merged over the defaults, then
    environment overrides are applied.

    Args:
        config_path: Path to the YAML file, defaults to get_config_path()

    Returns:
        Dictionary containing configuration settings

    Raises:
        yaml.YAMLError: If the file exists but cannot be parsed
        ValueError: If the file or one of its sections is not a mapping
    """
    config_path = config_path or get_config_path()
    config = default_config()
    try:
        with open(config_path, 'r') as f:
            file_config = yaml.safe_load(f) or {}
        logger.info(f"Loaded config from {config_path}")
    except FileNotFoundError:
        logger.warning(f"Config file '{config_path}' not found. Using defaults.")
        file_config = {}
    except yaml.YAMLError as e:
        logger.error(f"Error parsing {config_path}: {e}")
        raise

    if not isinstance(file_config, dict):
        raise ValueError(f"Top level of {config_path} must be a mapping.")

    for section in ("web", "logging"):
        values = file_config.get(section) or {}
        if not isinstance(values, dict):
            raise ValueError(f"'{section}' section in {config_path} must be a mapping.")
        config[section].update(values)

    return _apply_env_overrides(config)


def _non_negative_int(value, name: str) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"'{name}' must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"'{name}' must be an integer, got {value!r}") from None
    if number < 0:
        raise ValueError(f"'{name}' must be non-negative, got {number}")
    return number


def get_refresh_interval(config: dict) -> int:
    """Get the validated refresh interval (milliseconds) from config."""
    return _non_negative_int(config["web"]["refresh-interval"], "web.refresh-interval")


def get_web_port(config: dict) -> int:
    """Get the validated listening port from config."""
    return _non_negative_int(config["web"]["port"], "web.port")


def get_executor_threads(config: dict) -> int:
    """Get the responder executor pool size, at least one thread."""
    return max(1, _non_negative_int(config["web"]["executor-threads"], "web.executor-threads"))
