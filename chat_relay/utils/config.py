"""
Configuration Utility Module

This module provides functions for loading and accessing application configuration.
"""

import os
import logging
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List

# Default configuration file path
CONFIG_FILE_PATH = os.getenv("CONFIG_FILE_PATH", "config.yaml")

DEFAULT_CHAT_SCOPES = [
    "https://www.googleapis.com/auth/chat.bot",
    "https://www.googleapis.com/auth/chat.messages",
    "https://www.googleapis.com/auth/chat.spaces",
]

DEFAULT_KEY_FILE = "./service-account-key.json"

# Cached configuration
_config_cache: Optional[Dict[str, Any]] = None


def load_yaml_config() -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Returns:
        Dict[str, Any]: Configuration dictionary from YAML file or empty dict if file not found.
    """
    config_path = Path(os.getenv("CONFIG_FILE_PATH", CONFIG_FILE_PATH))
    try:
        if config_path.exists():
            with open(config_path, "r") as f:
                return yaml.safe_load(f) or {}
        logging.debug(f"Configuration file not found: {config_path}")
        return {}
    except (OSError, yaml.YAMLError) as e:
        logging.error(f"Error loading configuration file: {e}")
        return {}


def safe_split(value: Any, delimiter: str = ",") -> List[str]:
    """Split a comma separated string into a list, passing lists through."""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    return [part.strip() for part in str(value).split(delimiter) if part.strip()]


def get_config() -> Dict[str, Any]:
    """
    Get the application configuration from YAML file and environment variables.
    Environment variables take precedence over the YAML file.

    Configuration is cached after first load.

    Returns:
        Dict[str, Any]: A dictionary containing the application configuration.
    """
    global _config_cache
    if _config_cache is not None:
        return _config_cache

    yaml_config = load_yaml_config()

    server_config = yaml_config.get("server", {}) or {}
    mcp_config = yaml_config.get("mcp", {}) or {}
    chat_config = yaml_config.get("chat", {}) or {}
    credentials_config = yaml_config.get("credentials", {}) or {}

    config = {
        # Server configuration
        "host": os.getenv("HOST", server_config.get("host", "0.0.0.0")),
        "port": int(os.getenv("PORT") or server_config.get("port", 3000)),
        "log_level": os.getenv("LOG_LEVEL", server_config.get("log_level", "INFO")),
        "cors_origins": safe_split(server_config.get("cors_origins", "*")),

        # MCP configuration
        "mcp_server_name": os.getenv("MCP_SERVER_NAME", mcp_config.get("name", "Chat Relay")),

        # Chat API configuration
        "chat_api_scopes": safe_split(chat_config.get("scopes")) or list(DEFAULT_CHAT_SCOPES),
        "spaces_page_size": int(chat_config.get("page_size", 100)),

        # Service account key: inline JSON blob wins over the key file
        "service_account_key_json": os.getenv("SERVICE_ACCOUNT_KEY_JSON", ""),
        "service_account_key_file": (
            os.getenv("SERVICE_ACCOUNT_KEY_FILE")
            or credentials_config.get("key_file")
            or DEFAULT_KEY_FILE
        ),
    }

    _config_cache = config
    return config


def get_config_value(key: str, default: Optional[Any] = None) -> Any:
    """
    Get a specific configuration value.

    Args:
        key (str): The configuration key to retrieve.
        default (Optional[Any], optional): The default value if the key is not found. Defaults to None.

    Returns:
        Any: The configuration value.
    """
    config = get_config()
    return config.get(key, default)


def clear_config_cache() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config_cache
    _config_cache = None
