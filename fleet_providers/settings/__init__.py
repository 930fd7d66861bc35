"""
Configuration management for the fleet providers package.
Handles loading and accessing configuration values from local.py (if present)
with fallback to default.py.
"""

import importlib.util
import logging
from logging.config import dictConfig
from typing import Any, Optional


def _import_config(module_name: str) -> Optional[Any]:
    """
    Dynamically import a settings module.

    Args:
        module_name: Name of the module to import (e.g., 'local' or 'default')

    Returns:
        Module object if successful, None otherwise
    """
    try:
        spec = importlib.util.find_spec(f"{__name__}.{module_name}")
        if spec is None:
            return None
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)  # type: ignore
        return module
    except Exception as e:
        print(
            f"Could not import {__name__}.{module_name}: {str(e)}"
        )  # Use print since logging is not set up yet
        return None


local_config = _import_config("local")
default_config = _import_config("default")

# Initialize logging configuration once
logging_config = None
if hasattr(local_config, "LOGGING_CONFIG"):
    logging_config = getattr(local_config, "LOGGING_CONFIG")
elif hasattr(default_config, "LOGGING_CONFIG"):
    logging_config = getattr(default_config, "LOGGING_CONFIG")

if logging_config:
    if "log_dir" in logging_config:
        logging_config["log_dir"].mkdir(parents=True, exist_ok=True)
    dictConfig(logging_config)

logger = logging.getLogger(__name__)


def get_config(key: str, default_value: Any = None) -> Any:
    """
    Get a configuration value, checking local.py first, then default.py.

    Args:
        key: The configuration key to look up
        default_value: Value to return if key is not found in either config

    Returns:
        The configuration value, or default_value if not found

    Example:
        >>> providers = get_config('ENABLED_PROVIDERS', [])
    """
    if local_config and hasattr(local_config, key):
        return getattr(local_config, key)

    if default_config and hasattr(default_config, key):
        return getattr(default_config, key)

    return default_value


def get_required_config(key: str) -> Any:
    """
    Get a required configuration value. Raises an error if not found.

    Raises:
        ValueError: If the configuration key is not found

    Example:
        >>> api_key = get_required_config('SAMSARA_API_KEY')
    """
    value = get_config(key)
    if value is None:
        raise ValueError(
            f"Required configuration key '{key}' not found in either local.py or default.py"
        )
    return value


def list_config_keys() -> set:
    """Get a set of all available configuration keys."""
    keys = set()

    if default_config:
        keys.update(k for k in dir(default_config) if not k.startswith("_") and k.isupper())

    if local_config:
        keys.update(k for k in dir(local_config) if not k.startswith("_") and k.isupper())

    return keys


__all__ = ["get_config", "get_required_config", "list_config_keys"]
