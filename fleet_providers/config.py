# fleet_providers/config.py

from typing import Dict, Any
from fleet_providers.settings import get_config
import logging
from copy import deepcopy
from functools import lru_cache

# Get logger
logger = logging.getLogger('fleet_providers.config')

# Registry for provider default configurations
PROVIDER_DEFAULTS: Dict[str, Dict[str, Any]] = {}

# Keys whose values must never reach the logs
SECRET_MARKERS = ('KEY', 'TOKEN', 'SECRET', 'PASSWORD')


def redact(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of a provider config that is safe to log."""
    redacted = {}
    for key, value in config.items():
        if isinstance(value, dict):
            redacted[key] = redact(value)
        elif value is not None and any(marker in key.upper() for marker in SECRET_MARKERS):
            redacted[key] = '***'
        else:
            redacted[key] = value
    return redacted


def deep_update(base_dict: Dict, update_dict: Dict) -> Dict:
    """Recursively update a dictionary, preserving nested structures.

    When both uppercase and lowercase versions of a key exist:
    1. If updating with uppercase, only update uppercase
    2. If updating with lowercase, update both lowercase and uppercase

    Lists and other non-dict values are always replaced entirely.
    """
    result = deepcopy(base_dict)

    for key, value in update_dict.items():
        if isinstance(value, dict) and key in result and isinstance(result[key], dict):
            result[key] = deep_update(result[key], value)
        else:
            result[key] = deepcopy(value)

        if not key.isupper() and key.upper() in result:
            upper_key = key.upper()
            if isinstance(value, dict) and isinstance(result[upper_key], dict):
                result[upper_key] = deep_update(result[upper_key], value)
            else:
                result[upper_key] = deepcopy(value)

    return result


def register_provider_config(provider_name: str, default_config: Dict[str, Any]) -> None:
    """Register a provider's default configuration"""
    PROVIDER_DEFAULTS[provider_name] = default_config
    get_provider_config.cache_clear()
    logger.debug(f"Registered default config for {provider_name}")


@lru_cache(maxsize=None)
def get_provider_config(provider_name: str) -> Dict[str, Any]:
    """Get merged configuration for a provider (following precedence order from least to most important:
    1. Provider defaults (least important)
    2. <PROVIDER>_<KEY> settings, e.g. SAMSARA_API_KEY
    3. PROVIDER_CONFIG[provider_name] (most important)
    )

    Settings are looked up in local.py first, then default.py.
    """
    config = deepcopy(PROVIDER_DEFAULTS.get(provider_name, {}))
    logger.debug(f"Starting with provider defaults for {provider_name}: {redact(config)}")

    possible_keys = set(config.keys())
    possible_keys.update(get_config('PROVIDER_KEYS', {}).get(provider_name, []))

    provider_upper = provider_name.upper()

    # First, check for keys with provider prefix
    for key in possible_keys:
        settings_key = f"{provider_upper}_{key}" if not key.startswith(provider_upper) else key
        value = get_config(settings_key)
        if value is not None:
            if key in config and isinstance(config[key], dict) and isinstance(value, dict):
                config[key] = deep_update(config[key], deepcopy(value))
            else:
                config[key] = deepcopy(value)

    # Then, check PROVIDER_CONFIG
    user_config = deepcopy(get_config('PROVIDER_CONFIG', {}).get(provider_name, {}))
    if user_config:
        config = deep_update(config, user_config)
    logger.debug(f"Final merged config for {provider_name}: {redact(config)}")

    return config
