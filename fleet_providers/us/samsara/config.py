# fleet_providers/us/samsara/config.py

import logging
from fleet_providers.config import register_provider_config

# Get logger
logger = logging.getLogger("fleet_providers.us.samsara")

# Register default configuration
DEFAULT_CONFIG = {
    "API_URL": "https://api.samsara.com/v1/fleet/routes",
    "API_KEY": None,  # Filled from SAMSARA_API_KEY, never set here
    "TIMEOUT": 30.0,  # seconds
}

logger.debug("Registering Samsara default configuration")
register_provider_config("samsara", DEFAULT_CONFIG)
logger.debug("Samsara default configuration registered")
