"""
Default configuration settings.
These are the base settings that can be overridden by local.py
"""

import dotenv
import os
from pathlib import Path

dotenv.load_dotenv()

# Project root, used for the logs directory
PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", os.getcwd()))

# Provider Configuration
ENABLED_PROVIDERS = [
    "samsara",
]  # List of enabled fleet providers

# API Keys (never hard-code them here, use the environment or .env)
SAMSARA_API_KEY = os.getenv("SAMSARA_API_KEY")

# Logging Configuration
LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
        "simple": {"format": "%(levelname)s - %(message)s"},
    },
    "handlers": {
        "fleet_providers": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str((PROJECT_ROOT / "logs" / "fleet_providers.log").absolute()),
            "maxBytes": 1024 * 1024,  # 1MB
            "backupCount": 3,
            "formatter": "standard",
            "level": "DEBUG",
            "mode": "a",
        },
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
            "level": "INFO",
        },
    },
    "loggers": {
        "": {"handlers": ["console"], "level": "INFO"},  # Root logger
        "fleet_providers": {
            "handlers": ["fleet_providers", "console"],
            "level": "DEBUG",
            "propagate": False,
        },
        "samsara": {
            "handlers": ["fleet_providers", "console"],
            "level": "DEBUG",
            "propagate": False,
        },
    },
    "log_dir": PROJECT_ROOT / "logs",
}

# Timeout in seconds for outside API calls
REQUEST_TIMEOUT = 30.0

PROVIDER_CONFIG = {
    "samsara": {
        "API_URL": "https://api.samsara.com/v1/fleet/routes",
        "TIMEOUT": REQUEST_TIMEOUT,
    },
}
