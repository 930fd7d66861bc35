"""Samsara fleet provider"""

# First import the config to ensure defaults are registered
from . import config

from dataclasses import dataclass
from typing import Dict, Any, Callable, Awaitable
import logging

from fleet_providers.settings import get_config

from .api import RouteSubmitter, extract_route_id, submit_route
from .models import RoutePayload, RouteStop, Stop, build_route_body, build_route_payload

# Get logger
logger = logging.getLogger('samsara')


@dataclass
class SamsaraProvider:
    name: str = "Samsara"
    endpoints: Dict[str, Callable[..., Awaitable[Any]]] = None

    def __post_init__(self):
        self.endpoints = {
            'routes': submit_route,
        }
        logger.info(f"Samsara provider initialized with endpoints: {list(self.endpoints.keys())}")


# Only create and register provider if it's enabled
if 'samsara' in get_config('ENABLED_PROVIDERS', []):
    provider = SamsaraProvider()
    from fleet_providers import register_provider
    register_provider('samsara', provider.endpoints)

__all__ = [
    "RouteSubmitter",
    "RoutePayload",
    "RouteStop",
    "SamsaraProvider",
    "Stop",
    "build_route_body",
    "build_route_payload",
    "extract_route_id",
    "submit_route",
]
