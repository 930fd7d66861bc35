from typing import Dict, Any, Callable, Optional, Union
from dataclasses import dataclass
import os
import importlib
import logging
from pathlib import Path

# Settings must be imported first so logging is configured
from fleet_providers import settings

# Get logger
logger = logging.getLogger(__name__)


@dataclass
class FleetProvider:
    name: str
    endpoints: Dict[str, Callable]


# Dictionary to store all registered providers
PROVIDERS: Dict[str, FleetProvider] = {}


def register_provider(name: str, provider: Union[Dict[str, Callable], FleetProvider]) -> None:
    """Register a fleet provider and its endpoints"""
    logger.debug(f"Registering provider: {name}")

    if isinstance(provider, FleetProvider):
        PROVIDERS[name] = provider
    else:
        PROVIDERS[name] = FleetProvider(name=name, endpoints=provider)

    logger.debug(f"Provider {name} registered with endpoints: {list(PROVIDERS[name].endpoints.keys())}")


def get_provider(name: str) -> Optional[FleetProvider]:
    """Look up a registered provider by name"""
    return PROVIDERS.get(name)


async def post_route(route_name: Any, driver_id: Any, route_notes: Any, stops: Any, provider: str = 'samsara') -> Any:
    """Create a route with a registered provider and return the id it assigned

    Raises:
        ValueError: If the provider is not enabled or cannot create routes
    """
    registered = get_provider(provider)
    if registered is None or 'routes' not in registered.endpoints:
        raise ValueError(f"No enabled fleet provider named '{provider}' can create routes")
    return await registered.endpoints['routes'](route_name, driver_id, route_notes, stops)


def import_providers():
    """Dynamically import all provider packages"""
    logger.debug("Starting provider discovery")
    providers_dir = Path(__file__).parent

    for root, dirs, files in os.walk(providers_dir):
        module_parts = list(Path(root).relative_to(providers_dir.parent).parts)

        # Skip __pycache__ directories
        if '__pycache__' in module_parts:
            continue

        if '__init__.py' in files and Path(root) != providers_dir:
            module_name = '.'.join(module_parts)
            try:
                logger.debug(f"Attempting to import module: {module_name}")
                importlib.import_module(module_name)
            except Exception as e:
                logger.error(f"Error importing module {module_name}: {e}", exc_info=True)


# Import all providers when this module is imported
import_providers()

__all__ = [
    "FleetProvider",
    "PROVIDERS",
    "get_provider",
    "post_route",
    "import_providers",
    "register_provider",
]
