import logging
import math
from typing import Any, Dict, Optional, Union

import httpx

from fleet_providers.config import get_provider_config
from fleet_providers.config_schema import validate_provider_config
from fleet_providers.errors import (
    NetworkError,
    RemoteServiceError,
    ResponseFormatError,
    RouteSubmissionError,
    ValidationError,
)
from .models import build_route_body

# Get logger
logger = logging.getLogger('samsara')

RouteID = Union[str, int, float]


class RouteSubmitter:
    """Validates a route and posts it to the Samsara routes endpoint.

    Anything not passed in is read from the merged ``samsara`` provider
    config. ``client`` may be any ``httpx.AsyncClient``; without one a fresh
    client is opened for each call, so submitters hold no state between calls.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        overrides = {'API_KEY': api_key, 'API_URL': api_url, 'TIMEOUT': timeout}
        config = dict(get_provider_config('samsara'))
        config.update({key: value for key, value in overrides.items() if value is not None})
        settings = validate_provider_config(config)

        if not settings.api_key:
            raise ValueError("Samsara API key not provided. Set SAMSARA_API_KEY in the environment or .env")

        self.api_url = settings.api_url
        self.timeout = settings.timeout
        self.client = client
        self._api_key = settings.api_key

    def __repr__(self) -> str:
        return f"RouteSubmitter(api_url={self.api_url!r}, timeout={self.timeout!r})"

    def _headers(self) -> Dict[str, str]:
        return {
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            'Authorization': f'Bearer {self._api_key}',
        }

    async def submit(self, route_name: Any, driver_id: Any, route_notes: Any, stops: Any) -> RouteID:
        """Post a new route and return the id Samsara assigned to it.

        Args:
            route_name: Non-empty route name
            driver_id: Non-empty Samsara driver id
            route_notes: Free text, may be empty
            stops: Ordered list of stops (mappings or Stop models)

        Raises:
            ValidationError: Input rejected, nothing was sent
            RemoteServiceError: Samsara answered with a non-2xx status
            NetworkError: The request never got a response
            ResponseFormatError: The response had no usable data.id
        """
        try:
            body = build_route_body(route_name, driver_id, route_notes, stops)
        except ValidationError as e:
            logger.warning(f"Route rejected before submission: {e}")
            raise

        logger.debug(f"Posting route '{body['routeName']}' with {len(body['stops'])} stops to {self.api_url}")
        try:
            response = await self._post(body)
            route_id = extract_route_id(response)
        except RouteSubmissionError as e:
            logger.error(f"Failed to post route: {e}")
            raise

        logger.info(f"Route posted successfully: {route_id}")
        return route_id

    async def _post(self, body: Dict[str, Any]) -> httpx.Response:
        try:
            if self.client is not None:
                return await self.client.post(
                    self.api_url, json=body, headers=self._headers(), timeout=self.timeout
                )
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await client.post(self.api_url, json=body, headers=self._headers())
        except httpx.RequestError as e:
            raise NetworkError(f"{e.__class__.__name__}: {e}") from e


def extract_route_id(response: httpx.Response) -> RouteID:
    """Return data.id from a route creation response

    The id is returned as sent: a non-empty string or a finite number.
    """
    if not response.is_success:
        raise RemoteServiceError(response.status_code, response.reason_phrase)

    try:
        data = response.json()
    except ValueError as e:
        raise ResponseFormatError("Response body is not valid JSON") from e

    try:
        route_id = data['data']['id']
    except (KeyError, TypeError) as e:
        raise ResponseFormatError("Response body lacks data.id") from e

    if (
        isinstance(route_id, bool)
        or not isinstance(route_id, (str, int, float))
        or route_id == ''
        or (isinstance(route_id, float) and not math.isfinite(route_id))
    ):
        raise ResponseFormatError(f"Unexpected route id in response: {route_id!r}")
    return route_id


async def submit_route(route_name: Any, driver_id: Any, route_notes: Any, stops: Any) -> RouteID:
    """Post a new route using the configured Samsara credentials"""
    return await RouteSubmitter().submit(route_name, driver_id, route_notes, stops)
