"""Route models and the mapping from caller input to the Samsara wire format"""

import math
from collections.abc import Mapping, Sequence
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError

from fleet_providers.errors import ValidationError

# bool is rejected by the strict types
Coordinate = Union[StrictInt, StrictFloat]

STOPS_MESSAGE = "Invalid stops: each stop must have a valid name, address, latitude, and longitude."


class Stop(BaseModel):
    """A stop as supplied by the caller

    The scheduling fields are passed through untouched: the first stop uses
    ``scheduled_departure_time``, every later stop ``scheduled_arrival_time``.
    """
    model_config = ConfigDict(extra='ignore', frozen=True)

    name: StrictStr = Field(..., min_length=1)
    address: StrictStr = Field(..., min_length=1)
    latitude: Coordinate
    longitude: Coordinate
    notes: Optional[StrictStr] = None
    scheduled_departure_time: Any = None
    scheduled_arrival_time: Any = None

    @field_validator('latitude', 'longitude')
    @classmethod
    def validate_finite(cls, value: Union[int, float]) -> Union[int, float]:
        try:
            finite = math.isfinite(value)
        except OverflowError:
            # ints beyond float range
            finite = False
        if not finite:
            raise ValueError("coordinate must be a finite number")
        return value


class RouteStop(BaseModel):
    """A stop in the wire format"""
    name: str
    notes: Optional[str] = None
    scheduled_time: Any = None
    address: str
    latitude: Coordinate
    longitude: Coordinate


class RoutePayload(BaseModel):
    """Body of the route creation request"""
    model_config = ConfigDict(populate_by_name=True)

    route_name: str = Field(..., alias='routeName')
    driver_id: str = Field(..., alias='driverId')
    route_notes: str = Field(..., alias='routeNotes')
    stops: List[RouteStop]

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict; values the caller never supplied are left out"""
        return self.model_dump(by_alias=True, exclude_none=True, mode='json')


def _require_text(value: Any, field: str, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid {label}: must be a non-empty string.", field=field)
    return value


def parse_stops(stops: Any) -> List[Stop]:
    """Validate the caller's stops, keeping their order"""
    if isinstance(stops, (str, bytes)) or not isinstance(stops, Sequence):
        raise ValidationError(STOPS_MESSAGE, field='stops')
    if not stops:
        raise ValidationError("Invalid stops: at least one stop is required.", field='stops')

    parsed = []
    for index, stop in enumerate(stops):
        if isinstance(stop, Stop):
            parsed.append(stop)
            continue
        if not isinstance(stop, Mapping):
            raise ValidationError(f"{STOPS_MESSAGE} Stop {index} is not a mapping.", field='stops', index=index)
        try:
            parsed.append(Stop.model_validate(dict(stop)))
        except PydanticValidationError as e:
            # union fields report once per member
            failing = ', '.join(dict.fromkeys(str(error['loc'][0]) for error in e.errors() if error['loc']))
            raise ValidationError(
                f"{STOPS_MESSAGE} Stop {index} failed on: {failing}.", field='stops', index=index
            ) from e
    return parsed


def to_route_stops(stops: List[Stop]) -> List[RouteStop]:
    """Map stops to the wire format

    Index 0 takes its scheduled_time from scheduled_departure_time, every
    other index from scheduled_arrival_time.
    """
    return [
        RouteStop(
            name=stop.name,
            notes=stop.notes,
            scheduled_time=stop.scheduled_departure_time if index == 0 else stop.scheduled_arrival_time,
            address=stop.address,
            latitude=stop.latitude,
            longitude=stop.longitude,
        )
        for index, stop in enumerate(stops)
    ]


def build_route_payload(route_name: Any, driver_id: Any, route_notes: Any, stops: Any) -> RoutePayload:
    """Validate all four inputs and assemble the request body.

    Raises:
        ValidationError: naming the first failing field
    """
    _require_text(route_name, 'route_name', 'routeName')
    _require_text(driver_id, 'driver_id', 'driverID')
    if not isinstance(route_notes, str):
        raise ValidationError("Invalid routeNotes: must be a string.", field='route_notes')
    parsed_stops = parse_stops(stops)

    return RoutePayload(
        route_name=route_name,
        driver_id=driver_id,
        route_notes=route_notes,
        stops=to_route_stops(parsed_stops),
    )


def build_route_body(route_name: Any, driver_id: Any, route_notes: Any, stops: Any) -> Dict[str, Any]:
    """Validate the inputs and return the JSON-ready request body.

    Scheduling values are passed through untouched, so one that cannot be
    encoded as JSON is reported here, before anything is sent.

    Raises:
        ValidationError: naming the first failing field
    """
    payload = build_route_payload(route_name, driver_id, route_notes, stops)
    try:
        return payload.to_wire()
    except PydanticSerializationError as e:
        raise ValidationError(
            f"Invalid stops: scheduled times must be JSON serializable ({e}).", field='stops'
        ) from e
