"""Pydantic models for yrsensor data and upstream responses.

This module defines data models for parsing and validating responses
from the geolocation and forecast APIs, plus the small value types the
sensor passes around.

Key model groups:
    1. **Values**: Coordinates, ForecastPoint
    2. **Transport**: JsonResponse
    3. **Upstream payloads**: GeolocationResponse, LocationForecastResponse

Note:
    Upstream payload models allow extra fields. Only the fields the sensor
    actually reads are declared, so additions on the provider side never
    break parsing.

Example:
    Mapping a forecast payload to points::

        forecast = LocationForecastResponse.model_validate(response.data)
        points = forecast.to_points()
        for point in points:
            print(f"{point.timestamp}: {point.air_temperature}°C")
"""

from datetime import datetime
from datetime import timezone as dt_timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class Coordinates(BaseModel):
    """Approximate location of the host.

    Resolved once and never changed afterwards.

    Attributes:
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
    """

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class ForecastPoint(BaseModel):
    """Single forecast instant with its air temperature.

    Attributes:
        timestamp: Instant the value applies to. Always timezone-aware;
            naive values are taken as UTC.
        air_temperature: Air temperature in °C.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    air_temperature: float

    @field_validator("timestamp")
    @classmethod
    def _ensure_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=dt_timezone.utc)
        return value


class JsonResponse(BaseModel):
    """Parsed result of a successful HTTP request.

    Attributes:
        status_code: HTTP status code, in the range [200, 400).
        data: Parsed JSON body.
        headers: Response headers with lower-cased names.
    """

    status_code: int
    data: Any
    headers: dict[str, str] = {}


class GeolocationResponse(BaseModel):
    """Response from the IP geolocation API.

    Attributes:
        latitude: Latitude of the caller's IP, absent on errors.
        longitude: Longitude of the caller's IP, absent on errors.
        error: Truthy when the service refused to answer. Any JSON value
            is accepted; only its truthiness is checked.
        reason: Human-readable error description (e.g. "RateLimited").

    Example:
        >>> # This is what an error response looks like
        >>> {"error": True, "reason": "RateLimited"}
    """

    model_config = ConfigDict(extra="allow")

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    error: Any = None
    reason: Optional[str] = None


class InstantDetails(BaseModel):
    model_config = ConfigDict(extra="allow")

    air_temperature: float


class Instant(BaseModel):
    model_config = ConfigDict(extra="allow")

    details: InstantDetails


class TimeseriesData(BaseModel):
    model_config = ConfigDict(extra="allow")

    instant: Instant


class TimeseriesEntry(BaseModel):
    """One entry of the forecast timeseries.

    Attributes:
        time: ISO8601 instant (e.g. "2024-01-15T12:00:00Z").
        data: Forecast data; only ``instant.details`` is read.
    """

    model_config = ConfigDict(extra="allow")

    time: datetime
    data: TimeseriesData

    def to_point(self) -> ForecastPoint:
        return ForecastPoint(
            timestamp=self.time,
            air_temperature=self.data.instant.details.air_temperature,
        )


class ForecastProperties(BaseModel):
    model_config = ConfigDict(extra="allow")

    timeseries: list[TimeseriesEntry]


class LocationForecastResponse(BaseModel):
    """Response from the locationforecast ``compact`` endpoint.

    Shape::

        {"properties": {"timeseries": [
            {"time": "...", "data": {"instant": {"details": {"air_temperature": 7.1}}}}
        ]}}

    Attributes:
        properties: Forecast properties holding the timeseries.
    """

    model_config = ConfigDict(extra="allow")

    properties: ForecastProperties

    def to_points(self) -> list[ForecastPoint]:
        """Map every timeseries entry to a ForecastPoint, keeping source order."""
        return [entry.to_point() for entry in self.properties.timeseries]
