"""Accessory configuration.

The host framework hands the accessory a display name; everything else
has a sensible default and only needs overriding for testing or for a
self-hosted mirror of the upstream APIs.

Example:
    >>> config = SensorConfig(name="Balcony")
    >>> config.forecast_url
    'https://api.met.no/weatherapi/locationforecast/2.0/compact'
"""

from pydantic import BaseModel, ConfigDict, Field

from .types import (
    ACCESSORY_NAME,
    DEFAULT_TIMEOUT_SECONDS,
    FORECAST_URL,
    FORECAST_USER_AGENT,
    GEOLOCATION_URL,
)


class SensorConfig(BaseModel):
    """Settings for one temperature sensor accessory.

    Attributes:
        name: Display name of the sensor service. Only used as a label.
        geolocation_url: IP geolocation endpoint.
        forecast_url: Location forecast endpoint.
        user_agent: Product identifier sent to the forecast API.
        timeout: HTTP timeout in seconds.
        single_flight: Collapse concurrent forecast refreshes into one.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = ACCESSORY_NAME
    geolocation_url: str = GEOLOCATION_URL
    forecast_url: str = FORECAST_URL
    user_agent: str = FORECAST_USER_AGENT
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    single_flight: bool = True
