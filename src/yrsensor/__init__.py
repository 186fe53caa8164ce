"""Ambient air temperature sensor backed by Yr forecasts.

This package exposes one value: the forecast air temperature at the host
machine's approximate location. The location comes from an IP
geolocation lookup (ipapi.co) and the temperature from the MET Norway
location forecast that powers Yr.

Key features:
    - One geolocation request per process, memoized afterwards
    - Forecast cached in memory until the response's Expires header
    - Nearest-instant selection from an unsorted timeseries
    - Concurrent stale reads share a single refresh
    - Value-changed notifications for observers
    - Callback-style accessory adapter for host frameworks

Caching strategy:
    - **Coordinates**: resolved once and never invalidated.
    - **Forecast**: kept until ``Expires``; a missing or unparsable header
      means the next read fetches again. A failed refresh leaves the cache
      untouched and the read reports the error.

Example:
    Read the temperature::

        import asyncio
        from yrsensor import JsonHttpClient, LocationResolver, TemperatureForecast

        async def main():
            async with JsonHttpClient() as http:
                forecast = TemperatureForecast(http, LocationResolver(http))
                print(f"{await forecast.get_temperature()}°C")

        asyncio.run(main())

    Use the host-facing accessory::

        from yrsensor import SensorConfig, create_accessory

        accessory = create_accessory(SensorConfig(name="Outside"))
        await accessory.handle_current_temperature_get(callback)
        await accessory.close()

See Also:
    - MET Norway API docs: https://api.met.no/weatherapi/locationforecast/2.0/documentation
    - ipapi.co docs: https://ipapi.co/api/
"""

from .accessory import (
    AccessoryInformation,
    TemperatureSensorAccessory,
    TemperatureSensorService,
    create_accessory,
)
from .client import JsonHttpClient
from .config import SensorConfig
from .exceptions import (
    LocationResolutionError,
    MalformedResponseError,
    NoForecastDataError,
    TransportError,
    UpstreamError,
    YrSensorError,
)
from .forecast import ForecastCache, TemperatureForecast, parse_expires, select_nearest
from .location import LocationResolver
from .models import (
    Coordinates,
    ForecastPoint,
    GeolocationResponse,
    JsonResponse,
    LocationForecastResponse,
)
from .types import (
    FORECAST_URL,
    FORECAST_USER_AGENT,
    GEOLOCATION_URL,
    __version__,
)

__all__ = [
    "TemperatureForecast",
    "ForecastCache",
    "LocationResolver",
    "JsonHttpClient",
    "TemperatureSensorAccessory",
    "TemperatureSensorService",
    "AccessoryInformation",
    "SensorConfig",
    "create_accessory",
    "select_nearest",
    "parse_expires",
    "Coordinates",
    "ForecastPoint",
    "JsonResponse",
    "GeolocationResponse",
    "LocationForecastResponse",
    "YrSensorError",
    "TransportError",
    "MalformedResponseError",
    "UpstreamError",
    "LocationResolutionError",
    "NoForecastDataError",
    "GEOLOCATION_URL",
    "FORECAST_URL",
    "FORECAST_USER_AGENT",
    "__version__",
]
