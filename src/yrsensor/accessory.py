"""Temperature sensor accessory for a callback-driven host framework.

The host asks for the current value through a callback taking
``(error, value)`` and may also observe the last value pushed after each
successful read. A failed read is reported as an error to the callback,
never as a made-up temperature.

Example:
    >>> accessory = create_accessory(SensorConfig(name="Outside"))
    >>> await accessory.handle_current_temperature_get(
    ...     lambda err, value=None: print(err or value)
    ... )
    7.3
    >>> accessory.current_temperature
    7.3
"""

import logging
from typing import Any, Callable, Optional

from pydantic import BaseModel

from .client import JsonHttpClient
from .config import SensorConfig
from .forecast import TemperatureForecast
from .location import LocationResolver
from .types import MANUFACTURER, MODEL, SERIAL_NUMBER

logger = logging.getLogger(__name__)

GetCallback = Callable[..., Any]


class AccessoryInformation(BaseModel):
    """Static identification shown by the host."""

    manufacturer: str = MANUFACTURER
    model: str = MODEL
    serial_number: str = SERIAL_NUMBER


class TemperatureSensorService(BaseModel):
    """Description of the sensor service exposed to the host."""

    name: str
    current_temperature: Optional[float] = None


class TemperatureSensorAccessory:
    """Adapts TemperatureForecast to the host's get/notify model.

    Args:
        config: Accessory settings; only ``name`` is used here.
        forecast: Source of temperature readings.
        http: Client to close together with the accessory, if owned.
    """

    def __init__(
        self,
        config: SensorConfig,
        forecast: TemperatureForecast,
        http: Optional[JsonHttpClient] = None,
    ) -> None:
        self.config = config
        self.forecast = forecast
        self._http = http
        self.service = TemperatureSensorService(name=config.name)
        self.information = AccessoryInformation()
        self.forecast.subscribe(self._on_temperature)

    @property
    def current_temperature(self) -> Optional[float]:
        return self.service.current_temperature

    def _on_temperature(self, value: float) -> None:
        logger.debug(f"Setting current temperature of {self.config.name} to {value}°C")
        self.service.current_temperature = value

    async def handle_current_temperature_get(self, callback: GetCallback) -> None:
        """Answer a "get current temperature" request from the host.

        Calls ``callback(None, value)`` on success and ``callback(error)``
        when the read fails.
        """
        logger.debug("Triggered GET CurrentTemperature")
        try:
            temperature = await self.forecast.get_temperature()
        except Exception as e:
            logger.error(f"Reading temperature for {self.config.name} failed: {e}")
            callback(e)
            return
        logger.debug(f"Returning temperature {temperature}")
        callback(None, temperature)

    def get_services(self) -> list[BaseModel]:
        return [self.service, self.information]

    async def close(self) -> None:
        if self._http is not None:
            await self._http.close()


def create_accessory(config: Optional[SensorConfig] = None) -> TemperatureSensorAccessory:
    """Build an accessory with its own HTTP client, resolver and forecast.

    Args:
        config: Accessory settings. Defaults to SensorConfig().

    Returns:
        A ready TemperatureSensorAccessory. Call ``close()`` when done.
    """
    config = config or SensorConfig()
    http = JsonHttpClient(timeout=config.timeout)
    resolver = LocationResolver(http, url=config.geolocation_url)
    forecast = TemperatureForecast(
        http,
        resolver,
        url=config.forecast_url,
        user_agent=config.user_agent,
        single_flight=config.single_flight,
    )
    return TemperatureSensorAccessory(config, forecast, http)
