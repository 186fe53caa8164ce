"""Basic usage examples for the yrsensor package."""

import asyncio
import logging
from typing import Optional

from yrsensor import (
    JsonHttpClient,
    LocationResolver,
    SensorConfig,
    TemperatureForecast,
    YrSensorError,
    create_accessory,
)


async def forecast_example() -> None:
    """Read the temperature twice; the second read is served from cache."""
    async with JsonHttpClient() as http:
        resolver = LocationResolver(http)
        forecast = TemperatureForecast(http, resolver)
        forecast.subscribe(lambda t: print(f"Sensor value changed: {t}°C"))

        print("=== Forecast ===")
        temperature = await forecast.get_temperature()
        coords = resolver.coordinates
        print(f"Location: {coords.latitude}, {coords.longitude}")
        print(f"Temperature: {temperature}°C")
        print(f"Cached until: {forecast.cache.valid_until}")

        await forecast.get_temperature()
        print()


async def accessory_example() -> None:
    """Drive the accessory the way a host framework would."""
    accessory = create_accessory(SensorConfig(name="Outside"))

    def callback(
        error: Optional[YrSensorError] = None, value: Optional[float] = None
    ) -> None:
        if error is not None:
            print(f"Read failed: {error}")
        else:
            print(f"{accessory.config.name}: {value}°C")

    print("=== Accessory ===")
    try:
        await accessory.handle_current_temperature_get(callback)
        for service in accessory.get_services():
            print(service)
    finally:
        await accessory.close()


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    await forecast_example()
    await accessory_example()


if __name__ == "__main__":
    asyncio.run(main())
