"""Constants for the yrsensor package.

This module defines the upstream endpoints and identifiers used
throughout the sensor. Every value can be overridden through the
constructors of the components or through ``SensorConfig``.
"""

__version__ = "1.0.0"

GEOLOCATION_URL = "https://ipapi.co/json"
"""str: IP geolocation endpoint.

Returns the approximate latitude and longitude of the caller's public IP
address, or ``{"error": true, "reason": ...}`` when it refuses to answer.
"""

FORECAST_URL = "https://api.met.no/weatherapi/locationforecast/2.0/compact"
"""str: MET Norway location forecast endpoint (the data behind Yr).

Queried with ``lat`` and ``lon`` parameters. The response ``Expires``
header tells how long the forecast may be cached.
"""

FORECAST_USER_AGENT = f"yrsensor/{__version__}"
"""str: Fixed product identifier sent to the forecast API.

MET Norway's terms of service reject requests without an identifying
User-Agent.
"""

GEOLOCATION_ACCEPT = "*/*"
"""str: Accept header sent to the geolocation API."""

USER_AGENT_TOKEN_LENGTH = 10
"""int: Length of the random User-Agent sent to the geolocation API."""

DEFAULT_TIMEOUT_SECONDS = 5.0
"""float: HTTP timeout in seconds.

Matches httpx's own default; no additional timeout policy is applied.
"""

ACCESSORY_NAME = "Yr Temperature"
"""str: Default display name of the temperature sensor service."""

MANUFACTURER = "Yr.no"
MODEL = "Location from ipapi.co"
SERIAL_NUMBER = "Jeppesens x YR"
