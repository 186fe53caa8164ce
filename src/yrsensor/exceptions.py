"""Exceptions for the yrsensor package.

This module defines custom exceptions for error handling in the sensor.
All exceptions inherit from YrSensorError for easy catching.

None of these are recovered inside the package: every failure during a
forecast refresh propagates unchanged to the caller of
``TemperatureForecast.get_temperature()``.

Example:
    Catching all sensor errors::

        from yrsensor import TemperatureForecast, YrSensorError

        try:
            temperature = await forecast.get_temperature()
        except YrSensorError as e:
            print(f"Sensor read failed: {e}")

    Inspecting an upstream error payload::

        from yrsensor import UpstreamError

        try:
            response = await client.request(url)
        except UpstreamError as e:
            print(e.status_code, e.data)
"""

from typing import Any, Optional


class YrSensorError(Exception):
    """Base exception for all yrsensor errors.

    All exceptions in this module inherit from this class, allowing
    callers to catch all sensor-related errors with a single except.
    """

    pass


class TransportError(YrSensorError):
    """Exception raised when the network request itself fails.

    Covers DNS failures, refused connections, TLS errors, transport
    timeouts and URLs httpx cannot parse. The underlying httpx exception
    is chained as ``__cause__``.

    Example:
        >>> try:
        ...     await client.request("https://ipapi.co/json")
        ... except TransportError as e:
        ...     print(f"Network error: {e.__cause__!r}")
    """

    pass


class MalformedResponseError(YrSensorError):
    """Exception raised when a response body is not the expected JSON.

    A malformed 200 response is a different fault from a well-formed error
    response, so this is never raised as an UpstreamError.

    Args:
        message: Description of what could not be parsed.
        status_code: HTTP status of the offending response, if known.
        body: Raw response text, if available.

    Attributes:
        status_code: HTTP status of the offending response.
        body: Raw response text.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class UpstreamError(YrSensorError):
    """Exception raised when an upstream answers outside the [200, 400) range.

    Carries the same shape as a successful response so callers can inspect
    the upstream's own error payload.

    Args:
        status_code: HTTP status returned by the upstream.
        data: Parsed JSON body of the error response.
        headers: Response headers with lower-cased names.

    Example:
        >>> raise UpstreamError(503, {"message": "busy"}, {})
        UpstreamError: Upstream returned HTTP 503
    """

    def __init__(
        self,
        status_code: int,
        data: Any,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        self.status_code = status_code
        self.data = data
        self.headers = headers or {}
        super().__init__(f"Upstream returned HTTP {status_code}")


class LocationResolutionError(YrSensorError):
    """Exception raised when the geolocation service reports its own error.

    The message is exactly the upstream ``reason`` string.

    Args:
        reason: The error reason returned by the geolocation API.

    Example:
        >>> str(LocationResolutionError("RateLimited"))
        'RateLimited'
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class NoForecastDataError(YrSensorError):
    """Exception raised when a fetched forecast contains no points."""

    pass
