"""Forecast cache and nearest-point temperature selection.

This module turns the MET Norway location forecast, a sparse timeseries
of instants, into a single "current" air temperature.

Caching:
    The whole timeseries is kept in memory until the instant given by the
    forecast response's ``Expires`` header. A missing or unparsable header
    makes the cache stale immediately, so the next read fetches again
    instead of serving old data indefinitely.

    A failed refresh leaves the cache as it was and the read fails; stale
    points are never returned in place of an error.

Selection:
    The point whose timestamp is closest to now wins. On an exact tie the
    earlier timestamp wins. Source order of the timeseries is irrelevant.

Example:
    Read the temperature::

        import asyncio
        from yrsensor import JsonHttpClient, LocationResolver, TemperatureForecast

        async def main():
            async with JsonHttpClient() as http:
                forecast = TemperatureForecast(http, LocationResolver(http))
                forecast.subscribe(lambda t: print(f"Now {t}°C"))
                await forecast.get_temperature()

        asyncio.run(main())
"""

import asyncio
import contextlib
import logging
from datetime import datetime
from datetime import timezone as dt_timezone
from email.utils import parsedate_to_datetime
from typing import Callable, Optional, Sequence

from pydantic import ValidationError

from .client import JsonHttpClient
from .exceptions import MalformedResponseError, NoForecastDataError
from .location import LocationResolver
from .models import ForecastPoint, LocationForecastResponse
from .types import FORECAST_URL, FORECAST_USER_AGENT

logger = logging.getLogger(__name__)

TemperatureListener = Callable[[float], None]


def _utcnow() -> datetime:
    return datetime.now(tz=dt_timezone.utc)


def parse_expires(value: Optional[str]) -> Optional[datetime]:
    """Parse an HTTP ``Expires`` header.

    Args:
        value: Raw header value, e.g. "Tue, 20 Oct 2026 10:31:12 GMT".

    Returns:
        Timezone-aware datetime, or None if the header is absent or
        cannot be parsed.

    Example:
        >>> parse_expires("Tue, 20 Oct 2026 10:31:12 GMT")
        datetime.datetime(2026, 10, 20, 10, 31, 12, tzinfo=datetime.timezone.utc)
        >>> parse_expires("0") is None
        True
    """
    if not value:
        return None
    try:
        expires = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        logger.debug(f"Ignoring unparsable Expires header: {value!r}")
        return None
    if expires.tzinfo is None:
        expires = expires.replace(tzinfo=dt_timezone.utc)
    return expires


def select_nearest(points: Sequence[ForecastPoint], now: datetime) -> ForecastPoint:
    """Pick the point closest in time to ``now``.

    Ties on distance go to the earlier timestamp.

    Raises:
        NoForecastDataError: If ``points`` is empty.

    Example:
        >>> select_nearest([p_minus_3h, p_minus_1h, p_plus_2h], now)
        ForecastPoint(timestamp=..., air_temperature=7.0)
    """
    if not points:
        raise NoForecastDataError("Forecast contains no timeseries entries")
    return min(points, key=lambda p: (abs(p.timestamp - now), p.timestamp))


class ForecastCache:
    """Most recent forecast points and the instant they expire.

    Two states:
        - Empty/Stale: nothing fetched yet, no usable expiry, or
          ``now >= valid_until``.
        - Fresh: points present and ``now < valid_until``.

    Attributes:
        points: Forecast points of the last successful fetch, or None.
        valid_until: Expiry of those points, or None when unknown.
    """

    def __init__(self) -> None:
        self.points: Optional[list[ForecastPoint]] = None
        self.valid_until: Optional[datetime] = None

    def is_stale(self, now: datetime) -> bool:
        if not self.points or self.valid_until is None:
            return True
        return now >= self.valid_until

    def replace(
        self, points: list[ForecastPoint], valid_until: Optional[datetime]
    ) -> None:
        """Swap in a new point set wholesale."""
        self.points = points
        self.valid_until = valid_until


class TemperatureForecast:
    """Current air temperature at the host's location, served from cache.

    Each ``get_temperature()`` call refreshes the forecast only when the
    cache is stale, then selects the nearest point and notifies every
    subscribed listener with the value.

    Concurrent stale reads share one refresh by default. With
    ``single_flight=False`` overlapping reads each fetch and the last
    one to finish wins.

    Args:
        http: Client used for the forecast request.
        resolver: Source of the coordinates to query.
        url: Forecast endpoint. Defaults to MET Norway compact.
        user_agent: Identifier sent to the forecast API.
        single_flight: Collapse concurrent refreshes. Defaults to True.
        clock: Returns the current aware datetime. Defaults to UTC now.

    Attributes:
        cache: The owned ForecastCache.
    """

    def __init__(
        self,
        http: JsonHttpClient,
        resolver: LocationResolver,
        *,
        url: str = FORECAST_URL,
        user_agent: str = FORECAST_USER_AGENT,
        single_flight: bool = True,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._http = http
        self._resolver = resolver
        self._url = url
        self._user_agent = user_agent
        self._clock = clock
        self._lock = asyncio.Lock() if single_flight else None
        self._listeners: list[TemperatureListener] = []
        self.cache = ForecastCache()

    def is_stale(self, now: Optional[datetime] = None) -> bool:
        return self.cache.is_stale(now or self._clock())

    def subscribe(self, listener: TemperatureListener) -> Callable[[], None]:
        """Register a listener for newly selected temperatures.

        Args:
            listener: Called with the value after every successful read.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def refresh_if_stale(self) -> None:
        """Fetch a new forecast if the cache is stale.

        Raises:
            LocationResolutionError, TransportError, UpstreamError,
            MalformedResponseError: Propagated from the refresh. The cache
                is left untouched.
        """
        if not self.is_stale():
            logger.debug("Using cached forecast")
            return

        guard = self._lock if self._lock is not None else contextlib.nullcontext()
        async with guard:
            # another reader may have refreshed while we waited
            if self._lock is not None and not self.is_stale():
                logger.debug("Using forecast refreshed by concurrent read")
                return
            await self._refresh()

    async def _refresh(self) -> None:
        coordinates = await self._resolver.resolve_coordinates()
        logger.debug(
            f"Fetching fresh forecast for "
            f"({coordinates.latitude}, {coordinates.longitude})"
        )
        response = await self._http.request(
            self._url,
            headers={"User-Agent": self._user_agent},
            params={"lat": coordinates.latitude, "lon": coordinates.longitude},
        )

        try:
            points = LocationForecastResponse.model_validate(response.data).to_points()
        except ValidationError as e:
            raise MalformedResponseError(
                f"Unexpected forecast payload: {e}",
                status_code=response.status_code,
            ) from e

        valid_until = parse_expires(response.headers.get("expires"))
        self.cache.replace(points, valid_until)
        logger.debug(f"Saving cache of {len(points)} points until {valid_until}")

    async def get_temperature(self) -> float:
        """Return the forecast air temperature nearest to now.

        Returns:
            Temperature in °C.

        Raises:
            NoForecastDataError: If the fetched forecast has no points.
            YrSensorError: Any error raised while refreshing.
        """
        await self.refresh_if_stale()

        selected = select_nearest(self.cache.points or [], self._clock())
        logger.debug(
            f"Selected {selected.timestamp} for forecast with temperature "
            f"{selected.air_temperature}"
        )
        self._notify(selected.air_temperature)
        return selected.air_temperature

    def _notify(self, value: float) -> None:
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                logger.exception("Temperature listener failed")
