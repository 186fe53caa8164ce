"""Approximate host location from an IP geolocation service.

The resolver asks the geolocation API once and keeps the answer for its
own lifetime. There is no invalidation: if the host moves while the
process runs, the first coordinates keep being served.

Example:
    >>> resolver = LocationResolver(JsonHttpClient())
    >>> coords = await resolver.resolve_coordinates()
    >>> coords.latitude, coords.longitude
    (59.9127, 10.7461)
"""

import asyncio
import logging
import random
import string
from typing import Optional

from pydantic import ValidationError

from .client import JsonHttpClient
from .exceptions import LocationResolutionError, MalformedResponseError
from .models import Coordinates, GeolocationResponse
from .types import GEOLOCATION_ACCEPT, GEOLOCATION_URL, USER_AGENT_TOKEN_LENGTH

logger = logging.getLogger(__name__)

_USER_AGENT_ALPHABET = string.ascii_lowercase + string.digits


def random_user_agent(length: int = USER_AGENT_TOKEN_LENGTH) -> str:
    """Build an opaque, non-identifying User-Agent string.

    Example:
        >>> random_user_agent()
        'k3x9q0z1ab'
    """
    return "".join(random.choices(_USER_AGENT_ALPHABET, k=length))


class LocationResolver:
    """Resolves and memoizes the host's approximate coordinates.

    Concurrent first calls share a single request. A failed request
    memoizes nothing, so the next call tries again.

    Args:
        http: Client used for the geolocation request.
        url: Geolocation endpoint. Defaults to ipapi.co.
    """

    def __init__(self, http: JsonHttpClient, *, url: str = GEOLOCATION_URL) -> None:
        self._http = http
        self._url = url
        self._coordinates: Optional[Coordinates] = None
        self._lock = asyncio.Lock()

    @property
    def coordinates(self) -> Optional[Coordinates]:
        """Memoized coordinates, or None if not resolved yet."""
        return self._coordinates

    async def resolve_coordinates(self) -> Coordinates:
        """Return the host's coordinates, fetching them on first use.

        Returns:
            Memoized Coordinates.

        Raises:
            LocationResolutionError: If the service reports an error or
                omits the coordinates.
            TransportError: If the request fails.
            UpstreamError: If the service answers with an error status.
            MalformedResponseError: If the body is not a JSON object.
        """
        if self._coordinates is not None:
            return self._coordinates

        async with self._lock:
            if self._coordinates is None:
                self._coordinates = await self._fetch()
        return self._coordinates

    async def _fetch(self) -> Coordinates:
        response = await self._http.request(
            self._url,
            headers={
                "User-Agent": random_user_agent(),
                "Accept": GEOLOCATION_ACCEPT,
            },
        )

        try:
            payload = GeolocationResponse.model_validate(response.data)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Unexpected geolocation payload: {e}",
                status_code=response.status_code,
            ) from e

        if payload.error:
            raise LocationResolutionError(payload.reason or "Unknown error")
        if payload.latitude is None or payload.longitude is None:
            raise LocationResolutionError("Geolocation response has no coordinates")

        coordinates = Coordinates(
            latitude=payload.latitude, longitude=payload.longitude
        )
        logger.debug(
            f"Resolved location ({coordinates.latitude}, {coordinates.longitude})"
        )
        return coordinates
