"""Async HTTP JSON client used by the sensor.

This module provides JsonHttpClient, a thin wrapper around
httpx.AsyncClient that performs exactly one GET request, reads the whole
body, parses it as JSON and maps failures onto the package's exception
taxonomy.

Status handling:
    - 200 <= status < 400: returns a JsonResponse.
    - Any other status: raises UpstreamError carrying the parsed body.
    - Body is not JSON (any status): raises MalformedResponseError.
    - Network failure: raises TransportError chained from the httpx error.

No retries are made. Redirects are not followed, so a 3xx response is
returned as a success.

Example:
    Fetch a JSON document::

        import asyncio
        from yrsensor import JsonHttpClient

        async def main():
            async with JsonHttpClient() as client:
                response = await client.request(
                    "https://ipapi.co/json", headers={"Accept": "*/*"}
                )
                print(response.status_code, response.data["latitude"])

        asyncio.run(main())
"""

import logging
from typing import Any, Optional

import httpx

from .exceptions import MalformedResponseError, TransportError, UpstreamError
from .models import JsonResponse
from .types import DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class JsonHttpClient:
    """Async client issuing single GET requests that return JSON.

    Args:
        timeout: HTTP request timeout in seconds. Defaults to 5.0.

    Attributes:
        _timeout: HTTP timeout in seconds.
        _client: Lazy-initialized httpx.AsyncClient.

    Example:
        Using as async context manager (recommended)::

            async with JsonHttpClient() as client:
                response = await client.request(url)

        Manual resource management::

            client = JsonHttpClient()
            try:
                response = await client.request(url)
            finally:
                await client.close()
    """

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "JsonHttpClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized.

        Lazily creates the httpx.AsyncClient if not already created.

        Returns:
            The initialized httpx.AsyncClient instance.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release resources.

        Safe to call multiple times.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> JsonResponse:
        """Issue one GET request and parse the body as JSON.

        Args:
            url: Absolute URL to fetch.
            headers: Optional request headers.
            params: Optional query parameters, appended to the URL.

        Returns:
            JsonResponse with status code, parsed body and headers.

        Raises:
            TransportError: If the request could not be completed.
            MalformedResponseError: If the body is not valid JSON.
            UpstreamError: If the status code is outside [200, 400).

        Example:
            >>> response = await client.request(
            ...     "https://api.met.no/weatherapi/locationforecast/2.0/compact",
            ...     headers={"User-Agent": "yrsensor/1.0.0"},
            ...     params={"lat": 59.91, "lon": 10.75},
            ... )
            >>> response.headers["expires"]
            'Tue, 20 Oct 2026 10:31:12 GMT'
        """
        client = await self._ensure_client()

        try:
            response = await client.get(url, headers=headers, params=params)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"Request error: {e}") from e

        logger.debug(f"GET {url} -> {response.status_code}: {response.text}")

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Response from {url} is not valid JSON: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

        response_headers = {
            key.lower(): value for key, value in response.headers.items()
        }

        if not 200 <= response.status_code < 400:
            raise UpstreamError(response.status_code, data, response_headers)

        return JsonResponse(
            status_code=response.status_code,
            data=data,
            headers=response_headers,
        )
