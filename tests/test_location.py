import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock

from yrsensor import (
    GEOLOCATION_URL,
    Coordinates,
    JsonHttpClient,
    JsonResponse,
    LocationResolutionError,
    LocationResolver,
    MalformedResponseError,
    TransportError,
)
from yrsensor.location import random_user_agent


def _http(data=None, side_effect=None):
    http = MagicMock(spec=JsonHttpClient)
    if side_effect is not None:
        http.request = AsyncMock(side_effect=side_effect)
    else:
        http.request = AsyncMock(
            return_value=JsonResponse(status_code=200, data=data, headers={})
        )
    return http


class TestRandomUserAgent:
    def test_length_and_alphabet(self):
        agent = random_user_agent()
        assert len(agent) == 10
        assert agent.isalnum()
        assert agent == agent.lower()

    def test_varies(self):
        assert len({random_user_agent() for _ in range(20)}) > 1


class TestResolveCoordinates:
    @pytest.mark.asyncio
    async def test_first_call_fetches(self):
        http = _http({"latitude": 59.91, "longitude": 10.75, "city": "Oslo"})
        resolver = LocationResolver(http)

        assert resolver.coordinates is None
        coords = await resolver.resolve_coordinates()

        assert coords == Coordinates(latitude=59.91, longitude=10.75)
        assert resolver.coordinates == coords
        http.request.assert_awaited_once()
        call = http.request.await_args
        assert call.args[0] == GEOLOCATION_URL
        assert call.kwargs["headers"]["Accept"] == "*/*"
        assert call.kwargs["headers"]["User-Agent"].isalnum()

    @pytest.mark.asyncio
    async def test_memoized_after_success(self):
        http = _http({"latitude": 1.5, "longitude": -2.5})
        resolver = LocationResolver(http)

        first = await resolver.resolve_coordinates()
        second = await resolver.resolve_coordinates()

        assert first is second
        assert http.request.await_count == 1

    @pytest.mark.asyncio
    async def test_custom_url(self):
        http = _http({"latitude": 1.0, "longitude": 2.0})
        resolver = LocationResolver(http, url="https://geo.example/json")

        await resolver.resolve_coordinates()
        assert http.request.await_args.args[0] == "https://geo.example/json"

    @pytest.mark.asyncio
    async def test_error_flag_raises_with_reason(self):
        http = _http({"error": True, "reason": "RateLimited"})
        resolver = LocationResolver(http)

        with pytest.raises(LocationResolutionError) as exc_info:
            await resolver.resolve_coordinates()

        assert str(exc_info.value) == "RateLimited"
        assert exc_info.value.reason == "RateLimited"
        assert resolver.coordinates is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("flag", ["RateLimited", 2, {"x": 1}, [1]])
    async def test_truthy_error_flag_raises_with_reason(self, flag):
        http = _http({"error": flag, "reason": "RateLimited"})
        resolver = LocationResolver(http)

        with pytest.raises(LocationResolutionError) as exc_info:
            await resolver.resolve_coordinates()

        assert str(exc_info.value) == "RateLimited"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("flag", [False, 0, "", None])
    async def test_falsy_error_flag_resolves(self, flag):
        http = _http({"error": flag, "latitude": 1.0, "longitude": 2.0})
        resolver = LocationResolver(http)

        coords = await resolver.resolve_coordinates()
        assert coords == Coordinates(latitude=1.0, longitude=2.0)

    @pytest.mark.asyncio
    async def test_missing_coordinates_raises(self):
        http = _http({"ip": "127.0.0.1"})
        resolver = LocationResolver(http)

        with pytest.raises(LocationResolutionError):
            await resolver.resolve_coordinates()

    @pytest.mark.asyncio
    async def test_non_object_payload_is_malformed(self):
        http = _http(["not", "an", "object"])
        resolver = LocationResolver(http)

        with pytest.raises(MalformedResponseError):
            await resolver.resolve_coordinates()

    @pytest.mark.asyncio
    async def test_failure_is_not_memoized(self):
        ok = JsonResponse(
            status_code=200, data={"latitude": 3.0, "longitude": 4.0}, headers={}
        )
        http = _http(side_effect=[TransportError("Request error: down"), ok])
        resolver = LocationResolver(http)

        with pytest.raises(TransportError):
            await resolver.resolve_coordinates()
        coords = await resolver.resolve_coordinates()

        assert coords.latitude == 3.0
        assert http.request.await_count == 2

    @pytest.mark.asyncio
    async def test_concurrent_first_calls_share_request(self):
        async def slow(url, headers=None, params=None):
            await asyncio.sleep(0)
            return JsonResponse(
                status_code=200, data={"latitude": 5.0, "longitude": 6.0}, headers={}
            )

        http = _http(side_effect=slow)
        resolver = LocationResolver(http)

        first, second = await asyncio.gather(
            resolver.resolve_coordinates(), resolver.resolve_coordinates()
        )

        assert first == second
        assert http.request.await_count == 1
