"""Shared fixtures: test configuration and a fake Open-Meteo upstream."""

from __future__ import annotations

import asyncio
import copy
import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from models import Config, LocationConfig, ServerConfig, UpstreamConfig

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict[str, Any]:
    return json.loads((FIXTURES / name).read_text())


LOCATIONS = {
    "wrightsville": LocationConfig(
        name="Wrightsville Beach",
        beach_lat=34.2097,
        beach_lon=-77.7956,
        weather_city="Wilmington",
        weather_lat=34.2257,
        weather_lon=-77.9447,
    ),
    "carolina": LocationConfig(
        name="Carolina Beach",
        beach_lat=34.0353,
        beach_lon=-77.8936,
        weather_city="Carolina Beach",
        weather_lat=34.0353,
        weather_lon=-77.8864,
    ),
    "kure": LocationConfig(
        name="Kure Beach",
        beach_lat=33.9968,
        beach_lon=-77.9072,
        weather_city="Kure Beach",
        weather_lat=33.9968,
        weather_lon=-77.9072,
    ),
    "surf-city": LocationConfig(
        name="Surf City",
        beach_lat=34.4271,
        beach_lon=-77.5461,
        weather_city="Surf City",
        weather_lat=34.4235,
        weather_lon=-77.5393,
    ),
}


class FakeOpenMeteo:
    """
    In-process stand-in for both Open-Meteo endpoints.

    Requests are routed by host; failures are keyed by (source, latitude) so a
    single location's weather or marine call can be made to fail.
    """

    def __init__(self, weather: dict[str, Any], marine: dict[str, Any]) -> None:
        self.weather = weather
        self.marine = marine
        self.failures: dict[tuple[str, float], Any] = {}
        self.requests: list[tuple[str, httpx.Request]] = []

    def fail(self, source: str, location: LocationConfig, failure: Any = 500) -> None:
        """
        Make one call fail with a status code, an httpx exception class,
        "garbage" for a non-JSON body, or raw bytes served as a 200 body.
        """
        lat = location.beach_lat if source == "marine" else location.weather_lat
        self.failures[(source, lat)] = failure

    def recover(self) -> None:
        self.failures.clear()

    async def handler(self, request: httpx.Request) -> httpx.Response:
        # Yield so concurrent readers get a chance to run mid-cycle
        await asyncio.sleep(0)
        source = "marine" if request.url.host.startswith("marine") else "weather"
        self.requests.append((source, request))

        failure = self.failures.get((source, float(request.url.params["latitude"])))
        if isinstance(failure, type) and issubclass(failure, httpx.RequestError):
            raise failure("simulated failure", request=request)
        if isinstance(failure, int):
            return httpx.Response(failure, json={"error": True, "reason": "simulated"})
        if failure == "garbage":
            return httpx.Response(200, content=b"<html>not json</html>")
        if isinstance(failure, bytes):
            return httpx.Response(
                200, content=failure, headers={"content-type": "application/json"}
            )

        payload = self.weather if source == "weather" else self.marine
        return httpx.Response(200, json=copy.deepcopy(payload))

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


def infinite_wave_direction_body(upstream: FakeOpenMeteo) -> bytes:
    """Marine response whose current wave direction overflows to infinity."""
    marine = copy.deepcopy(upstream.marine)
    marine["current"]["wave_direction"] = "WAVE_DIRECTION"
    return json.dumps(marine).replace('"WAVE_DIRECTION"', "1e999").encode()


@pytest.fixture
def weather_payload() -> dict[str, Any]:
    return load_fixture("weather-response.json")


@pytest.fixture
def marine_payload() -> dict[str, Any]:
    return load_fixture("marine-response.json")


@pytest.fixture
def config() -> Config:
    return Config(
        server=ServerConfig(refresh_interval_minutes=5, warm_on_startup=True),
        upstream=UpstreamConfig(),
        locations=dict(LOCATIONS),
    )


@pytest.fixture
def upstream(weather_payload: dict[str, Any], marine_payload: dict[str, Any]) -> FakeOpenMeteo:
    return FakeOpenMeteo(weather_payload, marine_payload)
