"""
Client for the Open-Meteo forecast and marine APIs.

API docs:
  - Forecast: https://open-meteo.com/en/docs
  - Marine: https://open-meteo.com/en/docs/marine-weather-api
"""

import logging
from typing import Dict, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from errors import UpstreamParseError, UpstreamStatusError, UpstreamTransportError
from models import (
    LocationConfig,
    OpenMeteoMarineResponse,
    OpenMeteoWeatherResponse,
    UpstreamConfig,
)

logger = logging.getLogger(__name__)

USER_AGENT = "surf-forecast/1.0"

WEATHER_CURRENT_VARS = [
    "temperature_2m",
    "weather_code",
    "wind_speed_10m",
    "relative_humidity_2m",
]
WEATHER_DAILY_VARS = ["temperature_2m_max", "temperature_2m_min", "weather_code"]

MARINE_CURRENT_VARS = ["wave_height", "wave_period", "wave_direction"]
MARINE_DAILY_VARS = ["wave_height_max", "wave_period_max", "wave_direction_dominant"]
MARINE_HOURLY_VARS = [
    "wave_height",
    "wave_period",
    "wave_direction",
    "sea_surface_temperature",
]

ResponseT = TypeVar("ResponseT", bound=BaseModel)


def create_http_client(upstream: UpstreamConfig) -> httpx.AsyncClient:
    """Build the shared async HTTP client used for every upstream call."""
    transport = httpx.AsyncHTTPTransport(retries=upstream.retries)
    return httpx.AsyncClient(
        transport=transport,
        timeout=httpx.Timeout(upstream.timeout_seconds),
        headers={"User-Agent": USER_AGENT},
    )


class OpenMeteoClient:
    def __init__(self, http_client: httpx.AsyncClient, upstream: UpstreamConfig):
        self.http_client = http_client
        self.upstream = upstream

    async def fetch_weather(
        self, slug: str, location: LocationConfig
    ) -> OpenMeteoWeatherResponse:
        """Fetch current conditions and the daily forecast for the weather city."""
        params = {
            "latitude": location.weather_lat,
            "longitude": location.weather_lon,
            "current": ",".join(WEATHER_CURRENT_VARS),
            "daily": ",".join(WEATHER_DAILY_VARS),
            "temperature_unit": "fahrenheit",
            "wind_speed_unit": "mph",
            "timezone": self.upstream.timezone,
            "forecast_days": self.upstream.weather_forecast_days,
        }
        return await self._get(
            "weather", slug, self.upstream.weather_url, params, OpenMeteoWeatherResponse
        )

    async def fetch_marine(
        self, slug: str, location: LocationConfig
    ) -> OpenMeteoMarineResponse:
        """Fetch wave conditions and sea surface temperature at the beach."""
        params = {
            "latitude": location.beach_lat,
            "longitude": location.beach_lon,
            "current": ",".join(MARINE_CURRENT_VARS),
            "daily": ",".join(MARINE_DAILY_VARS),
            "hourly": ",".join(MARINE_HOURLY_VARS),
            "temperature_unit": "fahrenheit",
            "timezone": self.upstream.timezone,
            "forecast_days": self.upstream.marine_forecast_days,
        }
        return await self._get(
            "marine", slug, self.upstream.marine_url, params, OpenMeteoMarineResponse
        )

    async def _get(
        self,
        source: str,
        slug: str,
        url: str,
        params: Dict[str, Union[str, int, float]],
        response_model: Type[ResponseT],
    ) -> ResponseT:
        logger.debug(f"Requesting {source} data for {slug} from {url}")
        try:
            response = await self.http_client.get(url, params=params)
        except httpx.TimeoutException as e:
            raise UpstreamTransportError(source, slug, f"request timed out: {e!r}") from e
        except httpx.RequestError as e:
            raise UpstreamTransportError(source, slug, f"request failed: {e!r}") from e

        if not response.is_success:
            raise UpstreamStatusError(source, slug, response.status_code)

        try:
            return response_model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise UpstreamParseError(source, slug, f"unexpected response body: {e}") from e
