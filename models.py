from datetime import datetime
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


# Configuration


class LocationConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    beach_lat: float
    beach_lon: float
    weather_city: str
    weather_lat: float
    weather_lon: float


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    refresh_interval_minutes: float = 5
    warm_on_startup: bool = True


class UpstreamConfig(BaseModel):
    weather_url: str = "https://api.open-meteo.com/v1/forecast"
    marine_url: str = "https://marine-api.open-meteo.com/v1/marine"
    timezone: str = "America/New_York"
    weather_forecast_days: int = 5
    marine_forecast_days: int = 3
    timeout_seconds: float = 10.0
    retries: int = 1


class Config(BaseModel):
    server: ServerConfig = ServerConfig()
    upstream: UpstreamConfig = UpstreamConfig()
    locations: Dict[str, LocationConfig]


# Raw Open-Meteo responses


class _RawModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


def _check_aligned(series: Dict[str, list]) -> None:
    lengths = {name: len(values) for name, values in series.items()}
    if len(set(lengths.values())) > 1:
        raise ValueError(f"series lengths differ: {lengths}")


class OpenMeteoCurrent(_RawModel):
    temperature_2m: float
    weather_code: int
    wind_speed_10m: float
    relative_humidity_2m: int


class OpenMeteoDaily(_RawModel):
    time: List[str]
    temperature_2m_max: List[float]
    temperature_2m_min: List[float]
    weather_code: List[int]

    @model_validator(mode="after")
    def check_aligned(self):
        _check_aligned(
            {
                "time": self.time,
                "temperature_2m_max": self.temperature_2m_max,
                "temperature_2m_min": self.temperature_2m_min,
                "weather_code": self.weather_code,
            }
        )
        return self


class OpenMeteoWeatherResponse(_RawModel):
    current: OpenMeteoCurrent
    daily: OpenMeteoDaily


class OpenMeteoMarineCurrent(_RawModel):
    wave_height: float
    wave_period: float
    wave_direction: float


class OpenMeteoMarineDaily(_RawModel):
    time: List[str]
    wave_height_max: List[float]
    wave_period_max: List[float]
    wave_direction_dominant: List[float]

    @model_validator(mode="after")
    def check_aligned(self):
        _check_aligned(
            {
                "time": self.time,
                "wave_height_max": self.wave_height_max,
                "wave_period_max": self.wave_period_max,
                "wave_direction_dominant": self.wave_direction_dominant,
            }
        )
        return self


class OpenMeteoMarineHourly(_RawModel):
    time: List[str]
    wave_height: List[Optional[float]]
    wave_period: List[Optional[float]]
    wave_direction: List[Optional[float]]
    sea_surface_temperature: List[Optional[float]]

    @model_validator(mode="after")
    def check_aligned(self):
        _check_aligned(
            {
                "time": self.time,
                "wave_height": self.wave_height,
                "wave_period": self.wave_period,
                "wave_direction": self.wave_direction,
                "sea_surface_temperature": self.sea_surface_temperature,
            }
        )
        return self


class OpenMeteoMarineResponse(_RawModel):
    current: OpenMeteoMarineCurrent
    daily: OpenMeteoMarineDaily
    hourly: OpenMeteoMarineHourly


# Domain snapshots, serialized in camelCase for the mobile client


class _Snapshot(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class DailyWeather(_Snapshot):
    date: str
    high_f: float
    low_f: float
    condition: str
    condition_icon: str


class WeatherSnapshot(_Snapshot):
    current_temp_f: float
    condition: str
    condition_icon: str
    wind_mph: float
    humidity_pct: int
    daily: Tuple[DailyWeather, ...]


class HourlySurf(_Snapshot):
    time: str
    wave_height_ft: float
    wave_period_s: float
    swell_direction: str
    surf_rating: str
    quality_score: int


class DailySurf(_Snapshot):
    date: str
    wave_height_ft: float
    wave_period_s: float
    swell_direction: str
    surf_rating: str
    quality_score: int


class SurfSnapshot(_Snapshot):
    sea_temp_f: float
    wave_height_ft: float
    wave_period_s: float
    swell_direction: str
    surf_rating: str
    quality_score: int
    hourly: Tuple[HourlySurf, ...]
    daily: Tuple[DailySurf, ...]


class CacheEntry(BaseModel):
    """Weather and surf snapshots for one location from the same refresh."""

    model_config = ConfigDict(frozen=True)

    weather: WeatherSnapshot
    surf: SurfSnapshot
    stored_at: datetime


class BeachSummary(_Snapshot):
    slug: str
    name: str
    weather_city: str
    quality_score: int
    surf_rating: str
    wave_height_ft: float
    rating_color: str


class ErrorResponse(BaseModel):
    error: str
