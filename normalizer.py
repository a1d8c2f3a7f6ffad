"""
Conversion of raw Open-Meteo responses into the snapshots served to clients.

Everything here is pure: no I/O, no clock. Quality scores are always computed
from the metric wave height, before conversion to feet.
"""

from typing import List, Optional, Tuple

from classification import (
    classify_weather_code,
    direction_label,
    meters_to_feet,
    surf_quality,
)
from models import (
    DailySurf,
    DailyWeather,
    HourlySurf,
    OpenMeteoMarineResponse,
    OpenMeteoWeatherResponse,
    SurfSnapshot,
    WeatherSnapshot,
)


def normalize_weather(raw: OpenMeteoWeatherResponse) -> WeatherSnapshot:
    condition, icon = classify_weather_code(raw.current.weather_code)

    daily = []
    for date, high, low, code in zip(
        raw.daily.time,
        raw.daily.temperature_2m_max,
        raw.daily.temperature_2m_min,
        raw.daily.weather_code,
    ):
        day_condition, day_icon = classify_weather_code(code)
        daily.append(
            DailyWeather(
                date=date,
                high_f=round(high, 1),
                low_f=round(low, 1),
                condition=day_condition,
                condition_icon=day_icon,
            )
        )

    return WeatherSnapshot(
        current_temp_f=round(raw.current.temperature_2m, 1),
        condition=condition,
        condition_icon=icon,
        wind_mph=round(raw.current.wind_speed_10m, 1),
        humidity_pct=raw.current.relative_humidity_2m,
        daily=tuple(daily),
    )


def latest_sea_temperature(values: List[Optional[float]]) -> float:
    """Most recent reported sea surface temperature, 0 if none was reported."""
    for value in reversed(values):
        if value is not None:
            return value
    return 0.0


def normalize_marine(raw: OpenMeteoMarineResponse) -> SurfSnapshot:
    current = raw.current
    rating, score = surf_quality(current.wave_height, current.wave_period)

    # Gaps in the hourly series are scored as zero so the timeline keeps
    # one entry per hour.
    hourly = []
    for time, height, period, direction in zip(
        raw.hourly.time,
        raw.hourly.wave_height,
        raw.hourly.wave_period,
        raw.hourly.wave_direction,
    ):
        height = height or 0.0
        period = period or 0.0
        hour_rating, hour_score = surf_quality(height, period)
        hourly.append(
            HourlySurf(
                time=time,
                wave_height_ft=meters_to_feet(height),
                wave_period_s=round(period, 1),
                swell_direction=direction_label(direction or 0.0),
                surf_rating=hour_rating,
                quality_score=hour_score,
            )
        )

    daily = []
    for date, height, period, direction in zip(
        raw.daily.time,
        raw.daily.wave_height_max,
        raw.daily.wave_period_max,
        raw.daily.wave_direction_dominant,
    ):
        day_rating, day_score = surf_quality(height, period)
        daily.append(
            DailySurf(
                date=date,
                wave_height_ft=meters_to_feet(height),
                wave_period_s=round(period, 1),
                swell_direction=direction_label(direction),
                surf_rating=day_rating,
                quality_score=day_score,
            )
        )

    return SurfSnapshot(
        sea_temp_f=round(latest_sea_temperature(raw.hourly.sea_surface_temperature), 1),
        wave_height_ft=meters_to_feet(current.wave_height),
        wave_period_s=round(current.wave_period, 1),
        swell_direction=direction_label(current.wave_direction),
        surf_rating=rating,
        quality_score=score,
        hourly=tuple(hourly),
        daily=tuple(daily),
    )


def normalize(
    weather: OpenMeteoWeatherResponse, marine: OpenMeteoMarineResponse
) -> Tuple[WeatherSnapshot, SurfSnapshot]:
    return normalize_weather(weather), normalize_marine(marine)
