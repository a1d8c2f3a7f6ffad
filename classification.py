"""
Unit conversions and classifications shared by the forecast normalizer and
the summary endpoint.
"""

from typing import Dict, Tuple

FEET_PER_METER = 3.281

# WMO weather interpretation codes used by Open-Meteo
WEATHER_CODES: Dict[int, Tuple[str, str]] = {
    0: ("Clear Sky", "clear"),
    1: ("Mainly Clear", "clear"),
    2: ("Partly Cloudy", "partly-cloudy"),
    3: ("Overcast", "overcast"),
    45: ("Foggy", "fog"),
    48: ("Foggy", "fog"),
    51: ("Drizzle", "drizzle"),
    53: ("Drizzle", "drizzle"),
    55: ("Drizzle", "drizzle"),
    61: ("Rain", "rain"),
    63: ("Rain", "rain"),
    65: ("Rain", "rain"),
    66: ("Freezing Rain", "freezing-rain"),
    67: ("Freezing Rain", "freezing-rain"),
    71: ("Snow", "snow"),
    73: ("Snow", "snow"),
    75: ("Snow", "snow"),
    77: ("Snow Grains", "snow"),
    80: ("Rain Showers", "rain"),
    81: ("Rain Showers", "rain"),
    82: ("Rain Showers", "rain"),
    85: ("Snow Showers", "snow"),
    86: ("Snow Showers", "snow"),
    95: ("Thunderstorm", "thunderstorm"),
    96: ("Thunderstorm w/ Hail", "thunderstorm"),
    99: ("Thunderstorm w/ Hail", "thunderstorm"),
}

UNKNOWN_WEATHER = ("Unknown", "unknown")

COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]

# (exclusive upper bound, label), checked in order
SURF_RATINGS = [
    (10, "Flat"),
    (25, "Poor"),
    (40, "Poor to Fair"),
    (55, "Fair"),
    (70, "Fair to Good"),
    (85, "Good"),
    (95, "Good to Epic"),
]
TOP_SURF_RATING = "Epic"

# Height saturates at 2.5 m, period at 14 s
MAX_SCORING_HEIGHT_M = 2.5
MAX_SCORING_PERIOD_S = 14.0
HEIGHT_WEIGHT = 70
PERIOD_WEIGHT = 30


def classify_weather_code(code: int) -> Tuple[str, str]:
    """Map a WMO weather code to a (description, icon) pair."""
    return WEATHER_CODES.get(code, UNKNOWN_WEATHER)


def direction_label(degrees: float) -> str:
    """Map a bearing in degrees to one of the 16 compass points."""
    return COMPASS_POINTS[int(round(degrees / 22.5)) % 16]


def surf_quality(wave_height_m: float, wave_period_s: float) -> Tuple[str, int]:
    """
    Score surf from 0 to 100 and label it.

    Height contributes up to 70 points and period up to 30; longer periods mean
    cleaner waves.
    """
    height_score = min(wave_height_m / MAX_SCORING_HEIGHT_M, 1.0) * HEIGHT_WEIGHT
    period_score = min(wave_period_s / MAX_SCORING_PERIOD_S, 1.0) * PERIOD_WEIGHT
    score = max(0, min(100, int(round(height_score + period_score))))

    for upper, label in SURF_RATINGS:
        if score < upper:
            return label, score
    return TOP_SURF_RATING, score


def rating_color(score: int) -> str:
    if score >= 55:
        return "green"
    if score >= 25:
        return "yellow"
    return "red"


def meters_to_feet(meters: float) -> float:
    return round(meters * FEET_PER_METER, 1)
