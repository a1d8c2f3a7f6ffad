"""Tests for unit conversions and classifications."""

from __future__ import annotations

import pytest

from classification import (
    classify_weather_code,
    direction_label,
    meters_to_feet,
    rating_color,
    surf_quality,
)


class TestClassifyWeatherCode:
    """WMO code table and fallback."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            (0, ("Clear Sky", "clear")),
            (1, ("Mainly Clear", "clear")),
            (2, ("Partly Cloudy", "partly-cloudy")),
            (3, ("Overcast", "overcast")),
            (45, ("Foggy", "fog")),
            (48, ("Foggy", "fog")),
            (51, ("Drizzle", "drizzle")),
            (53, ("Drizzle", "drizzle")),
            (55, ("Drizzle", "drizzle")),
            (61, ("Rain", "rain")),
            (63, ("Rain", "rain")),
            (65, ("Rain", "rain")),
            (66, ("Freezing Rain", "freezing-rain")),
            (67, ("Freezing Rain", "freezing-rain")),
            (71, ("Snow", "snow")),
            (73, ("Snow", "snow")),
            (75, ("Snow", "snow")),
            (77, ("Snow Grains", "snow")),
            (80, ("Rain Showers", "rain")),
            (81, ("Rain Showers", "rain")),
            (82, ("Rain Showers", "rain")),
            (85, ("Snow Showers", "snow")),
            (86, ("Snow Showers", "snow")),
            (95, ("Thunderstorm", "thunderstorm")),
            (96, ("Thunderstorm w/ Hail", "thunderstorm")),
            (99, ("Thunderstorm w/ Hail", "thunderstorm")),
        ],
    )
    def test_known_codes(self, code: int, expected: tuple[str, str]) -> None:
        assert classify_weather_code(code) == expected

    @pytest.mark.parametrize("code", [-1, 4, 50, 62, 100, 9999])
    def test_unknown_codes_fall_back(self, code: int) -> None:
        assert classify_weather_code(code) == ("Unknown", "unknown")


class TestDirectionLabel:
    """16-point compass labels."""

    @pytest.mark.parametrize(
        ("degrees", "expected"),
        [
            (0, "N"),
            (11, "N"),
            (23, "NNE"),
            (45, "NE"),
            (90, "E"),
            (135, "SE"),
            (180, "S"),
            (270, "W"),
            (337.5, "NNW"),
            (350, "N"),
            (360, "N"),
        ],
    )
    def test_labels(self, degrees: float, expected: str) -> None:
        assert direction_label(degrees) == expected

    def test_wraps_values_beyond_full_circle(self) -> None:
        assert direction_label(450) == "E"
        assert direction_label(720) == "N"

    def test_negative_bearing(self) -> None:
        assert direction_label(-90) == "W"


class TestSurfQuality:
    """Score formula and rating buckets."""

    def test_fixture_conditions(self) -> None:
        assert surf_quality(0.8, 9.0) == ("Fair", 42)

    def test_maximum(self) -> None:
        assert surf_quality(2.5, 14.0) == ("Epic", 100)

    def test_saturates_above_maximum(self) -> None:
        assert surf_quality(6.0, 20.0) == ("Epic", 100)

    def test_flat(self) -> None:
        assert surf_quality(0, 0) == ("Flat", 0)

    def test_negative_inputs_clamped(self) -> None:
        assert surf_quality(-1.0, -5.0) == ("Flat", 0)

    def test_period_only(self) -> None:
        # Long period on a flat sea still scores the full 30 period points
        assert surf_quality(0, 14.0) == ("Poor to Fair", 30)

    @pytest.mark.parametrize(
        ("height", "period", "label"),
        [
            (0.1, 2.0, "Flat"),  # 2.8 + 4.3 = 7
            (0.5, 3.0, "Poor"),  # 14 + 6.4 = 20
            (0.8, 5.0, "Poor to Fair"),  # 22.4 + 10.7 = 33
            (1.4, 11.0, "Fair to Good"),  # 39.2 + 23.6 = 63
            (2.0, 12.0, "Good"),  # 56 + 25.7 = 82
            (2.3, 13.0, "Good to Epic"),  # 64.4 + 27.9 = 92
        ],
    )
    def test_rating_buckets(self, height: float, period: float, label: str) -> None:
        assert surf_quality(height, period)[0] == label

    def test_score_in_range(self) -> None:
        for height in (0, 0.3, 0.9, 1.7, 3.0):
            for period in (0, 5, 10, 15):
                _, score = surf_quality(height, period)
                assert 0 <= score <= 100


class TestRatingColor:
    """Color bands for the beach list."""

    @pytest.mark.parametrize(
        ("score", "color"),
        [(0, "red"), (24, "red"), (25, "yellow"), (54, "yellow"), (55, "green"), (100, "green")],
    )
    def test_bands(self, score: int, color: str) -> None:
        assert rating_color(score) == color


class TestMetersToFeet:
    """Wave height conversion."""

    def test_zero(self) -> None:
        assert meters_to_feet(0) == 0

    def test_fixture_height(self) -> None:
        assert meters_to_feet(0.8) == 2.6

    def test_monotonic(self) -> None:
        heights = [i * 0.05 for i in range(200)]
        feet = [meters_to_feet(h) for h in heights]
        assert feet == sorted(feet)
