import pytest

from errors import InvalidInput
from scoring import (
    calculate_scores,
    humidity_score,
    rainfall_score,
    round_half_up,
    soil_score,
    temperature_score,
    weather_score,
)


@pytest.mark.parametrize("value,digits,expected", [
    (2.5, 0, 3),
    (0.5, 0, 1),
    (1.25, 1, 1.3),
    (-2.5, 0, -2),
    (51.3333, 1, 51.3),
])
def test_round_half_up(value, digits, expected):
    assert round_half_up(value, digits) == pytest.approx(expected)


@pytest.mark.parametrize("value,digits", [(1e308, 1), (float("inf"), 0), (float("nan"), 0)])
def test_round_half_up_rejects_values_out_of_range(value, digits):
    with pytest.raises(InvalidInput):
        round_half_up(value, digits)


@pytest.mark.parametrize("rainfall,expected", [
    (0, 0.7),
    (400, 0.825),
    (800, 0.95),
    (1100, 1.10),
    (1400, 0.95),
    (2400, 0.6),
])
def test_rainfall_curve(rainfall, expected):
    assert rainfall_score(rainfall) == pytest.approx(expected)


def test_rainfall_peaks_mid_band():
    assert rainfall_score(1100) > rainfall_score(1000) > rainfall_score(850)


@pytest.mark.parametrize("temperature,expected", [
    (11, 0.85),
    (22, 1.05),
    (25, 0.95),
    (28, 0.85),
    (43, 0.65),
])
def test_temperature_curve(temperature, expected):
    assert temperature_score(temperature) == pytest.approx(expected)


@pytest.mark.parametrize("humidity,expected", [
    (30, 0.875),
    (60, 0.95),
    (70, 0.95),
    (80, 0.95),
    (100, 0.70),
])
def test_humidity_curve(humidity, expected):
    assert humidity_score(humidity) == pytest.approx(expected)


def test_weather_score_blends_factors():
    # 1.10 * 0.4 + 0.95 * 0.4 + 0.95 * 0.2
    assert weather_score(1100, 25, 70) == pytest.approx(1.01)


def test_weather_score_clamped_to_floor():
    assert weather_score(5000, 60, 100) == pytest.approx(0.7)


@pytest.mark.parametrize("ph,expected", [
    (0, 0.75),
    (5.0, 0.75 + (5.0 / 5.5) * 0.15),
    (5.5, 0.9),
    (5.75, 0.95),
    (6.0, 1.0),
    (6.8, 1.0),
    (7.5, 1.0),
    (7.75, 0.925),
    (8.0, 0.9),
    (9.0, 0.825),
    (14, 0.2),
])
def test_soil_curve(ph, expected):
    assert soil_score(ph) == pytest.approx(expected)


def test_calculate_scores(conditions):
    scores = calculate_scores(conditions)
    assert scores.weather_score == pytest.approx(1.01)
    assert scores.soil_score == 1.0
    assert scores.overall == pytest.approx(1.005)
