"""
Environmental Scorer - turns field conditions into quality scores.

Each factor is scored on a three-piece curve around its optimal band:
a linear rise below the band, a bump inside it and a linear decay above it.
The weather score blends rainfall, temperature and humidity; the soil score
is a pH curve that is flat across the optimal 6.0-7.5 band.
"""

import math

from errors import InvalidInput
from reference_tables import OPTIMAL_RANGES
from schemas import CropConditions, EnvironmentalScores

WEATHER_SCORE_MIN = 0.7
WEATHER_SCORE_MAX = 1.3

RAINFALL_WEIGHT = 0.4
TEMPERATURE_WEIGHT = 0.4
HUMIDITY_WEIGHT = 0.2


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves upwards (2.5 -> 3), unlike the built-in banker's rounding."""
    factor = 10 ** digits
    scaled = value * factor + 0.5
    if not math.isfinite(scaled):
        raise InvalidInput(f"Cannot round {value!r}: result is out of range")
    return math.floor(scaled) / factor


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def rainfall_score(rainfall: float) -> float:
    band = OPTIMAL_RANGES["rainfall"]
    if rainfall < band.minimum:
        return 0.7 + (rainfall / band.minimum) * 0.25
    if rainfall > band.maximum:
        return 1.0 - ((rainfall - band.maximum) / 1000) * 0.4
    position = (rainfall - band.minimum) / band.width
    return 0.95 + math.sin(position * math.pi) * 0.15


def temperature_score(temperature: float) -> float:
    band = OPTIMAL_RANGES["temperature"]
    if temperature < band.minimum:
        return 0.75 + (temperature / band.minimum) * 0.2
    if temperature > band.maximum:
        return 1.0 - ((temperature - band.maximum) / 15) * 0.35
    position = (temperature - band.minimum) / band.width
    return 0.95 + math.cos(position * math.pi) * 0.1


def humidity_score(humidity: float) -> float:
    band = OPTIMAL_RANGES["humidity"]
    if humidity < band.minimum:
        return 0.8 + (humidity / band.minimum) * 0.15
    if humidity > band.maximum:
        return 0.95 - ((humidity - band.maximum) / 20) * 0.25
    return 0.95


def weather_score(rainfall: float, temperature: float, humidity: float) -> float:
    """Weighted blend of the three weather factors, clamped to [0.7, 1.3]."""
    blended = (
        rainfall_score(rainfall) * RAINFALL_WEIGHT
        + temperature_score(temperature) * TEMPERATURE_WEIGHT
        + humidity_score(humidity) * HUMIDITY_WEIGHT
    )
    return clamp(blended, WEATHER_SCORE_MIN, WEATHER_SCORE_MAX)


def soil_score(ph: float) -> float:
    """
    Soil pH curve.

    Strongly acidic (< 5.5) soils recover slowly towards 0.9, alkaline
    (> 8.0) soils lose 0.25 per two pH units, 6.0-7.5 scores a flat 1.0 and
    the two shoulders in between interpolate from 0.9.
    """
    if ph < 5.5:
        return 0.75 + (ph / 5.5) * 0.15
    if ph > 8.0:
        return 0.95 - ((ph - 8.0) / 2.0) * 0.25
    if OPTIMAL_RANGES["soil_ph"].contains(ph):
        return 1.0
    if ph < 6.0:
        return 0.9 + (ph - 5.5) / 0.5 * 0.1
    return 0.9 + (8.0 - ph) / 0.5 * 0.05


def calculate_scores(conditions: CropConditions) -> EnvironmentalScores:
    return EnvironmentalScores(
        weather_score=weather_score(
            conditions.rainfall, conditions.temperature, conditions.humidity
        ),
        soil_score=soil_score(conditions.soil_ph),
    )
