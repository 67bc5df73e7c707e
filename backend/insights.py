"""
Prediction insights - factor breakdown, yield history and regional benchmark.
"""

import logging
import math
from datetime import date
from typing import Optional, Tuple

import numpy as np

from errors import InvalidInput
from reference_tables import OPTIMAL_RANGES, REGIONAL_AVERAGE_YIELDS
from schemas import (
    MAX_YIELD_PER_HECTARE,
    ComparisonStatus,
    CropConditions,
    FactorImpact,
    FactorStatus,
    RegionalComparison,
    TrendPoint,
)
from scoring import calculate_scores, round_half_up

logger = logging.getLogger(__name__)

IMPACT_SCALE = 85
ANNUAL_IMPROVEMENT = 0.02
HISTORY_VARIATION = (0.85, 0.25)  # lower bound, spread
SIMILAR_THRESHOLD_PCT = 5.0


def _impact(score: float) -> int:
    return int(round_half_up(score * IMPACT_SCALE))


def _check_yield(predicted_yield: float) -> None:
    if not math.isfinite(predicted_yield) or not 0 <= predicted_yield <= MAX_YIELD_PER_HECTARE:
        raise InvalidInput(
            f"predicted yield must be a finite number between 0 and {MAX_YIELD_PER_HECTARE:g}"
        )


def _score_status(score: float) -> FactorStatus:
    if score > 0.95:
        return FactorStatus.GOOD
    if score > 0.85:
        return FactorStatus.MODERATE
    return FactorStatus.POOR


def analyze_factors(conditions: CropConditions) -> Tuple[FactorImpact, ...]:
    """
    Relative impact of rainfall, temperature, soil pH and humidity on the
    prediction, on a 0-85 scale with a good/moderate/poor status each.

    Rainfall and soil pH reuse the weather and soil scores; temperature and
    humidity only distinguish in-band from out-of-band values.
    """
    scores = calculate_scores(conditions)
    temperature_ok = OPTIMAL_RANGES["temperature"].contains(conditions.temperature)
    humidity_ok = OPTIMAL_RANGES["humidity"].contains(conditions.humidity)

    return (
        FactorImpact(
            factor="Rainfall",
            impact=_impact(scores.weather_score),
            status=_score_status(scores.weather_score),
        ),
        FactorImpact(
            factor="Temperature",
            impact=_impact(0.95 if temperature_ok else 0.8),
            status=FactorStatus.GOOD if temperature_ok else FactorStatus.MODERATE,
        ),
        FactorImpact(
            factor="Soil pH",
            impact=_impact(scores.soil_score),
            status=_score_status(scores.soil_score),
        ),
        FactorImpact(
            factor="Humidity",
            impact=_impact(0.9 if humidity_ok else 0.75),
            status=FactorStatus.GOOD if humidity_ok else FactorStatus.MODERATE,
        ),
    )


def historical_trend(
    predicted_yield: float,
    rng: np.random.Generator,
    years: int = 6,
    current_year: Optional[int] = None,
) -> Tuple[TrendPoint, ...]:
    """
    Illustrative yield series ending at the current (predicted) year.

    Each year carries 2% of cumulative improvement and a uniform 0.85-1.10
    variation around the predicted yield. Oldest year first.
    """
    if years < 1:
        raise InvalidInput("years must be at least 1")
    _check_yield(predicted_yield)

    if current_year is None:
        current_year = date.today().year
    low, spread = HISTORY_VARIATION

    points = []
    for offset in range(years - 1, -1, -1):
        trend_factor = 1 + (years - offset - 1) * ANNUAL_IMPROVEMENT
        variation = low + rng.random() * spread
        points.append(TrendPoint(
            year=current_year - offset,
            yield_per_hectare=round_half_up(predicted_yield * variation * trend_factor, 1),
            predicted=offset == 0,
        ))
    return tuple(points)


def compare_regional(
    crop_type: str, location: str, predicted_yield: float
) -> Optional[RegionalComparison]:
    """
    Benchmark a predicted yield against the regional average for the crop.

    Unknown locations are compared with the mean over every region that grows
    the crop. Returns None when there is no regional data for the crop.
    """
    _check_yield(predicted_yield)

    averages = REGIONAL_AVERAGE_YIELDS.get(crop_type)
    if not averages:
        logger.debug("No regional averages for crop %r", crop_type)
        return None

    average = averages.get(location)
    if average is None:
        average = sum(averages.values()) / len(averages)

    difference = predicted_yield - average
    percentage = difference / average * 100
    if abs(percentage) < SIMILAR_THRESHOLD_PCT:
        status = ComparisonStatus.SIMILAR
    elif percentage > 0:
        status = ComparisonStatus.ABOVE
    else:
        status = ComparisonStatus.BELOW

    return RegionalComparison(
        crop_type=crop_type,
        location=location,
        predicted_yield=predicted_yield,
        regional_average=round_half_up(average, 1),
        difference=round_half_up(difference, 1),
        percentage_difference=round_half_up(percentage, 1),
        status=status,
    )
