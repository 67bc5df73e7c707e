"""
CropYield engine - public entry points.

    predict(conditions, rng)   -> PredictionResult
    advise(conditions)         -> FarmingAdvisory

plus the insight helpers used by the results page (factor analysis, yield
history, regional benchmark, crop comparison).

``conditions`` may be a CropConditions instance or a plain mapping using
either snake_case or camelCase keys. ``rng`` may be a numpy Generator, an
integer seed or None for fresh entropy. Nothing here keeps state between
calls.
"""

import logging
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
from pydantic import ValidationError

import comparison
import insights
from advisory import generate_farming_advisory
from errors import InvalidInput
from ml_models import ConfidenceModel, YieldEnsembleModel, classify_risk
from recommendations import generate_recommendations
from schemas import (
    CropComparisonReport,
    CropConditions,
    FactorImpact,
    FarmingAdvisory,
    PredictionResult,
    RegionalComparison,
    TrendPoint,
)
from scoring import calculate_scores, round_half_up

logger = logging.getLogger(__name__)

RandomSource = Union[np.random.Generator, int, None]
ConditionsInput = Union[CropConditions, Mapping[str, Any]]

yield_model = YieldEnsembleModel()
confidence_model = ConfidenceModel()


def make_rng(rng: RandomSource = None) -> np.random.Generator:
    """Return ``rng`` itself when it is already a Generator, else seed a new one."""
    return np.random.default_rng(rng)


def ensure_conditions(conditions: ConditionsInput) -> CropConditions:
    if isinstance(conditions, CropConditions):
        return conditions
    try:
        return CropConditions.model_validate(conditions)
    except ValidationError as exc:
        error = InvalidInput.from_validation_error(exc)
        logger.warning("Rejected crop conditions: %s", error.errors)
        raise error from exc


def predict(conditions: ConditionsInput, rng: RandomSource = None) -> PredictionResult:
    """Predict yield, confidence and risk for a field, with advisory entries."""
    conditions = ensure_conditions(conditions)
    generator = make_rng(rng)

    scores = calculate_scores(conditions)
    estimate = yield_model.predict(
        conditions.crop_type,
        scores,
        conditions.location,
        conditions.season,
        conditions.area,
        generator,
    )
    confidence = confidence_model.estimate(scores, generator)
    risk_level = classify_risk(scores.overall)

    logger.info(
        "Predicted %s in %s: %.1f q/ha, confidence=%d%% risk=%s",
        conditions.crop_type, conditions.location or "-",
        estimate.yield_per_hectare, confidence, risk_level.value,
    )

    return PredictionResult(
        yield_per_hectare=estimate.yield_per_hectare,
        total_production=estimate.total_production,
        confidence=confidence,
        risk_level=risk_level,
        risk_color=risk_level.color,
        weather_score=int(round_half_up(scores.weather_score * 100)),
        soil_score=int(round_half_up(scores.soil_score * 100)),
        recommendations=tuple(generate_recommendations(conditions, scores)),
    )


def advise(conditions: ConditionsInput) -> FarmingAdvisory:
    """Full farming advisory for the field conditions."""
    return generate_farming_advisory(ensure_conditions(conditions))


def analyze_factors(conditions: ConditionsInput) -> Tuple[FactorImpact, ...]:
    return insights.analyze_factors(ensure_conditions(conditions))


def historical_trend(
    predicted_yield: float,
    rng: RandomSource = None,
    years: int = 6,
    current_year: Optional[int] = None,
) -> Tuple[TrendPoint, ...]:
    return insights.historical_trend(predicted_yield, make_rng(rng), years, current_year)


def compare_regional(
    crop_type: str, location: str, predicted_yield: float
) -> Optional[RegionalComparison]:
    return insights.compare_regional(crop_type, location, predicted_yield)


def compare_crops(
    conditions: ConditionsInput,
    crops: Sequence[str],
    max_crops: int = comparison.MAX_COMPARISON_CROPS,
) -> CropComparisonReport:
    return comparison.compare_crops(ensure_conditions(conditions), crops, max_crops)
