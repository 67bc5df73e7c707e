"""
Models for CropYield
- Yield Ensemble: three weighted "decision trees" over environmental scores,
  averaged and perturbed by natural variation
- Confidence: input-quality driven confidence with small jitter
- Risk: three-band classification of the overall environmental score

These are closed-form stand-ins for trained models. In production, these
could be replaced with a Random Forest / XGBoost regressor trained on
district-level yield history; the interfaces below would stay the same.

Randomness always comes from the numpy Generator passed in by the caller,
so a fixed seed reproduces a prediction exactly.
"""

import logging
from typing import Mapping, NamedTuple, Optional, Tuple

import numpy as np

from reference_tables import (
    CROP_BASE_YIELDS,
    DEFAULT_BASE_YIELD,
    DEFAULT_REGIONAL_MULTIPLIER,
    DEFAULT_SEASON_MULTIPLIER,
    REGIONAL_MULTIPLIERS,
    SEASON_MULTIPLIERS,
    YieldRange,
)
from schemas import EnvironmentalScores, RiskLevel
from scoring import clamp, round_half_up

logger = logging.getLogger(__name__)


class YieldEstimate(NamedTuple):
    yield_per_hectare: float
    total_production: float


class YieldEnsembleModel:
    """
    Yield prediction ensemble combining crop base yield with environmental,
    regional and seasonal adjustments.

    Trees:
    - tree1: weather-weighted (70% weather, 30% soil)
    - tree2: additive blend of weather, soil and regional productivity
    - tree3: multiplicative weather x soil x season

    The mean of the trees is scaled by a uniform natural-variation factor and
    clamped to the crop's realistic range. Crops missing from the table fall
    back to a base of 40 q/ha and are not clamped.
    """

    VARIATION_RANGE: Tuple[float, float] = (0.92, 1.08)

    def __init__(
        self,
        base_yields: Mapping[str, YieldRange] = CROP_BASE_YIELDS,
        regional_multipliers: Mapping[str, float] = REGIONAL_MULTIPLIERS,
        season_multipliers: Mapping[str, float] = SEASON_MULTIPLIERS,
    ):
        self.base_yields = base_yields
        self.regional_multipliers = regional_multipliers
        self.season_multipliers = season_multipliers

    def crop_bounds(self, crop_type: str) -> Optional[YieldRange]:
        return self.base_yields.get(crop_type)

    def base_yield(self, crop_type: str) -> float:
        bounds = self.crop_bounds(crop_type)
        if bounds is None:
            logger.debug("No base yield for crop %r, using %s", crop_type, DEFAULT_BASE_YIELD)
            return DEFAULT_BASE_YIELD
        return bounds.optimal

    def regional_multiplier(self, location: str) -> float:
        if location not in self.regional_multipliers:
            logger.debug("No regional multiplier for %r, using %s", location, DEFAULT_REGIONAL_MULTIPLIER)
        return self.regional_multipliers.get(location, DEFAULT_REGIONAL_MULTIPLIER)

    def season_multiplier(self, season: str) -> float:
        return self.season_multipliers.get(season, DEFAULT_SEASON_MULTIPLIER)

    def trees(
        self,
        base: float,
        scores: EnvironmentalScores,
        regional: float,
        season: float,
    ) -> Tuple[float, float, float]:
        weather, soil = scores.weather_score, scores.soil_score
        tree1 = base * weather * 0.7 + base * soil * 0.3
        tree2 = base * (weather * 0.5 + soil * 0.3 + regional * 0.2)
        tree3 = base * weather * soil * season
        return tree1, tree2, tree3

    def predict(
        self,
        crop_type: str,
        scores: EnvironmentalScores,
        location: str,
        season: str,
        area: float,
        rng: np.random.Generator,
    ) -> YieldEstimate:
        """Predict yield per hectare and total production for the field."""
        trees = self.trees(
            self.base_yield(crop_type),
            scores,
            self.regional_multiplier(location),
            self.season_multiplier(season),
        )
        variation = rng.uniform(*self.VARIATION_RANGE)
        predicted = (sum(trees) / len(trees)) * variation

        bounds = self.crop_bounds(crop_type)
        if bounds is not None:
            predicted = bounds.clamp(predicted)

        total = predicted * area
        return YieldEstimate(
            yield_per_hectare=round_half_up(predicted, 1),
            total_production=round_half_up(total, 1),
        )


class ConfidenceModel:
    """
    Prediction confidence from input quality.

    Confidence starts at 85% for an average score of 0.8, gains 2.5 points
    per 0.1 of extra quality, gets +/-4 points of jitter and is clamped to
    75-95%.
    """

    BASE_CONFIDENCE = 85.0
    REFERENCE_QUALITY = 0.8
    QUALITY_GAIN = 25.0
    JITTER = 4.0
    MIN_CONFIDENCE = 75.0
    MAX_CONFIDENCE = 95.0

    def estimate(self, scores: EnvironmentalScores, rng: np.random.Generator) -> int:
        base = self.BASE_CONFIDENCE + (scores.overall - self.REFERENCE_QUALITY) * self.QUALITY_GAIN
        jitter = rng.uniform(-self.JITTER, self.JITTER)
        confidence = clamp(base + jitter, self.MIN_CONFIDENCE, self.MAX_CONFIDENCE)
        return int(round_half_up(confidence))


LOW_RISK_THRESHOLD = 0.95
MODERATE_RISK_THRESHOLD = 0.85


def classify_risk(overall_score: float) -> RiskLevel:
    """Band the averaged weather/soil score: > 0.95 low, > 0.85 moderate, else high."""
    if overall_score > LOW_RISK_THRESHOLD:
        return RiskLevel.LOW
    if overall_score > MODERATE_RISK_THRESHOLD:
        return RiskLevel.MODERATE
    return RiskLevel.HIGH
