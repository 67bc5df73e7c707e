"""
Crop Comparison - side-by-side view of several crops under the same field
conditions: quick yield estimate (tonnes/ha), profitability per hectare,
weather risk, water need and market price.
"""

import logging
from typing import Sequence

from pydantic import ValidationError

from advisory import generate_farming_advisory
from errors import InvalidInput
from reference_tables import (
    COMPARISON_BASE_YIELDS,
    CULTIVATION_COSTS,
    DEFAULT_COMPARISON_BASE_YIELD,
    DEFAULT_CULTIVATION_COST,
    DEFAULT_MARKET_PRICE,
    DEFAULT_WATER_REQUIREMENT,
    MARKET_PRICES,
    WATER_REQUIREMENTS,
)
from schemas import CropComparison, CropComparisonReport, CropConditions
from scoring import round_half_up

logger = logging.getLogger(__name__)

MIN_COMPARISON_CROPS = 2
MAX_COMPARISON_CROPS = 4


def comparison_yield(conditions: CropConditions) -> float:
    """Rule-of-thumb yield in tonnes/ha used only for ranking crops."""
    crop_yield = COMPARISON_BASE_YIELDS.get(
        conditions.crop_type.lower(), DEFAULT_COMPARISON_BASE_YIELD
    )

    if conditions.rainfall < 600:
        crop_yield *= 0.7
    elif conditions.rainfall > 1500:
        crop_yield *= 0.85
    else:
        crop_yield *= 1.1

    if conditions.temperature > 35:
        crop_yield *= 0.8
    elif conditions.temperature < 15:
        crop_yield *= 0.75
    else:
        crop_yield *= 1.05

    if 6.5 <= conditions.soil_ph <= 7.5:
        crop_yield *= 1.1
    else:
        crop_yield *= 0.9

    return round_half_up(crop_yield, 2)


def profitability(crop: str, crop_yield: float) -> int:
    """Net return per hectare in ₹: yield (t/ha) x price (₹/kg) x 1000 - cost."""
    price = MARKET_PRICES.get(crop.lower(), DEFAULT_MARKET_PRICE)
    cost = CULTIVATION_COSTS.get(crop.lower(), DEFAULT_CULTIVATION_COST)
    revenue = crop_yield * price * 1000
    return int(round_half_up(revenue - cost))


def water_requirement(crop: str) -> str:
    return WATER_REQUIREMENTS.get(crop.lower(), DEFAULT_WATER_REQUIREMENT)


def compare_crops(
    conditions: CropConditions,
    crops: Sequence[str],
    max_crops: int = MAX_COMPARISON_CROPS,
) -> CropComparisonReport:
    """Compare 2..max_crops distinct crops grown under the given conditions."""
    selected = list(dict.fromkeys(crops))
    if len(selected) < MIN_COMPARISON_CROPS:
        raise InvalidInput(f"Select at least {MIN_COMPARISON_CROPS} different crops to compare")
    if len(selected) > max_crops:
        raise InvalidInput(f"At most {max_crops} crops can be compared at once")

    comparisons = []
    for crop in selected:
        try:
            crop_conditions = CropConditions.model_validate(
                {**conditions.model_dump(), "crop_type": crop}
            )
        except ValidationError as exc:
            raise InvalidInput.from_validation_error(exc) from exc

        advisory = generate_farming_advisory(crop_conditions)
        predicted = comparison_yield(crop_conditions)
        comparisons.append(CropComparison(
            crop=crop,
            predicted_yield=predicted,
            profitability=profitability(crop, predicted),
            risk_level=advisory.overall_risk,
            water_requirement=water_requirement(crop),
            market_price=advisory.market_insights.current_price,
            season=conditions.season,
        ))

    best = comparisons[0]
    for candidate in comparisons[1:]:
        if candidate.profitability > best.profitability:
            best = candidate
    logger.debug("Compared %s, best option %s", selected, best.crop)

    return CropComparisonReport(comparisons=tuple(comparisons), best_option=best)
