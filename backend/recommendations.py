"""
Recommendation Engine - advisory entries attached to a yield prediction.

Rule groups run in a fixed order (rainfall, temperature, soil, crop,
weather score) and each adds at most one entry, so the output order is
stable for display.
"""

from dataclasses import dataclass
from typing import List, Tuple

from rules import Rule, RuleGroup, constant, evaluate_groups
from schemas import (
    CropConditions,
    EnvironmentalScores,
    Recommendation,
    RecommendationType,
)


@dataclass(frozen=True)
class YieldContext:
    conditions: CropConditions
    scores: EnvironmentalScores


# ===== Advisory entries =====
CRITICAL_IRRIGATION = Recommendation(
    type=RecommendationType.WARNING,
    title="Critical Irrigation Needed",
    text="Install drip irrigation system and ensure 3-4 irrigations per week during critical growth stages.",
)

SUPPLEMENTAL_IRRIGATION = Recommendation(
    type=RecommendationType.INFO,
    title="Supplemental Irrigation",
    text="Consider supplemental irrigation during flowering and grain filling stages for optimal yield.",
)

HEAT_STRESS = Recommendation(
    type=RecommendationType.WARNING,
    title="Heat Stress Management",
    text="Apply mulching and increase irrigation frequency. Consider shade nets for sensitive crops.",
)

COLD_PROTECTION = Recommendation(
    type=RecommendationType.INFO,
    title="Cold Protection",
    text="Monitor for frost and consider using crop covers during cold spells.",
)

LIME_APPLICATION = Recommendation(
    type=RecommendationType.INFO,
    title="Soil pH Adjustment",
    text="Apply 200-300 kg lime per hectare to increase soil pH to optimal range (6.0-7.5).",
)

GYPSUM_TREATMENT = Recommendation(
    type=RecommendationType.INFO,
    title="Alkaline Soil Treatment",
    text="Apply gypsum and organic matter to reduce soil alkalinity and improve nutrient availability.",
)

CROP_CARE = {
    "Rice": Recommendation(
        type=RecommendationType.SUCCESS,
        title="Rice-Specific Care",
        text="Maintain 2-5cm water level during vegetative stage. Apply silicon fertilizer for disease resistance.",
    ),
    "Wheat": Recommendation(
        type=RecommendationType.SUCCESS,
        title="Wheat Management",
        text="Apply balanced NPK (120:60:40) and ensure proper drainage to prevent waterlogging.",
    ),
    "Maize": Recommendation(
        type=RecommendationType.SUCCESS,
        title="Maize Optimization",
        text="Ensure adequate plant spacing (60x20cm) and apply side-dressing of nitrogen at knee-high stage.",
    ),
}

WEATHER_RISK_MITIGATION = Recommendation(
    type=RecommendationType.WARNING,
    title="Weather Risk Mitigation",
    text="Current weather conditions may affect yield. Consider crop insurance and adaptive management practices.",
)

WEATHER_RISK_THRESHOLD = 0.85


# ===== Rule groups =====
def _crop_is(crop_type: str):
    return lambda ctx: ctx.conditions.crop_type == crop_type


RAINFALL_RULES = RuleGroup("rainfall", (
    Rule("critical_irrigation", lambda ctx: ctx.conditions.rainfall < 600, constant(CRITICAL_IRRIGATION)),
    Rule("supplemental_irrigation", lambda ctx: ctx.conditions.rainfall < 800, constant(SUPPLEMENTAL_IRRIGATION)),
))

TEMPERATURE_RULES = RuleGroup("temperature", (
    Rule("heat_stress", lambda ctx: ctx.conditions.temperature > 32, constant(HEAT_STRESS)),
    Rule("cold_protection", lambda ctx: ctx.conditions.temperature < 18, constant(COLD_PROTECTION)),
))

SOIL_RULES = RuleGroup("soil", (
    Rule("lime_application", lambda ctx: ctx.conditions.soil_ph < 6.0, constant(LIME_APPLICATION)),
    Rule("gypsum_treatment", lambda ctx: ctx.conditions.soil_ph > 8.0, constant(GYPSUM_TREATMENT)),
))

CROP_RULES = RuleGroup("crop", tuple(
    Rule(f"{crop.lower()}_care", _crop_is(crop), constant(entry))
    for crop, entry in CROP_CARE.items()
))

WEATHER_RULES = RuleGroup("weather", (
    Rule(
        "weather_risk_mitigation",
        lambda ctx: ctx.scores.weather_score < WEATHER_RISK_THRESHOLD,
        constant(WEATHER_RISK_MITIGATION),
    ),
))

RECOMMENDATION_RULES: Tuple[RuleGroup, ...] = (
    RAINFALL_RULES,
    TEMPERATURE_RULES,
    SOIL_RULES,
    CROP_RULES,
    WEATHER_RULES,
)


def generate_recommendations(
    conditions: CropConditions, scores: EnvironmentalScores
) -> List[Recommendation]:
    return evaluate_groups(RECOMMENDATION_RULES, YieldContext(conditions, scores))
