"""
Advisory Orchestrator - full farming advisory for a set of crop conditions.

Independent of the yield ensemble: it reads the raw conditions only and
produces weather risks, soil advice, pest risks, the crop calendar window,
irrigation and fertilizer schedules, a market snapshot, general
recommendations, insurance advice and an overall risk level. Crop names
are matched case-insensitively here.
"""

import logging
from dataclasses import dataclass
from itertools import chain
from typing import Iterable, Tuple

from reference_tables import (
    ACIDIC_SOIL,
    ALKALINE_SOIL,
    CROP_CALENDAR,
    CROP_TIPS,
    DEFAULT_FERTILIZER_SCHEDULE,
    DEFAULT_MARKET_SNAPSHOT,
    DROUGHT_RISK,
    EXCESS_WATER_RISK,
    FERTILIZER_SCHEDULES,
    GENERAL_TIPS,
    HEAT_STRESS_RISK,
    MARKET_SNAPSHOTS,
    OPTIMAL_SOIL,
    PEST_RULES,
    UNKNOWN_CROP_WINDOW,
    CropWindow,
)
from rules import Rule, RuleGroup, always, constant, evaluate_all, evaluate_groups
from schemas import (
    AdvisoryLevel,
    CropConditions,
    FarmingAdvisory,
    MarketInsight,
    PestRisk,
    SoilRecommendation,
    WeatherRisk,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdvisoryContext:
    conditions: CropConditions
    weather_risks: Tuple[WeatherRisk, ...] = ()
    soil_advice: SoilRecommendation = OPTIMAL_SOIL

    @property
    def crop_key(self) -> str:
        return self.conditions.crop_type.lower()

    def has_risk(self, risk_type: str) -> bool:
        return any(risk.type == risk_type for risk in self.weather_risks)


def _flatten(parts: Iterable[Tuple[str, ...]]) -> Tuple[str, ...]:
    return tuple(chain.from_iterable(parts))


# ===== Weather risks =====
WEATHER_RISK_RULES: Tuple[RuleGroup, ...] = (
    RuleGroup("rainfall", (
        Rule("drought", lambda ctx: ctx.conditions.rainfall < 600, constant(DROUGHT_RISK)),
        Rule("excess_water", lambda ctx: ctx.conditions.rainfall > 2000, constant(EXCESS_WATER_RISK)),
    )),
    RuleGroup("temperature", (
        Rule("heat_stress", lambda ctx: ctx.conditions.temperature > 35, constant(HEAT_STRESS_RISK)),
    )),
)


def assess_weather_risks(context: AdvisoryContext) -> Tuple[WeatherRisk, ...]:
    return tuple(evaluate_groups(WEATHER_RISK_RULES, context))


# ===== Soil =====
SOIL_ADVICE_RULES = RuleGroup("soil_ph", (
    Rule("acidic", lambda ctx: ctx.conditions.soil_ph < 6.0, constant(ACIDIC_SOIL)),
    Rule("alkaline", lambda ctx: ctx.conditions.soil_ph > 8.0, constant(ALKALINE_SOIL)),
    Rule("optimal", always, constant(OPTIMAL_SOIL)),
))


def advise_soil(context: AdvisoryContext) -> SoilRecommendation:
    return SOIL_ADVICE_RULES.evaluate(context)


# ===== Pests =====
def assess_pest_risks(context: AdvisoryContext) -> Tuple[PestRisk, ...]:
    conditions = context.conditions
    return tuple(
        rule.risk
        for rule in PEST_RULES.get(context.crop_key, ())
        if rule.matches(conditions.humidity, conditions.temperature)
    )


# ===== Crop calendar =====
def crop_window(context: AdvisoryContext) -> CropWindow:
    window = CROP_CALENDAR.get((context.crop_key, context.conditions.season))
    if window is None:
        logger.debug(
            "No crop calendar entry for %r in %r",
            context.conditions.crop_type, context.conditions.season,
        )
        return UNKNOWN_CROP_WINDOW
    return window


# ===== Irrigation =====
IRRIGATION_RULES: Tuple[RuleGroup, ...] = (
    RuleGroup("rainfall", (
        Rule("low_rainfall", lambda ctx: ctx.conditions.rainfall < 800, constant((
            "Frequent irrigation needed - every 7-10 days",
            "Use drip irrigation to conserve water",
        ))),
        Rule("high_rainfall", lambda ctx: ctx.conditions.rainfall > 1500, constant((
            "Minimal irrigation required",
            "Focus on drainage management",
        ))),
        Rule("moderate_rainfall", always, constant((
            "Moderate irrigation - every 10-14 days",
        ))),
    )),
    RuleGroup("temperature", (
        Rule("hot", lambda ctx: ctx.conditions.temperature > 30, constant((
            "Early morning irrigation recommended",
            "Avoid midday watering to prevent evaporation",
        ))),
    )),
)


def irrigation_schedule(context: AdvisoryContext) -> Tuple[str, ...]:
    return _flatten(evaluate_groups(IRRIGATION_RULES, context))


# ===== Fertilizer =====
SOIL_CORRECTION_RULES = RuleGroup("soil_correction", (
    Rule("lime", lambda ctx: ctx.conditions.soil_ph < 6.0, constant(
        "Additional lime application recommended"
    )),
    Rule("gypsum", lambda ctx: ctx.conditions.soil_ph > 8.0, constant(
        "Add gypsum to improve soil structure"
    )),
))


def fertilizer_schedule(context: AdvisoryContext) -> Tuple[str, ...]:
    schedule = FERTILIZER_SCHEDULES.get(context.crop_key, DEFAULT_FERTILIZER_SCHEDULE)
    correction = SOIL_CORRECTION_RULES.evaluate(context)
    if correction is not None:
        schedule = schedule + (correction,)
    return schedule


# ===== Market =====
def market_insight(context: AdvisoryContext) -> MarketInsight:
    return MARKET_SNAPSHOTS.get(context.crop_key, DEFAULT_MARKET_SNAPSHOT)


# ===== General recommendations =====
GENERAL_RECOMMENDATION_RULES: Tuple[Rule, ...] = (
    Rule("drought", lambda ctx: ctx.has_risk(DROUGHT_RISK.type), constant((
        "Install water-efficient irrigation systems",
        "Use drought-resistant crop varieties",
    ))),
    Rule("heat_stress", lambda ctx: ctx.has_risk(HEAT_STRESS_RISK.type), constant((
        "Provide shade nets during peak summer",
        "Increase irrigation frequency",
    ))),
    Rule(
        "soil_ph",
        lambda ctx: ctx.conditions.soil_ph < 6.5 or ctx.conditions.soil_ph > 7.5,
        lambda ctx: (ctx.soil_advice.advice,),
    ),
    Rule("crop_tips", lambda ctx: ctx.crop_key in CROP_TIPS, lambda ctx: CROP_TIPS[ctx.crop_key]),
    Rule("general", always, constant(GENERAL_TIPS)),
)


def general_recommendations(context: AdvisoryContext) -> Tuple[str, ...]:
    return _flatten(evaluate_all(GENERAL_RECOMMENDATION_RULES, context))


# ===== Insurance =====
INSURANCE_RULES = RuleGroup("insurance", (
    Rule(
        "high_risk",
        lambda ctx: any(risk.level == AdvisoryLevel.HIGH for risk in ctx.weather_risks),
        lambda ctx: (
            "High weather risks detected. Strongly recommend Pradhan Mantri Fasal Bima "
            f"Yojana (PMFBY) insurance for {ctx.conditions.crop_type}. Coverage includes "
            "drought, flood, and pest damages."
        ),
    ),
    Rule(
        "standard",
        always,
        lambda ctx: (
            "Consider crop insurance for protection against unforeseen weather events. "
            f"PMFBY offers affordable premiums for {ctx.conditions.crop_type} cultivation."
        ),
    ),
))


def insurance_advice(context: AdvisoryContext) -> str:
    return INSURANCE_RULES.evaluate(context)


# ===== Overall risk =====
def highest_risk(weather_risks: Iterable[WeatherRisk]) -> AdvisoryLevel:
    """Most severe weather risk level, or low when there are none."""
    return max(
        (risk.level for risk in weather_risks),
        key=lambda level: level.rank,
        default=AdvisoryLevel.LOW,
    )


def generate_farming_advisory(conditions: CropConditions) -> FarmingAdvisory:
    """Run every advisory rule set over the conditions."""
    context = AdvisoryContext(conditions)
    weather_risks = assess_weather_risks(context)
    soil_advice = advise_soil(context)
    # General recommendations and insurance build on the risks found above
    context = AdvisoryContext(conditions, weather_risks, soil_advice)
    window = crop_window(context)

    return FarmingAdvisory(
        recommendations=general_recommendations(context),
        weather_risks=weather_risks,
        overall_risk=highest_risk(weather_risks),
        soil_advice=soil_advice,
        pest_risks=assess_pest_risks(context),
        planting_date=window.planting,
        harvest_date=window.harvest,
        irrigation_schedule=irrigation_schedule(context),
        fertilizer_schedule=fertilizer_schedule(context),
        market_insights=market_insight(context),
        insurance_advice=insurance_advice(context),
    )
