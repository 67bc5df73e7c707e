import pytest

from advisory import (
    AdvisoryContext,
    assess_pest_risks,
    assess_weather_risks,
    generate_farming_advisory,
    highest_risk,
    irrigation_schedule,
)
from reference_tables import DROUGHT_RISK, EXCESS_WATER_RISK, GENERAL_TIPS, HEAT_STRESS_RISK
from schemas import AdvisoryLevel, MarketTrend


@pytest.fixture
def wheat_drought(make_conditions):
    return make_conditions(
        crop_type="Wheat", location="Punjab", season="Rabi (Winter)",
        rainfall=500, temperature=19, humidity=65, soil_ph=7.0, area=10,
    )


def risk_types(risks):
    return [risk.type for risk in risks]


def test_wheat_drought_scenario(wheat_drought):
    advisory = generate_farming_advisory(wheat_drought)

    assert risk_types(advisory.weather_risks) == ["Drought Risk"]
    assert advisory.weather_risks[0].level is AdvisoryLevel.HIGH
    assert advisory.overall_risk is AdvisoryLevel.HIGH
    assert advisory.soil_advice.condition == "Optimal soil pH"
    assert advisory.planting_date == "November-December"
    assert advisory.harvest_date == "March-April"
    assert advisory.pest_risks == ()
    assert advisory.irrigation_schedule == (
        "Frequent irrigation needed - every 7-10 days",
        "Use drip irrigation to conserve water",
    )
    assert advisory.fertilizer_schedule == (
        "Basal: 50% N, 100% P, 100% K at sowing",
        "Top dress: 50% N at crown root initiation",
    )
    assert advisory.market_insights.current_price == "₹22-27/kg"
    assert advisory.market_insights.trend is MarketTrend.RISING
    assert advisory.recommendations == (
        "Install water-efficient irrigation systems",
        "Use drought-resistant crop varieties",
        "Ensure proper seed rate (100-125 kg/ha)",
        "Monitor for rust diseases regularly",
    ) + GENERAL_TIPS
    assert "Strongly recommend" in advisory.insurance_advice
    assert "for Wheat." in advisory.insurance_advice


def test_rice_pests_in_humid_heat(make_conditions):
    advisory = generate_farming_advisory(make_conditions(humidity=85, temperature=31))
    assert [(p.pest, p.risk) for p in advisory.pest_risks] == [
        ("Brown Planthopper", AdvisoryLevel.HIGH),
        ("Rice Blast", AdvisoryLevel.MEDIUM),
    ]


@pytest.mark.parametrize("overrides,expected", [
    ({"crop_type": "Wheat", "humidity": 75, "temperature": 15}, ["Rust Disease"]),
    ({"crop_type": "Wheat", "humidity": 75, "temperature": 20}, []),
    ({"crop_type": "Maize", "temperature": 33}, ["Fall Armyworm"]),
    ({"crop_type": "Cotton", "humidity": 40}, ["Bollworm"]),
    ({"crop_type": "Sugarcane", "temperature": 36}, ["Red Rot"]),
    ({"crop_type": "RICE", "humidity": 85}, ["Brown Planthopper"]),
    ({"crop_type": "Barley", "humidity": 95, "temperature": 40}, []),
])
def test_pest_rules(make_conditions, overrides, expected):
    risks = assess_pest_risks(AdvisoryContext(make_conditions(**overrides)))
    assert [risk.pest for risk in risks] == expected


@pytest.mark.parametrize("overrides,expected", [
    ({"rainfall": 500}, ["Drought Risk"]),
    ({"rainfall": 2500}, ["Excess Water"]),
    ({"temperature": 38}, ["Heat Stress"]),
    ({"rainfall": 400, "temperature": 38}, ["Drought Risk", "Heat Stress"]),
    ({"rainfall": 2000, "temperature": 35}, []),
])
def test_weather_risks(make_conditions, overrides, expected):
    risks = assess_weather_risks(AdvisoryContext(make_conditions(**overrides)))
    assert risk_types(risks) == expected


def test_heat_stress_advice(make_conditions):
    advisory = generate_farming_advisory(make_conditions(temperature=38))
    assert advisory.weather_risks[0].level is AdvisoryLevel.MEDIUM
    assert advisory.overall_risk is AdvisoryLevel.MEDIUM
    assert advisory.recommendations[:2] == (
        "Provide shade nets during peak summer",
        "Increase irrigation frequency",
    )
    assert advisory.irrigation_schedule == (
        "Moderate irrigation - every 10-14 days",
        "Early morning irrigation recommended",
        "Avoid midday watering to prevent evaporation",
    )
    assert advisory.insurance_advice.startswith("Consider crop insurance")


@pytest.mark.parametrize("rainfall,expected", [
    (700, ("Frequent irrigation needed - every 7-10 days", "Use drip irrigation to conserve water")),
    (1100, ("Moderate irrigation - every 10-14 days",)),
    (1600, ("Minimal irrigation required", "Focus on drainage management")),
])
def test_irrigation_by_rainfall(make_conditions, rainfall, expected):
    assert irrigation_schedule(AdvisoryContext(make_conditions(rainfall=rainfall))) == expected


def test_acidic_soil(make_conditions):
    advisory = generate_farming_advisory(make_conditions(soil_ph=5.0))
    assert advisory.soil_advice.condition == "Acidic soil detected"
    assert advisory.fertilizer_schedule[-1] == "Additional lime application recommended"
    assert len(advisory.fertilizer_schedule) == 4
    assert "Apply lime to increase soil pH" in advisory.recommendations


def test_alkaline_soil(make_conditions):
    advisory = generate_farming_advisory(make_conditions(soil_ph=8.5))
    assert advisory.soil_advice.condition == "Alkaline soil detected"
    assert advisory.fertilizer_schedule[-1] == "Add gypsum to improve soil structure"
    assert "Add organic matter and sulfur" in advisory.recommendations


def test_slightly_acidic_soil_repeats_optimal_advice(make_conditions):
    advisory = generate_farming_advisory(make_conditions(soil_ph=6.2))
    assert advisory.soil_advice.condition == "Optimal soil pH"
    assert "Maintain current soil conditions" in advisory.recommendations


def test_rice_kharif_calendar_and_market(conditions):
    advisory = generate_farming_advisory(conditions.model_copy(update={"season": "Kharif (Monsoon)"}))
    assert (advisory.planting_date, advisory.harvest_date) == ("June-July", "November-December")
    assert advisory.market_insights.trend is MarketTrend.STABLE
    assert len(advisory.fertilizer_schedule) == 3
    assert advisory.recommendations == (
        "Maintain 2-3 cm water level in field",
        "Use certified seeds for better yield",
    ) + GENERAL_TIPS


def test_unknown_crop_gets_generic_advice(make_conditions):
    advisory = generate_farming_advisory(make_conditions(crop_type="Barley", season="Rabi (Winter)"))
    assert advisory.planting_date == "Consult local expert"
    assert advisory.harvest_date == "Consult local expert"
    assert advisory.market_insights.current_price == "Contact local market"
    assert advisory.market_insights.recommendation == "Monitor market conditions"
    assert advisory.fertilizer_schedule == (
        "Follow crop-specific fertilizer recommendations",
        "Apply based on soil test results",
    )
    assert advisory.recommendations == GENERAL_TIPS
    assert advisory.insurance_advice == (
        "Consider crop insurance for protection against unforeseen weather events. "
        "PMFBY offers affordable premiums for Barley cultivation."
    )


def test_unmapped_season(make_conditions):
    advisory = generate_farming_advisory(make_conditions(crop_type="Wheat", season="Kharif (Monsoon)"))
    assert advisory.planting_date == "Consult local expert"


def test_highest_risk():
    assert highest_risk([]) is AdvisoryLevel.LOW
    assert highest_risk([HEAT_STRESS_RISK]) is AdvisoryLevel.MEDIUM
    assert highest_risk([HEAT_STRESS_RISK, DROUGHT_RISK]) is AdvisoryLevel.HIGH
    assert highest_risk([EXCESS_WATER_RISK]) is AdvisoryLevel.MEDIUM


def test_overall_risk_is_low_without_weather_risks(conditions):
    advisory = generate_farming_advisory(conditions)
    assert advisory.weather_risks == ()
    assert advisory.overall_risk is AdvisoryLevel.LOW
