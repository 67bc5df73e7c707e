import pytest

from recommendations import (
    CROP_RULES,
    RAINFALL_RULES,
    RECOMMENDATION_RULES,
    SOIL_RULES,
    TEMPERATURE_RULES,
    WEATHER_RULES,
    YieldContext,
    generate_recommendations,
)
from schemas import EnvironmentalScores, RecommendationType
from scoring import calculate_scores


def titles(recommendations):
    return [rec.title for rec in recommendations]


def context(conditions, weather=1.0, soil=1.0):
    return YieldContext(conditions, EnvironmentalScores(weather_score=weather, soil_score=soil))


def test_rule_group_order():
    assert [group.name for group in RECOMMENDATION_RULES] == [
        "rainfall", "temperature", "soil", "crop", "weather",
    ]


@pytest.mark.parametrize("rainfall,expected", [
    (500, "Critical Irrigation Needed"),
    (599.9, "Critical Irrigation Needed"),
    (600, "Supplemental Irrigation"),
    (799, "Supplemental Irrigation"),
])
def test_rainfall_rules(make_conditions, rainfall, expected):
    assert RAINFALL_RULES.evaluate(context(make_conditions(rainfall=rainfall))).title == expected


def test_rainfall_rules_silent_when_adequate(make_conditions):
    assert RAINFALL_RULES.evaluate(context(make_conditions(rainfall=800))) is None


@pytest.mark.parametrize("temperature,expected", [
    (33, "Heat Stress Management"),
    (17, "Cold Protection"),
    (25, None),
    (32, None),
    (18, None),
])
def test_temperature_rules(make_conditions, temperature, expected):
    result = TEMPERATURE_RULES.evaluate(context(make_conditions(temperature=temperature)))
    assert (result.title if result else None) == expected


@pytest.mark.parametrize("ph,expected", [
    (5.5, "Soil pH Adjustment"),
    (8.5, "Alkaline Soil Treatment"),
    (6.0, None),
    (8.0, None),
])
def test_soil_rules(make_conditions, ph, expected):
    result = SOIL_RULES.evaluate(context(make_conditions(soil_ph=ph)))
    assert (result.title if result else None) == expected


@pytest.mark.parametrize("crop,expected", [
    ("Rice", "Rice-Specific Care"),
    ("Wheat", "Wheat Management"),
    ("Maize", "Maize Optimization"),
    ("Cotton", None),
    ("Sugarcane", None),
    ("rice", None),
])
def test_crop_rules(make_conditions, crop, expected):
    result = CROP_RULES.evaluate(context(make_conditions(crop_type=crop)))
    assert (result.title if result else None) == expected
    if result:
        assert result.type is RecommendationType.SUCCESS


def test_weather_rules(make_conditions):
    conditions = make_conditions()
    assert WEATHER_RULES.evaluate(context(conditions, weather=0.84)).title == "Weather Risk Mitigation"
    assert WEATHER_RULES.evaluate(context(conditions, weather=0.85)) is None


def test_ideal_conditions_only_get_crop_care(conditions):
    result = generate_recommendations(conditions, calculate_scores(conditions))
    assert titles(result) == ["Rice-Specific Care"]


def test_drought_and_heat_order(make_conditions):
    conditions = make_conditions(rainfall=500, temperature=35)
    result = generate_recommendations(conditions, calculate_scores(conditions))
    assert titles(result) == [
        "Critical Irrigation Needed",
        "Heat Stress Management",
        "Rice-Specific Care",
    ]
    assert [rec.type for rec in result] == [
        RecommendationType.WARNING,
        RecommendationType.WARNING,
        RecommendationType.SUCCESS,
    ]


def test_poor_weather_adds_mitigation_last(make_conditions):
    conditions = make_conditions(
        crop_type="Cotton", rainfall=300, temperature=40, humidity=95, soil_ph=5.0,
    )
    result = generate_recommendations(conditions, calculate_scores(conditions))
    assert titles(result) == [
        "Critical Irrigation Needed",
        "Heat Stress Management",
        "Soil pH Adjustment",
        "Weather Risk Mitigation",
    ]


def test_cold_supplemental_and_alkaline(make_conditions):
    conditions = make_conditions(crop_type="Wheat", rainfall=700, temperature=15, soil_ph=8.5)
    result = generate_recommendations(conditions, calculate_scores(conditions))
    assert titles(result)[:3] == [
        "Supplemental Irrigation",
        "Cold Protection",
        "Alkaline Soil Treatment",
    ]
    assert "Wheat Management" in titles(result)
