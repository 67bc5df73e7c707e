"""
Data Models - crop conditions in, prediction and advisory records out.

Every record is an immutable pydantic model created fresh per call. Field
names are snake_case in Python and camelCase on the wire (``soilPh``,
``yieldPerHectare``); both spellings are accepted on input.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EngineModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ===== Enumerations =====
class RiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @property
    def color(self) -> str:
        """Display tag consumers use to style the risk badge."""
        return RISK_COLORS[self]


RISK_COLORS = {
    RiskLevel.LOW: "success",
    RiskLevel.MODERATE: "warning",
    RiskLevel.HIGH: "destructive",
}


class RecommendationType(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    INFO = "info"


class AdvisoryLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return ADVISORY_LEVEL_RANKS[self]


ADVISORY_LEVEL_RANKS = {
    AdvisoryLevel.LOW: 0,
    AdvisoryLevel.MEDIUM: 1,
    AdvisoryLevel.HIGH: 2,
}


class MarketTrend(str, Enum):
    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"


class FactorStatus(str, Enum):
    GOOD = "good"
    MODERATE = "moderate"
    POOR = "poor"


class ComparisonStatus(str, Enum):
    ABOVE = "above"
    BELOW = "below"
    SIMILAR = "similar"


# ===== Input =====
MAX_AREA_HECTARES = 1e9
MAX_YIELD_PER_HECTARE = 1e9


class CropConditions(EngineModel):
    model_config = ConfigDict(allow_inf_nan=False)

    crop_type: str = Field(..., min_length=1)
    location: str
    season: str
    rainfall: float = Field(..., ge=0, description="Annual rainfall in mm")
    temperature: float = Field(..., description="Average temperature in °C")
    humidity: float = Field(..., ge=0, le=100)
    soil_ph: float = Field(..., ge=0, le=14)
    area: float = Field(..., gt=0, le=MAX_AREA_HECTARES, description="Cultivated area in hectares")


# ===== Yield prediction =====
class EnvironmentalScores(EngineModel):
    weather_score: float
    soil_score: float

    @property
    def overall(self) -> float:
        return (self.weather_score + self.soil_score) / 2


class Recommendation(EngineModel):
    type: RecommendationType
    title: str
    text: str


class PredictionResult(EngineModel):
    yield_per_hectare: float
    total_production: float
    confidence: int
    risk_level: RiskLevel
    risk_color: str
    weather_score: int
    soil_score: int
    recommendations: Tuple[Recommendation, ...] = ()


# ===== Farming advisory =====
class WeatherRisk(EngineModel):
    level: AdvisoryLevel
    type: str
    description: str
    recommendation: str


class SoilRecommendation(EngineModel):
    condition: str
    advice: str
    fertilizer: str
    timing: str


class PestRisk(EngineModel):
    pest: str
    risk: AdvisoryLevel
    prevention: str
    treatment: str


class MarketInsight(EngineModel):
    current_price: str
    trend: MarketTrend
    recommendation: str


class FarmingAdvisory(EngineModel):
    recommendations: Tuple[str, ...]
    weather_risks: Tuple[WeatherRisk, ...]
    overall_risk: AdvisoryLevel
    soil_advice: SoilRecommendation
    pest_risks: Tuple[PestRisk, ...]
    planting_date: str
    harvest_date: str
    irrigation_schedule: Tuple[str, ...]
    fertilizer_schedule: Tuple[str, ...]
    market_insights: MarketInsight
    insurance_advice: str


# ===== Insights =====
class FactorImpact(EngineModel):
    factor: str
    impact: int
    status: FactorStatus


class TrendPoint(EngineModel):
    year: int
    yield_per_hectare: float
    predicted: bool = False


class RegionalComparison(EngineModel):
    crop_type: str
    location: str
    predicted_yield: float
    regional_average: float
    difference: float
    percentage_difference: float
    status: ComparisonStatus


class CropComparison(EngineModel):
    crop: str
    predicted_yield: float
    profitability: int
    risk_level: AdvisoryLevel
    water_requirement: str
    market_price: str
    season: str


class CropComparisonReport(EngineModel):
    comparisons: Tuple[CropComparison, ...]
    best_option: Optional[CropComparison] = None
