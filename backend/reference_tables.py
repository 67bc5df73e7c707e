"""
Reference Tables - static agronomic lookup data for Indian field crops.

Yields are in quintals/hectare, rainfall in mm/year, temperature in °C.
All tables are read-only mappings built once at import; rows are tuples or
frozen models so nothing here can change between calls.
"""

from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional, Tuple

from schemas import (
    AdvisoryLevel,
    MarketInsight,
    MarketTrend,
    PestRisk,
    SoilRecommendation,
    WeatherRisk,
)


class YieldRange(NamedTuple):
    minimum: float
    maximum: float
    optimal: float

    def clamp(self, value: float) -> float:
        return max(self.minimum, min(self.maximum, value))


class OptimalRange(NamedTuple):
    minimum: float
    maximum: float

    @property
    def width(self) -> float:
        return self.maximum - self.minimum

    def contains(self, value: float) -> bool:
        return self.minimum <= value <= self.maximum


class CropWindow(NamedTuple):
    planting: str
    harvest: str


class PestRule(NamedTuple):
    """A pest that becomes a risk once every given threshold is crossed."""
    risk: PestRisk
    humidity_above: Optional[float] = None
    humidity_below: Optional[float] = None
    temperature_above: Optional[float] = None
    temperature_below: Optional[float] = None

    def matches(self, humidity: float, temperature: float) -> bool:
        if self.humidity_above is not None and not humidity > self.humidity_above:
            return False
        if self.humidity_below is not None and not humidity < self.humidity_below:
            return False
        if self.temperature_above is not None and not temperature > self.temperature_above:
            return False
        if self.temperature_below is not None and not temperature < self.temperature_below:
            return False
        return True


# ===== Yield ensemble =====
CROP_BASE_YIELDS: Mapping[str, YieldRange] = MappingProxyType({
    "Rice":      YieldRange(42, 58, 50),
    "Wheat":     YieldRange(28, 42, 35),
    "Maize":     YieldRange(48, 68, 58),
    "Cotton":    YieldRange(12, 20, 16),
    "Sugarcane": YieldRange(650, 850, 750),
})

DEFAULT_BASE_YIELD = 40.0

OPTIMAL_RANGES: Mapping[str, OptimalRange] = MappingProxyType({
    "rainfall":    OptimalRange(800, 1400),
    "temperature": OptimalRange(22, 28),
    "humidity":    OptimalRange(60, 80),
    "soil_ph":     OptimalRange(6.0, 7.5),
})

REGIONAL_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    "Punjab": 1.15,
    "Haryana": 1.12,
    "Uttar Pradesh": 1.05,
    "Maharashtra": 1.08,
    "Karnataka": 1.02,
    "Tamil Nadu": 1.00,
    "West Bengal": 1.10,
    "Bihar": 0.95,
    "Rajasthan": 0.90,
    "Gujarat": 1.06,
    "Andhra Pradesh": 1.03,
    "Telangana": 1.01,
    "Madhya Pradesh": 0.98,
    "Odisha": 0.96,
})

DEFAULT_REGIONAL_MULTIPLIER = 1.0

SEASON_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    "Kharif": 1.05,
    "Rabi": 1.00,
})

DEFAULT_SEASON_MULTIPLIER = 0.95


# ===== Advisory =====
KHARIF = "Kharif (Monsoon)"
RABI = "Rabi (Winter)"
ZAID = "Zaid (Summer)"

SEASONS: Tuple[str, ...] = (KHARIF, RABI, ZAID)

# Keyed by (lower-case crop, season label)
CROP_CALENDAR: Mapping[Tuple[str, str], CropWindow] = MappingProxyType({
    ("rice", KHARIF):      CropWindow("June-July", "November-December"),
    ("rice", RABI):        CropWindow("November-December", "April-May"),
    ("rice", ZAID):        CropWindow("March-April", "July-August"),
    ("wheat", RABI):       CropWindow("November-December", "March-April"),
    ("maize", KHARIF):     CropWindow("June-July", "September-October"),
    ("maize", RABI):       CropWindow("November-December", "March-April"),
    ("maize", ZAID):       CropWindow("February-March", "June-July"),
    ("cotton", KHARIF):    CropWindow("May-June", "November-January"),
    ("sugarcane", KHARIF): CropWindow("February-March", "December-March (next year)"),
})

UNKNOWN_CROP_WINDOW = CropWindow("Consult local expert", "Consult local expert")

DROUGHT_RISK = WeatherRisk(
    level=AdvisoryLevel.HIGH,
    type="Drought Risk",
    description="Low rainfall detected for the season",
    recommendation="Install drip irrigation system and use mulching",
)

EXCESS_WATER_RISK = WeatherRisk(
    level=AdvisoryLevel.MEDIUM,
    type="Excess Water",
    description="High rainfall may cause waterlogging",
    recommendation="Ensure proper drainage and consider raised bed farming",
)

HEAT_STRESS_RISK = WeatherRisk(
    level=AdvisoryLevel.MEDIUM,
    type="Heat Stress",
    description="High temperature may affect crop growth",
    recommendation="Increase irrigation frequency and provide shade nets",
)

ACIDIC_SOIL = SoilRecommendation(
    condition="Acidic soil detected",
    advice="Apply lime to increase soil pH",
    fertilizer="Use alkaline fertilizers like wood ash",
    timing="Apply 2-3 weeks before planting",
)

ALKALINE_SOIL = SoilRecommendation(
    condition="Alkaline soil detected",
    advice="Add organic matter and sulfur",
    fertilizer="Use acidic fertilizers like ammonium sulfate",
    timing="Apply during land preparation",
)

OPTIMAL_SOIL = SoilRecommendation(
    condition="Optimal soil pH",
    advice="Maintain current soil conditions",
    fertilizer="Standard NPK fertilizers recommended",
    timing="Follow crop-specific schedule",
)

PEST_RULES: Mapping[str, Tuple[PestRule, ...]] = MappingProxyType({
    "rice": (
        PestRule(
            PestRisk(
                pest="Brown Planthopper",
                risk=AdvisoryLevel.HIGH,
                prevention="Use resistant varieties and maintain proper plant spacing",
                treatment="Apply neem oil or approved insecticides",
            ),
            humidity_above=80,
        ),
        PestRule(
            PestRisk(
                pest="Rice Blast",
                risk=AdvisoryLevel.MEDIUM,
                prevention="Ensure proper drainage and avoid excess nitrogen",
                treatment="Apply fungicides at early symptoms",
            ),
            temperature_above=30,
        ),
    ),
    "wheat": (
        PestRule(
            PestRisk(
                pest="Rust Disease",
                risk=AdvisoryLevel.HIGH,
                prevention="Use rust-resistant varieties",
                treatment="Apply fungicides at tillering stage",
            ),
            humidity_above=70,
            temperature_below=20,
        ),
    ),
    "maize": (
        PestRule(
            PestRisk(
                pest="Fall Armyworm",
                risk=AdvisoryLevel.MEDIUM,
                prevention="Regular monitoring and pheromone traps",
                treatment="Early application of bio-pesticides",
            ),
            temperature_above=32,
        ),
    ),
    "cotton": (
        PestRule(
            PestRisk(
                pest="Bollworm",
                risk=AdvisoryLevel.HIGH,
                prevention="Use Bt cotton varieties and trap crops",
                treatment="Integrated pest management approach",
            ),
            humidity_below=50,
        ),
    ),
    "sugarcane": (
        PestRule(
            PestRisk(
                pest="Red Rot",
                risk=AdvisoryLevel.MEDIUM,
                prevention="Use disease-free setts and proper drainage",
                treatment="Remove affected plants and apply fungicides",
            ),
            temperature_above=35,
        ),
    ),
})

FERTILIZER_SCHEDULES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "rice": (
        "Basal: 50% N, 100% P, 100% K at transplanting",
        "Top dress: 25% N at tillering stage",
        "Top dress: 25% N at panicle initiation",
    ),
    "wheat": (
        "Basal: 50% N, 100% P, 100% K at sowing",
        "Top dress: 50% N at crown root initiation",
    ),
    "maize": (
        "Basal: 25% N, 100% P, 100% K at sowing",
        "Top dress: 50% N at knee height stage",
        "Top dress: 25% N at tasseling stage",
    ),
})

DEFAULT_FERTILIZER_SCHEDULE: Tuple[str, ...] = (
    "Follow crop-specific fertilizer recommendations",
    "Apply based on soil test results",
)

MARKET_SNAPSHOTS: Mapping[str, MarketInsight] = MappingProxyType({
    "rice": MarketInsight(
        current_price="₹20-25/kg",
        trend=MarketTrend.STABLE,
        recommendation="Good time to sell, prices stable",
    ),
    "wheat": MarketInsight(
        current_price="₹22-27/kg",
        trend=MarketTrend.RISING,
        recommendation="Consider holding for better prices",
    ),
    "maize": MarketInsight(
        current_price="₹18-22/kg",
        trend=MarketTrend.FALLING,
        recommendation="Sell soon, prices may decline further",
    ),
    "cotton": MarketInsight(
        current_price="₹5,500-6,000/quintal",
        trend=MarketTrend.STABLE,
        recommendation="Market conditions favorable",
    ),
    "sugarcane": MarketInsight(
        current_price="₹280-320/quintal",
        trend=MarketTrend.RISING,
        recommendation="Good demand expected",
    ),
})

DEFAULT_MARKET_SNAPSHOT = MarketInsight(
    current_price="Contact local market",
    trend=MarketTrend.STABLE,
    recommendation="Monitor market conditions",
)

CROP_TIPS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "rice": (
        "Maintain 2-3 cm water level in field",
        "Use certified seeds for better yield",
    ),
    "wheat": (
        "Ensure proper seed rate (100-125 kg/ha)",
        "Monitor for rust diseases regularly",
    ),
    "maize": (
        "Maintain plant spacing of 20x75 cm",
        "Remove side shoots for better grain development",
    ),
})

GENERAL_TIPS: Tuple[str, ...] = (
    "Regular soil testing every 2-3 years",
    "Use organic fertilizers to improve soil health",
    "Implement integrated pest management",
)


# ===== Regional comparison (quintals/hectare) =====
REGIONAL_AVERAGE_YIELDS: Mapping[str, Mapping[str, float]] = MappingProxyType({
    "Rice": MappingProxyType({
        "Punjab": 57, "Haryana": 54, "Uttar Pradesh": 48, "West Bengal": 52,
        "Tamil Nadu": 46, "Andhra Pradesh": 50, "Telangana": 49, "Karnataka": 45,
        "Maharashtra": 44, "Bihar": 42, "Odisha": 40, "Gujarat": 47,
        "Madhya Pradesh": 43, "Rajasthan": 38,
    }),
    "Wheat": MappingProxyType({
        "Punjab": 42, "Haryana": 40, "Uttar Pradesh": 36, "Madhya Pradesh": 34,
        "Rajasthan": 32, "Maharashtra": 30, "Gujarat": 35, "Bihar": 29,
        "West Bengal": 31, "Karnataka": 28, "Tamil Nadu": 26, "Andhra Pradesh": 27,
        "Telangana": 28, "Odisha": 25,
    }),
    "Maize": MappingProxyType({
        "Karnataka": 65, "Telangana": 62, "Tamil Nadu": 58, "Andhra Pradesh": 60,
        "Maharashtra": 55, "Gujarat": 57, "Madhya Pradesh": 52, "Uttar Pradesh": 54,
        "Bihar": 48, "Punjab": 59, "Haryana": 58, "Rajasthan": 45,
        "West Bengal": 50, "Odisha": 47,
    }),
    "Cotton": MappingProxyType({
        "Gujarat": 18, "Maharashtra": 16, "Telangana": 17, "Andhra Pradesh": 16,
        "Karnataka": 15, "Punjab": 19, "Haryana": 18, "Rajasthan": 14,
        "Madhya Pradesh": 15, "Tamil Nadu": 14,
    }),
    "Sugarcane": MappingProxyType({
        "Uttar Pradesh": 780, "Maharashtra": 820, "Karnataka": 850, "Tamil Nadu": 890,
        "Andhra Pradesh": 860, "Telangana": 840, "Gujarat": 800, "Punjab": 760,
        "Haryana": 770, "Bihar": 720, "West Bengal": 750,
    }),
})


# ===== Crop comparison (tonnes/hectare, ₹) =====
COMPARISON_BASE_YIELDS: Mapping[str, float] = MappingProxyType({
    "rice": 4.5, "wheat": 3.2, "maize": 5.8, "cotton": 2.1, "sugarcane": 75.0,
})

DEFAULT_COMPARISON_BASE_YIELD = 3.0

MARKET_PRICES: Mapping[str, float] = MappingProxyType({  # ₹ per kg
    "rice": 22.5, "wheat": 24.5, "maize": 20.0, "cotton": 5750, "sugarcane": 300,
})

DEFAULT_MARKET_PRICE = 20.0

CULTIVATION_COSTS: Mapping[str, float] = MappingProxyType({  # ₹ per hectare
    "rice": 45000, "wheat": 40000, "maize": 35000, "cotton": 55000, "sugarcane": 80000,
})

DEFAULT_CULTIVATION_COST = 40000.0

WATER_REQUIREMENTS: Mapping[str, str] = MappingProxyType({
    "rice": "1200-1500 mm",
    "wheat": "450-650 mm",
    "maize": "500-700 mm",
    "cotton": "700-1200 mm",
    "sugarcane": "1800-2500 mm",
})

DEFAULT_WATER_REQUIREMENT = "600-800 mm"
