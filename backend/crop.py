"""
Crop Routes - Yield Prediction, Farming Advisory, Insights, Crop Comparison
Thin HTTP layer over the engine; all computation lives in engine.py.
"""

import logging
from typing import List, Optional

import numpy as np
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import Field

import engine
from config import settings
from schemas import (
    MAX_YIELD_PER_HECTARE,
    CropComparisonReport,
    CropConditions,
    EngineModel,
    FactorImpact,
    FarmingAdvisory,
    PredictionResult,
    RegionalComparison,
    TrendPoint,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ===== Data Models =====
class TrendInput(EngineModel):
    predicted_yield: float = Field(..., ge=0, le=MAX_YIELD_PER_HECTARE, allow_inf_nan=False)
    years: Optional[int] = Field(None, ge=1, le=30)
    current_year: Optional[int] = None


class RegionalInput(EngineModel):
    crop_type: str = Field(..., min_length=1)
    location: str
    predicted_yield: float = Field(..., ge=0, le=MAX_YIELD_PER_HECTARE, allow_inf_nan=False)


class ComparisonInput(EngineModel):
    conditions: CropConditions
    crops: List[str] = Field(..., min_length=2)


def get_rng(seed: Optional[int] = Query(None, ge=0)) -> np.random.Generator:
    """Random source for one request; a seed makes the response reproducible."""
    return engine.make_rng(seed if seed is not None else settings.RANDOM_SEED)


# ===== Yield Prediction =====
@router.post("/yield/predict", response_model=PredictionResult)
async def predict_yield(data: CropConditions, rng: np.random.Generator = Depends(get_rng)):
    """Predict crop yield, confidence and risk from field conditions."""
    return engine.predict(data, rng)


# ===== Farming Advisory =====
@router.post("/advisory", response_model=FarmingAdvisory)
async def farming_advisory(data: CropConditions):
    """Weather, soil, pest, irrigation, fertilizer, market and insurance advice."""
    return engine.advise(data)


# ===== Insights =====
@router.post("/insights/factors", response_model=List[FactorImpact])
async def factor_analysis(data: CropConditions):
    """Impact of each environmental factor on the prediction."""
    return list(engine.analyze_factors(data))


@router.post("/insights/trend", response_model=List[TrendPoint])
async def yield_trend(data: TrendInput, rng: np.random.Generator = Depends(get_rng)):
    """Yield history leading up to the predicted year."""
    years = data.years or settings.HISTORY_YEARS
    return list(engine.historical_trend(data.predicted_yield, rng, years, data.current_year))


@router.post("/insights/regional", response_model=RegionalComparison)
async def regional_comparison(data: RegionalInput):
    """Compare a predicted yield with the regional average."""
    result = engine.compare_regional(data.crop_type, data.location, data.predicted_yield)
    if result is None:
        raise HTTPException(status_code=404, detail=f"No regional data for {data.crop_type}.")
    return result


# ===== Crop Comparison =====
@router.post("/compare", response_model=CropComparisonReport)
async def compare_crops(data: ComparisonInput):
    """Compare several crops under the same field conditions."""
    logger.info("Comparing crops %s", data.crops)
    return engine.compare_crops(data.conditions, data.crops, settings.MAX_COMPARISON_CROPS)
