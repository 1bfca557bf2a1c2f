"""Trend prediction endpoint."""

from fastapi import APIRouter

from ward_aqi.core.deps import DbSession, Fallback, PredictionDays, RequiredWardId
from ward_aqi.schemas.prediction import TrendVerdict
from ward_aqi.services import prediction as prediction_service

router = APIRouter(prefix="/api/predict", tags=["prediction"])


@router.get("/trend", response_model=TrendVerdict)
async def predict_trend(
    db: DbSession,
    fallback: Fallback,
    ward_id: RequiredWardId,
    days: PredictionDays,
) -> TrendVerdict:
    """Predict the short-term pollution trend of a ward.

    Uses the ward's stored daily AQI over the last ``days`` days (7-30,
    default 14). With too little stored history a synthetic series anchored
    at the ward's current AQI is used instead.
    """
    return await prediction_service.predict_ward_trend(db, ward_id, days, fallback)
