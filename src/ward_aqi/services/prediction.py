"""Trend prediction service.

Loads a ward's stored daily AQI history and runs the rule-based predictor on
it. When too little history is stored, or the database cannot be read, the
prediction runs on a synthetic series from the default-data provider instead
so the dashboard always receives a verdict.
"""

import logging
from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ward_aqi.core.config import settings
from ward_aqi.models.measurement import TimeSeriesPoint
from ward_aqi.schemas.prediction import TrendVerdict
from ward_aqi.services.fallback import FallbackDataProvider
from ward_aqi.services.trend_prediction import Sample, predict_trend
from ward_aqi.services.wards import get_current_aqi

logger = logging.getLogger(__name__)


async def get_recent_samples(
    db: AsyncSession, ward_id: str, days: int, today: date | None = None
) -> list[Sample]:
    """Stored daily AQI values of a ward over the last ``days`` days, oldest first."""
    since = (today or date.today()) - timedelta(days=days)
    result = await db.execute(
        select(TimeSeriesPoint.date, TimeSeriesPoint.aqi)
        .where(TimeSeriesPoint.ward_id == ward_id, TimeSeriesPoint.date >= since)
        .order_by(TimeSeriesPoint.date.asc())
    )
    return [Sample(date=point_date, aqi=aqi or 0) for point_date, aqi in result.all()]


async def _latest_aqi_or_none(db: AsyncSession, ward_id: str) -> int | None:
    try:
        return await get_current_aqi(db, ward_id)
    except SQLAlchemyError as e:
        logger.warning(f"Could not load current AQI for ward {ward_id}: {type(e).__name__}")
        await db.rollback()
        return None


async def predict_ward_trend(
    db: AsyncSession,
    ward_id: str,
    days: int,
    fallback: FallbackDataProvider,
    today: date | None = None,
) -> TrendVerdict:
    """Predict the short-term trend of a ward from its recent history."""
    samples: list[Sample] = []
    try:
        samples = await get_recent_samples(db, ward_id, days, today)
    except SQLAlchemyError as e:
        logger.warning(
            f"Could not load time series for ward {ward_id}, using synthetic data: "
            f"{type(e).__name__}"
        )
        await db.rollback()

    if len(samples) < settings.prediction_min_samples:
        current_aqi = await _latest_aqi_or_none(db, ward_id)
        logger.info(
            f"Ward {ward_id} has {len(samples)} stored points, "
            f"predicting from a synthetic {days}-day series"
        )
        samples = fallback.synthetic_series(ward_id, days, current_aqi=current_aqi, today=today)

    return predict_trend(ward_id, samples)
