"""Analytics endpoints for historical series, trends and ward comparisons."""

from fastapi import APIRouter, Query, Response

from ward_aqi.core.deps import AnalyticsDays, DbSession, Fallback, OptionalWardId
from ward_aqi.schemas.analytics import (
    CityAverageResponse,
    DailyTrendPoint,
    PriorityRankingResponse,
    SourceSummaryResponse,
    TimeSeriesPointResponse,
    TrendPeriod,
)
from ward_aqi.services import analytics as analytics_service
from ward_aqi.services import wards as wards_service
from ward_aqi.services.fallback import DATA_SOURCE_HEADER

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/timeseries", response_model=list[TimeSeriesPointResponse])
async def get_time_series(
    db: DbSession,
    ward_id: OptionalWardId,
    days: AnalyticsDays,
) -> list[TimeSeriesPointResponse]:
    """Daily AQI series for a ward, or the city-wide daily average."""
    return await analytics_service.get_time_series(db, days, ward_id=ward_id)


@router.get("/trends", response_model=list[DailyTrendPoint])
async def get_trends(
    db: DbSession,
    ward_id: OptionalWardId,
    period: str | None = Query(None),
) -> list[DailyTrendPoint]:
    """Daily average, maximum and minimum AQI over 7, 30 or 90 days."""
    try:
        trend_period = TrendPeriod(period) if period else TrendPeriod.WEEK
    except ValueError:
        trend_period = TrendPeriod.WEEK
    return await analytics_service.get_daily_trends(db, trend_period, ward_id=ward_id)


@router.get("/sources", response_model=SourceSummaryResponse)
async def get_source_summary(
    db: DbSession,
    ward_id: OptionalWardId,
) -> SourceSummaryResponse:
    """Average pollution source attribution over the last week."""
    return await analytics_service.get_source_summary(db, ward_id=ward_id)


@router.get("/priority", response_model=PriorityRankingResponse)
async def get_priority_ranking(
    db: DbSession,
    fallback: Fallback,
    response: Response,
) -> PriorityRankingResponse:
    """Rank wards by urgency."""
    wards, from_fallback = await wards_service.get_ward_responses(db, fallback)
    if from_fallback:
        response.headers[DATA_SOURCE_HEADER] = "fallback"
    return analytics_service.rank_wards(wards)


@router.get("/city-average", response_model=CityAverageResponse)
async def get_city_average(
    db: DbSession,
    fallback: Fallback,
    response: Response,
    ward_id: OptionalWardId,
) -> CityAverageResponse:
    """Compare every ward with the city-wide average AQI."""
    wards, from_fallback = await wards_service.get_ward_responses(db, fallback)
    if from_fallback:
        response.headers[DATA_SOURCE_HEADER] = "fallback"
    return analytics_service.compare_to_city_average(wards, ward_id)
