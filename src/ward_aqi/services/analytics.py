"""Analytics service for historical series, trends and ward comparisons."""

from datetime import date, datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ward_aqi.models.measurement import AQIReading, PollutionSource, TimeSeriesPoint
from ward_aqi.schemas.analytics import (
    CityAverageResponse,
    ComparisonStatus,
    DailyTrendPoint,
    PollutantAverages,
    PriorityRankingResponse,
    RankedWard,
    SourceSummaryResponse,
    TimeSeriesPointResponse,
    TrendPeriod,
    WardComparison,
)
from ward_aqi.schemas.ward import WardResponse
from ward_aqi.services.trend_prediction import round_half_up, round_one_decimal

SOURCE_SUMMARY_WINDOW = timedelta(days=7)
# Wards further than this from the city average are flagged above/below
COMPARISON_MARGIN = 50


def _to_int(value) -> int:
    return round_half_up(float(value)) if value is not None else 0


def _to_date(value) -> date:
    # SQLite returns DATE() results as ISO strings
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


async def get_time_series(
    db: AsyncSession,
    days: int,
    ward_id: str | None = None,
    today: date | None = None,
) -> list[TimeSeriesPointResponse]:
    """Daily points for one ward, or the city-wide daily average."""
    since = (today or date.today()) - timedelta(days=days)

    if ward_id is not None:
        result = await db.execute(
            select(
                TimeSeriesPoint.date,
                TimeSeriesPoint.aqi,
                TimeSeriesPoint.pm25,
                TimeSeriesPoint.pm10,
            )
            .where(TimeSeriesPoint.ward_id == ward_id, TimeSeriesPoint.date >= since)
            .order_by(TimeSeriesPoint.date.asc())
        )
    else:
        result = await db.execute(
            select(
                TimeSeriesPoint.date,
                func.avg(TimeSeriesPoint.aqi),
                func.avg(TimeSeriesPoint.pm25),
                func.avg(TimeSeriesPoint.pm10),
            )
            .where(TimeSeriesPoint.date >= since)
            .group_by(TimeSeriesPoint.date)
            .order_by(TimeSeriesPoint.date.asc())
        )

    return [
        TimeSeriesPointResponse(
            date=_to_date(point_date),
            aqi=_to_int(aqi),
            pm25=_to_int(pm25),
            pm10=_to_int(pm10),
        )
        for point_date, aqi, pm25, pm10 in result.all()
    ]


async def get_daily_trends(
    db: AsyncSession,
    period: TrendPeriod,
    ward_id: str | None = None,
    now: datetime | None = None,
) -> list[DailyTrendPoint]:
    """Daily average, maximum and minimum of recorded AQI readings."""
    since = (now or _utcnow()) - timedelta(days=period.days)
    day = func.date(AQIReading.recorded_at)

    stmt = select(
        day.label("day"),
        func.avg(AQIReading.aqi),
        func.max(AQIReading.aqi),
        func.min(AQIReading.aqi),
    ).where(AQIReading.recorded_at >= since)
    if ward_id is not None:
        stmt = stmt.where(AQIReading.ward_id == ward_id)
    stmt = stmt.group_by(day).order_by(day.asc())

    result = await db.execute(stmt)
    return [
        DailyTrendPoint(
            date=_to_date(reading_day),
            avg_aqi=_to_int(avg_aqi),
            max_aqi=_to_int(max_aqi),
            min_aqi=_to_int(min_aqi),
        )
        for reading_day, avg_aqi, max_aqi, min_aqi in result.all()
    ]


async def get_source_summary(
    db: AsyncSession,
    ward_id: str | None = None,
    now: datetime | None = None,
) -> SourceSummaryResponse:
    """Average source attribution over the last seven days."""
    since = (now or _utcnow()) - SOURCE_SUMMARY_WINDOW
    stmt = select(
        func.avg(PollutionSource.vehicular),
        func.avg(PollutionSource.construction),
        func.avg(PollutionSource.industrial),
        func.avg(PollutionSource.waste_burning),
    ).where(PollutionSource.recorded_at >= since)
    if ward_id is not None:
        stmt = stmt.where(PollutionSource.ward_id == ward_id)

    result = await db.execute(stmt)
    vehicular, construction, industrial, waste_burning = result.one()
    return SourceSummaryResponse(
        vehicular=_to_int(vehicular),
        construction=_to_int(construction),
        industrial=_to_int(industrial),
        waste_burning=_to_int(waste_burning),
    )


def rank_wards(wards: list[WardResponse]) -> PriorityRankingResponse:
    """Rank wards worst AQI first; ties go to the lower priority number."""
    ordered = sorted(wards, key=lambda ward: (-ward.aqi, ward.priority))
    ranked = [
        RankedWard(
            rank=index + 1,
            id=ward.id,
            name=ward.name,
            aqi=ward.aqi,
            category=ward.category,
            priority=ward.priority,
        )
        for index, ward in enumerate(ordered)
    ]
    return PriorityRankingResponse(
        wards=ranked,
        critical_count=sum(1 for ward in ranked if ward.aqi >= 300),
        high_count=sum(1 for ward in ranked if 200 <= ward.aqi < 300),
        moderate_count=sum(1 for ward in ranked if 100 <= ward.aqi < 200),
    )


def _average(values: list[float]) -> int:
    return round_half_up(sum(values) / len(values)) if values else 0


def _comparison_status(difference: int) -> ComparisonStatus:
    if difference > COMPARISON_MARGIN:
        return ComparisonStatus.ABOVE
    if difference < -COMPARISON_MARGIN:
        return ComparisonStatus.BELOW
    return ComparisonStatus.NORMAL


def compare_to_city_average(
    wards: list[WardResponse], selected_ward_id: str | None = None
) -> CityAverageResponse:
    """Measure every ward against the city-wide average AQI.

    The comparison list is ordered by difference, worst first. ``selected``
    is the comparison for ``selected_ward_id`` when that ward is present.
    """
    city_avg = _average([ward.aqi for ward in wards])
    pollutants = PollutantAverages(
        pm25=_average([ward.pollutants.pm25 for ward in wards]),
        pm10=_average([ward.pollutants.pm10 for ward in wards]),
        no2=_average([ward.pollutants.no2 for ward in wards]),
        so2=_average([ward.pollutants.so2 for ward in wards]),
    )

    comparisons = []
    for ward in wards:
        difference = ward.aqi - city_avg
        diff_percent = round_one_decimal(difference / city_avg * 100) if city_avg else 0.0
        comparisons.append(
            WardComparison(
                id=ward.id,
                name=ward.name,
                ward_aqi=ward.aqi,
                city_avg=city_avg,
                difference=difference,
                diff_percent=diff_percent,
                status=_comparison_status(difference),
            )
        )
    comparisons.sort(key=lambda comparison: comparison.difference, reverse=True)

    selected = next(
        (comparison for comparison in comparisons if comparison.id == selected_ward_id),
        None,
    )
    return CityAverageResponse(
        city_average_aqi=city_avg,
        pollutants=pollutants,
        wards=comparisons,
        selected=selected,
    )
