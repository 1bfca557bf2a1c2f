"""Ward retrieval service combining each ward with its latest measurements."""

import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ward_aqi.core.config import settings
from ward_aqi.core.errors import is_database_unavailable
from ward_aqi.models.alert import Alert
from ward_aqi.models.measurement import AQIReading, Forecast, PollutionSource
from ward_aqi.models.ward import Ward
from ward_aqi.schemas.ward import (
    AQIReadingCreateRequest,
    Coordinates,
    ForecastSummary,
    Pollutants,
    SourceBreakdown,
    WardResponse,
)
from ward_aqi.services.aqi import DEFAULT_CATEGORY, category_for_aqi, ward_priority
from ward_aqi.services.fallback import FallbackDataProvider

logger = logging.getLogger(__name__)


@dataclass
class WardSnapshot:
    """A ward together with its most recent reading, sources and forecast."""

    ward: Ward
    reading: AQIReading | None = None
    source: PollutionSource | None = None
    forecast: Forecast | None = None
    alerts: list[str] = field(default_factory=list)


def _latest_per_ward(model: Any, order_column: Any, ward_ids: list[str] | None = None):
    """Select the newest row per ward for a measurement model."""
    row_number = (
        func.row_number()
        .over(partition_by=model.ward_id, order_by=(order_column.desc(), model.id.desc()))
        .label("rn")
    )
    ranked = select(model.id.label("id"), row_number)
    if ward_ids is not None:
        ranked = ranked.where(model.ward_id.in_(ward_ids))
    ranked_subquery = ranked.subquery()
    return (
        select(model)
        .join(ranked_subquery, model.id == ranked_subquery.c.id)
        .where(ranked_subquery.c.rn == 1)
    )


async def get_ward_by_id(db: AsyncSession, ward_id: str) -> Ward | None:
    """Get a ward by its ID."""
    result = await db.execute(select(Ward).where(Ward.id == ward_id))
    return result.scalar_one_or_none()


async def get_ward_snapshots(
    db: AsyncSession, ward_ids: list[str] | None = None
) -> list[WardSnapshot]:
    """Load wards (all, or the given IDs) with their latest data, ordered by ID."""
    stmt = select(Ward).order_by(Ward.id)
    if ward_ids is not None:
        stmt = stmt.where(Ward.id.in_(ward_ids))
    result = await db.execute(stmt)
    snapshots = {ward.id: WardSnapshot(ward=ward) for ward in result.scalars().all()}
    if not snapshots:
        return []

    ids = list(snapshots)

    readings = await db.execute(_latest_per_ward(AQIReading, AQIReading.recorded_at, ids))
    for reading in readings.scalars().all():
        snapshots[reading.ward_id].reading = reading

    sources = await db.execute(_latest_per_ward(PollutionSource, PollutionSource.recorded_at, ids))
    for source in sources.scalars().all():
        snapshots[source.ward_id].source = source

    forecasts = await db.execute(_latest_per_ward(Forecast, Forecast.forecast_date, ids))
    for forecast in forecasts.scalars().all():
        snapshots[forecast.ward_id].forecast = forecast

    alerts = await db.execute(
        select(Alert.ward_id, Alert.message)
        .where(Alert.is_active.is_(True), Alert.ward_id.in_(ids))
        .order_by(Alert.created_at, Alert.id)
    )
    for ward_id, message in alerts.all():
        snapshots[ward_id].alerts.append(message)

    return list(snapshots.values())


async def get_ward_snapshot(db: AsyncSession, ward_id: str) -> WardSnapshot | None:
    """Load a single ward with its latest data."""
    snapshots = await get_ward_snapshots(db, [ward_id])
    return snapshots[0] if snapshots else None


def to_ward_response(snapshot: WardSnapshot) -> WardResponse:
    """Flatten a snapshot into the dashboard's ward shape, defaulting gaps."""
    ward = snapshot.ward
    reading = snapshot.reading
    source = snapshot.source
    forecast = snapshot.forecast

    return WardResponse(
        id=ward.id,
        name=ward.name or "Unknown Ward",
        aqi=reading.aqi if reading else 0,
        category=(reading.category if reading and reading.category else DEFAULT_CATEGORY),
        pollutants=Pollutants(
            pm25=reading.pm25 or 0,
            pm10=reading.pm10 or 0,
            no2=reading.no2 or 0,
            so2=reading.so2 or 0,
            co=reading.co or 0,
        )
        if reading
        else Pollutants(),
        sources=SourceBreakdown(
            vehicular=source.vehicular or 0,
            construction=source.construction or 0,
            industrial=source.industrial or 0,
            waste_burning=source.waste_burning or 0,
        )
        if source
        else SourceBreakdown(),
        forecast=ForecastSummary(hours_24=forecast.hours_24, hours_48=forecast.hours_48)
        if forecast
        else ForecastSummary(),
        coordinates=Coordinates(
            path=ward.coordinates_path or "",
            center_x=ward.center_x or 0,
            center_y=ward.center_y or 0,
        ),
        alerts=list(snapshot.alerts),
        priority=ward_priority(ward.id, ward.priority),
    )


async def create_reading(
    db: AsyncSession, ward_id: str, request: AQIReadingCreateRequest
) -> AQIReading:
    """Record a new AQI reading for a ward."""
    reading = AQIReading(
        ward_id=ward_id,
        aqi=request.aqi,
        category=request.category or category_for_aqi(request.aqi),
        pm25=request.pm25,
        pm10=request.pm10,
        no2=request.no2,
        so2=request.so2,
        co=request.co,
    )
    db.add(reading)
    await db.flush()
    await db.refresh(reading)
    return reading


async def get_current_aqi(db: AsyncSession, ward_id: str) -> int | None:
    """Return the most recent AQI value recorded for a ward."""
    result = await db.execute(
        select(AQIReading.aqi)
        .where(AQIReading.ward_id == ward_id)
        .order_by(AQIReading.recorded_at.desc(), AQIReading.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_ward_responses(
    db: AsyncSession,
    fallback: FallbackDataProvider,
    ward_ids: list[str] | None = None,
) -> tuple[list[WardResponse], bool]:
    """Load ward responses, falling back to the defaults if the database is down.

    Returns the wards and whether they came from the defaults.
    """
    try:
        snapshots = await get_ward_snapshots(db, ward_ids)
    except SQLAlchemyError as e:
        if not settings.fallback_enabled or not is_database_unavailable(e):
            raise
        logger.warning(f"Database unavailable, serving default ward data: {type(e).__name__}")
        await db.rollback()
        wards = fallback.ward_responses()
        if ward_ids is not None:
            wards = [ward for ward in wards if ward.id in ward_ids]
        return wards, True

    return [to_ward_response(snapshot) for snapshot in snapshots], False
