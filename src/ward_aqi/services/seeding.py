"""Load the reference wards and a week of history into an empty or demo database."""

import logging
import random
from datetime import date, timedelta

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from ward_aqi.models.alert import Alert
from ward_aqi.models.measurement import (
    AQIReading,
    Forecast,
    PollutionSource,
    TimeSeriesPoint,
    WeatherReading,
)
from ward_aqi.models.policy_action import PolicyAction
from ward_aqi.models.ward import Ward
from ward_aqi.services.reference_data import DEFAULT_WEATHER, REFERENCE_WARDS
from ward_aqi.services.trend_prediction import round_half_up

logger = logging.getLogger(__name__)

HISTORY_DAYS = 7
# Maximum deviation from the current value in the generated history
AQI_SPREAD = 20
PM25_SPREAD = 15
PM10_SPREAD = 20

# Children first so foreign keys never dangle
SEEDED_MODELS = (
    PolicyAction,
    Alert,
    WeatherReading,
    TimeSeriesPoint,
    Forecast,
    PollutionSource,
    AQIReading,
    Ward,
)


def _jitter(rng: random.Random, value: float, spread: float) -> int:
    return max(0, round_half_up(value + (rng.random() * 2 * spread - spread)))


async def seed_reference_data(
    db: AsyncSession,
    wards: tuple[dict, ...] = REFERENCE_WARDS,
    today: date | None = None,
    rng: random.Random | None = None,
) -> int:
    """Replace all ward data with the reference wards.

    Each ward gets its current reading, source attribution, forecast,
    alerts, a week of daily history and default weather. The caller
    commits. Returns the number of wards inserted.
    """
    today = today or date.today()
    rng = rng or random.Random()

    for model in SEEDED_MODELS:
        await db.execute(delete(model))

    for ward in wards:
        db.add(
            Ward(
                id=ward["id"],
                name=ward["name"],
                coordinates_path=ward["coordinates_path"],
                center_x=ward["center_x"],
                center_y=ward["center_y"],
                priority=ward["priority"],
            )
        )
    await db.flush()

    for ward in wards:
        pollutants = ward["pollutants"]
        db.add(
            AQIReading(
                ward_id=ward["id"],
                aqi=ward["aqi"],
                category=ward["category"],
                **pollutants,
            )
        )
        db.add(PollutionSource(ward_id=ward["id"], **ward["sources"]))
        db.add(Forecast(ward_id=ward["id"], **ward["forecast"]))

        for message in ward["alerts"]:
            db.add(
                Alert(
                    ward_id=ward["id"],
                    message=message,
                    priority=ward["priority"],
                    is_active=True,
                )
            )

        for offset in range(HISTORY_DAYS - 1, -1, -1):
            db.add(
                TimeSeriesPoint(
                    ward_id=ward["id"],
                    date=today - timedelta(days=offset),
                    aqi=_jitter(rng, ward["aqi"], AQI_SPREAD),
                    pm25=_jitter(rng, pollutants["pm25"], PM25_SPREAD),
                    pm10=_jitter(rng, pollutants["pm10"], PM10_SPREAD),
                )
            )

        db.add(WeatherReading(ward_id=ward["id"], **DEFAULT_WEATHER))

    await db.flush()
    logger.info(f"Seeded {len(wards)} wards with {HISTORY_DAYS} days of history")
    return len(wards)
