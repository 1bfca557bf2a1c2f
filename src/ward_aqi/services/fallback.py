"""Default data served when stored data is missing or the database is down."""

import random
from dataclasses import dataclass, field
from datetime import date, timedelta

from ward_aqi.schemas.ward import (
    Coordinates,
    ForecastSummary,
    Pollutants,
    SourceBreakdown,
    WardResponse,
)
from ward_aqi.schemas.weather import WeatherResponse
from ward_aqi.services.reference_data import (
    DEFAULT_CURRENT_AQI,
    DEFAULT_WEATHER,
    REFERENCE_WARDS,
)
from ward_aqi.services.trend_prediction import Sample, round_half_up

# Response header marking data served from the defaults
DATA_SOURCE_HEADER = "X-Data-Source"

# Synthetic series drift downward by this many AQI points over the window
SYNTHETIC_DRIFT = 15
SYNTHETIC_NOISE = 20


def _reference_ward_response(ward: dict) -> WardResponse:
    return WardResponse(
        id=ward["id"],
        name=ward["name"],
        aqi=ward["aqi"],
        category=ward["category"],
        pollutants=Pollutants(**ward["pollutants"]),
        sources=SourceBreakdown(**ward["sources"]),
        forecast=ForecastSummary(**ward["forecast"]),
        coordinates=Coordinates(
            path=ward["coordinates_path"],
            center_x=ward["center_x"],
            center_y=ward["center_y"],
        ),
        alerts=list(ward["alerts"]),
        priority=ward["priority"],
    )


@dataclass(frozen=True)
class FallbackDataProvider:
    """Immutable source of default dashboard data.

    Routes receive it through a dependency so tests and deployments can
    substitute their own defaults.
    """

    wards: tuple[dict, ...] = REFERENCE_WARDS
    weather: dict = field(default_factory=lambda: dict(DEFAULT_WEATHER))
    current_aqi: int = DEFAULT_CURRENT_AQI

    def ward_responses(self) -> list[WardResponse]:
        """Return fresh response objects for the default wards."""
        return [_reference_ward_response(ward) for ward in self.wards]

    def weather_response(self) -> WeatherResponse:
        return WeatherResponse(**self.weather)

    def synthetic_series(
        self,
        ward_id: str,
        days: int,
        current_aqi: float | None = None,
        today: date | None = None,
    ) -> list[Sample]:
        """Build a plausible daily AQI history ending today.

        Values drift down from the current AQI with bounded noise. The noise
        is seeded by ward and date so repeated requests on the same day see
        the same series.
        """
        today = today or date.today()
        anchor = current_aqi if current_aqi is not None else self.current_aqi
        rng = random.Random(f"{ward_id}:{today.isoformat()}")

        series = []
        for i in range(days):
            day = today - timedelta(days=days - i - 1)
            trend_factor = (i / days) * SYNTHETIC_DRIFT
            variation = (rng.random() - 0.5) * SYNTHETIC_NOISE
            aqi = max(0, round_half_up(anchor - trend_factor + variation))
            series.append(Sample(date=day, aqi=aqi))
        return series


_default_provider = FallbackDataProvider()


def get_fallback_provider() -> FallbackDataProvider:
    """Dependency returning the default-data provider."""
    return _default_provider
