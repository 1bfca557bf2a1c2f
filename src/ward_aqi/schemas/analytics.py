"""Analytics schemas for time series, trends and ward comparisons."""

from datetime import date
from enum import Enum

from ward_aqi.schemas.base import CamelModel


class TimeSeriesPointResponse(CamelModel):
    """Daily AQI and particulate values."""

    date: date
    aqi: int
    pm25: int
    pm10: int


class TrendPeriod(str, Enum):
    """Lookback windows for daily AQI trends."""

    WEEK = "7d"
    MONTH = "30d"
    QUARTER = "90d"

    @property
    def days(self) -> int:
        return int(self.value.rstrip("d"))


class DailyTrendPoint(CamelModel):
    """Daily aggregate of point readings."""

    date: date
    avg_aqi: int
    max_aqi: int
    min_aqi: int


class SourceSummaryResponse(CamelModel):
    """Average source attribution."""

    vehicular: int = 0
    construction: int = 0
    industrial: int = 0
    waste_burning: int = 0


class RankedWard(CamelModel):
    """Ward position in the priority ranking."""

    rank: int
    id: str
    name: str
    aqi: int
    category: str
    priority: int


class PriorityRankingResponse(CamelModel):
    """Wards ranked by urgency with counts per urgency band."""

    wards: list[RankedWard]
    critical_count: int
    high_count: int
    moderate_count: int


class ComparisonStatus(str, Enum):
    """Position of a ward relative to the city average."""

    ABOVE = "above"
    BELOW = "below"
    NORMAL = "normal"


class WardComparison(CamelModel):
    """One ward measured against the city average."""

    id: str
    name: str
    ward_aqi: int
    city_avg: int
    difference: int
    diff_percent: float
    status: ComparisonStatus


class PollutantAverages(CamelModel):
    """City-wide pollutant averages."""

    pm25: int
    pm10: int
    no2: int
    so2: int


class CityAverageResponse(CamelModel):
    """City-wide averages and per-ward comparison, worst first."""

    city_average_aqi: int
    pollutants: PollutantAverages
    wards: list[WardComparison]
    selected: WardComparison | None = None
