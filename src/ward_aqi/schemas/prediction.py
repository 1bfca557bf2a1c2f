"""Trend prediction schemas."""

from enum import Enum

from ward_aqi.schemas.base import CamelModel


class TrendDirection(str, Enum):
    """Direction of the AQI change over the analysed window."""

    INCREASING = "INCREASING"
    DECREASING = "DECREASING"
    STABLE = "STABLE"


class Confidence(str, Enum):
    """Coarse label for how strongly the data supports the trend."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class TrendVerdict(CamelModel):
    """Trend prediction for one ward."""

    ward_id: str
    trend: TrendDirection
    explanation: str
    confidence: Confidence
    change_amount: int
    change_percent: float
    data_points: int
