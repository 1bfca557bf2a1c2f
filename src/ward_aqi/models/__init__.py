"""SQLAlchemy models for the ward air quality monitor."""

from ward_aqi.models.alert import Alert
from ward_aqi.models.base import Base
from ward_aqi.models.measurement import (
    AQIReading,
    Forecast,
    PollutionSource,
    TimeSeriesPoint,
    WeatherReading,
)
from ward_aqi.models.policy_action import PolicyAction
from ward_aqi.models.user import User
from ward_aqi.models.ward import Ward

__all__ = [
    "Base",
    "User",
    "Ward",
    "AQIReading",
    "PollutionSource",
    "Forecast",
    "TimeSeriesPoint",
    "WeatherReading",
    "Alert",
    "PolicyAction",
]
