"""Ward model: the municipal sub-area every measurement belongs to."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Float, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ward_aqi.models.base import Base

if TYPE_CHECKING:
    from ward_aqi.models.alert import Alert
    from ward_aqi.models.measurement import (
        AQIReading,
        Forecast,
        PollutionSource,
        TimeSeriesPoint,
        WeatherReading,
    )
    from ward_aqi.models.policy_action import PolicyAction


class Ward(Base):
    """Ward with its map outline and response priority."""

    __tablename__ = "wards"

    id: Mapped[str] = mapped_column(String(10), primary_key=True)  # e.g. "W001"
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    coordinates_path: Mapped[str | None] = mapped_column(Text, nullable=True)  # SVG path
    center_x: Mapped[float | None] = mapped_column(Float, nullable=True)
    center_y: Mapped[float | None] = mapped_column(Float, nullable=True)
    priority: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 1 = most urgent
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    readings: Mapped[list["AQIReading"]] = relationship(
        "AQIReading", back_populates="ward", cascade="all, delete-orphan"
    )
    sources: Mapped[list["PollutionSource"]] = relationship(
        "PollutionSource", back_populates="ward", cascade="all, delete-orphan"
    )
    forecasts: Mapped[list["Forecast"]] = relationship(
        "Forecast", back_populates="ward", cascade="all, delete-orphan"
    )
    time_series: Mapped[list["TimeSeriesPoint"]] = relationship(
        "TimeSeriesPoint", back_populates="ward", cascade="all, delete-orphan"
    )
    weather: Mapped[list["WeatherReading"]] = relationship(
        "WeatherReading", back_populates="ward", cascade="all, delete-orphan"
    )
    alerts: Mapped[list["Alert"]] = relationship(
        "Alert", back_populates="ward", cascade="all, delete-orphan"
    )
    policy_actions: Mapped[list["PolicyAction"]] = relationship(
        "PolicyAction", back_populates="ward", cascade="all, delete-orphan"
    )
