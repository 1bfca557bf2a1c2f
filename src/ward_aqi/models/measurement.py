"""Measurement models: AQI readings, source attribution, forecasts, weather."""

import datetime as dt
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ward_aqi.models.base import Base

if TYPE_CHECKING:
    from ward_aqi.models.ward import Ward


class AQIReading(Base):
    """Point-in-time AQI reading with pollutant concentrations."""

    __tablename__ = "aqi_data"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    ward_id: Mapped[str] = mapped_column(
        ForeignKey("wards.id", ondelete="CASCADE"), nullable=False, index=True
    )
    aqi: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    pm25: Mapped[float] = mapped_column(Float, nullable=False, default=0)  # ug/m3
    pm10: Mapped[float] = mapped_column(Float, nullable=False, default=0)  # ug/m3
    no2: Mapped[float] = mapped_column(Float, nullable=False, default=0)  # ug/m3
    so2: Mapped[float] = mapped_column(Float, nullable=False, default=0)  # ug/m3
    co: Mapped[float] = mapped_column(Float, nullable=False, default=0)  # mg/m3
    recorded_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), index=True
    )

    ward: Mapped["Ward"] = relationship("Ward", back_populates="readings")


class PollutionSource(Base):
    """Percentage attribution of pollution to source categories."""

    __tablename__ = "pollution_sources"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    ward_id: Mapped[str] = mapped_column(
        ForeignKey("wards.id", ondelete="CASCADE"), nullable=False, index=True
    )
    vehicular: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    construction: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    industrial: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    waste_burning: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    recorded_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), index=True
    )

    ward: Mapped["Ward"] = relationship("Ward", back_populates="sources")


class Forecast(Base):
    """Expected AQI 24 and 48 hours ahead."""

    __tablename__ = "forecasts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    ward_id: Mapped[str] = mapped_column(
        ForeignKey("wards.id", ondelete="CASCADE"), nullable=False, index=True
    )
    hours_24: Mapped[int] = mapped_column(Integer, nullable=False)
    hours_48: Mapped[int] = mapped_column(Integer, nullable=False)
    forecast_date: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), index=True
    )

    ward: Mapped["Ward"] = relationship("Ward", back_populates="forecasts")


class TimeSeriesPoint(Base):
    """Daily AQI aggregate; one row per ward and calendar date."""

    __tablename__ = "time_series_data"
    __table_args__ = (UniqueConstraint("ward_id", "date", name="uq_time_series_ward_date"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    ward_id: Mapped[str] = mapped_column(
        ForeignKey("wards.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    aqi: Mapped[int] = mapped_column(Integer, nullable=False)
    pm25: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    pm10: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    ward: Mapped["Ward"] = relationship("Ward", back_populates="time_series")


class WeatherReading(Base):
    """Weather observation for a ward."""

    __tablename__ = "weather_data"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    ward_id: Mapped[str] = mapped_column(
        ForeignKey("wards.id", ondelete="CASCADE"), nullable=False, index=True
    )
    wind_speed: Mapped[float] = mapped_column(Float, nullable=False)  # m/s
    temperature: Mapped[float] = mapped_column(Float, nullable=False)  # Celsius
    humidity: Mapped[float] = mapped_column(Float, nullable=False)  # percent
    recorded_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), index=True
    )

    ward: Mapped["Ward"] = relationship("Ward", back_populates="weather")
