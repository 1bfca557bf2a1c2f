"""Ward schemas for dashboard endpoints."""

from pydantic import Field

from ward_aqi.schemas.base import CamelModel


class Pollutants(CamelModel):
    """Latest pollutant concentrations."""

    pm25: float = 0
    pm10: float = 0
    no2: float = 0
    so2: float = 0
    co: float = 0


class SourceBreakdown(CamelModel):
    """Percentage attribution per pollution source."""

    vehicular: int = 0
    construction: int = 0
    industrial: int = 0
    waste_burning: int = 0


class ForecastSummary(CamelModel):
    """Forecast AQI 24 and 48 hours ahead."""

    hours_24: int = 0
    hours_48: int = 0


class Coordinates(CamelModel):
    """SVG outline and label anchor of a ward on the city map."""

    path: str = ""
    center_x: float = 0
    center_y: float = 0


class WardResponse(CamelModel):
    """Ward with its latest conditions."""

    id: str
    name: str
    aqi: int = 0
    category: str = "Moderate"
    pollutants: Pollutants = Field(default_factory=Pollutants)
    sources: SourceBreakdown = Field(default_factory=SourceBreakdown)
    forecast: ForecastSummary = Field(default_factory=ForecastSummary)
    coordinates: Coordinates = Field(default_factory=Coordinates)
    alerts: list[str] = Field(default_factory=list)
    priority: int = 10


class AQIReadingCreateRequest(CamelModel):
    """New AQI reading for a ward. The category is derived when omitted."""

    aqi: int = Field(..., ge=0)
    category: str | None = Field(None, max_length=20)
    pm25: float = Field(..., ge=0)
    pm10: float = Field(..., ge=0)
    no2: float = Field(0, ge=0)
    so2: float = Field(0, ge=0)
    co: float = Field(0, ge=0)


class MessageResponse(CamelModel):
    """Acknowledgement for write endpoints."""

    success: bool = True
    message: str
