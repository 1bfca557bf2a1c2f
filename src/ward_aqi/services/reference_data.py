"""Reference ward dataset used for seeding and as the offline fallback."""

from typing import Any

REFERENCE_WARDS: tuple[dict[str, Any], ...] = (
    {
        "id": "W001",
        "name": "New Delhi - Lutyens Zone",
        "coordinates_path": "M 200 70 L 320 65 L 350 95 L 360 130 L 355 170 L 340 200 L 310 215 L 280 210 L 250 195 L 220 170 L 200 140 L 200 70 Z",
        "center_x": 280,
        "center_y": 140,
        "aqi": 342,
        "category": "Severe",
        "pollutants": {"pm25": 285, "pm10": 420, "no2": 95, "so2": 45, "co": 8.2},
        "sources": {"vehicular": 45, "construction": 25, "industrial": 20, "waste_burning": 10},
        "forecast": {"hours_24": 365, "hours_48": 380},
        "alerts": ("High vehicular traffic", "Construction activity detected"),
        "priority": 1,
    },
    {
        "id": "W002",
        "name": "Central Delhi - Old Delhi",
        "coordinates_path": "M 130 110 L 200 105 L 220 140 L 230 180 L 225 220 L 210 250 L 185 265 L 155 260 L 130 240 L 115 200 L 120 150 L 130 110 Z",
        "center_x": 175,
        "center_y": 185,
        "aqi": 298,
        "category": "Very Poor",
        "pollutants": {"pm25": 245, "pm10": 380, "no2": 110, "so2": 85, "co": 7.5},
        "sources": {"vehicular": 30, "construction": 15, "industrial": 45, "waste_burning": 10},
        "forecast": {"hours_24": 310, "hours_48": 325},
        "alerts": ("Industrial emissions spike", "Dense traffic in Chandni Chowk"),
        "priority": 2,
    },
    {
        "id": "W003",
        "name": "North Delhi",
        "coordinates_path": "M 90 60 L 200 55 L 220 85 L 230 120 L 225 160 L 210 190 L 180 205 L 150 200 L 120 180 L 100 150 L 90 110 L 90 60 Z",
        "center_x": 160,
        "center_y": 130,
        "aqi": 185,
        "category": "Moderate",
        "pollutants": {"pm25": 125, "pm10": 195, "no2": 55, "so2": 25, "co": 4.2},
        "sources": {"vehicular": 50, "construction": 20, "industrial": 15, "waste_burning": 15},
        "forecast": {"hours_24": 195, "hours_48": 210},
        "alerts": (),
        "priority": 5,
    },
    {
        "id": "W004",
        "name": "East Delhi",
        "coordinates_path": "M 180 210 L 260 205 L 280 240 L 290 280 L 285 320 L 270 350 L 240 365 L 210 360 L 180 340 L 165 300 L 170 250 L 180 210 Z",
        "center_x": 235,
        "center_y": 285,
        "aqi": 265,
        "category": "Poor",
        "pollutants": {"pm25": 195, "pm10": 310, "no2": 75, "so2": 35, "co": 6.1},
        "sources": {"vehicular": 55, "construction": 30, "industrial": 10, "waste_burning": 5},
        "forecast": {"hours_24": 280, "hours_48": 290},
        "alerts": ("Traffic congestion expected", "High population density"),
        "priority": 3,
    },
    {
        "id": "W005",
        "name": "South Delhi",
        "coordinates_path": "M 360 210 L 460 205 L 490 240 L 500 290 L 495 340 L 480 370 L 450 385 L 410 380 L 370 360 L 350 320 L 355 260 L 360 210 Z",
        "center_x": 425,
        "center_y": 295,
        "aqi": 142,
        "category": "Moderate",
        "pollutants": {"pm25": 95, "pm10": 155, "no2": 45, "so2": 20, "co": 3.5},
        "sources": {"vehicular": 40, "construction": 25, "industrial": 20, "waste_burning": 15},
        "forecast": {"hours_24": 155, "hours_48": 165},
        "alerts": (),
        "priority": 6,
    },
    {
        "id": "W006",
        "name": "West Delhi",
        "coordinates_path": "M 320 110 L 420 105 L 440 140 L 450 180 L 445 220 L 430 250 L 400 265 L 370 260 L 340 240 L 320 200 L 315 150 L 320 110 Z",
        "center_x": 380,
        "center_y": 185,
        "aqi": 95,
        "category": "Satisfactory",
        "pollutants": {"pm25": 65, "pm10": 105, "no2": 30, "so2": 15, "co": 2.1},
        "sources": {"vehicular": 35, "construction": 20, "industrial": 25, "waste_burning": 20},
        "forecast": {"hours_24": 105, "hours_48": 115},
        "alerts": (),
        "priority": 8,
    },
    {
        "id": "W007",
        "name": "North East Delhi",
        "coordinates_path": "M 260 260 L 340 255 L 360 290 L 370 330 L 365 370 L 350 390 L 320 395 L 290 390 L 260 370 L 245 330 L 250 280 L 260 260 Z",
        "center_x": 315,
        "center_y": 325,
        "aqi": 312,
        "category": "Severe",
        "pollutants": {"pm25": 265, "pm10": 395, "no2": 105, "so2": 50, "co": 8.8},
        "sources": {"vehicular": 60, "construction": 20, "industrial": 15, "waste_burning": 5},
        "forecast": {"hours_24": 335, "hours_48": 350},
        "alerts": ("Heavy traffic flow", "Road dust accumulation", "Industrial area"),
        "priority": 2,
    },
    {
        "id": "W008",
        "name": "South West Delhi",
        "coordinates_path": "M 460 160 L 540 155 L 560 190 L 570 240 L 565 290 L 550 320 L 520 335 L 490 330 L 460 310 L 445 270 L 450 210 L 460 160 Z",
        "center_x": 510,
        "center_y": 245,
        "aqi": 225,
        "category": "Poor",
        "pollutants": {"pm25": 165, "pm10": 265, "no2": 65, "so2": 30, "co": 5.5},
        "sources": {"vehicular": 45, "construction": 30, "industrial": 15, "waste_burning": 10},
        "forecast": {"hours_24": 240, "hours_48": 250},
        "alerts": ("Construction activity", "Metro expansion work"),
        "priority": 4,
    },
)

DEFAULT_WEATHER = {"wind_speed": 8.5, "temperature": 28.0, "humidity": 65.0}
DEFAULT_CURRENT_AQI = 150
