"""Tests for AQI helpers and the default-data provider."""

from datetime import date, timedelta

import pytest

from ward_aqi.services.aqi import category_for_aqi, is_valid_ward_id, ward_priority
from ward_aqi.services.fallback import FallbackDataProvider, get_fallback_provider
from ward_aqi.services.reference_data import REFERENCE_WARDS


class TestAqiHelpers:
    """Tests for category bands and ward identifiers."""

    @pytest.mark.parametrize(
        "aqi,category",
        [
            (0, "Good"),
            (50, "Good"),
            (51, "Satisfactory"),
            (100, "Satisfactory"),
            (101, "Moderate"),
            (200, "Moderate"),
            (201, "Poor"),
            (300, "Poor"),
            (301, "Very Poor"),
            (400, "Very Poor"),
            (401, "Severe"),
            (999, "Severe"),
        ],
    )
    def test_category_bands(self, aqi, category):
        assert category_for_aqi(aqi) == category

    @pytest.mark.parametrize("value", ["W001", "w1", "ward_10", "a-b", " W002 "])
    def test_valid_ward_ids(self, value):
        assert is_valid_ward_id(value) is True

    @pytest.mark.parametrize("value", ["", "   ", "W0000000001", "W 01", "W01;DROP", None, 42])
    def test_invalid_ward_ids(self, value):
        assert is_valid_ward_id(value) is False

    def test_ward_priority_prefers_stored_value(self):
        assert ward_priority("W007", 2) == 2

    def test_ward_priority_from_numeric_id(self):
        assert ward_priority("W003") == 3

    def test_ward_priority_default(self):
        assert ward_priority("central") == 10
        assert ward_priority(None) == 10


class TestFallbackDataProvider:
    """Tests for default wards, weather and synthetic series."""

    def test_reference_wards(self):
        """The default wards mirror the reference dataset."""
        wards = FallbackDataProvider().ward_responses()

        assert [ward.id for ward in wards] == [ward["id"] for ward in REFERENCE_WARDS]
        assert wards[0].name == "New Delhi - Lutyens Zone"
        assert wards[0].forecast.hours_48 == 380
        assert wards[0].alerts == ["High vehicular traffic", "Construction activity detected"]

    def test_ward_responses_are_fresh_copies(self):
        """Mutating a returned ward does not leak into later calls."""
        provider = FallbackDataProvider()
        provider.ward_responses()[0].alerts.append("extra")

        assert "extra" not in provider.ward_responses()[0].alerts

    def test_default_weather(self):
        weather = FallbackDataProvider().weather_response()

        assert weather.wind_speed == 8.5
        assert weather.temperature == 28
        assert weather.humidity == 65

    def test_provider_is_immutable(self):
        provider = get_fallback_provider()

        with pytest.raises(AttributeError):
            provider.current_aqi = 1

    def test_synthetic_series_shape(self):
        """The series has one point per day ending today."""
        today = date(2024, 3, 15)
        samples = FallbackDataProvider().synthetic_series("W001", 14, current_aqi=200, today=today)

        assert len(samples) == 14
        assert samples[-1].date == today
        assert samples[0].date == today - timedelta(days=13)
        for i, sample in enumerate(samples):
            expected = 200 - (i / 14) * 15
            assert abs(sample.aqi - expected) <= 10.5
            assert sample.aqi == int(sample.aqi)

    def test_synthetic_series_is_stable_per_day(self):
        """Repeated calls for the same ward and day agree."""
        provider = FallbackDataProvider()
        today = date(2024, 3, 15)

        first = provider.synthetic_series("W001", 7, current_aqi=180, today=today)
        second = provider.synthetic_series("W001", 7, current_aqi=180, today=today)

        assert first == second

    def test_synthetic_series_defaults_to_provider_aqi(self):
        provider = FallbackDataProvider(current_aqi=400)
        samples = provider.synthetic_series("W001", 7, today=date(2024, 3, 15))

        assert all(sample.aqi >= 375 for sample in samples)

    def test_synthetic_series_never_negative(self):
        samples = FallbackDataProvider().synthetic_series(
            "W001", 30, current_aqi=0, today=date(2024, 3, 15)
        )

        assert all(sample.aqi >= 0 for sample in samples)
