"""Tests for the rule-based trend predictor."""

import random
from datetime import date, datetime, timedelta

import pytest

from ward_aqi.schemas.prediction import Confidence, TrendDirection
from ward_aqi.services.trend_prediction import (
    INSUFFICIENT_DATA_EXPLANATION,
    LIMITED_DATA_NOTE,
    Sample,
    predict_trend,
    round_half_up,
)

START = date(2024, 1, 1)


def series(first: float, last: float, points: int = 7, middle: float | None = None) -> list[Sample]:
    """Daily samples from ``first`` to ``last``; interior points default to ``first``."""
    fill = first if middle is None else middle
    values = [first] + [fill] * (points - 2) + [last]
    return [Sample(date=START + timedelta(days=i), aqi=value) for i, value in enumerate(values)]


class TestEmptyInput:
    """Tests for the empty-history sentinel."""

    @pytest.mark.parametrize("samples", [[], None])
    def test_empty_history_returns_sentinel(self, samples):
        """No samples should give a STABLE/LOW verdict without raising."""
        verdict = predict_trend("W001", samples)

        assert verdict.ward_id == "W001"
        assert verdict.trend == TrendDirection.STABLE
        assert verdict.confidence == Confidence.LOW
        assert verdict.change_amount == 0
        assert verdict.change_percent == 0
        assert verdict.data_points == 0
        assert verdict.explanation == INSUFFICIENT_DATA_EXPLANATION


class TestClassification:
    """Tests for trend direction and thresholds."""

    def test_threshold_is_inclusive_for_stable(self):
        """A change of exactly 10 points on a small baseline is still stable."""
        verdict = predict_trend("W001", series(200, 210))

        assert verdict.trend == TrendDirection.STABLE
        assert verdict.change_amount == 10

    def test_change_beyond_threshold_is_increasing(self):
        """One point past the threshold flips the verdict to increasing."""
        verdict = predict_trend("W001", series(200, 211))

        assert verdict.trend == TrendDirection.INCREASING
        assert verdict.change_amount == 11

    def test_proportional_threshold_on_high_baseline(self):
        """On a 300 baseline the threshold is 15, so +14 stays stable."""
        assert predict_trend("W001", series(300, 314)).trend == TrendDirection.STABLE
        assert predict_trend("W001", series(300, 316)).trend == TrendDirection.INCREASING

    def test_decrease_beyond_threshold(self):
        """A drop larger than the threshold is decreasing."""
        verdict = predict_trend("W001", series(200, 189))

        assert verdict.trend == TrendDirection.DECREASING
        assert verdict.change_amount == -11

    def test_symmetric_changes(self):
        """Equal rises and falls classify in opposite directions."""
        up = predict_trend("W001", series(100, 130))
        down = predict_trend("W001", series(130, 100))

        assert up.trend == TrendDirection.INCREASING
        assert up.change_amount == 30
        assert up.change_percent == 30.0
        assert down.trend == TrendDirection.DECREASING
        assert down.change_amount == -30
        assert down.change_percent == -23.1

    def test_only_first_and_last_points_matter(self):
        """Interior spikes do not affect the verdict."""
        flat = predict_trend("W001", series(150, 152))
        spiky = predict_trend("W001", series(150, 152, middle=400))

        assert flat == spiky
        assert spiky.trend == TrendDirection.STABLE

    def test_zero_baseline(self):
        """A zero starting AQI yields a zero percentage but still classifies."""
        verdict = predict_trend("W001", series(0, 50))

        assert verdict.trend == TrendDirection.INCREASING
        assert verdict.change_amount == 50
        assert verdict.change_percent == 0
        assert verdict.confidence == Confidence.LOW


class TestConfidence:
    """Tests for confidence banding."""

    def test_two_week_rise_is_high_confidence(self):
        """A 20% rise over 14 days is a high-confidence increase."""
        verdict = predict_trend("W003", series(150, 180, points=14))

        assert verdict.trend == TrendDirection.INCREASING
        assert verdict.confidence == Confidence.HIGH
        assert verdict.change_amount == 30
        assert verdict.change_percent == 20.0
        assert verdict.data_points == 14
        assert verdict.explanation == (
            "Air quality is showing an upward trend. AQI increased by 30 points (20.0%) "
            "over the last 14 days, indicating deteriorating conditions."
        )

    def test_moderate_percentage_is_medium_confidence(self):
        """A directional change between 8% and 15% is medium confidence."""
        verdict = predict_trend("W001", series(200, 220))

        assert verdict.trend == TrendDirection.INCREASING
        assert verdict.confidence == Confidence.MEDIUM

    def test_directional_trend_can_be_low_confidence(self):
        """Clearing the threshold with a small percentage gives low confidence."""
        verdict = predict_trend("W001", series(300, 316))

        assert verdict.trend == TrendDirection.INCREASING
        assert verdict.confidence == Confidence.LOW

    @pytest.mark.parametrize(
        "points,expected",
        [(10, Confidence.HIGH), (14, Confidence.HIGH), (7, Confidence.MEDIUM), (9, Confidence.MEDIUM), (6, Confidence.LOW)],
    )
    def test_stable_confidence_depends_on_sample_count(self, points, expected):
        """Stable verdicts are banded on the number of samples."""
        verdict = predict_trend("W001", series(120, 121, points=points))

        assert verdict.trend == TrendDirection.STABLE
        assert verdict.confidence == expected


class TestExplanation:
    """Tests for explanation text."""

    def test_decreasing_explanation_uses_magnitudes(self):
        """Decrease explanations report absolute values."""
        verdict = predict_trend("W002", series(200, 150))

        assert verdict.explanation == (
            "Air quality is showing improvement. AQI decreased by 50 points (25.0%) "
            "over the last 7 days, indicating better conditions."
        )

    def test_stable_explanation(self):
        verdict = predict_trend("W002", series(200, 195))

        assert verdict.explanation == (
            "Air quality is relatively stable. AQI changed by 5 points (2.5%) "
            "over the last 7 days, indicating consistent conditions."
        )

    @pytest.mark.parametrize("first,last", [(100, 200), (200, 100), (100, 101)])
    def test_short_series_gets_caveat(self, first, last):
        """Fewer than seven samples append the limited-data note for any trend."""
        verdict = predict_trend("W001", series(first, last, points=3))

        assert verdict.explanation.endswith(LIMITED_DATA_NOTE)
        assert verdict.data_points == 3

    def test_seven_samples_have_no_caveat(self):
        verdict = predict_trend("W001", series(100, 200, points=7))

        assert LIMITED_DATA_NOTE not in verdict.explanation

    def test_single_sample(self):
        """One sample compares against itself."""
        verdict = predict_trend("W001", [Sample(date="2024-01-01", aqi=180)])

        assert verdict.trend == TrendDirection.STABLE
        assert verdict.change_amount == 0
        assert verdict.confidence == Confidence.LOW
        assert verdict.explanation.endswith(LIMITED_DATA_NOTE)


class TestOrderingAndRounding:
    """Tests for input ordering, date handling and rounding."""

    def test_order_independent(self):
        """Shuffled input gives the same verdict as sorted input."""
        samples = [
            Sample(date=START + timedelta(days=i), aqi=value)
            for i, value in enumerate([140, 155, 149, 170, 162, 181, 176, 190, 188, 201])
        ]
        shuffled = list(samples)
        random.Random(7).shuffle(shuffled)

        assert predict_trend("W001", shuffled) == predict_trend("W001", samples)

    def test_input_is_not_mutated(self):
        samples = list(reversed(series(100, 150)))
        before = list(samples)

        predict_trend("W001", samples)

        assert samples == before

    def test_mixed_date_representations(self):
        """ISO strings, dates and datetimes sort on the calendar date."""
        samples = [
            Sample(date="2024-01-03", aqi=160),
            Sample(date=datetime(2024, 1, 1, 18, 30), aqi=100),
            Sample(date=date(2024, 1, 2), aqi=130),
        ]

        verdict = predict_trend("W001", samples)

        assert verdict.trend == TrendDirection.INCREASING
        assert verdict.change_amount == 60

    def test_unparseable_date_sorts_first(self):
        samples = [Sample(date="2024-01-02", aqi=100), Sample(date="not-a-date", aqi=200)]

        verdict = predict_trend("W001", samples)

        assert verdict.trend == TrendDirection.DECREASING
        assert verdict.change_amount == -100

    def test_change_amount_rounds_half_up(self):
        """A fractional half rounds up, and the percentage keeps one decimal."""
        verdict = predict_trend("W001", series(80, 100.5))

        assert verdict.change_amount == 21
        assert verdict.change_percent == 25.6

    @pytest.mark.parametrize(
        "value,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (-0.5, 0), (-1.5, -1), (2.49, 2)]
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_ward_id_is_passed_through(self):
        """The ward ID is echoed without validation."""
        assert predict_trend("anything goes", series(1, 2)).ward_id == "anything goes"

    def test_serializes_with_camel_case_keys(self):
        verdict = predict_trend("W001", series(150, 180, points=14))

        data = verdict.model_dump(by_alias=True, mode="json")

        assert data == {
            "wardId": "W001",
            "trend": "INCREASING",
            "explanation": verdict.explanation,
            "confidence": "HIGH",
            "changeAmount": 30,
            "changePercent": 20.0,
            "dataPoints": 14,
        }
