"""Rule-based short-term pollution trend prediction.

Compares the first and last AQI values of a ward's recent history (normally
7-14 daily points) and classifies the change:

- increase beyond the threshold -> INCREASING
- decrease beyond the threshold -> DECREASING
- otherwise -> STABLE

The threshold is 10 AQI points, or 5% of the starting value when that is
larger. The model is deliberately simple so that every verdict can be
explained to a ward officer in one sentence.

Confidence is banded differently per branch. Directional trends are banded on
the percentage change (> 15% HIGH, > 8% MEDIUM), stable verdicts on the number
of samples (>= 10 HIGH, >= 7 MEDIUM). A change can therefore clear the
classification threshold and still report LOW confidence.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime

from ward_aqi.schemas.prediction import Confidence, TrendDirection, TrendVerdict

MIN_THRESHOLD_POINTS = 10
THRESHOLD_FRACTION = 0.05
RECOMMENDED_MIN_POINTS = 7

INSUFFICIENT_DATA_EXPLANATION = (
    "Insufficient data for trend prediction. Need at least 7 days of historical data."
)
LIMITED_DATA_NOTE = (
    " Note: Prediction based on limited data points. For more accurate predictions,"
    " use 10-14 days of historical data."
)


@dataclass(frozen=True)
class Sample:
    """One historical AQI value for a calendar date."""

    date: date | datetime | str
    aqi: float


def _calendar_date(value: date | datetime | str) -> date:
    """Normalize a sample date; unparseable values sort as the earliest date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return date.min


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""
    return math.floor(value + 0.5)


def round_one_decimal(value: float) -> float:
    return round_half_up(value * 10) / 10


def _format_one_decimal(value: float) -> str:
    return f"{round_one_decimal(value):.1f}"


def _directional_confidence(change_percent: float) -> Confidence:
    magnitude = abs(change_percent)
    if magnitude > 15:
        return Confidence.HIGH
    if magnitude > 8:
        return Confidence.MEDIUM
    return Confidence.LOW


def _stable_confidence(data_points: int) -> Confidence:
    if data_points >= 10:
        return Confidence.HIGH
    if data_points >= 7:
        return Confidence.MEDIUM
    return Confidence.LOW


def predict_trend(ward_id: str, samples: Sequence[Sample] | None) -> TrendVerdict:
    """Predict the pollution trend of a ward from its AQI history.

    Args:
        ward_id: Ward identifier, passed through unvalidated.
        samples: Historical AQI values in any order. Not modified.

    Returns:
        The verdict. An empty history yields a STABLE/LOW sentinel rather
        than an error, so the dashboard always has something to show.
    """
    if not samples:
        return TrendVerdict(
            ward_id=ward_id,
            trend=TrendDirection.STABLE,
            explanation=INSUFFICIENT_DATA_EXPLANATION,
            confidence=Confidence.LOW,
            change_amount=0,
            change_percent=0,
            data_points=0,
        )

    # sorted() is stable and returns a copy; equal dates keep their input order
    ordered = sorted(samples, key=lambda sample: _calendar_date(sample.date))
    data_points = len(ordered)

    first_aqi = ordered[0].aqi
    last_aqi = ordered[-1].aqi
    change_amount = last_aqi - first_aqi
    change_percent = (change_amount / first_aqi) * 100 if first_aqi > 0 else 0.0

    threshold = max(MIN_THRESHOLD_POINTS, first_aqi * THRESHOLD_FRACTION)

    if change_amount > threshold:
        trend = TrendDirection.INCREASING
        confidence = _directional_confidence(change_percent)
        explanation = (
            f"Air quality is showing an upward trend. AQI increased by "
            f"{round_half_up(change_amount)} points ({_format_one_decimal(change_percent)}%) "
            f"over the last {data_points} days, indicating deteriorating conditions."
        )
    elif change_amount < -threshold:
        trend = TrendDirection.DECREASING
        confidence = _directional_confidence(change_percent)
        explanation = (
            f"Air quality is showing improvement. AQI decreased by "
            f"{round_half_up(abs(change_amount))} points "
            f"({_format_one_decimal(abs(change_percent))}%) "
            f"over the last {data_points} days, indicating better conditions."
        )
    else:
        trend = TrendDirection.STABLE
        confidence = _stable_confidence(data_points)
        explanation = (
            f"Air quality is relatively stable. AQI changed by "
            f"{round_half_up(abs(change_amount))} points "
            f"({_format_one_decimal(abs(change_percent))}%) "
            f"over the last {data_points} days, indicating consistent conditions."
        )

    if data_points < RECOMMENDED_MIN_POINTS:
        explanation += LIMITED_DATA_NOTE

    return TrendVerdict(
        ward_id=ward_id,
        trend=trend,
        explanation=explanation,
        confidence=confidence,
        change_amount=round_half_up(change_amount),
        change_percent=round_one_decimal(change_percent),
        data_points=data_points,
    )
