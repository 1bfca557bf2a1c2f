"""AQI category bands and ward identifier helpers."""

import re

# Upper bound (inclusive) of each band of the national AQI scale
AQI_CATEGORY_BANDS: tuple[tuple[int, str], ...] = (
    (50, "Good"),
    (100, "Satisfactory"),
    (200, "Moderate"),
    (300, "Poor"),
    (400, "Very Poor"),
)
SEVERE_CATEGORY = "Severe"
DEFAULT_CATEGORY = "Moderate"
DEFAULT_WARD_PRIORITY = 10

WARD_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{1,10}$")


def category_for_aqi(aqi: float) -> str:
    """Return the AQI category name for a value."""
    for upper_bound, category in AQI_CATEGORY_BANDS:
        if aqi <= upper_bound:
            return category
    return SEVERE_CATEGORY


def is_valid_ward_id(value: object) -> bool:
    """Ward IDs are 1-10 characters of letters, digits, '_' or '-'."""
    if not isinstance(value, str) or not value.strip():
        return False
    return WARD_ID_PATTERN.match(value.strip()) is not None


def ward_priority(ward_id: str | None, stored_priority: int | None = None) -> int:
    """Resolve a ward's priority.

    Uses the stored priority when present, otherwise the numeric part of the
    ward ID ("W003" -> 3), otherwise the default.
    """
    if stored_priority is not None:
        return stored_priority
    if not ward_id:
        return DEFAULT_WARD_PRIORITY
    match = re.match(r"^[wW]?(\d+)", ward_id.strip())
    if match is None:
        return DEFAULT_WARD_PRIORITY
    return int(match.group(1))
