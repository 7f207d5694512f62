"""
Numeric bucketing helpers.

Half-open ranges, lower bound inclusive, tested in increasing order.
"""

from typing import Optional, Sequence, Tuple

# (exclusive upper bound, label); None marks the open-ended last bucket
AGE_GROUPS: Tuple[Tuple[Optional[int], str], ...] = (
    (18, "Under 18"),
    (30, "18-29"),
    (45, "30-44"),
    (60, "45-59"),
    (None, "60+"),
)

DISTANCE_CATEGORIES: Tuple[Tuple[Optional[int], str], ...] = (
    (500, "Short (<500 mi)"),
    (1500, "Medium (500-1500 mi)"),
    (3000, "Long (1500-3000 mi)"),
    (None, "Very Long (3000+ mi)"),
)

AGE_GROUP_LABELS = tuple(label for _, label in AGE_GROUPS)
DISTANCE_CATEGORY_LABELS = tuple(label for _, label in DISTANCE_CATEGORIES)


def _bucket(value: float, bounds: Sequence[Tuple[Optional[int], str]]) -> str:
    for upper, label in bounds:
        if upper is None or value < upper:
            return label
    # Unreachable: the last bucket is open-ended
    return bounds[-1][1]


def age_group(age: int) -> str:
    """Age bucket label for a passenger age."""
    return _bucket(age, AGE_GROUPS)


def distance_category(miles: int) -> str:
    """Distance bucket label for a flight distance in miles."""
    return _bucket(miles, DISTANCE_CATEGORIES)
