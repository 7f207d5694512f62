"""
Aggregation Engine.

Descriptive statistics over the loaded passenger records: grouped counts,
numeric summaries, satisfaction rates, service rankings and lookups.
"""

import logging
from collections import Counter
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from src.models.passenger import PassengerRecord, SERVICE_FIELDS
from src.models.stats import DelaySummary, NumericSummary, ServiceRanking, SubsetSummary
from src.utils.buckets import (
    AGE_GROUP_LABELS,
    DISTANCE_CATEGORY_LABELS,
    age_group,
    distance_category,
)
import config.settings as settings

logger = logging.getLogger(__name__)

KeyFn = Callable[[PassengerRecord], str]
ValueFn = Callable[[PassengerRecord], float]

# Categorical fields: name -> (key function, fixed label order or None)
CATEGORICAL_FIELDS: Dict[str, Tuple[KeyFn, Optional[Tuple[str, ...]]]] = {
    "gender": (lambda r: r.gender, None),
    "customer_type": (lambda r: r.customer_type, None),
    "type_of_travel": (lambda r: r.type_of_travel, None),
    "travel_class": (lambda r: r.travel_class, None),
    "satisfaction": (lambda r: r.satisfaction, None),
    "age_group": (lambda r: age_group(r.age), AGE_GROUP_LABELS),
    "distance_category": (lambda r: distance_category(r.flight_distance), DISTANCE_CATEGORY_LABELS),
}

NUMERIC_FIELDS: Dict[str, ValueFn] = {
    "age": lambda r: r.age,
    "flight_distance": lambda r: r.flight_distance,
    "departure_delay": lambda r: r.departure_delay_minutes,
    "arrival_delay": lambda r: r.arrival_delay_minutes,
}

DELAY_FIELDS = ("departure_delay", "arrival_delay")


class AggregationEngine:
    """
    Read-only query engine over an immutable record collection.

    Every query is a single linear pass. Empty inputs produce None or empty
    containers instead of dividing by zero.
    """

    def __init__(self, records: Iterable[PassengerRecord]):
        """
        Initialize aggregation engine.

        Args:
            records: Loaded records, in source order
        """
        self.records: Tuple[PassengerRecord, ...] = tuple(records)
        logger.debug(f"AggregationEngine ready with {len(self.records)} records")

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def count(self) -> int:
        return len(self.records)

    def group_count(self, key_fn: KeyFn) -> Dict[str, int]:
        """
        Count records per category.

        Only observed categories appear, in first-appearance order.
        """
        return dict(Counter(key_fn(r) for r in self.records))

    def numeric_summary(self, value_fn: ValueFn) -> Optional[NumericSummary]:
        """Min/max/mean of a numeric projection, or None with no records."""
        return _summarize([value_fn(r) for r in self.records])

    def satisfaction_rate(self, key_fn: KeyFn) -> Dict[str, float]:
        """
        Percentage of satisfied passengers within each category.

        Each rate is relative to its own group size.
        """
        totals: Dict[str, int] = {}
        satisfied: Counter = Counter()
        for record in self.records:
            key = key_fn(record)
            totals[key] = totals.get(key, 0) + 1
            if record.is_satisfied:
                satisfied[key] += 1

        return {key: satisfied[key] * 100.0 / total for key, total in totals.items()}

    def filter(self, predicate: Callable[[PassengerRecord], bool]) -> Tuple[PassengerRecord, ...]:
        return tuple(r for r in self.records if predicate(r))

    def find_by_id(self, record_id) -> Optional[PassengerRecord]:
        """
        First record whose ID matches, or None.

        Args:
            record_id: ID as text or number; compared as trimmed text
        """
        target = str(record_id).strip()
        for record in self.records:
            if record.id == target:
                return record
        return None

    def find_by_date(self, date_token: str) -> Tuple[PassengerRecord, ...]:
        """All records whose flight date equals the token exactly."""
        target = date_token.strip()
        return self.filter(lambda r: r.flight_date == target)

    # ------------------------------------------------------------------
    # Distributions and summaries
    # ------------------------------------------------------------------

    def distribution(self, field: str) -> Dict[str, int]:
        """
        Record counts per value of a categorical or bucketed field.

        Args:
            field: One of CATEGORICAL_FIELDS

        Raises:
            ValueError: If field is not categorical
        """
        key_fn, order = _categorical(field)
        counts = self.group_count(key_fn)
        return _ordered(counts, order)

    def numeric_stats(self, field: str) -> Optional[NumericSummary]:
        """
        Summary of a numeric field; delay fields add on-time accounting.

        Returns:
            NumericSummary / DelaySummary, or None with no records

        Raises:
            ValueError: If field is not numeric
        """
        if field not in NUMERIC_FIELDS:
            raise ValueError(
                f"Invalid numeric field: {field}. Must be one of {sorted(NUMERIC_FIELDS)}"
            )

        value_fn = NUMERIC_FIELDS[field]
        summary = self.numeric_summary(value_fn)
        if summary is None or field not in DELAY_FIELDS:
            return summary

        delayed = sum(1 for r in self.records if value_fn(r) > 0)
        return DelaySummary(
            min=summary.min,
            max=summary.max,
            mean=summary.mean,
            count=summary.count,
            delayed_count=delayed,
            on_time_count=summary.count - delayed
        )

    def satisfaction_rate_by(self, field: str) -> Dict[str, float]:
        """Satisfaction percentage per value of a categorical field."""
        key_fn, order = _categorical(field)
        return _ordered(self.satisfaction_rate(key_fn), order)

    # ------------------------------------------------------------------
    # Service ratings
    # ------------------------------------------------------------------

    def average_service_ratings(self) -> Dict[str, float]:
        """
        Mean rating per service across all records, in declaration order.

        Services without any value are left out, so an empty dataset
        yields an empty dict.
        """
        averages: Dict[str, float] = {}
        for attr, label in SERVICE_FIELDS:
            values = [getattr(r, attr) for r in self.records if getattr(r, attr) is not None]
            if values:
                averages[label] = sum(values) / len(values)
        return averages

    def service_ranking(self, top_n: int = settings.TOP_N_SERVICES) -> Optional[ServiceRanking]:
        """
        Best and worst rated services.

        Sorting is stable, so services with equal means keep declaration
        order in both halves.
        """
        averages = self.average_service_ratings()
        if not averages:
            return None

        ranked = sorted(averages.items(), key=lambda item: item[1], reverse=True)
        return ServiceRanking(
            top=tuple(ranked[:top_n]),
            bottom=tuple(ranked[-top_n:]) if top_n > 0 else ()
        )

    def overall_average_rating(self) -> Optional[float]:
        """Mean of the per-service means."""
        averages = self.average_service_ratings()
        if not averages:
            return None
        return sum(averages.values()) / len(averages)

    # ------------------------------------------------------------------
    # Filters and lookups
    # ------------------------------------------------------------------

    def filter_by_class(self, travel_class: str) -> Tuple[PassengerRecord, ...]:
        target = travel_class.strip().lower()
        return self.filter(lambda r: r.travel_class.lower() == target)

    def filter_by_age_range(self, min_age: int, max_age: int) -> Tuple[PassengerRecord, ...]:
        """Records with min_age <= age <= max_age."""
        return self.filter(lambda r: min_age <= r.age <= max_age)

    def filter_by_satisfaction(self, satisfied: bool) -> Tuple[PassengerRecord, ...]:
        return self.filter(lambda r: r.is_satisfied == satisfied)

    def sample(self, n: int = settings.SAMPLE_SIZE) -> Tuple[PassengerRecord, ...]:
        """First n records in load order."""
        if n <= 0:
            return ()
        return self.records[:n]

    def satisfied_count(self) -> int:
        return sum(1 for r in self.records if r.is_satisfied)

    def overall_satisfaction_rate(self) -> Optional[float]:
        if not self.records:
            return None
        return self.satisfied_count() * 100.0 / len(self.records)

    def longest_flight(self) -> Optional[PassengerRecord]:
        """First record with the greatest flight distance."""
        longest = None
        for record in self.records:
            if longest is None or record.flight_distance > longest.flight_distance:
                longest = record
        return longest

    def summarize(self, records: Iterable[PassengerRecord]) -> SubsetSummary:
        """
        Headline figures for a subset, typically a filter result.

        Rates and means are None when the subset is empty.
        """
        subset = AggregationEngine(records)
        size = subset.count()
        age = subset.numeric_summary(NUMERIC_FIELDS["age"])
        distance = subset.numeric_summary(NUMERIC_FIELDS["flight_distance"])

        return SubsetSummary(
            count=size,
            satisfied_count=subset.satisfied_count(),
            satisfaction_rate=subset.overall_satisfaction_rate(),
            average_age=age.mean if age else None,
            average_distance=distance.mean if distance else None,
            class_distribution=subset.distribution("travel_class")
        )


def _summarize(values: List[float]) -> Optional[NumericSummary]:
    if not values:
        return None

    low = high = values[0]
    total = 0.0
    for value in values:
        if value < low:
            low = value
        if value > high:
            high = value
        total += value

    return NumericSummary(min=low, max=high, mean=total / len(values), count=len(values))


def _categorical(field: str) -> Tuple[KeyFn, Optional[Tuple[str, ...]]]:
    if field not in CATEGORICAL_FIELDS:
        raise ValueError(
            f"Invalid categorical field: {field}. Must be one of {sorted(CATEGORICAL_FIELDS)}"
        )
    return CATEGORICAL_FIELDS[field]


def _ordered(values: Dict[str, float], order: Optional[Tuple[str, ...]]) -> Dict:
    """Reorder bucket results by bucket declaration; keep others as observed."""
    if order is None:
        return values
    return {label: values[label] for label in order if label in values}
