"""
Statistics result models.

Fixed-shape results returned by the loader and the aggregation engine.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class LoadStats:
    """Row accounting for a single load."""
    rows_seen: int = 0
    rows_parsed: int = 0
    rows_skipped: int = 0
    source: str = ""


@dataclass(frozen=True)
class NumericSummary:
    """Min/max/mean over a numeric projection. Never built from zero values."""
    min: float
    max: float
    mean: float
    count: int


@dataclass(frozen=True)
class DelaySummary(NumericSummary):
    """Delay statistics with on-time accounting."""
    delayed_count: int = 0  # Delay strictly greater than zero
    on_time_count: int = 0


@dataclass(frozen=True)
class ServiceRanking:
    """
    Best and worst services by mean rating.

    Both halves come from one descending ordering; bottom holds its tail.
    """
    top: Tuple[Tuple[str, float], ...] = ()
    bottom: Tuple[Tuple[str, float], ...] = ()


@dataclass(frozen=True)
class SubsetSummary:
    """Headline figures for a filtered subset of records."""
    count: int
    satisfied_count: int
    satisfaction_rate: Optional[float]
    average_age: Optional[float]
    average_distance: Optional[float]
    class_distribution: Dict[str, int] = field(default_factory=dict)

    @property
    def dissatisfied_count(self) -> int:
        return self.count - self.satisfied_count
