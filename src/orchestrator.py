"""
Query Orchestrator.

Loads the dataset once and answers every query the shell can ask.
"""

import logging
from typing import Dict, Optional, Tuple

from src.agents.ingestion import RecordLoader, Source
from src.agents.aggregation import AggregationEngine
from src.models.passenger import PassengerRecord
from src.models.stats import LoadStats, NumericSummary, ServiceRanking, SubsetSummary
from src.utils import report
import config.settings as settings

logger = logging.getLogger(__name__)


class QueryOrchestrator:
    """
    Single entry point between the presentation layer and the core.

    Coordinates:
    1. Loading (RecordLoader) → 2. Querying (AggregationEngine)
    → 3. Text composition (report)
    """

    def __init__(
        self,
        dataset_path: Source = settings.DEFAULT_DATASET_PATH,
        loader: Optional[RecordLoader] = None
    ):
        """
        Initialize orchestrator.

        Args:
            dataset_path: CSV path or open text stream to load
            loader: Loader to use (defaults to a settings-configured one)
        """
        self.dataset_path = dataset_path
        self.loader = loader or RecordLoader()
        self._engine: Optional[AggregationEngine] = None
        self._load_stats: Optional[LoadStats] = None

    def load(self) -> LoadStats:
        """
        Load the dataset. Called once at startup.

        Raises:
            SourceUnreadableError: If the source cannot be read
        """
        records, stats = self.loader.load(self.dataset_path)
        self._engine = AggregationEngine(records)
        self._load_stats = stats
        logger.info(
            f"Loaded {stats.rows_parsed} records "
            f"({stats.rows_skipped} skipped of {stats.rows_seen})"
        )
        return stats

    @property
    def engine(self) -> AggregationEngine:
        if self._engine is None:
            raise RuntimeError("Dataset not loaded. Call load() first.")
        return self._engine

    @property
    def load_stats(self) -> LoadStats:
        if self._load_stats is None:
            raise RuntimeError("Dataset not loaded. Call load() first.")
        return self._load_stats

    # Query interface

    def total_records(self) -> int:
        return self.engine.count()

    def distribution_by(self, field: str) -> Dict[str, int]:
        return self.engine.distribution(field)

    def numeric_stats(self, field: str) -> Optional[NumericSummary]:
        return self.engine.numeric_stats(field)

    def average_service_ratings(self) -> Dict[str, float]:
        return self.engine.average_service_ratings()

    def service_ranking(self) -> Optional[ServiceRanking]:
        return self.engine.service_ranking(settings.TOP_N_SERVICES)

    def service_ranking_summary(self) -> str:
        return report.format_ranking(self.service_ranking())

    def satisfaction_rate_by(self, field: str) -> Dict[str, float]:
        return self.engine.satisfaction_rate_by(field)

    def filter_by_class(self, travel_class: str) -> Tuple[PassengerRecord, ...]:
        return self.engine.filter_by_class(travel_class)

    def filter_by_age_range(self, min_age: int, max_age: int) -> Tuple[PassengerRecord, ...]:
        return self.engine.filter_by_age_range(min_age, max_age)

    def filter_by_satisfaction(self, satisfied: bool) -> Tuple[PassengerRecord, ...]:
        return self.engine.filter_by_satisfaction(satisfied)

    def find_by_id(self, record_id) -> Optional[PassengerRecord]:
        return self.engine.find_by_id(record_id)

    def find_by_date(self, date_token: str) -> Tuple[PassengerRecord, ...]:
        return self.engine.find_by_date(date_token)

    def sample(self, n: int = settings.SAMPLE_SIZE) -> Tuple[PassengerRecord, ...]:
        return self.engine.sample(n)

    def summarize(self, records) -> SubsetSummary:
        return self.engine.summarize(records)

    def satisfied_count(self) -> int:
        return self.engine.satisfied_count()

    def overall_satisfaction_rate(self) -> Optional[float]:
        return self.engine.overall_satisfaction_rate()

    def longest_flight(self) -> Optional[PassengerRecord]:
        return self.engine.longest_flight()

    def comprehensive_report(self) -> str:
        return report.comprehensive_report(self.engine)
