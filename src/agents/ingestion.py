"""
Ingestion Agent.

Reads the delimited passenger survey source and turns each data row into a
PassengerRecord. Bad rows are dropped and counted, never fatal.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Tuple, Union

from src.models.passenger import PassengerRecord, SERVICE_FIELDS, SERVICE_COUNT
from src.models.stats import LoadStats
import config.settings as settings

logger = logging.getLogger(__name__)

Dataset = Tuple[PassengerRecord, ...]
Source = Union[str, Path, TextIO, Iterable[str]]

# Fixed leading columns
ROW_INDEX_COL = 0
ID_COL = 1
GENDER_COL = 2
CUSTOMER_TYPE_COL = 3
AGE_COL = 4
TYPE_OF_TRAVEL_COL = 5
CLASS_COL = 6
DISTANCE_COL = 7
FIRST_RATING_COL = 8

# Canonical position of the satisfaction label (ratings 8..21, delays 22-23)
SATISFACTION_COL = FIRST_RATING_COL + SERVICE_COUNT + 2


class SourceUnreadableError(Exception):
    """Raised when the input source cannot be opened at all."""


class RowMalformedError(ValueError):
    """Raised internally for a data row that cannot become a record."""


def parse_int(value: str, default: int = 0) -> int:
    """Parse an integer column, accepting integral floats like '34.0'."""
    text = value.strip()
    if not text:
        return default
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return default
    if number != number or number in (float("inf"), float("-inf")):
        return default
    if not number.is_integer():
        return default
    return int(number)


def parse_float(value: str, default: float = 0.0) -> float:
    """Parse a floating-point column; empty or unparsable gives the default."""
    text = value.strip()
    if not text:
        return default
    try:
        number = float(text)
    except ValueError:
        return default
    if number != number:  # NaN
        return default
    return number


def _is_satisfaction_label(value: str) -> bool:
    return value.strip().lower() in settings.SATISFACTION_LABELS


class RecordLoader:
    """
    Loads passenger records from a comma-separated source.

    The first line is a header and is skipped. Every other non-blank line is
    split on the delimiter (no quoting support) and coerced column by column.
    Field-level failures fall back to defaults; only rows that are too short
    or that still fail during construction are skipped.
    """

    def __init__(
        self,
        delimiter: str = settings.CSV_DELIMITER,
        min_columns: int = settings.MIN_COLUMNS,
        log_limit: int = settings.MALFORMED_ROW_LOG_LIMIT
    ):
        """
        Initialize record loader.

        Args:
            delimiter: Field separator
            min_columns: Rows with fewer fields are malformed
            log_limit: Number of skipped rows logged individually
        """
        self.delimiter = delimiter
        self.min_columns = min_columns
        self.log_limit = log_limit

    def load(self, source: Source) -> Tuple[Dataset, LoadStats]:
        """
        Load every parseable row from a source.

        Args:
            source: File path, or an open text stream / iterable of lines

        Returns:
            (records in source order, row accounting)

        Raises:
            SourceUnreadableError: If a path cannot be opened or read
        """
        if isinstance(source, (str, Path)):
            path = Path(source)
            logger.info(f"Loading passenger records from {path}")
            try:
                with open(path, "r", encoding="utf-8-sig") as f:
                    return self._load_lines(f, str(path))
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Cannot read source {path}: {e}")
                raise SourceUnreadableError(f"Cannot read source {path}: {e}") from e

        name = getattr(source, "name", "<stream>")
        try:
            return self._load_lines(source, str(name))
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Cannot read source {name}: {e}")
            raise SourceUnreadableError(f"Cannot read source {name}: {e}") from e

    def _load_lines(self, lines: Iterable[str], source_name: str) -> Tuple[Dataset, LoadStats]:
        records: List[PassengerRecord] = []
        seen = 0
        skipped = 0

        iterator = iter(lines)
        header = next(iterator, None)
        if header is None:
            logger.warning(f"Source {source_name} is empty, no header found")
            return (), LoadStats(source=source_name)

        for line_number, line in enumerate(iterator, start=2):
            if not line.strip():
                continue
            seen += 1

            try:
                record = self.parse_line(line)
            except (RowMalformedError, ValueError, TypeError, IndexError) as e:
                skipped += 1
                if skipped <= self.log_limit:
                    logger.debug(f"Skipping line {line_number}: {e}")
                continue

            records.append(record)

        stats = LoadStats(
            rows_seen=seen,
            rows_parsed=len(records),
            rows_skipped=skipped,
            source=source_name
        )

        if skipped:
            logger.warning(
                f"Skipped {skipped} malformed rows out of {seen} in {source_name}"
            )
        logger.info(f"Loaded {len(records)} records from {source_name}")

        return tuple(records), stats

    def parse_line(self, line: str) -> PassengerRecord:
        """
        Parse one data line into a record.

        Args:
            line: Raw line text (trailing newline allowed)

        Returns:
            PassengerRecord

        Raises:
            RowMalformedError: If the line has fewer than min_columns fields
        """
        values = line.rstrip("\r\n").split(self.delimiter)

        if len(values) < self.min_columns:
            raise RowMalformedError(
                f"expected at least {self.min_columns} columns, got {len(values)}"
            )

        satisfaction_col = self._locate_satisfaction(values)
        departure_col = satisfaction_col - 2
        arrival_col = satisfaction_col - 1
        date_col = satisfaction_col + 1

        # Ratings fill declaration order; a short revision leaves the tail absent
        rating_values = values[FIRST_RATING_COL:departure_col]
        ratings = {}
        for i, (attr, _) in enumerate(SERVICE_FIELDS):
            if i < len(rating_values):
                ratings[attr] = parse_int(rating_values[i])
            else:
                ratings[attr] = None

        return PassengerRecord(
            id=values[ID_COL].strip(),
            gender=values[GENDER_COL].strip(),
            customer_type=values[CUSTOMER_TYPE_COL].strip(),
            age=parse_int(values[AGE_COL]),
            type_of_travel=values[TYPE_OF_TRAVEL_COL].strip(),
            travel_class=values[CLASS_COL].strip(),
            flight_distance=parse_int(values[DISTANCE_COL]),
            departure_delay_minutes=parse_float(values[departure_col]),
            arrival_delay_minutes=parse_float(values[arrival_col]),
            satisfaction=values[satisfaction_col].strip(),
            flight_date=values[date_col].strip() if date_col < len(values) else "",
            row_index=self._parse_row_index(values[ROW_INDEX_COL]),
            **ratings
        )

    def _locate_satisfaction(self, values: List[str]) -> int:
        """
        Find the satisfaction column.

        Canonical rows keep it at SATISFACTION_COL. Date-bearing rows from the
        revision with one rating column fewer carry the label one position
        earlier, where the arrival delay would otherwise sit. Any other text
        there is a bad arrival delay and keeps the canonical layout.
        """
        short_col = SATISFACTION_COL - 1
        if (
            short_col + 1 < len(values)
            and _is_satisfaction_label(values[short_col])
            and not _is_satisfaction_label(values[SATISFACTION_COL])
        ):
            return short_col
        if SATISFACTION_COL >= len(values):
            raise RowMalformedError("no satisfaction column")
        return SATISFACTION_COL

    @staticmethod
    def _parse_row_index(value: str) -> Optional[int]:
        if not value.strip():
            return None
        return parse_int(value)


def load(
    source: Source,
    delimiter: str = settings.CSV_DELIMITER,
    min_columns: int = settings.MIN_COLUMNS
) -> Tuple[Dataset, LoadStats]:
    """Load a source with a default-configured RecordLoader."""
    return RecordLoader(delimiter=delimiter, min_columns=min_columns).load(source)
