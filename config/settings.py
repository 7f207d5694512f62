"""
Configuration settings for the airline satisfaction statistics tool.

Centralized configuration for the loader, the aggregation engine and the shell.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"

# Dataset location (override with AIRLINE_DATASET_PATH)
DEFAULT_DATASET_PATH = Path(
    os.getenv("AIRLINE_DATASET_PATH", str(DATA_ROOT / "airline_satisfaction.csv"))
)

# Source format
CSV_DELIMITER = ","
MIN_COLUMNS = 25  # Rows with fewer fields are dropped as malformed

# Satisfaction label counted as "satisfied" (case-insensitive exact match)
SATISFIED_TOKEN = "satisfied"

# Labels recognised in the satisfaction column when resolving the row layout
SATISFACTION_LABELS = ("satisfied", "neutral or dissatisfied", "dissatisfied")

# Presentation
SAMPLE_SIZE = 10  # Records shown by the "sample" view
TOP_N_SERVICES = 3  # Entries in each half of the service ranking

# Ingestion diagnostics
MALFORMED_ROW_LOG_LIMIT = 20  # Individual skipped rows logged at DEBUG

# Logging
LOG_LEVEL = os.getenv("AIRLINE_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "airline_stats.log"
