"""
Tabular views of passenger records.

pandas DataFrames used by the shell for record listings.
"""

from typing import Dict, Iterable, Optional

import pandas as pd

from src.models.passenger import PassengerRecord

SAMPLE_COLUMNS = [
    "ID", "Gender", "Age", "Customer Type", "Travel Type",
    "Class", "Distance", "Satisfaction",
]


def records_to_frame(records: Iterable[PassengerRecord]) -> pd.DataFrame:
    """One row per record with the columns of the sample listing."""
    rows = [
        {
            "ID": r.id,
            "Gender": r.gender,
            "Age": r.age,
            "Customer Type": r.customer_type,
            "Travel Type": r.type_of_travel,
            "Class": r.travel_class,
            "Distance": r.flight_distance,
            "Satisfaction": r.satisfaction,
        }
        for r in records
    ]
    if not rows:
        return pd.DataFrame(columns=SAMPLE_COLUMNS)
    return pd.DataFrame(rows, columns=SAMPLE_COLUMNS)


def distribution_to_frame(
    counts: Dict[str, int],
    label: str = "Category",
    total: Optional[int] = None
) -> pd.DataFrame:
    """
    Counts with their share of the total, largest first.

    Equal counts keep their incoming order.
    """
    df = pd.DataFrame(list(counts.items()), columns=[label, "Count"])
    if df.empty:
        df["Percent"] = pd.Series(dtype=float)
        return df

    denominator = total if total else df["Count"].sum()
    df["Percent"] = (df["Count"] * 100.0 / denominator).round(1)
    return df.sort_values("Count", ascending=False, kind="stable").reset_index(drop=True)


def render(df: pd.DataFrame) -> str:
    if df.empty:
        return "  (no records)\n"
    return df.to_string(index=False) + "\n"
