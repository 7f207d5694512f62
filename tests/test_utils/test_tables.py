"""
Tests for tabular rendering and report text helpers.
"""

from src.models.stats import ServiceRanking
from src.utils import report
from src.utils.tables import SAMPLE_COLUMNS, distribution_to_frame, records_to_frame, render


def test_records_to_frame_columns(make_record):
    df = records_to_frame([make_record(id="5", age=41), make_record(id="6")])

    assert list(df.columns) == SAMPLE_COLUMNS
    assert list(df["ID"]) == ["5", "6"]
    assert df.loc[0, "Age"] == 41


def test_empty_frame_renders_placeholder():
    assert render(records_to_frame([])) == "  (no records)\n"


def test_distribution_frame_sorted_with_percent():
    df = distribution_to_frame({"Eco": 1, "Business": 2, "Eco Plus": 1}, label="Class")

    assert list(df["Class"]) == ["Business", "Eco", "Eco Plus"]
    assert list(df["Percent"]) == [50.0, 25.0, 25.0]


def test_distribution_frame_uses_given_total():
    df = distribution_to_frame({"Male": 1}, total=3)

    assert df.loc[0, "Percent"] == 33.3


def test_distribution_frame_empty():
    df = distribution_to_frame({})

    assert df.empty
    assert "Percent" in df.columns


def test_percent_of_zero_is_not_available():
    assert report.percent(0, 0) == report.NOT_AVAILABLE
    assert report.percent(1, 3) == "33.3%"


def test_format_ranking_bottom_numbering():
    ranking = ServiceRanking(
        top=(("Seat Comfort", 4.5), ("Online Boarding", 4.0), ("Cleanliness", 3.9)),
        bottom=(("Gate Location", 2.9), ("Food and Drink", 2.5), ("Inflight Wifi Service", 2.1)),
    )

    lines = report.format_ranking(ranking).splitlines()

    assert lines[1] == "  1. Seat Comfort: 4.50/5.00"
    assert lines[-3] == "  3. Gate Location: 2.90/5.00"
    assert lines[-1] == "  1. Inflight Wifi Service: 2.10/5.00"


def test_format_record_omits_empty_date(make_record):
    text = report.format_record(make_record(flight_date="", cleanliness=None))

    assert "Flight Date" not in text
    assert "Average Service Rating: 3.00/5.00" in text
