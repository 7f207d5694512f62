"""
Unit tests for the Query Orchestrator.
"""

import os
import tempfile
from unittest.mock import Mock

import pytest

from src.agents.ingestion import SourceUnreadableError
from src.models.stats import LoadStats
from src.orchestrator import QueryOrchestrator


def _write_dataset(tmpdir, header, lines):
    path = os.path.join(tmpdir, "airline.csv")
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join([header, *lines]) + "\n")
    return path


@pytest.fixture
def orchestrator(header, make_line):
    """Orchestrator loaded from a small CSV with one malformed row."""
    lines = [
        make_line(row_index=0, id="11", gender="Female", age=22, flight_distance=400),
        make_line(row_index=1, id="12", gender="Male", age=51, travel_class="Eco",
                  flight_distance=2600, satisfaction="neutral or dissatisfied",
                  departure_delay="20"),
        "broken,row",
        make_line(row_index=3, id="13", gender="Female", age=35, travel_class="Eco Plus",
                  flight_distance=900),
    ]
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write_dataset(tmpdir, header, lines)
        orch = QueryOrchestrator(dataset_path=path)
        orch.load()
    return orch


def test_load_stats(orchestrator):
    stats = orchestrator.load_stats

    assert stats.rows_seen == 4
    assert stats.rows_parsed == 3
    assert stats.rows_skipped == 1
    assert orchestrator.total_records() == 3


def test_queries_before_load_raise():
    orch = QueryOrchestrator(dataset_path="unused.csv")

    with pytest.raises(RuntimeError, match="not loaded"):
        orch.total_records()
    with pytest.raises(RuntimeError):
        orch.load_stats


def test_missing_dataset_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        orch = QueryOrchestrator(dataset_path=os.path.join(tmpdir, "nope.csv"))

        with pytest.raises(SourceUnreadableError):
            orch.load()


def test_delegated_queries(orchestrator):
    assert orchestrator.distribution_by("gender") == {"Female": 2, "Male": 1}
    assert orchestrator.satisfied_count() == 2
    assert orchestrator.find_by_id("12").age == 51
    assert orchestrator.find_by_id("99") is None
    assert [r.id for r in orchestrator.filter_by_class("eco")] == ["12"]
    assert [r.id for r in orchestrator.filter_by_age_range(30, 60)] == ["12", "13"]
    assert len(orchestrator.filter_by_satisfaction(False)) == 1
    assert orchestrator.longest_flight().id == "12"
    assert orchestrator.numeric_stats("departure_delay").delayed_count == 1
    assert [r.id for r in orchestrator.sample(2)] == ["11", "12"]


def test_service_ranking_summary_text(orchestrator):
    text = orchestrator.service_ranking_summary()

    assert "TOP 3 RATED SERVICES:" in text
    assert "BOTTOM 3 RATED SERVICES:" in text
    assert "1. Inflight Wifi Service: 3.00/5.00" in text
    assert "3. Check-in Service: 3.00/5.00" in text
    assert "1. Cleanliness: 3.00/5.00" in text


def test_comprehensive_report_sections(orchestrator):
    text = orchestrator.comprehensive_report()

    for title in (
        "DATASET OVERVIEW",
        "GENDER DISTRIBUTION",
        "AGE STATISTICS",
        "FLIGHT DISTANCE",
        "SERVICE RATINGS SUMMARY",
    ):
        assert title in text
    assert "Total Records: 3" in text
    assert "Satisfied Passengers: 2 (66.7%)" in text
    assert "Dissatisfied Passengers: 1 (33.3%)" in text
    assert "Female: 2 (66.7%)" in text
    assert "Minimum Age: 22.0" in text
    assert "Longest Flight: 2600 miles" in text
    assert "Overall Average Rating: 3.00 / 5.00" in text


def test_comprehensive_report_empty_dataset(header):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write_dataset(tmpdir, header, [])
        orch = QueryOrchestrator(dataset_path=path)
        orch.load()

    text = orch.comprehensive_report()

    assert "Total Records: 0" in text
    assert "Satisfied Passengers: 0 (n/a)" in text
    assert "Dissatisfied Passengers: 0 (n/a)" in text
    assert "Overall Average Rating: n/a" in text
    assert "No service ratings available." in text


def test_injected_loader_is_used(make_record):
    loader = Mock()
    loader.load.return_value = (
        (make_record(id="A"), make_record(id="B", satisfaction="neutral or dissatisfied")),
        LoadStats(rows_seen=2, rows_parsed=2, source="memory"),
    )
    orch = QueryOrchestrator(dataset_path="memory.csv", loader=loader)

    stats = orch.load()

    loader.load.assert_called_once_with("memory.csv")
    assert stats.source == "memory"
    assert orch.overall_satisfaction_rate() == 50.0
