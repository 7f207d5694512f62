"""
Tests for the interactive menu shell.
"""

import io

import pytest

from src.menu import MenuSession, run_menu
from src.orchestrator import QueryOrchestrator


class ScriptedInput:
    """Feeds prepared answers, then behaves like a closed stdin."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError()
        return self.answers.pop(0)


@pytest.fixture
def orchestrator(header, make_line):
    lines = [
        make_line(id="101", age=28, travel_class="Business"),
        make_line(id="102", age=64, travel_class="Eco", satisfaction="neutral or dissatisfied",
                  flight_date="2023-05-05"),
    ]
    source = io.StringIO("\n".join([header, *lines]) + "\n")
    orch = QueryOrchestrator(dataset_path=source)
    orch.load()
    return orch


def _run(orchestrator, answers):
    output = []
    scripted = ScriptedInput(answers)
    session = MenuSession(orchestrator=orchestrator, input_fn=scripted, output_fn=output.append)
    run_menu(session)
    return "\n".join(output), session


def test_exit_immediately(orchestrator):
    text, session = _run(orchestrator, ["0"])

    assert "✓ Dataset loaded: 2 records (0 malformed rows skipped)" in text
    assert "MAIN MENU" in text
    assert text.endswith("Thank you for using the system! Goodbye!")
    assert session.history == ["0"]


def test_end_of_input_leaves_menu(orchestrator):
    text, _ = _run(orchestrator, [])

    assert text.endswith("Thank you for using the system! Goodbye!")


def test_invalid_choice_reprompts(orchestrator):
    text, _ = _run(orchestrator, ["9", "abc", "0"])

    assert text.count("⚠ Invalid choice. Please try again.") == 2


def test_overview(orchestrator):
    text, _ = _run(orchestrator, ["1", "0"])

    assert "Total Records: 2" in text
    assert "Satisfied: 1 (50.0%)" in text
    assert "Dissatisfied: 1 (50.0%)" in text


def test_search_by_id_found(orchestrator):
    text, _ = _run(orchestrator, ["6", "1", " 102 ", "0", "0"])

    assert "✓ Passenger Found!" in text
    assert "ID: 102" in text
    assert "Age: 64" in text


def test_search_by_id_not_found(orchestrator):
    text, _ = _run(orchestrator, ["6", "1", "999", "0", "0"])

    assert "✗ No passenger found with ID: 999" in text


def test_search_by_date(orchestrator):
    text, _ = _run(orchestrator, ["6", "2", "2023-05-05", "0", "0"])

    assert "Flights on '2023-05-05': 1" in text
    assert "102" in text


def test_filter_by_age_range_retries_bad_number(orchestrator):
    text, _ = _run(orchestrator, ["6", "4", "sixty", "60", "70", "0", "0"])

    assert "⚠ Please enter a whole number." in text
    assert "Passengers aged 60-70: 1" in text
    assert "    - Eco: 1" in text


def test_filter_by_class(orchestrator):
    text, _ = _run(orchestrator, ["6", "3", "business", "0", "0"])

    assert "Available Classes: Business, Eco" in text
    assert "Records in 'business' class: 1" in text
    assert "Satisfied: 1 (100.0%)" in text


def test_sample_table(orchestrator):
    text, _ = _run(orchestrator, ["6", "5", "0", "0"])

    assert "SAMPLE RECORDS (First 10)" in text
    assert "Customer Type" in text
    assert "101" in text and "102" in text


def test_service_ranking(orchestrator):
    text, _ = _run(orchestrator, ["4", "2", "0", "0"])

    assert "TOP 3 RATED SERVICES:" in text
    assert "BOTTOM 3 RATED SERVICES:" in text


def test_satisfaction_by_age_group(orchestrator):
    text, _ = _run(orchestrator, ["5", "5", "0", "0"])

    assert "18-29: 100.0% satisfied" in text
    assert "60+: 0.0% satisfied" in text


def test_delay_statistics(orchestrator):
    text, _ = _run(orchestrator, ["3", "5", "0", "0"])

    assert "DEPARTURE DELAY STATISTICS" in text
    assert "Flights with Delays: 0" in text
    assert "On-Time Flights: 2" in text


def test_eof_inside_submenu(orchestrator):
    text, _ = _run(orchestrator, ["2", "1"])

    assert "GENDER DISTRIBUTION" in text
    assert text.endswith("Thank you for using the system! Goodbye!")
