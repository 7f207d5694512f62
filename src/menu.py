"""
Interactive text menu.

Presentation shell over QueryOrchestrator. All state lives in MenuSession.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from src.orchestrator import QueryOrchestrator
from src.models.passenger import PassengerRecord
from src.utils import report
from src.utils.tables import distribution_to_frame, records_to_frame, render
import config.settings as settings

logger = logging.getLogger(__name__)

# (choice, label, handler)
MenuItems = List[Tuple[str, str, Callable[["MenuSession"], None]]]


class MenuExit(Exception):
    """Raised when input is exhausted."""


@dataclass
class MenuSession:
    """
    State of one interactive session.

    input_fn and output_fn default to the console and are swapped in tests.
    """
    orchestrator: QueryOrchestrator
    input_fn: Callable[[str], str] = input
    output_fn: Callable[[str], None] = print
    history: List[str] = field(default_factory=list)

    def say(self, text: str = "") -> None:
        self.output_fn(text)

    def ask(self, prompt: str) -> str:
        try:
            answer = self.input_fn(prompt)
        except EOFError:
            raise MenuExit()
        self.history.append(answer)
        return answer.strip()

    def ask_int(self, prompt: str) -> int:
        while True:
            answer = self.ask(prompt)
            try:
                return int(answer)
            except ValueError:
                self.say("⚠ Please enter a whole number.")


def run_menu(session: MenuSession) -> None:
    """Main loop. Returns when the user exits or input runs out."""
    stats = session.orchestrator.load_stats
    session.say(f"✓ Dataset loaded: {stats.rows_parsed:,} records "
                f"({stats.rows_skipped:,} malformed rows skipped)")
    try:
        _loop(session, "MAIN MENU", MAIN_MENU, back_label="Exit")
    except MenuExit:
        logger.info("Input closed, leaving menu")
    session.say("Thank you for using the system! Goodbye!")


def _loop(session: MenuSession, title: str, items: MenuItems, back_label: str = "Back") -> None:
    handlers = {choice: handler for choice, _, handler in items}
    while True:
        session.say(_menu_text(title, items, back_label))
        choice = session.ask("Enter your choice: ")
        if choice == "0":
            return
        handler = handlers.get(choice)
        if handler is None:
            session.say("⚠ Invalid choice. Please try again.")
            continue
        handler(session)


def _menu_text(title: str, items: MenuItems, back_label: str) -> str:
    lines = ["", f"── {title} ──"]
    lines += [f"  {choice}. {label}" for choice, label, _ in items]
    lines.append(f"  0. {back_label}")
    return "\n".join(lines)


def _records(session: MenuSession, records) -> None:
    session.say(render(records_to_frame(records)))


def _distribution(session: MenuSession, title: str, field_name: str) -> None:
    counts = session.orchestrator.distribution_by(field_name)
    session.say(f"\n══════ {title} ══════")
    session.say(render(distribution_to_frame(counts, total=session.orchestrator.total_records())))


def _rates(session: MenuSession, title: str, field_name: str) -> None:
    session.say(f"\n══════ {title} ══════")
    session.say(report.format_rates(session.orchestrator.satisfaction_rate_by(field_name)))


def _stats(session: MenuSession, title: str, field_name: str, unit: str = "") -> None:
    session.say(f"\n══════ {title} ══════")
    session.say(report.format_summary(session.orchestrator.numeric_stats(field_name), unit))


# Main menu

def show_overview(session: MenuSession) -> None:
    o = session.orchestrator
    total = o.total_records()
    satisfied = o.satisfied_count()
    session.say("\n══════ DATASET OVERVIEW ══════")
    session.say(f"  Total Records: {total:,}")
    session.say(report.format_distribution(
        {"Satisfied": satisfied, "Dissatisfied": total - satisfied}, total
    ).rstrip("\n"))


def demographics_menu(session: MenuSession) -> None:
    _loop(session, "DEMOGRAPHICS ANALYSIS", DEMOGRAPHICS_MENU)


def flight_menu(session: MenuSession) -> None:
    _loop(session, "FLIGHT STATISTICS", FLIGHT_MENU)


def service_menu(session: MenuSession) -> None:
    _loop(session, "SERVICE RATINGS ANALYSIS", SERVICE_MENU)


def satisfaction_menu(session: MenuSession) -> None:
    _loop(session, "SATISFACTION ANALYSIS", SATISFACTION_MENU)


def search_menu(session: MenuSession) -> None:
    _loop(session, "SEARCH & FILTER", SEARCH_MENU)


def show_report(session: MenuSession) -> None:
    session.say(session.orchestrator.comprehensive_report())


# Demographics

def show_gender(session: MenuSession) -> None:
    _distribution(session, "GENDER DISTRIBUTION", "gender")


def show_customer_type(session: MenuSession) -> None:
    _distribution(session, "CUSTOMER TYPE DISTRIBUTION", "customer_type")


def show_age_stats(session: MenuSession) -> None:
    _stats(session, "AGE STATISTICS", "age", "years")


def show_age_groups(session: MenuSession) -> None:
    _distribution(session, "AGE GROUP DISTRIBUTION", "age_group")


# Flights

def show_travel_type(session: MenuSession) -> None:
    _distribution(session, "TRAVEL TYPE DISTRIBUTION", "type_of_travel")


def show_travel_class(session: MenuSession) -> None:
    _distribution(session, "TRAVEL CLASS DISTRIBUTION", "travel_class")


def show_distance_stats(session: MenuSession) -> None:
    _stats(session, "FLIGHT DISTANCE STATISTICS", "flight_distance", "miles")


def show_distance_categories(session: MenuSession) -> None:
    _distribution(session, "FLIGHT DISTANCE CATEGORIES", "distance_category")


def show_departure_delay(session: MenuSession) -> None:
    _stats(session, "DEPARTURE DELAY STATISTICS", "departure_delay", "min")


def show_arrival_delay(session: MenuSession) -> None:
    _stats(session, "ARRIVAL DELAY STATISTICS", "arrival_delay", "min")


def show_longest_flight(session: MenuSession) -> None:
    record = session.orchestrator.longest_flight()
    session.say("\n══════ LONGEST FLIGHT ══════")
    if record is None:
        session.say(f"  {report.NOT_AVAILABLE}")
    else:
        session.say(report.format_record(record))


# Service ratings

def show_service_averages(session: MenuSession) -> None:
    averages = session.orchestrator.average_service_ratings()
    session.say("\n══════ AVERAGE SERVICE RATINGS ══════")
    if not averages:
        session.say(f"  {report.NOT_AVAILABLE}")
        return
    width = max(len(label) for label in averages)
    for label, mean in averages.items():
        session.say(f"  {label:<{width}}  {mean:.2f}/5.00")


def show_service_ranking(session: MenuSession) -> None:
    session.say("\n══════ SERVICE RANKING SUMMARY ══════")
    session.say(session.orchestrator.service_ranking_summary())


# Satisfaction

def show_satisfaction(session: MenuSession) -> None:
    _distribution(session, "SATISFACTION DISTRIBUTION", "satisfaction")


def show_rate_by_class(session: MenuSession) -> None:
    _rates(session, "SATISFACTION BY TRAVEL CLASS", "travel_class")


def show_rate_by_customer_type(session: MenuSession) -> None:
    _rates(session, "SATISFACTION BY CUSTOMER TYPE", "customer_type")


def show_rate_by_travel_type(session: MenuSession) -> None:
    _rates(session, "SATISFACTION BY TRAVEL TYPE", "type_of_travel")


def show_rate_by_age_group(session: MenuSession) -> None:
    _rates(session, "SATISFACTION BY AGE GROUP", "age_group")


# Search & filter

def search_by_id(session: MenuSession) -> None:
    record_id = session.ask("Enter Passenger ID to search: ")
    record: Optional[PassengerRecord] = session.orchestrator.find_by_id(record_id)
    session.say("\n══════ SEARCH RESULT ══════")
    if record is None:
        session.say(f"  ✗ No passenger found with ID: {record_id}")
    else:
        session.say("  ✓ Passenger Found!")
        session.say(report.format_record(record))


def search_by_date(session: MenuSession) -> None:
    token = session.ask("Enter flight date exactly as stored: ")
    records = session.orchestrator.find_by_date(token)
    session.say("\n══════ SEARCH RESULT ══════")
    session.say(f"  Flights on '{token}': {len(records):,}")
    if records:
        _records(session, records[:settings.SAMPLE_SIZE])


def filter_by_class(session: MenuSession) -> None:
    session.say("\nAvailable Classes: " + ", ".join(session.orchestrator.distribution_by("travel_class")))
    travel_class = session.ask("Enter travel class to filter: ")
    records = session.orchestrator.filter_by_class(travel_class)
    summary = session.orchestrator.summarize(records)
    session.say("\n══════ FILTER RESULTS ══════")
    session.say(f"  Records in '{travel_class}' class: {summary.count:,}")
    if summary.count:
        session.say(f"  Satisfied: {summary.satisfied_count:,} ({summary.satisfaction_rate:.1f}%)")
        session.say(f"  Dissatisfied: {summary.dissatisfied_count:,} "
                    f"({100.0 - summary.satisfaction_rate:.1f}%)")
        session.say(f"  Average Age: {summary.average_age:.1f} years")
        session.say(f"  Average Flight Distance: {summary.average_distance:.1f} miles")


def filter_by_age_range(session: MenuSession) -> None:
    min_age = session.ask_int("Enter minimum age: ")
    max_age = session.ask_int("Enter maximum age: ")
    records = session.orchestrator.filter_by_age_range(min_age, max_age)
    summary = session.orchestrator.summarize(records)
    session.say("\n══════ FILTER RESULTS ══════")
    session.say(f"  Passengers aged {min_age}-{max_age}: {summary.count:,}")
    if summary.count:
        session.say(f"  Satisfied: {summary.satisfied_count:,} ({summary.satisfaction_rate:.1f}%)")
        session.say("\n  Class Distribution:")
        for travel_class, count in summary.class_distribution.items():
            session.say(f"    - {travel_class}: {count:,}")


def show_sample(session: MenuSession) -> None:
    session.say(f"\n══════ SAMPLE RECORDS (First {settings.SAMPLE_SIZE}) ══════")
    _records(session, session.orchestrator.sample(settings.SAMPLE_SIZE))


MAIN_MENU: MenuItems = [
    ("1", "Dataset Overview", show_overview),
    ("2", "Demographics Analysis", demographics_menu),
    ("3", "Flight Statistics", flight_menu),
    ("4", "Service Ratings Analysis", service_menu),
    ("5", "Satisfaction Analysis", satisfaction_menu),
    ("6", "Search & Filter Records", search_menu),
    ("7", "Generate Comprehensive Report", show_report),
]

DEMOGRAPHICS_MENU: MenuItems = [
    ("1", "Gender Distribution", show_gender),
    ("2", "Customer Type Distribution", show_customer_type),
    ("3", "Age Statistics", show_age_stats),
    ("4", "Age Group Distribution", show_age_groups),
]

FLIGHT_MENU: MenuItems = [
    ("1", "Travel Type Distribution", show_travel_type),
    ("2", "Travel Class Distribution", show_travel_class),
    ("3", "Flight Distance Statistics", show_distance_stats),
    ("4", "Flight Distance Categories", show_distance_categories),
    ("5", "Departure Delay Statistics", show_departure_delay),
    ("6", "Arrival Delay Statistics", show_arrival_delay),
    ("7", "Longest Flight", show_longest_flight),
]

SERVICE_MENU: MenuItems = [
    ("1", "All Service Average Ratings", show_service_averages),
    ("2", "Top & Bottom Rated Services", show_service_ranking),
]

SATISFACTION_MENU: MenuItems = [
    ("1", "Overall Satisfaction Distribution", show_satisfaction),
    ("2", "Satisfaction by Travel Class", show_rate_by_class),
    ("3", "Satisfaction by Customer Type", show_rate_by_customer_type),
    ("4", "Satisfaction by Travel Type", show_rate_by_travel_type),
    ("5", "Satisfaction by Age Group", show_rate_by_age_group),
]

SEARCH_MENU: MenuItems = [
    ("1", "Search by Passenger ID", search_by_id),
    ("2", "Search by Flight Date", search_by_date),
    ("3", "Filter by Travel Class", filter_by_class),
    ("4", "Filter by Age Range", filter_by_age_range),
    ("5", f"View Sample Records (First {settings.SAMPLE_SIZE})", show_sample),
]
