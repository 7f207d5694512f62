"""
Report rendering.

Turns aggregation results into the text blocks shown by the shell.
"""

from typing import Dict, List, Optional

from src.agents.aggregation import AggregationEngine
from src.models.passenger import PassengerRecord
from src.models.stats import DelaySummary, NumericSummary, ServiceRanking

NOT_AVAILABLE = "n/a"

BANNER = (
    "╔════════════════════════════════════════════════════════════╗\n"
    "║       AIRLINE PASSENGER SATISFACTION - DATA SUMMARY        ║\n"
    "╚════════════════════════════════════════════════════════════╝\n"
)


def section(title: str) -> str:
    return f"\n─────────────────── {title} ───────────────────\n"


def percent(part: int, whole: int) -> str:
    if whole == 0:
        return NOT_AVAILABLE
    return f"{part * 100.0 / whole:.1f}%"


def format_ranking(ranking: Optional[ServiceRanking]) -> str:
    """
    Render the top/bottom service ranking.

    Bottom entries are numbered from the third-worst down to the worst.
    """
    if ranking is None:
        return "No service ratings available.\n"

    lines: List[str] = [f"TOP {len(ranking.top)} RATED SERVICES:"]
    for i, (label, mean) in enumerate(ranking.top, start=1):
        lines.append(f"  {i}. {label}: {mean:.2f}/5.00")

    lines.append("")
    lines.append(f"BOTTOM {len(ranking.bottom)} RATED SERVICES:")
    size = len(ranking.bottom)
    for i, (label, mean) in enumerate(ranking.bottom):
        lines.append(f"  {size - i}. {label}: {mean:.2f}/5.00")

    return "\n".join(lines) + "\n"


def format_distribution(counts: Dict[str, int], total: Optional[int] = None) -> str:
    if not counts:
        return f"  {NOT_AVAILABLE}\n"
    total = sum(counts.values()) if total is None else total
    return "".join(
        f"  {key}: {value:,} ({percent(value, total)})\n" for key, value in counts.items()
    )


def format_rates(rates: Dict[str, float]) -> str:
    if not rates:
        return f"  {NOT_AVAILABLE}\n"
    return "".join(f"  {key}: {rate:.1f}% satisfied\n" for key, rate in rates.items())


def format_summary(summary: Optional[NumericSummary], unit: str = "") -> str:
    if summary is None:
        return f"  {NOT_AVAILABLE}\n"
    suffix = f" {unit}" if unit else ""
    text = (
        f"  Minimum: {summary.min:,.1f}{suffix}\n"
        f"  Maximum: {summary.max:,.1f}{suffix}\n"
        f"  Average: {summary.mean:,.1f}{suffix}\n"
        f"  Count: {summary.count:,}\n"
    )
    if isinstance(summary, DelaySummary):
        text += (
            f"  Flights with Delays: {summary.delayed_count:,}\n"
            f"  On-Time Flights: {summary.on_time_count:,}\n"
        )
    return text


def format_record(record: PassengerRecord) -> str:
    """Detail view of a single passenger."""
    average = record.average_service_rating
    average_text = f"{average:.2f}/5.00" if average is not None else NOT_AVAILABLE
    lines = [
        f"  ID: {record.id}",
        f"  Gender: {record.gender}",
        f"  Age: {record.age}",
        f"  Customer Type: {record.customer_type}",
        f"  Type of Travel: {record.type_of_travel}",
        f"  Travel Class: {record.travel_class}",
        f"  Flight Distance: {record.flight_distance:,} miles",
        f"  Departure Delay: {record.departure_delay_minutes:.1f} min",
        f"  Arrival Delay: {record.arrival_delay_minutes:.1f} min",
        f"  Average Service Rating: {average_text}",
        f"  Satisfaction: {record.satisfaction}",
    ]
    if record.flight_date:
        lines.append(f"  Flight Date: {record.flight_date}")
    return "\n".join(lines) + "\n"


def comprehensive_report(engine: AggregationEngine) -> str:
    """
    Full dataset summary: overview, gender, age, distance, service ratings.
    """
    total = engine.count()
    satisfied = engine.satisfied_count()
    parts: List[str] = ["\n", BANNER]

    parts.append(section("DATASET OVERVIEW"))
    parts.append(f"  Total Records: {total:,}\n")
    parts.append(format_distribution(
        {"Satisfied Passengers": satisfied, "Dissatisfied Passengers": total - satisfied},
        total
    ))

    parts.append(section("GENDER DISTRIBUTION"))
    parts.append(format_distribution(engine.distribution("gender"), total))

    parts.append(section("AGE STATISTICS"))
    age = engine.numeric_stats("age")
    if age is None:
        parts.append(f"  {NOT_AVAILABLE}\n")
    else:
        parts.append(f"  Minimum Age: {age.min:.1f}\n")
        parts.append(f"  Maximum Age: {age.max:.1f}\n")
        parts.append(f"  Average Age: {age.mean:.1f}\n")

    parts.append(section("FLIGHT DISTANCE"))
    distance = engine.numeric_stats("flight_distance")
    if distance is None:
        parts.append(f"  {NOT_AVAILABLE}\n")
    else:
        parts.append(f"  Average Distance: {distance.mean:.1f} miles\n")
        parts.append(f"  Shortest Flight: {distance.min:.0f} miles\n")
        parts.append(f"  Longest Flight: {distance.max:.0f} miles\n")

    parts.append(section("SERVICE RATINGS SUMMARY"))
    overall = engine.overall_average_rating()
    overall_text = f"{overall:.2f} / 5.00" if overall is not None else NOT_AVAILABLE
    parts.append(f"  Overall Average Rating: {overall_text}\n")
    parts.append(format_ranking(engine.service_ranking()))

    return "".join(parts)
