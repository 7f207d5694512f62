"""
Shared fixtures: builders for source lines and records.
"""

import pytest

from src.models.passenger import PassengerRecord, SERVICE_FIELDS

HEADER = (
    "index,id,Gender,Customer Type,Age,Type of Travel,Class,Flight Distance,"
    "Inflight wifi service,Departure/Arrival time convenient,Ease of Online booking,"
    "Gate location,Food and drink,Online boarding,Seat comfort,Inflight entertainment,"
    "On-board service,Leg room service,Baggage handling,Checkin service,Inflight service,"
    "Cleanliness,Departure Delay in Minutes,Arrival Delay in Minutes,satisfaction,Date"
)


def build_line(
    row_index=0,
    id="1",
    gender="Male",
    customer_type="Loyal Customer",
    age=30,
    type_of_travel="Business travel",
    travel_class="Business",
    flight_distance=1000,
    ratings=None,
    departure_delay="0",
    arrival_delay="0.0",
    satisfaction="satisfied",
    flight_date="2023-01-01",
):
    ratings = ratings if ratings is not None else [3] * len(SERVICE_FIELDS)
    fields = [
        str(row_index), str(id), gender, customer_type, str(age), type_of_travel,
        travel_class, str(flight_distance),
        *[str(r) for r in ratings],
        str(departure_delay), str(arrival_delay), satisfaction,
    ]
    if flight_date is not None:
        fields.append(flight_date)
    return ",".join(fields)


def build_record(**overrides):
    values = {
        "id": "1",
        "gender": "Male",
        "customer_type": "Loyal Customer",
        "age": 30,
        "type_of_travel": "Business travel",
        "travel_class": "Business",
        "flight_distance": 1000,
        "satisfaction": "satisfied",
        "flight_date": "2023-01-01",
    }
    for attr, _ in SERVICE_FIELDS:
        values[attr] = 3
    values.update(overrides)
    return PassengerRecord(**values)


@pytest.fixture
def make_line():
    return build_line


@pytest.fixture
def make_record():
    return build_record


@pytest.fixture
def header():
    return HEADER
