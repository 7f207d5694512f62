"""
Passenger record data model.

Represents one parsed row of the airline passenger satisfaction survey.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import config.settings as settings


# The 14 service ratings in source column order: (attribute, display label).
# Ranking ties are broken by this order.
SERVICE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("inflight_wifi_service", "Inflight Wifi Service"),
    ("departure_arrival_time_convenient", "Departure/Arrival Time Convenient"),
    ("ease_of_online_booking", "Ease of Online Booking"),
    ("gate_location", "Gate Location"),
    ("food_and_drink", "Food and Drink"),
    ("online_boarding", "Online Boarding"),
    ("seat_comfort", "Seat Comfort"),
    ("inflight_entertainment", "Inflight Entertainment"),
    ("on_board_service", "On-board Service"),
    ("leg_room_service", "Leg Room Service"),
    ("baggage_handling", "Baggage Handling"),
    ("checkin_service", "Check-in Service"),
    ("inflight_service", "Inflight Service"),
    ("cleanliness", "Cleanliness"),
)

SERVICE_COUNT = len(SERVICE_FIELDS)


@dataclass(frozen=True)
class PassengerRecord:
    """
    One passenger/flight observation.

    Immutable once loaded. Ratings are nominally 0-5 but are kept as parsed.
    A rating is None only when the source revision has no column for it.
    """
    id: str  # Opaque token; numeric IDs are kept as their text
    gender: str
    customer_type: str
    age: int
    type_of_travel: str
    travel_class: str
    flight_distance: int  # Miles

    inflight_wifi_service: Optional[int] = None
    departure_arrival_time_convenient: Optional[int] = None
    ease_of_online_booking: Optional[int] = None
    gate_location: Optional[int] = None
    food_and_drink: Optional[int] = None
    online_boarding: Optional[int] = None
    seat_comfort: Optional[int] = None
    inflight_entertainment: Optional[int] = None
    on_board_service: Optional[int] = None
    leg_room_service: Optional[int] = None
    baggage_handling: Optional[int] = None
    checkin_service: Optional[int] = None
    inflight_service: Optional[int] = None
    cleanliness: Optional[int] = None

    departure_delay_minutes: float = 0.0
    arrival_delay_minutes: float = 0.0
    satisfaction: str = ""
    flight_date: str = ""  # Opaque token, compared by string equality only
    row_index: Optional[int] = None

    @property
    def is_satisfied(self) -> bool:
        return self.satisfaction.strip().lower() == settings.SATISFIED_TOKEN.lower()

    def service_ratings(self) -> Dict[str, Optional[int]]:
        """Ratings keyed by display label, in declaration order."""
        return {label: getattr(self, attr) for attr, label in SERVICE_FIELDS}

    def present_ratings(self) -> List[int]:
        return [
            getattr(self, attr)
            for attr, _ in SERVICE_FIELDS
            if getattr(self, attr) is not None
        ]

    @property
    def average_service_rating(self) -> Optional[float]:
        """
        Mean of the service ratings.

        A full row divides by all 14 services. Rows from a revision that
        lacks some rating columns divide by the ratings they carry.
        """
        ratings = self.present_ratings()
        if not ratings:
            return None
        if len(ratings) == SERVICE_COUNT:
            return sum(ratings) / SERVICE_COUNT
        return sum(ratings) / len(ratings)

    def __str__(self) -> str:
        return (
            f"ID={self.id}, {self.gender}, Age={self.age}, "
            f"{self.travel_class}, {self.satisfaction}"
        )
