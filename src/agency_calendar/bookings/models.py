"""Dataclasses for booking vouchers as read from the booking store."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional


class BookingStatus(str, Enum):
    ISSUED = "issued"
    CANCELLED = "cancelled"


@dataclass(slots=True)
class RoomAssignment:
    """One room on a booking and who sleeps in it.

    The child count is the length of ``child_ages``; use ``add_child`` and
    ``remove_child`` to change it.
    """

    room_type: str = ""
    bed_type: str = ""
    adult_count: int = 2
    child_ages: List[int] = field(default_factory=list)

    @property
    def child_count(self) -> int:
        return len(self.child_ages)

    def add_child(self, age: int = 0) -> None:
        self.child_ages.append(age)

    def remove_child(self) -> None:
        if self.child_ages:
            self.child_ages.pop()

    def set_child_age(self, index: int, age: int) -> None:
        if age < 0:
            raise ValueError("Child age cannot be negative")
        self.child_ages[index] = age

    @classmethod
    def from_counts(
        cls,
        *,
        room_type: str = "",
        bed_type: str = "",
        adult_count: int = 2,
        child_count: int = 0,
        child_ages: Optional[Iterable[int]] = None,
    ) -> "RoomAssignment":
        ages = list(child_ages or [])[: max(child_count, 0)]
        ages.extend([0] * (max(child_count, 0) - len(ages)))
        return cls(room_type=room_type, bed_type=bed_type, adult_count=adult_count, child_ages=ages)

    def to_dict(self) -> dict[str, object]:
        return {
            "room_type": self.room_type,
            "bed_type": self.bed_type,
            "adults": self.adult_count,
            "children": self.child_count,
            "child_ages": list(self.child_ages),
        }


@dataclass(slots=True)
class Booking:
    """Read-only view of a booking voucher.

    Dates are kept as the raw store text; the calendar views parse them when
    bucketing so one malformed record cannot poison a whole fetch.
    """

    id: str
    guest_name: str
    property_name: str
    check_in_date: str
    check_out_date: Optional[str] = None
    nights: Optional[int] = None
    arrival_time: Optional[str] = None
    transport_mode: Optional[str] = None
    room_assignments: List[RoomAssignment] = field(default_factory=list)
    owner_color: Optional[str] = None
    status: BookingStatus = BookingStatus.ISSUED
    reference_number: Optional[str] = None
    guest_nationality: Optional[str] = None
    meal_plan: Optional[str] = None
    flight_details: Optional[str] = None
    room_type: Optional[str] = None
    number_of_rooms: Optional[int] = None
    number_of_adults: Optional[int] = None
    number_of_children: Optional[int] = None
    driver_contact: Optional[str] = None
    consultant_name: Optional[str] = None

    @property
    def is_cancelled(self) -> bool:
        return self.status is BookingStatus.CANCELLED

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "reference_number": self.reference_number,
            "guest_name": self.guest_name,
            "guest_nationality": self.guest_nationality,
            "property_name": self.property_name,
            "check_in_date": self.check_in_date,
            "check_out_date": self.check_out_date,
            "nights": self.nights,
            "arrival_time": self.arrival_time,
            "transport_mode": self.transport_mode,
            "flight_details": self.flight_details,
            "room_type": self.room_type,
            "room_assignments": [room.to_dict() for room in self.room_assignments],
            "meal_plan": self.meal_plan,
            "number_of_rooms": self.number_of_rooms,
            "number_of_adults": self.number_of_adults,
            "number_of_children": self.number_of_children,
            "driver_contact": self.driver_contact,
            "owner_color": self.owner_color,
            "consultant_name": self.consultant_name,
            "status": self.status.value,
        }
