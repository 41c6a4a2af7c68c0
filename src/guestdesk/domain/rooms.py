"""Room inventory records.

One row per physical room in the rooms table, keyed by room number.
Rows are rewritten in place on check-in and never deleted here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class RoomStatus(str, Enum):
    AVAILABLE = "Available"
    OCCUPIED = "Occupied"
    MAINTENANCE = "Maintenance"
    RESERVED = "Reserved"
    CLEANING = "Cleaning"

    @classmethod
    def parse(cls, text: str) -> RoomStatus | None:
        """Case-insensitive lookup. Blank means Available."""
        normalized = text.strip().lower()
        if not normalized:
            return cls.AVAILABLE
        for status in cls:
            if status.value.lower() == normalized:
                return status
        return None


ROOM_COLUMNS: list[str] = [
    "Room Number",
    "Room Name",
    "Room Type",
    "Max Occupancy",
    "Amenities",
    "Daily Rate",
    "Weekly Rate",
    "Monthly Rate",
    "Status",
    "Last Cleaned",
    "Maintenance Notes",
    "Booking ID",
    "Guest Name",
    "Email",
    "Phone",
    "Check-In Date",
    "Check-Out Date",
    "Number of Nights",
    "Number of Guests",
    "Total Amount",
    "Purpose of Visit",
    "Special Requests",
    "Source",
    "Payment Status",
    "Booking Status",
    "Notes",
]

# 0-based positions, derived from ROOM_COLUMNS so the layout lives in one place
COL = {name: i for i, name in enumerate(ROOM_COLUMNS)}


@dataclass(frozen=True)
class RoomRecord:
    room_number: str
    room_name: str = ""
    room_type: str = ""
    max_occupancy: str = ""
    amenities: str = ""
    daily_rate: str = ""
    weekly_rate: str = ""
    monthly_rate: str = ""
    status_text: str = ""
    last_cleaned: str = ""
    maintenance_notes: str = ""
    booking_id: str = ""
    guest_name: str = ""
    booking_status: str = ""

    @property
    def status(self) -> RoomStatus | None:
        return RoomStatus.parse(self.status_text)


@dataclass(frozen=True)
class RoomSummary:
    """Room entry offered in the panel's room dropdown."""

    number: str
    name: str
    daily_rate: str
    status: str
    display_label: str
    is_available: bool


def cell(row: Sequence[object], col: int) -> str:
    if col >= len(row) or row[col] is None:
        return ""
    return str(row[col]).strip()


def room_from_row(row: Sequence[object]) -> RoomRecord:
    return RoomRecord(
        room_number=cell(row, COL["Room Number"]),
        room_name=cell(row, COL["Room Name"]),
        room_type=cell(row, COL["Room Type"]),
        max_occupancy=cell(row, COL["Max Occupancy"]),
        amenities=cell(row, COL["Amenities"]),
        daily_rate=cell(row, COL["Daily Rate"]),
        weekly_rate=cell(row, COL["Weekly Rate"]),
        monthly_rate=cell(row, COL["Monthly Rate"]),
        status_text=cell(row, COL["Status"]),
        last_cleaned=cell(row, COL["Last Cleaned"]),
        maintenance_notes=cell(row, COL["Maintenance Notes"]),
        booking_id=cell(row, COL["Booking ID"]),
        guest_name=cell(row, COL["Guest Name"]),
        booking_status=cell(row, COL["Booking Status"]),
    )


def summarize_room(room: RoomRecord) -> RoomSummary:
    status = room.status
    status_label = status.value if status is not None else room.status_text
    name = room.room_name or "Room"
    rate = room.daily_rate or "no rate"
    return RoomSummary(
        number=room.room_number,
        name=room.room_name,
        daily_rate=room.daily_rate,
        status=status_label,
        display_label=f"{room.room_number} - {name} ({rate}) [{status_label}]",
        is_available=status is RoomStatus.AVAILABLE,
    )


def find_room_row(rows: Sequence[Sequence[object]], room_number: str) -> int | None:
    """Return the table index of the first data row for room_number.

    rows[0] is the header row. Comparison is on the stripped cell text.
    """
    wanted = str(room_number).strip()
    if not wanted:
        return None
    for i in range(1, len(rows)):
        if cell(rows[i], COL["Room Number"]) == wanted:
            return i
    return None
