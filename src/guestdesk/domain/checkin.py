"""Check-in domain logic: stay terms, booking id and the occupied room row.

Malformed operator or form input never rejects a commit. The strict
parsers raise ParseError; the lenient wrappers default the value:
rate -> 0, nights -> 1, check-in date -> today.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Sequence

from guestdesk.domain.errors import ParseError
from guestdesk.domain.rooms import COL, ROOM_COLUMNS, RoomStatus, cell
from guestdesk.domain.submissions import Submission

BOOKING_STATUS_CHECKED_IN = "Checked-In"

# Descriptive columns kept from the existing row, with defaults when blank
PRESERVED_DEFAULTS: dict[str, str] = {
    "Room Name": "Guest Room",
    "Room Type": "Standard",
    "Max Occupancy": "2",
    "Amenities": "WiFi, TV",
    "Weekly Rate": "",
    "Monthly Rate": "",
}

# Currency codes or letter prefixes around the amount: "R$ 150", "150 USD"
_RATE_AFFIX = re.compile(r"^[^\W\d_]+|[^\W\d_]+$")

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
)


@dataclass(frozen=True)
class CheckInCommand:
    """Operator-confirmed check-in, valid for one commit call."""

    timestamp: str
    guest_name: str
    room_number: str
    daily_rate: str
    payment_status: str = ""
    source: str = ""
    email: str = ""
    phone: str = ""
    check_in_date: str = ""
    number_of_nights: str = "1"
    number_of_guests: str = "1"
    purpose_of_visit: str = ""
    special_requests: str = ""

    @classmethod
    def from_submission(
        cls,
        submission: Submission,
        *,
        room_number: str,
        daily_rate: str,
        payment_status: str = "",
        source: str = "",
    ) -> CheckInCommand:
        return cls(
            timestamp=submission.timestamp,
            guest_name=submission.guest_name,
            room_number=room_number,
            daily_rate=daily_rate,
            payment_status=payment_status,
            source=source,
            email=submission.email,
            phone=submission.phone,
            check_in_date=submission.check_in_date,
            number_of_nights=submission.number_of_nights,
            number_of_guests=submission.number_of_guests,
            purpose_of_visit=submission.purpose_of_visit,
            special_requests=submission.special_requests,
        )


@dataclass(frozen=True)
class StayTerms:
    check_in: date
    check_out: date
    nights: int
    daily_rate: Decimal
    total_amount: Decimal


@dataclass(frozen=True)
class CheckInResult:
    room_number: str
    guest_name: str
    booking_id: str
    stay: StayTerms

    @property
    def message(self) -> str:
        return (
            f"{self.guest_name} has been checked in to room {self.room_number}. "
            f"Booking ID: {self.booking_id}"
        )


# ── Parsing ───────────────────────────────────────────────────────────


def parse_rate_strict(text: str) -> Decimal:
    cleaned = "".join(
        ch for ch in str(text)
        if not (ch.isspace() or ch == "," or unicodedata.category(ch) == "Sc")
    )
    cleaned = _RATE_AFFIX.sub("", cleaned)
    if not cleaned:
        raise ParseError("daily_rate", text)
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        raise ParseError("daily_rate", text)
    if not value.is_finite():
        raise ParseError("daily_rate", text)
    return value


def parse_rate(text: str) -> Decimal:
    """Parse "$1,250.00"-style rate text. Defaults to 0."""
    try:
        return parse_rate_strict(text)
    except ParseError:
        return Decimal(0)


def rate_defaulted(text: str) -> bool:
    """True when non-blank rate text is unreadable and would become 0."""
    if not str(text).strip():
        return False
    try:
        parse_rate_strict(text)
    except ParseError:
        return True
    return False


def parse_nights_strict(text: str) -> int:
    try:
        nights = int(str(text).strip())
    except ValueError:
        raise ParseError("number_of_nights", text)
    if nights < 1:
        raise ParseError("number_of_nights", text)
    return nights


def parse_nights(text: str) -> int:
    """Parse a night count. Defaults to 1."""
    try:
        return parse_nights_strict(text)
    except ParseError:
        return 1


def parse_date_strict(text: str) -> date:
    raw = str(text).strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    raise ParseError("check_in_date", text)


def parse_date(text: str, default: date) -> date:
    try:
        return parse_date_strict(text)
    except ParseError:
        return default


# ── Formatting ────────────────────────────────────────────────────────


def format_sheet_date(d: date) -> str:
    """M/D/YYYY, no zero padding."""
    return f"{d.month}/{d.day}/{d.year}"


def format_amount(amount: Decimal) -> str:
    if amount == amount.to_integral_value():
        return f"${int(amount)}"
    return f"${amount:.2f}"


# ── Stay computation ──────────────────────────────────────────────────


def compute_check_out(check_in: date, nights: int) -> date:
    return check_in + timedelta(days=nights)


def compute_stay(command: CheckInCommand, today: date) -> StayTerms:
    nights = parse_nights(command.number_of_nights)
    daily_rate = parse_rate(command.daily_rate)
    check_in = parse_date(command.check_in_date, default=today)
    return StayTerms(
        check_in=check_in,
        check_out=compute_check_out(check_in, nights),
        nights=nights,
        daily_rate=daily_rate,
        total_amount=daily_rate * nights,
    )


def generate_booking_id(prefix: str, epoch_ms: int) -> str:
    """Prefix plus the last 6 digits of the epoch-millisecond clock.

    Not collision-free; ids repeat every 1000 seconds.
    """
    return f"{prefix}{str(epoch_ms)[-6:]}"


def build_occupied_row(
    existing_row: Sequence[object],
    command: CheckInCommand,
    stay: StayTerms,
    booking_id: str,
    today: date,
) -> list[str]:
    """Full replacement row for a room taking a new occupant.

    Every column is written so nothing from a previous occupant survives.
    """
    row = [""] * len(ROOM_COLUMNS)

    for column, default in PRESERVED_DEFAULTS.items():
        row[COL[column]] = cell(existing_row, COL[column]) or default

    row[COL["Room Number"]] = command.room_number.strip()
    row[COL["Daily Rate"]] = command.daily_rate.strip()
    row[COL["Status"]] = RoomStatus.OCCUPIED.value
    row[COL["Last Cleaned"]] = format_sheet_date(today)
    row[COL["Maintenance Notes"]] = ""
    row[COL["Booking ID"]] = booking_id
    row[COL["Guest Name"]] = command.guest_name
    row[COL["Email"]] = command.email
    row[COL["Phone"]] = command.phone
    row[COL["Check-In Date"]] = format_sheet_date(stay.check_in)
    row[COL["Check-Out Date"]] = format_sheet_date(stay.check_out)
    row[COL["Number of Nights"]] = str(stay.nights)
    row[COL["Number of Guests"]] = command.number_of_guests or "1"
    row[COL["Total Amount"]] = format_amount(stay.total_amount)
    row[COL["Purpose of Visit"]] = command.purpose_of_visit
    row[COL["Special Requests"]] = command.special_requests
    row[COL["Source"]] = command.source
    row[COL["Payment Status"]] = command.payment_status
    row[COL["Booking Status"]] = BOOKING_STATUS_CHECKED_IN
    row[COL["Notes"]] = f"Checked in {format_sheet_date(stay.check_in)}"
    return row
