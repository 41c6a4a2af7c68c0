"""Shared builders for guestdesk tests (plain functions, not fixtures)."""

from __future__ import annotations

from guestdesk.domain.rooms import COL, ROOM_COLUMNS

RESPONSES_TABLE = "Guest Check-In Form (Responses)"

RESPONSE_HEADERS = [
    "Timestamp",
    "Guest Name",
    "Email Address",
    "Phone Number",
    "Room Number",
    "Check-in Date",
    "Number of Nights",
    "Number of Guests",
    "Purpose of Visit",
    "Special Requests",
]


def room_row(number: str, **values: str) -> list[str]:
    """Rooms-table row; keyword names are ROOM_COLUMNS with spaces as underscores."""
    row = [""] * len(ROOM_COLUMNS)
    row[COL["Room Number"]] = number
    for key, value in values.items():
        row[COL[key.replace("_", " ")]] = value
    return row


def rooms_table(*rows: list[str]) -> list[list[str]]:
    return [list(ROOM_COLUMNS), *rows]


def response_row(
    timestamp: str,
    guest_name: str = "Jane Doe",
    email: str = "jane@example.com",
    phone: str = "555-0101",
    room: str = "",
    check_in: str = "2024-01-10",
    nights: str = "3",
    guests: str = "2",
    purpose: str = "Leisure",
    requests: str = "",
) -> list[str]:
    return [timestamp, guest_name, email, phone, room, check_in, nights, guests, purpose, requests]
