"""Seed demo rooms and form responses into the configured store.

Usage: SHEET_STORE=postgres DATABASE_URL=... python -m guestdesk.operations.seed_demo
"""

from datetime import date, timedelta

from guestdesk.domain.rooms import ROOM_COLUMNS
from guestdesk.infra.settings import DeskSettings, build_store, get_settings
from guestdesk.infra.time import desk_today
from guestdesk.observability.correlation import correlation_scope
from guestdesk.observability.logging import get_logger
from guestdesk.observability.redaction import safe_log_context

logger = get_logger(__name__)

DEMO_RESPONSES_TABLE = "Guest Check-In Form (Responses)"

RESPONSE_HEADERS = [
    "Timestamp",
    "Guest Name",
    "Email Address",
    "Phone Number",
    "Preferred Room Number",
    "Check-in Date",
    "Number of Nights",
    "Number of Guests",
    "Purpose of Visit",
    "Special Requests",
]


def _room(number: str, name: str, room_type: str, occupancy: str, rate: str, status: str) -> list[str]:
    row = [""] * len(ROOM_COLUMNS)
    row[0:9] = [number, name, room_type, occupancy, "WiFi, TV", rate, "", "", status]
    return row


def demo_tables(today: date, rooms_table: str = "Rooms") -> dict[str, list[list[str]]]:
    """Rooms table plus a responses table with two pending requests."""
    def stamp(days_ago: int, hour: int) -> str:
        d = today - timedelta(days=days_ago)
        return f"{d.month}/{d.day}/{d.year} {hour}:15:00"

    arrival = today + timedelta(days=1)
    return {
        rooms_table: [
            list(ROOM_COLUMNS),
            _room("101", "Garden View", "Standard", "2", "$85", "Available"),
            _room("102", "Garden View", "Standard", "2", "$85", "Cleaning"),
            _room("201", "Deluxe Suite", "Suite", "4", "$140", "Available"),
            _room("202", "Family Room", "Family", "5", "$160", "Maintenance"),
        ],
        DEMO_RESPONSES_TABLE: [
            list(RESPONSE_HEADERS),
            [stamp(1, 9), "Jane Doe", "jane@example.com", "555-0101", "101",
             arrival.isoformat(), "3", "2", "Leisure", "Late arrival"],
            [stamp(0, 14), "Carlos Silva", "carlos@example.com", "555-0102", "",
             arrival.isoformat(), "1", "1", "Business", ""],
        ],
    }


def seed(store, today: date, rooms_table: str = "Rooms") -> None:
    for name, rows in demo_tables(today, rooms_table).items():
        store.create_table(name, rows)


def main(settings: DeskSettings | None = None) -> int:
    settings = settings or get_settings()
    store = build_store(settings)
    with correlation_scope():
        seed(store, desk_today(settings.timezone), settings.rooms_table)
        logger.info(
            "demo data seeded",
            extra={"extra_fields": safe_log_context(backend=settings.store_backend)},
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
