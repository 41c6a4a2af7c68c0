"""Room matcher/writer and processed-marker updater.

commit flow:
  1. find the room row by room number (NotFoundError if absent)
  2. compute stay terms (rate x nights, check-out date)
  3. generate a booking id
  4. overwrite the whole room row with the new occupancy
  5. mark the source submission processed (best effort)

Step 5 failing does not undo step 4: a room already written stays
checked in even if the submission will show up as pending again.
"""

from __future__ import annotations

from datetime import date
from typing import Callable

from guestdesk.domain.checkin import (
    CheckInCommand,
    CheckInResult,
    build_occupied_row,
    compute_stay,
    format_sheet_date,
    generate_booking_id,
    rate_defaulted,
)
from guestdesk.domain.errors import NotFoundError
from guestdesk.domain.rooms import find_room_row
from guestdesk.domain.submissions import PROCESSED_HEADER, find_processed_column
from guestdesk.infra.settings import DeskSettings, get_settings
from guestdesk.infra.sheets import TabularStore
from guestdesk.infra.time import desk_today, epoch_millis
from guestdesk.observability.logging import get_logger
from guestdesk.observability.redaction import safe_log_context

from .intake import locate_response_table
from .tables import read_table

logger = get_logger(__name__)


def check_in_guest(
    store: TabularStore,
    command: CheckInCommand,
    *,
    settings: DeskSettings | None = None,
    today: date | None = None,
    clock: Callable[[], int] | None = None,
) -> CheckInResult:
    """Write a confirmed occupancy into the room's row.

    Args:
        store: Tabular store holding the rooms and responses tables.
        command: Operator-confirmed check-in.
        settings: Desk settings; loaded from the environment when None.
        today: Date used for "last cleaned" and marker stamps.
        clock: Epoch-millisecond source for the booking id.

    Raises:
        NotFoundError: Rooms table or room number does not exist.
        Exception: Any store failure while writing the room row.
    """
    settings = settings or get_settings()
    today = today or desk_today(settings.timezone)

    rows = read_table(store, settings.rooms_table)
    index = find_room_row(rows, command.room_number)
    if index is None:
        logger.warning(
            "check-in room not found",
            extra={
                "extra_fields": safe_log_context(
                    room_number=command.room_number,
                )
            },
        )
        raise NotFoundError("Room", command.room_number)

    stay = compute_stay(command, today)
    if rate_defaulted(command.daily_rate):
        logger.warning(
            "daily rate unreadable, recorded as 0",
            extra={
                "extra_fields": safe_log_context(
                    room_number=command.room_number,
                    daily_rate=command.daily_rate,
                )
            },
        )
    clock = clock or epoch_millis
    booking_id = generate_booking_id(settings.booking_id_prefix, clock())
    new_row = build_occupied_row(rows[index], command, stay, booking_id, today)

    try:
        store.set_row(settings.rooms_table, index + 1, new_row)
    except Exception:
        logger.exception(
            "room row write failed",
            extra={
                "extra_fields": safe_log_context(
                    room_number=command.room_number,
                    booking_id=booking_id,
                )
            },
        )
        raise

    logger.info(
        "guest checked in",
        extra={
            "extra_fields": safe_log_context(
                room_number=command.room_number,
                booking_id=booking_id,
                guest_name=command.guest_name,
                nights=stay.nights,
            )
        },
    )

    mark_processed(store, command.timestamp, command.guest_name, today=today)

    return CheckInResult(
        room_number=command.room_number,
        guest_name=command.guest_name,
        booking_id=booking_id,
        stay=stay,
    )


def commit_checkin(
    store: TabularStore,
    command: CheckInCommand,
    *,
    settings: DeskSettings | None = None,
    today: date | None = None,
    clock: Callable[[], int] | None = None,
) -> str:
    """Commit a check-in and return the operator confirmation message."""
    result = check_in_guest(store, command, settings=settings, today=today, clock=clock)
    return result.message


def mark_processed(
    store: TabularStore,
    timestamp: str,
    guest_name: str,
    *,
    today: date | None = None,
) -> None:
    """Stamp the submission's Processed cell. Never raises.

    The row is found by exact (string) match on the timestamp column;
    no match leaves the table unchanged.
    """
    try:
        _mark_processed(store, timestamp, guest_name, today)
    except Exception:
        logger.exception(
            "marking submission processed failed",
            extra={
                "extra_fields": safe_log_context(
                    guest_name=guest_name,
                )
            },
        )


def _mark_processed(
    store: TabularStore,
    timestamp: str,
    guest_name: str,
    today: date | None,
) -> None:
    table_name = locate_response_table(store)
    rows = read_table(store, table_name)
    headers = rows[0] if rows else []

    col = find_processed_column(headers)
    if col is None:
        column_number = store.append_column(table_name, PROCESSED_HEADER)
    else:
        column_number = col + 1

    index = _find_submission_row(rows, timestamp)
    if index is not None:
        today = today or desk_today(get_settings().timezone)
        store.set_cell(
            table_name,
            index + 1,
            column_number,
            f"Checked In - {format_sheet_date(today)}",
        )
        return

    logger.warning(
        "no submission matched timestamp",
        extra={"extra_fields": safe_log_context(guest_name=guest_name)},
    )


def _find_submission_row(rows: list[list[str]], timestamp: str) -> int | None:
    wanted = str(timestamp).strip()
    if not wanted:
        return None
    for i in range(1, len(rows)):
        if rows[i] and str(rows[i][0]).strip() == wanted:
            return i
    return None
