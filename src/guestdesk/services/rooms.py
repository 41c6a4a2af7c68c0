"""Room listing for the check-in panel."""

from __future__ import annotations

from guestdesk.domain.errors import CheckInError
from guestdesk.domain.rooms import COL, RoomSummary, cell, room_from_row, summarize_room
from guestdesk.infra.settings import DeskSettings, get_settings
from guestdesk.infra.sheets import TabularStore
from guestdesk.observability.logging import get_logger
from guestdesk.observability.redaction import safe_log_context

from .tables import read_table

logger = get_logger(__name__)


def list_available_rooms(
    store: TabularStore,
    settings: DeskSettings | None = None,
) -> list[RoomSummary]:
    """Every room in the rooms table, tagged with its status.

    Rooms are listed regardless of status; is_available marks the ones
    the panel offers first. Rows without a room number are skipped.
    Read failures yield an empty list.
    """
    settings = settings or get_settings()
    try:
        rows = read_table(store, settings.rooms_table)
    except CheckInError as exc:
        logger.warning(
            "room list unavailable",
            extra={
                "extra_fields": safe_log_context(
                    table=settings.rooms_table,
                    reason=type(exc).__name__,
                )
            },
        )
        return []

    return [
        summarize_room(room_from_row(row))
        for row in rows[1:]
        if cell(row, COL["Room Number"])
    ]
