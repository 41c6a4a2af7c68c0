"""Intake reader: pending check-in submissions from the form responses table."""

from __future__ import annotations

from guestdesk.domain.errors import CheckInError, NotFoundError
from guestdesk.domain.submissions import (
    RESPONSE_TABLE_HINT,
    Submission,
    build_header_map,
    find_processed_column,
    find_response_table,
    is_blank_row,
    is_processed,
    submission_from_row,
)
from guestdesk.infra.sheets import TabularStore
from guestdesk.observability.logging import get_logger
from guestdesk.observability.redaction import safe_log_context

from .tables import read_table, read_table_names

logger = get_logger(__name__)


def locate_response_table(store: TabularStore) -> str:
    """Name of the form responses table.

    Raises:
        NotFoundError: No table looks like the check-in form responses.
        TransientReadError: The table list could not be read.
    """
    name = find_response_table(read_table_names(store))
    if name is None:
        raise NotFoundError("Response table", RESPONSE_TABLE_HINT)
    return name


def _read_pending(store: TabularStore) -> list[Submission]:
    table_name = locate_response_table(store)
    rows = read_table(store, table_name)
    if not rows:
        return []

    headers = rows[0]
    header_map = build_header_map(headers)
    processed_col = find_processed_column(headers)

    pending: list[Submission] = []
    for i in range(1, len(rows)):
        row = rows[i]
        if is_blank_row(row) or is_processed(row, processed_col):
            continue
        pending.append(submission_from_row(row, header_map, row_index=i + 1))
    return pending


def list_pending_checkins(store: TabularStore) -> list[Submission]:
    """Unprocessed submissions in table order.

    Never raises: a missing table or failed read yields an empty list,
    which callers treat as "nothing to show".
    """
    try:
        pending = _read_pending(store)
    except CheckInError as exc:
        logger.warning(
            "pending check-ins unavailable",
            extra={"extra_fields": safe_log_context(reason=type(exc).__name__)},
        )
        return []

    logger.info(
        "pending check-ins listed",
        extra={"extra_fields": safe_log_context(count=len(pending))},
    )
    return pending
