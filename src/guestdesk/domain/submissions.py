"""Guest check-in submissions read from the form responses table.

The form tool owns the responses table; column headers vary between form
versions, so headers are classified into canonical fields by an ordered
rule list (first matching rule wins per header).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

RESPONSE_TABLE_HINT = "guest check-in"
LEGACY_RESPONSE_TABLE = "Form Responses 3"
PROCESSED_HEADER = "Processed"

UNKNOWN_GUEST = "Unknown Guest"


@dataclass(frozen=True)
class Submission:
    """One guest's check-in request, as captured by the intake form.

    Values are kept as the cell text (stripped). source_row_index is the
    1-indexed table row, header row being 1.
    """

    timestamp: str
    guest_name: str = UNKNOWN_GUEST
    email: str = ""
    phone: str = ""
    room_number: str = ""
    check_in_date: str = ""
    number_of_nights: str = "1"
    number_of_guests: str = "1"
    purpose_of_visit: str = ""
    special_requests: str = ""
    source_row_index: int = 0

    def label(self) -> str:
        """Short text for the pending-submissions dropdown."""
        nights = self.number_of_nights or "1"
        when = self.check_in_date or "no date"
        return f"{self.guest_name} - {when} ({nights} night(s))"


# ── Header classification ─────────────────────────────────────────────


HeaderPredicate = Callable[[str, dict[str, int]], bool]


@dataclass(frozen=True)
class HeaderRule:
    field: str
    predicate: HeaderPredicate


def _contains(*needles: str) -> HeaderPredicate:
    return lambda header, _mapped: any(n in header for n in needles)


def _is_guest_name(header: str, _mapped: dict[str, int]) -> bool:
    return header.startswith("guest name")


def _is_fallback_name(header: str, mapped: dict[str, int]) -> bool:
    return "name" in header and "guest_name" not in mapped


# Order matters: a header takes the field of the first rule it satisfies.
HEADER_RULES: list[HeaderRule] = [
    HeaderRule("guest_name", _is_guest_name),
    HeaderRule("guest_name", _is_fallback_name),
    HeaderRule("email", _contains("email")),
    HeaderRule("phone", _contains("phone")),
    HeaderRule("room_number", _contains("room number", "room")),
    HeaderRule("check_in_date", _contains("check-in date", "check in")),
    HeaderRule("number_of_nights", _contains("nights")),
    HeaderRule("number_of_guests", _contains("guests")),
    HeaderRule("purpose_of_visit", _contains("purpose")),
    HeaderRule("special_requests", _contains("requests")),
]


def classify_header(header: str, mapped: dict[str, int]) -> str | None:
    """Return the canonical field for a header, or None if no rule matches."""
    normalized = header.strip().lower()
    if not normalized:
        return None
    for rule in HEADER_RULES:
        if rule.predicate(normalized, mapped):
            return rule.field
    return None


def build_header_map(headers: Sequence[object]) -> dict[str, int]:
    """Map canonical field name -> 0-based column index.

    Column 0 is the submission timestamp and is never classified. A later
    header classified into an already mapped field replaces the earlier one.
    """
    mapped: dict[str, int] = {}
    for col, header in enumerate(headers):
        if col == 0:
            continue
        field = classify_header(str(header), mapped)
        if field is not None:
            mapped[field] = col
    return mapped


def find_processed_column(headers: Sequence[object]) -> int | None:
    """0-based index of the Processed column, if present."""
    for col, header in enumerate(headers):
        if str(header).strip().lower() == PROCESSED_HEADER.lower():
            return col
    return None


def find_response_table(table_names: Sequence[str]) -> str | None:
    """Pick the form responses table out of the store's table names."""
    for name in table_names:
        if RESPONSE_TABLE_HINT in name.lower() or name == LEGACY_RESPONSE_TABLE:
            return name
    return None


# ── Row conversion ────────────────────────────────────────────────────


_DEFAULTS = {
    "guest_name": UNKNOWN_GUEST,
    "number_of_nights": "1",
    "number_of_guests": "1",
}


def _cell(row: Sequence[object], col: int | None) -> str:
    if col is None or col >= len(row):
        return ""
    value = row[col]
    return "" if value is None else str(value).strip()


def is_blank_row(row: Sequence[object]) -> bool:
    return all(_cell(row, i) == "" for i in range(len(row)))


def is_processed(row: Sequence[object], processed_col: int | None) -> bool:
    return _cell(row, processed_col) != ""


def submission_from_row(
    row: Sequence[object],
    header_map: dict[str, int],
    row_index: int,
) -> Submission:
    """Build a Submission from a data row using a header map."""
    values: dict[str, str] = {}
    for field in (
        "guest_name",
        "email",
        "phone",
        "room_number",
        "check_in_date",
        "number_of_nights",
        "number_of_guests",
        "purpose_of_visit",
        "special_requests",
    ):
        text = _cell(row, header_map.get(field))
        values[field] = text or _DEFAULTS.get(field, "")

    return Submission(timestamp=_cell(row, 0), source_row_index=row_index, **values)
