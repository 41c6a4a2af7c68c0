"""Front desk settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

from guestdesk.infra.sheets import InMemorySheetStore, TabularStore

StoreBackend = Literal["memory", "postgres"]


@dataclass(frozen=True)
class DeskSettings:
    """Attributes:
    store_backend: Which TabularStore implementation the app uses.
    rooms_table: Name of the room inventory table.
    booking_id_prefix: Fixed prefix of generated booking ids.
    timezone: IANA zone used for "today" stamps written to tables.
    seed_demo: Load demo tables into a fresh in-memory store.
    """

    store_backend: StoreBackend = "memory"
    rooms_table: str = "Rooms"
    booking_id_prefix: str = "BK"
    timezone: str = "UTC"
    seed_demo: bool = False


def get_settings() -> DeskSettings:
    backend = os.environ.get("SHEET_STORE", "memory").strip().lower()
    if backend not in ("memory", "postgres"):
        backend = "memory"

    return DeskSettings(
        store_backend=backend,  # type: ignore[arg-type]
        rooms_table=os.environ.get("ROOMS_TABLE") or "Rooms",
        booking_id_prefix=os.environ.get("BOOKING_ID_PREFIX") or "BK",
        timezone=os.environ.get("DESK_TIMEZONE") or "UTC",
        seed_demo=os.environ.get("DESK_SEED_DEMO", "").strip().lower() in ("1", "true", "yes"),
    )


def build_store(settings: DeskSettings) -> TabularStore:
    """Instantiate the store selected by settings."""
    if settings.store_backend == "postgres":
        from guestdesk.infra.pg_sheets import PostgresSheetStore

        return PostgresSheetStore()
    return InMemorySheetStore()
