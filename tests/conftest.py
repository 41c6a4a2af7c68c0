"""Shared pytest fixtures for guestdesk tests."""
import sys
sys.dont_write_bytecode = True

from datetime import date  # noqa: E402

import pytest  # noqa: E402

from guestdesk.infra.settings import DeskSettings  # noqa: E402
from guestdesk.infra.sheets import InMemorySheetStore  # noqa: E402

from .helpers import (  # noqa: E402
    RESPONSE_HEADERS,
    RESPONSES_TABLE,
    response_row,
    room_row,
    rooms_table,
)

TODAY = date(2024, 1, 10)


@pytest.fixture
def settings():
    return DeskSettings(rooms_table="Rooms", booking_id_prefix="BK", timezone="UTC")


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def fixed_clock():
    """Epoch-ms clock frozen at 1704880123456."""
    return lambda: 1704880123456


@pytest.fixture
def store():
    """Rooms table with room 12 free, plus one pending submission."""
    return InMemorySheetStore(
        {
            "Rooms": rooms_table(
                room_row("11", Room_Name="Garden", Daily_Rate="$80", Status="Occupied"),
                room_row("12", Daily_Rate="", Status="Available"),
            ),
            RESPONSES_TABLE: [
                list(RESPONSE_HEADERS),
                response_row("1/9/2024 10:00:00"),
            ],
        }
    )
