"""Unit tests for check-in domain logic (no store involved)."""

from datetime import date
from decimal import Decimal

import pytest

from guestdesk.domain.checkin import (
    CheckInCommand,
    build_occupied_row,
    compute_check_out,
    compute_stay,
    format_amount,
    format_sheet_date,
    generate_booking_id,
    parse_date,
    parse_date_strict,
    parse_nights,
    parse_rate,
    parse_rate_strict,
    rate_defaulted,
)
from guestdesk.domain.errors import ParseError
from guestdesk.domain.rooms import COL, ROOM_COLUMNS
from guestdesk.domain.submissions import Submission

from .helpers import room_row

TODAY = date(2024, 1, 10)


def _command(**overrides) -> CheckInCommand:
    values = dict(
        timestamp="1/9/2024 10:00:00",
        guest_name="Jane Doe",
        room_number="12",
        daily_rate="$100",
        payment_status="Paid",
        source="Phone",
        check_in_date="2024-01-10",
        number_of_nights="3",
    )
    values.update(overrides)
    return CheckInCommand(**values)


class TestParseRate:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("$100", Decimal("100")),
            ("100", Decimal("100")),
            (" $1,250.50 ", Decimal("1250.50")),
            ("€ 89.90", Decimal("89.90")),
            ("0.1", Decimal("0.1")),
            ("R$ 150", Decimal("150")),
            ("₩50,000", Decimal("50000")),
            ("₺ 75.5", Decimal("75.5")),
            ("150 USD", Decimal("150")),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_rate(text) == expected

    @pytest.mark.parametrize("text", ["", "$", "abc", "12..5", "NaN", "Infinity"])
    def test_malformed_defaults_to_zero(self, text):
        assert parse_rate(text) == Decimal(0)

    def test_strict_raises_parse_error(self):
        with pytest.raises(ParseError) as exc_info:
            parse_rate_strict("free")
        assert exc_info.value.field == "daily_rate"
        assert isinstance(exc_info.value, ValueError)

    @pytest.mark.parametrize("text, expected", [("tbd", True), ("", False), ("  ", False), ("R$ 90", False)])
    def test_rate_defaulted(self, text, expected):
        assert rate_defaulted(text) is expected


class TestParseNights:
    @pytest.mark.parametrize("text, expected", [("3", 3), (" 7 ", 7), ("30", 30)])
    def test_valid(self, text, expected):
        assert parse_nights(text) == expected

    @pytest.mark.parametrize("text", ["", "three", "2.5", "0", "-1"])
    def test_malformed_defaults_to_one(self, text):
        assert parse_nights(text) == 1


class TestDates:
    @pytest.mark.parametrize(
        "text",
        ["2024-01-10", "1/10/2024", "01/10/2024", "1/10/2024 08:30:00", "2024-01-10T08:30:00"],
    )
    def test_accepted_formats(self, text):
        assert parse_date_strict(text) == date(2024, 1, 10)

    def test_unparseable_uses_default(self):
        assert parse_date("next tuesday", default=TODAY) == TODAY

    def test_strict_raises(self):
        with pytest.raises(ParseError):
            parse_date_strict("2024-13-40")

    def test_format_sheet_date_no_padding(self):
        assert format_sheet_date(date(2024, 1, 3)) == "1/3/2024"
        assert format_sheet_date(date(2024, 12, 25)) == "12/25/2024"

    @pytest.mark.parametrize(
        "nights, expected",
        [(1, date(2024, 1, 11)), (7, date(2024, 1, 17)), (30, date(2024, 2, 9))],
    )
    def test_check_out_is_calendar_days_later(self, nights, expected):
        assert compute_check_out(date(2024, 1, 10), nights) == expected

    def test_check_out_across_leap_day(self):
        assert compute_check_out(date(2024, 2, 28), 2) == date(2024, 3, 1)


class TestComputeStay:
    @pytest.mark.parametrize(
        "rate, nights, expected",
        [
            ("$100", "3", Decimal("300")),
            ("$89.90", "7", Decimal("629.30")),
            ("0.1", "3", Decimal("0.3")),
            ("$1,250.50", "30", Decimal("37515.00")),
        ],
    )
    def test_total_is_exact_product(self, rate, nights, expected):
        stay = compute_stay(_command(daily_rate=rate, number_of_nights=nights), TODAY)
        assert stay.total_amount == expected
        assert stay.total_amount == stay.daily_rate * stay.nights

    def test_bad_inputs_are_defaulted(self):
        stay = compute_stay(
            _command(daily_rate="tbd", number_of_nights="a few", check_in_date="soon"),
            TODAY,
        )
        assert stay.daily_rate == Decimal(0)
        assert stay.nights == 1
        assert stay.check_in == TODAY
        assert stay.check_out == date(2024, 1, 11)
        assert stay.total_amount == Decimal(0)


class TestFormatAmount:
    @pytest.mark.parametrize(
        "amount, label",
        [
            (Decimal("300"), "$300"),
            (Decimal("300.00"), "$300"),
            (Decimal("250.5"), "$250.50"),
            (Decimal("0"), "$0"),
        ],
    )
    def test_labels(self, amount, label):
        assert format_amount(amount) == label


class TestBookingId:
    def test_prefix_plus_last_six_digits(self):
        assert generate_booking_id("BK", 1704880123456) == "BK123456"

    def test_leading_zeros_kept(self):
        assert generate_booking_id("BK", 1704880000042) == "BK000042"

    def test_collides_within_truncation_window(self):
        """Ids only depend on the last 6 digits of the millisecond clock."""
        assert generate_booking_id("BK", 1_000_123_456) == generate_booking_id("BK", 2_000_123_456)


class TestCheckInCommand:
    def test_from_submission(self):
        submission = Submission(
            timestamp="t1",
            guest_name="Jane Doe",
            email="jane@example.com",
            check_in_date="2024-01-10",
            number_of_nights="3",
            special_requests="Late arrival",
            source_row_index=2,
        )

        command = CheckInCommand.from_submission(
            submission, room_number="12", daily_rate="$100", payment_status="Paid", source="Phone"
        )

        assert command.timestamp == "t1"
        assert command.room_number == "12"
        assert command.email == "jane@example.com"
        assert command.special_requests == "Late arrival"
        assert command.payment_status == "Paid"


class TestBuildOccupiedRow:
    def _build(self, existing, **command_overrides):
        command = _command(**command_overrides)
        return build_occupied_row(existing, command, compute_stay(command, TODAY), "BK123456", TODAY)

    def test_full_width_row(self):
        row = self._build(room_row("12"))
        assert len(row) == len(ROOM_COLUMNS)

    def test_occupancy_fields(self):
        row = self._build(room_row("12", Status="Available"))

        assert row[COL["Room Number"]] == "12"
        assert row[COL["Daily Rate"]] == "$100"
        assert row[COL["Status"]] == "Occupied"
        assert row[COL["Last Cleaned"]] == "1/10/2024"
        assert row[COL["Booking ID"]] == "BK123456"
        assert row[COL["Guest Name"]] == "Jane Doe"
        assert row[COL["Check-In Date"]] == "1/10/2024"
        assert row[COL["Check-Out Date"]] == "1/13/2024"
        assert row[COL["Number of Nights"]] == "3"
        assert row[COL["Total Amount"]] == "$300"
        assert row[COL["Source"]] == "Phone"
        assert row[COL["Payment Status"]] == "Paid"
        assert row[COL["Booking Status"]] == "Checked-In"
        assert row[COL["Notes"]] == "Checked in 1/10/2024"

    def test_descriptive_fields_preserved(self):
        existing = room_row(
            "12",
            Room_Name="Sea View",
            Room_Type="Suite",
            Max_Occupancy="4",
            Amenities="WiFi, Minibar",
            Weekly_Rate="$600",
            Monthly_Rate="$2000",
        )

        row = self._build(existing)

        assert row[COL["Room Name"]] == "Sea View"
        assert row[COL["Room Type"]] == "Suite"
        assert row[COL["Max Occupancy"]] == "4"
        assert row[COL["Amenities"]] == "WiFi, Minibar"
        assert row[COL["Weekly Rate"]] == "$600"
        assert row[COL["Monthly Rate"]] == "$2000"

    def test_descriptive_defaults_when_blank(self):
        row = self._build(["12"])

        assert row[COL["Room Name"]] == "Guest Room"
        assert row[COL["Room Type"]] == "Standard"
        assert row[COL["Max Occupancy"]] == "2"
        assert row[COL["Amenities"]] == "WiFi, TV"
        assert row[COL["Weekly Rate"]] == ""
        assert row[COL["Monthly Rate"]] == ""

    def test_stale_occupant_data_replaced(self):
        existing = room_row(
            "12",
            Status="Occupied",
            Maintenance_Notes="Leaky tap",
            Guest_Name="Old Guest",
            Email="old@example.com",
            Phone="555-9999",
            Special_Requests="Extra pillows",
            Purpose_of_Visit="Conference",
        )

        row = self._build(existing)

        assert row[COL["Maintenance Notes"]] == ""
        assert row[COL["Guest Name"]] == "Jane Doe"
        assert row[COL["Email"]] == ""
        assert row[COL["Phone"]] == ""
        assert row[COL["Special Requests"]] == ""
        assert row[COL["Purpose of Visit"]] == ""
