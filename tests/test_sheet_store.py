"""Tests for the in-memory tabular store."""

import pytest

from guestdesk.infra.sheets import InMemorySheetStore, StoreError, TableNotFoundError, TabularStore


@pytest.fixture
def sheet():
    return InMemorySheetStore({"Responses": [["Timestamp", "Name"], ["t1", "A"], ["t2", "B"]]})


class TestInMemorySheetStore:
    def test_satisfies_protocol(self, sheet):
        assert isinstance(sheet, TabularStore)

    def test_table_names_in_insertion_order(self):
        store = InMemorySheetStore({"B": [], "A": []})
        store.create_table("C", [])
        assert store.list_table_names() == ["B", "A", "C"]

    def test_cells_stored_as_text(self):
        store = InMemorySheetStore({"T": [["n", 3, None]]})
        assert store.get_table("T") == [["n", "3", ""]]

    def test_get_table_returns_copy(self, sheet):
        rows = sheet.get_table("Responses")
        rows[1][1] = "changed"
        assert sheet.get_table("Responses")[1][1] == "A"

    def test_missing_table(self, sheet):
        with pytest.raises(TableNotFoundError) as exc_info:
            sheet.get_table("Nope")
        assert isinstance(exc_info.value, StoreError)
        assert str(exc_info.value) == "Table not found: Nope"

    def test_set_row_is_one_indexed(self, sheet):
        sheet.set_row("Responses", 3, ["t2", "Bea"])
        assert sheet.get_table("Responses")[2] == ["t2", "Bea"]

    def test_set_row_past_end_pads_rows(self, sheet):
        sheet.set_row("Responses", 6, ["t5", "E"])
        rows = sheet.get_table("Responses")
        assert len(rows) == 6
        assert rows[3] == []
        assert rows[5] == ["t5", "E"]

    def test_set_cell_extends_row(self, sheet):
        sheet.set_cell("Responses", 2, 4, "x")
        assert sheet.get_table("Responses")[1] == ["t1", "A", "", "x"]

    @pytest.mark.parametrize("row, col", [(0, 1), (1, 0)])
    def test_zero_coordinates_rejected(self, sheet, row, col):
        with pytest.raises(ValueError):
            sheet.set_cell("Responses", row, col, "x")

    def test_append_column_after_widest_row(self, sheet):
        sheet.set_cell("Responses", 3, 3, "extra")

        col = sheet.append_column("Responses", "Processed")

        assert col == 4
        assert sheet.get_table("Responses")[0] == ["Timestamp", "Name", "", "Processed"]

    def test_append_column_on_empty_table(self):
        store = InMemorySheetStore({"T": []})
        assert store.append_column("T", "Processed") == 1
        assert store.get_table("T") == [["Processed"]]
