"""Tabular store contract and an in-memory implementation.

The store is spreadsheet-shaped: named tables of rows of string cells,
row 0 of get_table() being the header row. Write coordinates are
1-indexed like spreadsheet rows and columns (row 1 = header row).
"""

from __future__ import annotations

import copy
from typing import Protocol, Sequence, runtime_checkable


class StoreError(Exception):
    """Base for tabular store failures."""


class TableNotFoundError(StoreError, KeyError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Table not found: {self.name}"


@runtime_checkable
class TabularStore(Protocol):
    def list_table_names(self) -> list[str]: ...

    def get_table(self, name: str) -> list[list[str]]: ...

    def set_row(self, name: str, row_index: int, values: Sequence[object]) -> None: ...

    def set_cell(self, name: str, row: int, col: int, value: object) -> None: ...

    def append_column(self, name: str, header: str) -> int: ...


def _text(value: object) -> str:
    return "" if value is None else str(value)


class InMemorySheetStore:
    """Dict-backed store. Tables keep insertion order."""

    def __init__(self, tables: dict[str, Sequence[Sequence[object]]] | None = None):
        self._tables: dict[str, list[list[str]]] = {}
        for name, rows in (tables or {}).items():
            self.create_table(name, rows)

    def create_table(self, name: str, rows: Sequence[Sequence[object]]) -> None:
        self._tables[name] = [[_text(v) for v in row] for row in rows]

    def list_table_names(self) -> list[str]:
        return list(self._tables)

    def get_table(self, name: str) -> list[list[str]]:
        return copy.deepcopy(self._table(name))

    def set_row(self, name: str, row_index: int, values: Sequence[object]) -> None:
        table = self._table(name)
        _check_index(row_index, "row_index")
        while len(table) < row_index:
            table.append([])
        table[row_index - 1] = [_text(v) for v in values]

    def set_cell(self, name: str, row: int, col: int, value: object) -> None:
        table = self._table(name)
        _check_index(row, "row")
        _check_index(col, "col")
        while len(table) < row:
            table.append([])
        cells = table[row - 1]
        while len(cells) < col:
            cells.append("")
        cells[col - 1] = _text(value)

    def append_column(self, name: str, header: str) -> int:
        table = self._table(name)
        if not table:
            table.append([])
        width = max(len(r) for r in table)
        col = width + 1
        self.set_cell(name, 1, col, header)
        return col

    def _table(self, name: str) -> list[list[str]]:
        try:
            return self._tables[name]
        except KeyError:
            raise TableNotFoundError(name) from None


def _check_index(value: int, label: str) -> None:
    if value < 1:
        raise ValueError(f"{label} is 1-indexed, got {value}")
