"""Postgres-backed tabular store.

Uses raw SQL with psycopg2 (no ORM). Each table row is one sheet_rows
record holding its cells as a JSONB array; schema in
migrations/sql/001_sheet_store.sql.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Iterator, Sequence

import psycopg2
from psycopg2.extensions import cursor as PgCursor

from guestdesk.infra.db import fetchall, fetchone, txn
from guestdesk.infra.sheets import StoreError, TableNotFoundError


def _text(value: object) -> str:
    return "" if value is None else str(value)


class PostgresSheetStore:
    """TabularStore over the sheet_tables / sheet_rows schema.

    Every call runs in its own short transaction.
    """

    @contextmanager
    def _cursor(self) -> Iterator[PgCursor]:
        try:
            with txn() as cur:
                yield cur
        except psycopg2.Error as exc:
            raise StoreError(f"sheet store query failed: {exc.__class__.__name__}") from exc

    def list_table_names(self) -> list[str]:
        with self._cursor() as cur:
            rows = fetchall(cur, "SELECT name FROM sheet_tables ORDER BY position, name")
        return [r[0] for r in rows]

    def get_table(self, name: str) -> list[list[str]]:
        with self._cursor() as cur:
            self._require_table(cur, name)
            rows = fetchall(
                cur,
                """
                SELECT row_index, cells
                FROM sheet_rows
                WHERE table_name = %s
                ORDER BY row_index
                """,
                (name,),
            )

        table: list[list[str]] = []
        for row_index, cells in rows:
            # gaps between stored rows read back as empty rows
            while len(table) < row_index - 1:
                table.append([])
            table.append([_text(v) for v in (cells or [])])
        return table

    def set_row(self, name: str, row_index: int, values: Sequence[object]) -> None:
        if row_index < 1:
            raise ValueError(f"row_index is 1-indexed, got {row_index}")
        with self._cursor() as cur:
            self._require_table(cur, name)
            self._upsert_row(cur, name, row_index, [_text(v) for v in values])

    def set_cell(self, name: str, row: int, col: int, value: object) -> None:
        if row < 1 or col < 1:
            raise ValueError(f"cell coordinates are 1-indexed, got ({row}, {col})")
        with self._cursor() as cur:
            self._require_table(cur, name)
            existing = fetchone(
                cur,
                """
                SELECT cells FROM sheet_rows
                WHERE table_name = %s AND row_index = %s
                FOR UPDATE
                """,
                (name, row),
            )
            cells = [_text(v) for v in (existing[0] if existing and existing[0] else [])]
            while len(cells) < col:
                cells.append("")
            cells[col - 1] = _text(value)
            self._upsert_row(cur, name, row, cells)

    def append_column(self, name: str, header: str) -> int:
        with self._cursor() as cur:
            self._require_table(cur, name)
            width_row = fetchone(
                cur,
                """
                SELECT COALESCE(MAX(jsonb_array_length(cells)), 0)
                FROM sheet_rows
                WHERE table_name = %s
                """,
                (name,),
            )
            col = int(width_row[0]) + 1 if width_row else 1

            header_row = fetchone(
                cur,
                "SELECT cells FROM sheet_rows WHERE table_name = %s AND row_index = 1 FOR UPDATE",
                (name,),
            )
            cells = [_text(v) for v in (header_row[0] if header_row and header_row[0] else [])]
            while len(cells) < col - 1:
                cells.append("")
            cells.append(header)
            self._upsert_row(cur, name, 1, cells)
        return col

    def create_table(self, name: str, rows: Sequence[Sequence[object]]) -> None:
        """Create (or replace) a table with the given rows."""
        with self._cursor() as cur:
            cur.execute(
                """
                INSERT INTO sheet_tables (name)
                VALUES (%s)
                ON CONFLICT (name) DO NOTHING
                """,
                (name,),
            )
            cur.execute("DELETE FROM sheet_rows WHERE table_name = %s", (name,))
            for i, row in enumerate(rows, start=1):
                self._upsert_row(cur, name, i, [_text(v) for v in row])

    # ── internals ─────────────────────────────────────────────────────

    def _require_table(self, cur: PgCursor, name: str) -> None:
        row = fetchone(cur, "SELECT 1 FROM sheet_tables WHERE name = %s", (name,))
        if row is None:
            raise TableNotFoundError(name)

    def _upsert_row(self, cur: PgCursor, name: str, row_index: int, cells: list[str]) -> None:
        cur.execute(
            """
            INSERT INTO sheet_rows (table_name, row_index, cells, updated_at)
            VALUES (%s, %s, %s::jsonb, now())
            ON CONFLICT (table_name, row_index)
            DO UPDATE SET cells = EXCLUDED.cells, updated_at = now()
            """,
            (name, row_index, json.dumps(cells)),
        )
