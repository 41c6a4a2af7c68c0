"""psycopg2 connection and transaction helpers for the Postgres sheet store."""

import os
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

import psycopg2
from psycopg2.extensions import connection as PgConnection, cursor as PgCursor, parse_dsn

Params = Sequence[Any] | None


def _connect_kwargs(dsn: str) -> dict[str, str]:
    """Extra connect() arguments: DB_PASSWORD when the DSN has no password.

    The password secret is often mounted apart from the connection string.
    """
    password = os.environ.get("DB_PASSWORD")
    if not password or parse_dsn(dsn).get("password"):
        return {}
    return {"password": password}


def get_conn() -> PgConnection:
    """Open a connection to DATABASE_URL (URL or libpq key=value form).

    Raises:
        RuntimeError: DATABASE_URL is not set.
        psycopg2.Error: The server could not be reached.
    """
    dsn = os.environ.get("DATABASE_URL")
    if not dsn:
        raise RuntimeError("DATABASE_URL environment variable not set")
    return psycopg2.connect(dsn, **_connect_kwargs(dsn))


@contextmanager
def txn(conn: PgConnection | None = None) -> Iterator[PgCursor]:
    """Yield a cursor inside one transaction.

    Commit on clean exit, rollback on any exception. A connection opened
    here is closed on exit; a passed-in one is left open.
    """
    own = conn is None
    if own:
        conn = get_conn()
    try:
        with conn.cursor() as cur:
            yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        if own:
            conn.close()


def fetchone(cur: PgCursor, query: str, params: Params = None) -> tuple[Any, ...] | None:
    cur.execute(query, params)
    return cur.fetchone()


def fetchall(cur: PgCursor, query: str, params: Params = None) -> list[tuple[Any, ...]]:
    cur.execute(query, params)
    return cur.fetchall()
