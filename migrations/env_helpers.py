"""DATABASE_URL handling for Alembic, importable without alembic.context."""

from __future__ import annotations

import os

from psycopg2.extensions import parse_dsn
from sqlalchemy.engine import URL, make_url

DRIVER = "postgresql+psycopg2"


def dsn_to_url(dsn: str) -> URL:
    """Convert a libpq key=value DSN into a SQLAlchemy URL.

    A socket directory host (host=/cloudsql/...) goes into the query
    string, where psycopg2 expects it.
    """
    params = parse_dsn(dsn)
    host = params.get("host")
    query = {}
    if host and host.startswith("/"):
        query["host"] = host
        host = None
    return URL.create(
        DRIVER,
        username=params.get("user"),
        password=params.get("password") or os.environ.get("DB_PASSWORD") or None,
        host=host,
        port=int(params["port"]) if params.get("port") else None,
        database=params.get("dbname"),
        query=query,
    )


def get_database_url() -> str:
    """DATABASE_URL as a rendered psycopg2 SQLAlchemy URL.

    Raises:
        RuntimeError: DATABASE_URL is not set.
    """
    raw = os.environ.get("DATABASE_URL")
    if not raw:
        raise RuntimeError("DATABASE_URL is required to run migrations")

    if "://" not in raw:
        url = dsn_to_url(raw)
    else:
        url = make_url(raw)
        if url.drivername in ("postgres", "postgresql"):
            url = url.set(drivername=DRIVER)
        if url.password is None and os.environ.get("DB_PASSWORD"):
            url = url.set(password=os.environ["DB_PASSWORD"])

    return url.render_as_string(hide_password=False)
