"""Table reads with the check-in error taxonomy applied.

Store-level failures are translated here so services only deal with
NotFoundError (table absent) and TransientReadError (anything else).
"""

from guestdesk.domain.errors import NotFoundError, TransientReadError
from guestdesk.infra.sheets import TableNotFoundError, TabularStore


def read_table_names(store: TabularStore) -> list[str]:
    try:
        return store.list_table_names()
    except Exception as exc:
        raise TransientReadError("<table list>") from exc


def read_table(store: TabularStore, name: str) -> list[list[str]]:
    try:
        return store.get_table(name)
    except TableNotFoundError:
        raise NotFoundError("Table", name) from None
    except Exception as exc:
        raise TransientReadError(name) from exc
