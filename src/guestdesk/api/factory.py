"""FastAPI application factory."""

from fastapi import FastAPI, Request, Response

from guestdesk.infra.settings import DeskSettings, build_store, get_settings
from guestdesk.infra.sheets import TabularStore
from guestdesk.infra.time import desk_today
from guestdesk.observability.correlation import (
    CORRELATION_ID_HEADER,
    generate_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from guestdesk.operations.seed_demo import seed

from .routers import public
from .routes import checkin_panel


def create_app(
    store: TabularStore | None = None,
    settings: DeskSettings | None = None,
) -> FastAPI:
    """Create the front desk app bound to one tabular store.

    Args:
        store: Store handle shared by every request. Built from settings
               (SHEET_STORE) when None.
        settings: Desk settings. Read from the environment when None.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Guest Desk",
        docs_url=None,
        redoc_url=None,
    )
    app.state.settings = settings
    if store is None:
        store = build_store(settings)
        if settings.seed_demo and settings.store_backend == "memory":
            seed(store, desk_today(settings.timezone), settings.rooms_table)
    app.state.store = store

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        cid = request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id()
        token = set_correlation_id(cid)
        try:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response
        finally:
            reset_correlation_id(token)

    app.include_router(public.router)
    app.include_router(checkin_panel.router)

    return app
