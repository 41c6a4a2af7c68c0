"""FastAPI dependencies resolving per-app state."""

from fastapi import Request

from guestdesk.infra.settings import DeskSettings
from guestdesk.infra.sheets import TabularStore


def get_store(request: Request) -> TabularStore:
    return request.app.state.store


def get_desk_settings(request: Request) -> DeskSettings:
    return request.app.state.settings
