"""Check-in panel: pending submissions, room choice and commit.

GET  /checkin/panel        → HTML panel (~900x700)
GET  /checkin/submissions  → pending submissions (JSON)
GET  /checkin/rooms        → room summaries (JSON)
POST /checkin/commit       → commit one check-in

Reject is handled in the browser only and never reaches the server, so a
rejected submission is offered again the next time the panel opens.
"""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, ConfigDict

from guestdesk.api.deps import get_desk_settings, get_store
from guestdesk.domain.checkin import CheckInCommand, format_amount, format_sheet_date
from guestdesk.domain.errors import NotFoundError, TransientReadError
from guestdesk.domain.submissions import UNKNOWN_GUEST
from guestdesk.infra.settings import DeskSettings
from guestdesk.infra.sheets import StoreError, TabularStore
from guestdesk.observability.logging import get_logger
from guestdesk.observability.redaction import safe_log_context
from guestdesk.services.checkin import check_in_guest
from guestdesk.services.intake import list_pending_checkins
from guestdesk.services.rooms import list_available_rooms

logger = get_logger(__name__)

router = APIRouter(prefix="/checkin", tags=["checkin"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))

PAYMENT_STATUSES = ["Paid", "Pending", "Partial", "Refunded"]
BOOKING_SOURCES = ["Walk-in", "Phone", "Email", "Website", "Online Form", "Travel Agent"]


# ── Schemas ───────────────────────────────────────────────────────────────────


class CommitCheckInRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    timestamp: str
    room_number: str
    daily_rate: str
    guest_name: str = UNKNOWN_GUEST
    payment_status: str = ""
    source: str = ""
    email: str = ""
    phone: str = ""
    check_in_date: str = ""
    number_of_nights: str = "1"
    number_of_guests: str = "1"
    purpose_of_visit: str = ""
    special_requests: str = ""

    def to_command(self) -> CheckInCommand:
        return CheckInCommand(**self.model_dump())


class CommitCheckInResponse(BaseModel):
    message: str
    booking_id: str
    room_number: str
    total_amount: str
    check_out_date: str


# ── Routes ────────────────────────────────────────────────────────────────────


@router.get("/panel", response_class=HTMLResponse)
def checkin_panel(
    request: Request,
    store: TabularStore = Depends(get_store),
    settings: DeskSettings = Depends(get_desk_settings),
) -> HTMLResponse:
    """Render the check-in selection panel."""
    submissions = [asdict(s) | {"label": s.label()} for s in list_pending_checkins(store)]
    rooms = [asdict(r) for r in list_available_rooms(store, settings)]
    return templates.TemplateResponse(
        request,
        "checkin_panel.html",
        {
            "submissions": submissions,
            "rooms": rooms,
            "payment_statuses": PAYMENT_STATUSES,
            "sources": BOOKING_SOURCES,
        },
    )


@router.get("/submissions")
def pending_submissions(store: TabularStore = Depends(get_store)) -> list[dict]:
    """Unprocessed form submissions, in table order."""
    return [asdict(s) for s in list_pending_checkins(store)]


@router.get("/rooms")
def rooms(
    store: TabularStore = Depends(get_store),
    settings: DeskSettings = Depends(get_desk_settings),
) -> list[dict]:
    """All rooms with their status tag."""
    return [asdict(r) for r in list_available_rooms(store, settings)]


@router.post("/commit")
def commit(
    body: CommitCheckInRequest,
    store: TabularStore = Depends(get_store),
    settings: DeskSettings = Depends(get_desk_settings),
) -> CommitCheckInResponse:
    """Commit one check-in.

    Failures always come back as JSON with a readable detail:
    404 when the room (or rooms table) does not exist,
    503 when the rooms table could not be read,
    502 when the room row could not be written,
    500 for anything else.
    """
    try:
        result = check_in_guest(store, body.to_command(), settings=settings)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except TransientReadError as exc:
        logger.warning(
            "check-in commit failed: rooms unreadable",
            extra={"extra_fields": safe_log_context(room_number=body.room_number, table=exc.table)},
        )
        raise HTTPException(status_code=503, detail="Check-in failed: rooms could not be read, try again")
    except StoreError:
        logger.warning(
            "check-in commit failed",
            extra={"extra_fields": safe_log_context(room_number=body.room_number)},
        )
        raise HTTPException(status_code=502, detail="Check-in failed: room could not be updated")
    except Exception as exc:
        logger.error(
            "check-in commit failed unexpectedly",
            extra={
                "extra_fields": safe_log_context(
                    room_number=body.room_number,
                    error=type(exc).__name__,
                )
            },
        )
        raise HTTPException(status_code=500, detail="Check-in failed: unexpected error")

    return CommitCheckInResponse(
        message=result.message,
        booking_id=result.booking_id,
        room_number=result.room_number,
        total_amount=format_amount(result.stay.total_amount),
        check_out_date=format_sheet_date(result.stay.check_out),
    )
