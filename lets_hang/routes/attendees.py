"""Attendee routes for RSVPs."""
from uuid import UUID

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlmodel import Session

from lets_hang.core.database import get_session
from lets_hang.hangs import store
from lets_hang.hangs.store import HangValidationError
from lets_hang.models import Attendee, Hang
from lets_hang.routes.hangs import get_hang_or_404, redirect_back, wants_json

router = APIRouter(prefix="/hangs/{code}/attendees", tags=["attendees"])


def _rsvp_payload(hang: Hang, attendee: Attendee) -> dict:
    return {
        "success": True,
        "attendee_id": str(attendee.id),
        "name": attendee.name,
        "status": attendee.status,
        "going_count": hang.going_count,
        "max_attendees": hang.max_attendees,
    }


@router.post("")
async def join_hang(
    code: str,
    request: Request,
    name: str = Form(...),
    status: str = Form("going"),
    next: str = Form(""),
    session: Session = Depends(get_session),
):
    """
    RSVP by name.

    Someone already on the list under that name has their status replaced;
    anyone else is added. Capacity is shown but not enforced.
    """
    hang = get_hang_or_404(session, code)

    try:
        attendee = store.join_hang(session, hang.id, name, status)
    except HangValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if wants_json(request):
        session.refresh(hang)
        return JSONResponse(_rsvp_payload(hang, attendee))

    return redirect_back(next, f"/hangs/{hang.code}")


@router.post("/{attendee_id}/rsvp")
async def set_rsvp(
    code: str,
    attendee_id: UUID,
    request: Request,
    status: str = Form(...),
    next: str = Form(""),
    session: Session = Depends(get_session),
):
    """
    Change an attendee's RSVP.

    Overwrites the previous status; other attendees are untouched. Returns
    404 if the attendee is not part of this hang.
    """
    hang = get_hang_or_404(session, code)

    try:
        attendee = store.set_rsvp(session, hang.id, attendee_id, status)
    except HangValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if attendee is None:
        raise HTTPException(status_code=404, detail="Attendee not found")

    if wants_json(request):
        session.refresh(hang)
        return JSONResponse(_rsvp_payload(hang, attendee))

    return redirect_back(next, f"/hangs/{hang.code}")
