"""Hang routes for creating, joining and viewing hangs."""
from uuid import UUID

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from sqlmodel import Session

from lets_hang.core.database import get_session
from lets_hang.core.templating import templates
from lets_hang.hangs import store
from lets_hang.hangs.codes import normalize_code
from lets_hang.hangs.invites import invite_url, share_text
from lets_hang.hangs.store import HangValidationError
from lets_hang.models import RSVP_STATUSES, SUGGESTION_CATEGORIES, Hang
from lets_hang.routes.home import render_home
from lets_hang.view.session import get_client_id, view_states, vote_ledger
from lets_hang.view.state import open_invite

router = APIRouter(prefix="/hangs", tags=["hangs"])


def wants_json(request: Request) -> bool:
    """Check if the client prefers JSON response (AJAX request)."""
    accept = request.headers.get("accept", "")
    return "application/json" in accept


def redirect_back(next_url: str | None, default: str) -> RedirectResponse:
    """Redirect to a local ``next_url`` if one was posted, else ``default``."""
    target = default
    if next_url and next_url.startswith("/") and not next_url.startswith("//"):
        target = next_url
    return RedirectResponse(target, status_code=303)


def get_hang_or_404(session: Session, code: str) -> Hang:
    hang = store.get_hang_by_code(session, code)
    if not hang:
        raise HTTPException(status_code=404, detail="Hang not found")
    return hang


def hang_payload(hang: Hang, voted: set[UUID] | None = None) -> dict:
    """JSON-ready view of a hang with its attendees and suggestions."""
    voted = voted or set()
    data = hang.model_dump(mode="json")
    data["going_count"] = hang.going_count
    data["host_name"] = hang.host.name if hang.host else None
    data["attendees"] = [
        attendee.model_dump(mode="json", exclude={"hang_id", "position"})
        for attendee in hang.attendees
    ]
    data["suggestions"] = [
        {
            **suggestion.model_dump(mode="json", exclude={"hang_id", "position"}),
            "voted": suggestion.id in voted,
        }
        for suggestion in hang.suggestions
    ]
    return data


@router.post("")
async def create_hang(
    request: Request,
    title: str = Form(...),
    date: str = Form(...),
    time: str = Form(...),
    location: str = Form(...),
    description: str = Form(""),
    max_attendees: str = Form(""),
    host_name: str = Form(""),
    host_email: str = Form(""),
    session: Session = Depends(get_session),
    client_id: str = Depends(get_client_id),
):
    """
    Create a new hang.

    The creator becomes the first attendee with status "going". Returns 400
    if a required field is blank or the date/time cannot be parsed. On
    success the client's view switches to home with the new hang expanded.
    """
    try:
        hang = store.create_hang(
            session,
            title=title,
            date=date,
            time=time,
            location=location,
            description=description,
            max_attendees=max_attendees,
            host_name=host_name,
            host_email=host_email,
        )
    except HangValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    view_states.set(client_id, open_invite(view_states.get(client_id), hang.code))

    if wants_json(request):
        return JSONResponse(hang_payload(hang), status_code=201)

    return RedirectResponse(f"/?code={hang.code}", status_code=303)


@router.post("/join")
async def join_by_code(
    request: Request,
    code: str = Form(...),
    session: Session = Depends(get_session),
    client_id: str = Depends(get_client_id),
):
    """
    Open a hang from a typed-in invite code.

    Unknown codes re-render the home page with an inline message (404)
    rather than an error page.
    """
    hang = store.get_hang_by_code(session, code)
    if not hang:
        if wants_json(request):
            raise HTTPException(status_code=404, detail="Hang not found")
        return render_home(
            request,
            session,
            client_id,
            notice=f"No hang found with code {normalize_code(code)}",
            status_code=404,
        )

    view_states.set(client_id, open_invite(view_states.get(client_id), hang.code))

    if wants_json(request):
        return JSONResponse(hang_payload(hang, vote_ledger.voted_by(client_id)))

    return RedirectResponse(f"/hangs/{hang.code}", status_code=303)


@router.get("/{code}", response_class=HTMLResponse)
async def hang_detail(
    code: str,
    request: Request,
    session: Session = Depends(get_session),
    client_id: str = Depends(get_client_id),
):
    """
    Display a single hang.

    Shows attendees, RSVP controls, suggestions with vote buttons and the
    suggestion form. Returns JSON when requested.
    """
    hang = get_hang_or_404(session, code)
    voted = vote_ledger.voted_by(client_id)

    if wants_json(request):
        return JSONResponse(hang_payload(hang, voted))

    state = view_states.get(client_id)
    return templates.TemplateResponse(
        request,
        "hang_detail.html",
        {
            "hang": hang,
            "state": state,
            "voted": voted,
            "rsvp_statuses": RSVP_STATUSES,
            "categories": SUGGESTION_CATEGORIES,
            "share_text": share_text(hang, str(request.base_url)),
        },
    )


@router.get("/{code}/share")
async def share_hang(
    code: str,
    request: Request,
    session: Session = Depends(get_session),
):
    """Return the invite link and a ready-to-paste invite message."""
    hang = get_hang_or_404(session, code)
    base_url = str(request.base_url)
    return {
        "code": hang.code,
        "url": invite_url(hang, base_url),
        "text": share_text(hang, base_url),
    }
