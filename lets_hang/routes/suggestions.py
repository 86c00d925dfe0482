"""Suggestion routes: add, vote and remove."""
from uuid import UUID

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlmodel import Session

from lets_hang.core.database import get_session
from lets_hang.hangs import store
from lets_hang.hangs.store import HangValidationError
from lets_hang.models import Hang, Suggestion
from lets_hang.routes.hangs import get_hang_or_404, redirect_back, wants_json
from lets_hang.view.session import get_client_id, view_states, vote_ledger

router = APIRouter(prefix="/hangs/{code}/suggestions", tags=["suggestions"])


def _get_suggestion_or_404(session: Session, hang: Hang, suggestion_id: UUID) -> Suggestion:
    suggestion = session.get(Suggestion, suggestion_id)
    if not suggestion or suggestion.hang_id != hang.id:
        raise HTTPException(status_code=404, detail="Suggestion not found")
    return suggestion


@router.post("")
async def add_suggestion(
    code: str,
    request: Request,
    content: str = Form(""),
    category: str = Form(""),
    author_name: str = Form(""),
    next: str = Form(""),
    session: Session = Depends(get_session),
    client_id: str = Depends(get_client_id),
):
    """
    Add a suggestion to a hang.

    The category defaults to the one currently selected in the client's
    view. Blank content is silently ignored.
    """
    hang = get_hang_or_404(session, code)
    category = category or view_states.get(client_id).suggestion_category

    try:
        suggestion = store.add_suggestion(session, hang.id, category, content, author_name)
    except HangValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if wants_json(request):
        return JSONResponse({
            "success": True,
            "added": suggestion is not None,
            "suggestion": suggestion.model_dump(mode="json") if suggestion else None,
        })

    return redirect_back(next, f"/hangs/{hang.code}")


@router.post("/{suggestion_id}/vote")
async def vote_suggestion(
    code: str,
    suggestion_id: UUID,
    request: Request,
    delta: int = Form(...),
    next: str = Form(""),
    session: Session = Depends(get_session),
    client_id: str = Depends(get_client_id),
):
    """
    Vote a suggestion up (+1) or down (-1).

    Each client gets one vote per suggestion; a second attempt returns 409
    and leaves the count unchanged.
    """
    hang = get_hang_or_404(session, code)
    _get_suggestion_or_404(session, hang, suggestion_id)

    if delta not in (1, -1):
        raise HTTPException(status_code=400, detail="Vote must be +1 or -1")

    if not vote_ledger.try_lock(client_id, suggestion_id):
        raise HTTPException(status_code=409, detail="Already voted on this suggestion")

    try:
        suggestion = store.vote(session, suggestion_id, delta)
    except Exception:
        # No vote was recorded, so a retry must not hit the lock
        vote_ledger.release(client_id, suggestion_id)
        raise

    if suggestion is None:
        vote_ledger.release(client_id, suggestion_id)
        raise HTTPException(status_code=404, detail="Suggestion not found")

    if wants_json(request):
        return JSONResponse({
            "success": True,
            "suggestion_id": str(suggestion.id),
            "votes": suggestion.votes,
        })

    return redirect_back(next, f"/hangs/{hang.code}")


@router.post("/{suggestion_id}/delete")
async def delete_suggestion(
    code: str,
    suggestion_id: UUID,
    request: Request,
    next: str = Form(""),
    session: Session = Depends(get_session),
):
    """Remove a suggestion. Anyone holding the code may do this."""
    hang = get_hang_or_404(session, code)
    _get_suggestion_or_404(session, hang, suggestion_id)

    store.remove_suggestion(session, suggestion_id)

    if wants_json(request):
        return JSONResponse({"success": True, "suggestion_id": str(suggestion_id)})

    return redirect_back(next, f"/hangs/{hang.code}")
