"""Home page: the home, create and past screens."""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlmodel import Session

from lets_hang.core.config import settings
from lets_hang.core.database import get_session
from lets_hang.core.templating import templates
from lets_hang.hangs import store
from lets_hang.hangs.codes import normalize_code
from lets_hang.models import RSVP_STATUSES, SUGGESTION_CATEGORIES
from lets_hang.view.session import get_client_id, view_states, vote_ledger
from lets_hang.view.state import SCREENS, open_invite

router = APIRouter(tags=["home"])


def render_home(
    request: Request,
    session: Session,
    client_id: str,
    notice: str | None = None,
    status_code: int = 200,
):
    """Render whichever screen the client's view state points at."""
    state = view_states.get(client_id)

    hangs = []
    if state.screen == "home":
        hangs = store.list_hangs(session, "active")
    elif state.screen == "past":
        hangs = store.list_hangs(session, "past")

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "app_name": settings.app_name,
            "state": state,
            "screens": SCREENS,
            "hangs": hangs,
            "voted": vote_ledger.voted_by(client_id),
            "rsvp_statuses": RSVP_STATUSES,
            "categories": SUGGESTION_CATEGORIES,
            "default_max_attendees": settings.default_max_attendees,
            "notice": notice,
        },
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    code: str | None = None,
    session: Session = Depends(get_session),
    client_id: str = Depends(get_client_id),
):
    """
    Display the current screen.

    An invite link (``/?code=XXXXXX``) selects that hang and expands its
    card. Past hangs are not on the home list, so their links go to the
    detail page instead. An unknown code shows an inline message and a 404
    status.
    """
    notice = None
    status_code = 200

    if code:
        hang = store.get_hang_by_code(session, code)
        if hang and hang.status == "past":
            return RedirectResponse(f"/hangs/{hang.code}", status_code=303)
        if hang:
            view_states.set(client_id, open_invite(view_states.get(client_id), hang.code))
        else:
            notice = f"No hang found with code {normalize_code(code)}"
            status_code = 404

    return render_home(request, session, client_id, notice=notice, status_code=status_code)
