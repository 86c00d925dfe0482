"""View routes: screen, expanded card, suggestion category and theme."""
from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import JSONResponse

from lets_hang.hangs.codes import normalize_code
from lets_hang.routes.hangs import redirect_back, wants_json
from lets_hang.view.session import get_client_id, view_states
from lets_hang.view.state import (
    select_category,
    show_screen,
    toggle_expanded,
    toggle_theme,
)

router = APIRouter(prefix="/view", tags=["view"])


def _apply(request: Request, client_id: str, next_url: str, transition, *args):
    """Run a transition on the client's state, store it and respond."""
    try:
        state = transition(view_states.get(client_id), *args)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    view_states.set(client_id, state)

    if wants_json(request):
        return JSONResponse(state.to_dict())
    return redirect_back(next_url, "/")


@router.post("/screen")
async def change_screen(
    request: Request,
    screen: str = Form(...),
    next: str = Form(""),
    client_id: str = Depends(get_client_id),
):
    """Switch between the home, create and past screens."""
    return _apply(request, client_id, next, show_screen, screen)


@router.post("/expand/{code}")
async def expand_hang(
    code: str,
    request: Request,
    next: str = Form(""),
    client_id: str = Depends(get_client_id),
):
    """Expand a hang card, or collapse it if it is already expanded."""
    return _apply(request, client_id, next, toggle_expanded, normalize_code(code))


@router.post("/category")
async def change_category(
    request: Request,
    category: str = Form(...),
    next: str = Form(""),
    client_id: str = Depends(get_client_id),
):
    """Select the category new suggestions are filed under."""
    return _apply(request, client_id, next, select_category, category)


@router.post("/theme")
async def flip_theme(
    request: Request,
    next: str = Form(""),
    client_id: str = Depends(get_client_id),
):
    """Toggle dark mode."""
    return _apply(request, client_id, next, toggle_theme)
