"""Client identity cookie and the per-client state it keys."""
from uuid import uuid4

from fastapi import Request

from lets_hang.core.config import settings
from lets_hang.view.state import ViewStateStore
from lets_hang.view.votes import VoteLedger

view_states = ViewStateStore(
    maxsize=settings.view_state_cache_size,
    ttl=settings.view_state_ttl_seconds,
)
vote_ledger = VoteLedger(
    maxsize=settings.view_state_cache_size,
    ttl=settings.view_state_ttl_seconds,
)


async def assign_client_id(request: Request, call_next):
    """HTTP middleware: give every browser an opaque client id cookie."""
    cookie_name = settings.client_cookie_name
    client_id = request.cookies.get(cookie_name)
    is_new = not client_id
    if is_new:
        client_id = uuid4().hex
    request.state.client_id = client_id

    response = await call_next(request)

    if is_new:
        response.set_cookie(
            cookie_name,
            client_id,
            max_age=settings.view_state_ttl_seconds,
            httponly=True,
            samesite="lax",
        )
    return response


def get_client_id(request: Request) -> str:
    """Dependency returning the caller's client id."""
    return getattr(request.state, "client_id", None) or request.cookies.get(
        settings.client_cookie_name, ""
    )
