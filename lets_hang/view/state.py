"""Per-client view state and its transitions.

The home page is a small state machine: which screen is showing, which hang
card is expanded, which suggestion category is selected and whether dark
mode is on. ``ViewState`` is immutable; every transition returns a new state
and leaves its input untouched. ``ViewStateStore`` keeps the current state
for each client cookie.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from dataclasses import asdict, dataclass, replace

from lets_hang.models import SUGGESTION_CATEGORIES

SCREENS = ("home", "create", "past")


@dataclass(frozen=True)
class ViewState:
    """UI state for one client."""

    screen: str = "home"
    expanded_hang: str | None = None
    suggestion_category: str = "general"
    dark_mode: bool = False
    active_code: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


def show_screen(state: ViewState, screen: str) -> ViewState:
    if screen not in SCREENS:
        raise ValueError(f"Unknown screen {screen!r}")
    return replace(state, screen=screen)


def toggle_expanded(state: ViewState, code: str) -> ViewState:
    """Expand the card for ``code``, or collapse it if it is already open."""
    if state.expanded_hang == code:
        return replace(state, expanded_hang=None)
    return replace(state, expanded_hang=code)


def select_category(state: ViewState, category: str) -> ViewState:
    if category not in SUGGESTION_CATEGORIES:
        raise ValueError(f"Unknown suggestion category {category!r}")
    return replace(state, suggestion_category=category)


def toggle_theme(state: ViewState) -> ViewState:
    return replace(state, dark_mode=not state.dark_mode)


def open_invite(state: ViewState, code: str) -> ViewState:
    """Arrive through an invite link: show home with that hang expanded."""
    return replace(state, screen="home", active_code=code, expanded_hang=code)


class ViewStateStore:
    """In-memory view state per client id.

    Entries expire after ``ttl`` seconds without use, and the least recently
    used entry is dropped once more than ``maxsize`` clients are tracked.
    A client without an entry sees the default ``ViewState``.
    """

    def __init__(self, maxsize: int = 1024, ttl: int = 60 * 60 * 24) -> None:
        self.maxsize = maxsize
        self.ttl = ttl
        self._data: "OrderedDict[str, tuple[ViewState, float]]" = OrderedDict()

    def _evict_expired(self) -> None:
        now = time.time()
        expired = [cid for cid, (_, ts) in self._data.items() if now - ts > self.ttl]
        for cid in expired:
            self._data.pop(cid, None)

    def get(self, client_id: str) -> ViewState:
        """Return the state for ``client_id``, or a fresh default."""
        self._evict_expired()
        item = self._data.get(client_id)
        if not item:
            return ViewState()
        state, _ = item
        self._data.move_to_end(client_id)
        self._data[client_id] = (state, time.time())
        return state

    def set(self, client_id: str, state: ViewState) -> None:
        self._evict_expired()
        if client_id in self._data:
            self._data.move_to_end(client_id)
        self._data[client_id] = (state, time.time())
        if len(self._data) > self.maxsize:
            self._data.popitem(last=False)

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)
