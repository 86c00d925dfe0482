"""Tests for per-client view state, vote locks and invite text."""

from datetime import date, time
from uuid import uuid4

import pytest

from lets_hang.hangs.invites import invite_url, share_text
from lets_hang.models import Hang
from lets_hang.view.state import (
    ViewState,
    ViewStateStore,
    open_invite,
    select_category,
    show_screen,
    toggle_expanded,
    toggle_theme,
)
from lets_hang.view.votes import VoteLedger


class TestTransitions:
    def test_defaults(self):
        state = ViewState()
        assert state.screen == "home"
        assert state.expanded_hang is None
        assert state.suggestion_category == "general"
        assert state.dark_mode is False

    def test_show_screen(self):
        state = ViewState()
        new = show_screen(state, "create")

        assert new.screen == "create"
        assert state.screen == "home"

    def test_show_unknown_screen(self):
        with pytest.raises(ValueError):
            show_screen(ViewState(), "settings")

    def test_toggle_expanded(self):
        opened = toggle_expanded(ViewState(), "ABC123")
        assert opened.expanded_hang == "ABC123"

        switched = toggle_expanded(opened, "XYZ789")
        assert switched.expanded_hang == "XYZ789"

        closed = toggle_expanded(switched, "XYZ789")
        assert closed.expanded_hang is None

    def test_select_category(self):
        assert select_category(ViewState(), "location").suggestion_category == "location"
        with pytest.raises(ValueError):
            select_category(ViewState(), "food")

    def test_toggle_theme(self):
        dark = toggle_theme(ViewState())
        assert dark.dark_mode is True
        assert toggle_theme(dark).dark_mode is False

    def test_open_invite(self):
        state = show_screen(ViewState(), "past")
        invited = open_invite(state, "ABC123")

        assert invited.screen == "home"
        assert invited.active_code == "ABC123"
        assert invited.expanded_hang == "ABC123"

    def test_state_is_immutable(self):
        with pytest.raises(AttributeError):
            ViewState().screen = "create"


class TestViewStateStore:
    def test_unknown_client_gets_default(self):
        assert ViewStateStore().get("nobody") == ViewState()

    def test_set_and_get(self):
        store = ViewStateStore()
        store.set("a", toggle_theme(ViewState()))
        assert store.get("a").dark_mode is True

    def test_lru_eviction(self):
        store = ViewStateStore(maxsize=2)
        dark = toggle_theme(ViewState())
        store.set("a", dark)
        store.set("b", dark)
        store.get("a")  # a is now most recently used
        store.set("c", dark)

        assert store.get("b") == ViewState()
        assert store.get("a") is dark
        assert len(store) == 2

    def test_expired_entries_dropped(self):
        store = ViewStateStore(ttl=-1)
        store.set("a", toggle_theme(ViewState()))
        assert store.get("a") == ViewState()


class TestVoteLedger:
    def test_single_shot(self):
        ledger = VoteLedger()
        suggestion_id = uuid4()

        assert ledger.try_lock("client", suggestion_id) is True
        assert ledger.try_lock("client", suggestion_id) is False
        assert ledger.has_voted("client", suggestion_id)

    def test_per_client_and_per_suggestion(self):
        ledger = VoteLedger()
        first, second = uuid4(), uuid4()
        ledger.try_lock("one", first)

        assert ledger.try_lock("two", first) is True
        assert ledger.try_lock("one", second) is True
        assert ledger.voted_by("one") == {first, second}

    def test_release(self):
        ledger = VoteLedger()
        suggestion_id = uuid4()
        ledger.try_lock("client", suggestion_id)
        ledger.release("client", suggestion_id)

        assert ledger.try_lock("client", suggestion_id) is True

    def test_lru_eviction(self):
        ledger = VoteLedger(maxsize=2)
        first, second, third = uuid4(), uuid4(), uuid4()
        ledger.try_lock("a", first)
        ledger.try_lock("b", second)
        ledger.try_lock("a", third)  # "a" is now most recent
        ledger.try_lock("c", first)

        assert len(ledger) == 2
        assert ledger.voted_by("a") == {first, third}
        assert ledger.voted_by("b") == set()
        assert ledger.try_lock("b", second) is True

    def test_expired_entries_dropped(self):
        ledger = VoteLedger(ttl=-1)
        suggestion_id = uuid4()
        ledger.try_lock("a", suggestion_id)

        assert ledger.has_voted("a", suggestion_id) is False
        assert len(ledger) == 0


class TestInvites:
    def make_hang(self) -> Hang:
        return Hang(
            code="ABC123",
            title="Game Night",
            date=date(2024, 1, 15),
            time=time(19, 0),
            location="My place",
        )

    def test_invite_url(self):
        assert invite_url(self.make_hang(), "http://hang.test/") == "http://hang.test/?code=ABC123"

    def test_share_text(self):
        lines = share_text(self.make_hang()).splitlines()

        assert "Join me for Game Night!" in lines[0]
        assert "2024-01-15 at 19:00" in lines[1]
        assert "My place" in lines[2]
        assert len(lines) == 3

    def test_share_text_with_link(self):
        text = share_text(self.make_hang(), "http://hang.test")
        assert text.splitlines()[-1].endswith("http://hang.test/?code=ABC123")
