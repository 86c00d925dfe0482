"""Tests for database models."""

from datetime import date, time

import pytest
from sqlmodel import Session, select

from lets_hang.models import Attendee, Hang, Suggestion, User


def make_hang(code: str = "ABC123", **overrides) -> Hang:
    fields = {
        "code": code,
        "title": "Test Hang",
        "date": date(2024, 1, 15),
        "time": time(19, 0),
        "location": "My place",
    }
    fields.update(overrides)
    return Hang(**fields)


class TestHangModel:
    """Tests for the Hang model."""

    def test_create_hang(self, session: Session):
        """Test creating a basic hang."""
        session.add(make_hang())
        session.commit()

        retrieved = session.exec(select(Hang).where(Hang.code == "ABC123")).first()

        assert retrieved is not None
        assert retrieved.title == "Test Hang"
        assert retrieved.date == date(2024, 1, 15)
        assert retrieved.time == time(19, 0)
        assert retrieved.max_attendees == 10
        assert retrieved.status == "active"
        assert retrieved.description is None

    def test_hang_unique_code(self, session: Session):
        """Test that invite codes must be unique."""
        session.add(make_hang("DUP001"))
        session.commit()

        session.add(make_hang("DUP001", title="Second Hang"))

        with pytest.raises(Exception):  # IntegrityError
            session.commit()

    def test_going_count_ignores_other_statuses(self, session: Session):
        """Only "going" attendees are counted."""
        hang = make_hang()
        session.add(hang)
        session.flush()
        for position, status in enumerate(["going", "maybe", "going", "not-going"]):
            session.add(
                Attendee(hang_id=hang.id, name=f"P{position}", status=status, position=position)
            )
        session.commit()
        session.refresh(hang)

        assert hang.going_count == 2

    def test_going_count_not_capped(self, session: Session):
        """More people going than max_attendees is allowed and reported."""
        hang = make_hang(max_attendees=1)
        session.add(hang)
        session.flush()
        session.add(Attendee(hang_id=hang.id, name="A", position=0))
        session.add(Attendee(hang_id=hang.id, name="B", position=1))
        session.commit()
        session.refresh(hang)

        assert hang.going_count == 2
        assert hang.max_attendees == 1


class TestAttendeeModel:
    """Tests for the Attendee model."""

    def test_attendees_ordered_by_position(self, session: Session):
        """Attendees come back in the order they joined."""
        hang = make_hang()
        session.add(hang)
        session.flush()
        session.add(Attendee(hang_id=hang.id, name="Third", position=2))
        session.add(Attendee(hang_id=hang.id, name="First", position=0))
        session.add(Attendee(hang_id=hang.id, name="Second", position=1))
        session.commit()
        session.refresh(hang)

        assert [a.name for a in hang.attendees] == ["First", "Second", "Third"]

    def test_default_status_is_going(self, session: Session):
        hang = make_hang()
        session.add(hang)
        session.flush()
        attendee = Attendee(hang_id=hang.id, name="Jo")
        session.add(attendee)
        session.commit()

        assert session.get(Attendee, attendee.id).status == "going"


class TestSuggestionModel:
    """Tests for the Suggestion model."""

    def test_create_suggestion(self, session: Session):
        """Test a suggestion starts with zero votes."""
        hang = make_hang()
        session.add(hang)
        session.flush()
        suggestion = Suggestion(hang_id=hang.id, content="6pm?", category="time")
        session.add(suggestion)
        session.commit()

        retrieved = session.get(Suggestion, suggestion.id)
        assert retrieved.votes == 0
        assert retrieved.category == "time"
        assert retrieved.created_at is not None

    def test_suggestion_hang_relationship(self, session: Session):
        hang = make_hang()
        session.add(hang)
        session.flush()
        session.add(Suggestion(hang_id=hang.id, content="Later", position=1))
        session.add(Suggestion(hang_id=hang.id, content="Earlier", position=0))
        session.commit()
        session.refresh(hang)

        assert [s.content for s in hang.suggestions] == ["Earlier", "Later"]


class TestUserModel:
    """Tests for the User model."""

    def test_host_relationship(self, session: Session):
        user = User(name="Alex", email="alex@example.com")
        session.add(user)
        session.flush()
        hang = make_hang(host_id=user.id)
        session.add(hang)
        session.commit()
        session.refresh(user)

        assert hang.host.name == "Alex"
        assert [h.code for h in user.hosted_hangs] == ["ABC123"]

    def test_user_unique_email(self, session: Session):
        session.add(User(name="One", email="same@example.com"))
        session.commit()
        session.add(User(name="Two", email="same@example.com"))

        with pytest.raises(Exception):  # IntegrityError
            session.commit()

    def test_users_without_email(self, session: Session):
        """Several users may have no email."""
        session.add(User(name="One"))
        session.add(User(name="Two"))
        session.commit()

        assert len(session.exec(select(User)).all()) == 2
