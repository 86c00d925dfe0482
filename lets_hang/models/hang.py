"""Hang model for planned gatherings.

This module defines the Hang model, the central entity of the application.
A hang is created once by its host and then mutated in place: people RSVP,
suggest changes, and vote on suggestions. Hangs are never deleted; once
their date has passed they move to the "past" status.
"""

import datetime as dt
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from lets_hang.models.attendee import Attendee
    from lets_hang.models.suggestion import Suggestion
    from lets_hang.models.user import User

HANG_STATUSES = ("active", "past")


class Hang(SQLModel, table=True):
    """A planned gathering.

    The ``code`` is what people share: whoever holds it can read the hang,
    RSVP and add suggestions. The host is recorded but has no extra
    privileges.

    Attributes:
        id: Unique identifier (UUID).
        code: Six-character uppercase alphanumeric invite code (unique).
        title: What is being planned.
        date: Scheduled date.
        time: Scheduled start time.
        location: Free-text meeting place.
        description: Optional free-text details.
        max_attendees: Advertised capacity. Reported next to the going
            count but never enforced.
        status: Either "active" or "past".
        host_id: Foreign key to the User who created the hang.
        created_at: When the hang was created.
        attendees: People who responded, in the order they joined.
        suggestions: Proposed changes, in the order they were made.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    code: str = Field(index=True, unique=True, max_length=16)
    title: str
    date: dt.date
    time: dt.time
    location: str
    description: str | None = None
    max_attendees: int = Field(default=10)
    status: str = Field(default="active", index=True)  # "active" or "past"
    host_id: UUID | None = Field(default=None, foreign_key="user.id")
    created_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.UTC))

    # Relationships
    host: Optional["User"] = Relationship(back_populates="hosted_hangs")
    attendees: list["Attendee"] = Relationship(
        back_populates="hang",
        sa_relationship_kwargs={"order_by": "Attendee.position"},
    )
    suggestions: list["Suggestion"] = Relationship(
        back_populates="hang",
        sa_relationship_kwargs={"order_by": "Suggestion.position"},
    )

    @property
    def going_count(self) -> int:
        """Number of attendees whose RSVP is "going"."""
        return sum(1 for attendee in self.attendees if attendee.status == "going")
