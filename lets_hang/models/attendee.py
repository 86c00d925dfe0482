"""Attendee model for tracking hang participants.

Each attendee carries exactly one RSVP status. Changing it overwrites the
previous value; no history is kept.
"""

from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from lets_hang.models.hang import Hang
    from lets_hang.models.user import User

RSVP_STATUSES = ("going", "maybe", "not-going")


class Attendee(SQLModel, table=True):
    """A person who responded to a hang.

    Attributes:
        id: Unique identifier (UUID).
        hang_id: Foreign key to the parent Hang.
        user_id: The User behind this attendee, when known (the host is
            always linked).
        name: Display name shown on the hang card.
        status: One of "going", "maybe" or "not-going".
        position: Order of arrival within the hang, starting at 0.
        hang: Reference to the parent Hang object.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    hang_id: UUID = Field(foreign_key="hang.id", index=True)
    user_id: UUID | None = Field(default=None, foreign_key="user.id")
    name: str
    status: str = Field(default="going")
    position: int = Field(default=0)

    # Relationships
    hang: Optional["Hang"] = Relationship(back_populates="attendees")
    user: Optional["User"] = Relationship()
