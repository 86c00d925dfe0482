"""User model for hang hosts and linked attendees.

Authentication is handled elsewhere; this table only records who hosted a
hang so the card can say "Hosted by ...".
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from lets_hang.models.hang import Hang


class User(SQLModel, table=True):
    """A known person.

    Attributes:
        id: Unique identifier (UUID).
        name: Display name.
        email: Optional email address, unique when present. Used to find the
            same person again across hangs.
        created_at: When the user record was created.
        hosted_hangs: Hangs this user created.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    email: str | None = Field(default=None, index=True, unique=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationship
    hosted_hangs: list["Hang"] = Relationship(back_populates="host")
