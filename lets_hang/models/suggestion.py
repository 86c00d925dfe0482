"""Suggestion model for proposed changes to a hang."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from lets_hang.models.hang import Hang

SUGGESTION_CATEGORIES = ("time", "location", "general")


class Suggestion(SQLModel, table=True):
    """A free-text suggestion attached to a hang.

    Attributes:
        id: Unique identifier (UUID).
        hang_id: Foreign key to the parent Hang.
        content: The suggestion text, trimmed and never empty.
        category: One of "time", "location" or "general".
        votes: Running total of up (+1) and down (-1) votes.
        author_name: Who made the suggestion, if they said.
        position: Order within the hang's suggestion list.
        created_at: When the suggestion was made.
        hang: Reference to the parent Hang object.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    hang_id: UUID = Field(foreign_key="hang.id", index=True)
    content: str
    category: str = Field(default="general")
    votes: int = Field(default=0)
    author_name: str | None = None
    position: int = Field(default=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationship
    hang: Optional["Hang"] = Relationship(back_populates="suggestions")
