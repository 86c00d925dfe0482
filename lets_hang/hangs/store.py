"""Hang store: create, read and update hangs, attendees and suggestions.

Every function takes an open SQLModel session and commits its own write, so
each call is an independent all-or-nothing change. Lookups of unknown hangs
or suggestions are no-ops that return ``None`` (or ``False``); only malformed
input raises.
"""
import datetime as dt
import logging
from uuid import UUID

from sqlmodel import Session, select

from lets_hang.core.config import settings
from lets_hang.hangs.codes import allocate_code, normalize_code
from lets_hang.models import (
    RSVP_STATUSES,
    SUGGESTION_CATEGORIES,
    Attendee,
    Hang,
    Suggestion,
    User,
)

logger = logging.getLogger(__name__)


class HangValidationError(ValueError):
    """Raised when input for a hang, RSVP or suggestion is missing or malformed."""


def _require(value, field: str):
    """Return the trimmed value, or raise if it is missing or blank."""
    if isinstance(value, str):
        value = value.strip()
    if value is None or value == "":
        raise HangValidationError(f"{field} is required")
    return value


def _parse_date(value) -> dt.date:
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(value)
    except ValueError as e:
        raise HangValidationError(f"Invalid date: {value!r}") from e


def _parse_time(value) -> dt.time:
    if isinstance(value, dt.time):
        return value
    try:
        return dt.time.fromisoformat(value)
    except ValueError as e:
        raise HangValidationError(f"Invalid time: {value!r}") from e


def _coerce_max_attendees(value) -> int:
    """Parse the capacity field, falling back to the default when unusable."""
    if value is None:
        return settings.default_max_attendees
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return settings.default_max_attendees
    if not isinstance(value, int) or value <= 0:
        return settings.default_max_attendees
    return value


def _check_status(status: str) -> None:
    if status not in RSVP_STATUSES:
        raise HangValidationError(
            f"Invalid RSVP status {status!r}, expected one of {', '.join(RSVP_STATUSES)}"
        )


def get_or_create_user(
    session: Session, name: str | None = None, email: str | None = None
) -> User:
    """
    Find a user by email, or create one.

    A known email keeps its user record; a new non-empty name overwrites the
    stored one. Without a name, new users are named after the local part of
    their email, or "User". The caller commits.
    """
    email = (email or "").strip().lower() or None
    name = (name or "").strip()

    if email:
        user = session.exec(select(User).where(User.email == email)).first()
        if user:
            if name and user.name != name:
                user.name = name
                session.add(user)
            return user

    if not name:
        name = email.split("@")[0] if email else "User"

    user = User(name=name, email=email)
    session.add(user)
    session.flush()
    logger.info(f"Created user {user.name} ({user.id})")
    return user


def create_hang(
    session: Session,
    *,
    title: str,
    date: str | dt.date,
    time: str | dt.time,
    location: str,
    description: str | None = None,
    max_attendees: str | int | None = None,
    host_name: str | None = None,
    host_email: str | None = None,
) -> Hang:
    """
    Create a hang and seed its host as the first attendee.

    Title, date, time and location are required. Date and time may be ISO
    strings ("2024-01-15", "19:00"). A missing, non-numeric or non-positive
    ``max_attendees`` falls back to ``settings.default_max_attendees``.

    Raises:
        HangValidationError: A required field is blank or unparseable.
        CodeAllocationError: No unused invite code could be drawn.
    """
    title = _require(title, "title")
    location = _require(location, "location")
    hang_date = _parse_date(_require(date, "date"))
    hang_time = _parse_time(_require(time, "time"))

    host = get_or_create_user(session, name=host_name, email=host_email)

    hang = Hang(
        code=allocate_code(session),
        title=title,
        date=hang_date,
        time=hang_time,
        location=location,
        description=(description or "").strip() or None,
        max_attendees=_coerce_max_attendees(max_attendees),
        host_id=host.id,
    )
    session.add(hang)
    session.flush()  # Get hang.id

    session.add(
        Attendee(
            hang_id=hang.id,
            user_id=host.id,
            name=host.name,
            status="going",
            position=0,
        )
    )
    session.commit()
    session.refresh(hang)

    logger.info(f"Created hang {hang.code}: {hang.title} on {hang.date} hosted by {host.name}")
    return hang


def get_hang(session: Session, hang_id: UUID) -> Hang | None:
    return session.get(Hang, hang_id)


def get_hang_by_code(session: Session, code: str | None) -> Hang | None:
    """Look up a hang by invite code, ignoring case and surrounding spaces."""
    code = normalize_code(code)
    if not code:
        return None
    return session.exec(select(Hang).where(Hang.code == code)).first()


def list_hangs(session: Session, status: str = "active") -> list[Hang]:
    """List hangs with the given status; active soonest first, past latest first."""
    statement = select(Hang).where(Hang.status == status)
    if status == "past":
        statement = statement.order_by(Hang.date.desc(), Hang.time.desc())
    else:
        statement = statement.order_by(Hang.date, Hang.time)
    return list(session.exec(statement).all())


def set_rsvp(
    session: Session, hang_id: UUID, attendee_id: UUID, status: str
) -> Attendee | None:
    """
    Replace one attendee's RSVP status.

    Unknown hangs, and attendees that do not belong to the hang, are ignored
    and ``None`` is returned. Every other attendee is left untouched.
    """
    _check_status(status)

    hang = session.get(Hang, hang_id)
    if hang is None:
        logger.debug(f"RSVP ignored: unknown hang {hang_id}")
        return None

    attendee = next((a for a in hang.attendees if a.id == attendee_id), None)
    if attendee is None:
        logger.debug(f"RSVP ignored: attendee {attendee_id} not in hang {hang.code}")
        return None

    attendee.status = status
    session.add(attendee)
    session.commit()
    session.refresh(attendee)

    logger.info(f"RSVP {attendee.name} -> {status} for hang {hang.code}")
    return attendee


def join_hang(
    session: Session, hang_id: UUID, name: str, status: str = "going"
) -> Attendee | None:
    """
    RSVP by name.

    An attendee with the same name (case-insensitive) has their status
    overwritten; otherwise a new attendee is appended. The hang's capacity is
    not checked. Returns ``None`` for an unknown hang.
    """
    name = _require(name, "name")
    _check_status(status)

    hang = session.get(Hang, hang_id)
    if hang is None:
        logger.debug(f"Join ignored: unknown hang {hang_id}")
        return None

    attendee = next(
        (a for a in hang.attendees if a.name.casefold() == name.casefold()), None
    )
    if attendee is not None:
        attendee.status = status
    else:
        attendee = Attendee(
            hang_id=hang.id,
            name=name,
            status=status,
            position=len(hang.attendees),
        )
    session.add(attendee)
    session.commit()
    session.refresh(attendee)

    logger.info(f"{attendee.name} is {status} for hang {hang.code}")
    return attendee


def add_suggestion(
    session: Session,
    hang_id: UUID,
    category: str,
    content: str | None,
    author_name: str | None = None,
) -> Suggestion | None:
    """
    Append a suggestion with zero votes.

    Blank content and unknown hangs are no-ops returning ``None``. An unknown
    category raises ``HangValidationError``.
    """
    text = (content or "").strip()
    if not text:
        logger.debug(f"Empty suggestion ignored for hang {hang_id}")
        return None

    if category not in SUGGESTION_CATEGORIES:
        raise HangValidationError(
            f"Invalid category {category!r}, expected one of {', '.join(SUGGESTION_CATEGORIES)}"
        )

    hang = session.get(Hang, hang_id)
    if hang is None:
        logger.debug(f"Suggestion ignored: unknown hang {hang_id}")
        return None

    suggestion = Suggestion(
        hang_id=hang.id,
        content=text,
        category=category,
        votes=0,
        author_name=(author_name or "").strip() or None,
        position=max((s.position for s in hang.suggestions), default=-1) + 1,
    )
    session.add(suggestion)
    session.commit()
    session.refresh(suggestion)

    logger.info(f"Added {category} suggestion to hang {hang.code}: {text}")
    return suggestion


def vote(session: Session, suggestion_id: UUID, delta: int) -> Suggestion | None:
    """
    Add +1 or -1 to a suggestion's vote count.

    Repeat votes are not prevented here; callers keep their own per-client
    lock (see ``lets_hang.view.votes``).
    """
    if delta not in (1, -1):
        raise HangValidationError(f"Vote delta must be +1 or -1, got {delta!r}")

    suggestion = session.get(Suggestion, suggestion_id)
    if suggestion is None:
        logger.debug(f"Vote ignored: unknown suggestion {suggestion_id}")
        return None

    suggestion.votes += delta
    session.add(suggestion)
    session.commit()
    session.refresh(suggestion)
    return suggestion


def remove_suggestion(session: Session, suggestion_id: UUID) -> bool:
    """Delete a suggestion from its hang. Returns False if it did not exist."""
    suggestion = session.get(Suggestion, suggestion_id)
    if suggestion is None:
        return False

    session.delete(suggestion)
    session.commit()

    logger.info(f"Removed suggestion {suggestion_id}")
    return True


def find_past_hangs(session: Session, today: dt.date | None = None) -> list[Hang]:
    """Active hangs whose date is before ``today``."""
    today = today or dt.date.today()
    statement = (
        select(Hang)
        .where(Hang.status == "active")
        .where(Hang.date < today)
        .order_by(Hang.date)
    )
    return list(session.exec(statement).all())


def archive_past_hangs(session: Session, today: dt.date | None = None) -> int:
    """Move active hangs dated before ``today`` to "past". Returns how many moved."""
    hangs = find_past_hangs(session, today)
    for hang in hangs:
        hang.status = "past"
        session.add(hang)
    session.commit()

    if hangs:
        logger.info(f"Archived {len(hangs)} past hangs")
    return len(hangs)
