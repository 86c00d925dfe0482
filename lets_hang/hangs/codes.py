"""Shareable invite codes for hangs."""
import logging
import secrets
import string

from sqlmodel import Session, select

from lets_hang.core.config import settings
from lets_hang.models import Hang

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits


class CodeAllocationError(RuntimeError):
    """Raised when no unused code could be drawn."""


def generate_code(length: int | None = None) -> str:
    """Return a random uppercase alphanumeric code (six characters by default)."""
    length = length or settings.code_length
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def normalize_code(code: str | None) -> str:
    """Normalize user-typed codes: trimmed and uppercased."""
    return (code or "").strip().upper()


def allocate_code(session: Session, attempts: int | None = None) -> str:
    """
    Draw a code that no stored hang is using yet.

    Each draw is checked against the hang table. Gives up after
    ``settings.max_code_attempts`` draws, which with 36^6 codes only
    happens when the table is close to full or the generator is broken.
    """
    attempts = attempts or settings.max_code_attempts
    for attempt in range(1, attempts + 1):
        code = generate_code()
        taken = session.exec(select(Hang.id).where(Hang.code == code)).first()
        if taken is None:
            return code
        logger.warning(f"Invite code collision on attempt {attempt}: {code}")

    logger.error(f"Could not allocate an invite code after {attempts} attempts")
    raise CodeAllocationError(f"No free invite code after {attempts} attempts")
