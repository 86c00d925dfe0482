"""Invite links and share text for hangs."""
from lets_hang.models import Hang


def invite_url(hang: Hang, base_url: str) -> str:
    """Link that opens the app with this hang selected."""
    return f"{base_url.rstrip('/')}/?code={hang.code}"


def share_text(hang: Hang, base_url: str | None = None) -> str:
    """
    Message people can paste into a chat to invite friends.

    Includes the invite link when ``base_url`` is given.
    """
    lines = [
        f"\U0001F389 Join me for {hang.title}!",
        f"\U0001F4C5 {hang.date.isoformat()} at {hang.time.strftime('%H:%M')}",
        f"\U0001F4CD {hang.location}",
    ]
    if base_url:
        lines.append(f"Code {hang.code}: {invite_url(hang, base_url)}")
    return "\n".join(lines)
