from lets_hang.models.attendee import RSVP_STATUSES, Attendee
from lets_hang.models.hang import HANG_STATUSES, Hang
from lets_hang.models.suggestion import SUGGESTION_CATEGORIES, Suggestion
from lets_hang.models.user import User

__all__ = [
    "Hang",
    "Attendee",
    "Suggestion",
    "User",
    "HANG_STATUSES",
    "RSVP_STATUSES",
    "SUGGESTION_CATEGORIES",
]
