"""Enums shared across the events app."""

from enum import StrEnum

from django.utils.translation import gettext_noop


class EventStatus(StrEnum):
    """Lifecycle status of an event, always derived from the clock."""

    SCHEDULED = "scheduled"
    LIVE = "live"
    CLOSED = "closed"


class FeedbackEmoji(StrEnum):
    """The fixed set of emoji reactions accepted as feedback."""

    THUMBS_UP = "👍"
    THUMBS_DOWN = "👎"
    HEART = "❤️"
    SURPRISED = "😮"


class NotificationKind(StrEnum):
    """Bulk notifications a host can send to an event's attendees."""

    CHECK_IN_REMINDER = "checkin_reminder"
    POST_EVENT_THANKS = "post_event_thanks"


class Reasons(StrEnum):
    """Reasons why an attendance or feedback action is rejected.

    Note: Strings are marked with _noop() for translation extraction.
    """

    EVENT_IS_FULL = gettext_noop("This event has reached maximum capacity.")
    RSVP_DEADLINE_PASSED = gettext_noop("The RSVP deadline has passed.")
    CHECK_IN_NOT_OPEN = gettext_noop("Check-in is not yet available. It opens 1 hour before the event starts.")
    FEEDBACK_WINDOW_CLOSED = gettext_noop(
        "Feedback can only be submitted during the event or within 24 hours after it ends."
    )
