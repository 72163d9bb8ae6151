from django.core.exceptions import ValidationError as DjangoValidationError

from .enums import Reasons


class EventValidationError(DjangoValidationError):
    """Raised when an event, walk-in or feedback payload fails validation.

    Always built from a field -> message(s) mapping so the API can report
    field-level errors.
    """


class BusinessRuleViolation(Exception):
    """Raised when a well-formed request is rejected by an event rule."""

    reason: Reasons

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or str(self.reason))


class EventFullError(BusinessRuleViolation):
    """Raised when an RSVP would exceed the event's capacity."""

    reason = Reasons.EVENT_IS_FULL


class RSVPDeadlinePassedError(BusinessRuleViolation):
    """Raised when an RSVP arrives after the RSVP deadline."""

    reason = Reasons.RSVP_DEADLINE_PASSED


class CheckInNotOpenError(BusinessRuleViolation):
    """Raised when a check-in arrives before the check-in window opens."""

    reason = Reasons.CHECK_IN_NOT_OPEN


class FeedbackWindowClosedError(BusinessRuleViolation):
    """Raised when feedback arrives outside the event and its grace period."""

    reason = Reasons.FEEDBACK_WINDOW_CLOSED


class EventNotFoundError(Exception):
    """Raised when an event id does not exist."""

    def __init__(self, event_id: str) -> None:
        super().__init__(f"Event {event_id} not found.")
        self.event_id = event_id


class FeedbackNotFoundError(Exception):
    """Raised when a feedback id does not exist on an event."""

    def __init__(self, feedback_id: str) -> None:
        super().__init__(f"Feedback {feedback_id} not found.")
        self.feedback_id = feedback_id


class NotificationFailure(Exception):
    """Raised when an e-mail notification cannot be delivered.

    Never propagated past the notifier: the triggering mutation already succeeded.
    """
