from .attendance import EventAttendanceController
from .details import EventDetailsController
from .discovery import EventDiscoveryController
from .feedback import EventFeedbackController

# Controllers in order to preserve path resolution.
# Non-event_id routes (discovery) MUST come first to avoid being matched
# by the /{event_id} catch-all pattern.
EVENT_CONTROLLERS: list[type] = [
    EventDiscoveryController,  # /, /hosting, /attending, /calendar
    EventDetailsController,  # /{event_id}, /{event_id}/my-status
    EventAttendanceController,  # /{event_id}/rsvp, check-in, attendees, walk-ins, notify
    EventFeedbackController,  # /{event_id}/feedback/..., analytics
]

__all__ = [
    "EventAttendanceController",
    "EventDetailsController",
    "EventDiscoveryController",
    "EventFeedbackController",
    "EVENT_CONTROLLERS",
]
