from ninja.errors import HttpError
from ninja_extra import api_controller, route, status

from accounts.authentication import CurrentUserAuth
from common.schema import ResponseMessage
from common.throttling import WriteThrottle
from events import schema, tasks
from events.enums import NotificationKind
from events.types import Attendee

from .base import EventBaseController
from .permissions import IsEventCreator


@api_controller("/events/{event_id}", auth=CurrentUserAuth(), tags=["Attendance"], throttle=WriteThrottle())
class EventAttendanceController(EventBaseController):
    @route.post("/rsvp", url_name="rsvp_event", response={201: schema.AttendeeSchema})
    def rsvp(self, event_id: str) -> tuple[int, Attendee]:
        """RSVP the signed-in user.

        Rejected with 400 when the user has already RSVP'd, the event is full or the RSVP deadline has passed.
        """
        user = self.user()
        attendee = self.attendance().rsvp(event_id, user_id=user.id, name=user.name, email=user.email)
        if attendee is None:
            raise HttpError(400, "You have already RSVP'd to this event.")
        return status.HTTP_201_CREATED, attendee

    @route.post("/check-in", url_name="check_in", response=schema.AttendeeSchema)
    def check_in(self, event_id: str) -> Attendee:
        """Check the signed-in user in. Check-in opens one hour before the start."""
        attendee = self.attendance().check_in(event_id, self.user().id)
        if attendee is None:
            raise HttpError(400, "You need to RSVP before checking in.")
        return attendee

    @route.get(
        "/attendees", url_name="list_attendees", response=list[schema.AttendeeSchema], permissions=[IsEventCreator()]
    )
    def list_attendees(self, event_id: str, search: str | None = None) -> list[Attendee]:
        """Attendees of an event, optionally filtered by name or e-mail."""
        self.get_own(event_id)
        return self.attendance().search_attendees(event_id, search)

    @route.post(
        "/walk-ins", url_name="add_walk_in", response={201: schema.AttendeeSchema}, permissions=[IsEventCreator()]
    )
    def add_walk_in(self, event_id: str, payload: schema.WalkInSchema) -> tuple[int, Attendee]:
        """Register someone at the door. Walk-ins are checked in immediately and bypass capacity."""
        self.get_own(event_id)
        return status.HTTP_201_CREATED, self.attendance().add_walk_in(
            event_id, name=payload.name, email=str(payload.email)
        )

    @route.post(
        "/notify/{kind}", url_name="notify_attendees", response={202: ResponseMessage}, permissions=[IsEventCreator()]
    )
    def notify_attendees(self, event_id: str, kind: NotificationKind) -> tuple[int, ResponseMessage]:
        """Queue a check-in reminder to every attendee, or a thank-you note to those who checked in."""
        self.get_own(event_id)
        task = {
            NotificationKind.CHECK_IN_REMINDER: tasks.send_check_in_reminders,
            NotificationKind.POST_EVENT_THANKS: tasks.send_post_event_notifications,
        }[kind]
        task.delay(event_id)
        return status.HTTP_202_ACCEPTED, ResponseMessage(message="Notifications queued.")
