from ninja import Query
from ninja_extra import api_controller, route, status

from accounts.authentication import CurrentUserAuth
from common.throttling import UserDefaultThrottle, WriteThrottle
from events import schema
from events.enums import EventStatus
from events.service.calendar_utils import calculate_calendar_date_range
from events.types import Event

from .base import EventBaseController
from .permissions import IsHost


@api_controller("/events", auth=CurrentUserAuth(), tags=["Events"], throttle=UserDefaultThrottle())
class EventDiscoveryController(EventBaseController):
    """Listings, event creation and other routes without an event id.

    Registered before the /{event_id} routes so that these paths are matched first.
    """

    @route.get("/", url_name="list_events", response=list[schema.EventSchema])
    def list_events(self, include_past: bool = True) -> list[Event]:
        """All events, soonest first. Set include_past=false to hide closed events."""
        events = self.event_service().get_all_events()
        if not include_past:
            events = [event for event in events if event.status != EventStatus.CLOSED]
        return events

    @route.post(
        "/",
        url_name="create_event",
        response={201: schema.EventDetailSchema},
        permissions=[IsHost()],
        throttle=WriteThrottle(),
    )
    def create_event(self, payload: schema.EventCreateSchema) -> tuple[int, Event]:
        """Create an event hosted by the signed-in user.

        Returns 400 with field errors when a required field is missing, the end is not after the
        start, or the RSVP deadline is not before the start.
        """
        return status.HTTP_201_CREATED, self.event_service().create_event(payload, created_by=self.user().id)

    @route.get("/hosting", url_name="hosted_events", response=list[schema.EventSchema])
    def hosted_events(self) -> list[Event]:
        """Events created by the signed-in user."""
        return self.event_service().get_hosted_events(self.user().id)

    @route.get("/attending", url_name="attending_events", response=list[schema.EventSchema])
    def attending_events(self) -> list[Event]:
        """Events the signed-in user has RSVP'd to or was checked into."""
        return self.event_service().get_attending_events(self.user().id)

    @route.get("/calendar", url_name="calendar_events", response=list[schema.EventSchema])
    def calendar_events(self, params: schema.CalendarQuerySchema = Query(...)) -> list[Event]:  # type: ignore[type-arg]
        """Events overlapping a calendar range.

        Priority: week > month > year; without parameters the current month is used.
        """
        start, end = calculate_calendar_date_range(week=params.week, month=params.month, year=params.year)
        return self.event_service().get_events_in_range(start, end)
