import typing as t

from ninja_extra import api_controller, route, status

from accounts.authentication import CurrentUserAuth
from common.throttling import UserDefaultThrottle, WriteThrottle
from events import schema
from events.types import Event

from .base import EventBaseController
from .permissions import IsEventCreator


@api_controller("/events", auth=CurrentUserAuth(), tags=["Events"], throttle=UserDefaultThrottle())
class EventDetailsController(EventBaseController):
    @route.get("/{event_id}", url_name="get_event", response=schema.EventDetailSchema)
    def get_event(self, event_id: str) -> Event:
        return self.get_one(event_id)

    @route.put(
        "/{event_id}",
        url_name="update_event",
        response=schema.EventDetailSchema,
        permissions=[IsEventCreator()],
        throttle=WriteThrottle(),
    )
    def update_event(self, event_id: str, payload: schema.EventEditSchema) -> Event:
        """Change an event's details. Only the fields sent are updated."""
        self.get_own(event_id)
        return self.event_service().update_event(event_id, payload)

    @route.delete(
        "/{event_id}",
        url_name="delete_event",
        response={204: None},
        permissions=[IsEventCreator()],
        throttle=WriteThrottle(),
    )
    def delete_event(self, event_id: str) -> tuple[int, None]:
        """Delete an event together with its attendees and feedback."""
        self.get_own(event_id)
        self.event_service().delete_event(event_id)
        return status.HTTP_204_NO_CONTENT, None

    @route.get("/{event_id}/my-status", url_name="my_status", response=schema.MyStatusSchema)
    def my_status(self, event_id: str) -> dict[str, t.Any]:
        """The signed-in user's participation: RSVP and check-in state and what they can do next."""
        return self.attendance().participation_status(self.get_one(event_id), self.user().id)
