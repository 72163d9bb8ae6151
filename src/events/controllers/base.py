from common.controllers import UserAwareController
from events.service.attendance_service import AttendanceManager
from events.service.event_service import EventService
from events.service.feedback_service import FeedbackService
from events.types import Event


class EventBaseController(UserAwareController):
    """Base controller for event endpoints.

    Subclasses should be decorated with @api_controller to register routes.
    """

    def event_service(self) -> EventService:
        return EventService()

    def attendance(self) -> AttendanceManager:
        return AttendanceManager()

    def feedback_service(self) -> FeedbackService:
        return FeedbackService()

    def get_one(self, event_id: str) -> Event:
        """Fetch an event with its status brought up to date; 404 if it does not exist."""
        return self.event_service().get_event_by_id(event_id)

    def get_own(self, event_id: str) -> Event:
        """Fetch an event and check the route's object permissions against it."""
        event = self.get_one(event_id)
        self.check_object_permissions(event)
        return event
