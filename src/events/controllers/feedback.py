from ninja_extra import api_controller, route, status

from accounts.authentication import CurrentUserAuth
from common.throttling import FeedbackThrottle, UserDefaultThrottle
from events import schema
from events.exceptions import FeedbackNotFoundError
from events.service.analytics import compute_analytics
from events.types import AnalyticsReport, Feedback

from .base import EventBaseController
from .permissions import IsEventCreator


@api_controller("/events/{event_id}", auth=CurrentUserAuth(), tags=["Feedback"], throttle=UserDefaultThrottle())
class EventFeedbackController(EventBaseController):
    @route.get("/feedback", url_name="list_feedback", response=list[schema.FeedbackSchema])
    def list_feedback(self, event_id: str) -> list[Feedback]:
        """The feedback stream, pinned items first and then newest first.

        Flagged items are only shown to the event creator.
        """
        event = self.get_one(event_id)
        return self.feedback_service().list_feedback(event_id, include_flagged=event.is_created_by(self.user().id))

    @route.post(
        "/feedback", url_name="submit_feedback", response={201: schema.FeedbackSchema}, throttle=FeedbackThrottle()
    )
    def submit_feedback(self, event_id: str, payload: schema.FeedbackCreateSchema) -> tuple[int, Feedback]:
        """Post a comment, an emoji or both while the event runs or up to 24 hours after it ends."""
        user = self.user()
        feedback = self.feedback_service().submit_feedback(
            event_id, user_id=user.id, user_name=user.name, text=payload.text, emoji=payload.emoji
        )
        return status.HTTP_201_CREATED, feedback

    @route.post(
        "/feedback/{feedback_id}/pin",
        url_name="toggle_feedback_pin",
        response=schema.FeedbackSchema,
        permissions=[IsEventCreator()],
    )
    def toggle_pin(self, event_id: str, feedback_id: str) -> Feedback:
        self.get_own(event_id)
        if (feedback := self.feedback_service().toggle_pin(event_id, feedback_id)) is None:
            raise FeedbackNotFoundError(feedback_id)
        return feedback

    @route.post(
        "/feedback/{feedback_id}/flag",
        url_name="toggle_feedback_flag",
        response=schema.FeedbackSchema,
        permissions=[IsEventCreator()],
    )
    def toggle_flag(self, event_id: str, feedback_id: str) -> Feedback:
        self.get_own(event_id)
        if (feedback := self.feedback_service().toggle_flag(event_id, feedback_id)) is None:
            raise FeedbackNotFoundError(feedback_id)
        return feedback

    @route.get(
        "/analytics", url_name="event_analytics", response=schema.AnalyticsSchema, permissions=[IsEventCreator()]
    )
    def analytics(self, event_id: str) -> AnalyticsReport:
        """Attendance and feedback figures: check-in rate, emoji counts and an hourly feedback timeline."""
        return compute_analytics(self.get_own(event_id))
