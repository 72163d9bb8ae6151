"""Live feedback on events and its moderation."""

import structlog
from django.utils import timezone

from common.utils import generate_id
from events.enums import FeedbackEmoji
from events.exceptions import EventNotFoundError, EventValidationError, FeedbackWindowClosedError
from events.repository import EventRepository, get_event_repository
from events.service import lifecycle
from events.types import Event, Feedback

from .event_service import Clock

logger = structlog.get_logger(__name__)


def sort_feedback(items: list[Feedback]) -> list[Feedback]:
    """Pinned items first, newest first within each group."""
    newest_first = sorted(items, key=lambda item: item.timestamp, reverse=True)
    return sorted(newest_first, key=lambda item: not item.is_pinned)


class FeedbackService:
    def __init__(self, repository: EventRepository | None = None, clock: Clock | None = None) -> None:
        self.repository = repository or get_event_repository()
        self.clock = clock or timezone.now

    def _get_event(self, event_id: str) -> Event:
        event = self.repository.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def submit_feedback(
        self,
        event_id: str,
        *,
        user_id: str,
        user_name: str,
        text: str = "",
        emoji: FeedbackEmoji | None = None,
    ) -> Feedback:
        """Post a feedback item while the event runs or during the grace period after it.

        Raises:
            EventNotFoundError: if the event does not exist.
            FeedbackWindowClosedError: outside the feedback window.
            EventValidationError: if both text and emoji are empty.
        """
        with self.repository.atomic():
            event = self._get_event(event_id)
            now = self.clock()
            if not lifecycle.is_feedback_window_open(event.start_time, event.end_time, now):
                raise FeedbackWindowClosedError

            text = text.strip()
            if not text and emoji is None:
                raise EventValidationError({"text": "Feedback needs a comment or an emoji"})

            feedback = Feedback(
                id=generate_id("feedback"),
                user_id=user_id,
                user_name=user_name,
                text=text,
                emoji=emoji,
                timestamp=now,
            )
            self.repository.save(event.model_copy(update={"feedback": [*event.feedback, feedback]}))

        logger.info("feedback_submitted", event_id=event_id, feedback_id=feedback.id, user_id=user_id)
        return feedback

    def list_feedback(self, event_id: str, *, include_flagged: bool = True) -> list[Feedback]:
        items = self._get_event(event_id).feedback
        if not include_flagged:
            items = [item for item in items if not item.is_flagged]
        return sort_feedback(items)

    def _toggle(self, event_id: str, feedback_id: str, flag: str) -> Feedback | None:
        with self.repository.atomic():
            event = self.repository.find_by_id(event_id)
            item = event.find_feedback(feedback_id) if event else None
            if event is None or item is None:
                return None
            toggled = item.model_copy(update={flag: not getattr(item, flag)})
            feedback = [toggled if f.id == feedback_id else f for f in event.feedback]
            self.repository.save(event.model_copy(update={"feedback": feedback}))
        logger.info("feedback_moderated", event_id=event_id, feedback_id=feedback_id, **{flag: getattr(toggled, flag)})
        return toggled

    def toggle_pin(self, event_id: str, feedback_id: str) -> Feedback | None:
        """Flip the pinned flag. None if the event or feedback item does not exist."""
        return self._toggle(event_id, feedback_id, "is_pinned")

    def toggle_flag(self, event_id: str, feedback_id: str) -> Feedback | None:
        """Flip the flagged flag. None if the event or feedback item does not exist."""
        return self._toggle(event_id, feedback_id, "is_flagged")
