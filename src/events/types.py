"""Value objects persisted inside the event collection.

The whole collection is stored as one JSON document, keyed in camelCase.
Entities are rewritten wholesale on every mutation.
"""

import typing as t
from datetime import datetime

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import EventStatus, FeedbackEmoji


class StoredModel(BaseModel):
    """Base for blob-persisted models: camelCase on disk, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_storage(self) -> dict[str, t.Any]:
        """Dump to the JSON-compatible shape written to the blob."""
        return self.model_dump(mode="json", by_alias=True)


class Attendee(StoredModel):
    id: str
    user_id: str
    name: str
    email: str
    rsvp_time: AwareDatetime
    check_in_time: AwareDatetime | None = None
    attended: bool = False


class Feedback(StoredModel):
    id: str
    user_id: str
    user_name: str
    text: str = ""
    emoji: FeedbackEmoji | None = None
    timestamp: AwareDatetime
    is_pinned: bool = False
    is_flagged: bool = False


class Event(StoredModel):
    id: str
    title: str
    description: str
    start_time: AwareDatetime
    end_time: AwareDatetime
    timezone: str = "UTC"
    location: str
    is_virtual: bool = False
    rsvp_deadline: AwareDatetime
    max_attendees: int
    created_by: str
    # Last persisted value; see events.service.lifecycle.sync_status for the derived one.
    status: EventStatus = EventStatus.SCHEDULED
    attendees: list[Attendee] = Field(default_factory=list)
    feedback: list[Feedback] = Field(default_factory=list)

    def find_attendee(self, user_id: str) -> Attendee | None:
        """Return the attendee record for `user_id`, if any."""
        return next((a for a in self.attendees if a.user_id == user_id), None)

    def find_feedback(self, feedback_id: str) -> Feedback | None:
        """Return the feedback item with `feedback_id`, if any."""
        return next((f for f in self.feedback if f.id == feedback_id), None)

    def is_created_by(self, user_id: str) -> bool:
        return self.created_by == user_id


class TimelineBucket(BaseModel):
    timestamp: datetime
    count: int


class AnalyticsReport(BaseModel):
    """Attendance and feedback aggregates for one event."""

    total_rsvps: int
    total_check_ins: int
    check_in_percentage: float
    feedback_count: int
    emoji_counts: dict[str, int]
    feedback_timeline: list[TimelineBucket]
    top_emoji: FeedbackEmoji | None = None
