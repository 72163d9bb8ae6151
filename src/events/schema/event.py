"""Event-related schemas."""

from datetime import datetime

from ninja import Schema
from pydantic import AwareDatetime, Field

from common.schema import StrippedString
from events.enums import EventStatus
from events.types import Event

from .attendance import AttendeeSchema
from .feedback import FeedbackSchema


class EventEditSchema(Schema):
    """Fields a host may change. Unset fields are left untouched on update."""

    title: StrippedString | None = None
    description: StrippedString | None = None
    start_time: datetime | None = Field(None, description="Naive values are read as UTC")
    end_time: datetime | None = Field(None, description="Naive values are read as UTC")
    timezone: str | None = Field(None, description="IANA time zone the event is presented in")
    location: StrippedString | None = Field(None, description="Venue, or the meeting link for virtual events")
    is_virtual: bool | None = None
    rsvp_deadline: datetime | None = None
    max_attendees: int | None = None


class EventCreateSchema(EventEditSchema):
    timezone: str | None = "UTC"
    is_virtual: bool | None = False


class EventSchema(Schema):
    id: str
    title: str
    description: str
    start_time: AwareDatetime
    end_time: AwareDatetime
    timezone: str
    location: str
    is_virtual: bool
    rsvp_deadline: AwareDatetime
    max_attendees: int
    created_by: str
    status: EventStatus
    attendee_count: int
    checked_in_count: int

    @staticmethod
    def resolve_attendee_count(obj: Event) -> int:
        return len(obj.attendees)

    @staticmethod
    def resolve_checked_in_count(obj: Event) -> int:
        return sum(1 for attendee in obj.attendees if attendee.attended)


class EventDetailSchema(EventSchema):
    attendees: list[AttendeeSchema]
    feedback: list[FeedbackSchema]
    time_until_start: str
    duration: str

    @staticmethod
    def resolve_time_until_start(obj: Event) -> str:
        from events.service.lifecycle import time_until_start

        return time_until_start(obj.start_time)

    @staticmethod
    def resolve_duration(obj: Event) -> str:
        from events.service.lifecycle import event_duration

        return event_duration(obj.start_time, obj.end_time)


class CalendarQuerySchema(Schema):
    week: int | None = Field(None, ge=1, le=53, description="ISO week number")
    month: int | None = Field(None, ge=1, le=12)
    year: int | None = Field(None, ge=1970, le=9999)
