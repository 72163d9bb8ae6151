from ninja import Schema
from pydantic import AwareDatetime, EmailStr

from common.schema import OneToOneFiftyString
from events.enums import EventStatus


class AttendeeSchema(Schema):
    id: str
    user_id: str
    name: str
    email: str
    rsvp_time: AwareDatetime
    check_in_time: AwareDatetime | None = None
    attended: bool


class WalkInSchema(Schema):
    name: OneToOneFiftyString
    email: EmailStr


class MyStatusSchema(Schema):
    """Where the current user stands with an event."""

    status: EventStatus
    is_host: bool
    has_rsvped: bool
    is_checked_in: bool
    can_rsvp: bool
    can_check_in: bool
    can_give_feedback: bool
    time_until_start: str
    duration: str
    attendee: AttendeeSchema | None = None
