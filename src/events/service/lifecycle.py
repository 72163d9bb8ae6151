"""Event lifecycle rules.

Status and every time window are pure functions of the current time and the
event's stored timestamps. Callers may pass `now` explicitly; otherwise the
current time is read from `django.utils.timezone.now()`.
"""

from datetime import datetime, timedelta

from django.conf import settings
from django.utils import timezone

from events.enums import EventStatus
from events.types import Event


def check_in_lead_time() -> timedelta:
    """How long before the start check-in opens."""
    return timedelta(minutes=settings.CHECK_IN_OPENS_BEFORE_MINUTES)


def feedback_grace_period() -> timedelta:
    """How long after the end feedback stays open."""
    return timedelta(hours=settings.FEEDBACK_GRACE_PERIOD_HOURS)


def derive_status(now: datetime, start: datetime, end: datetime) -> EventStatus:
    """Derive the lifecycle status of an event at `now`."""
    if now > end:
        return EventStatus.CLOSED
    if start <= now <= end:
        return EventStatus.LIVE
    return EventStatus.SCHEDULED


def is_event_live(start: datetime, end: datetime, now: datetime | None = None) -> bool:
    now = now or timezone.now()
    return start <= now <= end


def has_event_ended(end: datetime, now: datetime | None = None) -> bool:
    now = now or timezone.now()
    return now > end


def is_check_in_available(start: datetime, end: datetime, now: datetime | None = None) -> bool:
    """Check-in is open from one hour before the start until the end (both inclusive)."""
    now = now or timezone.now()
    return start - check_in_lead_time() <= now <= end


def has_check_in_opened(start: datetime, now: datetime | None = None) -> bool:
    """Whether the check-in window has opened, ignoring its end."""
    now = now or timezone.now()
    return now >= start - check_in_lead_time()


def has_rsvp_deadline_passed(deadline: datetime, now: datetime | None = None) -> bool:
    now = now or timezone.now()
    return now > deadline


def is_feedback_window_open(start: datetime, end: datetime, now: datetime | None = None) -> bool:
    """Feedback is accepted from the start until the grace period after the end elapses."""
    now = now or timezone.now()
    return start <= now <= end + feedback_grace_period()


def sync_status(event: Event, now: datetime | None = None) -> Event:
    """Return `event` with its status recomputed for `now`.

    The input is never mutated; when the stored status is already correct the
    same instance is returned.
    """
    now = now or timezone.now()
    status = derive_status(now, event.start_time, event.end_time)
    if status == event.status:
        return event
    return event.model_copy(update={"status": status})


def time_until_start(start: datetime, now: datetime | None = None) -> str:
    """Human readable countdown to the start of an event."""
    now = now or timezone.now()
    diff = start - now
    if diff <= timedelta(0):
        return "Event has started"

    days = diff.days
    hours, remainder = divmod(diff.seconds, 3600)
    minutes = remainder // 60

    if days > 0:
        return f"{days}d {hours}h until start"
    if hours > 0:
        return f"{hours}h {minutes}m until start"
    return f"{minutes}m until start"


def event_duration(start: datetime, end: datetime) -> str:
    """Human readable duration of an event, e.g. `2h 30m`."""
    total_minutes = int((end - start).total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)

    if hours > 0 and minutes > 0:
        return f"{hours}h {minutes}m"
    if hours > 0:
        return f"{hours}h"
    return f"{minutes}m"
