"""Event lookups and host-side event management."""

import typing as t
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog
from django.utils import timezone
from kombu.exceptions import OperationalError
from pydantic import BaseModel

from common.utils import generate_id
from events.enums import EventStatus
from events.exceptions import EventNotFoundError, EventValidationError
from events.repository import EventRepository, get_event_repository
from events.service import lifecycle
from events.types import Event

logger = structlog.get_logger(__name__)

Clock = t.Callable[[], datetime]

EDITABLE_FIELDS = (
    "title",
    "description",
    "start_time",
    "end_time",
    "timezone",
    "location",
    "is_virtual",
    "rsvp_deadline",
    "max_attendees",
)
PROTECTED_FIELDS = frozenset({"id", "created_by", "attendees", "feedback", "status"})


def _as_aware(value: t.Any) -> t.Any:
    if isinstance(value, datetime) and timezone.is_naive(value):
        return timezone.make_aware(value, ZoneInfo("UTC"))
    return value


def validate_event_fields(data: dict[str, t.Any]) -> dict[str, t.Any]:
    """Validate a full set of editable event fields.

    Naive datetimes are read as UTC. Returns the normalised data.

    Raises:
        EventValidationError: mapping each failing field to its message.
    """
    data = {key: _as_aware(value) for key, value in data.items()}
    errors: dict[str, str] = {}

    if not data.get("title"):
        errors["title"] = "Title is required"
    if not data.get("description"):
        errors["description"] = "Description is required"
    if not data.get("start_time"):
        errors["start_time"] = "Event start and end times are required"
    if not data.get("end_time"):
        errors["end_time"] = "Event start and end times are required"
    if not data.get("rsvp_deadline"):
        errors["rsvp_deadline"] = "RSVP deadline is required"
    if not data.get("location"):
        errors["location"] = "Virtual meeting link is required" if data.get("is_virtual") else "Location is required"

    max_attendees = data.get("max_attendees")
    if isinstance(max_attendees, bool) or not isinstance(max_attendees, int) or max_attendees < 1:
        errors["max_attendees"] = "Maximum attendees must be a positive number"

    try:
        ZoneInfo(data.get("timezone") or "UTC")
    except (ZoneInfoNotFoundError, ValueError):
        errors["timezone"] = "Unknown time zone"

    start, end, deadline = data.get("start_time"), data.get("end_time"), data.get("rsvp_deadline")
    if start and end and end <= start:
        errors["end_time"] = "End time must be after start time"
    if start and deadline and deadline >= start:
        errors["rsvp_deadline"] = "RSVP deadline must be before the event starts"

    if errors:
        raise EventValidationError(errors)
    data["timezone"] = data.get("timezone") or "UTC"
    data["is_virtual"] = bool(data.get("is_virtual"))
    return data


def _payload_dict(payload: BaseModel | dict[str, t.Any], *, exclude_unset: bool) -> dict[str, t.Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(exclude_unset=exclude_unset)
    return dict(payload)


class EventService:
    """Reads events with their status kept in line with the clock, and manages them for hosts."""

    def __init__(self, repository: EventRepository | None = None, clock: Clock | None = None) -> None:
        self.repository = repository or get_event_repository()
        self.clock = clock or timezone.now

    def refresh_status(self, event: Event) -> Event:
        """Bring the stored status in line with the clock.

        `event` is only used to decide whether a write is needed. The write itself
        re-reads the event under the collection lock, so changes committed since
        `event` was loaded are kept.
        """
        now = self.clock()
        if lifecycle.derive_status(now, event.start_time, event.end_time) == event.status:
            return event
        with self.repository.atomic():
            fresh = self.repository.find_by_id(event.id)
            if fresh is None:
                return event
            synced = lifecycle.sync_status(fresh, now)
            if synced is not fresh:
                self.repository.save(synced)
        if synced is not fresh:
            self._on_status_changed(fresh, synced)
        return synced

    def _refresh_all(self) -> list[Event]:
        events = self.repository.find_all()
        now = self.clock()
        if all(lifecycle.sync_status(event, now) is event for event in events):
            return events
        changed: list[tuple[Event, Event]] = []
        with self.repository.atomic():
            events = self.repository.find_all()
            for index, event in enumerate(events):
                synced = lifecycle.sync_status(event, now)
                if synced is not event:
                    self.repository.save(synced)
                    changed.append((event, synced))
                    events[index] = synced
        for previous, synced in changed:
            self._on_status_changed(previous, synced)
        return events

    def _on_status_changed(self, previous: Event, current: Event) -> None:
        """Side effects of a persisted status transition, whichever path caused it.

        An event that just closed with checked-in attendees gets its thank-you notes queued.
        """
        logger.info("event_status_changed", event_id=current.id, previous=previous.status, status=current.status)
        if current.status == EventStatus.CLOSED and any(a.attended for a in current.attendees):
            self._queue_post_event_notifications(current)

    def _queue_post_event_notifications(self, event: Event) -> None:
        from events.tasks import send_post_event_notifications

        try:
            send_post_event_notifications.delay(event.id)
        except OperationalError:
            logger.exception("post_event_notifications_not_queued", event_id=event.id)

    def get_event_by_id(self, event_id: str) -> Event:
        """Fetch one event with an up to date status.

        Raises:
            EventNotFoundError: if no event has that id.
        """
        event = self.repository.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return self.refresh_status(event)

    def get_all_events(self) -> list[Event]:
        """Every event, soonest first."""
        events = self._refresh_all()
        return sorted(events, key=lambda event: event.start_time)

    def get_hosted_events(self, user_id: str) -> list[Event]:
        return [event for event in self.get_all_events() if event.is_created_by(user_id)]

    def get_attending_events(self, user_id: str) -> list[Event]:
        return [event for event in self.get_all_events() if event.find_attendee(user_id)]

    def get_events_in_range(self, start: datetime, end: datetime) -> list[Event]:
        """Events overlapping the half-open interval [start, end)."""
        return [event for event in self.get_all_events() if event.start_time < end and event.end_time >= start]

    def create_event(self, payload: BaseModel | dict[str, t.Any], created_by: str) -> Event:
        """Validate and store a new event owned by `created_by`.

        Raises:
            EventValidationError: if any field is missing or inconsistent.
        """
        data = _payload_dict(payload, exclude_unset=False)
        fields = validate_event_fields({name: data.get(name) for name in EDITABLE_FIELDS})
        event = Event(
            id=generate_id("event"),
            created_by=created_by,
            status=lifecycle.derive_status(self.clock(), fields["start_time"], fields["end_time"]),
            **fields,
        )
        self.repository.save(event)
        logger.info("event_created", event_id=event.id, created_by=created_by)
        return event

    def update_event(self, event_id: str, changes: BaseModel | dict[str, t.Any]) -> Event:
        """Apply a partial update to an event.

        Identity, ownership, attendees, feedback and status cannot be changed
        here; such keys are dropped.

        Raises:
            EventNotFoundError: if no event has that id.
            EventValidationError: if the merged event is invalid.
        """
        data = _payload_dict(changes, exclude_unset=True)
        dropped = sorted(PROTECTED_FIELDS.intersection(data))
        if dropped:
            logger.debug("event_update_fields_dropped", event_id=event_id, fields=dropped)
        updates = {key: value for key, value in data.items() if key in EDITABLE_FIELDS}

        with self.repository.atomic():
            event = self.repository.find_by_id(event_id)
            if event is None:
                raise EventNotFoundError(event_id)
            merged = {name: getattr(event, name) for name in EDITABLE_FIELDS} | updates
            fields = validate_event_fields(merged)
            fields["status"] = lifecycle.derive_status(self.clock(), fields["start_time"], fields["end_time"])
            updated = event.model_copy(update=fields)
            self.repository.save(updated)
        logger.info("event_updated", event_id=event_id, fields=sorted(updates))
        if updated.status != event.status:
            self._on_status_changed(event, updated)
        return updated

    def delete_event(self, event_id: str) -> bool:
        """Remove an event with its attendees and feedback. False if it did not exist."""
        return self.repository.delete(event_id)
