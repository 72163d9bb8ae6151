"""RSVPs, check-ins and walk-in registrations."""

import typing as t

import structlog
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.utils import timezone

from common.utils import generate_id
from events.exceptions import (
    CheckInNotOpenError,
    EventFullError,
    EventNotFoundError,
    EventValidationError,
    RSVPDeadlinePassedError,
)
from events.repository import EventRepository, get_event_repository
from events.service import lifecycle
from events.service.notification_service import EmailNotifier, Notifier
from events.types import Attendee, Event

from .event_service import Clock

logger = structlog.get_logger(__name__)


class AttendanceManager:
    """Handles attendance for events.

    Every rule is checked against the clock and the event as stored at the time
    of the call; the collection is held for the whole read-modify-write cycle.
    Notifications are sent once the change is persisted and never affect the
    outcome.
    """

    def __init__(
        self,
        repository: EventRepository | None = None,
        notifier: Notifier | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.repository = repository or get_event_repository()
        self.notifier = notifier or EmailNotifier()
        self.clock = clock or timezone.now

    def _get_event(self, event_id: str) -> Event:
        event = self.repository.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def _assert_capacity(self, event: Event) -> None:
        if len(event.attendees) >= event.max_attendees:
            raise EventFullError

    def _assert_rsvp_deadline(self, event: Event) -> None:
        if lifecycle.has_rsvp_deadline_passed(event.rsvp_deadline, self.clock()):
            raise RSVPDeadlinePassedError

    def rsvp(self, event_id: str, *, user_id: str, name: str, email: str) -> Attendee | None:
        """Register a user for an event.

        Returns:
            The new attendee, or None if the user had already RSVP'd.

        Raises:
            EventNotFoundError: if the event does not exist.
            EventFullError: if the event is at capacity.
            RSVPDeadlinePassedError: if the RSVP deadline has passed.
        """
        with self.repository.atomic():
            event = self._get_event(event_id)
            if event.find_attendee(user_id):
                logger.info("rsvp_duplicate", event_id=event_id, user_id=user_id)
                return None
            self._assert_capacity(event)
            self._assert_rsvp_deadline(event)

            attendee = Attendee(
                id=generate_id("attendee"),
                user_id=user_id,
                name=name,
                email=email,
                rsvp_time=self.clock(),
            )
            event = event.model_copy(update={"attendees": [*event.attendees, attendee]})
            self.repository.save(event)

        logger.info("rsvp_created", event_id=event_id, user_id=user_id, attendee_id=attendee.id)
        self.notifier.send_rsvp_confirmation(event, attendee)
        return attendee

    def check_in(self, event_id: str, user_id: str) -> Attendee | None:
        """Mark an attendee as present.

        Checking in again is allowed and moves the check-in time forward.

        Returns:
            The updated attendee, or None if the user never RSVP'd.

        Raises:
            EventNotFoundError: if the event does not exist.
            CheckInNotOpenError: if check-in has not opened yet.
        """
        with self.repository.atomic():
            event = self._get_event(event_id)
            attendee = event.find_attendee(user_id)
            if attendee is None:
                logger.info("check_in_without_rsvp", event_id=event_id, user_id=user_id)
                return None
            now = self.clock()
            if not lifecycle.has_check_in_opened(event.start_time, now):
                raise CheckInNotOpenError

            checked_in = attendee.model_copy(update={"attended": True, "check_in_time": now})
            attendees = [checked_in if a.id == attendee.id else a for a in event.attendees]
            event = event.model_copy(update={"attendees": attendees})
            self.repository.save(event)

        logger.info("attendee_checked_in", event_id=event_id, user_id=user_id, attendee_id=attendee.id)
        self.notifier.send_check_in_reminder(event, checked_in)
        return checked_in

    def add_walk_in(self, event_id: str, *, name: str, email: str) -> Attendee:
        """Register someone at the door, already checked in.

        Walk-ins bypass the capacity limit and the RSVP deadline.

        Raises:
            EventNotFoundError: if the event does not exist.
            EventValidationError: if the name or e-mail address is missing or malformed.
        """
        name, email = name.strip(), email.strip()
        errors: dict[str, str] = {}
        if not name:
            errors["name"] = "Name is required"
        try:
            validate_email(email)
        except DjangoValidationError:
            errors["email"] = "Enter a valid email address"
        if errors:
            raise EventValidationError(errors)

        with self.repository.atomic():
            event = self._get_event(event_id)
            now = self.clock()
            attendee = Attendee(
                id=generate_id("attendee"),
                user_id=generate_id("walkin"),
                name=name,
                email=email,
                rsvp_time=now,
                check_in_time=now,
                attended=True,
            )
            event = event.model_copy(update={"attendees": [*event.attendees, attendee]})
            self.repository.save(event)

        logger.info("walk_in_added", event_id=event_id, attendee_id=attendee.id)
        return attendee

    def search_attendees(self, event_id: str, search: str | None = None) -> list[Attendee]:
        """Attendees whose name or e-mail contains `search`, case-insensitively."""
        attendees: t.Iterable[Attendee] = self._get_event(event_id).attendees
        if search and (needle := search.strip().casefold()):
            attendees = (a for a in attendees if needle in a.name.casefold() or needle in a.email.casefold())
        return list(attendees)

    def participation_status(self, event: Event, user_id: str) -> dict[str, t.Any]:
        """Where `user_id` stands with `event` right now: what they did and what they can do next."""
        now = self.clock()
        attendee = event.find_attendee(user_id)
        return {
            "status": lifecycle.derive_status(now, event.start_time, event.end_time),
            "is_host": event.is_created_by(user_id),
            "has_rsvped": attendee is not None,
            "is_checked_in": bool(attendee and attendee.attended),
            "can_rsvp": attendee is None
            and len(event.attendees) < event.max_attendees
            and not lifecycle.has_rsvp_deadline_passed(event.rsvp_deadline, now),
            "can_check_in": attendee is not None
            and lifecycle.is_check_in_available(event.start_time, event.end_time, now),
            "can_give_feedback": lifecycle.is_feedback_window_open(event.start_time, event.end_time, now),
            "time_until_start": lifecycle.time_until_start(event.start_time, now),
            "duration": lifecycle.event_duration(event.start_time, event.end_time),
            "attendee": attendee,
        }
