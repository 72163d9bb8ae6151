"""Celery tasks for the events app."""

import structlog
from celery import shared_task

from events.enums import NotificationKind
from events.repository import get_event_repository
from events.service.notification_service import notify_attendees

logger = structlog.get_logger(__name__)


def _notify(event_id: str, kind: NotificationKind) -> int:
    event = get_event_repository().find_by_id(event_id)
    if event is None:
        logger.warning("notification_event_missing", event_id=event_id, kind=kind.value)
        return 0
    return notify_attendees(event, kind)


@shared_task
def send_post_event_notifications(event_id: str) -> int:
    """Thank everyone who checked in to an event. Returns the number of e-mails delivered."""
    return _notify(event_id, NotificationKind.POST_EVENT_THANKS)


@shared_task
def send_check_in_reminders(event_id: str) -> int:
    """Remind everyone who RSVP'd that check-in is open. Returns the number of e-mails delivered."""
    return _notify(event_id, NotificationKind.CHECK_IN_REMINDER)
