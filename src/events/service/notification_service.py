"""E-mail notifications sent to attendees.

Delivery is best effort: a failed send is logged and reported as False, it
never undoes or fails the mutation that triggered it.
"""

import smtplib
import typing as t

import structlog
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string

from events.enums import NotificationKind
from events.exceptions import NotificationFailure
from events.service.lifecycle import event_duration
from events.types import Attendee, Event

logger = structlog.get_logger(__name__)


class Notifier(t.Protocol):
    """Protocol for attendee notification channels."""

    def send_rsvp_confirmation(self, event: Event, attendee: Attendee) -> bool:
        """Confirm a new RSVP (or walk-in registration) to the attendee."""
        ...

    def send_check_in_reminder(self, event: Event, attendee: Attendee) -> bool:
        """Remind an attendee that check-in is open."""
        ...

    def send_post_event_thank_you(self, event: Event, attendee: Attendee) -> bool:
        """Thank an attendee for coming and invite feedback."""
        ...


def event_url(event: Event) -> str:
    return f"{settings.FRONTEND_BASE_URL.rstrip('/')}/events/{event.id}"


class EmailNotifier:
    """Notifier that renders templates and sends them through Django's mail backend."""

    subjects: t.ClassVar[dict[str, str]] = {
        "rsvp_confirmation": "You're confirmed for {title}",
        "check_in_reminder": "Check-in now open for {title}",
        "post_event_thank_you": "Thanks for attending {title}!",
    }

    def _deliver(self, template: str, event: Event, attendee: Attendee) -> None:
        context = {
            "event": event,
            "attendee": attendee,
            "event_url": event_url(event),
            "duration": event_duration(event.start_time, event.end_time),
            "site_name": settings.SITE_NAME,
        }
        subject = self.subjects[template].format(title=event.title)
        body = render_to_string(f"events/emails/{template}.txt", context)
        html_body = render_to_string(f"events/emails/{template}.html", context)
        email_msg = EmailMultiAlternatives(
            subject=subject,
            body=body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[attendee.email],
        )
        email_msg.attach_alternative(html_body, "text/html")
        try:
            email_msg.send(fail_silently=False)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationFailure(f"Could not send {template} to {attendee.email}") from e

    def _send(self, template: str, event: Event, attendee: Attendee) -> bool:
        try:
            self._deliver(template, event, attendee)
        except NotificationFailure:
            logger.warning(
                "notification_failed",
                template=template,
                event_id=event.id,
                attendee_id=attendee.id,
                exc_info=True,
            )
            return False
        logger.info("notification_sent", template=template, event_id=event.id, attendee_id=attendee.id)
        return True

    def send_rsvp_confirmation(self, event: Event, attendee: Attendee) -> bool:
        return self._send("rsvp_confirmation", event, attendee)

    def send_check_in_reminder(self, event: Event, attendee: Attendee) -> bool:
        return self._send("check_in_reminder", event, attendee)

    def send_post_event_thank_you(self, event: Event, attendee: Attendee) -> bool:
        return self._send("post_event_thank_you", event, attendee)


def recipients_for(event: Event, kind: NotificationKind) -> list[Attendee]:
    """Attendees addressed by a bulk notification.

    Check-in reminders go to everyone who RSVP'd, thank-you notes only to those
    who checked in.
    """
    if kind == NotificationKind.POST_EVENT_THANKS:
        return [attendee for attendee in event.attendees if attendee.attended]
    return list(event.attendees)


def notify_attendees(event: Event, kind: NotificationKind, notifier: Notifier | None = None) -> int:
    """Send a bulk notification to the attendees of `event`.

    Returns:
        The number of notifications actually delivered.
    """
    notifier = notifier or EmailNotifier()
    send = {
        NotificationKind.CHECK_IN_REMINDER: notifier.send_check_in_reminder,
        NotificationKind.POST_EVENT_THANKS: notifier.send_post_event_thank_you,
    }[kind]
    recipients = recipients_for(event, kind)
    delivered = sum(1 for attendee in recipients if send(event, attendee))
    logger.info(
        "bulk_notification_sent",
        kind=kind.value,
        event_id=event.id,
        recipients=len(recipients),
        delivered=delivered,
    )
    return delivered
