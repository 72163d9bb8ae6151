"""Demo events used to populate an empty store."""

from datetime import datetime, timedelta

from django.utils import timezone

from events.enums import EventStatus, FeedbackEmoji
from events.service.lifecycle import derive_status
from events.types import Attendee, Event, Feedback


def build_sample_events(owner_id: str, now: datetime | None = None) -> list[Event]:
    """An upcoming in-person conference, an upcoming webinar and a past mixer with attendance and feedback."""
    now = now or timezone.now()
    tomorrow = now + timedelta(days=1)
    in_two_days = now + timedelta(days=2)
    last_week = now - timedelta(days=7)

    conference = Event(
        id="event-1",
        title="Tech Conference",
        description="Annual technology conference featuring the latest innovations and industry trends.",
        start_time=tomorrow,
        end_time=tomorrow + timedelta(hours=3),
        timezone="America/New_York",
        location="Convention Center, New York",
        is_virtual=False,
        rsvp_deadline=now,
        max_attendees=200,
        created_by=owner_id,
    )
    webinar = Event(
        id="event-2",
        title="Virtual Webinar: AI Trends",
        description="Learn about the latest trends in artificial intelligence and machine learning.",
        start_time=in_two_days,
        end_time=in_two_days + timedelta(hours=2),
        timezone="UTC",
        location="https://zoom.us/webinar/123",
        is_virtual=True,
        rsvp_deadline=now + timedelta(days=1, hours=12),
        max_attendees=500,
        created_by=owner_id,
    )
    mixer = Event(
        id="event-3",
        title="Past Networking Mixer",
        description="An opportunity to network with professionals in your industry.",
        start_time=last_week,
        end_time=last_week + timedelta(hours=3),
        timezone="America/Los_Angeles",
        location="Downtown Hotel, Los Angeles",
        is_virtual=False,
        rsvp_deadline=last_week - timedelta(days=2),
        max_attendees=100,
        created_by=owner_id,
        status=EventStatus.CLOSED,
        attendees=[
            Attendee(
                id="attendee-1",
                user_id="user-sample1",
                name="John Doe",
                email="john@example.com",
                rsvp_time=last_week - timedelta(days=3),
                check_in_time=last_week - timedelta(minutes=30),
                attended=True,
            ),
            Attendee(
                id="attendee-2",
                user_id="user-sample2",
                name="Jane Smith",
                email="jane@example.com",
                rsvp_time=last_week - timedelta(days=4),
                check_in_time=last_week - timedelta(minutes=15),
                attended=True,
            ),
        ],
        feedback=[
            Feedback(
                id="feedback-1",
                user_id="user-sample1",
                user_name="John Doe",
                text="Great networking opportunity!",
                emoji=FeedbackEmoji.THUMBS_UP,
                timestamp=last_week + timedelta(hours=1),
                is_pinned=True,
            ),
            Feedback(
                id="feedback-2",
                user_id="user-sample2",
                user_name="Jane Smith",
                text="Loved the speakers!",
                emoji=FeedbackEmoji.HEART,
                timestamp=last_week + timedelta(hours=1, minutes=30),
            ),
        ],
    )
    return [
        event.model_copy(update={"status": derive_status(now, event.start_time, event.end_time)})
        for event in (conference, webinar, mixer)
    ]
