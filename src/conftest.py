"""
This conftest.py provides fixtures shared by the test suites of all apps.
"""

import typing as t
from datetime import datetime, timedelta

import pytest
from django.core.cache import cache
from django.utils import timezone
from pytest import MonkeyPatch

from accounts.types import UserRecord
from common.blob_store import InMemoryBlobStore
from common.utils import generate_id
from events.repository import BlobEventRepository
from events.types import Attendee, Event


@pytest.fixture(autouse=True)
def increase_rate_limit(monkeypatch: MonkeyPatch) -> None:
    """Increase the rate limits so that tests never get throttled."""
    for throttle in ("AnonDefaultThrottle", "UserDefaultThrottle", "AuthThrottle", "WriteThrottle", "FeedbackThrottle"):
        monkeypatch.setattr(f"common.throttling.{throttle}.rate", "10000/min")


@pytest.fixture(autouse=True)
def clear_cache() -> t.Iterator[None]:
    """Throttle histories live in the cache; start every test with an empty one."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def enable_celery_eager_mode(settings: t.Any) -> None:
    """Enable Celery eager mode for tests so tasks execute synchronously."""
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True


class FixedClock:
    """A clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 6, 1, 12, 0, tzinfo=timezone.get_fixed_timezone(0))


@pytest.fixture
def clock(now: datetime) -> FixedClock:
    return FixedClock(now)


@pytest.fixture
def repository() -> BlobEventRepository:
    """An event repository kept in memory."""
    return BlobEventRepository(store=InMemoryBlobStore(), key="test_events")


class RecordingNotifier:
    """Notifier that records what would have been sent."""

    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.sent: list[tuple[str, str, str]] = []

    def _record(self, kind: str, event: Event, attendee: Attendee) -> bool:
        self.sent.append((kind, event.id, attendee.email))
        return self.succeed

    def send_rsvp_confirmation(self, event: Event, attendee: Attendee) -> bool:
        return self._record("rsvp_confirmation", event, attendee)

    def send_check_in_reminder(self, event: Event, attendee: Attendee) -> bool:
        return self._record("check_in_reminder", event, attendee)

    def send_post_event_thank_you(self, event: Event, attendee: Attendee) -> bool:
        return self._record("post_event_thank_you", event, attendee)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def host_user() -> UserRecord:
    return UserRecord(id="user-host001", email="host@example.com", name="host", role="host")


@pytest.fixture
def attendee_user() -> UserRecord:
    return UserRecord(id="user-guest01", email="guest@example.com", name="Guest", role="attendee")


class EventFactory:
    """Builds events relative to a reference time and stores them."""

    def __init__(self, repository: BlobEventRepository, now: datetime, owner_id: str) -> None:
        self.repository = repository
        self.now = now
        self.owner_id = owner_id

    def build(self, **kwargs: t.Any) -> Event:
        start = kwargs.pop("start_time", self.now + timedelta(days=1))
        defaults: dict[str, t.Any] = {
            "id": generate_id("event"),
            "title": "Community Meetup",
            "description": "Talks and drinks.",
            "start_time": start,
            "end_time": kwargs.pop("end_time", start + timedelta(hours=2)),
            "location": "Town Hall",
            "rsvp_deadline": kwargs.pop("rsvp_deadline", start - timedelta(hours=1)),
            "max_attendees": 10,
            "created_by": self.owner_id,
        }
        return Event(**(defaults | kwargs))

    def __call__(self, **kwargs: t.Any) -> Event:
        return self.repository.save(self.build(**kwargs))


@pytest.fixture
def event_factory(repository: BlobEventRepository, now: datetime, host_user: UserRecord) -> EventFactory:
    return EventFactory(repository, now, host_user.id)


def _build_attendee(name: str = "Ada", *, rsvp_time: datetime, attended: bool = False, **kwargs: t.Any) -> Attendee:
    return Attendee(
        id=kwargs.pop("id", generate_id("attendee")),
        user_id=kwargs.pop("user_id", generate_id("user")),
        name=name,
        email=kwargs.pop("email", f"{name.lower()}@example.com"),
        rsvp_time=rsvp_time,
        check_in_time=rsvp_time if attended else None,
        attended=attended,
        **kwargs,
    )


@pytest.fixture
def make_attendee() -> t.Callable[..., Attendee]:
    """Build an attendee record for seeding events."""
    return _build_attendee
