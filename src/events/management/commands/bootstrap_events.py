# src/events/management/commands/bootstrap_events.py

import typing as t
from datetime import datetime, timedelta

import structlog
from django.core.management.base import BaseCommand
from django.utils import timezone
from faker import Faker

from common.utils import generate_id
from events.repository import BlobEventRepository
from events.service.lifecycle import derive_status
from events.service.sample_data import build_sample_events
from events.types import Event

logger = structlog.get_logger(__name__)


class Command(BaseCommand):
    """Populate the event store with demo events.

    Does nothing when events already exist, unless --force is given.
    """

    help = "Seed the event store with sample events for local development."

    def add_arguments(self, parser: t.Any) -> None:
        parser.add_argument("--owner", default="user-demo-host", help="User id that hosts the sample events")
        parser.add_argument("--force", action="store_true", help="Replace any existing events")
        parser.add_argument("--random", type=int, default=0, help="Number of extra randomly generated events")

    def handle(self, *args: t.Any, **options: t.Any) -> None:
        repository = BlobEventRepository()
        if repository.find_all() and not options["force"]:
            self.stdout.write(self.style.WARNING("Events already exist, nothing to do. Use --force to replace them."))
            return

        now = timezone.now()
        events = build_sample_events(options["owner"], now)
        events += [self._random_event(options["owner"], now) for _ in range(options["random"])]
        repository.replace_all(events)
        logger.info("events_bootstrapped", count=len(events), owner=options["owner"])
        self.stdout.write(self.style.SUCCESS(f"Created {len(events)} events."))

    def _random_event(self, owner_id: str, now: datetime) -> Event:
        fake = Faker("en_US")
        start = now + timedelta(days=fake.random_int(-20, 40), hours=fake.random_int(0, 23))
        is_virtual = fake.boolean()
        end = start + timedelta(hours=fake.random_int(1, 6))
        return Event(
            id=generate_id("event"),
            title=fake.catch_phrase(),
            description=fake.paragraph(nb_sentences=3),
            start_time=start,
            end_time=end,
            timezone=fake.timezone(),
            location=fake.url() if is_virtual else f"{fake.company()}, {fake.city()}",
            is_virtual=is_virtual,
            rsvp_deadline=start - timedelta(days=1),
            max_attendees=fake.random_int(10, 300),
            created_by=owner_id,
            status=derive_status(now, start, end),
        )
