"""Persistence for the event collection.

The collection is a single aggregate stored as one JSON document. Every
mutation loads the whole collection, changes it and writes it back.
"""

import abc
import contextlib
import typing as t

import structlog
from django.conf import settings

from common.blob_store import BlobStore, DatabaseBlobStore

from .types import Event

logger = structlog.get_logger(__name__)


class EventRepository(abc.ABC):
    """Abstract access to the event collection."""

    @abc.abstractmethod
    def find_all(self) -> list[Event]:
        """Return every event in stored order."""

    @abc.abstractmethod
    def find_by_id(self, event_id: str) -> Event | None:
        """Return the event with `event_id`, or None."""

    @abc.abstractmethod
    def save(self, event: Event) -> Event:
        """Insert or replace `event` (matched by id)."""

    @abc.abstractmethod
    def delete(self, event_id: str) -> bool:
        """Remove an event together with its attendees and feedback.

        Returns:
            False if no event had that id.
        """

    def atomic(self) -> t.ContextManager[None]:
        """Hold the collection for a read-modify-write cycle spanning several calls."""
        return contextlib.nullcontext()


class BlobEventRepository(EventRepository):
    """Event repository over a blob store, one document for the whole collection."""

    def __init__(self, store: BlobStore | None = None, key: str | None = None) -> None:
        self.store = store or DatabaseBlobStore()
        self.key = key or settings.EVENT_STORE_KEY

    def atomic(self) -> t.ContextManager[None]:
        return self.store.atomic(self.key)

    def _load(self) -> list[Event]:
        raw = self.store.load(self.key) or []
        return [Event.model_validate(item) for item in raw]

    def _write(self, events: t.Iterable[Event]) -> None:
        self.store.save(self.key, [event.to_storage() for event in events])

    def find_all(self) -> list[Event]:
        return self._load()

    def find_by_id(self, event_id: str) -> Event | None:
        return next((event for event in self._load() if event.id == event_id), None)

    def save(self, event: Event) -> Event:
        with self.store.atomic(self.key):
            events = self._load()
            for index, existing in enumerate(events):
                if existing.id == event.id:
                    events[index] = event
                    break
            else:
                events.append(event)
            self._write(events)
        return event

    def delete(self, event_id: str) -> bool:
        with self.store.atomic(self.key):
            events = self._load()
            remaining = [event for event in events if event.id != event_id]
            if len(remaining) == len(events):
                return False
            self._write(remaining)
        logger.info("event_deleted", event_id=event_id)
        return True

    def replace_all(self, events: t.Iterable[Event]) -> None:
        """Overwrite the whole collection, e.g. when seeding sample data."""
        with self.store.atomic(self.key):
            self._write(events)


def get_event_repository() -> EventRepository:
    """The repository used by the API, backed by the database blob store."""
    return BlobEventRepository()
