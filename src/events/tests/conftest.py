"""
This conftest.py provides fixtures for the events API tests.
"""

import typing as t

import pytest
from django.test.client import Client

from accounts.types import UserRecord
from common.blob_store import DatabaseBlobStore
from conftest import EventFactory
from events.repository import BlobEventRepository, get_event_repository


@pytest.fixture
def db_repository() -> BlobEventRepository:
    return t.cast(BlobEventRepository, get_event_repository())


@pytest.fixture
def db_event_factory(db_repository: BlobEventRepository, event_factory: EventFactory) -> EventFactory:
    """Like event_factory, but storing events where the API reads them."""
    event_factory.repository = db_repository
    return event_factory


@pytest.fixture
def sign_in(settings: t.Any) -> t.Callable[[UserRecord], None]:
    """Make `user` the signed-in user for subsequent requests."""

    def _sign_in(user: UserRecord) -> None:
        DatabaseBlobStore().save(settings.USER_STORE_KEY, user.model_dump(mode="json"))

    return _sign_in


@pytest.fixture
def host_client(host_user: UserRecord, sign_in: t.Callable[[UserRecord], None]) -> Client:
    sign_in(host_user)
    return Client()


@pytest.fixture
def attendee_client(attendee_user: UserRecord, sign_in: t.Callable[[UserRecord], None]) -> Client:
    sign_in(attendee_user)
    return Client()
