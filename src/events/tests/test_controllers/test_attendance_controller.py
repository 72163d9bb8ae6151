"""Tests for RSVP, check-in, walk-in and notification endpoints."""

import typing as t
from datetime import datetime, timedelta

import pytest
from django.core import mail
from django.test.client import Client
from django.urls import reverse
from pytest import MonkeyPatch

from accounts.types import UserRecord
from conftest import EventFactory
from events.repository import BlobEventRepository
from events.types import Attendee

pytestmark = pytest.mark.django_db


class TestRSVP:
    def test_rsvp_creates_attendee_and_confirms_by_email(
        self,
        attendee_client: Client,
        attendee_user: UserRecord,
        db_event_factory: EventFactory,
        db_repository: BlobEventRepository,
    ) -> None:
        event = db_event_factory()

        response = attendee_client.post(reverse("api:rsvp_event", kwargs={"event_id": event.id}))

        assert response.status_code == 201, response.content
        data = response.json()
        assert data["user_id"] == attendee_user.id
        assert data["email"] == attendee_user.email
        assert data["attended"] is False
        stored = db_repository.find_by_id(event.id)
        assert stored is not None
        assert [a.user_id for a in stored.attendees] == [attendee_user.id]
        assert len(mail.outbox) == 1
        assert mail.outbox[0].subject == f"You're confirmed for {event.title}"
        assert mail.outbox[0].to == [attendee_user.email]

    def test_second_rsvp_is_rejected(self, attendee_client: Client, db_event_factory: EventFactory) -> None:
        event = db_event_factory()
        url = reverse("api:rsvp_event", kwargs={"event_id": event.id})
        attendee_client.post(url)

        response = attendee_client.post(url)

        assert response.status_code == 400
        assert response.json()["detail"] == "You have already RSVP'd to this event."
        assert len(mail.outbox) == 1

    def test_full_event(
        self,
        attendee_client: Client,
        db_event_factory: EventFactory,
        make_attendee: t.Callable[..., Attendee],
        now: datetime,
    ) -> None:
        event = db_event_factory(max_attendees=1, attendees=[make_attendee("Ada", rsvp_time=now)])

        response = attendee_client.post(reverse("api:rsvp_event", kwargs={"event_id": event.id}))

        assert response.status_code == 400
        assert response.json()["reason"] == "event_is_full"
        assert response.json()["detail"] == "This event has reached maximum capacity."

    def test_deadline_passed(self, attendee_client: Client, db_event_factory: EventFactory, now: datetime) -> None:
        event = db_event_factory(rsvp_deadline=now - timedelta(minutes=1))

        response = attendee_client.post(reverse("api:rsvp_event", kwargs={"event_id": event.id}))

        assert response.status_code == 400
        assert response.json()["reason"] == "rsvp_deadline_passed"

    def test_unknown_event(self, attendee_client: Client) -> None:
        response = attendee_client.post(reverse("api:rsvp_event", kwargs={"event_id": "event-missing"}))

        assert response.status_code == 404


class TestCheckIn:
    @pytest.fixture
    def rsvped(
        self, attendee_user: UserRecord, make_attendee: t.Callable[..., Attendee], now: datetime
    ) -> list[Attendee]:
        return [make_attendee("Guest", rsvp_time=now - timedelta(days=1), user_id=attendee_user.id)]

    def test_check_in_within_window(
        self, attendee_client: Client, db_event_factory: EventFactory, rsvped: list[Attendee], now: datetime
    ) -> None:
        event = db_event_factory(start_time=now + timedelta(minutes=30), attendees=rsvped)

        response = attendee_client.post(reverse("api:check_in", kwargs={"event_id": event.id}))

        assert response.status_code == 200, response.content
        assert response.json()["attended"] is True
        assert response.json()["check_in_time"] is not None
        assert mail.outbox[0].subject == f"Check-in now open for {event.title}"

    def test_check_in_too_early(
        self, attendee_client: Client, db_event_factory: EventFactory, rsvped: list[Attendee]
    ) -> None:
        event = db_event_factory(attendees=rsvped)

        response = attendee_client.post(reverse("api:check_in", kwargs={"event_id": event.id}))

        assert response.status_code == 400
        assert response.json()["reason"] == "check_in_not_open"
        assert mail.outbox == []

    def test_check_in_requires_rsvp(
        self, attendee_client: Client, db_event_factory: EventFactory, now: datetime
    ) -> None:
        event = db_event_factory(start_time=now + timedelta(minutes=30))

        response = attendee_client.post(reverse("api:check_in", kwargs={"event_id": event.id}))

        assert response.status_code == 400
        assert response.json()["detail"] == "You need to RSVP before checking in."


class TestAttendeeManagement:
    def test_creator_lists_and_searches_attendees(
        self,
        host_client: Client,
        db_event_factory: EventFactory,
        make_attendee: t.Callable[..., Attendee],
        now: datetime,
    ) -> None:
        event = db_event_factory(
            attendees=[
                make_attendee("Ada Lovelace", rsvp_time=now, email="ada@example.com"),
                make_attendee("Grace Hopper", rsvp_time=now, email="grace@navy.mil"),
            ]
        )
        url = reverse("api:list_attendees", kwargs={"event_id": event.id})

        assert len(host_client.get(url).json()) == 2
        assert [a["name"] for a in host_client.get(url, {"search": "NAVY"}).json()] == ["Grace Hopper"]

    def test_attendees_are_hidden_from_others(self, attendee_client: Client, db_event_factory: EventFactory) -> None:
        event = db_event_factory()

        response = attendee_client.get(reverse("api:list_attendees", kwargs={"event_id": event.id}))

        assert response.status_code == 403

    def test_walk_in_bypasses_capacity(
        self,
        host_client: Client,
        db_event_factory: EventFactory,
        make_attendee: t.Callable[..., Attendee],
        now: datetime,
    ) -> None:
        event = db_event_factory(max_attendees=1, attendees=[make_attendee("Ada", rsvp_time=now)])

        response = host_client.post(
            reverse("api:add_walk_in", kwargs={"event_id": event.id}),
            data={"name": "  Walk In ", "email": "door@example.com"},
            content_type="application/json",
        )

        assert response.status_code == 201, response.content
        data = response.json()
        assert data["name"] == "Walk In"
        assert data["attended"] is True
        assert data["user_id"].startswith("walkin-")
        assert mail.outbox == []

    def test_walk_in_rejects_bad_email(self, host_client: Client, db_event_factory: EventFactory) -> None:
        event = db_event_factory()

        response = host_client.post(
            reverse("api:add_walk_in", kwargs={"event_id": event.id}),
            data={"name": "Walk In", "email": "not-an-email"},
            content_type="application/json",
        )

        assert response.status_code == 422

    def test_only_creator_adds_walk_ins(self, attendee_client: Client, db_event_factory: EventFactory) -> None:
        event = db_event_factory()

        response = attendee_client.post(
            reverse("api:add_walk_in", kwargs={"event_id": event.id}),
            data={"name": "Walk In", "email": "door@example.com"},
            content_type="application/json",
        )

        assert response.status_code == 403


class TestNotify:
    def test_creator_queues_check_in_reminders(
        self,
        host_client: Client,
        db_event_factory: EventFactory,
        monkeypatch: MonkeyPatch,
    ) -> None:
        queued: list[str] = []
        monkeypatch.setattr("events.tasks.send_check_in_reminders.delay", queued.append)
        event = db_event_factory()

        response = host_client.post(
            reverse("api:notify_attendees", kwargs={"event_id": event.id, "kind": "checkin_reminder"})
        )

        assert response.status_code == 202
        assert queued == [event.id]

    def test_post_event_thanks_reach_checked_in_attendees(
        self,
        host_client: Client,
        db_event_factory: EventFactory,
        make_attendee: t.Callable[..., Attendee],
        now: datetime,
    ) -> None:
        event = db_event_factory(
            attendees=[
                make_attendee("Ada", rsvp_time=now, attended=True),
                make_attendee("Bob", rsvp_time=now),
            ]
        )

        response = host_client.post(
            reverse("api:notify_attendees", kwargs={"event_id": event.id, "kind": "post_event_thanks"})
        )

        assert response.status_code == 202
        assert [m.to for m in mail.outbox] == [["ada@example.com"]]

    def test_unknown_kind(self, host_client: Client, db_event_factory: EventFactory) -> None:
        event = db_event_factory()

        response = host_client.post(reverse("api:notify_attendees", kwargs={"event_id": event.id, "kind": "spam"}))

        assert response.status_code == 422

    def test_only_creator_notifies(self, attendee_client: Client, db_event_factory: EventFactory) -> None:
        event = db_event_factory()

        response = attendee_client.post(
            reverse("api:notify_attendees", kwargs={"event_id": event.id, "kind": "checkin_reminder"})
        )

        assert response.status_code == 403
