from datetime import datetime

from events.enums import EventStatus
from events.service.analytics import compute_analytics
from events.service.sample_data import build_sample_events


def test_sample_events(now: datetime) -> None:
    conference, webinar, mixer = build_sample_events("user-host001", now)

    assert {e.created_by for e in (conference, webinar, mixer)} == {"user-host001"}
    assert conference.status == webinar.status == EventStatus.SCHEDULED
    assert webinar.is_virtual is True
    assert mixer.status == EventStatus.CLOSED
    assert all(e.rsvp_deadline < e.start_time for e in (conference, webinar, mixer))

    report = compute_analytics(mixer)
    assert report.total_check_ins == 2
    assert report.check_in_percentage == 100
    assert report.emoji_counts["👍"] == 1
    assert report.emoji_counts["❤️"] == 1
