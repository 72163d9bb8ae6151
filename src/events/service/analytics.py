"""Post-event analytics computed from an event's attendee and feedback lists."""

from collections import Counter
from datetime import datetime

from events.enums import FeedbackEmoji
from events.types import AnalyticsReport, Event, TimelineBucket


def _hour_bucket(timestamp: datetime) -> datetime:
    return timestamp.replace(minute=0, second=0, microsecond=0)


def compute_analytics(event: Event) -> AnalyticsReport:
    """Aggregate attendance and feedback figures for an event.

    The feedback timeline is sparse: one bucket per clock hour that received at
    least one feedback item, in ascending order.
    """
    total_rsvps = len(event.attendees)
    total_check_ins = sum(1 for attendee in event.attendees if attendee.attended)
    check_in_percentage = total_check_ins / total_rsvps * 100 if total_rsvps > 0 else 0.0

    emoji_counts = {emoji.value: 0 for emoji in FeedbackEmoji}
    for item in event.feedback:
        if item.emoji:
            emoji_counts[item.emoji.value] += 1

    per_hour = Counter(_hour_bucket(item.timestamp) for item in event.feedback)
    timeline = [TimelineBucket(timestamp=hour, count=count) for hour, count in sorted(per_hour.items())]

    return AnalyticsReport(
        total_rsvps=total_rsvps,
        total_check_ins=total_check_ins,
        check_in_percentage=check_in_percentage,
        feedback_count=len(event.feedback),
        emoji_counts=emoji_counts,
        feedback_timeline=timeline,
        top_emoji=top_emoji(emoji_counts),
    )


def top_emoji(emoji_counts: dict[str, int]) -> FeedbackEmoji | None:
    """The most used emoji, first in symbol order on ties; None if nothing was used."""
    best: FeedbackEmoji | None = None
    best_count = 0
    for emoji in FeedbackEmoji:
        count = emoji_counts.get(emoji.value, 0)
        if count > best_count:
            best, best_count = emoji, count
    return best
