from datetime import datetime

from ninja import Schema

from events.enums import FeedbackEmoji


class TimelineBucketSchema(Schema):
    timestamp: datetime
    count: int


class AnalyticsSchema(Schema):
    total_rsvps: int
    total_check_ins: int
    check_in_percentage: float
    feedback_count: int
    emoji_counts: dict[str, int]
    feedback_timeline: list[TimelineBucketSchema]
    top_emoji: FeedbackEmoji | None = None
