from ninja import Schema
from pydantic import AwareDatetime, Field

from common.schema import StrippedString
from events.enums import FeedbackEmoji


class FeedbackSchema(Schema):
    id: str
    user_id: str
    user_name: str
    text: str
    emoji: FeedbackEmoji | None = None
    timestamp: AwareDatetime
    is_pinned: bool
    is_flagged: bool


class FeedbackCreateSchema(Schema):
    text: StrippedString = Field("", max_length=2000)
    emoji: FeedbackEmoji | None = None
