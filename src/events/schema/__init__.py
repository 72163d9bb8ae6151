from .analytics import AnalyticsSchema, TimelineBucketSchema
from .attendance import AttendeeSchema, MyStatusSchema, WalkInSchema
from .event import (
    CalendarQuerySchema,
    EventCreateSchema,
    EventDetailSchema,
    EventEditSchema,
    EventSchema,
)
from .feedback import FeedbackCreateSchema, FeedbackSchema

__all__ = [
    "AnalyticsSchema",
    "AttendeeSchema",
    "CalendarQuerySchema",
    "EventCreateSchema",
    "EventDetailSchema",
    "EventEditSchema",
    "EventSchema",
    "FeedbackCreateSchema",
    "FeedbackSchema",
    "MyStatusSchema",
    "TimelineBucketSchema",
    "WalkInSchema",
]
