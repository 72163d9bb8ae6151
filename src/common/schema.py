"""Common schemas for the API."""

import typing as t

from ninja import Schema
from pydantic import StringConstraints

StrippedString = t.Annotated[str, StringConstraints(strip_whitespace=True)]
OneToOneFiftyString = t.Annotated[str, StringConstraints(min_length=1, max_length=150, strip_whitespace=True)]


class VersionResponse(Schema):
    version: str


class ResponseOk(Schema):
    status: t.Literal["ok"] = "ok"


class ResponseMessage(Schema):
    message: str


class ValidationErrorResponse(Schema):
    errors: dict[str, str | list[str]]


class ErrorDetail(Schema):
    detail: str
    reason: str | None = None
