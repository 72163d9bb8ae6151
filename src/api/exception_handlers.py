"""Exception handlers for the API."""

import traceback
import typing as t
from copy import deepcopy

import orjson
import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja.responses import Response

from events.exceptions import BusinessRuleViolation, EventNotFoundError, FeedbackNotFoundError

logger = structlog.get_logger(__name__)


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Handle a general exception.

    Args:
        request: The incoming HTTP request.
        exc: The exception.

    Returns:
        The response.
    """
    json_payload = None
    if request.method in ("POST", "PUT", "PATCH") and request.headers.get("Content-Type") == "application/json":
        try:
            json_payload = obfuscate(orjson.loads(request.body))
        except orjson.JSONDecodeError:  # pragma: no cover
            json_payload = None
    logger.exception(
        "INTERNAL_SERVER_ERROR",
        method=request.method,
        path=request.path,
        headers=obfuscate(dict(request.headers)),
        GET=obfuscate(request.GET.dict()),
        json_payload=json_payload,
    )
    data = {"detail": "Internal Server Error."}
    if settings.DEBUG:  # pragma: no cover
        data["traceback"] = traceback.format_exc()
    return Response(status=500, data=data)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a validation error.

    Args:
        request: The incoming HTTP request.
        exc: The exception.
    """
    logger.info("VALIDATION_ERROR", path=request.path, error=str(exc))
    error_dict = exc.message_dict if hasattr(exc, "error_dict") else {"__all__": exc.messages}
    return Response(status=400, data={"errors": error_dict})


def handle_business_rule_violation(
    request: HttpRequest, exc: BusinessRuleViolation | t.Type[BusinessRuleViolation]
) -> Response:
    """Handle a request rejected by an attendance or feedback rule."""
    reason = exc.reason.name.lower()
    logger.info("BUSINESS_RULE_VIOLATION", path=request.path, reason=reason)
    return Response(status=400, data={"detail": str(exc), "reason": reason})


def handle_not_found_error(
    request: HttpRequest, exc: EventNotFoundError | FeedbackNotFoundError | t.Type[Exception]
) -> Response:
    """Handle an event or feedback lookup that found nothing."""
    return Response(status=404, data={"detail": str(exc)})


SENSITIVE_KEYS = {"password", "token", "x-api-key", "authorization", "authentication", "cookie"}


def obfuscate(data: t.Any) -> t.Any:
    """Obfuscate sensitive data in payloads and headers."""
    if not isinstance(data, dict):
        return data
    new_data = deepcopy(data)
    for key in data.keys():
        if key.lower() in SENSITIVE_KEYS:
            new_data[key] = "********"
    return new_data
