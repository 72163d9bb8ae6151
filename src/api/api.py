from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI

from accounts.controllers.auth import AuthController
from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle, UserDefaultThrottle
from events.controllers import EVENT_CONTROLLERS
from events.exceptions import BusinessRuleViolation, EventNotFoundError, FeedbackNotFoundError

from .exception_handlers import (
    handle_business_rule_violation,
    handle_django_validation_error,
    handle_general_exception,
    handle_not_found_error,
)

api = NinjaExtraAPI(
    title="EventPulse API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"EventPulse API {settings.VERSION}",
    app_name=f"eventpulse-api-{settings.VERSION}",
    urls_namespace="api",
    servers=[
        {"url": settings.SERVICE_URL, "description": settings.SERVICE_DESCRIPTION},
    ],
    throttle=[AnonDefaultThrottle(), UserDefaultThrottle()],
)


@api.get("/version", tags=["Version"], response={200: VersionResponse})
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """The deployed API version."""
    return 200, VersionResponse(version=settings.VERSION)


@api.get("/healthcheck", tags=["Healthcheck"], response={200: ResponseOk})
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    """Liveness probe. Does not touch the database."""
    return 200, ResponseOk()


api.register_controllers(
    # Auth controllers
    AuthController,
    # Event controllers
    *EVENT_CONTROLLERS,
)

EXCEPTION_HANDLERS = {
    Exception: handle_general_exception,
    ValidationError: handle_django_validation_error,
    BusinessRuleViolation: handle_business_rule_violation,
    EventNotFoundError: handle_not_found_error,
    FeedbackNotFoundError: handle_not_found_error,
}

for exc, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exc, handler)
