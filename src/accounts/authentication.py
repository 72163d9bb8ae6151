import typing as t

from django.http import HttpRequest

from accounts.service import auth as auth_service
from accounts.types import UserRecord


class CurrentUserAuth:
    """Resolve the signed-in user for API requests.

    Requests are rejected with 401 when nobody is signed in. On success the user
    is available as both `request.auth` and `request.user`.
    """

    def __call__(self, request: HttpRequest) -> UserRecord | None:
        user = auth_service.current_user()
        if user is not None:
            request.user = user  # type: ignore[assignment]
        return user


def get_request_user(request: HttpRequest) -> UserRecord:
    return t.cast(UserRecord, request.auth)  # type: ignore[attr-defined]
