import typing as t

from ninja_extra import ControllerBase

from accounts.types import UserRecord


class UserAwareController(ControllerBase):
    def user(self) -> UserRecord:
        """Get the signed-in user for this request."""
        return t.cast(UserRecord, self.context.request.auth)  # type: ignore[union-attr]
