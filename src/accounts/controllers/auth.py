"""This module contains the controllers for the accounts app."""

from ninja_extra import ControllerBase, api_controller, route

from accounts import schema
from accounts.authentication import CurrentUserAuth, get_request_user
from accounts.service import auth as auth_service
from accounts.types import UserRecord
from common.schema import ResponseOk
from common.throttling import AuthThrottle


@api_controller("/auth", tags=["Auth"], throttle=AuthThrottle())
class AuthController(ControllerBase):
    @route.post("/register", response=schema.UserSchema, url_name="register")
    def register(self, payload: schema.RegisterSchema) -> UserRecord:
        """Create an account and sign in with it.

        Hosts can create and manage events; attendees can RSVP, check in and leave feedback.
        """
        return auth_service.register(payload.email, payload.password, payload.name, payload.role)

    @route.post("/login", response=schema.UserSchema, url_name="login")
    def login(self, payload: schema.LoginSchema) -> UserRecord:
        """Sign in. E-mail addresses containing "host" sign in with the host role."""
        return auth_service.login(payload.email, payload.password)

    @route.post("/logout", response=ResponseOk, url_name="logout")
    def logout(self) -> ResponseOk:
        auth_service.logout()
        return ResponseOk()

    @route.get("/me", response=schema.UserSchema, auth=CurrentUserAuth(), url_name="me")
    def me(self) -> UserRecord:
        """The signed-in user."""
        return get_request_user(self.context.request)  # type: ignore[union-attr]
