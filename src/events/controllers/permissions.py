from django.http import HttpRequest
from ninja_extra import ControllerBase
from ninja_extra.permissions import BasePermission

from events.types import Event


class IsHost(BasePermission):
    message = "Only hosts can create events."

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        return bool(getattr(request.auth, "is_host", False))  # type: ignore[attr-defined]


class IsEventCreator(BasePermission):
    message = "Only the event creator can do this."

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Must implement abstract method. This is due to an error in Ninja Extra.

        This Method will be ignored, only has_object_permission will be called.
        """
        return True

    def has_object_permission(self, request: HttpRequest, controller: ControllerBase, obj: Event) -> bool:
        return obj.is_created_by(request.auth.id)  # type: ignore[attr-defined]
