import typing as t

from pydantic import BaseModel

Role = t.Literal["host", "attendee"]


class UserRecord(BaseModel):
    """The signed-in user, as kept in the current-user blob."""

    is_authenticated: t.ClassVar[bool] = True

    id: str
    email: str
    name: str
    role: Role

    @property
    def pk(self) -> str:
        return self.id

    @property
    def is_host(self) -> bool:
        return self.role == "host"
