from ninja import Schema
from pydantic import EmailStr, Field

from accounts.types import Role
from common.schema import OneToOneFiftyString, StrippedString


class UserSchema(Schema):
    id: str
    email: str
    name: str
    role: Role


class LoginSchema(Schema):
    email: StrippedString
    password: str = Field(..., repr=False)


class RegisterSchema(Schema):
    email: EmailStr
    password: str = Field(..., min_length=1, repr=False)
    name: OneToOneFiftyString
    role: Role = "attendee"
