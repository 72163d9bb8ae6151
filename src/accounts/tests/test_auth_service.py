import pytest
from django.core.exceptions import ValidationError

from accounts.service import auth as auth_service
from common.blob_store import InMemoryBlobStore


@pytest.fixture
def store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


def test_register_signs_the_user_in(store: InMemoryBlobStore) -> None:
    user = auth_service.register(" ada@example.com ", "secret", "Ada", "host", store=store)

    assert user.id.startswith("user-")
    assert user.email == "ada@example.com"
    assert user.is_host
    assert auth_service.current_user(store=store) == user


def test_register_reports_every_blank_field(store: InMemoryBlobStore) -> None:
    with pytest.raises(ValidationError) as exc_info:
        auth_service.register("", "", " ", "attendee", store=store)

    assert set(exc_info.value.message_dict) == {"email", "password", "name"}
    assert auth_service.current_user(store=store) is None


def test_register_rejects_unknown_role(store: InMemoryBlobStore) -> None:
    with pytest.raises(ValidationError) as exc_info:
        auth_service.register("ada@example.com", "secret", "Ada", "admin", store=store)  # type: ignore[arg-type]

    assert exc_info.value.message_dict == {"role": ["Role must be host or attendee"]}


@pytest.mark.parametrize(
    "email,role",
    [("host@example.com", "host"), ("jane.host@example.com", "host"), ("guest@example.com", "attendee")],
)
def test_login_derives_name_and_role(store: InMemoryBlobStore, email: str, role: str) -> None:
    user = auth_service.login(email, "whatever", store=store)

    assert user.name == email.split("@")[0]
    assert user.role == role


def test_login_requires_credentials(store: InMemoryBlobStore) -> None:
    with pytest.raises(ValidationError):
        auth_service.login("guest@example.com", "", store=store)


def test_login_replaces_the_current_user(store: InMemoryBlobStore) -> None:
    auth_service.login("host@example.com", "pw", store=store)
    second = auth_service.login("guest@example.com", "pw", store=store)

    assert auth_service.current_user(store=store) == second


def test_logout(store: InMemoryBlobStore) -> None:
    auth_service.login("guest@example.com", "pw", store=store)

    auth_service.logout(store=store)

    assert auth_service.current_user(store=store) is None
