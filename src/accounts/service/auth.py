"""Sign-in state for the single current user.

There is no password store: credentials are checked for presence only and the
resulting user is kept in one blob until logout.
"""

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError

from accounts.types import Role, UserRecord
from common.blob_store import BlobStore, DatabaseBlobStore
from common.utils import generate_id

logger = structlog.get_logger(__name__)


def _store(store: BlobStore | None) -> BlobStore:
    return store or DatabaseBlobStore()


def _remember(user: UserRecord, store: BlobStore | None) -> UserRecord:
    _store(store).save(settings.USER_STORE_KEY, user.model_dump(mode="json"))
    return user


def register(email: str, password: str, name: str, role: Role, *, store: BlobStore | None = None) -> UserRecord:
    """Create a user and sign them in.

    Raises:
        ValidationError: if any field is blank or the role is unknown.
    """
    email, name = email.strip(), name.strip()
    errors = {
        field: f"{label} is required"
        for field, label, value in (("email", "Email", email), ("password", "Password", password), ("name", "Name", name))
        if not value
    }
    if role not in ("host", "attendee"):
        errors["role"] = "Role must be host or attendee"
    if errors:
        raise ValidationError(errors)

    user = UserRecord(id=generate_id("user"), email=email, name=name, role=role)
    logger.info("user_registered", user_id=user.id, role=role)
    return _remember(user, store)


def login(email: str, password: str, *, store: BlobStore | None = None) -> UserRecord:
    """Sign a user in by e-mail.

    The name is the local part of the address; addresses containing "host" get
    the host role.

    Raises:
        ValidationError: if either credential is blank.
    """
    email = email.strip()
    if not email or not password:
        raise ValidationError({"email": "Email and password are required"})

    user = UserRecord(
        id=generate_id("user"),
        email=email,
        name=email.split("@", 1)[0],
        role="host" if "host" in email else "attendee",
    )
    logger.info("user_logged_in", user_id=user.id, role=user.role)
    return _remember(user, store)


def logout(*, store: BlobStore | None = None) -> None:
    _store(store).delete(settings.USER_STORE_KEY)
    logger.info("user_logged_out")


def current_user(*, store: BlobStore | None = None) -> UserRecord | None:
    """The signed-in user, or None."""
    raw = _store(store).load(settings.USER_STORE_KEY)
    return UserRecord.model_validate(raw) if raw else None
