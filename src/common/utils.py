import secrets
import string

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_id(prefix: str, length: int = 7) -> str:
    """Generate a short prefixed identifier, e.g. `event-k3j9x0a`."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))
    return f"{prefix}-{suffix}"
