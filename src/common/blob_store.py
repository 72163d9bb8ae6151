"""Key-value storage for whole JSON documents.

Each document is loaded and written back in full. `atomic()` wraps a
read-modify-write cycle so that concurrent writers to the same key serialise.
"""

import contextlib
import copy
import threading
import typing as t

import structlog
from django.db import transaction

from .models import StoredBlob

logger = structlog.get_logger(__name__)


class BlobStore(t.Protocol):
    """Protocol for blob stores holding one JSON document per key."""

    def load(self, key: str) -> t.Any:
        """Return the document stored under `key`, or None if there is none."""
        ...

    def save(self, key: str, data: t.Any) -> None:
        """Replace the document stored under `key`."""
        ...

    def delete(self, key: str) -> None:
        """Remove the document stored under `key`, if any."""
        ...

    def atomic(self, key: str) -> t.ContextManager[None]:
        """Hold exclusive access to `key` for a read-modify-write cycle."""
        ...


class DatabaseBlobStore:
    """Blob store backed by the `StoredBlob` table."""

    def load(self, key: str) -> t.Any:
        blob = StoredBlob.objects.filter(key=key).only("payload").first()
        return blob.payload if blob else None

    def save(self, key: str, data: t.Any) -> None:
        blob = StoredBlob.objects.filter(key=key).first() or StoredBlob(key=key)
        blob.payload = data
        blob.save()
        logger.debug("blob_saved", key=key)

    def delete(self, key: str) -> None:
        StoredBlob.objects.filter(key=key).delete()

    @contextlib.contextmanager
    def atomic(self, key: str) -> t.Iterator[None]:
        with transaction.atomic():
            # Lock the row (when it exists) until the surrounding transaction ends.
            list(StoredBlob.objects.select_for_update().filter(key=key).values_list("pk", flat=True))
            yield


class InMemoryBlobStore:
    """Process-local blob store, used by tests and scripts."""

    def __init__(self, initial: dict[str, t.Any] | None = None) -> None:
        self._data: dict[str, t.Any] = copy.deepcopy(initial) if initial else {}
        self._lock = threading.RLock()

    def load(self, key: str) -> t.Any:
        return copy.deepcopy(self._data.get(key))

    def save(self, key: str, data: t.Any) -> None:
        self._data[key] = copy.deepcopy(data)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    @contextlib.contextmanager
    def atomic(self, key: str) -> t.Iterator[None]:
        with self._lock:
            yield
