import typing as t
import uuid

from django.db import models


class TimeStampedModel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        abstract = True

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Override the save method to call full_clean before saving."""
        self.full_clean()
        super().save(*args, **kwargs)


class StoredBlob(TimeStampedModel):
    """A JSON document persisted under a fixed key.

    The whole document is replaced on every write; there are no partial updates.
    """

    key = models.CharField(max_length=128, unique=True)
    payload = models.JSONField(null=True, blank=True, default=None)

    def __str__(self) -> str:  # pragma: no cover
        return self.key
