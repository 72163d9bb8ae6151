"""Tests for the JSON document stores."""

import pytest

from common.blob_store import DatabaseBlobStore, InMemoryBlobStore
from common.models import StoredBlob


class TestInMemoryBlobStore:
    def test_load_missing_key(self) -> None:
        assert InMemoryBlobStore().load("nothing") is None

    def test_returned_documents_are_copies(self) -> None:
        store = InMemoryBlobStore()
        data = {"items": [1, 2]}
        store.save("doc", data)

        data["items"].append(3)
        loaded = store.load("doc")
        loaded["items"].append(4)

        assert store.load("doc") == {"items": [1, 2]}

    def test_delete(self) -> None:
        store = InMemoryBlobStore({"doc": [1]})
        store.delete("doc")
        store.delete("doc")

        assert store.load("doc") is None

    def test_atomic_is_reentrant(self) -> None:
        store = InMemoryBlobStore()
        with store.atomic("doc"):
            with store.atomic("doc"):
                store.save("doc", 1)

        assert store.load("doc") == 1


@pytest.mark.django_db
class TestDatabaseBlobStore:
    def test_save_and_load(self) -> None:
        store = DatabaseBlobStore()
        store.save("doc", [{"a": 1}])
        store.save("doc", [{"a": 2}])

        assert store.load("doc") == [{"a": 2}]
        assert StoredBlob.objects.filter(key="doc").count() == 1

    def test_load_missing_key(self) -> None:
        assert DatabaseBlobStore().load("nothing") is None

    def test_delete(self) -> None:
        store = DatabaseBlobStore()
        store.save("doc", {"x": 1})
        store.delete("doc")

        assert store.load("doc") is None

    def test_atomic_rolls_back_on_error(self) -> None:
        store = DatabaseBlobStore()
        store.save("doc", "before")

        with pytest.raises(RuntimeError):
            with store.atomic("doc"):
                store.save("doc", "after")
                raise RuntimeError("boom")

        assert store.load("doc") == "before"
