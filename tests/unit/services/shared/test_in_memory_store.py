import pytest

from services.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
    ResourceNotFoundException,
)
from services.shared.infrastructure import InMemoryStore


@pytest.fixture
def store():
    return InMemoryStore("Item")


class TestInMemoryStore:
    def test_reads_are_copies(self, store):
        store.insert("a", {"count": 1})

        item = store.get("a")
        item["count"] = 99

        assert store.get("a") == {"count": 1}

    def test_insert_duplicate(self, store):
        store.insert("a", {})
        with pytest.raises(DuplicateResourceException, match="Item already exists"):
            store.insert("a", {})

    def test_replace_if(self, store):
        store.insert("a", {"version": 0})

        store.replace_if(
            "a", {"version": 1}, lambda c: c["version"] == 0, "conflict"
        )

        assert store.get("a") == {"version": 1}
        with pytest.raises(OptimisticLockException, match="conflict"):
            store.replace_if(
                "a", {"version": 1}, lambda c: c["version"] == 0, "conflict"
            )

    def test_replace_if_missing(self, store):
        with pytest.raises(ResourceNotFoundException):
            store.replace_if("a", {}, lambda c: True, "conflict")

    def test_remove_if(self, store):
        store.insert("a", {"version": 2})
        with pytest.raises(OptimisticLockException):
            store.remove_if("a", lambda c: c["version"] == 1, "conflict")

        store.remove_if("a", lambda c: c["version"] == 2, "conflict")

        assert store.get("a") is None

    def test_values_filters(self, store):
        store.insert("a", {"n": 1})
        store.insert("b", {"n": 2})
        assert store.values(lambda item: item["n"] > 1) == [{"n": 2}]
