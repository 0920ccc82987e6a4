"""Unit tests for the local key-value cache."""

import json

from pydantic import TypeAdapter

from mingle.domain.value import UserId
from mingle.persistence.cache import (
    CachedInvitationMirror,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)
from mingle.persistence.cache.store import NamespacedStore
from tests.conftest import make_invitation


class TestNamespacedStore:
    """Tests for the versioned envelope."""

    def test_round_trip(self):
        store = NamespacedStore(InMemoryKeyValueStore(), "things", TypeAdapter(list[int]), 1)

        store.set("a", [1, 2, 3])

        assert store.get("a") == [1, 2, 3]
        assert store.keys() == ["a"]

    def test_entry_written_by_older_version_reads_as_absent(self):
        backing = InMemoryKeyValueStore()
        NamespacedStore(backing, "things", TypeAdapter(list[int]), 1).set("a", [1])

        newer = NamespacedStore(backing, "things", TypeAdapter(list[int]), 2)

        assert newer.get("a") is None

    def test_invalid_entry_reads_as_absent(self):
        backing = InMemoryKeyValueStore()
        backing.set("things:a", json.dumps({"v": 1, "data": "not a list"}))
        backing.set("things:b", "{corrupt")

        store = NamespacedStore(backing, "things", TypeAdapter(list[int]), 1)

        assert store.get("a") is None
        assert store.get("b") is None

    def test_namespaces_are_isolated(self):
        backing = InMemoryKeyValueStore()
        first = NamespacedStore(backing, "first", TypeAdapter(int), 1)
        second = NamespacedStore(backing, "second", TypeAdapter(int), 1)

        first.set("k", 1)

        assert second.get("k") is None
        assert second.keys() == []


class TestJsonFileKeyValueStore:
    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "cache.json"
        JsonFileKeyValueStore(path).set("k", "v")

        assert JsonFileKeyValueStore(path).get("k") == "v"

    def test_delete(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "cache.json")
        store.set("k", "v")

        store.delete("k")

        assert store.get("k") is None


class TestCachedInvitationMirror:
    def test_add_replaces_same_id(self):
        mirror = CachedInvitationMirror(InMemoryKeyValueStore(), 1)
        invitation = make_invitation()

        mirror.add(invitation)
        mirror.add(invitation.model_copy(update={"message_id": "m-2"}))

        stored = mirror.get_all(UserId("user-alice"))
        assert len(stored) == 1
        assert stored[0].message_id == "m-2"

    def test_remove(self):
        mirror = CachedInvitationMirror(InMemoryKeyValueStore(), 1)
        invitation = make_invitation()
        mirror.add(invitation)

        assert mirror.remove(invitation.inviter_id, invitation.id) is True
        assert mirror.remove(invitation.inviter_id, invitation.id) is False
        assert mirror.inviters() == [UserId("user-alice")]
