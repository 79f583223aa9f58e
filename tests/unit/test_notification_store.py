"""Tests for notification_store.py: memory and Supabase key/value stores."""

from unittest.mock import MagicMock, patch

import pytest

from notification_store import (
    MemoryNotificationStore,
    SupabaseNotificationStore,
    create_store,
)


@pytest.fixture
def supabase():
    return MagicMock()


class TestMemoryStore:

    def test_get_missing(self):
        assert MemoryNotificationStore().get("k") is None

    def test_set_get_delete(self):
        store = MemoryNotificationStore()
        store.set("k", "v")
        assert store.get("k") == "v"
        store.delete("k")
        assert store.get("k") is None

    def test_delete_missing_is_noop(self):
        MemoryNotificationStore().delete("k")

    def test_initial_values_copied(self):
        initial = {"k": "v"}
        store = MemoryNotificationStore(initial)
        store.set("k", "changed")
        assert initial["k"] == "v"


class TestSupabaseStore:

    def test_get(self, supabase):
        query = supabase.table.return_value.select.return_value.eq.return_value
        query.execute.return_value.data = [{"value": "[\"asteroid-apophis\"]"}]

        store = SupabaseNotificationStore(supabase)
        assert store.get("dismissedNotifications") == "[\"asteroid-apophis\"]"
        supabase.table.assert_called_with("notification_state")
        supabase.table.return_value.select.assert_called_with("value")
        supabase.table.return_value.select.return_value.eq.assert_called_with(
            "key", "dismissedNotifications"
        )

    def test_get_missing(self, supabase):
        query = supabase.table.return_value.select.return_value.eq.return_value
        query.execute.return_value.data = []
        assert SupabaseNotificationStore(supabase).get("k") is None

    def test_set_upserts(self, supabase):
        SupabaseNotificationStore(supabase, table="state").set("k", "v")
        supabase.table.assert_called_with("state")
        supabase.table.return_value.upsert.assert_called_once_with({"key": "k", "value": "v"})
        supabase.table.return_value.upsert.return_value.execute.assert_called_once()

    def test_delete(self, supabase):
        SupabaseNotificationStore(supabase).delete("k")
        supabase.table.return_value.delete.return_value.eq.assert_called_once_with("key", "k")


class TestCreateStore:

    def test_memory(self):
        assert isinstance(create_store("memory"), MemoryNotificationStore)

    def test_supabase_without_credentials(self):
        with pytest.raises(RuntimeError):
            create_store("supabase")

    def test_supabase(self):
        with patch("notification_store.create_client") as create_client:
            store = create_store("supabase", "https://example.supabase.co", "key", table="t")
        create_client.assert_called_once_with("https://example.supabase.co", "key")
        assert isinstance(store, SupabaseNotificationStore)
        assert store.table == "t"

    def test_unknown_kind(self):
        with pytest.raises(RuntimeError):
            create_store("redis")
