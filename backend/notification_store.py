# notification_store.py -- key/value persistence for notification state

from typing import Protocol

import structlog
from supabase import create_client

logger = structlog.get_logger(__name__)


class NotificationStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryNotificationStore:
    """Process-local store, used in tests and when Supabase is not configured."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._values = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class SupabaseNotificationStore:
    """Stores each key as a row of a `key`/`value` table."""

    def __init__(self, supabase, table: str = "notification_state"):
        self.supabase = supabase
        self.table = table

    def get(self, key: str) -> str | None:
        res = self.supabase.table(self.table) \
            .select("value") \
            .eq("key", key) \
            .execute()
        return res.data[0]["value"] if res.data else None

    def set(self, key: str, value: str) -> None:
        self.supabase.table(self.table).upsert({
            "key": key,
            "value": value
        }).execute()
        logger.debug("notification_state_saved", table=self.table, key=key)

    def delete(self, key: str) -> None:
        self.supabase.table(self.table) \
            .delete() \
            .eq("key", key) \
            .execute()


def create_store(kind: str, supabase_url: str | None = None, supabase_key: str | None = None,
                 table: str = "notification_state") -> NotificationStore:
    if kind == "memory":
        return MemoryNotificationStore()

    if kind == "supabase":
        if not supabase_url or not supabase_key:
            raise RuntimeError("❌ Supabase credentials missing")

        logger.info("notification_store_selected", kind=kind, table=table)
        return SupabaseNotificationStore(create_client(supabase_url, supabase_key), table)

    raise RuntimeError(f"Unknown notification store: {kind}")
