"""Supabase storage for ingredient cache snapshots."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from snack_check.services.cache import CacheMirror


@dataclass
class SupabaseCacheMirror(CacheMirror):
    """Stores one JSON snapshot row per namespace."""

    client: Client
    table_name: str = "cache_snapshots"

    def load(self, namespace: str) -> list[dict[str, object]] | None:
        """Return the stored entries for a namespace."""
        response = (
            self.client.table(self.table_name)
            .select("entries")
            .eq("namespace", namespace)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        entries = response.data[0].get("entries")
        return entries if isinstance(entries, list) else None

    def save(self, namespace: str, entries: list[dict[str, object]]) -> None:
        """Upsert the snapshot row for a namespace."""
        self.client.table(self.table_name).upsert(
            {
                "namespace": namespace,
                "entries": entries,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="namespace",
        ).execute()
