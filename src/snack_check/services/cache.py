"""TTL cache for resolved ingredient records."""

import logging
import threading
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Protocol

from snack_check.domain.ingredients import IngredientRecord, IngredientSource

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_TTL_SECONDS = 24 * 60 * 60
DEFAULT_MAX_ENTRIES = 1000
CACHE_NAMESPACE = "snackcheck_ingredient_cache"

_logger = logging.getLogger(__name__)


class CacheMirror(Protocol):
    """Durable storage for cache snapshots."""

    def load(self, namespace: str) -> list[dict[str, object]] | None:
        """Return the stored snapshot for a namespace, if any."""

    def save(self, namespace: str, entries: list[dict[str, object]]) -> None:
        """Replace the stored snapshot for a namespace."""


@dataclass
class CacheEntry:
    key: str
    value: IngredientRecord
    created_at: datetime
    ttl_seconds: int

    def is_expired(self, now: datetime) -> bool:
        return now - self.created_at > timedelta(seconds=self.ttl_seconds)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class ResolutionCache:
    """Bounded, thread-safe TTL cache keyed by ingredient lookup key.

    Expired entries read as misses and are dropped when touched or when the
    cache grows past ``max_entries``. Once over the cap, expired entries go
    first, then the oldest by creation time.
    """

    def __init__(  # noqa: PLR0913
        self,
        *,
        default_ttl_seconds: int = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        mirror: CacheMirror | None = None,
        namespace: str = CACHE_NAMESPACE,
        clock: "Callable[[], datetime]" = _utcnow,
    ) -> None:
        self.default_ttl_seconds = default_ttl_seconds
        self.max_entries = max_entries
        self.mirror = mirror
        self.namespace = namespace
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str) -> IngredientRecord | None:
        """Return a cached record if it hasn't expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                self._entries.pop(key, None)
                return None
            return entry.value

    def set(
        self, key: str, value: IngredientRecord, ttl_seconds: int | None = None
    ) -> None:
        """Store a record, replacing any previous entry for the key."""
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._entries[key] = CacheEntry(
                key=key, value=value, created_at=self._clock(), ttl_seconds=ttl
            )
            self._evict()

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def snapshot(self) -> list[dict[str, object]]:
        """Return the live entries as JSON-ready dicts."""
        now = self._clock()
        with self._lock:
            entries = list(self._entries.values())
        return [
            {
                "key": entry.key,
                "value": entry.value.to_dict(),
                "created_at": entry.created_at.isoformat(),
                "ttl_seconds": entry.ttl_seconds,
            }
            for entry in entries
            if not entry.is_expired(now)
        ]

    def restore(self, entries: list[dict[str, object]]) -> int:
        """Load snapshot entries, skipping expired or malformed ones."""
        now = self._clock()
        restored = 0
        with self._lock:
            for raw in entries:
                try:
                    entry = _entry_from_snapshot(raw)
                    if entry.is_expired(now):
                        continue
                except (KeyError, TypeError, ValueError) as exc:
                    _logger.warning("Skipping malformed cache entry: %s", exc)
                    continue
                self._entries[entry.key] = entry
                restored += 1
            self._evict()
        return restored

    def load(self) -> int:
        """Restore entries from the durable mirror, if configured."""
        if self.mirror is None:
            return 0
        try:
            entries = self.mirror.load(self.namespace)
        except Exception:
            _logger.exception("Failed to load cache snapshot")
            return 0
        if not entries:
            return 0
        try:
            return self.restore(entries)
        except Exception:
            _logger.exception("Failed to restore cache snapshot")
            return 0

    def persist(self) -> None:
        """Write live entries to the durable mirror, if configured."""
        if self.mirror is None:
            return
        try:
            self.mirror.save(self.namespace, self.snapshot())
        except Exception:
            _logger.exception("Failed to persist cache snapshot")

    def _evict(self) -> None:
        if len(self._entries) <= self.max_entries:
            return
        now = self._clock()
        for key in [k for k, e in self._entries.items() if e.is_expired(now)]:
            del self._entries[key]
        overflow = len(self._entries) - self.max_entries
        if overflow <= 0:
            return
        oldest = sorted(self._entries.values(), key=lambda entry: entry.created_at)
        for entry in oldest[:overflow]:
            del self._entries[entry.key]


def _entry_from_snapshot(raw: object) -> CacheEntry:
    if not isinstance(raw, dict):
        raise TypeError(f"cache entry must be an object, got {type(raw).__name__}")
    value = raw["value"]
    if not isinstance(value, dict):
        raise TypeError(f"cache value must be an object, got {type(value).__name__}")
    created_at = datetime.fromisoformat(str(raw["created_at"]))
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return CacheEntry(
        key=str(raw["key"]),
        value=replace(IngredientRecord.from_dict(value), source=IngredientSource.CACHE),
        created_at=created_at,
        ttl_seconds=int(raw["ttl_seconds"]),
    )
