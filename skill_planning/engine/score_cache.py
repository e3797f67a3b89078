"""Memoization table for compatibility results.

Entries are keyed by ``(team_id, project_id, catalog_version)`` where the
version fingerprints every input the score depends on, so a changed catalog,
team, roster or association snapshot never hits a stale entry.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable, Iterable
import hashlib
import json
import threading

from pydantic import BaseModel

from skill_planning.engine.compatibility import CompatibilityResult


CacheKey = tuple[str, str, str]

_DEFAULT_MAX_ENTRIES = 1024


def snapshot_version(*snapshots: BaseModel | Iterable[BaseModel] | None) -> str:
    """SHA-256 fingerprint over the JSON dump of the given models/collections."""
    payload = [_dump(s) for s in snapshots]
    raw = json.dumps(payload, sort_keys=True, ensure_ascii=False, default=str)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def _dump(snapshot: BaseModel | Iterable[BaseModel] | None) -> object:
    if snapshot is None:
        return None
    if isinstance(snapshot, BaseModel):
        return snapshot.model_dump(mode="json")
    return [item.model_dump(mode="json") for item in snapshot]


class CompatibilityCache:
    """Thread-safe, bounded memo table for :class:`CompatibilityResult`."""

    def __init__(self, max_entries: int = _DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self._max_entries = max_entries
        self._entries: OrderedDict[CacheKey, CompatibilityResult] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get(self, team_id: str, project_id: str, catalog_version: str) -> CompatibilityResult | None:
        with self._lock:
            return self._entries.get((team_id, project_id, catalog_version))

    def put(self, result: CompatibilityResult, catalog_version: str) -> None:
        """Store *result*; evicts the oldest entry when full."""
        key = (result.team_id, result.project_id or "", catalog_version)
        with self._lock:
            self._store(key, result)

    def get_or_compute(
        self,
        team_id: str,
        project_id: str,
        catalog_version: str,
        compute: Callable[[], CompatibilityResult],
    ) -> CompatibilityResult:
        """Return the cached result or call *compute* and remember it.

        *compute* runs outside the lock; concurrent misses may both compute,
        and the last writer wins with an identical value.
        """
        key = (team_id, project_id, catalog_version)
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self.hits += 1
                return cached
            self.misses += 1

        result = compute()
        with self._lock:
            self._store(key, result)
        return result

    def invalidate(self, team_id: str | None = None, project_id: str | None = None) -> int:
        """Drop entries for a team and/or project (all entries when both are None).

        Returns:
            Number of entries removed.
        """
        with self._lock:
            doomed = [
                k for k in self._entries
                if (team_id is None or k[0] == team_id)
                and (project_id is None or k[1] == project_id)
            ]
            for k in doomed:
                del self._entries[k]
            return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _store(self, key: CacheKey, result: CompatibilityResult) -> None:
        self._entries[key] = result
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)
