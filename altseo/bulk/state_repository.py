import time
from collections.abc import Callable
from typing import Any

from altseo.bulk.exceptions import ConfigurationError
from altseo.bulk.models import BulkJobState
from altseo.documents.models import DocumentId
from altseo.storage.base import BaseKeyValueStore

DEFAULT_LOCK_TIMEOUT_SECONDS = 120


class BulkStateRepository:
    """Typed access to the persisted state of each bulk job kind.

    Every kind owns four keys: the pending queue, the total fixed at snapshot
    time, the lock timestamp and the stop flag.
    """

    KEY_PREFIX = "altseo_bulk"

    def __init__(
        self,
        store: BaseKeyValueStore,
        lock_timeout_seconds: float = DEFAULT_LOCK_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._lock_timeout = lock_timeout_seconds
        self._clock = clock

    @property
    def lock_timeout(self) -> float:
        return self._lock_timeout

    def queue_key(self, kind: str) -> str:
        return f"{self.KEY_PREFIX}_{kind}_post_list"

    def total_key(self, kind: str) -> str:
        return f"{self.KEY_PREFIX}_{kind}_post_list_total"

    def lock_key(self, kind: str) -> str:
        return f"{self.KEY_PREFIX}_{kind}_lock"

    def stopped_key(self, kind: str) -> str:
        return f"{self.KEY_PREFIX}_{kind}_stopped"

    def has_queue(self, kind: str) -> bool:
        return self._store.get(self.queue_key(kind)) is not None

    def load(self, kind: str) -> BulkJobState:
        """Read and validate the state of a job kind.

        Raises:
            ConfigurationError: if any persisted value is malformed.
        """
        queue = self._read_queue(kind)
        total = self._read_total(kind, queue)
        return BulkJobState(
            queue=queue,
            total=total,
            lock=self._read_lock(kind),
            stopped=self.is_stop_requested(kind),
        )

    def save_snapshot(self, kind: str, document_ids: list[DocumentId]) -> None:
        self._store.set(self.queue_key(kind), list(document_ids))
        self._store.set(self.total_key(kind), len(document_ids))

    def save_queue(self, kind: str, queue: list[DocumentId]) -> None:
        self._store.set(self.queue_key(kind), list(queue))

    def is_stop_requested(self, kind: str) -> bool:
        return bool(self._store.get(self.stopped_key(kind)))

    def request_stop(self, kind: str) -> None:
        self._store.set(self.stopped_key(kind), True)

    def lock_age(self, kind: str) -> float | None:
        """Seconds since the lock was taken, None when no lock is recorded."""
        lock = self._read_lock(kind)
        if lock is None:
            return None
        return self._clock() - lock

    def is_locked(self, kind: str) -> bool:
        age = self.lock_age(kind)
        return age is not None and age < self._lock_timeout

    def acquire_lock(self, kind: str) -> float | None:
        """Take the lock unless a live one exists.

        The swap is conditional on the value read just before, so two steps
        racing for an expired or missing lock cannot both win.

        Returns:
            The timestamp written as the lease token, None when the lock is held.
        """
        current = self._read_lock(kind)
        now = self._clock()
        if current is not None and now - current < self._lock_timeout:
            return None
        if not self._store.compare_and_set(self.lock_key(kind), current, now):
            return None
        return now

    def release_lock(self, kind: str, token: float) -> bool:
        """Drop the lock only while it still carries the token this step wrote.

        A step that outlived its lease leaves the lock of its successor alone.
        """
        return self._store.compare_and_delete(self.lock_key(kind), token)

    def clear_progress(self, kind: str) -> None:
        self._store.delete(self.queue_key(kind))
        self._store.delete(self.total_key(kind))

    def clear(self, kind: str) -> None:
        """Forget everything about a job kind, including lock and stop flag."""
        self._store.delete(self.stopped_key(kind))
        self.clear_progress(kind)
        self._store.delete(self.lock_key(kind))

    def _read_queue(self, kind: str) -> list[DocumentId]:
        raw = self._store.get(self.queue_key(kind))
        if raw is None:
            return []
        if not isinstance(raw, list) or not all(_is_document_id(item) for item in raw):
            raise ConfigurationError(f"Malformed queue for bulk job '{kind}': {raw!r}")
        return raw

    def _read_total(self, kind: str, queue: list[DocumentId]) -> int:
        raw = self._store.get(self.total_key(kind))
        if raw is None and not queue:
            return 0
        if not isinstance(raw, int) or isinstance(raw, bool):
            raise ConfigurationError(f"Malformed total for bulk job '{kind}': {raw!r}")
        if raw < len(queue):
            raise ConfigurationError(
                f"Bulk job '{kind}' total {raw} is smaller than its {len(queue)} pending documents"
            )
        return raw

    def _read_lock(self, kind: str) -> float | None:
        raw = self._store.get(self.lock_key(kind))
        if raw is None:
            return None
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise ConfigurationError(f"Malformed lock for bulk job '{kind}': {raw!r}")
        return float(raw)


def _is_document_id(value: Any) -> bool:
    return (isinstance(value, int) and not isinstance(value, bool)) or (
        isinstance(value, str) and value != ""
    )
