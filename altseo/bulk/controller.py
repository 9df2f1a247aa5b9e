"""Resumable, cancellable bulk generation over a snapshot of documents.

The controller holds no state of its own. Each call to step() rebuilds the
job from the key/value store, processes at most one document and writes the
shortened queue back, so a job survives any number of independent, short
invocations driven by an external polling loop.

Per job kind the lifecycle is:

    idle --step--> snapshot taken --step--> ... --step--> complete (state cleared)
                         \\--request_stop + step--> stopped (state cleared)

A document id is popped and persisted *before* its callback runs. A callback
that raises therefore does not put the id back: the job moves on and the
document is not retried.
"""

import time
from collections.abc import Callable, Mapping

from altseo.bulk.exceptions import ConcurrencyConflict, ConfigurationError
from altseo.bulk.models import (
    COMPLETE_PERCENTAGE,
    STOPPED_PERCENTAGE,
    BulkStatus,
    JobKind,
    StepResult,
    StepStatus,
    StopResult,
)
from altseo.bulk.state_repository import BulkStateRepository
from altseo.documents.base import BaseDocumentStore
from altseo.documents.models import DocumentId
from altseo.generation.models import GenerationResult
from altseo.logging.logger import Log
from altseo.storage.exceptions import StateStoreError

GenerationCallback = Callable[[DocumentId], GenerationResult]

DEFAULT_STEP_TIME_LIMIT_SECONDS = 300


def progress_percentage(total: int, remaining: int) -> int:
    """Percentage reported while the document just popped is being processed."""
    processed = total - remaining - 1
    return processed * 100 // total


class BulkJobController:
    """Drive bulk jobs one document per step."""

    def __init__(
        self,
        state_repo: BulkStateRepository,
        document_store: BaseDocumentStore | None,
        callbacks: Mapping[str, GenerationCallback],
        step_time_limit_seconds: float = DEFAULT_STEP_TIME_LIMIT_SECONDS,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._state = state_repo
        self._documents = document_store
        self._callbacks = {JobKind(kind).value: cb for kind, cb in callbacks.items()}
        self._step_time_limit = step_time_limit_seconds
        self._monotonic = monotonic

    def step(self, kind: str) -> StepResult:
        """Process the next document of a job kind.

        Never raises: failures come back as an ERROR result and the lock is
        always released.
        """
        try:
            kind = self._resolve_kind(kind)
            if self._state.is_stop_requested(kind):
                return self._stop(kind)
            token = self._acquire(kind)
        except ConcurrencyConflict as exc:
            Log.info(str(exc))
            return StepResult(StepStatus.BUSY, 0, "Another process is already running")
        except (ConfigurationError, StateStoreError) as exc:
            Log.error(f"Bulk {kind} step rejected: {exc}")
            return StepResult(StepStatus.ERROR, 0, f"Error processing: {exc}")

        try:
            result = self._advance(kind)
        except Exception as exc:
            Log.exception(f"Bulk {kind} step failed: {exc}")
            result = StepResult(StepStatus.ERROR, 0, f"Error processing: {exc}")
        finally:
            self._release(kind, token)
        return result

    def request_stop(self, kind: str) -> StopResult:
        """Ask the job to stop at the next step boundary. Idempotent."""
        try:
            kind = self._resolve_kind(kind)
            self._state.request_stop(kind)
        except (ConfigurationError, StateStoreError) as exc:
            Log.error(f"Could not request stop for bulk {kind}: {exc}")
            return StopResult(success=False)
        Log.info(f"Stop requested for bulk {kind} job")
        return StopResult(success=True)

    def status(self, kind: str) -> BulkStatus:
        """Progress snapshot without touching the queue or the lock.

        Raises:
            ConfigurationError: for an unknown kind or malformed state.
        """
        kind = self._resolve_kind(kind)
        running = self._state.has_queue(kind)
        state = self._state.load(kind)
        percentage = state.processed * 100 // state.total if state.total else 0
        return BulkStatus(
            kind=kind,
            running=running,
            total=state.total,
            remaining=state.remaining,
            percentage=percentage,
            locked=self._state.is_locked(kind),
            stop_requested=state.stopped,
        )

    def reset(self, kind: str) -> None:
        """Drop all persisted state of a job kind, whatever shape it is in."""
        kind = self._resolve_kind(kind)
        self._state.clear(kind)
        Log.info(f"Bulk {kind} job state reset")

    def _resolve_kind(self, kind: str) -> str:
        try:
            value = JobKind(kind).value
        except ValueError as exc:
            raise ConfigurationError(f"Unknown bulk job kind '{kind}'") from exc
        if value not in self._callbacks:
            raise ConfigurationError(f"No generation callback configured for '{value}'")
        return value

    def _acquire(self, kind: str) -> float:
        token = self._state.acquire_lock(kind)
        if token is None:
            raise ConcurrencyConflict(f"Bulk {kind} job is locked by another step")
        return token

    def _release(self, kind: str, token: float) -> None:
        try:
            released = self._state.release_lock(kind, token)
        except StateStoreError as exc:
            Log.error(
                f"Failed to release bulk {kind} lock, it expires after "
                f"{self._state.lock_timeout:g}s: {exc}"
            )
            return
        if not released:
            Log.debug("Bulk lock no longer held by this step, left in place", kind=kind)

    def _stop(self, kind: str) -> StepResult:
        self._state.clear(kind)
        Log.info(f"Bulk {kind} job stopped, state cleared")
        return StepResult(StepStatus.STOPPED, STOPPED_PERCENTAGE, "Process was stopped")

    def _snapshot(self, kind: str) -> None:
        if self._documents is None:
            raise ConfigurationError("No document store configured")
        document_ids = list(self._documents.list_eligible_document_ids(kind))
        self._state.save_snapshot(kind, document_ids)
        Log.info("Bulk job snapshot taken", kind=kind, documents=len(document_ids))
        Log.debug("Bulk job queue", kind=kind, queue=document_ids)

    def _advance(self, kind: str) -> StepResult:
        if not self._state.has_queue(kind):
            self._snapshot(kind)

        # A stop may have arrived while the snapshot was being taken.
        if self._state.is_stop_requested(kind):
            return self._stop(kind)

        state = self._state.load(kind)
        if not state.queue:
            self._state.clear_progress(kind)
            return StepResult(StepStatus.COMPLETE, COMPLETE_PERCENTAGE, "Processing complete")

        document_id = state.queue.pop(0)
        self._state.save_queue(kind, state.queue)
        processed = state.total - state.remaining - 1
        percentage = progress_percentage(state.total, state.remaining)
        Log.info(
            "Bulk step processing document",
            kind=kind,
            document_id=document_id,
            progress=f"{processed}/{state.total}",
            percentage=percentage,
            remaining=state.remaining,
        )

        generation = self._run_callback(kind, document_id)

        if not state.queue:
            self._state.clear_progress(kind)
            Log.info(f"Bulk {kind} job completed for all {state.total} documents")
            return StepResult(
                StepStatus.COMPLETE,
                COMPLETE_PERCENTAGE,
                f"Processing complete: all {state.total} documents processed",
                document_id,
            )

        if generation.success:
            message = f"Processing document {document_id}... ({processed} of {state.total})"
        else:
            message = (
                f"Failed to process document {document_id}: {generation.message} "
                f"({processed} of {state.total})"
            )
        return StepResult(StepStatus.PROGRESS, percentage, message, document_id)

    def _run_callback(self, kind: str, document_id: DocumentId) -> GenerationResult:
        started = self._monotonic()
        generation = self._callbacks[kind](document_id)
        elapsed = self._monotonic() - started
        if elapsed > self._step_time_limit:
            Log.warning(
                f"Bulk {kind} callback for document {document_id} took {elapsed:.0f}s, "
                f"over the {self._step_time_limit:g}s step budget"
            )
        if not generation.success:
            Log.warning(
                f"Document not generated: {generation.message}",
                kind=kind,
                document_id=document_id,
            )
        return generation
