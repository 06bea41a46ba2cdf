"""
RecordStore: owned state container for the single edited Record.

Holds the current Record independently of any widget. Widgets never get a
mutable handle: they read snapshots via current() and change state only
through apply(delta). Persistence is dispatched by publish(), which takes a
snapshot at call time so later edits never leak into an in-flight payload.

Thread safety: Not thread-safe (all operations expected on the event loop thread).
"""

import asyncio
import logging
from typing import Any, Callable, List, Mapping, Optional, Set

from recordform.persistence import RecordApi
from recordform.publish_model import PublishOutcome
from recordform.record_model import Record, changed_fields, merge_delta

logger = logging.getLogger(__name__)


class RecordStore:
    """Single source of truth for the edited Record.

    Core Attributes:
    - _record: Current Record (frozen, replaced wholesale on every apply)
    - _saved_record: Snapshot last confirmed by the persistence collaborator
    - _pending: In-flight publish tasks
    - _dispatch_seq: Number of the most recently dispatched publish
    - _saved_seq: Dispatch number the saved snapshot came from

    Everything else is derived:
    - dirty_fields → fields where _record != _saved_record
    - pending_publishes → len(_pending)
    """

    def __init__(self, api: RecordApi, initial: Optional[Record] = None):
        self._api = api
        self._record: Record = initial if initial is not None else Record()
        # The starting record counts as saved: nothing has been edited yet
        self._saved_record: Record = self._record
        self._pending: Set[asyncio.Task] = set()
        self._dispatch_seq = 0
        self._saved_seq = 0

        # Callbacks receive the set of field names that changed
        self._on_record_changed_callbacks: List[Callable[[Set[str]], None]] = []
        # Callbacks receive the PublishOutcome of every completed publish
        self._on_publish_complete_callbacks: List[Callable[[PublishOutcome], None]] = []

    @property
    def api(self) -> RecordApi:
        return self._api

    # ========== READ ==========

    def current(self) -> Record:
        """Return the Record snapshot at time of call."""
        return self._record

    @property
    def saved(self) -> Record:
        """Return the snapshot last confirmed by a successful publish."""
        return self._saved_record

    @property
    def dirty_fields(self) -> Set[str]:
        """Fields whose current value differs from the saved snapshot."""
        return changed_fields(self._saved_record, self._record)

    @property
    def is_dirty(self) -> bool:
        return bool(self.dirty_fields)

    # ========== MUTATION ==========

    def apply(self, delta: Mapping[str, Any]) -> Record:
        """Shallow-merge a delta over the current Record and install the result.

        The merged Record is built completely before it is installed, so any
        reader holding the old snapshot keeps seeing the old values.

        Args:
            delta: Mapping of field name → new value

        Returns:
            The Record now current
        """
        old = self._record
        new = merge_delta(old, delta)
        changed = changed_fields(old, new)
        if not changed:
            return old

        self._record = new
        logger.debug(f"Applied delta: changed={sorted(changed)}")
        self._fire_record_changed_callbacks(changed)
        return new

    def mark_saved(self, record: Optional[Record] = None) -> None:
        """Adopt a snapshot as the saved baseline (defaults to current()).

        Publishes dispatched before this call can no longer replace the baseline.
        """
        self._saved_record = record if record is not None else self._record
        self._saved_seq = self._dispatch_seq

    # ========== PERSISTENCE ==========

    def publish(self, publish: bool = False) -> 'asyncio.Task[PublishOutcome]':
        """Snapshot the current Record and hand it to the persistence collaborator.

        Must be called from inside a running event loop. The snapshot is taken
        synchronously, before this method returns, and the post runs as a
        separate task. The store's state is never gated on the result.

        Args:
            publish: False for an implicit save, True for an explicit publish

        Returns:
            Task resolving to the PublishOutcome (never raises for post failures)
        """
        snapshot = self._record
        payload = {**snapshot.to_dict(), 'publish': publish}
        loop = asyncio.get_running_loop()
        self._dispatch_seq += 1
        task = loop.create_task(self._post(snapshot, payload, self._dispatch_seq))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        logger.debug(f"Publish scheduled: publish={publish}, in_flight={len(self._pending)}")
        return task

    async def _post(self, snapshot: Record, payload: dict, seq: int) -> PublishOutcome:
        try:
            result = await self._api.post(payload)
        except Exception as e:
            # No rollback: the in-memory Record keeps the user's edits
            logger.error(f"Record was not saved (publish={payload['publish']}): {e}")
            outcome = PublishOutcome.failure(payload, e)
        else:
            logger.info("Content updated!")
            # Completion order is not dispatch order: an older snapshot never
            # replaces a baseline from a newer dispatch
            if seq > self._saved_seq:
                self._saved_record = snapshot
                self._saved_seq = seq
            else:
                logger.debug(f"Publish #{seq} finished after #{self._saved_seq}, baseline kept")
            outcome = PublishOutcome.success(payload, result)
        self._fire_publish_complete_callbacks(outcome)
        return outcome

    @property
    def pending_publishes(self) -> int:
        return len(self._pending)

    async def wait_for_pending(self) -> List[PublishOutcome]:
        """Await every in-flight publish and return their outcomes."""
        if not self._pending:
            return []
        return list(await asyncio.gather(*list(self._pending)))

    # ========== CALLBACKS ==========

    def on_record_changed(self, callback: Callable[[Set[str]], None]) -> None:
        """Subscribe to record change notifications.

        Args:
            callback: Function that takes a Set[str] of changed field names.
        """
        if callback not in self._on_record_changed_callbacks:
            self._on_record_changed_callbacks.append(callback)

    def off_record_changed(self, callback: Callable[[Set[str]], None]) -> None:
        """Unsubscribe from record change notifications."""
        if callback in self._on_record_changed_callbacks:
            self._on_record_changed_callbacks.remove(callback)

    def on_publish_complete(self, callback: Callable[[PublishOutcome], None]) -> None:
        """Subscribe to publish outcomes (successes and failures)."""
        if callback not in self._on_publish_complete_callbacks:
            self._on_publish_complete_callbacks.append(callback)

    def off_publish_complete(self, callback: Callable[[PublishOutcome], None]) -> None:
        """Unsubscribe from publish outcomes."""
        if callback in self._on_publish_complete_callbacks:
            self._on_publish_complete_callbacks.remove(callback)

    def _fire_record_changed_callbacks(self, changed: Set[str]) -> None:
        for callback in list(self._on_record_changed_callbacks):
            try:
                callback(set(changed))
            except Exception as e:
                logger.warning(f"Error in record_changed callback: {e}")

    def _fire_publish_complete_callbacks(self, outcome: PublishOutcome) -> None:
        for callback in list(self._on_publish_complete_callbacks):
            try:
                callback(outcome)
            except Exception as e:
                logger.warning(f"Error in publish_complete callback: {e}")
