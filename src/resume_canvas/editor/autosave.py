"""Debounced autosave and local-to-persisted reconciliation.

The engine watches an :class:`ElementStore`, compares a serialized snapshot
with the one last saved, and after a quiescence window with no further
edits sends the project to a :class:`ProjectGateway`.

Save state is an explicit machine::

    CLEAN --edit--> DIRTY --begin_save--> SAVING --ok--> CLEAN
                                                 --ok, edited meanwhile--> DIRTY
                                                 --failure--> DIRTY

Only one save runs at a time. A save requested while another is in flight
is skipped, not queued. Autosave failures are logged and retried after the
next edit; manual save failures raise :class:`SaveFailedError`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from resume_canvas.config import EditorSettings, load_editor_settings
from resume_canvas.editor.errors import SaveFailedError
from resume_canvas.editor.identity import PersistedProjectId, ProjectLocator
from resume_canvas.editor.snapshot import build_payload, fit_payload, snapshot_of
from resume_canvas.services.project_gateway import GatewayError
from resume_canvas.services.thumbnail_capture import Thumbnail

if TYPE_CHECKING:
    from resume_canvas.editor.element_store import ElementStore, StoreChange
    from resume_canvas.services.project_gateway import ProjectGateway, SavedProject
    from resume_canvas.services.thumbnail_capture import ThumbnailCapture

logger = logging.getLogger(__name__)

__all__ = ["AutosaveEngine", "SaveOutcome", "SaveState", "SaveStateMachine"]


class SaveState(StrEnum):
    CLEAN = "clean"
    DIRTY = "dirty"
    SAVING = "saving"


class SaveOutcome(StrEnum):
    SAVED = "saved"
    SKIPPED = "skipped"
    FAILED = "failed"


class SaveStateMachine:
    """Guards for the CLEAN/DIRTY/SAVING lifecycle."""

    def __init__(self) -> None:
        self.state = SaveState.CLEAN

    def mark_dirty(self) -> bool:
        """CLEAN/DIRTY -> DIRTY. While SAVING the caller re-checks afterwards."""
        if self.state is SaveState.SAVING:
            return False
        self.state = SaveState.DIRTY
        return True

    def mark_clean(self) -> bool:
        """DIRTY -> CLEAN when edits were undone back to the saved state."""
        if self.state is not SaveState.DIRTY:
            return False
        self.state = SaveState.CLEAN
        return True

    def begin_save(self, *, require_dirty: bool) -> bool:
        if self.state is SaveState.SAVING:
            return False
        if require_dirty and self.state is not SaveState.DIRTY:
            return False
        self.state = SaveState.SAVING
        return True

    def finish_save(self, *, succeeded: bool, still_dirty: bool) -> SaveState:
        if self.state is not SaveState.SAVING:
            msg = f"finish_save called in state {self.state}"
            raise RuntimeError(msg)
        self.state = SaveState.DIRTY if (not succeeded or still_dirty) else SaveState.CLEAN
        return self.state


class AutosaveEngine:
    """Keep the server copy of one project in step with the store.

    Must be used from inside a running asyncio event loop; the debounce
    timer is scheduled with ``loop.call_later``.
    """

    def __init__(
        self,
        store: ElementStore,
        gateway: ProjectGateway,
        capture: ThumbnailCapture | None = None,
        *,
        locator: ProjectLocator,
        settings: EditorSettings | None = None,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self.capture = capture
        self.settings = settings or load_editor_settings()
        self.machine = SaveStateMachine()
        self.thumbnail: Thumbnail | None = None
        self.last_saved_at: datetime | None = None
        self.last_payload_degraded = False
        self._locator = locator
        self._last_saved_snapshot = snapshot_of(store)
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[SaveOutcome]] = set()
        self._promotion_listeners: list[Callable[[ProjectLocator], None]] = []
        self._saved_listeners: list[Callable[[SavedProject], None]] = []
        self._closed = False
        self._unsubscribe = store.subscribe(self._on_store_change)

    # ------------------------------------------------------------------
    # observation
    # ------------------------------------------------------------------

    @property
    def locator(self) -> ProjectLocator:
        return self._locator

    @property
    def state(self) -> SaveState:
        return self.machine.state

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    def on_promoted(self, listener: Callable[[ProjectLocator], None]) -> None:
        self._promotion_listeners.append(listener)

    def on_saved(self, listener: Callable[[SavedProject], None]) -> None:
        self._saved_listeners.append(listener)

    def _on_store_change(self, change: StoreChange) -> None:
        self.notify_change()

    def notify_change(self) -> None:
        """Re-evaluate dirtiness and restart the quiescence timer if dirty."""
        if self._closed:
            return
        if snapshot_of(self.store) == self._last_saved_snapshot:
            if self.machine.mark_clean():
                self._cancel_timer()
            return
        self.machine.mark_dirty()
        self._restart_timer()

    # ------------------------------------------------------------------
    # saving
    # ------------------------------------------------------------------

    async def save_now(self) -> SaveOutcome:
        """Run a manual save immediately, bypassing the timer.

        Raises:
            SaveFailedError: If the persistence API call fails.
        """
        return await self._save_cycle(manual=True)

    async def wait_idle(self) -> None:
        """Wait for any timer-started save that is still running."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        """Stop observing the store and cancel the pending timer."""
        self._closed = True
        self._cancel_timer()
        self._unsubscribe()

    async def _save_cycle(self, *, manual: bool) -> SaveOutcome:
        if not self.machine.begin_save(require_dirty=not manual):
            logger.info(
                "%s save skipped (state=%s)", "Manual" if manual else "Auto", self.machine.state
            )
            return SaveOutcome.SKIPPED
        if manual:
            self._cancel_timer()

        sent_snapshot = snapshot_of(self.store)
        payload = build_payload(self.store)
        try:
            thumbnail = await self._capture_thumbnail()
            payload["thumbnail"] = {"url": thumbnail.url, "public_id": thumbnail.public_id}
            payload, degraded = fit_payload(payload, self.settings.payload_limit_bytes)
            saved = await self._send(payload)
        except Exception as exc:
            self.machine.finish_save(succeeded=False, still_dirty=True)
            if isinstance(exc, GatewayError):
                logger.warning("%s save failed: %s", "Manual" if manual else "Auto", exc)
            else:
                logger.exception("%s save failed unexpectedly", "Manual" if manual else "Auto")
            if manual:
                detail = exc.detail if isinstance(exc, GatewayError) else str(exc)
                msg = f"Save failed: {detail or 'could not save project.'}"
                raise SaveFailedError(msg) from exc
            return SaveOutcome.FAILED

        self.thumbnail = thumbnail
        self.last_payload_degraded = degraded
        self.last_saved_at = datetime.now(UTC)
        self._last_saved_snapshot = sent_snapshot
        still_dirty = snapshot_of(self.store) != sent_snapshot
        self.machine.finish_save(succeeded=True, still_dirty=still_dirty)
        logger.info("Project %s saved (%s)", saved.id, "manual" if manual else "autosave")
        for listener in list(self._saved_listeners):
            listener(saved)
        if still_dirty and not self._closed:
            self._restart_timer()
        return SaveOutcome.SAVED

    async def _send(self, payload: dict) -> SavedProject:
        identity = self._locator.identity
        if isinstance(identity, PersistedProjectId):
            return await self.gateway.update(identity.server_id, payload)
        saved = await self.gateway.create(payload)
        self._promote(saved.id)
        return saved

    def _promote(self, server_id: str) -> None:
        # Identity and reload address change in one assignment.
        self._locator = ProjectLocator.for_identity(PersistedProjectId(server_id))
        logger.info("Project promoted to persisted id %s", server_id)
        for listener in list(self._promotion_listeners):
            listener(self._locator)

    async def _capture_thumbnail(self) -> Thumbnail:
        if self.capture is None:
            return Thumbnail.empty()
        try:
            return await self.capture.capture(self.store)
        except Exception:
            logger.exception("Thumbnail capture failed; saving with an empty thumbnail")
            return Thumbnail.empty()

    # ------------------------------------------------------------------
    # timer
    # ------------------------------------------------------------------

    def _restart_timer(self) -> None:
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.settings.quiescence_seconds, self._on_quiescence)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_quiescence(self) -> None:
        self._timer = None
        if self._closed:
            return
        task = asyncio.ensure_future(self._save_cycle(manual=False))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
