"""A mounted canvas editor: store, interaction controller and autosave.

``EditorSession.open`` resolves an external project reference, loads the
project if it exists, and wires the autosave engine to the store.
``close`` is the unmount step: it cancels the debounce timer and detaches
every listener.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from resume_canvas.constants.canvas_constants import DEFAULT_PROJECT_NAME
from resume_canvas.editor.autosave import AutosaveEngine, SaveOutcome
from resume_canvas.editor.element_store import ElementStore
from resume_canvas.editor.errors import SaveFailedError
from resume_canvas.editor.identity import (
    LocalProjectId,
    ProjectLocator,
    new_local_identity,
    parse_project_reference,
)
from resume_canvas.editor.interaction import InteractionController
from resume_canvas.editor.snapshot import elements_from_data
from resume_canvas.services.project_gateway import GatewayError

if TYPE_CHECKING:
    from resume_canvas.config import EditorSettings
    from resume_canvas.services.project_gateway import ProjectGateway, SavedProject
    from resume_canvas.services.thumbnail_capture import ThumbnailCapture

logger = logging.getLogger(__name__)

__all__ = ["EditorSession", "SaveNotice"]


@dataclass(frozen=True)
class SaveNotice:
    """A dismissible message shown by the editor surface."""

    message: str
    level: str = "info"
    dismissible: bool = True


class EditorSession:
    def __init__(
        self,
        store: ElementStore,
        gateway: ProjectGateway,
        capture: ThumbnailCapture | None = None,
        *,
        locator: ProjectLocator | None = None,
        settings: EditorSettings | None = None,
    ) -> None:
        self.store = store
        self.controller = InteractionController(store)
        self.autosave = AutosaveEngine(
            store,
            gateway,
            capture,
            locator=locator or ProjectLocator.for_identity(new_local_identity()),
            settings=settings,
        )
        self.notice: SaveNotice | None = None
        self.last_edited_project_id: str | None = None
        self.autosave.on_saved(self._remember_saved)

    @classmethod
    async def open(
        cls,
        gateway: ProjectGateway,
        project_reference: str | None = None,
        capture: ThumbnailCapture | None = None,
        *,
        settings: EditorSettings | None = None,
    ) -> EditorSession:
        """Mount an editor for *project_reference*.

        A missing or malformed reference, or one the API cannot return,
        starts a new local project instead of failing.
        """
        identity = parse_project_reference(project_reference)
        if isinstance(identity, LocalProjectId):
            return cls(ElementStore(), gateway, capture, settings=settings)

        try:
            saved = await gateway.fetch(identity.server_id)
        except GatewayError as exc:
            logger.warning(
                "Could not load project %s (%s); starting a new one", identity.server_id, exc
            )
            session = cls(ElementStore(), gateway, capture, settings=settings)
            session.notice = SaveNotice("Could not load that CV; started a new one.", "error")
            return session

        store = ElementStore(
            elements_from_data(saved.data),
            name=saved.name or DEFAULT_PROJECT_NAME,
            description=saved.description,
        )
        session = cls(
            store,
            gateway,
            capture,
            locator=ProjectLocator.for_identity(identity),
            settings=settings,
        )
        session.last_edited_project_id = saved.id
        return session

    @property
    def locator(self) -> ProjectLocator:
        return self.autosave.locator

    @property
    def address(self) -> str:
        return self.autosave.locator.address

    async def save(self) -> SaveOutcome:
        """Manual save; failures become a dismissible error notice."""
        try:
            outcome = await self.autosave.save_now()
        except SaveFailedError as exc:
            self.notice = SaveNotice(str(exc), "error")
            return SaveOutcome.FAILED
        if outcome is SaveOutcome.SKIPPED:
            self.notice = SaveNotice("Save already in progress", "info")
        else:
            self.notice = SaveNotice("CV saved successfully!", "success")
        return outcome

    def dismiss_notice(self) -> None:
        self.notice = None

    def close(self) -> None:
        self.controller.close()
        self.autosave.close()

    def _remember_saved(self, saved: SavedProject) -> None:
        self.last_edited_project_id = saved.id
