"""Pointer and keyboard interaction state machine for one canvas.

States are ``Idle``, ``Selected``, ``Dragging`` and ``Editing``. Selection
itself lives in the :class:`~resume_canvas.editor.element_store.ElementStore`;
the controller only owns the short-lived drag and edit sessions.

Dragging uses two layers: pointer moves update a :class:`DragOverlay` that
the renderer consults, and the store is written once, on pointer-up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from resume_canvas.constants.canvas_constants import TEXT_BEARING_TYPES
from resume_canvas.editor.element_store import ElementStore
from resume_canvas.editor.elements import Position

logger = logging.getLogger(__name__)

__all__ = [
    "DragOverlay",
    "DragSession",
    "Dragging",
    "EditSession",
    "Editing",
    "Idle",
    "InteractionController",
    "InteractionState",
    "Selected",
]


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Selected:
    element_id: str


@dataclass(frozen=True)
class Dragging:
    element_id: str


@dataclass(frozen=True)
class Editing:
    element_id: str
    draft: str


InteractionState = Idle | Selected | Dragging | Editing


@dataclass(frozen=True)
class DragSession:
    """Created on pointer-down over a drag handle, dropped on pointer-up."""

    element_id: str
    pointer_origin: Position
    element_origin: Position

    def position_for(self, pointer: Position) -> Position:
        return Position(
            self.element_origin.x + (pointer.x - self.pointer_origin.x),
            self.element_origin.y + (pointer.y - self.pointer_origin.y),
        )


@dataclass
class EditSession:
    element_id: str
    draft: str


@dataclass
class DragOverlay:
    """Ephemeral positions shown while dragging; never persisted."""

    positions: dict[str, Position] = field(default_factory=dict)

    def get(self, element_id: str) -> Position | None:
        return self.positions.get(element_id)

    def set(self, element_id: str, position: Position) -> None:
        self.positions[element_id] = position

    def discard(self, element_id: str) -> None:
        self.positions.pop(element_id, None)


class InteractionController:
    """Translate input events into store mutations.

    At most one drag or edit session exists at a time. Starting an
    interaction on another element first commits a pending edit.
    """

    def __init__(self, store: ElementStore) -> None:
        self.store = store
        self.overlay = DragOverlay()
        self._drag: DragSession | None = None
        self._edit: EditSession | None = None
        self._closed = False

    @property
    def state(self) -> InteractionState:
        if self._drag is not None:
            return Dragging(self._drag.element_id)
        if self._edit is not None:
            return Editing(self._edit.element_id, self._edit.draft)
        selected = self.store.selected_id
        if selected is not None and self.store.get(selected) is not None:
            return Selected(selected)
        return Idle()

    def rendered_position(self, element_id: str) -> Position | None:
        overlay = self.overlay.get(element_id)
        if overlay is not None:
            return overlay
        element = self.store.get(element_id)
        return None if element is None else element.position

    # ------------------------------------------------------------------
    # pointer events
    # ------------------------------------------------------------------

    def click_element(self, element_id: str) -> InteractionState:
        if self._closed or self._drag is not None:
            return self.state
        if self._edit is not None:
            if self._edit.element_id == element_id:
                return self.state
            self._commit_edit()
        self._select(element_id)
        return self.state

    def click_background(self) -> InteractionState:
        if self._closed or self._drag is not None:
            return self.state
        if self._edit is not None:
            self._commit_edit()
            return self.state
        self.store.clear_selection()
        return self.state

    def pointer_down_on_handle(self, element_id: str, pointer: Position) -> InteractionState:
        if self._closed or self._drag is not None:
            return self.state
        if self._edit is not None:
            self._commit_edit()
        if not self._select(element_id):
            return self.state
        element = self.store.get(element_id)
        self._drag = DragSession(
            element_id=element_id,
            pointer_origin=pointer,
            element_origin=element.position,
        )
        return self.state

    def pointer_move(self, pointer: Position) -> Position | None:
        """Update the overlay and return the transient position, if dragging."""
        if self._closed or self._drag is None:
            return None
        element = self.store.get(self._drag.element_id)
        if element is None:
            self._abort_drag()
            return None
        position = self.store.clamp_position(element, self._drag.position_for(pointer))
        self.overlay.set(element.id, position)
        return position

    def pointer_up(self, pointer: Position) -> InteractionState:
        if self._closed or self._drag is None:
            return self.state
        session = self._drag
        self._drag = None
        self.overlay.discard(session.element_id)
        self.store.move_element(session.element_id, session.position_for(pointer))
        return self.state

    def pointer_cancel(self) -> InteractionState:
        if self._drag is not None:
            self._abort_drag()
        return self.state

    # ------------------------------------------------------------------
    # editing
    # ------------------------------------------------------------------

    def double_click(self, element_id: str) -> InteractionState:
        if self._closed or self._drag is not None:
            return self.state
        if self._edit is not None:
            if self._edit.element_id == element_id:
                return self.state
            self._commit_edit()
        if not self._select(element_id):
            return self.state
        element = self.store.get(element_id)
        if element.type in TEXT_BEARING_TYPES:
            self._edit = EditSession(element_id, element.content or "")
        return self.state

    def type_text(self, draft: str) -> InteractionState:
        if self._edit is not None and not self._closed:
            self._edit.draft = draft
        return self.state

    def key_enter(self, *, shift: bool = False) -> InteractionState:
        if self._closed or self._edit is None:
            return self.state
        if shift:
            self._edit.draft += "\n"
        else:
            self._commit_edit()
        return self.state

    def blur(self) -> InteractionState:
        if self._edit is not None and not self._closed:
            self._commit_edit()
        return self.state

    def key_delete(self) -> InteractionState:
        if self._closed or self._edit is not None or self._drag is not None:
            return self.state
        selected = self.store.selected_id
        if selected is not None:
            self.store.delete_element(selected)
        return self.state

    def close(self) -> None:
        """Drop any in-progress session and ignore further input."""
        if self._drag is not None:
            self._abort_drag()
        self._edit = None
        self._closed = True

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------

    def _select(self, element_id: str) -> bool:
        if not self.store.select(element_id):
            logger.debug("Ignoring interaction with unknown element %s", element_id)
            return False
        self.store.raise_to_front(element_id)
        return True

    def _commit_edit(self) -> None:
        session = self._edit
        self._edit = None
        if session is not None:
            self.store.update_text_content(session.element_id, session.draft)

    def _abort_drag(self) -> None:
        session = self._drag
        self._drag = None
        if session is not None:
            self.overlay.discard(session.element_id)
