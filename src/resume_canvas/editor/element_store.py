"""Canonical in-memory state of one canvas project.

The store owns the ordered element list, the project metadata, the current
selection and the z-index counter. Every operation is synchronous. Unknown
element ids are ignored rather than raised on, because UI callers have no
way to recover in the middle of a pointer interaction.

Observers registered with :meth:`ElementStore.subscribe` are called after
each mutation, in the order mutations are applied.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

from resume_canvas.constants.canvas_constants import (
    DEFAULT_PROJECT_NAME,
    DUPLICATE_OFFSET,
    FIRST_Z_INDEX,
    MIN_ELEMENT_WIDTH,
    TEXT_BEARING_TYPES,
    ElementType,
)
from resume_canvas.editor.elements import (
    CanvasElement,
    CanvasSize,
    Position,
    Viewport,
    default_content,
    default_style,
    element_size,
    new_element_id,
)

logger = logging.getLogger(__name__)

__all__ = ["ChangeKind", "ElementStore", "StoreChange"]


class ChangeKind(StrEnum):
    ADDED = "added"
    STYLE = "style"
    MOVED = "moved"
    CONTENT = "content"
    RESIZED = "resized"
    RAISED = "raised"
    DELETED = "deleted"
    SELECTION = "selection"
    METADATA = "metadata"
    REPLACED = "replaced"


@dataclass(frozen=True)
class StoreChange:
    kind: ChangeKind
    element_id: str | None = None


Listener = Callable[[StoreChange], None]


class ElementStore:
    """Element list, metadata and selection for a single project."""

    def __init__(
        self,
        elements: Iterable[CanvasElement] = (),
        *,
        name: str = DEFAULT_PROJECT_NAME,
        description: str = "",
        canvas: CanvasSize | None = None,
        viewport: Viewport | None = None,
    ) -> None:
        self._elements: list[CanvasElement] = list(elements)
        self._name = name
        self._description = description
        self.canvas = canvas or CanvasSize()
        self.viewport = viewport or Viewport(width=self.canvas.width, height=self.canvas.height)
        self._selected_id: str | None = None
        self._clipboard: CanvasElement | None = None
        self._listeners: list[Listener] = []
        self._next_z_index = self._z_index_after(self._elements)

    # ------------------------------------------------------------------
    # read access
    # ------------------------------------------------------------------

    @property
    def elements(self) -> tuple[CanvasElement, ...]:
        return tuple(self._elements)

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def next_z_index(self) -> int:
        return self._next_z_index

    def get(self, element_id: str) -> CanvasElement | None:
        index = self._index_of(element_id)
        return None if index is None else self._elements[index]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # element operations
    # ------------------------------------------------------------------

    def add_element(self, element_type: ElementType | str) -> CanvasElement:
        """Create an element with type defaults at the viewport center.

        The new element takes the next z-index and becomes the only
        selected element.
        """
        element_type = ElementType(element_type)
        element = CanvasElement(
            id=new_element_id(element_type),
            type=element_type,
            position=Position(0, 0),
            z_index=self._take_z_index(),
            content=default_content(element_type),
            style=default_style(element_type),
        )
        width, height = element_size(element)
        center = self.viewport.center
        centered = Position(center.x - width / 2, center.y - height / 2)
        element = replace(element, position=self.clamp_position(element, centered))
        self._elements.append(element)
        self._selected_id = element.id
        self._notify(StoreChange(ChangeKind.ADDED, element.id))
        return element

    def update_element_style(self, element_id: str, prop: str, value: Any) -> None:
        index = self._index_of(element_id)
        if index is None:
            return
        element = self._elements[index]
        self._elements[index] = replace(element, style={**element.style, prop: value})
        self._notify(StoreChange(ChangeKind.STYLE, element_id))

    def move_element(self, element_id: str, position: Position) -> None:
        """Commit *position*, clamped to the canvas bounds."""
        index = self._index_of(element_id)
        if index is None:
            return
        element = self._elements[index]
        self._elements[index] = replace(element, position=self.clamp_position(element, position))
        self._notify(StoreChange(ChangeKind.MOVED, element_id))

    def update_text_content(self, element_id: str, content: str) -> None:
        index = self._index_of(element_id)
        if index is None:
            return
        element = self._elements[index]
        if element.type not in TEXT_BEARING_TYPES:
            logger.debug("Ignoring text update for %s element %s", element.type, element_id)
            return
        self._elements[index] = replace(element, content=content)
        self._notify(StoreChange(ChangeKind.CONTENT, element_id))

    def resize_element(self, element_id: str, width: float) -> None:
        index = self._index_of(element_id)
        if index is None:
            return
        element = self._elements[index]
        resized = replace(element, style={**element.style, "width": max(MIN_ELEMENT_WIDTH, width)})
        self._elements[index] = replace(
            resized, position=self.clamp_position(resized, resized.position)
        )
        self._notify(StoreChange(ChangeKind.RESIZED, element_id))

    def delete_element(self, element_id: str) -> None:
        index = self._index_of(element_id)
        if index is None:
            return
        del self._elements[index]
        if self._selected_id == element_id:
            self._selected_id = None
        self._notify(StoreChange(ChangeKind.DELETED, element_id))

    def raise_to_front(self, element_id: str) -> None:
        """Give the element the next z-index unless it is already alone on top."""
        index = self._index_of(element_id)
        if index is None:
            return
        element = self._elements[index]
        if element.z_index == self._next_z_index - 1 and not any(
            other.z_index >= element.z_index for other in self._elements if other.id != element_id
        ):
            return
        self._elements[index] = replace(element, z_index=self._take_z_index())
        self._notify(StoreChange(ChangeKind.RAISED, element_id))

    def duplicate_element(self, element_id: str) -> CanvasElement | None:
        source = self.get(element_id)
        if source is None:
            return None
        return self._insert_copy(source)

    def copy_element(self, element_id: str) -> bool:
        source = self.get(element_id)
        if source is None:
            return False
        self._clipboard = replace(source, style=dict(source.style))
        return True

    def paste_element(self) -> CanvasElement | None:
        if self._clipboard is None:
            return None
        return self._insert_copy(self._clipboard)

    # ------------------------------------------------------------------
    # selection and metadata
    # ------------------------------------------------------------------

    def select(self, element_id: str) -> bool:
        if self._index_of(element_id) is None:
            return False
        if self._selected_id != element_id:
            self._selected_id = element_id
            self._notify(StoreChange(ChangeKind.SELECTION, element_id))
        return True

    def clear_selection(self) -> None:
        if self._selected_id is None:
            return
        self._selected_id = None
        self._notify(StoreChange(ChangeKind.SELECTION))

    def rename(self, name: str) -> None:
        if name == self._name:
            return
        self._name = name
        self._notify(StoreChange(ChangeKind.METADATA))

    def describe(self, description: str) -> None:
        if description == self._description:
            return
        self._description = description
        self._notify(StoreChange(ChangeKind.METADATA))

    def replace_elements(self, elements: Iterable[CanvasElement]) -> None:
        """Swap in a whole element list, e.g. after loading a project."""
        self._elements = list(elements)
        self._selected_id = None
        self._next_z_index = self._z_index_after(self._elements)
        self._notify(StoreChange(ChangeKind.REPLACED))

    def set_viewport(self, viewport: Viewport) -> None:
        self.viewport = viewport

    # ------------------------------------------------------------------
    # geometry
    # ------------------------------------------------------------------

    def clamp_position(self, element: CanvasElement, position: Position) -> Position:
        """Clamp to ``[0, canvas - element size]`` on both axes."""
        width, height = element_size(element)
        max_x = self.canvas.width - width
        max_y = self.canvas.height - height
        return Position(
            x=max(0.0, min(float(position.x), max_x)),
            y=max(0.0, min(float(position.y), max_y)),
        )

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------

    def _insert_copy(self, source: CanvasElement) -> CanvasElement:
        copy = CanvasElement(
            id=new_element_id(source.type),
            type=source.type,
            position=source.position,
            z_index=self._take_z_index(),
            content=source.content,
            style=dict(source.style),
        )
        offset = Position(
            source.position.x + DUPLICATE_OFFSET, source.position.y + DUPLICATE_OFFSET
        )
        copy = replace(copy, position=self.clamp_position(copy, offset))
        self._elements.append(copy)
        self._selected_id = copy.id
        self._notify(StoreChange(ChangeKind.ADDED, copy.id))
        return copy

    def _take_z_index(self) -> int:
        z_index = self._next_z_index
        self._next_z_index += 1
        return z_index

    @staticmethod
    def _z_index_after(elements: Iterable[CanvasElement]) -> int:
        return max((element.z_index for element in elements), default=FIRST_Z_INDEX - 1) + 1

    def _index_of(self, element_id: str) -> int | None:
        for index, element in enumerate(self._elements):
            if element.id == element_id:
                return index
        return None

    def _notify(self, change: StoreChange) -> None:
        for listener in list(self._listeners):
            listener(change)
