"""
Interaction Controller for PageSketch

Turns pointer and keyboard input into document mutations.

States:
- Idle
- DraggingShape / DraggingText: moving, rotating or resizing an entity
- Painting: a draft shape follows the pointer until the pointer exits
- AwaitingTextInput: the text tool was clicked on empty space; the next
  printable keystroke creates a text item there

Pointer-up and pointer-leave are the same "exit" trigger, so a draft is
committed even when the pointer leaves the surface with the button held.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union
import logging
import math

from PyQt6.QtGui import QImage

from ..core.document import Document
from ..core.geometry import Point, pointer_angle
from ..core.page import Page
from ..core.shapes import BoxShape, HandleKind, ImageShape, Shape
from ..core.text import TextItem, TextLayout
from .hit_test import HitResult, HitTester
from .text_editor import TextEditor
from .tools import ToolType, create_draft, extend_draft

logger = logging.getLogger(__name__)


class DragOperation(Enum):
    """What a drag does to the grabbed entity."""
    MOVE = "move"
    ROTATE = "rotate"
    RESIZE = "resize"


_HANDLE_OPERATIONS = {
    HandleKind.ROTATE: DragOperation.ROTATE,
    HandleKind.RESIZE: DragOperation.RESIZE,
}


@dataclass
class Idle:
    pass


@dataclass
class Dragging:
    """
    An entity grabbed by the pointer.

    ``offset`` is pointer minus the entity's origin (move) or minus the
    stored corner named by ``corner`` (resize). Rotation keeps the
    entity's angle and the pointer's angle around the entity's center at
    grab time.
    """
    entity: Union[Shape, TextItem]
    operation: DragOperation
    offset: Point = field(default_factory=lambda: Point(0, 0))
    initial_angle: float = 0.0
    initial_pointer_angle: float = 0.0
    corner: Tuple[str, str] = ("x2", "y2")


@dataclass
class DraggingShape(Dragging):
    pass


@dataclass
class DraggingText(Dragging):
    pass


@dataclass
class Painting:
    """A draft shape owned by the controller until it is committed."""
    page: Page
    draft: Shape


@dataclass
class AwaitingTextInput:
    position: Point


InteractionState = Union[Idle, DraggingShape, DraggingText, Painting, AwaitingTextInput]


class InteractionController:
    """
    Drag/rotate/resize state machine plus the shape and text creation flows.

    Every handler returns True when the document (or the draft) changed,
    so the caller knows to redraw.

    Args:
        document: the document to mutate
        settings: EditorSettings providing tool, color, sizes and rotate step
        metrics: text metrics shared with the renderer
    """

    def __init__(self, document: Document, settings, metrics):
        self.document = document
        self.settings = settings
        self.metrics = metrics
        self.hit_tester = HitTester(metrics)
        self.text_editor = TextEditor(metrics)
        self.state: InteractionState = Idle()
        self.pending_image: Optional[QImage] = None

    @property
    def draft(self) -> Optional[Shape]:
        """The shape being drawn, not yet part of any page."""
        if isinstance(self.state, Painting):
            return self.state.draft
        return None

    @property
    def pending_text_position(self) -> Optional[Point]:
        if isinstance(self.state, AwaitingTextInput):
            return self.state.position
        return None

    def _set_state(self, state: InteractionState) -> None:
        logger.debug(f"{type(self.state).__name__} -> {type(state).__name__}")
        self.state = state

    def _center_of(self, entity: Union[Shape, TextItem]) -> Point:
        if isinstance(entity, TextItem):
            return TextLayout(entity, self.metrics).center()
        return entity.center()

    # Pointer input

    def pointer_down(self, point: Point) -> bool:
        """Handle a pointer press at a page-local position."""
        page = self.document.current_page
        if page is None:
            return False

        changed = False
        if isinstance(self.state, Painting):
            changed = self.pointer_exit()

        hit = self.hit_tester.hit_test(page, point)
        if hit:
            return self._begin_drag(hit, point) or changed

        tool = self.settings.tool
        if tool == ToolType.TEXT:
            self.document.clear_selection()
            self._set_state(AwaitingTextInput(point.copy()))
            return True

        if tool == ToolType.IMAGE:
            if self.pending_image is None:
                self._set_state(Idle())
                return changed
            return self._insert_image(page, point)

        if tool.is_drawing:
            draft = create_draft(
                tool, self.document.ids.next_shape_id(), point,
                self.settings.color, self.settings.stroke_width,
                page.background_color
            )
            self.document.clear_selection()
            if isinstance(draft, BoxShape):
                draft.selected = True
            self._set_state(Painting(page, draft))
            return True

        self._set_state(Idle())
        return changed

    def _begin_drag(self, hit: HitResult, point: Point) -> bool:
        entity = hit.entity
        dragging_class = DraggingShape if hit.is_shape else DraggingText

        if hit.is_handle:
            operation = _HANDLE_OPERATIONS[hit.handle]
            if operation == DragOperation.ROTATE:
                center = self._center_of(entity)
                self._set_state(dragging_class(
                    entity, operation,
                    initial_angle=entity.angle,
                    initial_pointer_angle=pointer_angle(center, point)
                ))
            else:
                corner = entity.resize_corner()
                self._set_state(dragging_class(
                    entity, operation,
                    offset=point - entity.corner_point(corner),
                    corner=corner
                ))
            return False

        self.document.select(entity)
        if isinstance(entity, TextItem):
            entity.place_caret(self.text_editor.caret_index_at(entity, point))
        self._set_state(dragging_class(entity, DragOperation.MOVE,
                                       offset=point - entity.origin()))
        return True

    def _insert_image(self, page: Page, point: Point) -> bool:
        shape = ImageShape.centered_at(self.document.ids.next_shape_id(),
                                       self.pending_image, point)
        page.add_shape(shape)
        self.document.select(shape)
        self.pending_image = None
        self._set_state(Idle())
        logger.debug(f"Inserted image shape {shape.id}")
        return True

    def pointer_move(self, point: Point) -> bool:
        """Handle pointer motion."""
        state = self.state
        if isinstance(state, Dragging):
            return self._drag(state, point)
        if isinstance(state, Painting):
            extend_draft(state.draft, point)
            return True
        return False

    def _drag(self, state: Dragging, point: Point) -> bool:
        entity = state.entity
        if state.operation == DragOperation.MOVE:
            entity.move_origin_to(point - state.offset)
            return True
        if state.operation == DragOperation.ROTATE:
            current = pointer_angle(self._center_of(entity), point)
            delta = math.degrees(current - state.initial_pointer_angle)
            entity.angle = state.initial_angle + delta
            return True
        if isinstance(entity, BoxShape):
            target = point - state.offset
            return entity.resize_to(target.x, target.y, state.corner)
        return False

    def pointer_exit(self) -> bool:
        """
        Handle pointer release or the pointer leaving the surface.

        Commits the draft when painting; ends any drag without further
        mutation.
        """
        state = self.state
        if isinstance(state, Painting):
            state.page.add_shape(state.draft)
            self._set_state(Idle())
            return True
        if isinstance(state, Dragging):
            self._set_state(Idle())
        return False

    def finish_interaction(self) -> bool:
        """Settle any in-progress interaction, e.g. before switching pages."""
        changed = self.pointer_exit()
        if isinstance(self.state, AwaitingTextInput):
            self._set_state(Idle())
        return changed

    # Keyboard input

    def rotate_selected(self) -> bool:
        """Rotate the selected shape by one rotate step. Texts are not affected."""
        shape = self.document.selected_shape()
        if shape is None:
            return False
        shape.rotate_by(self.settings.rotate_step)
        return True

    def key_down(self, key: str) -> bool:
        """
        Handle a keydown.

        The rotate key applies whatever tool is active. Everything else is
        text editing and only applies while the text tool is active.
        """
        changed = False
        if isinstance(key, str) and key.lower() == self.settings.rotate_key.lower():
            changed = self.rotate_selected()

        if self.settings.tool != ToolType.TEXT:
            return changed

        text = self.document.selected_text()
        if text is not None:
            return self.text_editor.handle_key(text, key) or changed

        state = self.state
        page = self.document.current_page
        if isinstance(state, AwaitingTextInput) and page is not None:
            created = self.text_editor.start_text(
                self.document, page, state.position, key,
                self.settings.color, self.settings.font_size
            )
            if created is not None:
                self._set_state(Idle())
                return True
        return changed
