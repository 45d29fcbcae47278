"""Interactive editing of an existing rectangle collection."""

from __future__ import annotations

import logging
from typing import List, Optional

from PyQt6.QtGui import QImage

from ..core.config import DEFAULT_WINDOW_NAME
from ..core.drawing import DrawStyle, draw_rectangle, make_canvas
from ..core.geometry import (
    centered_rectangle, nearest_rectangle_index, rectangle_from_two_points,
    remove_rectangles_in_box
)
from ..core.models import (
    ClickPairMode, EditMode, Point, PointerButton, PointerEvent, Rectangle
)
from ..ui.display import DisplaySurface
from .base import InteractionMode
from .two_click import ClickPairMixin

logger = logging.getLogger(__name__)

DELETE_TOGGLE_NAME = "Delete mode"


class RectangleEditor(ClickPairMixin, InteractionMode):
    """
    Add, move and delete rectangles on an image.

    A "Delete mode" toggle on the display switches between the two edit
    modes:

    Add mode:
        - two separate primary clicks add a rectangle, built like in
          TwoClickMode
        - secondary press, drag and release moves the rectangle nearest
          to the press point so that it is centered on the release point

    Delete mode:
        - secondary click deletes the nearest rectangle
        - primary drag draws a selection box; every rectangle whose
          center lies inside it is deleted

    Any change to the collection redraws the canvas from the pristine
    image.
    """

    mode_name = "editor"

    def __init__(
        self,
        aspect_ratio: float = 0.5,
        click_pair_mode: ClickPairMode = ClickPairMode.TL_BR,
        window_name: str = DEFAULT_WINDOW_NAME,
        style: Optional[DrawStyle] = None,
        display: Optional[DisplaySurface] = None
    ) -> None:
        """
        Initialize the editor.

        Args:
            aspect_ratio: Signed aspect ratio policy for new rectangles
            click_pair_mode: Anchor convention for new rectangles

        Raises:
            ConfigurationError: If the mode needs a ratio and it is 0
        """
        super().__init__(window_name, style, display)
        self._init_click_pair(aspect_ratio, click_pair_mode)
        self._pristine = QImage()
        self._edit_mode = EditMode.ADD
        self._selection_anchor: Optional[Point] = None
        self._moving: Optional[Rectangle] = None

    # === Public API ===

    def edit_rectangles(self, image: QImage, rectangles: List[Rectangle]) -> List[Rectangle]:
        """
        Let the operator edit existing rectangles on an image.

        Args:
            image: Image to annotate (left unmodified)
            rectangles: Starting collection (not modified)

        Returns:
            The edited collection
        """
        return self._run(image, rectangles)

    @property
    def edit_mode(self) -> EditMode:
        return self._edit_mode

    def set_edit_mode(self, mode: EditMode) -> None:
        """
        Switch between add and delete mode.

        Gestures in progress are abandoned; a rectangle being moved goes
        back to the collection unchanged.
        """
        mode = EditMode(mode)
        if mode == self._edit_mode:
            return

        self._cancel_gestures()
        self._edit_mode = mode
        logger.info(f"Edit mode: {mode.name.lower()}")
        if not self._pristine.isNull():
            self.redraw()

    @property
    def moving_rectangle(self) -> Optional[Rectangle]:
        """Rectangle currently being moved, not part of the collection."""
        return self._moving

    def redraw(self) -> None:
        """Rebuild the canvas from the pristine image and the collection."""
        self._canvas = self._pristine.copy()
        for rect in self._rectangles:
            draw_rectangle(self._canvas, rect, self.style)
        self._refresh()

    def add_rectangle(self, rect: Rectangle) -> None:
        self._rectangles.append(rect)
        logger.debug(f"Added rectangle {rect.as_tuple()}")
        self.redraw()

    def delete_nearest(self, point: Point) -> Optional[Rectangle]:
        """
        Delete the rectangle whose center is nearest to a point.

        Returns:
            The deleted rectangle, or None if the collection is empty
        """
        if not self._rectangles:
            logger.warning("No rectangles to delete")
            return None

        removed = self._rectangles.pop(nearest_rectangle_index(self._rectangles, point))
        logger.debug(f"Deleted rectangle {removed.as_tuple()}")
        self.redraw()
        return removed

    def delete_inside(self, box: Rectangle) -> int:
        """
        Delete every rectangle whose center lies inside ``box``.

        Returns:
            Number of rectangles deleted
        """
        survivors = remove_rectangles_in_box(self._rectangles, box)
        removed = len(self._rectangles) - len(survivors)
        self._rectangles = survivors
        logger.debug(f"Deleted {removed} rectangles inside {box.as_tuple()}")
        self.redraw()
        return removed

    def start_move(self, point: Point) -> Optional[Rectangle]:
        """
        Take the rectangle nearest to ``point`` out of the collection.

        Returns:
            The rectangle being moved, or None if the collection is empty
        """
        if not self._rectangles:
            logger.warning("No rectangles to move")
            return None

        self._moving = self._rectangles.pop(nearest_rectangle_index(self._rectangles, point))
        self.redraw()
        return self._moving

    def finish_move(self, point: Point) -> Optional[Rectangle]:
        """
        Put the moving rectangle back, centered on ``point``.

        Returns:
            The re-inserted rectangle, or None if nothing was being moved
        """
        if self._moving is None:
            return None

        moved = centered_rectangle(point, self._moving.size)
        self._moving = None
        self.add_rectangle(moved)
        return moved

    # === InteractionMode hooks ===

    def reset(self) -> None:
        self._first_click = None
        self._selection_anchor = None
        self._moving = None
        self._edit_mode = EditMode.ADD

    def _prepare_canvas(self, image: QImage) -> QImage:
        self._pristine = make_canvas(image)
        canvas = self._pristine.copy()
        for rect in self._rectangles:
            draw_rectangle(canvas, rect, self.style)
        return canvas

    def _register_controls(self, display: DisplaySurface) -> None:
        display.add_toggle(
            DELETE_TOGGLE_NAME,
            int(max(EditMode)),
            lambda value: self.set_edit_mode(EditMode(value))
        )

    def _finish_pass(self) -> None:
        if self._cancel_gestures():
            self.redraw()

    def _cancel_gestures(self) -> bool:
        """Abandon gestures in progress; True if a moving rectangle was restored."""
        self._first_click = None
        self._selection_anchor = None
        if self._moving is None:
            return False
        self._rectangles.append(self._moving)
        self._moving = None
        return True

    def handle_pointer_event(self, event: PointerEvent) -> None:
        if self._edit_mode == EditMode.DELETE:
            self._handle_delete_event(event)
        else:
            self._handle_add_event(event)

    def _handle_delete_event(self, event: PointerEvent) -> None:
        if event.is_press(PointerButton.SECONDARY):
            self.delete_nearest(event.point)
        elif event.is_press(PointerButton.PRIMARY) and self._selection_anchor is None:
            self._selection_anchor = event.point
        elif event.is_move and self._selection_anchor is not None:
            self._show_preview(rectangle_from_two_points(self._selection_anchor, event.point))
        elif event.is_release(PointerButton.PRIMARY) and self._selection_anchor is not None:
            box = rectangle_from_two_points(self._selection_anchor, event.point)
            self._selection_anchor = None
            self.delete_inside(box)

    def _handle_add_event(self, event: PointerEvent) -> None:
        if event.is_release(PointerButton.PRIMARY) and self._moving is None:
            rect = self._click(event.point)
            if rect is not None:
                self.add_rectangle(rect)
        elif event.is_press(PointerButton.SECONDARY) and self._moving is None:
            self.start_move(event.point)
        elif event.is_move and self._moving is not None:
            self._show_preview(centered_rectangle(event.point, self._moving.size))
        elif event.is_release(PointerButton.SECONDARY) and self._moving is not None:
            self.finish_move(event.point)
