"""Press-drag-release rectangle mode."""

from __future__ import annotations

import logging
from typing import Optional

from ..core.geometry import rectangle_from_two_points
from ..core.models import Point, PointerButton, PointerEvent
from .base import InteractionMode

logger = logging.getLogger(__name__)


class SingleDragMode(InteractionMode):
    """
    Draw each rectangle with one primary-button drag.

    The press point and the release point become opposite corners. While
    dragging, a preview is drawn on a scratch copy of the canvas.
    """

    mode_name = "single_drag"

    _anchor: Optional[Point] = None

    def reset(self) -> None:
        self._anchor = None

    @property
    def dragging(self) -> bool:
        return self._anchor is not None

    def handle_pointer_event(self, event: PointerEvent) -> None:
        if event.is_press(PointerButton.PRIMARY) and not self.dragging:
            self._anchor = event.point
            logger.debug(f"Drag started at {event.x}, {event.y}")
        elif event.is_move and self.dragging:
            self._show_preview(rectangle_from_two_points(self._anchor, event.point))
        elif event.is_release(PointerButton.PRIMARY) and self.dragging:
            rect = rectangle_from_two_points(self._anchor, event.point)
            self._anchor = None
            self._commit(rect)
