"""One click per fixed-size rectangle."""

from __future__ import annotations

import logging
from typing import List, Optional

from ..core.config import DEFAULT_WINDOW_NAME
from ..core.drawing import DrawStyle, MarkerStyle, draw_marker, draw_rectangle
from ..core.errors import ConfigurationError
from ..core.geometry import centered_rectangle
from ..core.models import Point, PointerButton, PointerEvent, Size
from ..ui.display import DisplaySurface
from .base import InteractionMode

logger = logging.getLogger(__name__)

# Box size recorded when the mode is only used to mark points
MARKING_BOX_SIZE = Size(8, 8)


class FixedSizeClickMode(InteractionMode):
    """
    Place a rectangle of a preset size centered on every click.

    The canvas shows either the rectangles or, when a marker style is
    given, a marker glyph at each clicked point. The clicked points are
    available through ``marked_points``.
    """

    mode_name = "fixed_size"

    def __init__(
        self,
        rect_size: Size,
        window_name: str = DEFAULT_WINDOW_NAME,
        style: Optional[DrawStyle] = None,
        display: Optional[DisplaySurface] = None,
        marker: Optional[MarkerStyle] = None
    ) -> None:
        """
        Initialize the mode.

        Args:
            rect_size: Size of every recorded rectangle
            marker: Draw this marker instead of the rectangle

        Raises:
            ConfigurationError: If the size is not positive
        """
        if rect_size.width <= 0 or rect_size.height <= 0:
            raise ConfigurationError(f"Rectangle size must be positive, got {rect_size}")

        super().__init__(window_name, style, display)
        self.rect_size = rect_size
        self.marker = marker
        self._points: List[Point] = []

    @classmethod
    def marking_points(
        cls,
        marker: Optional[MarkerStyle] = None,
        window_name: str = DEFAULT_WINDOW_NAME,
        display: Optional[DisplaySurface] = None
    ) -> FixedSizeClickMode:
        """Create a mode meant for marking points with a glyph."""
        return cls(
            MARKING_BOX_SIZE,
            window_name=window_name,
            display=display,
            marker=marker or MarkerStyle(),
        )

    @property
    def draws_markers(self) -> bool:
        return self.marker is not None

    @property
    def marked_points(self) -> List[Point]:
        """Copy of the points clicked in the current pass."""
        return list(self._points)

    def reset(self) -> None:
        self._points = []

    def handle_pointer_event(self, event: PointerEvent) -> None:
        if not event.is_release(PointerButton.PRIMARY):
            return

        point = event.point
        rect = centered_rectangle(point, self.rect_size)
        if self.marker is not None:
            draw_marker(self._canvas, point, self.marker)
        else:
            draw_rectangle(self._canvas, rect, self.style)

        self._points.append(point)
        self._rectangles.append(rect)
        logger.debug(f"Recorded rectangle {rect.as_tuple()} at {point.x}, {point.y}")
        self._refresh()
