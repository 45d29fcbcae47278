"""Paint a trail of fixed-size boxes by dragging."""

from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QImage

from ..core.config import DEFAULT_WINDOW_NAME
from ..core.drawing import DrawStyle, MarkerStyle, draw_marker, draw_rectangle, make_canvas
from ..core.errors import ConfigurationError
from ..core.geometry import centered_rectangle, fits_within, round_half_away, scale_rectangle, scale_size
from ..core.models import Point, PointerButton, PointerEvent, Rectangle, Size
from ..ui.display import DisplaySurface
from .base import InteractionMode

logger = logging.getLogger(__name__)


class PaintedOutlineMode(InteractionMode):
    """
    Record a fixed-size box at every position visited while dragging.

    Useful for dense patch labeling along an outline. The image is shown
    rescaled by ``scale``; boxes are sized and bounds-checked on the
    rescaled canvas and recorded in original image coordinates. Boxes
    that would leave the canvas are skipped.
    """

    mode_name = "painted_outline"

    def __init__(
        self,
        rect_size: Size,
        scale: float = 1.0,
        window_name: str = DEFAULT_WINDOW_NAME,
        style: Optional[DrawStyle] = None,
        display: Optional[DisplaySurface] = None
    ) -> None:
        """
        Initialize the mode.

        Args:
            rect_size: Box size in original image pixels
            scale: Display scale of the working canvas

        Raises:
            ConfigurationError: If the size or scale is not positive
        """
        if scale <= 0:
            raise ConfigurationError(f"Scale must be positive, got {scale}")
        if rect_size.width <= 0 or rect_size.height <= 0:
            raise ConfigurationError(f"Rectangle size must be positive, got {rect_size}")

        super().__init__(window_name, style, display)
        self.scale = scale
        self.rect_size = scale_size(rect_size, scale)
        self.marker: Optional[MarkerStyle] = None
        self._dragging = False

    def use_marker_style(self, marker: Optional[MarkerStyle] = None) -> None:
        """Draw marker glyphs instead of boxes from now on."""
        self.marker = marker or MarkerStyle()

    @property
    def dragging(self) -> bool:
        return self._dragging

    @property
    def canvas_size(self) -> Size:
        return Size(self._canvas.width(), self._canvas.height())

    def reset(self) -> None:
        self._dragging = False

    def _prepare_canvas(self, image: QImage) -> QImage:
        canvas = make_canvas(image)
        if self.scale == 1.0:
            return canvas
        return canvas.scaled(
            round_half_away(image.width() * self.scale),
            round_half_away(image.height() * self.scale),
            Qt.AspectRatioMode.IgnoreAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )

    def handle_pointer_event(self, event: PointerEvent) -> None:
        if event.is_press(PointerButton.PRIMARY) and not self._dragging:
            self.process_point(event.point)
            self._dragging = True
        elif event.is_move and self._dragging:
            self.process_point(event.point)
        elif event.is_release(PointerButton.PRIMARY) and self._dragging:
            self.process_point(event.point)
            self._dragging = False

    def process_point(self, point: Point) -> Optional[Rectangle]:
        """
        Record the box centered on a canvas point.

        Args:
            point: Position on the rescaled canvas

        Returns:
            The recorded rectangle in image coordinates, or None if skipped
        """
        rect = centered_rectangle(point, self.rect_size)
        if not fits_within(rect, self.canvas_size):
            logger.info(f"Box at {point.x}, {point.y} is out of the image boundary, ignoring")
            return None

        if self.marker is not None:
            draw_marker(self._canvas, point, self.marker)
        else:
            draw_rectangle(self._canvas, rect, self.style)
        self._refresh()

        recorded = scale_rectangle(rect, 1.0 / self.scale)
        self._rectangles.append(recorded)
        logger.debug(f"Recorded rectangle {recorded.as_tuple()}")
        return recorded
