"""Abstract base class for rectangle interaction modes."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from PyQt6.QtGui import QImage

from ..core.config import DEFAULT_WINDOW_NAME
from ..core.drawing import DrawStyle, draw_rectangle, make_canvas
from ..core.models import PointerEvent, Rectangle
from ..ui.display import DisplaySurface, DisplayWindow

logger = logging.getLogger(__name__)


class InteractionMode(ABC):
    """
    Turns pointer events on one image into a list of rectangles.

    Subclasses implement the gesture state machine in
    ``handle_pointer_event``; this class owns the display round trip,
    the working canvas and the rectangle collection of the current pass.
    """

    #: Name used in configuration files
    mode_name: str = ""

    def __init__(
        self,
        window_name: str = DEFAULT_WINDOW_NAME,
        style: Optional[DrawStyle] = None,
        display: Optional[DisplaySurface] = None
    ) -> None:
        """
        Initialize the mode.

        Args:
            window_name: Title of the annotation window
            style: Pen used for rectangles and previews
            display: Display surface; a DisplayWindow is created on first use
        """
        self.window_name = window_name
        self.style = style or DrawStyle()
        self._display = display
        self._canvas = QImage()
        self._rectangles: List[Rectangle] = []

    @property
    def display(self) -> DisplaySurface:
        if self._display is None:
            self._display = DisplayWindow(self.window_name)
        return self._display

    @property
    def rectangles(self) -> List[Rectangle]:
        """Copy of the rectangles recorded in the current pass."""
        return list(self._rectangles)

    @property
    def drawn_image(self) -> QImage:
        """Working canvas with every committed annotation drawn."""
        return self._canvas

    def collect_rectangles(self, image: QImage) -> List[Rectangle]:
        """
        Let the operator annotate an image.

        Blocks until the operator finishes with the image.

        Args:
            image: Image to annotate (left unmodified)

        Returns:
            Rectangles in annotation order
        """
        return self._run(image, [])

    def _run(self, image: QImage, rectangles: List[Rectangle]) -> List[Rectangle]:
        self._rectangles = list(rectangles)
        self._canvas = self._prepare_canvas(image)
        self.reset()

        display = self.display
        display.set_pointer_handler(self.handle_pointer_event)
        self._register_controls(display)
        display.show(self._canvas)
        display.wait_until_closed()
        display.set_pointer_handler(None)

        self._finish_pass()
        logger.info(f"{type(self).__name__} recorded {len(self._rectangles)} rectangles")
        return list(self._rectangles)

    def _prepare_canvas(self, image: QImage) -> QImage:
        """Build the working canvas for an image."""
        return make_canvas(image)

    def _register_controls(self, display: DisplaySurface) -> None:
        """Hook for modes that add controls to the display."""
        pass

    def _finish_pass(self) -> None:
        """Hook called after the operator finishes an image."""
        pass

    def _refresh(self) -> None:
        self.display.show(self._canvas)

    def _show_preview(self, rect: Rectangle) -> None:
        """Show ``rect`` on a scratch copy of the canvas."""
        preview = self._canvas.copy()
        draw_rectangle(preview, rect, self.style)
        self.display.show(preview)

    def _commit(self, rect: Rectangle) -> None:
        """Record a rectangle and draw it on the canvas."""
        draw_rectangle(self._canvas, rect, self.style)
        self._rectangles.append(rect)
        logger.debug(f"Recorded rectangle {rect.as_tuple()}")
        self._refresh()

    @abstractmethod
    def reset(self) -> None:
        """Clear the gesture state at the start of a pass."""
        pass

    @abstractmethod
    def handle_pointer_event(self, event: PointerEvent) -> None:
        """Advance the gesture state machine by one pointer event."""
        pass
