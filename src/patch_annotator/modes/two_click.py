"""Two discrete clicks per rectangle."""

from __future__ import annotations

import logging
from typing import Optional

from ..core.config import DEFAULT_WINDOW_NAME
from ..core.drawing import DrawStyle, MarkerStyle, MarkerType, draw_marker
from ..core.geometry import rectangle_from_click_pair, validate_click_pair
from ..core.models import ClickPairMode, Point, PointerButton, PointerEvent, Rectangle
from ..ui.display import DisplaySurface
from .base import InteractionMode

logger = logging.getLogger(__name__)

ANCHOR_MARKER_SIZE = 20


class ClickPairMixin:
    """Shared handling of the two-click rectangle gesture."""

    click_pair_mode: ClickPairMode
    aspect_ratio: float
    style: DrawStyle

    def _init_click_pair(self, aspect_ratio: float, click_pair_mode: ClickPairMode) -> None:
        click_pair_mode = ClickPairMode(click_pair_mode)
        validate_click_pair(click_pair_mode, aspect_ratio)
        self.click_pair_mode = click_pair_mode
        self.aspect_ratio = aspect_ratio
        self._first_click: Optional[Point] = None

    @property
    def awaiting_second_click(self) -> bool:
        return self._first_click is not None

    def _anchor_marker_style(self) -> MarkerStyle:
        return MarkerStyle(
            marker_type=MarkerType.CROSS,
            size=ANCHOR_MARKER_SIZE,
            color=self.style.color,
            thickness=self.style.thickness,
        )

    def _click(self, point: Point) -> Optional[Rectangle]:
        """
        Register one click of the gesture.

        Returns:
            The finished rectangle on the second click, None on the first
        """
        if self._first_click is None:
            self._first_click = point
            preview = self._canvas.copy()
            draw_marker(preview, point, self._anchor_marker_style())
            self.display.show(preview)
            return None

        rect = rectangle_from_click_pair(
            self._first_click, point, self.click_pair_mode, self.aspect_ratio
        )
        self._first_click = None
        return rect


class TwoClickMode(ClickPairMixin, InteractionMode):
    """
    Build each rectangle from two separate primary-button clicks.

    How the two clicks map to a rectangle is chosen by a ClickPairMode;
    the aspect ratio (width / height) completes the dimension the clicks
    do not measure. With TL_BR a ratio of 0 keeps the clicked corners
    exactly, a positive ratio keeps the height and a negative ratio keeps
    the width.
    """

    mode_name = "two_click"

    def __init__(
        self,
        aspect_ratio: float = 0.5,
        click_pair_mode: ClickPairMode = ClickPairMode.TL_BR,
        window_name: str = DEFAULT_WINDOW_NAME,
        style: Optional[DrawStyle] = None,
        display: Optional[DisplaySurface] = None
    ) -> None:
        """
        Initialize the mode.

        Args:
            aspect_ratio: Signed aspect ratio policy
            click_pair_mode: Anchor convention of the two clicks

        Raises:
            ConfigurationError: If the mode needs a ratio and it is 0
        """
        super().__init__(window_name, style, display)
        self._init_click_pair(aspect_ratio, click_pair_mode)

    def reset(self) -> None:
        self._first_click = None

    def handle_pointer_event(self, event: PointerEvent) -> None:
        if not event.is_release(PointerButton.PRIMARY):
            return

        rect = self._click(event.point)
        if rect is not None:
            self._commit(rect)
