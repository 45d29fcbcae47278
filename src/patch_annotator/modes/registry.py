"""Registry building interaction modes from configuration."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Type

from ..core.config import AnnotatorConfig
from ..core.drawing import DrawStyle, MarkerStyle, MarkerType
from ..core.errors import ConfigurationError
from ..core.models import ClickPairMode
from ..ui.display import DisplaySurface, DisplayWindow
from .base import InteractionMode
from .editor import RectangleEditor
from .fixed_size import FixedSizeClickMode
from .painted_outline import PaintedOutlineMode
from .single_drag import SingleDragMode
from .two_click import TwoClickMode

logger = logging.getLogger(__name__)


# Mode descriptions
MODE_DESCRIPTIONS = {
    "single_drag": "Press, drag and release to draw each rectangle",
    "two_click": "Two separate clicks per rectangle, with an aspect ratio policy",
    "fixed_size": "One click per fixed-size rectangle centered on the click",
    "painted_outline": "Drag to paint a trail of fixed-size boxes",
    "editor": "Add, move and delete rectangles with a delete-mode toggle",
}


class ModeRegistry:
    """
    Registry for interaction modes.

    Maps configuration names to mode classes and builds configured
    instances.
    """

    _modes: Dict[str, Type[InteractionMode]] = {
        SingleDragMode.mode_name: SingleDragMode,
        TwoClickMode.mode_name: TwoClickMode,
        FixedSizeClickMode.mode_name: FixedSizeClickMode,
        PaintedOutlineMode.mode_name: PaintedOutlineMode,
        RectangleEditor.mode_name: RectangleEditor,
    }

    @classmethod
    def get_mode_names(cls) -> List[str]:
        """Get list of available mode names."""
        return list(cls._modes.keys())

    @classmethod
    def get_description(cls, mode_name: str) -> str:
        """Get the description for a mode."""
        return MODE_DESCRIPTIONS.get(mode_name, "")

    @classmethod
    def get_mode_class(cls, mode_name: str) -> Type[InteractionMode]:
        """
        Get the class registered under a name.

        Raises:
            ConfigurationError: If mode name is unknown
        """
        if mode_name not in cls._modes:
            raise ConfigurationError(f"Unknown interaction mode: {mode_name}")
        return cls._modes[mode_name]

    @classmethod
    def create(
        cls,
        config: AnnotatorConfig,
        display: Optional[DisplaySurface] = None
    ) -> InteractionMode:
        """
        Build the interaction mode described by a configuration.

        Args:
            config: Annotator configuration
            display: Display surface; a DisplayWindow is created if omitted

        Returns:
            Configured InteractionMode instance

        Raises:
            ConfigurationError: If the configuration names an unknown mode,
                click-pair mode or marker type, or holds invalid values
        """
        mode_class = cls.get_mode_class(config.interaction_mode)

        if display is None:
            display = DisplayWindow(config.window_name, config.finish_key)

        style = DrawStyle.from_name(config.rect_color, config.line_thickness)
        marker = cls._marker_style(config, style) if config.use_markers else None

        if mode_class in (TwoClickMode, RectangleEditor):
            try:
                click_pair_mode = ClickPairMode(config.click_pair_mode)
            except ValueError:
                raise ConfigurationError(
                    f"Unknown click-pair mode: {config.click_pair_mode}"
                ) from None
            mode = mode_class(
                aspect_ratio=config.aspect_ratio,
                click_pair_mode=click_pair_mode,
                window_name=config.window_name,
                style=style,
                display=display,
            )
        elif mode_class is FixedSizeClickMode:
            mode = FixedSizeClickMode(
                config.box_size,
                window_name=config.window_name,
                style=style,
                display=display,
                marker=marker,
            )
        elif mode_class is PaintedOutlineMode:
            mode = PaintedOutlineMode(
                config.box_size,
                scale=config.outline_scale,
                window_name=config.window_name,
                style=style,
                display=display,
            )
            if marker is not None:
                mode.use_marker_style(marker)
        else:
            mode = mode_class(window_name=config.window_name, style=style, display=display)

        logger.info(f"Using interaction mode '{config.interaction_mode}'")
        return mode

    @staticmethod
    def _marker_style(config: AnnotatorConfig, style: DrawStyle) -> MarkerStyle:
        try:
            marker_type = MarkerType(config.marker_type)
        except ValueError:
            raise ConfigurationError(f"Unknown marker type: {config.marker_type}") from None
        return MarkerStyle(
            marker_type=marker_type,
            size=config.marker_size,
            color=style.color,
            thickness=style.thickness,
        )
