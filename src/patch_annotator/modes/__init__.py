"""Interaction modes turning pointer gestures into rectangles."""

from .base import InteractionMode
from .single_drag import SingleDragMode
from .two_click import TwoClickMode
from .fixed_size import FixedSizeClickMode
from .painted_outline import PaintedOutlineMode
from .editor import RectangleEditor
from .registry import ModeRegistry

__all__ = [
    "InteractionMode",
    "SingleDragMode",
    "TwoClickMode",
    "FixedSizeClickMode",
    "PaintedOutlineMode",
    "RectangleEditor",
    "ModeRegistry",
]
