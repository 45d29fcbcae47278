"""UI components for Patch Annotator."""

from .display import DisplaySurface, DisplayWindow

__all__ = [
    "DisplaySurface",
    "DisplayWindow",
]
