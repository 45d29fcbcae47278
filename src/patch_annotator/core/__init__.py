"""Core business logic modules for Patch Annotator."""

from .models import ClickPairMode, EditMode, Point, Rectangle, Size
from .config import AnnotatorConfig, ConfigManager
from .errors import AnnotatorError, ConfigurationError, EmptyCollectionError, ImageLoadError
from .image_io import ImageSource, PatchSink
from .session import AnnotationSession

__all__ = [
    "ClickPairMode",
    "EditMode",
    "Point",
    "Rectangle",
    "Size",
    "AnnotatorConfig",
    "ConfigManager",
    "AnnotatorError",
    "ConfigurationError",
    "EmptyCollectionError",
    "ImageLoadError",
    "ImageSource",
    "PatchSink",
    "AnnotationSession",
]
