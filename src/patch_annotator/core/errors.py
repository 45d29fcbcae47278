"""Exception types raised by Patch Annotator."""

from __future__ import annotations


class AnnotatorError(Exception):
    """Base class for all Patch Annotator errors."""


class ConfigurationError(AnnotatorError):
    """Raised when a component is constructed with invalid settings."""


class EmptyCollectionError(AnnotatorError, ValueError):
    """Raised when a lookup is attempted on an empty rectangle collection."""


class ImageLoadError(AnnotatorError):
    """Raised when an image file cannot be decoded."""
