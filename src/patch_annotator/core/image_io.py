"""Image loading, patch extraction and patch saving."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from PyQt6.QtCore import QRect, Qt
from PyQt6.QtGui import QImage

from .errors import ImageLoadError
from .models import Rectangle, Size

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".tif", ".tiff")

PATCH_NAME_DIGITS = 5
PATCH_EXTENSION = ".png"


def image_size(image: QImage) -> Size:
    return Size(image.width(), image.height())


class ImageSource:
    """Lists and loads the images found directly under a directory."""

    def __init__(self, directory: Path) -> None:
        """
        Initialize the image source.

        Args:
            directory: Directory to scan (not recursive)
        """
        self.directory = Path(directory)

    def list_image_paths(self) -> List[Path]:
        """
        Get image files with a recognized extension, sorted by name.

        Returns:
            List of image paths (empty if the directory is missing)
        """
        if not self.directory.is_dir():
            logger.warning(f"Image directory not found: {self.directory}")
            return []

        return sorted(
            path for path in self.directory.iterdir()
            if path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS
        )

    def load(self, path: Path) -> QImage:
        """
        Decode an image file.

        Raises:
            ImageLoadError: If the file cannot be read as an image
        """
        image = QImage(str(path))
        if image.isNull():
            raise ImageLoadError(f"Could not load image: {path}")
        return image


def extract_patch(image: QImage, rect: Rectangle) -> QImage:
    """
    Crop the region covered by a rectangle.

    No clamping is done: the part of a crop lying outside the image is
    filled with zero pixels by Qt. Rectangles covering no pixels give a
    null image.
    """
    if rect.is_empty:
        return QImage()
    return image.copy(QRect(rect.x, rect.y, rect.width, rect.height))


def extract_patches(image: QImage, rects: Sequence[Rectangle]) -> List[QImage]:
    return [extract_patch(image, rect) for rect in rects]


class PatchSink:
    """
    Writes patches as sequentially numbered PNG files.

    The counter belongs to the sink, so numbering continues across every
    image handed to the same instance.
    """

    def __init__(self, directory: Path, patch_size: Optional[Size] = None) -> None:
        """
        Initialize the sink.

        Args:
            directory: Output directory, created if missing
            patch_size: Resize every patch to this size before saving
        """
        self.directory = Path(directory)
        self.patch_size = patch_size
        self._counter = 0
        self.directory.mkdir(parents=True, exist_ok=True)

    @property
    def counter(self) -> int:
        """Number assigned to the most recent patch."""
        return self._counter

    def next_path(self) -> Path:
        return self.directory / f"{self._counter + 1:0{PATCH_NAME_DIGITS}d}{PATCH_EXTENSION}"

    def save(self, patch: QImage) -> Optional[Path]:
        """
        Save a patch under the next sequential name.

        The counter advances even when the patch cannot be written, so
        file names stay aligned with annotation order.

        Args:
            patch: Cropped image

        Returns:
            Path written, or None if the patch was empty or saving failed
        """
        path = self.next_path()
        self._counter += 1

        if patch.isNull():
            logger.warning(f"Skipping empty patch {path.name}")
            return None

        if self.patch_size is not None:
            patch = patch.scaled(
                self.patch_size.width,
                self.patch_size.height,
                Qt.AspectRatioMode.IgnoreAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )

        if not patch.save(str(path)):
            logger.error(f"Failed to save patch: {path}")
            return None

        logger.debug(f"Saved patch {path}")
        return path
