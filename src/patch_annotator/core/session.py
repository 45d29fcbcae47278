"""Annotation session: iterate over images and save annotated patches."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from .errors import ConfigurationError, ImageLoadError
from .image_io import ImageSource, PatchSink, extract_patches
from .models import Size

if TYPE_CHECKING:
    from ..modes.base import InteractionMode

logger = logging.getLogger(__name__)

PATH_SEPARATORS = tuple({"/", os.sep})


def require_trailing_separator(path: str, name: str) -> None:
    """
    Check that a directory string ends with a path separator.

    Raises:
        ConfigurationError: If it does not
    """
    if not path or not path.endswith(PATH_SEPARATORS):
        raise ConfigurationError(f"{name} must end with '/': {path!r}")


class AnnotationSession:
    """
    Annotate every image of a directory with one interaction mode.

    Each rectangle returned by the mode is cropped from the image and
    saved as a numbered patch. Numbering continues across images.
    """

    def __init__(
        self,
        image_directory: str,
        output_directory: str,
        mode: InteractionMode,
        patch_size: Optional[Size] = None,
        source: Optional[ImageSource] = None,
        sink: Optional[PatchSink] = None
    ) -> None:
        """
        Initialize the session.

        Args:
            image_directory: Directory holding the images, ending with '/'
            output_directory: Directory receiving the patches, ending with '/'
            mode: Interaction mode used for every image
            patch_size: Resize patches to this size before saving
            source: Image source (defaults to one reading image_directory)
            sink: Patch sink (defaults to one writing output_directory)

        Raises:
            ConfigurationError: If a directory lacks its trailing separator
        """
        require_trailing_separator(image_directory, "Image directory")
        require_trailing_separator(output_directory, "Output directory")

        self.image_directory = image_directory
        self.output_directory = output_directory
        self.mode = mode
        self.source = source or ImageSource(Path(image_directory))
        self.sink = sink or PatchSink(Path(output_directory), patch_size)

    def annotate(self) -> List[Path]:
        """
        Run the annotation loop over all images.

        Images that cannot be loaded are skipped. There is no undo across
        images.

        Returns:
            Paths of the patches written, in order
        """
        paths = self.source.list_image_paths()
        logger.info(f"Number of images to annotate = {len(paths)}")

        written: List[Path] = []
        for path in paths:
            logger.info(f"Annotating image: {path}")
            try:
                image = self.source.load(path)
            except ImageLoadError as e:
                logger.warning(f"Skipping image: {e}")
                continue

            rectangles = self.mode.collect_rectangles(image)
            patches = extract_patches(image, rectangles)
            logger.info(f"Obtained {len(patches)} patches.")

            for patch in patches:
                saved = self.sink.save(patch)
                if saved is not None:
                    written.append(saved)

        logger.info(f"Annotation finished, {self.sink.counter} patches numbered")
        return written
