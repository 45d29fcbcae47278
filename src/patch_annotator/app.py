"""Application bootstrap for Patch Annotator."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from PyQt6.QtWidgets import QApplication

from .core.config import DEFAULT_CONFIG_PATH, AnnotatorConfig, ConfigManager
from .core.errors import AnnotatorError
from .core.session import AnnotationSession
from .modes.registry import ModeRegistry

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)

logger = logging.getLogger(__name__)


def create_application() -> QApplication:
    """
    Create and configure the Qt application.

    Returns:
        Configured QApplication instance
    """
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Patch Annotator")
    app.setApplicationVersion("1.0.0")
    return app


def create_session(config: AnnotatorConfig) -> AnnotationSession:
    """
    Build an annotation session from a configuration.

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    mode = ModeRegistry.create(config)
    return AnnotationSession(
        config.image_directory,
        config.output_directory,
        mode,
        patch_size=config.patch_size,
    )


def run(config_path: Optional[Path] = None) -> int:
    """
    Run an annotation session.

    Returns:
        Exit code
    """
    logger.info("Starting Patch Annotator")

    app = create_application()
    config = ConfigManager(config_path or DEFAULT_CONFIG_PATH).config

    try:
        session = create_session(config)
    except AnnotatorError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    written = session.annotate()
    logger.info(f"Saved {len(written)} patches to {config.output_directory}")
    app.quit()
    return 0


def main() -> None:
    """Main entry point for the application."""
    sys.exit(run())


if __name__ == "__main__":
    main()
