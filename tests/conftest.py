"""Pytest configuration and fixtures."""

import os
import pytest
import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Widgets are created without a visible screen
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    """Create a QApplication for tests that need it."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])

    yield app


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for tests."""
    return tmp_path


@pytest.fixture
def make_image(qapp):
    """Factory creating a solid RGB image of the given size."""
    from PyQt6.QtGui import QColor, QImage

    def _make(width=200, height=100, color="white"):
        image = QImage(width, height, QImage.Format.Format_RGB32)
        image.fill(QColor(color))
        return image

    return _make


@pytest.fixture
def image_dir(tmp_path, make_image):
    """Directory with two PNG images and one unrelated file."""
    directory = tmp_path / "images"
    directory.mkdir()
    make_image(64, 48, "red").save(str(directory / "a.png"))
    make_image(64, 48, "green").save(str(directory / "b.png"))
    (directory / "notes.txt").write_text("not an image")
    return directory


@pytest.fixture
def sample_config_yaml(tmp_path):
    """Create a sample config.yaml file."""
    yaml_path = tmp_path / "config.yaml"
    yaml_path.write_text(
        "imageDirectory: /data/images/\n"
        "outputDirectory: /data/patches/\n"
        "interactionMode: painted_outline\n"
        "boxWidth: 32\n"
        "boxHeight: 24\n"
        "outlineScale: 2.0\n"
    )
    return yaml_path
