"""Configuration management for Patch Annotator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .models import Size

logger = logging.getLogger(__name__)

# Default configuration file path
DEFAULT_CONFIG_PATH = Path("config.yaml")

DEFAULT_WINDOW_NAME = "Get rectangles from user"


@dataclass
class AnnotatorConfig:
    """
    Annotation run settings.

    Directory strings are kept exactly as written so the session can
    check their trailing separator.
    """

    image_directory: str = ""
    output_directory: str = ""
    interaction_mode: str = "two_click"  # single_drag, two_click, fixed_size, painted_outline, editor
    click_pair_mode: str = "tl_br"  # tl_br, c_t, c_r, c_l, c_b, t_b, l_r
    aspect_ratio: float = 0.5  # width / height; 0 = unconstrained, < 0 keeps width
    box_width: int = 16  # Fixed box size for fixed_size and painted_outline
    box_height: int = 16
    outline_scale: float = 1.0  # Display scale for painted_outline
    use_markers: bool = False  # Draw marker glyphs instead of boxes
    marker_type: str = "cross"
    marker_size: int = 20
    window_name: str = DEFAULT_WINDOW_NAME
    line_thickness: int = 2
    rect_color: str = "#0000ff"
    finish_key: str = "Escape"  # Key that ends annotation of the current image
    patch_width: int = 0  # Resize saved patches when both are positive
    patch_height: int = 0

    @property
    def box_size(self) -> Size:
        return Size(self.box_width, self.box_height)

    @property
    def patch_size(self) -> Optional[Size]:
        """Target patch size, or None when patches are saved as cropped."""
        if self.patch_width > 0 and self.patch_height > 0:
            return Size(self.patch_width, self.patch_height)
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return {
            "imageDirectory": self.image_directory,
            "outputDirectory": self.output_directory,
            "interactionMode": self.interaction_mode,
            "clickPairMode": self.click_pair_mode,
            "aspectRatio": self.aspect_ratio,
            "boxWidth": self.box_width,
            "boxHeight": self.box_height,
            "outlineScale": self.outline_scale,
            "useMarkers": self.use_markers,
            "markerType": self.marker_type,
            "markerSize": self.marker_size,
            "windowName": self.window_name,
            "lineThickness": self.line_thickness,
            "rectColor": self.rect_color,
            "finishKey": self.finish_key,
            "patchWidth": self.patch_width,
            "patchHeight": self.patch_height,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AnnotatorConfig:
        """Create config from dictionary."""
        return cls(
            image_directory=data.get("imageDirectory", ""),
            output_directory=data.get("outputDirectory", ""),
            interaction_mode=data.get("interactionMode", "two_click"),
            click_pair_mode=data.get("clickPairMode", "tl_br"),
            aspect_ratio=float(data.get("aspectRatio", 0.5)),
            box_width=int(data.get("boxWidth", 16)),
            box_height=int(data.get("boxHeight", 16)),
            outline_scale=float(data.get("outlineScale", 1.0)),
            use_markers=bool(data.get("useMarkers", False)),
            marker_type=data.get("markerType", "cross"),
            marker_size=int(data.get("markerSize", 20)),
            window_name=data.get("windowName", DEFAULT_WINDOW_NAME),
            line_thickness=int(data.get("lineThickness", 2)),
            rect_color=data.get("rectColor", "#0000ff"),
            finish_key=data.get("finishKey", "Escape"),
            patch_width=int(data.get("patchWidth", 0)),
            patch_height=int(data.get("patchHeight", 0)),
        )


class ConfigManager:
    """
    Manager for loading and saving the annotator configuration.

    Handles YAML serialization and provides a clean interface
    for configuration access.
    """

    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Optional[AnnotatorConfig] = None

    @property
    def config(self) -> AnnotatorConfig:
        """Get the current configuration, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> AnnotatorConfig:
        """
        Load configuration from file.

        Returns:
            AnnotatorConfig instance with loaded or default values
        """
        if not self.config_path.exists():
            logger.info(f"Config file not found at {self.config_path}, using defaults")
            return AnnotatorConfig()

        try:
            with open(self.config_path, "r") as f:
                data = yaml.safe_load(f) or {}
            logger.info(f"Loaded configuration from {self.config_path}")
            return AnnotatorConfig.from_dict(data)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing config file: {e}")
            return AnnotatorConfig()
        except (OSError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Error loading config: {e}")
            return AnnotatorConfig()

    def save(self, config: Optional[AnnotatorConfig] = None) -> bool:
        """
        Save configuration to file.

        Args:
            config: Configuration to save, or use current config

        Returns:
            True if save was successful
        """
        if config is not None:
            self._config = config

        if self._config is None:
            logger.warning("No configuration to save")
            return False

        try:
            with open(self.config_path, "w") as f:
                yaml.dump(self._config.to_dict(), f, default_flow_style=False)
            logger.info(f"Saved configuration to {self.config_path}")
            return True
        except OSError as e:
            logger.error(f"Error saving config: {e}")
            return False

    def update(self, **kwargs: Any) -> None:
        """
        Update configuration with new values.

        Args:
            **kwargs: Key-value pairs to update
        """
        config = self.config
        for key, value in kwargs.items():
            if hasattr(config, key):
                setattr(config, key, value)
            else:
                logger.warning(f"Unknown config key: {key}")
        self.save()
