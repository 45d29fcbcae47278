"""Canvas drawing helpers for rectangles and marker glyphs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from PyQt6.QtCore import QPoint, QRect
from PyQt6.QtGui import QColor, QImage, QPainter, QPen, QPolygon

from .models import Point, Rectangle

logger = logging.getLogger(__name__)


class MarkerType(str, Enum):
    """Marker glyph drawn at a clicked point."""

    CROSS = "cross"
    TILTED_CROSS = "tilted_cross"
    STAR = "star"
    DIAMOND = "diamond"
    SQUARE = "square"
    TRIANGLE_UP = "triangle_up"
    TRIANGLE_DOWN = "triangle_down"


@dataclass
class DrawStyle:
    """Pen settings for annotations drawn on a canvas."""

    color: QColor = field(default_factory=lambda: QColor(0, 0, 255))
    thickness: int = 2

    @classmethod
    def from_name(cls, color_name: str, thickness: int = 2) -> DrawStyle:
        """Create a style from a color name such as '#0000ff' or 'red'."""
        color = QColor(color_name)
        if not color.isValid():
            logger.warning(f"Invalid color '{color_name}', using blue")
            color = QColor(0, 0, 255)
        return cls(color=color, thickness=thickness)

    def pen(self) -> QPen:
        return QPen(self.color, self.thickness)


@dataclass
class MarkerStyle:
    """Settings for marker glyphs."""

    marker_type: MarkerType = MarkerType.CROSS
    size: int = 20
    color: QColor = field(default_factory=lambda: QColor(0, 0, 255))
    thickness: int = 2

    def pen(self) -> QPen:
        return QPen(self.color, self.thickness)


def make_canvas(image: QImage) -> QImage:
    """
    Create a paintable copy of an image.

    Indexed and grayscale images cannot be painted in color, so the copy
    is always 32-bit RGB.
    """
    return image.convertToFormat(QImage.Format.Format_RGB32)


def draw_rectangle(canvas: QImage, rect: Rectangle, style: DrawStyle) -> None:
    """Draw the outline of a rectangle onto a canvas in place."""
    rect = rect.normalized()
    painter = QPainter(canvas)
    try:
        painter.setPen(style.pen())
        painter.drawRect(QRect(rect.x, rect.y, rect.width, rect.height))
    finally:
        painter.end()


def draw_marker(canvas: QImage, point: Point, style: MarkerStyle) -> None:
    """Draw a marker glyph centered on ``point`` onto a canvas in place."""
    half = style.size // 2
    x, y = point.x, point.y

    painter = QPainter(canvas)
    try:
        painter.setPen(style.pen())
        kind = style.marker_type
        if kind in (MarkerType.CROSS, MarkerType.STAR):
            painter.drawLine(x - half, y, x + half, y)
            painter.drawLine(x, y - half, x, y + half)
        if kind in (MarkerType.TILTED_CROSS, MarkerType.STAR):
            painter.drawLine(x - half, y - half, x + half, y + half)
            painter.drawLine(x + half, y - half, x - half, y + half)
        elif kind == MarkerType.DIAMOND:
            painter.drawPolygon(QPolygon([
                QPoint(x, y - half), QPoint(x + half, y),
                QPoint(x, y + half), QPoint(x - half, y),
            ]))
        elif kind == MarkerType.SQUARE:
            painter.drawRect(QRect(x - half, y - half, style.size, style.size))
        elif kind == MarkerType.TRIANGLE_UP:
            painter.drawPolygon(QPolygon([
                QPoint(x, y - half), QPoint(x + half, y + half), QPoint(x - half, y + half),
            ]))
        elif kind == MarkerType.TRIANGLE_DOWN:
            painter.drawPolygon(QPolygon([
                QPoint(x, y + half), QPoint(x + half, y - half), QPoint(x - half, y - half),
            ]))
    finally:
        painter.end()
