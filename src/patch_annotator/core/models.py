"""Data models for Patch Annotator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


@dataclass(frozen=True)
class Point:
    """Integer pixel coordinate."""

    x: int
    y: int


@dataclass(frozen=True)
class Size:
    """Integer width and height."""

    width: int
    height: int


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned rectangle with a top-left origin.

    Width and height are not validated: degenerate input can produce zero
    or negative extents. Use ``normalized()`` before relying on them.
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        """X coordinate one past the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Y coordinate one past the bottom edge."""
        return self.y + self.height

    @property
    def top_left(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def is_empty(self) -> bool:
        """True when the rectangle covers no pixels."""
        return self.width <= 0 or self.height <= 0

    def normalized(self) -> Rectangle:
        """
        Get the equivalent rectangle with non-negative extents.

        Returns:
            New Rectangle (or self when already normalized)
        """
        x, y, width, height = self.x, self.y, self.width, self.height
        if width < 0:
            x, width = x + width, -width
        if height < 0:
            y, height = y + height, -height
        if (x, y, width, height) == (self.x, self.y, self.width, self.height):
            return self
        return Rectangle(x, y, width, height)

    def translated(self, dx: int, dy: int) -> Rectangle:
        """Return a copy moved by (dx, dy)."""
        return Rectangle(self.x + dx, self.y + dy, self.width, self.height)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


class ClickPairMode(str, Enum):
    """
    Anchor convention for building a rectangle from two clicks.

    The first letter group names the first click, the second the second
    click: T = top, B = bottom, L = left, R = right, C = center.
    """

    TL_BR = "tl_br"
    C_T = "c_t"
    C_R = "c_r"
    C_L = "c_l"
    C_B = "c_b"
    T_B = "t_b"
    L_R = "l_r"

    @property
    def center_anchored(self) -> bool:
        """True when the first click marks the rectangle center."""
        return self in (ClickPairMode.C_T, ClickPairMode.C_R,
                        ClickPairMode.C_L, ClickPairMode.C_B)

    @property
    def kept_dimension(self) -> Optional[str]:
        """
        Dimension measured from the clicks; the other one is derived.

        Returns:
            "height", "width", or None for TL_BR (decided by the ratio sign)
        """
        if self in (ClickPairMode.C_T, ClickPairMode.C_B, ClickPairMode.T_B):
            return "height"
        if self in (ClickPairMode.C_R, ClickPairMode.C_L, ClickPairMode.L_R):
            return "width"
        return None


class EditMode(IntEnum):
    """Editor sub-mode, matching the position of the delete-mode toggle."""

    ADD = 0
    DELETE = 1


class PointerEventKind(str, Enum):
    """Kind of pointer event delivered by a display surface."""

    PRESS = "press"
    MOVE = "move"
    RELEASE = "release"


class PointerButton(str, Enum):
    """Button involved in a pointer event."""

    NONE = "none"
    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass(frozen=True)
class PointerEvent:
    """A single pointer event in image coordinates."""

    kind: PointerEventKind
    x: int
    y: int
    button: PointerButton = PointerButton.NONE

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    def is_press(self, button: PointerButton) -> bool:
        return self.kind == PointerEventKind.PRESS and self.button == button

    def is_release(self, button: PointerButton) -> bool:
        return self.kind == PointerEventKind.RELEASE and self.button == button

    @property
    def is_move(self) -> bool:
        return self.kind == PointerEventKind.MOVE
