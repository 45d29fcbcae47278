"""Rectangle geometry shared by the interaction modes and the editor."""

from __future__ import annotations

import math
from typing import List, Sequence

from .errors import ConfigurationError, EmptyCollectionError
from .models import ClickPairMode, Point, Rectangle, Size


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def rectangle_from_two_points(p1: Point, p2: Point) -> Rectangle:
    """
    Build the rectangle having p1 and p2 as opposite corners.

    The result does not depend on the order of the points.

    Args:
        p1: First corner
        p2: Second corner

    Returns:
        Rectangle with the smaller coordinates as origin
    """
    return Rectangle(
        min(p1.x, p2.x),
        min(p1.y, p2.y),
        abs(p2.x - p1.x),
        abs(p2.y - p1.y),
    )


def rectangle_center(rect: Rectangle) -> Point:
    """Center of a rectangle, using integer halving of the extents."""
    return Point(rect.x + rect.width // 2, rect.y + rect.height // 2)


def centered_rectangle(center: Point, size: Size) -> Rectangle:
    """Rectangle of the given size whose center is ``center``."""
    return Rectangle(
        center.x - size.width // 2,
        center.y - size.height // 2,
        size.width,
        size.height,
    )


def apply_aspect_ratio(rect: Rectangle, ratio: float) -> Rectangle:
    """
    Constrain a draft rectangle to an aspect ratio (width / height).

    A ratio of 0 leaves the draft untouched. A positive ratio keeps the
    draft's height and derives the width; a negative ratio keeps the
    width and derives the height from its magnitude. The draft's center
    is preserved.

    Args:
        rect: Draft rectangle
        ratio: Signed aspect ratio policy

    Returns:
        Constrained rectangle
    """
    if ratio == 0:
        return rect

    center = rectangle_center(rect)
    if ratio > 0:
        height = rect.height
        width = round_half_away(height * ratio)
    else:
        width = rect.width
        height = round_half_away(width / abs(ratio))

    return centered_rectangle(center, Size(width, height))


def validate_click_pair(mode: ClickPairMode, ratio: float) -> None:
    """
    Check that a click-pair mode can be used with an aspect ratio.

    Only TL_BR can work without a ratio; every other mode observes a
    single dimension and derives the other one from the ratio.

    Raises:
        ConfigurationError: If the combination cannot produce rectangles
    """
    if mode != ClickPairMode.TL_BR and ratio == 0:
        raise ConfigurationError(
            f"Click-pair mode '{mode.value}' needs a non-zero aspect ratio"
        )


def rectangle_from_click_pair(
    first: Point,
    second: Point,
    mode: ClickPairMode,
    ratio: float
) -> Rectangle:
    """
    Build a rectangle from two clicks under a click-pair mode.

    Center-anchored modes only see half of the kept dimension, so the
    draft is the rectangle centered on the first click with doubled
    extents. Modes that keep a fixed dimension apply the magnitude of the
    ratio with the sign matching that dimension.

    Args:
        first: First click
        second: Second click
        mode: Anchor convention
        ratio: Aspect ratio policy (width / height)

    Returns:
        The resulting rectangle
    """
    if mode.center_anchored:
        dx = abs(second.x - first.x)
        dy = abs(second.y - first.y)
        draft = Rectangle(first.x - dx, first.y - dy, 2 * dx, 2 * dy)
    else:
        draft = rectangle_from_two_points(first, second)

    kept = mode.kept_dimension
    if kept == "height":
        return apply_aspect_ratio(draft, abs(ratio))
    if kept == "width":
        return apply_aspect_ratio(draft, -abs(ratio))
    return apply_aspect_ratio(draft, ratio)


def euclidean_distance(p: Point, q: Point) -> float:
    return math.hypot(p.x - q.x, p.y - q.y)


def nearest_rectangle_index(rects: Sequence[Rectangle], point: Point) -> int:
    """
    Find the rectangle whose center is closest to a point.

    Ties resolve to the lowest index.

    Args:
        rects: Rectangles to search
        point: Query point

    Returns:
        Index into ``rects``

    Raises:
        EmptyCollectionError: If ``rects`` is empty
    """
    if not rects:
        raise EmptyCollectionError("Cannot find the nearest rectangle in an empty collection")

    return min(
        range(len(rects)),
        key=lambda i: euclidean_distance(rectangle_center(rects[i]), point)
    )


def rectangle_contains(rect: Rectangle, point: Point) -> bool:
    """Half-open containment test: the right and bottom edges are outside."""
    rect = rect.normalized()
    return rect.x <= point.x < rect.right and rect.y <= point.y < rect.bottom


def remove_rectangles_in_box(rects: Sequence[Rectangle], box: Rectangle) -> List[Rectangle]:
    """Keep only the rectangles whose centers fall outside ``box``."""
    return [r for r in rects if not rectangle_contains(box, rectangle_center(r))]


def scale_size(size: Size, factor: float) -> Size:
    return Size(round_half_away(size.width * factor), round_half_away(size.height * factor))


def scale_rectangle(rect: Rectangle, factor: float) -> Rectangle:
    """Multiply every component of a rectangle by ``factor`` and round."""
    return Rectangle(
        round_half_away(rect.x * factor),
        round_half_away(rect.y * factor),
        round_half_away(rect.width * factor),
        round_half_away(rect.height * factor),
    )


def fits_within(rect: Rectangle, bounds: Size) -> bool:
    """
    Check that a rectangle lies strictly inside an image.

    A rectangle touching the right or bottom border counts as outside.
    """
    return (
        rect.x >= 0
        and rect.y >= 0
        and rect.right < bounds.width
        and rect.bottom < bounds.height
    )
