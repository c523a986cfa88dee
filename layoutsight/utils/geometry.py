"""Leaf-node geometry helpers. No engine imports.

Frame-relative rectangles use a top-left origin with y growing downwards,
the same frame the host design tool reports. Normalized bounds map the
analysis root onto [0, 1] on both axes.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Literal

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import Polygon, box
from shapely.ops import unary_union

Axis = Literal["horizontal", "vertical"]


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle ``{x, y, width, height}``."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def center(self) -> tuple[float, float]:
        return (self.center_x, self.center_y)

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        """Width / height. ``inf`` for zero-height rectangles."""
        if self.height <= 0:
            return float("inf")
        return self.width / self.height

    def to_polygon(self) -> Polygon:
        return box(self.x, self.y, self.right, self.bottom)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class NormalizedBounds:
    """Rectangle in root-normalized space (0 = left/top edge, 1 = right/bottom edge)."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> tuple[float, float]:
        return ((self.left + self.right) / 2, (self.top + self.bottom) / 2)


def to_relative_bounds(
    absolute: Bounds | None,
    reference_origin: tuple[float, float] | Bounds,
) -> Bounds | None:
    """Shift a host-absolute rectangle into the frame of ``reference_origin``.

    Returns None when the node exposes no bounding box; callers skip it.
    """
    if absolute is None:
        return None
    if isinstance(reference_origin, Bounds):
        ox, oy = reference_origin.x, reference_origin.y
    else:
        ox, oy = reference_origin
    return Bounds(absolute.x - ox, absolute.y - oy, absolute.width, absolute.height)


def rectangles_overlap(a: Bounds, b: Bounds) -> bool:
    """True when the intersection has positive area. Touching edges do not overlap."""
    return a.to_polygon().intersection(b.to_polygon()).area > 0


def rectangle_contains(inner: Bounds, outer: Bounds) -> bool:
    """True when ``inner`` lies entirely within ``outer`` (shared edges allowed)."""
    return outer.to_polygon().covers(inner.to_polygon())


def horizontal_gap(a: Bounds, b: Bounds) -> float:
    """Empty space between the rectangles along x; 0 when their x-ranges meet."""
    return max(0.0, a.x - b.right, b.x - a.right)


def vertical_gap(a: Bounds, b: Bounds) -> float:
    """Empty space between the rectangles along y; 0 when their y-ranges meet."""
    return max(0.0, a.y - b.bottom, b.y - a.bottom)


def edge_distance(a: Bounds, b: Bounds) -> float:
    """Minimum edge-to-edge distance. 0 when the rectangles overlap."""
    if rectangles_overlap(a, b):
        return 0.0

    dx = horizontal_gap(a, b)
    dy = vertical_gap(a, b)

    if dx == 0:
        return dy
    if dy == 0:
        return dx
    return math.hypot(dx, dy)


def separation_direction(a: Bounds, b: Bounds) -> Axis:
    """Coarse axis along which two rectangles are separated.

    No horizontal gap means they sit one above the other (``vertical``);
    no vertical gap means they sit side by side (``horizontal``). With
    both gaps open the larger one decides; ties go to ``vertical``.
    """
    dx = horizontal_gap(a, b)
    dy = vertical_gap(a, b)

    if dx == 0:
        return "vertical"
    if dy == 0:
        return "horizontal"
    return "horizontal" if dx > dy else "vertical"


def bounding_box_of(rectangles: Iterable[Bounds]) -> Bounds | None:
    """Union rectangle of a set of bounds. None for an empty set."""
    rects = list(rectangles)
    if not rects:
        return None
    xmin, ymin, xmax, ymax = unary_union([r.to_polygon() for r in rects]).bounds
    return Bounds(xmin, ymin, xmax - xmin, ymax - ymin)


def pairwise_gaps(
    rectangles: Sequence[Bounds],
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.bool_]]:
    """Vectorised horizontal gaps, vertical gaps and overlap flags for every pair.

    Returns three n×n matrices. The overlap flag is set when both axis
    ranges intersect with positive length, i.e. positive intersection area.
    """
    n = len(rectangles)
    if n == 0:
        empty = np.zeros((0, 0))
        return empty, empty, np.zeros((0, 0), dtype=bool)

    arr = np.array([r.as_tuple() for r in rectangles], dtype=np.float64)
    x0, y0 = arr[:, 0], arr[:, 1]
    x1, y1 = x0 + arr[:, 2], y0 + arr[:, 3]

    # Signed separation: positive = gap, negative = overlap along that axis
    sep_x = np.maximum(x0[:, None] - x1[None, :], x0[None, :] - x1[:, None])
    sep_y = np.maximum(y0[:, None] - y1[None, :], y0[None, :] - y1[:, None])

    overlap = (sep_x < 0) & (sep_y < 0)
    np.fill_diagonal(overlap, True)
    return np.maximum(sep_x, 0.0), np.maximum(sep_y, 0.0), overlap


def edge_distance_matrix(rectangles: Sequence[Bounds]) -> NDArray[np.float64]:
    """Symmetric n×n matrix of :func:`edge_distance` values."""
    gx, gy, overlap = pairwise_gaps(rectangles)
    dist = np.hypot(gx, gy)
    dist[overlap] = 0.0
    return dist


# --- Normalized space ---


def to_normalized(bounds: Bounds, root_width: float, root_height: float) -> NormalizedBounds:
    """Map frame-relative pixels onto the unit square of the analysis root."""
    w = root_width if root_width > 0 else 1.0
    h = root_height if root_height > 0 else 1.0
    return NormalizedBounds(
        left=bounds.x / w,
        top=bounds.y / h,
        right=bounds.right / w,
        bottom=bounds.bottom / h,
    )


def point_distance(p1: tuple[float, float], p2: tuple[float, float]) -> float:
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def angle_between(origin: tuple[float, float], target: tuple[float, float]) -> float:
    """Direction from ``origin`` to ``target`` in degrees [0, 360). 0 = east, 90 = south."""
    dx = target[0] - origin[0]
    dy = target[1] - origin[1]
    return (math.degrees(math.atan2(dy, dx)) + 360.0) % 360.0


def angular_difference(a: float, b: float) -> float:
    """Smallest absolute difference between two angles, in degrees [0, 180]."""
    diff = abs(a - b) % 360.0
    return min(diff, 360.0 - diff)
