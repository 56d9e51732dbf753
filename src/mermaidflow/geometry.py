"""
Geometry helpers shared by the layout code.

Provides the Point and Rect primitives, the parametric segment-rectangle
intersection test used by the edge router, and the box-to-box connector used
by grid-placed diagrams (class and ER).
"""

from dataclasses import dataclass
from typing import NamedTuple, Tuple


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle in canvas coordinates (y grows downward).

    Attributes:
        left: Smallest x.
        top: Smallest y.
        right: Largest x.
        bottom: Largest y.
    """

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_size(cls, x: float, y: float, width: float, height: float) -> "Rect":
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Point:
        return Point((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    @property
    def top_center(self) -> Point:
        return Point(self.center.x, self.top)

    @property
    def bottom_center(self) -> Point:
        return Point(self.center.x, self.bottom)

    @property
    def left_middle(self) -> Point:
        return Point(self.left, self.center.y)

    @property
    def right_middle(self) -> Point:
        return Point(self.right, self.center.y)

    def padded(self, amount: float) -> "Rect":
        return Rect(
            self.left - amount,
            self.top - amount,
            self.right + amount,
            self.bottom + amount,
        )

    def union(self, other: "Rect") -> "Rect":
        return Rect(
            min(self.left, other.left),
            min(self.top, other.top),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )


def midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def segment_intersects_rect(start: Point, end: Point, rect: Rect) -> bool:
    """
    Test whether the segment start-end touches the rectangle.

    Clips the parametric segment P(t) = start + t * (end - start), t in [0, 1],
    against the four half-planes bounding the rectangle. The segment hits the
    rectangle iff the surviving [t_min, t_max] interval is non-empty.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    t_min, t_max = 0.0, 1.0

    for p, q in (
        (-dx, start.x - rect.left),
        (dx, rect.right - start.x),
        (-dy, start.y - rect.top),
        (dy, rect.bottom - start.y),
    ):
        if p == 0:
            # Parallel to this edge; reject if outside it
            if q < 0:
                return False
            continue
        t = q / p
        if p < 0:
            if t > t_max:
                return False
            t_min = max(t_min, t)
        else:
            if t < t_min:
                return False
            t_max = min(t_max, t)

    return t_min <= t_max


def connect_boxes(a: Rect, b: Rect) -> Tuple[Point, Point]:
    """
    Pick the facing edge midpoints of two boxes.

    The dominant axis of the centre-to-centre offset decides whether the
    boxes are joined side-to-side or top-to-bottom.
    """
    ca, cb = a.center, b.center
    dx = cb.x - ca.x
    dy = cb.y - ca.y
    if abs(dx) > abs(dy):
        if dx > 0:
            return a.right_middle, b.left_middle
        return a.left_middle, b.right_middle
    if dy > 0:
        return a.bottom_center, b.top_center
    return a.top_center, b.bottom_center
