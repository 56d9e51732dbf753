"""
Edge routing module.

Keeps an edge straight unless the straight segment would cross a frame other
than its own endpoints; in that case the edge becomes a 4-point orthogonal
detour around the crossed frames.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .geometry import Point, Rect, midpoint, segment_intersects_rect


@dataclass
class EdgeRoute:
    """A routed edge between two boxes."""

    source: str
    target: str
    waypoints: List[Point] = field(default_factory=list)
    obstacles: List[str] = field(default_factory=list)

    @property
    def is_detour(self) -> bool:
        return len(self.waypoints) > 2

    @property
    def label_position(self) -> Point:
        """Midpoint of the two ends, lifted above the line."""
        mid = midpoint(self.waypoints[0], self.waypoints[-1])
        return Point(mid.x, mid.y - 10)


class EdgeRouter:
    """
    Routes edges around the boxes of a layered diagram.

    Obstacles are padded by obstacle_padding before the intersection test and
    detours run detour_offset beyond the outermost crossed obstacle.
    """

    def __init__(self, obstacle_padding: float = 4, detour_offset: float = 20):
        self.obstacle_padding = obstacle_padding
        self.detour_offset = detour_offset
        self.boxes: Dict[str, Rect] = {}

    def set_boxes(self, boxes: Dict[str, Rect]) -> None:
        """Set box frames for routing calculations."""
        self.boxes = boxes

    def find_obstacles(
        self, source: str, target: str, start: Point, end: Point
    ) -> List[Tuple[str, Rect]]:
        """Padded frames, other than the endpoints', crossed by start-end."""
        hits = []
        for name, frame in self.boxes.items():
            if name in (source, target):
                continue
            padded = frame.padded(self.obstacle_padding)
            if segment_intersects_rect(start, end, padded):
                hits.append((name, padded))
        return hits

    def route(self, source: str, target: str, start: Point, end: Point) -> EdgeRoute:
        """
        Route one edge.

        Args:
            source: Source box name
            target: Target box name
            start: Anchor on the source box
            end: Anchor on the target box

        Returns:
            EdgeRoute with 2 waypoints, or 4 when a detour is needed
        """
        hits = self.find_obstacles(source, target, start, end)
        if not hits:
            return EdgeRoute(source, target, [start, end])

        obstacles = [rect for _, rect in hits]
        names = [name for name, _ in hits]
        offset = self.detour_offset

        if abs(end.y - start.y) >= abs(end.x - start.x):
            # Mostly vertical travel: bend sideways
            low = min(rect.left for rect in obstacles)
            high = max(rect.right for rect in obstacles)
            if abs(start.x - low) < abs(start.x - high):
                bend = low - offset
            else:
                bend = high + offset
            waypoints = [start, Point(bend, start.y), Point(bend, end.y), end]
        else:
            low = min(rect.top for rect in obstacles)
            high = max(rect.bottom for rect in obstacles)
            if abs(start.y - low) < abs(start.y - high):
                bend = low - offset
            else:
                bend = high + offset
            waypoints = [start, Point(start.x, bend), Point(end.x, bend), end]

        return EdgeRoute(source, target, waypoints, names)

    def route_edges(
        self, edges: List[Tuple[str, str, Point, Point]]
    ) -> List[EdgeRoute]:
        """Route (source, target, start, end) tuples in order."""
        return [self.route(*edge) for edge in edges]
