"""
Layered layout for flowcharts and state diagrams.

Uses networkx for the graph representation and:
- Deterministic Kahn topological ordering (cycles tolerated)
- Longest-path layer assignment
- Lexicographic ordering within each layer
- Direction-aware placement of each node in a grid cell
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .diagrams import FlowDirection
from .geometry import Point, Rect
from .graph import assign_layers, create_graph, group_layers, topological_order

logger = logging.getLogger(__name__)


@dataclass
class NodeLayout:
    """Represents a node's layout information."""

    name: str
    layer: int = 0
    position: int = 0  # Position within layer
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    @property
    def frame(self) -> Rect:
        return Rect.from_size(self.x, self.y, self.width, self.height)


@dataclass
class LayoutResult:
    """Result of the layered layout algorithm."""

    nodes: Dict[str, NodeLayout] = field(default_factory=dict)
    layers: List[List[str]] = field(default_factory=list)
    edges: List[Tuple[str, str]] = field(default_factory=list)
    order: List[str] = field(default_factory=list)
    has_cycles: bool = False


class LayeredLayout:
    """
    Layered placement of a directed graph.

    Every node sits in a cell of cell_width x cell_height; its own frame is
    centred in the cell, so nodes of different sizes share one grid. The
    direction decides whether layers advance along y (TD, TB, BT) or along
    x (LR, RL), and BT/RL count layers from the far side.
    """

    def __init__(
        self,
        cell_width: float,
        cell_height: float,
        horizontal_spacing: float,
        vertical_spacing: float,
        padding: float,
        direction: FlowDirection = FlowDirection.TD,
    ):
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.horizontal_spacing = horizontal_spacing
        self.vertical_spacing = vertical_spacing
        self.padding = padding
        self.direction = direction

    def layout(
        self,
        node_ids: Iterable[str],
        edges: List[Tuple[str, str]],
        sizes: Optional[Dict[str, Tuple[float, float]]] = None,
    ) -> LayoutResult:
        """
        Compute layers and positions.

        Args:
            node_ids: Every node id, including isolated ones
            edges: List of (source, target) tuples
            sizes: Optional per-node (width, height); defaults to the cell size

        Returns:
            LayoutResult with node positions and layer assignments
        """
        sizes = sizes or {}
        graph = create_graph(node_ids, edges)

        order = topological_order(graph)
        node_layer = assign_layers(graph, order)
        layers = group_layers(node_layer)

        result = LayoutResult()
        result.order = order
        result.layers = layers
        result.edges = list(edges)
        result.has_cycles = any(
            node_layer[source] >= node_layer[target] for source, target in edges
        )
        if result.has_cycles:
            logger.debug("Layered layout contains cycles")

        for layer_idx, layer in enumerate(layers):
            for pos_idx, node_name in enumerate(layer):
                width, height = sizes.get(
                    node_name, (self.cell_width, self.cell_height)
                )
                cell = self._cell_origin(layer_idx, pos_idx, len(layers))
                result.nodes[node_name] = NodeLayout(
                    name=node_name,
                    layer=layer_idx,
                    position=pos_idx,
                    x=cell.x + (self.cell_width - width) / 2,
                    y=cell.y + (self.cell_height - height) / 2,
                    width=width,
                    height=height,
                )

        return result

    def _cell_origin(self, layer: int, position: int, layer_count: int) -> Point:
        if self.direction.is_reversed:
            layer = layer_count - 1 - layer

        step_x = self.cell_width + self.horizontal_spacing
        step_y = self.cell_height + self.vertical_spacing
        if self.direction.is_horizontal:
            return Point(self.padding + layer * step_x, self.padding + position * step_y)
        return Point(self.padding + position * step_x, self.padding + layer * step_y)

    def anchors(self, source: Rect, target: Rect) -> Tuple[Point, Point]:
        """Edge end points: leave the side facing the flow, enter the opposite."""
        if self.direction == FlowDirection.BT:
            return source.top_center, target.bottom_center
        if self.direction == FlowDirection.LR:
            return source.right_middle, target.left_middle
        if self.direction == FlowDirection.RL:
            return source.left_middle, target.right_middle
        return source.bottom_center, target.top_center
