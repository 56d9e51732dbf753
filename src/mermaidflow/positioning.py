"""
Position calculation for graph-shaped diagrams.

This module turns flowcharts, state diagrams, class diagrams and ER diagrams
into positioned layouts:
- Layered placement and edge routing for flowcharts and state diagrams
- Subgraph frames around their members and nested subgraphs
- Grid placement with per-row heights for class and ER boxes
- Box-to-box connectors and cardinality label anchors

The PositionCalculator class is used by the DiagramLayoutEngine for these
four kinds; pie, sequence and Gantt charts live in the charts module.
"""

import logging
import math
from typing import Dict, Iterable, List, Sequence, Tuple

from .config import LayoutConfig
from .diagrams import (
    ClassDefinition,
    ClassDiagram,
    ERDiagram,
    FlowchartDiagram,
    StateDiagram,
)
from .geometry import Point, Rect, connect_boxes, midpoint
from .layout import LayeredLayout
from .models import (
    ClassDiagramLayout,
    ERDiagramLayout,
    FlowchartLayout,
    PositionedClassBox,
    PositionedClassRelationship,
    PositionedEdge,
    PositionedEREntity,
    PositionedERRelationship,
    PositionedNode,
    PositionedState,
    PositionedStateTransition,
    PositionedSubgraph,
    StateDiagramLayout,
)
from .router import EdgeRouter

logger = logging.getLogger(__name__)

LABEL_LIFT = 10
CARDINALITY_OFFSET_X = 15
CARDINALITY_OFFSET_Y = 12


def shift_rect(rect: Rect, dx: float, dy: float) -> Rect:
    return Rect(rect.left + dx, rect.top + dy, rect.right + dx, rect.bottom + dy)


def cardinality_anchor(endpoint: Point, other: Point) -> Point:
    """Label spot beside an endpoint, shifted toward the other end of the line."""
    dx = CARDINALITY_OFFSET_X if other.x > endpoint.x else -CARDINALITY_OFFSET_X
    return Point(endpoint.x + dx, endpoint.y - CARDINALITY_OFFSET_Y)


def calculate_canvas_size(
    frames: Iterable[Rect], padding: float
) -> Tuple[float, float]:
    """Canvas size: the furthest right/bottom extent plus padding."""
    frames = list(frames)
    if not frames:
        return 2 * padding, 2 * padding
    return (
        max(frame.right for frame in frames) + padding,
        max(frame.bottom for frame in frames) + padding,
    )


class PositionCalculator:
    """
    Calculates positions for flowchart, state, class and ER diagrams.

    Attributes:
        config: Geometric constants used for every size and spacing.
        router: Edge router shared by the layered diagram kinds.
    """

    def __init__(self, config: LayoutConfig):
        self.config = config
        self.router = EdgeRouter()

    # Flowchart

    def flowchart(self, diagram: FlowchartDiagram) -> FlowchartLayout:
        """Place a flowchart with layered placement and routed edges."""
        config = self.config
        layered = LayeredLayout(
            cell_width=config.node_width,
            cell_height=config.node_height,
            horizontal_spacing=config.horizontal_spacing,
            vertical_spacing=config.vertical_spacing,
            padding=config.padding,
            direction=diagram.direction,
        )
        edges = [(edge.source, edge.target) for edge in diagram.edges]
        result = layered.layout([node.id for node in diagram.nodes], edges)

        frames = {name: node.frame for name, node in result.nodes.items()}
        subgraph_frames = self.calculate_subgraph_frames(diagram, frames)

        # Subgraph frames reach above and left of their members; shift the
        # whole drawing so nothing starts inside the padding.
        all_frames = list(frames.values()) + list(subgraph_frames.values())
        if all_frames:
            dx = max(0, config.padding - min(frame.left for frame in all_frames))
            dy = max(0, config.padding - min(frame.top for frame in all_frames))
            if dx or dy:
                frames = {k: shift_rect(v, dx, dy) for k, v in frames.items()}
                subgraph_frames = {
                    k: shift_rect(v, dx, dy) for k, v in subgraph_frames.items()
                }

        self.router.set_boxes(frames)
        positioned_edges = []
        for edge in diagram.edges:
            start, end = layered.anchors(frames[edge.source], frames[edge.target])
            route = self.router.route(edge.source, edge.target, start, end)
            positioned_edges.append(
                PositionedEdge(
                    edge=edge,
                    points=tuple(route.waypoints),
                    label_position=route.label_position if edge.label else None,
                )
            )

        positioned_nodes = tuple(
            PositionedNode(
                node=node,
                frame=frames[node.id],
                layer=result.nodes[node.id].layer,
                style=diagram.style_for(node.id),
            )
            for node in diagram.nodes
        )

        positioned_subgraphs = tuple(
            PositionedSubgraph(
                subgraph=subgraph,
                frame=subgraph_frames[subgraph.id],
                label_position=Point(
                    subgraph_frames[subgraph.id].left + config.subgraph_padding,
                    subgraph_frames[subgraph.id].top
                    + config.subgraph_label_height / 2
                    + 4,
                ),
            )
            for subgraph in diagram.subgraphs
            if subgraph.id in subgraph_frames
        )

        width, height = calculate_canvas_size(
            list(frames.values()) + list(subgraph_frames.values()), config.padding
        )
        logger.debug(
            "Flowchart layout: %d nodes, %d layers, canvas %sx%s",
            len(positioned_nodes),
            len(result.layers),
            width,
            height,
        )
        return FlowchartLayout(
            width=width,
            height=height,
            nodes=positioned_nodes,
            edges=tuple(positioned_edges),
            subgraphs=positioned_subgraphs,
        )

    def calculate_subgraph_frames(
        self, diagram: FlowchartDiagram, frames: Dict[str, Rect]
    ) -> Dict[str, Rect]:
        """
        Frame each subgraph around its member nodes and nested subgraphs.

        Subgraphs arrive in close order, so nested frames are computed before
        the frames that contain them. A subgraph with nothing inside gets no
        frame.
        """
        padding = self.config.subgraph_padding
        label_height = self.config.subgraph_label_height
        result: Dict[str, Rect] = {}

        for subgraph in diagram.subgraphs:
            inner = [frames[n] for n in subgraph.node_ids if n in frames]
            inner += [result[s] for s in subgraph.subgraph_ids if s in result]
            if not inner:
                continue
            bounds = inner[0]
            for frame in inner[1:]:
                bounds = bounds.union(frame)
            padded = bounds.padded(padding)
            result[subgraph.id] = Rect(
                padded.left, padded.top - label_height, padded.right, padded.bottom
            )

        return result

    # State diagram

    def state_diagram(self, diagram: StateDiagram) -> StateDiagramLayout:
        """Place a state diagram with the same layered placement as flowcharts."""
        config = self.config
        layered = LayeredLayout(
            cell_width=config.state_width,
            cell_height=config.state_height,
            horizontal_spacing=config.state_spacing,
            vertical_spacing=config.state_spacing,
            padding=config.padding,
            direction=diagram.direction,
        )
        marker = 2 * config.start_end_radius
        sizes = {
            state.id: (marker, marker) for state in diagram.states if state.is_start_end
        }
        edges = [(t.source, t.target) for t in diagram.transitions]
        result = layered.layout([state.id for state in diagram.states], edges, sizes)

        frames = {name: node.frame for name, node in result.nodes.items()}
        self.router.set_boxes(frames)

        transitions = []
        for transition in diagram.transitions:
            start, end = layered.anchors(
                frames[transition.source], frames[transition.target]
            )
            route = self.router.route(transition.source, transition.target, start, end)
            transitions.append(
                PositionedStateTransition(
                    transition=transition,
                    points=tuple(route.waypoints),
                    label_position=route.label_position if transition.label else None,
                )
            )

        states = tuple(
            PositionedState(
                state=state,
                frame=frames[state.id],
                layer=result.nodes[state.id].layer,
            )
            for state in diagram.states
        )
        width, height = calculate_canvas_size(frames.values(), config.padding)
        return StateDiagramLayout(
            width=width, height=height, states=states, transitions=tuple(transitions)
        )

    # Grid placement shared by class and ER diagrams

    def calculate_grid(
        self, sizes: Sequence[Tuple[float, float]], spacing: float
    ) -> List[Rect]:
        """
        Place boxes row by row on a ceil(sqrt(n)) column grid.

        Each row is as tall as its tallest box, so boxes never overlap the
        next row.
        """
        if not sizes:
            return []

        padding = self.config.padding
        cols = max(1, math.ceil(math.sqrt(len(sizes))))
        column_width = max(width for width, _ in sizes)

        frames = []
        row_top = padding
        for row_start in range(0, len(sizes), cols):
            row = sizes[row_start:row_start + cols]
            for col, (width, height) in enumerate(row):
                x = padding + col * (column_width + spacing)
                frames.append(Rect.from_size(x, row_top, width, height))
            row_top += max(height for _, height in row) + spacing

        return frames

    # Class diagram

    def class_box_height(self, class_def: ClassDefinition) -> float:
        config = self.config
        return (
            config.class_header_height
            + max(1, len(class_def.properties)) * config.class_member_height
            + max(1, len(class_def.methods)) * config.class_member_height
            + 4
        )

    def class_diagram(self, diagram: ClassDiagram) -> ClassDiagramLayout:
        """Place class boxes on a grid and connect their relationships."""
        config = self.config
        sizes = [
            (config.class_box_width, self.class_box_height(class_def))
            for class_def in diagram.classes
        ]
        frames = self.calculate_grid(sizes, config.class_spacing)

        boxes = []
        by_name: Dict[str, Rect] = {}
        for class_def, frame in zip(diagram.classes, frames):
            by_name[class_def.name] = frame
            header_bottom = frame.top + config.class_header_height
            properties_bottom = (
                header_bottom
                + max(1, len(class_def.properties)) * config.class_member_height
            )
            boxes.append(
                PositionedClassBox(
                    class_def=class_def,
                    frame=frame,
                    header_frame=Rect(
                        frame.left, frame.top, frame.right, header_bottom
                    ),
                    properties_frame=Rect(
                        frame.left, header_bottom, frame.right, properties_bottom
                    ),
                    methods_frame=Rect(
                        frame.left, properties_bottom, frame.right, frame.bottom
                    ),
                )
            )

        relationships = []
        for relationship in diagram.relationships:
            start, end = connect_boxes(
                by_name[relationship.source], by_name[relationship.target]
            )
            mid = midpoint(start, end)
            relationships.append(
                PositionedClassRelationship(
                    relationship=relationship,
                    points=(start, end),
                    label_position=(
                        Point(mid.x, mid.y - LABEL_LIFT) if relationship.label else None
                    ),
                    source_label_position=(
                        cardinality_anchor(start, end)
                        if relationship.source_cardinality
                        else None
                    ),
                    target_label_position=(
                        cardinality_anchor(end, start)
                        if relationship.target_cardinality
                        else None
                    ),
                )
            )

        width, height = calculate_canvas_size(frames, config.padding)
        return ClassDiagramLayout(
            width=width,
            height=height,
            classes=tuple(boxes),
            relationships=tuple(relationships),
        )

    # Entity-relationship diagram

    def er_diagram(self, diagram: ERDiagram) -> ERDiagramLayout:
        """Place entity boxes on a grid and connect their relationships."""
        config = self.config
        sizes = [
            (
                config.er_entity_width,
                config.er_header_height
                + max(1, len(entity.attributes)) * config.er_attribute_height
                + 4,
            )
            for entity in diagram.entities
        ]
        frames = self.calculate_grid(sizes, config.er_entity_spacing)

        entities = []
        by_name: Dict[str, Rect] = {}
        for entity, frame in zip(diagram.entities, frames):
            by_name[entity.name] = frame
            header_bottom = frame.top + config.er_header_height
            attribute_frames = tuple(
                Rect.from_size(
                    frame.left,
                    header_bottom + index * config.er_attribute_height,
                    frame.width,
                    config.er_attribute_height,
                )
                for index in range(len(entity.attributes))
            )
            entities.append(
                PositionedEREntity(
                    entity=entity,
                    frame=frame,
                    header_frame=Rect(
                        frame.left, frame.top, frame.right, header_bottom
                    ),
                    attribute_frames=attribute_frames,
                )
            )

        relationships = []
        for relationship in diagram.relationships:
            start, end = connect_boxes(
                by_name[relationship.source], by_name[relationship.target]
            )
            mid = midpoint(start, end)
            relationships.append(
                PositionedERRelationship(
                    relationship=relationship,
                    points=(start, end),
                    label_position=Point(mid.x, mid.y - LABEL_LIFT),
                )
            )

        width, height = calculate_canvas_size(frames, config.padding)
        return ERDiagramLayout(
            width=width,
            height=height,
            entities=tuple(entities),
            relationships=tuple(relationships),
        )
