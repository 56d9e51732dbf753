"""
Positioned layout records produced by the layout engine.

Each diagram kind has one layout record holding positioned entities,
positioned relations and the overall canvas size. All records are frozen;
the renderer only reads them.

Classes:
    FlowchartLayout: Node frames, routed edges and subgraph frames.
    SequenceLayout: Participant headers, lifelines and message rows.
    PieLayout: Slice angles, label anchors and legend entries.
    ClassDiagramLayout: Class boxes split into compartments.
    StateDiagramLayout: State frames and routed transitions.
    GanttLayout: Task bars, section headers and day grid lines.
    ERDiagramLayout: Entity boxes and relation paths.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .config import RGB
from .diagrams import (
    ClassDefinition,
    ClassRelationship,
    ERRelationship,
    EREntity,
    FlowEdge,
    FlowNode,
    GanttTask,
    Message,
    NodeStyle,
    Participant,
    PieSlice,
    StateNode,
    StateTransition,
    Subgraph,
)
from .geometry import Point, Rect

Path = Tuple[Point, ...]


@dataclass(frozen=True)
class PositionedNode:
    """
    A flowchart node with its frame.

    Attributes:
        node: The parsed node.
        frame: Bounding rectangle on the canvas.
        layer: Layer index from layered placement.
        style: Resolved classDef/style attachment, if any.
    """

    node: FlowNode
    frame: Rect
    layer: int
    style: Optional[NodeStyle] = None


@dataclass(frozen=True)
class PositionedEdge:
    edge: FlowEdge
    points: Path
    label_position: Optional[Point] = None


@dataclass(frozen=True)
class PositionedSubgraph:
    subgraph: Subgraph
    frame: Rect
    label_position: Point


@dataclass(frozen=True)
class FlowchartLayout:
    width: float
    height: float
    nodes: Tuple[PositionedNode, ...] = ()
    edges: Tuple[PositionedEdge, ...] = ()
    subgraphs: Tuple[PositionedSubgraph, ...] = ()


@dataclass(frozen=True)
class PositionedParticipant:
    participant: Participant
    header_frame: Rect
    lifeline_x: float
    lifeline_top: float
    lifeline_bottom: float


@dataclass(frozen=True)
class PositionedMessage:
    """
    A message row between two lifelines.

    Attributes:
        message: The parsed message.
        points: Two points, or four for a self-message loop.
        y: Row position of the message.
        label_position: Anchor for the message text.
    """

    message: Message
    points: Path
    y: float
    label_position: Point


@dataclass(frozen=True)
class SequenceLayout:
    width: float
    height: float
    participants: Tuple[PositionedParticipant, ...] = ()
    messages: Tuple[PositionedMessage, ...] = ()


@dataclass(frozen=True)
class PositionedPieSlice:
    """
    A pie slice with its angular extent.

    Angles are in degrees, measured clockwise from 3 o'clock, so the first
    slice starts at -90 (12 o'clock).
    """

    slice: PieSlice
    start_angle: float
    sweep_angle: float
    percentage: float
    color: RGB
    label_position: Point


@dataclass(frozen=True)
class LegendEntry:
    label: str
    value: float
    percentage: float
    color: RGB
    swatch: Rect
    text_position: Point


@dataclass(frozen=True)
class PieLayout:
    width: float
    height: float
    center: Point
    radius: float
    slices: Tuple[PositionedPieSlice, ...] = ()
    legend: Tuple[LegendEntry, ...] = ()
    title: Optional[str] = None
    title_position: Optional[Point] = None
    show_data: bool = False


@dataclass(frozen=True)
class PositionedClassBox:
    class_def: ClassDefinition
    frame: Rect
    header_frame: Rect
    properties_frame: Rect
    methods_frame: Rect


@dataclass(frozen=True)
class PositionedClassRelationship:
    relationship: ClassRelationship
    points: Path
    label_position: Optional[Point] = None
    source_label_position: Optional[Point] = None
    target_label_position: Optional[Point] = None


@dataclass(frozen=True)
class ClassDiagramLayout:
    width: float
    height: float
    classes: Tuple[PositionedClassBox, ...] = ()
    relationships: Tuple[PositionedClassRelationship, ...] = ()


@dataclass(frozen=True)
class PositionedState:
    state: StateNode
    frame: Rect
    layer: int

    @property
    def is_start_end(self) -> bool:
        return self.state.is_start_end


@dataclass(frozen=True)
class PositionedStateTransition:
    transition: StateTransition
    points: Path
    label_position: Optional[Point] = None


@dataclass(frozen=True)
class StateDiagramLayout:
    width: float
    height: float
    states: Tuple[PositionedState, ...] = ()
    transitions: Tuple[PositionedStateTransition, ...] = ()


@dataclass(frozen=True)
class PositionedGanttSection:
    name: str
    y: float


@dataclass(frozen=True)
class PositionedGanttTask:
    """
    A Gantt bar.

    Attributes:
        task: The parsed task.
        bar: Bar rectangle.
        label_position: Left-aligned anchor for the task name.
        color: Fill colour chosen from the task status.
        striped: Done tasks are drawn with diagonal stripes.
        bordered: Active and critical tasks get an outline.
    """

    task: GanttTask
    bar: Rect
    label_position: Point
    color: RGB
    striped: bool = False
    bordered: bool = False


@dataclass(frozen=True)
class GridLine:
    x: float
    label: str


@dataclass(frozen=True)
class GanttLayout:
    width: float
    height: float
    sections: Tuple[PositionedGanttSection, ...] = ()
    tasks: Tuple[PositionedGanttTask, ...] = ()
    grid_lines: Tuple[GridLine, ...] = ()
    title: Optional[str] = None
    title_position: Optional[Point] = None
    chart_top: float = 0
    chart_bottom: float = 0


@dataclass(frozen=True)
class PositionedEREntity:
    entity: EREntity
    frame: Rect
    header_frame: Rect
    attribute_frames: Tuple[Rect, ...] = ()


@dataclass(frozen=True)
class PositionedERRelationship:
    relationship: ERRelationship
    points: Path
    label_position: Point


@dataclass(frozen=True)
class ERDiagramLayout:
    width: float
    height: float
    entities: Tuple[PositionedEREntity, ...] = ()
    relationships: Tuple[PositionedERRelationship, ...] = ()


PositionedLayout = Union[
    FlowchartLayout,
    SequenceLayout,
    PieLayout,
    ClassDiagramLayout,
    StateDiagramLayout,
    GanttLayout,
    ERDiagramLayout,
]
