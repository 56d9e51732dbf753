"""
Diagram model for the seven supported diagram kinds.

Every diagram is an immutable dataclass produced by the parser and consumed
once by the layout engine. Collections are tuples and style maps are
read-only mappings, so a parsed diagram can be shared freely.

Classes:
    FlowchartDiagram: Nodes, edges, subgraphs and style attachments.
    SequenceDiagram: Participants and the messages exchanged between them.
    PieChartDiagram: Titled set of proportional slices.
    ClassDiagram: Classes with members and typed relationships.
    StateDiagram: States and transitions, including the [*] pseudo-state.
    GanttDiagram: Sections of tasks with status flags.
    ERDiagram: Entities with attributes and cardinality relations.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

START_END_ID = "[*]"


class DiagramType(Enum):
    """The closed set of diagram kinds."""

    FLOWCHART = "flowchart"
    SEQUENCE = "sequence"
    PIE = "pie"
    CLASS = "class"
    STATE = "state"
    GANTT = "gantt"
    ER = "er"


class FlowDirection(Enum):
    """Direction in which layers advance."""

    TD = "TD"
    TB = "TB"
    BT = "BT"
    LR = "LR"
    RL = "RL"

    @property
    def is_horizontal(self) -> bool:
        return self in (FlowDirection.LR, FlowDirection.RL)

    @property
    def is_reversed(self) -> bool:
        return self in (FlowDirection.BT, FlowDirection.RL)


class NodeShape(Enum):
    RECTANGLE = "rectangle"
    ROUNDED = "rounded"
    STADIUM = "stadium"
    DIAMOND = "diamond"
    HEXAGON = "hexagon"
    CIRCLE = "circle"
    ASYMMETRIC = "asymmetric"


class EdgeStyle(Enum):
    SOLID = "solid"
    DOTTED = "dotted"
    THICK = "thick"
    INVISIBLE = "invisible"


class MessageStyle(Enum):
    """Arrow styles of a sequence message."""

    SOLID_ARROW = "->>"
    DOTTED_ARROW = "-->>"
    SOLID_LINE = "->"
    DOTTED_LINE = "-->"
    SOLID_CROSS = "-x"
    DOTTED_CROSS = "--x"
    SOLID_ASYNC = "-)"
    DOTTED_ASYNC = "--)"

    @property
    def is_dotted(self) -> bool:
        return self.value.startswith("--")


class RelationType(Enum):
    INHERITANCE = "inheritance"
    COMPOSITION = "composition"
    AGGREGATION = "aggregation"
    ASSOCIATION = "association"
    DEPENDENCY = "dependency"
    REALIZATION = "realization"
    LINK = "link"


class Visibility(Enum):
    PUBLIC = "+"
    PRIVATE = "-"
    PROTECTED = "#"
    PACKAGE = "~"


class TaskStatus(Enum):
    NORMAL = "normal"
    ACTIVE = "active"
    DONE = "done"
    CRITICAL = "crit"
    CRITICAL_ACTIVE = "crit_active"
    CRITICAL_DONE = "crit_done"


class AttributeKey(Enum):
    PK = "PK"
    FK = "FK"
    UK = "UK"


class Cardinality(Enum):
    """One end of a crow's-foot relation."""

    EXACTLY_ONE = "exactly_one"
    ZERO_OR_ONE = "zero_or_one"
    ZERO_OR_MORE = "zero_or_more"
    ONE_OR_MORE = "one_or_more"


def frozen_mapping(values=None) -> Mapping:
    """Wrap a dict in a read-only view (copying it first)."""
    return MappingProxyType(dict(values or {}))


# Flowchart


@dataclass(frozen=True)
class NodeStyle:
    """
    Visual style attached to a node through classDef or style.

    Attributes:
        fill: Fill colour string as written, e.g. "#f9f".
        stroke: Border colour string.
        stroke_width: Border width in pixels.
        color: Text colour string.
    """

    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class FlowNode:
    id: str
    label: str
    shape: NodeShape = NodeShape.RECTANGLE


@dataclass(frozen=True)
class FlowEdge:
    source: str
    target: str
    label: Optional[str] = None
    style: EdgeStyle = EdgeStyle.SOLID


@dataclass(frozen=True)
class Subgraph:
    id: str
    label: str
    node_ids: Tuple[str, ...] = ()
    subgraph_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FlowchartDiagram:
    """
    A parsed flowchart.

    Attributes:
        direction: Direction in which layers advance.
        nodes: Nodes in first-seen order.
        edges: Edges in declaration order.
        subgraphs: Subgraphs in the order their blocks were closed.
        class_defs: Style name to NodeStyle.
        node_classes: Node id to the style name attached to it.
    """

    direction: FlowDirection = FlowDirection.TD
    nodes: Tuple[FlowNode, ...] = ()
    edges: Tuple[FlowEdge, ...] = ()
    subgraphs: Tuple[Subgraph, ...] = ()
    class_defs: Mapping[str, NodeStyle] = field(default_factory=frozen_mapping)
    node_classes: Mapping[str, str] = field(default_factory=frozen_mapping)

    @property
    def kind(self) -> DiagramType:
        return DiagramType.FLOWCHART

    def style_for(self, node_id: str) -> Optional[NodeStyle]:
        """Resolve the style attached to a node, if any."""
        class_name = self.node_classes.get(node_id)
        if class_name is None:
            return None
        return self.class_defs.get(class_name)


# Sequence


@dataclass(frozen=True)
class Participant:
    id: str
    label: str
    is_actor: bool = False


@dataclass(frozen=True)
class Message:
    source: str
    target: str
    text: str
    style: MessageStyle = MessageStyle.SOLID_ARROW


@dataclass(frozen=True)
class SequenceDiagram:
    participants: Tuple[Participant, ...] = ()
    messages: Tuple[Message, ...] = ()

    @property
    def kind(self) -> DiagramType:
        return DiagramType.SEQUENCE


# Pie


@dataclass(frozen=True)
class PieSlice:
    label: str
    value: float


@dataclass(frozen=True)
class PieChartDiagram:
    title: Optional[str] = None
    slices: Tuple[PieSlice, ...] = ()
    show_data: bool = False

    @property
    def kind(self) -> DiagramType:
        return DiagramType.PIE

    @property
    def total(self) -> float:
        return sum(s.value for s in self.slices)


# Class


@dataclass(frozen=True)
class ClassMember:
    """
    A property or method line of a class body.

    Attributes:
        visibility: Access modifier from the leading sigil.
        name: Member name; methods keep their parameter list, e.g. "run(x)".
        member_type: Property type or method return type, may be empty.
    """

    visibility: Visibility
    name: str
    member_type: str = ""

    def display(self) -> str:
        """Render the member the way it is written in a class body."""
        if not self.member_type:
            return f"{self.visibility.value}{self.name}"
        if "(" in self.name:
            return f"{self.visibility.value}{self.name} {self.member_type}"
        return f"{self.visibility.value}{self.member_type} {self.name}"


@dataclass(frozen=True)
class ClassDefinition:
    name: str
    annotation: Optional[str] = None
    properties: Tuple[ClassMember, ...] = ()
    methods: Tuple[ClassMember, ...] = ()


@dataclass(frozen=True)
class ClassRelationship:
    """
    Relation between two classes.

    The relation marker (triangle, diamond, arrow) belongs to the target end.
    """

    source: str
    target: str
    relation_type: RelationType
    label: Optional[str] = None
    source_cardinality: Optional[str] = None
    target_cardinality: Optional[str] = None


@dataclass(frozen=True)
class ClassDiagram:
    classes: Tuple[ClassDefinition, ...] = ()
    relationships: Tuple[ClassRelationship, ...] = ()

    @property
    def kind(self) -> DiagramType:
        return DiagramType.CLASS


# State


@dataclass(frozen=True)
class StateNode:
    id: str
    label: str
    description: Optional[str] = None

    @property
    def is_start_end(self) -> bool:
        return self.id == START_END_ID


@dataclass(frozen=True)
class StateTransition:
    source: str
    target: str
    label: Optional[str] = None


@dataclass(frozen=True)
class StateDiagram:
    states: Tuple[StateNode, ...] = ()
    transitions: Tuple[StateTransition, ...] = ()
    direction: FlowDirection = FlowDirection.TD

    @property
    def kind(self) -> DiagramType:
        return DiagramType.STATE


# Gantt


@dataclass(frozen=True)
class GanttTask:
    """
    A single Gantt task line.

    Attributes:
        name: Text before the colon.
        id: Optional task id used by "after" references.
        status: Combination of the done/active/crit flags.
        start_date: Literal start date, not interpreted.
        duration: Literal duration such as "3d", not interpreted.
        after_id: Id of the task this one follows.
    """

    name: str
    id: Optional[str] = None
    status: TaskStatus = TaskStatus.NORMAL
    start_date: Optional[str] = None
    duration: Optional[str] = None
    after_id: Optional[str] = None


@dataclass(frozen=True)
class GanttSection:
    name: str
    tasks: Tuple[GanttTask, ...] = ()


@dataclass(frozen=True)
class GanttDiagram:
    title: Optional[str] = None
    date_format: Optional[str] = None
    sections: Tuple[GanttSection, ...] = ()

    @property
    def kind(self) -> DiagramType:
        return DiagramType.GANTT

    @property
    def tasks(self) -> Tuple[GanttTask, ...]:
        return tuple(task for section in self.sections for task in section.tasks)


# Entity-relationship


@dataclass(frozen=True)
class ERAttribute:
    attribute_type: str
    name: str
    key: Optional[AttributeKey] = None
    comment: Optional[str] = None


@dataclass(frozen=True)
class EREntity:
    name: str
    attributes: Tuple[ERAttribute, ...] = ()


@dataclass(frozen=True)
class ERRelationship:
    source: str
    target: str
    label: str
    source_cardinality: Cardinality
    target_cardinality: Cardinality


@dataclass(frozen=True)
class ERDiagram:
    entities: Tuple[EREntity, ...] = ()
    relationships: Tuple[ERRelationship, ...] = ()

    @property
    def kind(self) -> DiagramType:
        return DiagramType.ER


Diagram = Union[
    FlowchartDiagram,
    SequenceDiagram,
    PieChartDiagram,
    ClassDiagram,
    StateDiagram,
    GanttDiagram,
    ERDiagram,
]
