"""Parser registry: maps the leading keyword of a diagram to its parser."""

from typing import Callable, Dict

from .base import DiagramParser, find_token
from .class_diagram import CLASS_RELATION_TOKENS, ClassDiagramParser
from .er import ER_CARDINALITY_TOKENS, ERDiagramParser
from .flowchart import EDGE_TOKENS, FlowchartParser
from .gantt import GanttParser
from .pie import PieParser
from .sequence import MESSAGE_TOKENS, SequenceParser
from .state import StateDiagramParser

# A fresh parser instance is created per parse call
PARSERS: Dict[str, Callable[[], DiagramParser]] = {
    "flowchart": FlowchartParser,
    "graph": FlowchartParser,
    "sequenceDiagram": SequenceParser,
    "pie": PieParser,
    "classDiagram": ClassDiagramParser,
    "classDiagram-v2": ClassDiagramParser,
    "stateDiagram": StateDiagramParser,
    "stateDiagram-v2": StateDiagramParser,
    "gantt": GanttParser,
    "erDiagram": ERDiagramParser,
}

__all__ = [
    "PARSERS",
    "DiagramParser",
    "find_token",
    "FlowchartParser",
    "SequenceParser",
    "PieParser",
    "ClassDiagramParser",
    "StateDiagramParser",
    "GanttParser",
    "ERDiagramParser",
    "EDGE_TOKENS",
    "MESSAGE_TOKENS",
    "CLASS_RELATION_TOKENS",
    "ER_CARDINALITY_TOKENS",
]
