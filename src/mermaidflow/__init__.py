"""
mermaidflow - Mermaid-style diagrams rendered to PNG

A Python library that parses Mermaid-style diagram text (flowcharts,
sequence diagrams, pie charts, class, state, Gantt and ER diagrams), lays it
out deterministically and renders it with Pillow.

Example:
    >>> from mermaidflow import DiagramGenerator
    >>> generator = DiagramGenerator()
    >>> generator.save_png('''
    ...     flowchart LR
    ...     A --> B
    ...     B --> C
    ... ''', "flow.png")

Layout Only Example:
    >>> from mermaidflow import parse_diagram, layout_diagram
    >>> layout = layout_diagram(parse_diagram("pie\\n\\"X\\": 30\\n\\"Y\\": 70"))
    >>> [round(s.sweep_angle) for s in layout.slices]
    [108, 252]
"""

from .config import LayoutConfig
from .diagrams import (
    ClassDiagram,
    Diagram,
    DiagramType,
    ERDiagram,
    FlowchartDiagram,
    FlowDirection,
    GanttDiagram,
    PieChartDiagram,
    SequenceDiagram,
    StateDiagram,
)
from .engine import DiagramLayoutEngine, layout_diagram
from .generator import DiagramGenerator
from .geometry import Point, Rect
from .layout import LayeredLayout, LayoutResult, NodeLayout
from .models import PositionedLayout
from .parser import EmptyInput, ParseError, Parser, UnknownDiagramType, parse_diagram
from .png_renderer import PNGRenderer, parse_css_color, render_to_png
from .router import EdgeRoute, EdgeRouter

__version__ = "0.1.0"

__all__ = [
    # Main API
    "DiagramGenerator",
    # Parser
    "Parser",
    "ParseError",
    "EmptyInput",
    "UnknownDiagramType",
    "parse_diagram",
    # Diagram model
    "Diagram",
    "DiagramType",
    "FlowDirection",
    "FlowchartDiagram",
    "SequenceDiagram",
    "PieChartDiagram",
    "ClassDiagram",
    "StateDiagram",
    "GanttDiagram",
    "ERDiagram",
    # Layout
    "DiagramLayoutEngine",
    "layout_diagram",
    "LayoutConfig",
    "LayeredLayout",
    "LayoutResult",
    "NodeLayout",
    "PositionedLayout",
    "Point",
    "Rect",
    # Router
    "EdgeRouter",
    "EdgeRoute",
    # Renderer
    "PNGRenderer",
    "parse_css_color",
    "render_to_png",
]
