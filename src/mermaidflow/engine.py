"""
Layout engine: dispatches a parsed diagram to its placement routine.
"""

import logging
from typing import Callable, Dict, Optional

from .charts import ChartCalculator
from .config import LayoutConfig
from .diagrams import Diagram, DiagramType
from .models import PositionedLayout
from .positioning import PositionCalculator

logger = logging.getLogger(__name__)


class DiagramLayoutEngine:
    """
    Computes positioned layouts for every diagram kind.

    The engine never fails on a well-typed diagram: degenerate input such as
    an empty flowchart or a pie chart with zero total produces a trivial
    layout.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()
        positions = PositionCalculator(self.config)
        charts = ChartCalculator(self.config)
        self._layouts: Dict[DiagramType, Callable] = {
            DiagramType.FLOWCHART: positions.flowchart,
            DiagramType.STATE: positions.state_diagram,
            DiagramType.CLASS: positions.class_diagram,
            DiagramType.ER: positions.er_diagram,
            DiagramType.PIE: charts.pie,
            DiagramType.SEQUENCE: charts.sequence,
            DiagramType.GANTT: charts.gantt,
        }

    def layout(self, diagram: Diagram) -> PositionedLayout:
        """
        Lay out a parsed diagram.

        Args:
            diagram: Any diagram returned by the parser

        Returns:
            The positioned layout record for the diagram's kind

        Raises:
            TypeError: If the argument is not a diagram
        """
        kind = getattr(diagram, "kind", None)
        if kind not in self._layouts:
            raise TypeError(f"Not a diagram: {type(diagram).__name__}")

        result = self._layouts[kind](diagram)
        logger.debug(
            "Laid out %s diagram on %sx%s canvas",
            kind.value,
            result.width,
            result.height,
        )
        return result


def layout_diagram(
    diagram: Diagram, config: Optional[LayoutConfig] = None
) -> PositionedLayout:
    """
    Convenience function to lay out a diagram.

    Args:
        diagram: Parsed diagram
        config: Optional layout configuration

    Returns:
        The positioned layout
    """
    return DiagramLayoutEngine(config).layout(diagram)
