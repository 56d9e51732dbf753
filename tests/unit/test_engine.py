"""Unit tests for the layout engine."""

import pytest

from mermaidflow import (
    DiagramLayoutEngine,
    LayoutConfig,
    layout_diagram,
    parse_diagram,
)
from mermaidflow.models import (
    ClassDiagramLayout,
    ERDiagramLayout,
    FlowchartLayout,
    GanttLayout,
    PieLayout,
    SequenceLayout,
    StateDiagramLayout,
)

EXPECTED_LAYOUTS = [
    FlowchartLayout,
    SequenceLayout,
    PieLayout,
    ClassDiagramLayout,
    StateDiagramLayout,
    GanttLayout,
    ERDiagramLayout,
]


class TestDiagramLayoutEngine:
    """Tests for DiagramLayoutEngine."""

    def test_default_config(self):
        """Test the engine falls back to the default configuration."""
        assert DiagramLayoutEngine().config == LayoutConfig()

    def test_custom_config(self):
        """Test a custom configuration changes the geometry."""
        engine = DiagramLayoutEngine(LayoutConfig(padding=10))
        layout = engine.layout(parse_diagram("flowchart TD\nA"))
        assert layout.nodes[0].frame.left == 10

    def test_dispatch_by_kind(self, engine, parser, all_diagram_inputs):
        """Test each diagram kind gets its own layout record."""
        for text, expected in zip(all_diagram_inputs, EXPECTED_LAYOUTS):
            assert isinstance(engine.layout(parser.parse(text)), expected)

    def test_positive_canvas(self, engine, parser, all_diagram_inputs):
        """Test every layout has a positive canvas size."""
        for text in all_diagram_inputs:
            layout = engine.layout(parser.parse(text))
            assert layout.width > 0
            assert layout.height > 0

    def test_rejects_non_diagram(self, engine):
        """Test arbitrary objects are refused."""
        with pytest.raises(TypeError):
            engine.layout("flowchart TD")

    def test_layout_diagram(self, parser, simple_flowchart):
        """Test the convenience function."""
        layout = layout_diagram(parser.parse(simple_flowchart))
        assert (layout.width, layout.height) == (230, 240)
