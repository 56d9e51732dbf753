"""Integration tests for complete diagram generation.

These tests run text through parsing and layout (and rendering where
noted) and check properties that must hold for every diagram.
"""

import itertools

import pytest

from mermaidflow import EmptyInput, UnknownDiagramType
from mermaidflow.diagrams import (
    ClassDiagram,
    ERDiagram,
    FlowchartDiagram,
    SequenceDiagram,
    StateDiagram,
)


def relation_pairs(diagram):
    """(entity ids, relation endpoint pairs) for relation-bearing diagrams."""
    if isinstance(diagram, FlowchartDiagram):
        ids = {n.id for n in diagram.nodes}
        return ids, [(e.source, e.target) for e in diagram.edges]
    if isinstance(diagram, SequenceDiagram):
        ids = {p.id for p in diagram.participants}
        return ids, [(m.source, m.target) for m in diagram.messages]
    if isinstance(diagram, ClassDiagram):
        ids = {c.name for c in diagram.classes}
        return ids, [(r.source, r.target) for r in diagram.relationships]
    if isinstance(diagram, StateDiagram):
        ids = {s.id for s in diagram.states}
        return ids, [(t.source, t.target) for t in diagram.transitions]
    if isinstance(diagram, ERDiagram):
        ids = {e.name for e in diagram.entities}
        return ids, [(r.source, r.target) for r in diagram.relationships]
    return set(), []


class TestScenarios:
    """End-to-end scenarios for the core pipeline."""

    def test_two_node_flowchart(self, generator):
        """Test A-->B gives two nodes, one edge and A above B."""
        diagram = generator.parse("flowchart TD\nA-->B")
        assert len(diagram.nodes) == 2
        assert len(diagram.edges) == 1

        layout = generator.layout("flowchart TD\nA-->B")
        frames = {n.node.id: n.frame for n in layout.nodes}
        assert frames["A"].top < frames["B"].top

    def test_pie_percentages(self, generator):
        """Test slice percentages and sweep angles."""
        layout = generator.layout('pie\n"X":30\n"Y":70')
        assert [s.percentage for s in layout.slices] == pytest.approx([30.0, 70.0])
        assert [s.sweep_angle for s in layout.slices] == pytest.approx([108, 252])

    def test_sequence_order(self, generator):
        """Test implicit participants and message rows."""
        text = "sequenceDiagram\nA->>B: hi\nB-->>A: hey"
        diagram = generator.parse(text)
        assert [p.id for p in diagram.participants] == ["A", "B"]

        layout = generator.layout(text)
        assert layout.messages[1].y > layout.messages[0].y

    def test_longest_path_layering(self, generator, diamond_flowchart):
        """Test D lands on layer 2, not layer 1."""
        layout = generator.layout(diamond_flowchart)
        layers = {n.node.id: n.layer for n in layout.nodes}
        assert layers["D"] == 2

    @pytest.mark.parametrize("text", ["", "   ", "\n\t\n"])
    def test_empty_input(self, generator, text):
        """Test blank input is rejected."""
        with pytest.raises(EmptyInput):
            generator.parse(text)

    def test_unknown_diagram(self, generator):
        """Test an unknown keyword is rejected with its name."""
        with pytest.raises(UnknownDiagramType) as excinfo:
            generator.parse("timeline\nx")
        assert excinfo.value.kind == "timeline"
        assert str(excinfo.value) == "Unknown diagram type: timeline"


class TestProperties:
    """Properties that hold for every input."""

    def test_referential_integrity(self, generator, all_diagram_inputs, styled_flowchart):
        """Test every relation endpoint is a declared entity."""
        for text in all_diagram_inputs + [styled_flowchart]:
            ids, pairs = relation_pairs(generator.parse(text))
            for source, target in pairs:
                assert source in ids
                assert target in ids

    def test_determinism(self, generator, all_diagram_inputs):
        """Test the same text gives the same layout and the same image."""
        for text in all_diagram_inputs:
            assert generator.layout(text) == generator.layout(text)
        assert generator.to_png_bytes(all_diagram_inputs[0]) == generator.to_png_bytes(
            all_diagram_inputs[0]
        )

    def test_cycles_terminate(self, generator):
        """Test a dense cyclic graph still places every node once."""
        names = ["N1", "N2", "N3", "N4", "N5"]
        lines = [f"{a}-->{b}" for a, b in itertools.permutations(names, 2)]
        layout = generator.layout("flowchart TD\n" + "\n".join(lines))
        assert sorted(n.node.id for n in layout.nodes) == names
        positions = {(n.frame.left, n.frame.top) for n in layout.nodes}
        assert len(positions) == len(names)

    def test_cyclic_state_diagram(self, generator, state_input):
        """Test a state machine without a root still lays out."""
        layout = generator.layout(state_input)
        assert len(layout.states) == 4

    def test_layer_monotonicity(self, generator):
        """Test edges of an acyclic flowchart point to deeper layers."""
        text = "flowchart TD\nA-->B\nB-->C\nA-->C\nC-->D\nB-->E\nE-->D"
        layout = generator.layout(text)
        layers = {n.node.id: n.layer for n in layout.nodes}
        for edge in layout.edges:
            assert layers[edge.edge.source] < layers[edge.edge.target]

    def test_pie_proportionality(self, generator, pie_input):
        """Test sweeps fill the circle and percentages follow the values."""
        diagram = generator.parse(pie_input)
        layout = generator.layout(pie_input)
        assert sum(s.sweep_angle for s in layout.slices) == pytest.approx(360)
        for positioned in layout.slices:
            expected = 100 * positioned.slice.value / diagram.total
            assert positioned.percentage == pytest.approx(expected)

    def test_idempotent_style_attachment(self, generator):
        """Test attaching a class twice resolves to the same style."""
        base = "flowchart TD\nA\nclassDef hot fill:#f00\n"
        once = generator.parse(base + "class A hot")
        twice = generator.parse(base + "class A hot\nclass A hot")
        assert once.style_for("A") == twice.style_for("A")
        assert once.style_for("A") is not None


class TestDirections:
    """Direction handling across the pipeline."""

    def test_bottom_to_top(self, generator):
        """Test BT places the source below its target."""
        layout = generator.layout("flowchart BT\nA-->B")
        frames = {n.node.id: n.frame for n in layout.nodes}
        assert frames["A"].top > frames["B"].top

    def test_right_to_left(self, generator):
        """Test RL places the source right of its target."""
        layout = generator.layout("graph RL\nA-->B")
        frames = {n.node.id: n.frame for n in layout.nodes}
        assert frames["A"].left > frames["B"].left

    def test_state_direction(self, generator):
        """Test a state diagram can flow left to right."""
        layout = generator.layout("stateDiagram-v2\ndirection LR\nA --> B")
        frames = {s.state.id: s.frame for s in layout.states}
        assert frames["A"].right < frames["B"].left


class TestMixedInput:
    """Robustness against partially invalid input."""

    def test_bad_lines_skipped(self, generator):
        """Test malformed lines are dropped while the rest survives."""
        text = """
        flowchart TD
        A --> B
        this is ?? not valid
        C[unclosed -->
        B --> C
        """
        diagram = generator.parse(text)
        assert [(e.source, e.target) for e in diagram.edges] == [("A", "B"), ("B", "C")]

    def test_comments_ignored(self, generator):
        """Test %% comments anywhere are ignored."""
        diagram = generator.parse("%% leading\npie\n%% inner\n\"A\" : 1")
        assert len(diagram.slices) == 1

    def test_grid_rows(self, generator):
        """Test five classes fill a three-column grid over two rows."""
        text = "classDiagram\n" + "\n".join(f"class C{i}" for i in range(5))
        layout = generator.layout(text)
        tops = sorted({box.frame.top for box in layout.classes})
        lefts = sorted({box.frame.left for box in layout.classes})
        assert len(tops) == 2
        assert len(lefts) == 3

    def test_render_size_matches_layout(self, generator, all_diagram_inputs):
        """Test rendered images are the layout size times the scale."""
        for text in all_diagram_inputs:
            layout = generator.layout(text)
            image = generator.render(text)
            assert image.width >= layout.width * 2
            assert image.height >= layout.height * 2
