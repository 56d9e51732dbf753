"""Unit tests for the generator module."""

import os
import tempfile

import pytest
from PIL import Image

from mermaidflow import (
    DiagramGenerator,
    EmptyInput,
    FlowchartDiagram,
    LayoutConfig,
    ParseError,
    UnknownDiagramType,
)
from mermaidflow.models import FlowchartLayout, SequenceLayout


class TestDiagramGeneratorInit:
    """Tests for DiagramGenerator initialization."""

    def test_default_initialization(self):
        """Test DiagramGenerator with default parameters."""
        gen = DiagramGenerator()
        assert gen.config == LayoutConfig()
        assert gen.renderer.scale == 2
        assert gen.renderer.font_path is None

    def test_dark_theme(self):
        """Test the dark theme selects the dark palette."""
        gen = DiagramGenerator(theme="dark")
        assert gen.config == LayoutConfig.dark()
        assert gen.renderer.config.background_color == (30, 30, 36)

    def test_config_overrides_theme(self):
        """Test an explicit config wins over the theme."""
        config = LayoutConfig(padding=10)
        gen = DiagramGenerator(config=config, theme="dark")
        assert gen.config is config
        assert gen.layout_engine.config is config

    def test_invalid_theme(self):
        """Test unknown themes are rejected."""
        with pytest.raises(ValueError):
            DiagramGenerator(theme="sepia")

    def test_custom_scale(self):
        """Test DiagramGenerator with a custom scale."""
        gen = DiagramGenerator(scale=3)
        assert gen.renderer.scale == 3

    def test_components_initialized(self):
        """Test that internal components are initialized."""
        gen = DiagramGenerator()
        assert gen.parser is not None
        assert gen.layout_engine is not None
        assert gen.renderer is not None


class TestDiagramGeneratorPipeline:
    """Tests for the parse, layout and render stages."""

    def test_parse(self, generator, simple_flowchart):
        """Test parsing returns the diagram model."""
        diagram = generator.parse(simple_flowchart)
        assert isinstance(diagram, FlowchartDiagram)
        assert [n.id for n in diagram.nodes] == ["A", "B"]

    def test_layout(self, generator, simple_flowchart, sequence_input):
        """Test layout returns the record for the diagram kind."""
        assert isinstance(generator.layout(simple_flowchart), FlowchartLayout)
        assert isinstance(generator.layout(sequence_input), SequenceLayout)

    def test_render(self, generator, simple_flowchart):
        """Test rendering at the default scale."""
        image = generator.render(simple_flowchart)
        assert image.size == (460, 480)

    def test_to_png_bytes(self, generator, pie_input):
        """Test the encoded image is a PNG."""
        data = generator.to_png_bytes(pie_input)
        assert data.startswith(b"\x89PNG\r\n\x1a\n")

    def test_empty_input(self, generator):
        """Test blank input raises EmptyInput."""
        with pytest.raises(EmptyInput):
            generator.render("   \n%% nothing here\n")

    def test_unknown_kind(self, generator):
        """Test an unknown keyword raises UnknownDiagramType."""
        with pytest.raises(UnknownDiagramType) as excinfo:
            generator.layout("mindmap\nroot")
        assert excinfo.value.kind == "mindmap"

    def test_errors_share_base(self, generator):
        """Test both failures are ParseErrors."""
        with pytest.raises(ParseError):
            generator.parse("")


class TestDiagramGeneratorSavePng:
    """Tests for DiagramGenerator.save_png method."""

    def test_save_png(self, generator, class_input):
        """Test saving a diagram to disk."""
        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            output_path = f.name

        try:
            result = generator.save_png(class_input, output_path)
            assert result == output_path
            with Image.open(output_path) as image:
                assert image.size == (1120, 696)
        finally:
            if os.path.exists(output_path):
                os.unlink(output_path)

    def test_save_png_every_kind(self, generator, all_diagram_inputs):
        """Test every diagram kind can be written."""
        with tempfile.TemporaryDirectory() as tmpdir:
            for index, text in enumerate(all_diagram_inputs):
                output_path = os.path.join(tmpdir, f"diagram_{index}.png")
                generator.save_png(text, output_path)
                assert os.path.getsize(output_path) > 0

    def test_save_png_parse_error_writes_nothing(self, generator):
        """Test a failed parse leaves no file behind."""
        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = os.path.join(tmpdir, "out.png")
            with pytest.raises(UnknownDiagramType):
                generator.save_png("journey\ntitle Day", output_path)
            assert not os.path.exists(output_path)
