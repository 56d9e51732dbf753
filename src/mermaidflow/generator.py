"""
Main diagram generator module.

Chains parsing, layout and PNG rendering behind one facade.
"""

import io
import logging
from pathlib import Path
from typing import Optional

from PIL import Image

from .config import LayoutConfig
from .diagrams import Diagram
from .engine import DiagramLayoutEngine
from .models import PositionedLayout
from .parser import Parser
from .png_renderer import PNGRenderer

logger = logging.getLogger(__name__)

THEMES = ("light", "dark")


class DiagramGenerator:
    """
    Generate diagram images from Mermaid-style text.

    Example:
        >>> generator = DiagramGenerator()
        >>> generator.save_png('''
        ...     flowchart TD
        ...     A[Start] --> B{Ready?}
        ...     B -->|yes| C([Done])
        ... ''', "diagram.png")
    """

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        theme: str = "light",
        scale: int = 2,
        font_path: Optional[str] = None,
    ):
        """
        Initialize the diagram generator.

        Args:
            config: Layout constants and palette; overrides theme when given
            theme: "light" or "dark" palette
            scale: Pixel multiplier for high-resolution output
            font_path: Optional TrueType font used for all text
        """
        if theme not in THEMES:
            raise ValueError("theme must be 'light' or 'dark'")

        if config is None:
            config = LayoutConfig.dark() if theme == "dark" else LayoutConfig()
        self.config = config
        self.parser = Parser()
        self.layout_engine = DiagramLayoutEngine(config)
        self.renderer = PNGRenderer(config=config, scale=scale, font_path=font_path)

    def parse(self, input_text: str) -> Diagram:
        """
        Parse input text into a diagram.

        Raises:
            ParseError: If the input is empty or names an unknown diagram kind
        """
        return self.parser.parse(input_text)

    def layout(self, input_text: str) -> PositionedLayout:
        """Parse input text and compute its positioned layout."""
        return self.layout_engine.layout(self.parse(input_text))

    def render(self, input_text: str) -> Image.Image:
        """Parse, lay out and render input text to an image."""
        return self.renderer.render(self.layout(input_text))

    def to_png_bytes(self, input_text: str) -> bytes:
        """Render input text and return the encoded PNG."""
        buffer = io.BytesIO()
        self.render(input_text).save(buffer, "PNG", dpi=(300, 300))
        return buffer.getvalue()

    def save_png(self, input_text: str, filename: str) -> str:
        """
        Generate a diagram and save it as a high-resolution PNG image.

        Args:
            input_text: Diagram text
            filename: Output filename (should end in .png)

        Returns:
            Path of the written file
        """
        output_path = Path(filename)
        self.renderer.save(self.layout(input_text), str(output_path))
        logger.info("Wrote diagram to %s", output_path)
        return str(output_path)
