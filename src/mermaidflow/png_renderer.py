"""
PNG Renderer module for positioned diagram layouts.

Paints any positioned layout with Pillow: node shapes, routed edges with
arrowheads and relation markers, chart slices and bars, and text labels on
opaque background patches.
"""

import logging
import math
import os
from typing import Dict, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from .config import RGB, LayoutConfig
from .diagrams import (
    Cardinality,
    EdgeStyle,
    MessageStyle,
    NodeShape,
    RelationType,
)
from .geometry import Point, Rect
from .models import (
    ClassDiagramLayout,
    ERDiagramLayout,
    FlowchartLayout,
    GanttLayout,
    PieLayout,
    PositionedLayout,
    PositionedNode,
    SequenceLayout,
    StateDiagramLayout,
)

logger = logging.getLogger(__name__)

FONT_OPTIONS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
    "/Library/Fonts/Arial.ttf",
    "C:\\Windows\\Fonts\\arial.ttf",
]

SHAPE_INSET = 15
ARROW_SIZE = 8
MARKER_SIZE = 12
DASH_LENGTH = 6
DASH_GAP = 4
STRIPE_SPACING = 8
LABEL_PADDING = 3

DASHED_RELATIONS = (RelationType.DEPENDENCY, RelationType.REALIZATION)


def parse_css_color(value: Optional[str]) -> Optional[RGB]:
    """
    Parse a `#rgb` or `#rrggbb` colour string.

    Returns:
        (r, g, b) tuple, or None when the value is missing or malformed
    """
    if not value:
        return None
    text = value.strip()
    if not text.startswith("#"):
        return None
    digits = text[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) != 6:
        return None
    try:
        return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return None


class PNGRenderer:
    """Renders positioned layouts as PNG images."""

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        scale: int = 2,  # For high-resolution output
        font_path: str | None = None,  # Custom font path
    ):
        self.config = config or LayoutConfig()
        self.scale = scale
        self.font_path = font_path
        self.fonts: Dict[int, ImageFont.ImageFont] = {}
        self._renderers = {
            FlowchartLayout: self._draw_flowchart,
            SequenceLayout: self._draw_sequence,
            PieLayout: self._draw_pie,
            ClassDiagramLayout: self._draw_class_diagram,
            StateDiagramLayout: self._draw_state_diagram,
            GanttLayout: self._draw_gantt,
            ERDiagramLayout: self._draw_er_diagram,
        }

    # Fonts and text

    def _get_font(self, size: Optional[int] = None) -> ImageFont.ImageFont:
        """Get a font for rendering text, cached per size."""
        font_size = (size or self.config.font_size) * self.scale
        if font_size in self.fonts:
            return self.fonts[font_size]

        candidates = ([self.font_path] if self.font_path else []) + FONT_OPTIONS
        for path in candidates:
            if not os.path.exists(path):
                continue
            try:
                font = ImageFont.truetype(path, font_size)
            except OSError:
                logger.debug("Could not load font %s", path)
                continue
            self.fonts[font_size] = font
            return font

        logger.debug("No TrueType font found, using Pillow default font")
        font = ImageFont.load_default()
        self.fonts[font_size] = font
        return font

    def _draw_text(
        self,
        draw: ImageDraw.ImageDraw,
        point: Point,
        text: str,
        fill: RGB,
        font: ImageFont.ImageFont,
        align: str = "center",
        background: Optional[RGB] = None,
    ) -> None:
        """Draw text centred (or left-aligned) on a point in layout units."""
        if not text:
            return
        bbox = draw.textbbox((0, 0), text, font=font)
        width, height = bbox[2] - bbox[0], bbox[3] - bbox[1]
        x, y = point.x * self.scale, point.y * self.scale
        left = x - width / 2 if align == "center" else x
        top = y - height / 2

        if background is not None:
            pad = LABEL_PADDING * self.scale
            draw.rectangle(
                [left - pad, top - pad, left + width + pad, top + height + pad],
                fill=background,
            )
        draw.text((left - bbox[0], top - bbox[1]), text, fill=fill, font=font)

    # Scaling helpers

    def _xy(self, point: Point) -> Tuple[float, float]:
        return point.x * self.scale, point.y * self.scale

    def _box(self, rect: Rect) -> Tuple[float, float, float, float]:
        s = self.scale
        return rect.left * s, rect.top * s, rect.right * s, rect.bottom * s

    def _width(self, width: float) -> int:
        return max(1, int(round(width * self.scale)))

    # Lines and markers

    def _draw_path(
        self,
        draw: ImageDraw.ImageDraw,
        points: Sequence[Point],
        fill: RGB,
        width: float,
        dashed: bool = False,
    ) -> None:
        line_width = self._width(width)
        if not dashed:
            draw.line([self._xy(p) for p in points], fill=fill, width=line_width)
            return
        for start, end in zip(points, points[1:]):
            self._draw_dashed_line(draw, start, end, fill, line_width)

    def _draw_dashed_line(
        self,
        draw: ImageDraw.ImageDraw,
        start: Point,
        end: Point,
        fill: RGB,
        line_width: int,
    ) -> None:
        x1, y1 = self._xy(start)
        x2, y2 = self._xy(end)
        length = math.hypot(x2 - x1, y2 - y1)
        if length == 0:
            return
        ux, uy = (x2 - x1) / length, (y2 - y1) / length
        dash, gap = DASH_LENGTH * self.scale, DASH_GAP * self.scale
        position = 0.0
        while position < length:
            stop = min(position + dash, length)
            draw.line(
                [
                    (x1 + ux * position, y1 + uy * position),
                    (x1 + ux * stop, y1 + uy * stop),
                ],
                fill=fill,
                width=line_width,
            )
            position = stop + gap

    def _direction(self, from_point: Point, to_point: Point) -> Tuple[float, float]:
        """Unit vector from one point to another (in layout units)."""
        dx, dy = to_point.x - from_point.x, to_point.y - from_point.y
        length = math.hypot(dx, dy) or 1.0
        return dx / length, dy / length

    def _draw_arrowhead(
        self,
        draw: ImageDraw.ImageDraw,
        from_point: Point,
        to_point: Point,
        fill: RGB,
        filled: bool = True,
    ) -> None:
        """Draw an arrowhead at the end of a line."""
        x1, y1 = self._xy(from_point)
        x2, y2 = self._xy(to_point)
        arrow_size = ARROW_SIZE * self.scale

        angle = math.atan2(y2 - y1, x2 - x1)
        angle1 = angle + math.pi * 0.8
        angle2 = angle - math.pi * 0.8
        head = [
            (x2 + arrow_size * math.cos(angle1), y2 + arrow_size * math.sin(angle1)),
            (x2, y2),
            (x2 + arrow_size * math.cos(angle2), y2 + arrow_size * math.sin(angle2)),
        ]
        if filled:
            draw.polygon(head, fill=fill)
        else:
            draw.line(head, fill=fill, width=self._width(1.5))

    def _draw_cross(
        self, draw: ImageDraw.ImageDraw, point: Point, fill: RGB
    ) -> None:
        x, y = self._xy(point)
        size = 5 * self.scale
        width = self._width(2)
        draw.line([(x - size, y - size), (x + size, y + size)], fill=fill, width=width)
        draw.line([(x - size, y + size), (x + size, y - size)], fill=fill, width=width)

    def _draw_relation_marker(
        self,
        draw: ImageDraw.ImageDraw,
        from_point: Point,
        to_point: Point,
        relation_type: RelationType,
    ) -> None:
        """Draw the class relation marker at the target end."""
        config = self.config
        if relation_type in (RelationType.ASSOCIATION, RelationType.DEPENDENCY):
            self._draw_arrowhead(draw, from_point, to_point, config.arrow_color)
            return
        if relation_type == RelationType.LINK:
            return

        ux, uy = self._direction(from_point, to_point)
        px, py = -uy, ux
        tip = to_point
        size = MARKER_SIZE
        if relation_type in (RelationType.INHERITANCE, RelationType.REALIZATION):
            base = Point(tip.x - ux * size, tip.y - uy * size)
            polygon = [
                tip,
                Point(base.x + px * size / 2, base.y + py * size / 2),
                Point(base.x - px * size / 2, base.y - py * size / 2),
            ]
            fill = config.background_color
        else:
            mid = Point(tip.x - ux * size, tip.y - uy * size)
            polygon = [
                tip,
                Point(mid.x + px * size / 2.5, mid.y + py * size / 2.5),
                Point(tip.x - ux * 2 * size, tip.y - uy * 2 * size),
                Point(mid.x - px * size / 2.5, mid.y - py * size / 2.5),
            ]
            fill = (
                config.arrow_color
                if relation_type == RelationType.COMPOSITION
                else config.background_color
            )
        draw.polygon(
            [self._xy(p) for p in polygon],
            fill=fill,
            outline=config.arrow_color,
            width=self._width(1.5),
        )

    def _draw_crows_foot(
        self,
        draw: ImageDraw.ImageDraw,
        end: Point,
        toward: Point,
        cardinality: Cardinality,
    ) -> None:
        """Draw a crow's-foot cardinality marker where a line meets an entity."""
        color = self.config.edge_color
        width = self._width(1.5)
        # Unit vector pointing from the entity edge back along the line
        ux, uy = self._direction(end, toward)
        px, py = -uy, ux
        half = 6

        def bar(distance: float) -> None:
            cx, cy = end.x + ux * distance, end.y + uy * distance
            draw.line(
                [
                    self._xy(Point(cx + px * half, cy + py * half)),
                    self._xy(Point(cx - px * half, cy - py * half)),
                ],
                fill=color,
                width=width,
            )

        def circle(distance: float) -> None:
            cx, cy = end.x + ux * distance, end.y + uy * distance
            r = 4
            draw.ellipse(
                self._box(Rect(cx - r, cy - r, cx + r, cy + r)),
                fill=self.config.background_color,
                outline=color,
                width=width,
            )

        def foot() -> None:
            root = Point(end.x + ux * MARKER_SIZE, end.y + uy * MARKER_SIZE)
            for side in (-1, 0, 1):
                claw = Point(end.x + px * half * side, end.y + py * half * side)
                draw.line([self._xy(root), self._xy(claw)], fill=color, width=width)

        if cardinality == Cardinality.EXACTLY_ONE:
            bar(6)
            bar(10)
        elif cardinality == Cardinality.ZERO_OR_ONE:
            bar(6)
            circle(14)
        elif cardinality == Cardinality.ONE_OR_MORE:
            foot()
            bar(16)
        else:
            foot()
            circle(18)

    # Rendering entry points

    def render(self, layout: PositionedLayout) -> Image.Image:
        """
        Render a positioned layout to an image.

        Args:
            layout: Any layout produced by the layout engine

        Returns:
            RGB image of (width * scale, height * scale) pixels
        """
        renderer = self._renderers.get(type(layout))
        if renderer is None:
            raise TypeError(f"Cannot render {type(layout).__name__}")

        size = (
            max(1, int(math.ceil(layout.width * self.scale))),
            max(1, int(math.ceil(layout.height * self.scale))),
        )
        img = Image.new("RGB", size, self.config.background_color)
        draw = ImageDraw.Draw(img)
        renderer(draw, layout)
        return img

    def save(self, layout: PositionedLayout, output_path: str = "diagram.png") -> str:
        """
        Render a layout and save it as a PNG file.

        Returns:
            Path to the saved PNG file
        """
        img = self.render(layout)
        img.save(output_path, "PNG", dpi=(300, 300))
        logger.debug("Saved %sx%s PNG to %s", img.width, img.height, output_path)
        return output_path

    # Flowchart

    def _draw_flowchart(self, draw: ImageDraw.ImageDraw, layout: FlowchartLayout):
        config = self.config
        font = self._get_font()

        # Outer subgraphs close last, so draw in reverse to keep nested frames on top
        for subgraph in reversed(layout.subgraphs):
            draw.rectangle(
                self._box(subgraph.frame),
                fill=config.subgraph_color,
                outline=config.node_border_color,
                width=self._width(1),
            )
            self._draw_text(
                draw,
                subgraph.label_position,
                subgraph.subgraph.label,
                config.text_color,
                font,
                align="left",
            )

        for positioned in layout.edges:
            edge = positioned.edge
            if edge.style == EdgeStyle.INVISIBLE:
                continue
            width = config.line_width * (2 if edge.style == EdgeStyle.THICK else 1)
            self._draw_path(
                draw,
                positioned.points,
                config.edge_color,
                width,
                dashed=edge.style == EdgeStyle.DOTTED,
            )
            self._draw_arrowhead(
                draw, positioned.points[-2], positioned.points[-1], config.arrow_color
            )
            if positioned.label_position is not None:
                self._draw_text(
                    draw,
                    positioned.label_position,
                    edge.label,
                    config.text_color,
                    font,
                    background=config.label_background,
                )

        for positioned in layout.nodes:
            self._draw_node(draw, positioned, font)

    def _draw_node(
        self,
        draw: ImageDraw.ImageDraw,
        positioned: PositionedNode,
        font: ImageFont.ImageFont,
    ) -> None:
        config = self.config
        style = positioned.style
        fill = config.node_color
        outline = config.node_border_color
        text_color = config.text_color
        line_width = config.line_width
        if style is not None:
            fill = parse_css_color(style.fill) or fill
            outline = parse_css_color(style.stroke) or outline
            text_color = parse_css_color(style.color) or text_color
            line_width = style.stroke_width or line_width

        frame = positioned.frame
        box = self._box(frame)
        width = self._width(line_width)
        shape = positioned.node.shape
        c = frame.center

        if shape == NodeShape.ROUNDED:
            draw.rounded_rectangle(
                box,
                radius=config.corner_radius * self.scale,
                fill=fill,
                outline=outline,
                width=width,
            )
        elif shape == NodeShape.STADIUM:
            draw.rounded_rectangle(
                box,
                radius=frame.height / 2 * self.scale,
                fill=fill,
                outline=outline,
                width=width,
            )
        elif shape == NodeShape.CIRCLE:
            r = min(frame.width, frame.height) / 2
            draw.ellipse(
                self._box(Rect(c.x - r, c.y - r, c.x + r, c.y + r)),
                fill=fill,
                outline=outline,
                width=width,
            )
        elif shape in (NodeShape.DIAMOND, NodeShape.HEXAGON, NodeShape.ASYMMETRIC):
            if shape == NodeShape.DIAMOND:
                corners = [
                    frame.top_center,
                    frame.right_middle,
                    frame.bottom_center,
                    frame.left_middle,
                ]
            elif shape == NodeShape.HEXAGON:
                corners = [
                    Point(frame.left + SHAPE_INSET, frame.top),
                    Point(frame.right - SHAPE_INSET, frame.top),
                    frame.right_middle,
                    Point(frame.right - SHAPE_INSET, frame.bottom),
                    Point(frame.left + SHAPE_INSET, frame.bottom),
                    frame.left_middle,
                ]
            else:
                corners = [
                    Point(frame.left, frame.top),
                    Point(frame.right, frame.top),
                    Point(frame.right, frame.bottom),
                    Point(frame.left, frame.bottom),
                    Point(frame.left + SHAPE_INSET, c.y),
                ]
            draw.polygon(
                [self._xy(p) for p in corners], fill=fill, outline=outline, width=width
            )
        else:
            draw.rectangle(box, fill=fill, outline=outline, width=width)

        self._draw_text(draw, c, positioned.node.label, text_color, font)

    # Sequence

    def _draw_sequence(self, draw: ImageDraw.ImageDraw, layout: SequenceLayout):
        config = self.config
        font = self._get_font()

        for participant in layout.participants:
            self._draw_path(
                draw,
                [
                    Point(participant.lifeline_x, participant.lifeline_top),
                    Point(participant.lifeline_x, participant.lifeline_bottom),
                ],
                config.lifeline_color,
                1,
                dashed=True,
            )
            frame = participant.header_frame
            if participant.participant.is_actor:
                self._draw_actor(draw, frame)
                self._draw_text(
                    draw,
                    Point(frame.center.x, frame.bottom - 6),
                    participant.participant.label,
                    config.text_color,
                    font,
                )
            else:
                draw.rounded_rectangle(
                    self._box(frame),
                    radius=config.corner_radius * self.scale,
                    fill=config.node_color,
                    outline=config.node_border_color,
                    width=self._width(config.line_width),
                )
                self._draw_text(
                    draw,
                    frame.center,
                    participant.participant.label,
                    config.text_color,
                    font,
                )

        for positioned in layout.messages:
            style = positioned.message.style
            points = positioned.points
            self._draw_path(
                draw, points, config.edge_color, 1.5, dashed=style.is_dotted
            )
            if style in (MessageStyle.SOLID_ARROW, MessageStyle.DOTTED_ARROW):
                self._draw_arrowhead(draw, points[-2], points[-1], config.arrow_color)
            elif style in (MessageStyle.SOLID_CROSS, MessageStyle.DOTTED_CROSS):
                self._draw_cross(draw, points[-1], config.arrow_color)
            elif style in (MessageStyle.SOLID_ASYNC, MessageStyle.DOTTED_ASYNC):
                self._draw_arrowhead(
                    draw, points[-2], points[-1], config.arrow_color, filled=False
                )
            self._draw_text(
                draw,
                positioned.label_position,
                positioned.message.text,
                config.text_color,
                font,
                background=config.label_background,
            )

    def _draw_actor(self, draw: ImageDraw.ImageDraw, frame: Rect) -> None:
        """Stick figure occupying the upper part of the header frame."""
        color = self.config.node_border_color
        width = self._width(1.5)
        cx = frame.center.x
        head = 5
        top = frame.top + 2
        neck = top + 2 * head
        hip = neck + 9
        draw.ellipse(
            self._box(Rect(cx - head, top, cx + head, neck)), outline=color, width=width
        )
        segments = [
            (Point(cx, neck), Point(cx, hip)),
            (Point(cx - 9, neck + 4), Point(cx + 9, neck + 4)),
            (Point(cx, hip), Point(cx - 7, hip + 7)),
            (Point(cx, hip), Point(cx + 7, hip + 7)),
        ]
        for start, end in segments:
            draw.line([self._xy(start), self._xy(end)], fill=color, width=width)

    # Pie

    def _draw_pie(self, draw: ImageDraw.ImageDraw, layout: PieLayout):
        config = self.config
        font = self._get_font()

        if layout.title and layout.title_position is not None:
            self._draw_text(
                draw,
                layout.title_position,
                layout.title,
                config.text_color,
                self._get_font(config.title_font_size),
            )

        c, r = layout.center, layout.radius
        bbox = self._box(Rect(c.x - r, c.y - r, c.x + r, c.y + r))
        for positioned in layout.slices:
            if positioned.sweep_angle <= 0:
                continue
            draw.pieslice(
                bbox,
                start=positioned.start_angle,
                end=positioned.start_angle + positioned.sweep_angle,
                fill=positioned.color,
                outline=config.background_color,
                width=self._width(1.5),
            )
            self._draw_text(
                draw,
                positioned.label_position,
                f"{positioned.percentage:.1f}%",
                config.text_color,
                font,
            )

        for entry in layout.legend:
            draw.rectangle(self._box(entry.swatch), fill=entry.color)
            text = "%s (%.1f%%)" % (entry.label, entry.percentage)
            if layout.show_data:
                text = "%s [%g] (%.1f%%)" % (
                    entry.label,
                    entry.value,
                    entry.percentage,
                )
            self._draw_text(
                draw, entry.text_position, text, config.text_color, font, align="left"
            )

    # Class diagram

    def _draw_class_diagram(self, draw: ImageDraw.ImageDraw, layout: ClassDiagramLayout):
        config = self.config
        font = self._get_font()
        small = self._get_font(config.font_size - 2)

        for positioned in layout.relationships:
            relationship = positioned.relationship
            start, end = positioned.points[0], positioned.points[-1]
            self._draw_path(
                draw,
                positioned.points,
                config.edge_color,
                1.5,
                dashed=relationship.relation_type in DASHED_RELATIONS,
            )
            self._draw_relation_marker(draw, start, end, relationship.relation_type)
            labels = (
                (positioned.label_position, relationship.label),
                (positioned.source_label_position, relationship.source_cardinality),
                (positioned.target_label_position, relationship.target_cardinality),
            )
            for point, text in labels:
                if point is not None and text:
                    self._draw_text(
                        draw,
                        point,
                        text,
                        config.text_color,
                        small,
                        background=config.label_background,
                    )

        for box in layout.classes:
            class_def = box.class_def
            draw.rectangle(
                self._box(box.frame),
                fill=config.label_background,
                outline=config.node_border_color,
                width=self._width(config.line_width),
            )
            draw.rectangle(
                self._box(box.header_frame),
                fill=config.node_color,
                outline=config.node_border_color,
                width=self._width(config.line_width),
            )
            draw.line(
                [
                    self._xy(Point(box.methods_frame.left, box.methods_frame.top)),
                    self._xy(Point(box.methods_frame.right, box.methods_frame.top)),
                ],
                fill=config.node_border_color,
                width=self._width(1),
            )

            header = box.header_frame.center
            if class_def.annotation:
                self._draw_text(
                    draw,
                    Point(header.x, header.y - 8),
                    f"<<{class_def.annotation}>>",
                    config.text_color,
                    small,
                )
                header = Point(header.x, header.y + 7)
            self._draw_text(draw, header, class_def.name, config.text_color, font)

            row = config.class_member_height
            for frame, members in (
                (box.properties_frame, class_def.properties),
                (box.methods_frame, class_def.methods),
            ):
                for index, member in enumerate(members):
                    self._draw_text(
                        draw,
                        Point(frame.left + 8, frame.top + row * index + row / 2),
                        member.display(),
                        config.text_color,
                        small,
                        align="left",
                    )

    # State diagram

    def _draw_state_diagram(self, draw: ImageDraw.ImageDraw, layout: StateDiagramLayout):
        config = self.config
        font = self._get_font()
        small = self._get_font(config.font_size - 2)

        for positioned in layout.transitions:
            self._draw_path(draw, positioned.points, config.edge_color, config.line_width)
            self._draw_arrowhead(
                draw, positioned.points[-2], positioned.points[-1], config.arrow_color
            )
            if positioned.label_position is not None:
                self._draw_text(
                    draw,
                    positioned.label_position,
                    positioned.transition.label,
                    config.text_color,
                    font,
                    background=config.label_background,
                )

        for positioned in layout.states:
            frame = positioned.frame
            if positioned.is_start_end:
                draw.ellipse(
                    self._box(frame),
                    fill=config.background_color,
                    outline=config.text_color,
                    width=self._width(1.5),
                )
                draw.ellipse(self._box(frame.padded(-4)), fill=config.text_color)
                continue
            draw.rounded_rectangle(
                self._box(frame),
                radius=config.state_corner_radius * self.scale,
                fill=config.node_color,
                outline=config.node_border_color,
                width=self._width(config.line_width),
            )
            state = positioned.state
            if state.description is None:
                self._draw_text(draw, frame.center, state.label, config.text_color, font)
                continue
            # Label above, description below in the smaller font
            center = frame.center
            self._draw_text(
                draw, Point(center.x, center.y - 8), state.label, config.text_color, font
            )
            self._draw_text(
                draw,
                Point(center.x, center.y + 8),
                state.description,
                config.text_color,
                small,
            )

    # Gantt

    def _draw_gantt(self, draw: ImageDraw.ImageDraw, layout: GanttLayout):
        config = self.config
        font = self._get_font()
        small = self._get_font(config.font_size - 3)

        if layout.title and layout.title_position is not None:
            self._draw_text(
                draw,
                layout.title_position,
                layout.title,
                config.text_color,
                self._get_font(config.title_font_size),
            )

        for line in layout.grid_lines:
            self._draw_path(
                draw,
                [Point(line.x, layout.chart_top), Point(line.x, layout.chart_bottom)],
                config.lifeline_color,
                1,
            )
            self._draw_text(
                draw,
                Point(line.x, layout.chart_top - 12),
                line.label,
                config.text_color,
                small,
            )

        for section in layout.sections:
            self._draw_text(
                draw,
                Point(config.padding, section.y),
                section.name,
                config.node_border_color,
                font,
                align="left",
            )

        for positioned in layout.tasks:
            bar = positioned.bar
            draw.rectangle(self._box(bar), fill=positioned.color)
            if positioned.striped:
                self._draw_stripes(draw, bar)
            if positioned.bordered:
                draw.rectangle(
                    self._box(bar), outline=config.text_color, width=self._width(2)
                )
            self._draw_text(
                draw,
                positioned.label_position,
                positioned.task.name,
                config.text_color,
                small,
                align="left",
            )

    def _draw_stripes(self, draw: ImageDraw.ImageDraw, bar: Rect) -> None:
        """Diagonal stripes clipped to the bar."""
        color = self.config.background_color
        offset = 0.0
        while offset < bar.width + bar.height:
            # Line x + y = bar.left + offset + bar.bottom, clipped to the bar
            start_x = bar.left + max(0.0, offset - bar.height)
            end_x = bar.left + min(offset, bar.width)
            if end_x > start_x:
                base = bar.bottom + bar.left + offset - bar.height
                start = Point(start_x, base - start_x)
                end = Point(end_x, base - end_x)
                draw.line(
                    [self._xy(start), self._xy(end)], fill=color, width=self._width(1)
                )
            offset += STRIPE_SPACING

    # Entity-relationship

    def _draw_er_diagram(self, draw: ImageDraw.ImageDraw, layout: ERDiagramLayout):
        config = self.config
        font = self._get_font()
        small = self._get_font(config.font_size - 2)

        for positioned in layout.relationships:
            relationship = positioned.relationship
            start, end = positioned.points[0], positioned.points[-1]
            self._draw_path(draw, positioned.points, config.edge_color, 1.5)
            self._draw_crows_foot(draw, start, end, relationship.source_cardinality)
            self._draw_crows_foot(draw, end, start, relationship.target_cardinality)
            self._draw_text(
                draw,
                positioned.label_position,
                relationship.label,
                config.text_color,
                small,
                background=config.label_background,
            )

        for positioned in layout.entities:
            draw.rectangle(
                self._box(positioned.frame),
                fill=config.label_background,
                outline=config.node_border_color,
                width=self._width(config.line_width),
            )
            draw.rectangle(
                self._box(positioned.header_frame),
                fill=config.node_color,
                outline=config.node_border_color,
                width=self._width(config.line_width),
            )
            self._draw_text(
                draw,
                positioned.header_frame.center,
                positioned.entity.name,
                config.text_color,
                font,
            )
            rows = zip(positioned.entity.attributes, positioned.attribute_frames)
            for attribute, frame in rows:
                text = f"{attribute.attribute_type} {attribute.name}"
                if attribute.key is not None:
                    text += f" {attribute.key.value}"
                self._draw_text(
                    draw,
                    Point(frame.left + 8, frame.center.y),
                    text,
                    config.text_color,
                    small,
                    align="left",
                )


def render_to_png(
    layout: PositionedLayout, output_path: str = "diagram.png", **kwargs
) -> str:
    """
    Convenience function to render a positioned layout to PNG.

    Args:
        layout: Positioned layout
        output_path: Path to save the PNG file
        **kwargs: Additional parameters for PNGRenderer

    Returns:
        Path to the saved PNG file
    """
    renderer = PNGRenderer(**kwargs)
    return renderer.save(layout, output_path)
