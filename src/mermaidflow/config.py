"""
Layout and rendering configuration.

LayoutConfig is a flat set of geometric constants and colour palettes. The
layout code reads sizes and spacings from it and the PNG renderer reads the
colours; neither changes its algorithm based on these values.
"""

from dataclasses import dataclass, replace
from typing import Tuple

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class LayoutConfig:
    """Geometric constants, fonts and palettes for every diagram kind."""

    padding: int = 40
    font_size: int = 14
    title_font_size: int = 18

    background_color: RGB = (255, 255, 255)
    node_color: RGB = (217, 235, 255)
    node_border_color: RGB = (51, 102, 179)
    edge_color: RGB = (77, 77, 77)
    text_color: RGB = (26, 26, 26)
    arrow_color: RGB = (77, 77, 77)
    lifeline_color: RGB = (179, 179, 179)
    subgraph_color: RGB = (240, 244, 250)
    label_background: RGB = (255, 255, 255)

    # Flowchart
    node_width: int = 150
    node_height: int = 50
    corner_radius: int = 8
    horizontal_spacing: int = 60
    vertical_spacing: int = 60
    line_width: int = 2

    # Sequence
    participant_width: int = 120
    participant_height: int = 40
    participant_spacing: int = 40
    message_spacing: int = 50

    # Pie
    pie_radius: int = 120
    pie_label_offset: int = 30
    pie_colors: Tuple[RGB, ...] = (
        (66, 133, 244),
        (234, 87, 87),
        (77, 176, 80),
        (255, 194, 8),
        (156, 89, 182),
        (255, 153, 0),
        (0, 189, 212),
        (232, 120, 158),
    )

    # Subgraph
    subgraph_padding: int = 20
    subgraph_label_height: int = 24

    # Class diagram
    class_box_width: int = 200
    class_header_height: int = 35
    class_member_height: int = 22
    class_spacing: int = 80

    # State diagram
    state_width: int = 140
    state_height: int = 45
    state_corner_radius: int = 12
    state_spacing: int = 70
    start_end_radius: int = 12

    # Gantt
    gantt_bar_height: int = 28
    gantt_bar_spacing: int = 8
    gantt_section_spacing: int = 12
    gantt_label_width: int = 180
    gantt_day_width: int = 30
    gantt_colors: Tuple[RGB, ...] = (
        (66, 133, 244),
        (77, 176, 80),
        (156, 89, 182),
        (255, 153, 0),
    )
    gantt_critical_color: RGB = (234, 87, 87)
    gantt_done_color: RGB = (179, 179, 179)
    gantt_active_color: RGB = (66, 133, 244)

    # Entity-relationship
    er_entity_width: int = 180
    er_header_height: int = 32
    er_attribute_height: int = 22
    er_entity_spacing: int = 100

    @classmethod
    def dark(cls) -> "LayoutConfig":
        """Preset with a dark background and light strokes."""
        return replace(
            cls(),
            background_color=(30, 30, 36),
            node_color=(45, 62, 89),
            node_border_color=(110, 160, 230),
            edge_color=(190, 190, 190),
            text_color=(235, 235, 235),
            arrow_color=(190, 190, 190),
            lifeline_color=(100, 100, 110),
            subgraph_color=(40, 44, 54),
            label_background=(30, 30, 36),
            gantt_done_color=(100, 100, 110),
        )
