"""
Position calculation for chart-like diagrams.

Pie charts, sequence diagrams and Gantt charts do not use layered placement;
each has a fixed arithmetic layout driven by declaration order.
"""

import logging
import math

from .config import LayoutConfig
from .diagrams import GanttDiagram, PieChartDiagram, SequenceDiagram, TaskStatus
from .geometry import Point, Rect
from .models import (
    GanttLayout,
    GridLine,
    LegendEntry,
    PieLayout,
    PositionedGanttSection,
    PositionedGanttTask,
    PositionedMessage,
    PositionedParticipant,
    PositionedPieSlice,
    SequenceLayout,
)

logger = logging.getLogger(__name__)

PIE_START_ANGLE = -90.0
PIE_TITLE_HEIGHT = 30
PIE_LEGEND_GAP = 40
PIE_LEGEND_WIDTH = 180
PIE_LEGEND_STEP = 24
PIE_SWATCH_SIZE = 12
EMPTY_PIE_SIZE = 100

LIFELINE_GAP = 20
LIFELINE_TAIL = 40
MESSAGE_LABEL_LIFT = 8
SELF_MESSAGE_WIDTH = 40
SELF_MESSAGE_HEIGHT = 20

GANTT_TITLE_HEIGHT = 35
GANTT_HEADER_HEIGHT = 30
GANTT_DAYS_PER_TASK = 5
GANTT_TASK_STRIDE = 3
GANTT_MIN_DAYS = 20
GANTT_GRID_STEP = 5
GANTT_MIN_WIDTH = 400

STRIPED_STATUSES = (TaskStatus.DONE, TaskStatus.CRITICAL_DONE)
BORDERED_STATUSES = (
    TaskStatus.ACTIVE,
    TaskStatus.CRITICAL,
    TaskStatus.CRITICAL_ACTIVE,
)


class ChartCalculator:
    """Calculates positions for pie, sequence and Gantt charts."""

    def __init__(self, config: LayoutConfig):
        self.config = config

    def pie(self, diagram: PieChartDiagram) -> PieLayout:
        """
        Distribute a full turn over the slices, clockwise from 12 o'clock.

        A chart without slices, or whose values sum to zero, yields an empty
        100x100 layout.
        """
        config = self.config
        total = diagram.total
        if not diagram.slices or total <= 0:
            logger.debug("Pie chart has no positive total, using empty layout")
            half = EMPTY_PIE_SIZE / 2
            return PieLayout(
                width=EMPTY_PIE_SIZE,
                height=EMPTY_PIE_SIZE,
                center=Point(half, half),
                radius=0,
                title=diagram.title,
            )

        radius = config.pie_radius
        reach = radius + config.pie_label_offset
        title_height = PIE_TITLE_HEIGHT if diagram.title else 0
        center = Point(config.padding + reach, config.padding + title_height + reach)

        slices = []
        angle = PIE_START_ANGLE
        for index, pie_slice in enumerate(diagram.slices):
            sweep = 360.0 * pie_slice.value / total
            percentage = 100.0 * pie_slice.value / total
            mid = math.radians(angle + sweep / 2)
            slices.append(
                PositionedPieSlice(
                    slice=pie_slice,
                    start_angle=angle,
                    sweep_angle=sweep,
                    percentage=percentage,
                    color=config.pie_colors[index % len(config.pie_colors)],
                    label_position=Point(
                        center.x + reach * math.cos(mid),
                        center.y + reach * math.sin(mid),
                    ),
                )
            )
            angle += sweep

        legend_x = center.x + radius + PIE_LEGEND_GAP
        legend_y = center.y - len(slices) * PIE_SWATCH_SIZE
        legend = []
        for index, positioned in enumerate(slices):
            top = legend_y + index * PIE_LEGEND_STEP
            legend.append(
                LegendEntry(
                    label=positioned.slice.label,
                    value=positioned.slice.value,
                    percentage=positioned.percentage,
                    color=positioned.color,
                    swatch=Rect.from_size(legend_x, top, PIE_SWATCH_SIZE, PIE_SWATCH_SIZE),
                    text_position=Point(
                        legend_x + PIE_SWATCH_SIZE + 8, top + PIE_SWATCH_SIZE / 2
                    ),
                )
            )

        width = max(center.x + reach, legend_x + PIE_LEGEND_WIDTH) + config.padding
        height = center.y + reach + config.padding
        title_position = (
            Point(width / 2, config.padding + title_height / 2) if diagram.title else None
        )
        return PieLayout(
            width=width,
            height=height,
            center=center,
            radius=radius,
            slices=tuple(slices),
            legend=tuple(legend),
            title=diagram.title,
            title_position=title_position,
            show_data=diagram.show_data,
        )

    def sequence(self, diagram: SequenceDiagram) -> SequenceLayout:
        """Participants left to right, one message row per fixed increment."""
        config = self.config
        padding = config.padding
        count = len(diagram.participants)

        lifeline_top = padding + config.participant_height + LIFELINE_GAP
        lifeline_bottom = (
            lifeline_top + len(diagram.messages) * config.message_spacing + LIFELINE_TAIL
        )

        participants = []
        lifelines = {}
        for index, participant in enumerate(diagram.participants):
            x = padding + index * (config.participant_width + config.participant_spacing)
            header = Rect.from_size(
                x, padding, config.participant_width, config.participant_height
            )
            lifelines[participant.id] = header.center.x
            participants.append(
                PositionedParticipant(
                    participant=participant,
                    header_frame=header,
                    lifeline_x=header.center.x,
                    lifeline_top=header.bottom,
                    lifeline_bottom=lifeline_bottom,
                )
            )

        messages = []
        for index, message in enumerate(diagram.messages):
            y = lifeline_top + (index + 1) * config.message_spacing
            source_x = lifelines[message.source]
            target_x = lifelines[message.target]
            if message.source == message.target:
                loop_x = source_x + SELF_MESSAGE_WIDTH
                points = (
                    Point(source_x, y),
                    Point(loop_x, y),
                    Point(loop_x, y + SELF_MESSAGE_HEIGHT),
                    Point(source_x, y + SELF_MESSAGE_HEIGHT),
                )
                label = Point(source_x + SELF_MESSAGE_WIDTH / 2, y - MESSAGE_LABEL_LIFT)
            else:
                points = (Point(source_x, y), Point(target_x, y))
                label = Point((source_x + target_x) / 2, y - MESSAGE_LABEL_LIFT)
            messages.append(
                PositionedMessage(message=message, points=points, y=y, label_position=label)
            )

        width = 2 * padding
        if count:
            width += (
                count * config.participant_width
                + (count - 1) * config.participant_spacing
            )
        return SequenceLayout(
            width=width,
            height=lifeline_bottom + padding,
            participants=tuple(participants),
            messages=tuple(messages),
        )

    def task_color(self, status: TaskStatus, section_index: int):
        config = self.config
        if status in (TaskStatus.CRITICAL, TaskStatus.CRITICAL_ACTIVE):
            return config.gantt_critical_color
        if status in (TaskStatus.DONE, TaskStatus.CRITICAL_DONE):
            return config.gantt_done_color
        if status == TaskStatus.ACTIVE:
            return config.gantt_active_color
        return config.gantt_colors[section_index % len(config.gantt_colors)]

    def gantt(self, diagram: GanttDiagram) -> GanttLayout:
        """
        Lay out Gantt bars by task index.

        Dates and durations are not interpreted: task k starts
        3 * k day-widths into the chart and spans 5 day-widths.
        """
        config = self.config
        padding = config.padding
        day_width = config.gantt_day_width
        title_height = GANTT_TITLE_HEIGHT if diagram.title else 0

        y = padding + title_height + GANTT_HEADER_HEIGHT
        chart_top = y
        sections = []
        tasks = []
        task_index = 0
        for section_index, section in enumerate(diagram.sections):
            y += config.gantt_section_spacing
            sections.append(PositionedGanttSection(name=section.name, y=y))
            y += config.gantt_section_spacing
            for task in section.tasks:
                bar = Rect.from_size(
                    config.gantt_label_width + task_index * GANTT_TASK_STRIDE * day_width,
                    y,
                    GANTT_DAYS_PER_TASK * day_width,
                    config.gantt_bar_height,
                )
                tasks.append(
                    PositionedGanttTask(
                        task=task,
                        bar=bar,
                        label_position=Point(padding, bar.center.y),
                        color=self.task_color(task.status, section_index),
                        striped=task.status in STRIPED_STATUSES,
                        bordered=task.status in BORDERED_STATUSES,
                    )
                )
                y += config.gantt_bar_height + config.gantt_bar_spacing
                task_index += 1

        total_days = max(task_index * GANTT_DAYS_PER_TASK, GANTT_MIN_DAYS)
        chart_width = config.gantt_label_width + total_days * day_width
        grid_lines = tuple(
            GridLine(x=config.gantt_label_width + day * day_width, label=f"Day {day}")
            for day in range(0, total_days + 1, GANTT_GRID_STEP)
        )

        width = max(chart_width, GANTT_MIN_WIDTH) + padding
        return GanttLayout(
            width=width,
            height=y + padding,
            sections=tuple(sections),
            tasks=tuple(tasks),
            grid_lines=grid_lines,
            title=diagram.title,
            title_position=(
                Point(width / 2, padding + title_height / 2) if diagram.title else None
            ),
            chart_top=chart_top,
            chart_bottom=y,
        )
