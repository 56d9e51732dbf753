"""
Gantt chart parser.

Task lines are `name : [flags,] [id,] [after id | startDate,] duration`.
Dates and durations are kept as written; nothing is interpreted as a
calendar value.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from ..diagrams import GanttDiagram, GanttSection, GanttTask, TaskStatus
from .base import skip_line

DEFAULT_SECTION = "Default"
IGNORED_DIRECTIVES = (
    "axisFormat",
    "todayMarker",
    "excludes",
    "inclusiveEndDates",
    "tickInterval",
    "weekday",
)
TASK_FLAGS = frozenset({"done", "active", "crit"})


def status_from_flags(flags: FrozenSet[str]) -> TaskStatus:
    """Combine the leading flag tokens into one status."""
    if "crit" in flags:
        if "done" in flags:
            return TaskStatus.CRITICAL_DONE
        if "active" in flags:
            return TaskStatus.CRITICAL_ACTIVE
        return TaskStatus.CRITICAL
    if "done" in flags:
        return TaskStatus.DONE
    if "active" in flags:
        return TaskStatus.ACTIVE
    return TaskStatus.NORMAL


def parse_task(name: str, spec: str) -> GanttTask:
    tokens = [token.strip() for token in spec.split(",") if token.strip()]

    flags = set()
    while tokens and tokens[0] in TASK_FLAGS:
        flags.add(tokens.pop(0))

    task_id: Optional[str] = None
    start_date: Optional[str] = None
    duration: Optional[str] = None
    after_id: Optional[str] = None
    for token in tokens:
        if token.startswith("after "):
            after_id = token[len("after "):].strip()
        elif token[-1] in "dwh":
            duration = token
        elif "-" in token and len(token) >= 8:
            start_date = token
        else:
            task_id = token

    return GanttTask(
        name=name,
        id=task_id,
        status=status_from_flags(frozenset(flags)),
        start_date=start_date,
        duration=duration,
        after_id=after_id,
    )


@dataclass
class _SectionBuilder:
    name: str
    tasks: List[GanttTask] = field(default_factory=list)


class GanttParser:
    """Parses `gantt` diagrams."""

    def parse(self, lines: List[str]) -> GanttDiagram:
        title: Optional[str] = None
        date_format: Optional[str] = None
        sections: List[_SectionBuilder] = []

        for line in lines[1:]:
            keyword = line.split(None, 1)[0]
            if keyword == "title":
                title = line[len("title"):].strip() or None
            elif keyword == "dateFormat":
                date_format = line[len("dateFormat"):].strip() or None
            elif keyword == "section":
                sections.append(_SectionBuilder(line[len("section"):].strip()))
            elif keyword in IGNORED_DIRECTIVES:
                continue
            elif ":" in line:
                name, spec = line.split(":", 1)
                if not sections:
                    sections.append(_SectionBuilder(DEFAULT_SECTION))
                sections[-1].tasks.append(parse_task(name.strip(), spec))
            else:
                skip_line("gantt", line)

        return GanttDiagram(
            title=title,
            date_format=date_format,
            sections=tuple(GanttSection(s.name, tuple(s.tasks)) for s in sections),
        )
