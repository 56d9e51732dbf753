"""Pie chart parser."""

import re
from typing import List, Optional

from ..diagrams import PieChartDiagram, PieSlice
from .base import skip_line

HEADER_PATTERN = re.compile(r"^pie(\s+showData)?(?:\s+title\s+(.+))?$")
SLICE_PATTERN = re.compile(r'^\s*"(.+?)"\s*:\s*([0-9.]+)\s*$')


class PieParser:
    """Parses `pie` diagrams."""

    def parse(self, lines: List[str]) -> PieChartDiagram:
        title: Optional[str] = None
        show_data = False
        slices: List[PieSlice] = []

        header = HEADER_PATTERN.match(lines[0])
        if header:
            show_data = header.group(1) is not None
            if header.group(2):
                title = header.group(2).strip()

        for line in lines[1:]:
            if line == "showData":
                show_data = True
                continue
            if line.startswith("title "):
                if title is None:
                    title = line[len("title "):].strip()
                continue

            match = SLICE_PATTERN.match(line)
            if match is None:
                skip_line("pie", line)
                continue
            try:
                value = float(match.group(2))
            except ValueError:
                skip_line("pie", line)
                continue
            slices.append(PieSlice(match.group(1), value))

        return PieChartDiagram(title=title, slices=tuple(slices), show_data=show_data)
