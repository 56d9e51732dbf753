"""
Flowchart parser.

Handles node references with bracket shapes, the four edge operators,
nested subgraph blocks and classDef/style/class attachments.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..diagrams import (
    EdgeStyle,
    FlowchartDiagram,
    FlowDirection,
    FlowEdge,
    FlowNode,
    NodeShape,
    NodeStyle,
    Subgraph,
    frozen_mapping,
)
from .base import find_token, skip_line, strip_quotes

# Dotted and thick markers must be tried before the plain solid marker
EDGE_TOKENS: Tuple[Tuple[str, EdgeStyle], ...] = (
    ("==>", EdgeStyle.THICK),
    ("-.->", EdgeStyle.DOTTED),
    ("~~~", EdgeStyle.INVISIBLE),
    ("-->", EdgeStyle.SOLID),
)

_ID = r"([A-Za-z0-9_]+)"

# Order matters: ((x)) before (x), ([x]) before (x), {{x}} before {x}
NODE_PATTERNS: Tuple[Tuple[re.Pattern, Optional[NodeShape]], ...] = (
    (re.compile(_ID + r"\(\((.+)\)\)$"), NodeShape.CIRCLE),
    (re.compile(_ID + r"\(\[(.+)\]\)$"), NodeShape.STADIUM),
    (re.compile(_ID + r"\{\{(.+)\}\}$"), NodeShape.HEXAGON),
    (re.compile(_ID + r"\{(.+)\}$"), NodeShape.DIAMOND),
    (re.compile(_ID + r">(.+)\]$"), NodeShape.ASYMMETRIC),
    (re.compile(_ID + r"\((.+)\)$"), NodeShape.ROUNDED),
    (re.compile(_ID + r"\[(.+)\]$"), NodeShape.RECTANGLE),
    (re.compile(_ID + r"$"), None),
)

SUBGRAPH_PATTERN = re.compile(r"^subgraph\s+([A-Za-z0-9_]+)\s*\[(.+)\]$")
IGNORED_PREFIXES = ("direction ", "linkStyle ", "click ")


@dataclass
class NodeRef:
    """A node reference as written on one side of an edge."""

    id: str
    label: Optional[str] = None
    shape: Optional[NodeShape] = None
    class_name: Optional[str] = None


@dataclass
class _OpenSubgraph:
    id: str
    label: str
    node_ids: List[str] = field(default_factory=list)
    subgraph_ids: List[str] = field(default_factory=list)


def parse_node_ref(text: str) -> Optional[NodeRef]:
    """
    Parse `id`, `id[label]`, `id((label))` etc., with an optional :::class.

    Returns None when the text is not a well-formed reference.
    """
    text = text.strip()
    class_name = None
    if ":::" in text:
        text, class_name = text.split(":::", 1)
        text = text.strip()
        class_name = class_name.strip() or None

    for pattern, shape in NODE_PATTERNS:
        match = pattern.match(text)
        if match:
            label = strip_quotes(match.group(2)) if shape is not None else None
            return NodeRef(match.group(1), label, shape, class_name)
    return None


def parse_style(text: str) -> NodeStyle:
    """Parse `fill:#f9f,stroke:#333,stroke-width:4px,color:#fff`."""
    values: Dict[str, str] = {}
    for part in text.split(","):
        if ":" not in part:
            continue
        key, value = part.split(":", 1)
        values[key.strip()] = value.strip()

    stroke_width = None
    if "stroke-width" in values:
        try:
            stroke_width = float(values["stroke-width"].replace("px", ""))
        except ValueError:
            stroke_width = None

    return NodeStyle(
        fill=values.get("fill"),
        stroke=values.get("stroke"),
        stroke_width=stroke_width,
        color=values.get("color"),
    )


def parse_direction(header: str, default: FlowDirection = FlowDirection.TD):
    parts = header.split()
    if len(parts) < 2:
        return default
    try:
        return FlowDirection(parts[1].rstrip(";").upper())
    except ValueError:
        return default


class FlowchartParser:
    """Parses `flowchart` / `graph` diagrams."""

    def __init__(self):
        self.nodes: Dict[str, FlowNode] = {}
        self.edges: List[FlowEdge] = []
        self.open_subgraphs: List[_OpenSubgraph] = []
        self.subgraphs: List[Subgraph] = []
        self.class_defs: Dict[str, NodeStyle] = {}
        self.node_classes: Dict[str, str] = {}

    def parse(self, lines: List[str]) -> FlowchartDiagram:
        direction = parse_direction(lines[0])

        for line in lines[1:]:
            self._parse_line(line)

        # Unclosed blocks are finalised innermost first
        while self.open_subgraphs:
            self._close_subgraph()

        return FlowchartDiagram(
            direction=direction,
            nodes=tuple(self.nodes.values()),
            edges=tuple(self.edges),
            subgraphs=tuple(self.subgraphs),
            class_defs=frozen_mapping(self.class_defs),
            node_classes=frozen_mapping(self.node_classes),
        )

    def _parse_line(self, line: str) -> None:
        line = line.rstrip(";").strip()
        if line == "end":
            if self.open_subgraphs:
                self._close_subgraph()
            else:
                skip_line("flowchart", line)
            return

        if line.startswith("subgraph "):
            self._open_subgraph(line)
            return

        if line.startswith("classDef "):
            parts = line.split(None, 2)
            if len(parts) == 3:
                self.class_defs[parts[1]] = parse_style(parts[2])
            return

        if line.startswith("style "):
            parts = line.split(None, 2)
            if len(parts) == 3:
                class_name = f"__style_{parts[1]}"
                self.class_defs[class_name] = parse_style(parts[2])
                self.node_classes[parts[1]] = class_name
            return

        if line.startswith("class ") and find_token(line, EDGE_TOKENS) is None:
            parts = line.split()
            if len(parts) >= 3:
                for node_id in parts[1].split(","):
                    if node_id:
                        self.node_classes[node_id] = parts[2]
            return

        if line.startswith(IGNORED_PREFIXES):
            skip_line("flowchart", line)
            return

        found = find_token(line, EDGE_TOKENS)
        if found is None:
            ref = parse_node_ref(line)
            if ref is None:
                skip_line("flowchart", line)
            else:
                self._declare(ref)
            return

        index, (token, style) = found
        left = line[:index]
        right = line[index + len(token):].strip()
        label = None
        if right.startswith("|"):
            end = right.find("|", 1)
            if end < 0:
                skip_line("flowchart", line)
                return
            label = right[1:end].strip()
            right = right[end + 1:]

        source = parse_node_ref(left)
        target = parse_node_ref(right)
        if source is None or target is None:
            skip_line("flowchart", line)
            return

        self._declare(source)
        self._declare(target)
        self.edges.append(FlowEdge(source.id, target.id, label or None, style))

    def _declare(self, ref: NodeRef) -> None:
        existing = self.nodes.get(ref.id)
        if existing is None:
            self.nodes[ref.id] = FlowNode(
                ref.id, ref.label or ref.id, ref.shape or NodeShape.RECTANGLE
            )
        elif ref.shape is not None:
            self.nodes[ref.id] = FlowNode(ref.id, ref.label or ref.id, ref.shape)

        if ref.class_name:
            self.node_classes[ref.id] = ref.class_name

        if self.open_subgraphs:
            members = self.open_subgraphs[-1].node_ids
            if ref.id not in members:
                members.append(ref.id)

    def _open_subgraph(self, line: str) -> None:
        match = SUBGRAPH_PATTERN.match(line)
        if match:
            subgraph_id, label = match.group(1), strip_quotes(match.group(2))
        else:
            label = strip_quotes(line[len("subgraph "):])
            subgraph_id = label
        self.open_subgraphs.append(_OpenSubgraph(subgraph_id, label))

    def _close_subgraph(self) -> None:
        block = self.open_subgraphs.pop()
        if self.open_subgraphs:
            self.open_subgraphs[-1].subgraph_ids.append(block.id)
        self.subgraphs.append(
            Subgraph(
                block.id, block.label, tuple(block.node_ids), tuple(block.subgraph_ids)
            )
        )
