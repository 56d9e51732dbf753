"""State diagram parser."""

import re
from typing import Dict, List, Optional

from ..diagrams import (
    START_END_ID,
    FlowDirection,
    StateDiagram,
    StateNode,
    StateTransition,
)
from .base import skip_line, strip_quotes
from .flowchart import parse_direction

_STATE_ID = r"(\[\*\]|[A-Za-z0-9_]+)"
DESCRIBED_STATE_PATTERN = re.compile(r'^state\s+"([^"]*)"\s+as\s+([A-Za-z0-9_]+)$')
BARE_STATE_PATTERN = re.compile(r"^state\s+([A-Za-z0-9_]+)(?:\s*\{)?$")
DESCRIPTION_PATTERN = re.compile(r"^([A-Za-z0-9_]+)\s*:\s*(.+)$")
STATE_ID_PATTERN = re.compile(_STATE_ID + r"$")


class StateDiagramParser:
    """Parses `stateDiagram` and `stateDiagram-v2` diagrams."""

    def __init__(self):
        self.states: Dict[str, StateNode] = {}
        self.transitions: List[StateTransition] = []
        self.direction = FlowDirection.TD

    def parse(self, lines: List[str]) -> StateDiagram:
        for line in lines[1:]:
            self._parse_line(line)

        return StateDiagram(
            states=tuple(self.states[key] for key in sorted(self.states)),
            transitions=tuple(self.transitions),
            direction=self.direction,
        )

    def _ensure(self, state_id: str) -> None:
        if state_id not in self.states:
            label = "" if state_id == START_END_ID else state_id
            self.states[state_id] = StateNode(state_id, label)

    def _parse_line(self, line: str) -> None:
        if line.startswith("direction "):
            self.direction = parse_direction(line, self.direction)
            return

        if "-->" in line:
            self._parse_transition(line)
            return

        match = DESCRIBED_STATE_PATTERN.match(line)
        if match:
            description, state_id = match.group(1), match.group(2)
            self.states[state_id] = StateNode(state_id, state_id, description)
            return

        match = BARE_STATE_PATTERN.match(line)
        if match:
            self._ensure(match.group(1))
            return

        match = DESCRIPTION_PATTERN.match(line)
        if match:
            state_id, description = match.group(1), match.group(2).strip()
            self._ensure(state_id)
            self.states[state_id] = StateNode(
                state_id, self.states[state_id].label, description
            )
            return

        skip_line("state", line)

    def _parse_transition(self, line: str) -> None:
        left, right = line.split("-->", 1)
        label: Optional[str] = None
        if ":" in right:
            right, label = right.split(":", 1)
            label = strip_quotes(label) or None

        source, target = left.strip(), right.strip()
        if not STATE_ID_PATTERN.match(source) or not STATE_ID_PATTERN.match(target):
            skip_line("state", line)
            return

        self._ensure(source)
        self._ensure(target)
        self.transitions.append(StateTransition(source, target, label))
