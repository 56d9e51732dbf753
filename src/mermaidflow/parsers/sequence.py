"""Sequence diagram parser."""

from typing import Dict, List, Tuple

from ..diagrams import Message, MessageStyle, Participant, SequenceDiagram
from .base import skip_line

# Longest spelling of each family first so "->>" never matches inside "-->>"
MESSAGE_TOKENS: Tuple[Tuple[str, MessageStyle], ...] = (
    ("-->>", MessageStyle.DOTTED_ARROW),
    ("->>", MessageStyle.SOLID_ARROW),
    ("--x", MessageStyle.DOTTED_CROSS),
    ("-x", MessageStyle.SOLID_CROSS),
    ("--)", MessageStyle.DOTTED_ASYNC),
    ("-)", MessageStyle.SOLID_ASYNC),
    ("-->", MessageStyle.DOTTED_LINE),
    ("->", MessageStyle.SOLID_LINE),
)


class SequenceParser:
    """Parses `sequenceDiagram` diagrams."""

    def __init__(self):
        self.participants: Dict[str, Participant] = {}
        self.messages: List[Message] = []

    def parse(self, lines: List[str]) -> SequenceDiagram:
        for line in lines[1:]:
            if line.startswith("participant "):
                self._declare_line(line[len("participant "):], is_actor=False)
            elif line.startswith("actor "):
                self._declare_line(line[len("actor "):], is_actor=True)
            else:
                self._parse_message(line)

        return SequenceDiagram(
            participants=tuple(self.participants.values()),
            messages=tuple(self.messages),
        )

    def _declare_line(self, rest: str, is_actor: bool) -> None:
        if " as " in rest:
            participant_id, label = rest.split(" as ", 1)
        else:
            participant_id, label = rest, rest
        participant_id = participant_id.strip()
        if not participant_id:
            return
        # Re-declaration keeps the first-seen position and updates the label
        self.participants[participant_id] = Participant(
            participant_id, label.strip() or participant_id, is_actor
        )

    def _ensure(self, participant_id: str) -> None:
        if participant_id not in self.participants:
            self.participants[participant_id] = Participant(participant_id, participant_id)

    def _parse_message(self, line: str) -> None:
        # A token only counts when `target: text` follows it, otherwise a
        # shorter token inside the message text would split the line
        for token, style in MESSAGE_TOKENS:
            index = line.find(token)
            if index < 0:
                continue
            source = line[:index].strip()
            rest = line[index + len(token):]
            if ":" not in rest:
                continue
            target, text = rest.split(":", 1)
            # Activation markers: A->>+B, B-->>-A
            target = target.strip().lstrip("+-").strip()
            if not source or not target:
                continue

            self._ensure(source)
            self._ensure(target)
            self.messages.append(Message(source, target, text.strip(), style))
            return

        skip_line("sequence", line)
