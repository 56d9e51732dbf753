"""Entity-relationship diagram parser."""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..diagrams import (
    AttributeKey,
    Cardinality,
    ERAttribute,
    ERDiagram,
    EREntity,
    ERRelationship,
)
from .base import find_token, skip_line, strip_quotes

# Crow's-foot end markers as they appear on either side of "--"
END_MARKERS: Dict[str, Cardinality] = {
    "||": Cardinality.EXACTLY_ONE,
    "|o": Cardinality.ZERO_OR_ONE,
    "o|": Cardinality.ZERO_OR_ONE,
    "}o": Cardinality.ZERO_OR_MORE,
    "o{": Cardinality.ZERO_OR_MORE,
    "}|": Cardinality.ONE_OR_MORE,
    "|{": Cardinality.ONE_OR_MORE,
}

_TOKENS = (
    "||--||",
    "||--o{",
    "||--|{",
    "||--o|",
    "}o--||",
    "}|--||",
    "o|--||",
    "o{--||",
    "}o--o{",
    "}|--o{",
    "o|--o{",
    "}|--|{",
)

ER_CARDINALITY_TOKENS: Tuple[Tuple[str, Cardinality, Cardinality], ...] = tuple(
    (token, END_MARKERS[token[:2]], END_MARKERS[token[4:]]) for token in _TOKENS
)

BLOCK_OPEN_PATTERN = re.compile(r"^([A-Za-z0-9_-]+)\s*\{$")
ATTRIBUTE_PATTERN = re.compile(
    r'^(\S+)\s+(\S+)(?:\s+(PK|FK|UK)(?:\s*,\s*(?:PK|FK|UK))*)?(?:\s+"([^"]*)")?$'
)
ENTITY_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass
class _EntityBuilder:
    name: str
    attributes: List[ERAttribute] = field(default_factory=list)


def parse_attribute(line: str) -> Optional[ERAttribute]:
    """Parse `type name [PK|FK|UK] ["comment"]`."""
    match = ATTRIBUTE_PATTERN.match(line)
    if match is None:
        return None
    key = AttributeKey(match.group(3)) if match.group(3) else None
    return ERAttribute(match.group(1), match.group(2), key, match.group(4))


class ERDiagramParser:
    """Parses `erDiagram` diagrams."""

    def __init__(self):
        self.entities: Dict[str, _EntityBuilder] = {}
        self.relationships: List[ERRelationship] = []
        self.current: Optional[_EntityBuilder] = None

    def parse(self, lines: List[str]) -> ERDiagram:
        for line in lines[1:]:
            self._parse_line(line)

        return ERDiagram(
            entities=tuple(
                EREntity(name, tuple(self.entities[name].attributes))
                for name in sorted(self.entities)
            ),
            relationships=tuple(self.relationships),
        )

    def _ensure(self, name: str) -> _EntityBuilder:
        if name not in self.entities:
            self.entities[name] = _EntityBuilder(name)
        return self.entities[name]

    def _parse_line(self, line: str) -> None:
        if self.current is not None:
            if line == "}":
                self.current = None
                return
            attribute = parse_attribute(line)
            if attribute is None:
                skip_line("er", line)
            else:
                self.current.attributes.append(attribute)
            return

        if "|" not in line:
            match = BLOCK_OPEN_PATTERN.match(line)
            if match:
                self.current = self._ensure(match.group(1))
                return

        found = find_token(line, ER_CARDINALITY_TOKENS)
        if found is None or ":" not in line[found[0]:]:
            skip_line("er", line)
            return

        index, (token, source_card, target_card) = found
        source = line[:index].strip()
        target, label = line[index + len(token):].split(":", 1)
        target = target.strip()
        if not ENTITY_NAME_PATTERN.match(source) or not ENTITY_NAME_PATTERN.match(target):
            skip_line("er", line)
            return

        self._ensure(source)
        self._ensure(target)
        self.relationships.append(
            ERRelationship(source, target, strip_quotes(label), source_card, target_card)
        )
