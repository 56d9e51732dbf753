"""
Class diagram parser.

Recognises class blocks with visibility-prefixed members, bare class
declarations, annotations, inline members and the relation operators.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..diagrams import (
    ClassDefinition,
    ClassDiagram,
    ClassMember,
    ClassRelationship,
    RelationType,
    Visibility,
)
from .base import find_token, skip_line, strip_quotes

# (token, relation, reversed). A reversed spelling draws its marker on the
# left, so subject and object are swapped to keep the marker on the target.
CLASS_RELATION_TOKENS: Tuple[Tuple[str, RelationType, bool], ...] = (
    ("..|>", RelationType.REALIZATION, False),
    ("<|..", RelationType.REALIZATION, True),
    ("<|--", RelationType.INHERITANCE, True),
    ("--|>", RelationType.INHERITANCE, False),
    ("*--", RelationType.COMPOSITION, True),
    ("--*", RelationType.COMPOSITION, False),
    ("o--", RelationType.AGGREGATION, True),
    ("--o", RelationType.AGGREGATION, False),
    ("..>", RelationType.DEPENDENCY, False),
    ("<..", RelationType.DEPENDENCY, True),
    ("-->", RelationType.ASSOCIATION, False),
    ("<--", RelationType.ASSOCIATION, True),
    ("--", RelationType.LINK, False),
)

VISIBILITY_SIGILS = {v.value: v for v in Visibility}

_NAME = r"([A-Za-z0-9_]+(?:~[^~]+~)?)"
BLOCK_OPEN_PATTERN = re.compile(r"^class\s+" + _NAME + r"\s*\{$")
DECLARATION_PATTERN = re.compile(r"^class\s+" + _NAME + r"$")
ANNOTATION_PATTERN = re.compile(r"^<<(.+)>>\s*" + _NAME + r"$")
INLINE_MEMBER_PATTERN = re.compile(r"^" + _NAME + r"\s*:\s*(.+)$")
LEFT_OPERAND = re.compile(r'^' + _NAME + r'\s*(?:"([^"]*)")?$')
RIGHT_OPERAND = re.compile(r'^(?:"([^"]*)")?\s*' + _NAME + r'$')


@dataclass
class _ClassBuilder:
    name: str
    annotation: Optional[str] = None
    properties: List[ClassMember] = field(default_factory=list)
    methods: List[ClassMember] = field(default_factory=list)

    def add_member(self, member: ClassMember) -> None:
        if "(" in member.name:
            self.methods.append(member)
        else:
            self.properties.append(member)

    def freeze(self) -> ClassDefinition:
        return ClassDefinition(
            self.name, self.annotation, tuple(self.properties), tuple(self.methods)
        )


def parse_member(text: str) -> Optional[ClassMember]:
    """
    Parse one member line.

    `+String name` gives a property, `+run(int x) bool` gives a method named
    `run(int x)` returning `bool`.
    """
    text = text.strip()
    visibility = Visibility.PUBLIC
    if text and text[0] in VISIBILITY_SIGILS:
        visibility = VISIBILITY_SIGILS[text[0]]
        text = text[1:].strip()
    if not text:
        return None

    if "(" in text:
        close = text.rfind(")")
        if close < 0:
            return ClassMember(visibility, text)
        return ClassMember(visibility, text[: close + 1], text[close + 1:].strip())

    parts = text.split(None, 1)
    if len(parts) == 2:
        return ClassMember(visibility, parts[1], parts[0])
    return ClassMember(visibility, parts[0])


class ClassDiagramParser:
    """Parses `classDiagram` diagrams."""

    def __init__(self):
        self.classes: Dict[str, _ClassBuilder] = {}
        self.relationships: List[ClassRelationship] = []
        self.current: Optional[_ClassBuilder] = None

    def parse(self, lines: List[str]) -> ClassDiagram:
        for line in lines[1:]:
            self._parse_line(line)

        return ClassDiagram(
            classes=tuple(self.classes[name].freeze() for name in sorted(self.classes)),
            relationships=tuple(self.relationships),
        )

    def _ensure(self, name: str) -> _ClassBuilder:
        if name not in self.classes:
            self.classes[name] = _ClassBuilder(name)
        return self.classes[name]

    def _parse_line(self, line: str) -> None:
        if self.current is not None:
            if line == "}":
                self.current = None
            elif line.startswith("<<") and line.endswith(">>"):
                self.current.annotation = line[2:-2].strip()
            else:
                member = parse_member(line)
                if member is not None:
                    self.current.add_member(member)
            return

        match = BLOCK_OPEN_PATTERN.match(line)
        if match:
            self.current = self._ensure(match.group(1))
            return

        match = DECLARATION_PATTERN.match(line)
        if match:
            self._ensure(match.group(1))
            return

        match = ANNOTATION_PATTERN.match(line)
        if match:
            self._ensure(match.group(2)).annotation = match.group(1).strip()
            return

        if "--" not in line and ".." not in line:
            match = INLINE_MEMBER_PATTERN.match(line)
            if match:
                member = parse_member(match.group(2))
                if member is not None:
                    self._ensure(match.group(1)).add_member(member)
                return

        self._parse_relationship(line)

    def _parse_relationship(self, line: str) -> None:
        found = find_token(line, CLASS_RELATION_TOKENS)
        if found is None:
            skip_line("class", line)
            return

        index, (token, relation_type, reversed_) = found
        left = line[:index].strip()
        right = line[index + len(token):]
        label = None
        if ":" in right:
            right, label = right.split(":", 1)
            label = strip_quotes(label) or None

        left_match = LEFT_OPERAND.match(left)
        right_match = RIGHT_OPERAND.match(right.strip())
        if left_match is None or right_match is None:
            skip_line("class", line)
            return

        source, source_card = left_match.group(1), left_match.group(2)
        target, target_card = right_match.group(2), right_match.group(1)
        if reversed_:
            source, target = target, source
            source_card, target_card = target_card, source_card

        self._ensure(source)
        self._ensure(target)
        self.relationships.append(
            ClassRelationship(
                source, target, relation_type, label, source_card, target_card
            )
        )
