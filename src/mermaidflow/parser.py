"""
Parser module for diagram text.

Normalises the input lines, detects the diagram kind from the leading keyword
and hands the lines to the matching per-kind parser. Only two conditions are
errors; every other malformed line is skipped.
"""

import logging
from typing import List

from .diagrams import Diagram
from .parsers import PARSERS

logger = logging.getLogger(__name__)

COMMENT_MARKER = "%%"


class ParseError(Exception):
    """Raised when input parsing fails."""

    pass


class EmptyInput(ParseError):
    """Raised when the input has no content besides blanks and comments."""

    def __init__(self):
        super().__init__("Empty diagram input")


class UnknownDiagramType(ParseError):
    """Raised when the leading keyword names no supported diagram kind."""

    def __init__(self, kind: str):
        super().__init__(f"Unknown diagram type: {kind}")
        self.kind = kind


class Parser:
    """Parses diagram text into one of the diagram model types."""

    def normalize(self, input_text: str) -> List[str]:
        """
        Split input into trimmed lines, dropping blanks and %% comments.

        Raises:
            EmptyInput: If no line remains
        """
        lines = []
        for raw in input_text.strip().splitlines():
            line = raw.strip()
            if not line or line.startswith(COMMENT_MARKER):
                continue
            lines.append(line)

        if not lines:
            raise EmptyInput()
        return lines

    def parse(self, input_text: str) -> Diagram:
        """
        Parse input text into a diagram.

        Args:
            input_text: Diagram text whose first line names the kind,
                e.g. "flowchart TD" or "sequenceDiagram"

        Returns:
            The parsed, immutable diagram

        Raises:
            EmptyInput: If the input is blank or only comments
            UnknownDiagramType: If the leading keyword is not recognised
        """
        lines = self.normalize(input_text)
        keyword = lines[0].split()[0]

        parser_factory = PARSERS.get(keyword)
        if parser_factory is None:
            raise UnknownDiagramType(keyword)

        logger.debug("Parsing %s diagram (%d lines)", keyword, len(lines))
        return parser_factory().parse(lines)


def parse_diagram(input_text: str) -> Diagram:
    """
    Convenience function to parse diagram text.

    Args:
        input_text: Diagram text

    Returns:
        The parsed diagram
    """
    return Parser().parse(input_text)
