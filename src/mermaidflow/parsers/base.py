"""Base parser protocol and helpers shared by the per-kind grammars."""

import logging
from typing import List, Optional, Protocol, Sequence, Tuple, TypeVar

from ..diagrams import Diagram

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=tuple)


class DiagramParser(Protocol):
    """Protocol that all per-kind parsers implement."""

    def parse(self, lines: List[str]) -> Diagram:
        """Parse normalised lines (header first) into a diagram."""
        ...


def find_token(line: str, tokens: Sequence[T]) -> Optional[Tuple[int, T]]:
    """
    Find the first table entry whose token occurs in the line.

    The table is tried in order and the first entry found wins, so longer
    tokens must come before the shorter tokens they contain. Each entry is a
    tuple whose first element is the literal token.

    Returns:
        (index of the token in the line, entry), or None
    """
    for entry in tokens:
        index = line.find(entry[0])
        if index >= 0:
            return index, entry
    return None


def strip_quotes(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] == '"':
        return text[1:-1]
    return text


def skip_line(kind: str, line: str) -> None:
    logger.debug("Skipping unrecognised %s line: %r", kind, line)
