"""
Text documents as delivered by the editor, plus the collection of open ones.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import Dict, Iterator, List, Optional

from transcheck.core.models import Position


def _compute_line_offsets(text: str) -> List[int]:
    offsets = [0]
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char == '\r':
            if index + 1 < length and text[index + 1] == '\n':
                index += 1
            offsets.append(index + 1)
        elif char == '\n':
            offsets.append(index + 1)
        index += 1
    return offsets


def _utf16_length(text: str) -> int:
    # Astral characters take a surrogate pair in UTF-16
    return len(text) + sum(1 for char in text if ord(char) > 0xFFFF)


class TextDocument:
    """Full-text snapshot of an editor document with offset/position conversion."""

    def __init__(self, uri: str, language_id: str, text: str, version: int = 0):
        self.uri = uri
        self.language_id = language_id
        self.version = version
        self._text = text
        self._line_offsets = _compute_line_offsets(text)

    def __repr__(self) -> str:
        return f"TextDocument(uri={self.uri!r}, language_id={self.language_id!r}, version={self.version})"

    def get_text(self) -> str:
        return self._text

    @property
    def line_count(self) -> int:
        return len(self._line_offsets)

    def position_at(self, offset: int) -> Position:
        """Position of a character offset; ``character`` counts UTF-16 code units."""
        offset = max(0, min(offset, len(self._text)))
        line = bisect_right(self._line_offsets, offset) - 1
        line_offset = self._line_offsets[line]
        return Position(line=line, character=_utf16_length(self._text[line_offset:offset]))

    def offset_at(self, position: Position) -> int:
        if position.line < 0:
            return 0
        if position.line >= len(self._line_offsets):
            return len(self._text)
        line_offset = self._line_offsets[position.line]
        if position.line + 1 < len(self._line_offsets):
            next_line_offset = self._line_offsets[position.line + 1]
        else:
            next_line_offset = len(self._text)

        units = 0
        for offset in range(line_offset, next_line_offset):
            if units >= position.character:
                return offset
            units += 2 if ord(self._text[offset]) > 0xFFFF else 1
        return next_line_offset


class TextDocuments:
    """Documents currently open in the editor, keyed by URI."""

    def __init__(self):
        self._documents: Dict[str, TextDocument] = {}

    def get(self, uri: str) -> Optional[TextDocument]:
        return self._documents.get(uri)

    def set(self, document: TextDocument) -> None:
        self._documents[document.uri] = document

    def remove(self, uri: str) -> Optional[TextDocument]:
        return self._documents.pop(uri, None)

    def all(self) -> List[TextDocument]:
        return list(self._documents.values())

    def __contains__(self, uri: str) -> bool:
        return uri in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[TextDocument]:
        return iter(self.all())
