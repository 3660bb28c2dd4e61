"""
Data model shared by the parser, the project index and the validation engine.

Editor-facing types (Position, Range, Location, Hover, Diagnostic) follow the
Language Server Protocol shapes so they serialise straight into editor payloads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple


@dataclass(frozen=True)
class Position:
    """Zero-based line/character position inside a document."""
    line: int
    character: int

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "character": self.character}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Position:
        line = data["line"]
        character = data["character"]
        if not isinstance(line, int) or not isinstance(character, int):
            raise TypeError("Position line and character must be integers")
        return cls(line=line, character=character)


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}


DOCUMENT_START = Range(Position(0, 0), Position(0, 0))


@dataclass(frozen=True)
class Location:
    uri: str
    range: Range

    def to_dict(self) -> Dict[str, Any]:
        return {"uri": self.uri, "range": self.range.to_dict()}


@dataclass(frozen=True)
class Hover:
    range: Range
    contents: str

    def to_dict(self) -> Dict[str, Any]:
        return {"range": self.range.to_dict(), "contents": self.contents}


class DiagnosticSeverity(IntEnum):
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


@dataclass(frozen=True)
class Diagnostic:
    range: Range
    message: str
    severity: DiagnosticSeverity = DiagnosticSeverity.WARNING
    source: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "range": self.range.to_dict(),
            "severity": int(self.severity),
            "message": self.message,
        }
        if self.source:
            payload["source"] = self.source
        return payload


@dataclass(frozen=True)
class Project:
    """
    A group of markup files sharing one translation resource.

    Attributes:
        label: Unique name within a session (e.g. the locale, "fr")
        root: Substring a markup document URI must contain to belong here
        exclude: Ordered glob patterns removing documents from the project
        i18n_file: Path fragment a translation file URI must contain
    """
    label: str
    root: str
    exclude: Tuple[str, ...] = ()
    i18n_file: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "root": self.root,
            "exclude": list(self.exclude),
            "translation": {"i18nFile": self.i18n_file},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Project:
        """
        Build a project from an editor payload.

        Accepts both the nested ``{"translation": {"i18nFile": ...}}`` shape
        sent by the editor extension and a flat ``i18n_file`` key.
        """
        translation = data.get("translation") or {}
        i18n_file = data.get("i18n_file") or translation.get("i18nFile") or ""
        exclude = data.get("exclude") or []
        if isinstance(exclude, str):
            exclude = [exclude]
        return cls(
            label=str(data["label"]),
            root=str(data.get("root", "")),
            exclude=tuple(str(pattern) for pattern in exclude),
            i18n_file=str(i18n_file),
        )


@dataclass(frozen=True)
class TransUnit:
    """One translatable string; ``target is None`` means no translation."""
    id: str
    source: Optional[str] = None
    target: Optional[str] = None
    id_range: Optional[Range] = None
    source_range: Optional[Range] = None
    target_range: Optional[Range] = None


@dataclass
class Translation:
    """Parsed units of one translation file and the project it resolved to."""
    uri: str
    units: List[TransUnit] = field(default_factory=list)
    project: Optional[Project] = None

    @property
    def label(self) -> str:
        return self.project.label if self.project is not None else self.uri

    def unit_ids(self) -> FrozenSet[str]:
        return frozenset(unit.id for unit in self.units)

    def find_unit(self, unit_id: str) -> Optional[TransUnit]:
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        return None


@dataclass(frozen=True)
class IdRange:
    """An ``@@id`` reference found in a markup document."""
    id: str
    start: int
    end: int
    range: Range

    def contains(self, offset: int) -> bool:
        return self.start <= offset <= self.end
