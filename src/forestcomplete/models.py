"""Core forestcomplete data models."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union


@dataclass(frozen=True, slots=True)
class Entry:
    """One tree of the forest, as reported by ``forester query all``."""

    identifier: str
    title: Optional[str] = None
    taxon: Optional[str] = None
    tags: Tuple[str, ...] = ()
    route: str = ""
    metas: Dict[str, str] = field(default_factory=dict)
    source_path: str = ""

    @property
    def display_uri(self) -> str:
        return self.identifier

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Entry":
        # Missing or mistyped fields fall back to defaults.
        tags = data.get("tags")
        metas = data.get("metas")
        return cls(
            identifier=str(data.get("uri", "")),
            title=data.get("title"),
            taxon=data.get("taxon"),
            tags=tuple(tags) if isinstance(tags, (list, tuple)) else (),
            route=data.get("route") or "",
            metas=dict(metas) if isinstance(metas, Mapping) else {},
            source_path=data.get("sourcePath") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uri": self.identifier,
            "title": self.title,
            "taxon": self.taxon,
            "tags": list(self.tags),
            "route": self.route,
            "metas": dict(self.metas),
            "sourcePath": self.source_path,
        }


Forest = List[Entry]


class FailureKind(str, enum.Enum):
    SPAWN = "spawn"
    TIMEOUT = "timeout"
    EXIT = "exit"
    PARSE = "parse"


@dataclass(frozen=True, slots=True)
class Success:
    forest: Forest


@dataclass(frozen=True, slots=True)
class Failure:
    """A query that did not produce a forest.

    ``stdout`` and ``stderr`` hold whatever the process wrote before failing.
    """

    message: str
    stdout: str = ""
    stderr: str = ""
    kind: FailureKind = FailureKind.EXIT

    def diagnostic(self) -> str:
        """Primary cause followed by the captured output."""
        text = self.message
        if self.stdout:
            text += "\n\n" + self.stdout
        if self.stderr:
            text += "\n\n" + self.stderr
        return text


QueryOutcome = Union[Success, Failure]


@dataclass(frozen=True, slots=True)
class NoMatch:
    pass


NO_MATCH = NoMatch()


@dataclass(frozen=True, slots=True)
class Match:
    start_offset: int
    end_offset: int
    partial_text: str


MatchResult = Union[NoMatch, Match]


@dataclass(frozen=True, slots=True)
class ReplaceRange:
    """Span of a single line replaced by an accepted completion."""

    start: int
    end: int
    line: int = 0

    @classmethod
    def from_match(cls, match: Match, line: int = 0) -> "ReplaceRange":
        return cls(start=match.start_offset, end=match.end_offset, line=line)


@dataclass(frozen=True, slots=True)
class CompletionCandidate:
    label: str
    description: str
    insert_text: str
    filter_text: str
    detail: str
    documentation: Optional[str]
    range: ReplaceRange
    kind: str = "value"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "description": self.description,
            "insertText": self.insert_text,
            "filterText": self.filter_text,
            "detail": self.detail,
            "documentation": self.documentation,
            "kind": self.kind,
            "range": {
                "line": self.range.line,
                "start": self.range.start,
                "end": self.range.end,
            },
        }
