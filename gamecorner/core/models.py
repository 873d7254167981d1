"""Data models shared by the puzzle engines and their adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .constants import CheckMark, Direction, TileState


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a player action.

    A rejected action leaves the engine untouched and may carry an advisory
    message for the player.
    """

    accepted: bool
    message: Optional[str] = None
    points: int = 0

    @classmethod
    def ok(cls, points: int = 0) -> "ActionResult":
        return cls(accepted=True, points=points)

    @classmethod
    def rejected(cls, message: Optional[str] = None) -> "ActionResult":
        return cls(accepted=False, message=message)


@dataclass
class MiniCell:
    """Represents a mini crossword cell."""

    is_block: bool
    solution: Optional[str] = None
    number: Optional[int] = None
    entry: Optional[str] = None
    highlighted: bool = False
    mark: CheckMark = CheckMark.NONE

    @property
    def is_correct(self) -> bool:
        return self.is_block or self.entry == self.solution


@dataclass(frozen=True)
class MiniClue:
    number: int
    row: int
    col: int
    direction: Direction
    text: str
    length: int
    answer: Optional[str] = None


@dataclass
class LetterheadTile:
    ch: Optional[str] = None
    state: TileState = TileState.EMPTY


@dataclass(frozen=True)
class LetterBucket:
    """Found/total counts for the valid words sharing a first letter."""

    letter: str
    found: int
    total: int

    @property
    def cleared(self) -> bool:
        return self.found == self.total


# ----------------------------------------------------------------------
# Puzzle documents
# ----------------------------------------------------------------------
# ``from_json`` raises KeyError, TypeError or ValueError on a wrongly shaped
# payload; the loader turns those into a "not found" result.


def _optional_str(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string")
    return value


def _str_list(payload: Dict[str, Any], key: str) -> List[str]:
    value = payload.get(key) or []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise TypeError(f"'{key}' must be a list of strings")
    return list(value)


@dataclass
class HexiconDocument:
    date: str
    pangram: str
    letters: List[str]
    required: str
    words: List[str] = field(default_factory=list)
    themed: bool = False
    tagline: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "HexiconDocument":
        required = payload["required"]
        if not isinstance(required, str) or len(required) != 1:
            raise ValueError("'required' must be a single letter")
        return cls(
            date=_optional_str(payload, "date") or "",
            pangram=_optional_str(payload, "pangram") or "",
            letters=_str_list(payload, "letters"),
            required=required,
            words=_str_list(payload, "words"),
            themed=bool(payload.get("themed", False)),
            tagline=_optional_str(payload, "tagline"),
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "pangram": self.pangram,
            "letters": list(self.letters),
            "required": self.required,
            "words": list(self.words),
            "themed": self.themed,
            "tagline": self.tagline,
        }


@dataclass
class MiniClueEntry:
    """A clue as declared by the document, before span derivation."""

    row: int
    col: int
    clue: str
    answer: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "MiniClueEntry":
        row, col = payload["row"], payload["col"]
        if not isinstance(row, int) or not isinstance(col, int):
            raise TypeError("clue 'row' and 'col' must be integers")
        return cls(
            row=row,
            col=col,
            clue=_optional_str(payload, "clue") or "",
            answer=_optional_str(payload, "answer"),
        )


@dataclass
class MiniDocument:
    rows: List[str]
    across: List[MiniClueEntry]
    down: List[MiniClueEntry]
    title: str = ""
    author: str = ""
    date: str = ""
    highlights: Optional[List[str]] = None

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "MiniDocument":
        clues = payload["clues"]
        if not isinstance(clues, dict):
            raise TypeError("'clues' must be an object with 'across' and 'down'")
        highlights = payload.get("highlights")
        return cls(
            rows=_str_list(payload, "rows"),
            across=[MiniClueEntry.from_json(item) for item in clues.get("across") or []],
            down=[MiniClueEntry.from_json(item) for item in clues.get("down") or []],
            title=_optional_str(payload, "title") or "",
            author=_optional_str(payload, "author") or "",
            date=_optional_str(payload, "date") or "",
            highlights=_str_list(payload, "highlights") if highlights is not None else None,
        )


@dataclass
class LetterheadDocument:
    answer: str
    author: str = ""
    date: str = ""

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "LetterheadDocument":
        answer = payload["answer"]
        if not isinstance(answer, str) or not answer.strip():
            raise ValueError("'answer' must be a non-empty string")
        return cls(
            answer=answer,
            author=_optional_str(payload, "author") or "",
            date=_optional_str(payload, "date") or "",
        )


@dataclass
class CryptiniDocument:
    clue: str
    answer: str
    enumeration: str = ""
    explanation: Optional[str] = None
    author: Optional[str] = None
    date: str = ""
    hints: List[str] = field(default_factory=list)
    alternatives: List[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "CryptiniDocument":
        answer = payload["answer"]
        if not isinstance(answer, str) or not answer.strip():
            raise ValueError("'answer' must be a non-empty string")
        return cls(
            clue=_optional_str(payload, "clue") or "",
            answer=answer,
            enumeration=_optional_str(payload, "enumeration") or "",
            explanation=_optional_str(payload, "explanation"),
            author=_optional_str(payload, "author"),
            date=_optional_str(payload, "date") or "",
            hints=_str_list(payload, "hints"),
            alternatives=_str_list(payload, "alternatives"),
        )
