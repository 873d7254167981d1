"""Shared constants and enumerations for the puzzle engines."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Tuple


class Game(str, Enum):
    """Game identifiers, used as document folders and persistence prefixes."""

    HEXICON = "hexicon"
    LUNAMINI = "lunamini"
    LETTERHEAD = "letterhead"
    CRYPTINI = "cryptini"


class Direction(str, Enum):
    """Word directions supported by the mini grid."""

    ACROSS = "ACROSS"
    DOWN = "DOWN"


class CheckMark(str, Enum):
    """Decoration left on a mini cell by the check operations."""

    NONE = "NONE"
    CORRECT = "CORRECT"


class TileState(IntEnum):
    """Letter feedback, ordered so a higher value always wins on the keyboard."""

    EMPTY = 0
    PENDING = 1
    ABSENT = 2
    PRESENT = 3
    CORRECT = 4


class RoundState(str, Enum):
    PLAYING = "PLAYING"
    WON = "WON"
    LOST = "LOST"


BLOCK_CHAR = "#"
HIGHLIGHT_CHAR = "*"
DATE_FORMAT = "%Y-%m-%d"

HEXICON_LETTER_COUNT = 7
HEXICON_MIN_WORD_LENGTH = 4
HEXICON_PANGRAM_BONUS = 6
# Points by word length; longer words use the last tier.
HEXICON_LENGTH_TIERS: Dict[int, int] = {4: 2, 5: 5, 6: 8, 7: 12}
HEXICON_LONG_WORD_POINTS = 16

LETTERHEAD_WORD_LENGTH = 5
LETTERHEAD_MAX_ROWS = 6

MINI_SIZE = 5

SHARE_TILES: Dict[TileState, str] = {
    TileState.CORRECT: "\U0001F7E9",
    TileState.PRESENT: "\U0001F7E6",
}
SHARE_TILE_DEFAULT = "⬜"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def position(self, index: int) -> Tuple[int, int]:
        return divmod(index, self.cols)
