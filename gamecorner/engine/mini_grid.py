"""Mini crossword grid construction, clue spans and checking."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Sequence

from ..core.constants import BLOCK_CHAR, HIGHLIGHT_CHAR, MINI_SIZE, Bounds, CheckMark, Direction
from ..core.exceptions import ContentIntegrityError
from ..core.models import ActionResult, MiniCell, MiniClue, MiniClueEntry, MiniDocument
from ..data.normalization import normalize_answer
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class MiniGridConfig:
    """Configuration values driving the grid layout."""

    size: int = MINI_SIZE

    def bounds(self) -> Bounds:
        return Bounds(rows=self.size, cols=self.size)


# ----------------------------------------------------------------------
# Construction helpers
# ----------------------------------------------------------------------
def build_cells(rows: Sequence[str], highlights: Optional[Sequence[str]], size: int) -> List[MiniCell]:
    """Turn ``size`` row strings into a flat, row-major list of cells."""

    if rows is None or len(rows) != size or any(len(row) != size for row in rows):
        raise ContentIntegrityError(f"rows must be {size} strings of length {size}")

    has_highlights = highlights is not None and len(highlights) == size
    cells: List[MiniCell] = []
    for r, row in enumerate(rows):
        for c, char in enumerate(row):
            is_block = char == BLOCK_CHAR
            if not is_block and not char.isalpha():
                raise ContentIntegrityError(f"rows[{r}][{c}] must be a letter or '{BLOCK_CHAR}'")
            highlighted = bool(
                has_highlights and c < len(highlights[r]) and highlights[r][c] == HIGHLIGHT_CHAR
            )
            cells.append(
                MiniCell(
                    is_block=is_block,
                    solution=None if is_block else char.upper(),
                    highlighted=highlighted,
                )
            )
    return cells


def auto_number(cells: List[MiniCell], size: int) -> int:
    """Assign shared across/down numbers in scan order; returns the last number."""

    number = 0
    for index, cell in enumerate(cells):
        cell.number = None
        if cell.is_block:
            continue
        row, col = divmod(index, size)
        starts_across = col == 0 or cells[index - 1].is_block
        starts_down = row == 0 or cells[index - size].is_block
        if starts_across or starts_down:
            number += 1
            cell.number = number
    return number


class MiniCrossword:
    """Numbered grid, clue lists and player entries for one mini puzzle."""

    def __init__(self, config: Optional[MiniGridConfig] = None) -> None:
        self.config = config or MiniGridConfig()
        self.bounds = self.config.bounds()
        self.size = self.config.size
        self.cells: List[MiniCell] = []
        self.across: List[MiniClue] = []
        self.down: List[MiniClue] = []
        self.title = ""
        self.author = ""
        self.date = ""
        self.revealed = False

    @classmethod
    def from_document(cls, document: MiniDocument, config: Optional[MiniGridConfig] = None) -> "MiniCrossword":
        grid = cls(config)
        grid.hydrate(document)
        return grid

    # ------------------------------------------------------------------
    # Hydration
    # ------------------------------------------------------------------
    def hydrate(self, document: MiniDocument) -> None:
        self.title = document.title
        self.author = document.author
        self.date = document.date
        self.revealed = False

        self.cells = build_cells(document.rows, document.highlights, self.size)
        auto_number(self.cells, self.size)
        self.across = self._build_clues(document.across, Direction.ACROSS)
        self.down = self._build_clues(document.down, Direction.DOWN)
        self._validate_answers(self.across + self.down)
        LOGGER.debug(
            "Hydrated mini %r with %d across and %d down clues",
            self.title,
            len(self.across),
            len(self.down),
        )

    def _build_clues(self, entries: Sequence[MiniClueEntry], direction: Direction) -> List[MiniClue]:
        clues: List[MiniClue] = []
        for entry in entries:
            length = self.span_length(entry.row, entry.col, direction)
            clues.append(
                MiniClue(
                    number=self.number_at(entry.row, entry.col),
                    row=entry.row,
                    col=entry.col,
                    direction=direction,
                    text=entry.clue,
                    length=length,
                    answer=entry.answer,
                )
            )
        clues.sort(key=lambda clue: clue.number)
        return clues

    def _validate_answers(self, clues: Sequence[MiniClue]) -> None:
        for clue in clues:
            if not clue.answer or not clue.answer.strip():
                continue
            expected = normalize_answer(clue.answer)
            from_grid = self.read_span(clue.row, clue.col, clue.direction)
            if expected != from_grid:
                raise ContentIntegrityError(
                    f"{clue.direction.value.title()} ({clue.row},{clue.col}) answer mismatch. "
                    f"document='{expected}', grid='{from_grid}'"
                )

    # ------------------------------------------------------------------
    # Spans
    # ------------------------------------------------------------------
    def _checked_index(self, row: int, col: int) -> int:
        if not self.bounds.contains(row, col):
            raise ContentIntegrityError(f"({row},{col}) is outside the grid")
        return self.bounds.index(row, col)

    def number_at(self, row: int, col: int) -> int:
        number = self.cells[self._checked_index(row, col)].number
        if number is None:
            raise ContentIntegrityError(f"({row},{col}) is not a clue start")
        return number

    def span_indices(self, row: int, col: int, direction: Direction) -> Iterator[int]:
        dr, dc = (0, 1) if direction == Direction.ACROSS else (1, 0)
        r, c = row, col
        while self.bounds.contains(r, c):
            index = self.bounds.index(r, c)
            if self.cells[index].is_block:
                return
            yield index
            r += dr
            c += dc

    def span_length(self, row: int, col: int, direction: Direction) -> int:
        if self.cells[self._checked_index(row, col)].is_block:
            raise ContentIntegrityError(f"Clue start ({row},{col}) cannot be a block")
        return sum(1 for _ in self.span_indices(row, col, direction))

    def read_span(self, row: int, col: int, direction: Direction) -> str:
        return "".join(self.cells[i].solution or "" for i in self.span_indices(row, col, direction))

    def clue_at(self, index: int, direction: Direction) -> Optional[MiniClue]:
        """Return the clue whose span covers ``index`` in ``direction``."""

        clues = self.across if direction == Direction.ACROSS else self.down
        for clue in clues:
            if index in self.span_indices(clue.row, clue.col, direction):
                return clue
        return None

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------
    @property
    def cell_count(self) -> int:
        return len(self.cells)

    def cell(self, index: int) -> MiniCell:
        return self.cells[index]

    def is_block(self, index: int) -> bool:
        return self.cells[index].is_block

    def get_entry(self, index: int) -> Optional[str]:
        return self.cells[index].entry

    def get_solution(self, index: int) -> Optional[str]:
        return self.cells[index].solution

    def set_entry(self, index: int, char: Optional[str]) -> ActionResult:
        cell = self.cells[index]
        if cell.is_block:
            return ActionResult.rejected()
        cell.entry = char.upper() if char else None
        cell.mark = CheckMark.NONE
        return ActionResult.ok()

    def clear_marks(self) -> None:
        for cell in self.cells:
            cell.mark = CheckMark.NONE

    def check_all(self) -> int:
        """Mark every correctly filled cell; returns how many were marked."""

        marked = 0
        for cell in self.cells:
            correct = not cell.is_block and cell.entry == cell.solution
            cell.mark = CheckMark.CORRECT if correct else CheckMark.NONE
            marked += int(correct)
        return marked

    def check_clue(self, row: int, col: int, direction: Direction) -> int:
        indices = list(self.span_indices(row, col, direction))
        for index in indices:
            self.cells[index].mark = CheckMark.NONE
        marked = 0
        for index in indices:
            cell = self.cells[index]
            if cell.entry == cell.solution:
                cell.mark = CheckMark.CORRECT
                marked += 1
        return marked

    @property
    def solved(self) -> bool:
        return all(cell.is_correct for cell in self.cells)

    def reveal(self) -> ActionResult:
        for cell in self.cells:
            if not cell.is_block:
                cell.entry = cell.solution
                cell.mark = CheckMark.NONE
        self.revealed = True
        return ActionResult.ok()

    def reset(self) -> None:
        for cell in self.cells:
            cell.entry = None
            cell.mark = CheckMark.NONE
        self.revealed = False

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    def to_snapshot(self, date: str = "") -> Dict[str, Any]:
        return {
            "date": date or self.date,
            "entries": [None if cell.is_block else cell.entry for cell in self.cells],
            "revealed": self.revealed,
            "solved": self.solved,
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }

    def restore(self, snapshot: Dict[str, Any]) -> bool:
        entries = snapshot.get("entries")
        if not isinstance(entries, list) or len(entries) != self.cell_count:
            LOGGER.info("Ignoring mini snapshot with incompatible grid")
            return False
        for cell, entry in zip(self.cells, entries):
            if cell.is_block:
                continue
            cell.entry = entry.upper()[:1] if isinstance(entry, str) and entry else None
            cell.mark = CheckMark.NONE
        self.revealed = bool(snapshot.get("revealed", False))
        return True
