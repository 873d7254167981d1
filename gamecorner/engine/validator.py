"""Deterministic integrity checks for curated puzzle documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..core.exceptions import ContentIntegrityError
from ..core.models import HexiconDocument, LetterheadDocument, MiniDocument
from ..data.normalization import normalize_answer, normalize_word
from ..utils.logger import get_logger
from .hexicon import HexiconPuzzle, is_pangram
from .mini_grid import MiniCrossword, MiniGridConfig


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str] = field(default_factory=list)


class PuzzleValidator:
    """Runs the checks an author wants before publishing a document.

    Hydration already rejects documents the engines cannot play; the extra
    checks here catch content that would load but play badly, such as a
    listed word that can never be submitted.
    """

    def __init__(self, mini_config: Optional[MiniGridConfig] = None) -> None:
        self.mini_config = mini_config or MiniGridConfig()

    def validate_hexicon(self, document: HexiconDocument) -> ValidationResult:
        try:
            puzzle = HexiconPuzzle.from_document(document)
            self._check_word_list(puzzle, document)
            self._check_pangram(puzzle)
        except ContentIntegrityError as exc:
            LOGGER.error("Hexicon validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True)

    def validate_mini(self, document: MiniDocument) -> ValidationResult:
        try:
            grid = MiniCrossword.from_document(document, self.mini_config)
            self._check_clue_coverage(grid)
        except ContentIntegrityError as exc:
            LOGGER.error("Mini validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True)

    def validate_letterhead(self, document: LetterheadDocument, word_length: int = 5) -> ValidationResult:
        answer = normalize_answer(document.answer)
        if len(answer) != word_length:
            message = f"Answer must be {word_length} letters, got '{answer}'"
            LOGGER.error("Letterhead validation failed: %s", message)
            return ValidationResult(ok=False, messages=[message])
        return ValidationResult(ok=True)

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------
    @staticmethod
    def _check_word_list(puzzle: HexiconPuzzle, document: HexiconDocument) -> None:
        if not puzzle.valid_words:
            raise ContentIntegrityError("Puzzle has no words")
        seen = set()
        for raw in document.words:
            word = normalize_word(raw)
            if word in seen:
                raise ContentIntegrityError(f"Duplicate word '{word}'")
            seen.add(word)

    @staticmethod
    def _check_pangram(puzzle: HexiconPuzzle) -> None:
        if not puzzle.pangram:
            return
        if not is_pangram(puzzle.pangram, puzzle.letters):
            raise ContentIntegrityError(f"Pangram '{puzzle.pangram}' does not use every letter")
        if puzzle.pangram not in puzzle.valid_words:
            raise ContentIntegrityError(f"Pangram '{puzzle.pangram}' is missing from the word list")

    @staticmethod
    def _check_clue_coverage(grid: MiniCrossword) -> None:
        covered = set()
        for clue in grid.across + grid.down:
            covered.update(grid.span_indices(clue.row, clue.col, clue.direction))
        for index, cell in enumerate(grid.cells):
            if not cell.is_block and index not in covered:
                row, col = grid.bounds.position(index)
                raise ContentIntegrityError(f"Cell ({row},{col}) is not covered by any clue")
