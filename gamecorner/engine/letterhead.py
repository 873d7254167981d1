"""Wordle-style guessing round: per-letter feedback and round progression."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Set

from ..core.constants import (
    LETTERHEAD_MAX_ROWS,
    LETTERHEAD_WORD_LENGTH,
    SHARE_TILE_DEFAULT,
    SHARE_TILES,
    RoundState,
    TileState,
)
from ..core.exceptions import ContentIntegrityError
from ..core.models import ActionResult, LetterheadDocument, LetterheadTile
from ..data.normalization import normalize_answer
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

NOT_ENOUGH_LETTERS = "Not enough letters."
NOT_IN_WORD_LIST = "Not in word list."
KEYBOARD = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def score_guess(guess: str, answer: str) -> List[TileState]:
    """Classify each guessed letter against the answer.

    Exact matches are marked first. The answer letters left unmatched form a
    pool, and a misplaced guess letter is only marked present while the pool
    still holds that letter, so repeated letters are never over-credited.
    """

    if len(guess) != len(answer):
        raise ValueError("Guess and answer length must match")

    result = [TileState.ABSENT] * len(answer)
    remaining: Dict[str, int] = {}
    for i, (g, a) in enumerate(zip(guess, answer)):
        if g == a:
            result[i] = TileState.CORRECT
        else:
            remaining[a] = remaining.get(a, 0) + 1

    for i, g in enumerate(guess):
        if result[i] == TileState.CORRECT:
            continue
        if remaining.get(g, 0) > 0:
            result[i] = TileState.PRESENT
            remaining[g] -= 1
    return result


class LetterheadRound:
    """Board, cursor and keyboard state for one guessing round."""

    def __init__(
        self,
        answer: str,
        allowed_guesses: Iterable[str],
        word_length: int = LETTERHEAD_WORD_LENGTH,
        max_rows: int = LETTERHEAD_MAX_ROWS,
        date: str = "",
        author: str = "",
    ) -> None:
        self.answer = normalize_answer(answer)
        if len(self.answer) != word_length:
            raise ContentIntegrityError(
                f"Answer must be {word_length} letters, got {len(self.answer)}"
            )
        if any(char not in KEYBOARD for char in self.answer):
            raise ContentIntegrityError(f"Answer '{self.answer}' must use A-Z only")
        self.word_length = word_length
        self.max_rows = max_rows
        self.date = date
        self.author = author
        self.allowed: Set[str] = {normalize_answer(word) for word in allowed_guesses}
        # The answer is always an accepted guess.
        self.allowed.add(self.answer)
        self.grid: List[List[LetterheadTile]] = []
        self.key_states: Dict[str, TileState] = {}
        self.state = RoundState.PLAYING
        self.current_row = 0
        self.current_col = 0
        self.reset()

    @classmethod
    def from_document(cls, document: LetterheadDocument, allowed_guesses: Iterable[str], **kwargs: Any) -> "LetterheadRound":
        return cls(document.answer, allowed_guesses, date=document.date, author=document.author, **kwargs)

    def reset(self) -> None:
        self.grid = [
            [LetterheadTile() for _ in range(self.word_length)] for _ in range(self.max_rows)
        ]
        self.key_states = {letter: TileState.EMPTY for letter in KEYBOARD}
        self.state = RoundState.PLAYING
        self.current_row = 0
        self.current_col = 0

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    @property
    def is_playing(self) -> bool:
        return self.state == RoundState.PLAYING

    def set_active(self, row: int, col: int) -> ActionResult:
        if not self.is_playing or row != self.current_row or not 0 <= col < self.word_length:
            return ActionResult.rejected()
        self.current_col = col
        return ActionResult.ok()

    def type_char(self, char: str) -> ActionResult:
        if not self.is_playing or self.current_col >= self.word_length:
            return ActionResult.rejected()
        char = char.upper()
        if len(char) != 1 or char not in KEYBOARD:
            return ActionResult.rejected()
        self.grid[self.current_row][self.current_col] = LetterheadTile(char, TileState.PENDING)
        if self.current_col < self.word_length - 1:
            self.current_col += 1
        return ActionResult.ok()

    def backspace(self) -> ActionResult:
        if not self.is_playing:
            return ActionResult.rejected()
        row = self.grid[self.current_row]
        if row[self.current_col].ch is not None:
            row[self.current_col] = LetterheadTile()
            return ActionResult.ok()
        if self.current_col == 0:
            return ActionResult.rejected()
        self.current_col -= 1
        row[self.current_col] = LetterheadTile()
        return ActionResult.ok()

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------
    @property
    def can_submit(self) -> bool:
        return self.is_playing and all(tile.ch is not None for tile in self.grid[self.current_row])

    def current_guess(self) -> str:
        return "".join(tile.ch or "" for tile in self.grid[self.current_row])

    def submit(self) -> ActionResult:
        if not self.is_playing:
            return ActionResult.rejected()
        if not self.can_submit:
            return ActionResult.rejected(NOT_ENOUGH_LETTERS)
        guess = self.current_guess()
        if guess not in self.allowed:
            return ActionResult.rejected(NOT_IN_WORD_LIST)
        self._apply_guess(guess)
        return ActionResult.ok()

    def _apply_guess(self, guess: str) -> None:
        states = score_guess(guess, self.answer)
        row = self.current_row
        for i, (char, state) in enumerate(zip(guess, states)):
            self.grid[row][i] = LetterheadTile(char, state)
            if state > self.key_states[char]:
                self.key_states[char] = state

        if guess == self.answer:
            self.state = RoundState.WON
        elif row == self.max_rows - 1:
            self.state = RoundState.LOST
        else:
            self.current_row += 1
            self.current_col = 0
        LOGGER.debug("Scored row %d: %s -> %s", row, guess, self.state.value)

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    @property
    def scored_row_count(self) -> int:
        return self.current_row + (0 if self.is_playing else 1)

    def guesses(self) -> List[str]:
        return [
            "".join(tile.ch or "" for tile in row)
            for row in self.grid[: self.scored_row_count]
        ]

    def to_snapshot(self, date: str = "") -> Dict[str, Any]:
        return {
            "date": date or self.date,
            "guesses": self.guesses(),
            "letterhead": self.answer,
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }

    def is_playable_guess(self, guess: str) -> bool:
        return (
            len(guess) == self.word_length
            and all(char in KEYBOARD for char in guess)
            and guess in self.allowed
        )

    def restore(self, snapshot: Dict[str, Any]) -> bool:
        saved_answer = snapshot.get("letterhead")
        if saved_answer and normalize_answer(str(saved_answer)) != self.answer:
            LOGGER.info("Ignoring letterhead snapshot for a different answer")
            return False
        guesses = snapshot.get("guesses") or []
        if not isinstance(guesses, list):
            LOGGER.warning("Ignoring letterhead snapshot with malformed guesses")
            return False
        self.reset()
        for raw in guesses:
            if not self.is_playing:
                break
            guess = normalize_answer(raw) if isinstance(raw, str) else ""
            if not self.is_playable_guess(guess):
                LOGGER.debug("Skipping stored guess %r", raw)
                continue
            self._apply_guess(guess)
        return True

    def share_rows(self) -> List[str]:
        return [
            "".join(SHARE_TILES.get(tile.state, SHARE_TILE_DEFAULT) for tile in row)
            for row in self.grid[: self.scored_row_count]
        ]

    @property
    def answer_revealed(self) -> Optional[str]:
        """The answer, exposed only once the round is lost."""

        return self.answer if self.state == RoundState.LOST else None
