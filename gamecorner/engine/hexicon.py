"""Spelling-bee style word finder: validation, scoring and session state."""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from ..core.constants import (
    HEXICON_LENGTH_TIERS,
    HEXICON_LETTER_COUNT,
    HEXICON_LONG_WORD_POINTS,
    HEXICON_MIN_WORD_LENGTH,
    HEXICON_PANGRAM_BONUS,
)
from ..core.exceptions import ContentIntegrityError
from ..core.models import ActionResult, HexiconDocument, LetterBucket
from ..data.normalization import normalize_word
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

SNAPSHOT_VERSION = 1


# ----------------------------------------------------------------------
# Scoring rules
# ----------------------------------------------------------------------
def is_pangram(word: str, letters: Iterable[str]) -> bool:
    return set(word) == set(letters)


def is_submittable(entry: str, letters: Iterable[str], required: str, min_length: int) -> bool:
    """Check the shape of an entry before looking it up in the word list."""

    allowed = set(letters)
    return len(entry) >= min_length and required in entry and all(char in allowed for char in entry)


def score_word(
    word: str,
    letters: Iterable[str],
    min_length: int = HEXICON_MIN_WORD_LENGTH,
    pangram_bonus: int = HEXICON_PANGRAM_BONUS,
) -> int:
    """Points for one word: a length tier plus a flat bonus for pangrams."""

    word = normalize_word(word)
    if len(word) < min_length:
        return 0
    points = HEXICON_LENGTH_TIERS.get(len(word), HEXICON_LONG_WORD_POINTS)
    if is_pangram(word, letters):
        points += pangram_bonus
    return points


def target_score(words: Iterable[str], letters: Iterable[str], min_length: int = HEXICON_MIN_WORD_LENGTH) -> int:
    letter_set = frozenset(letters)
    return sum(score_word(word, letter_set, min_length) for word in words)


# ----------------------------------------------------------------------
# Puzzle
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class HexiconPuzzle:
    """A curated letter set with its list of accepted words."""

    required: str
    letters: Tuple[str, ...]
    valid_words: FrozenSet[str]
    pangram: str = ""
    min_word_length: int = HEXICON_MIN_WORD_LENGTH
    date: str = ""
    themed: bool = False
    tagline: Optional[str] = None

    @classmethod
    def from_document(cls, document: HexiconDocument, min_word_length: int = HEXICON_MIN_WORD_LENGTH) -> "HexiconPuzzle":
        letters: List[str] = []
        for raw in document.letters:
            letter = normalize_word(raw)
            if len(letter) != 1:
                raise ContentIntegrityError(f"Invalid letter entry {raw!r}")
            if letter not in letters:
                letters.append(letter)
        if len(letters) != HEXICON_LETTER_COUNT:
            raise ContentIntegrityError(
                f"Puzzle must contain exactly {HEXICON_LETTER_COUNT} unique letters, got {len(letters)}"
            )
        required = normalize_word(document.required)
        if required not in letters:
            raise ContentIntegrityError(f"Required letter {document.required!r} is not in the letter set")

        # Required letter first; the remaining letters keep document order.
        ordered = (required,) + tuple(letter for letter in letters if letter != required)
        words = frozenset(word for word in (normalize_word(w) for w in document.words) if word)
        for word in sorted(words):
            if not is_submittable(word, letters, required, min_word_length):
                raise ContentIntegrityError(
                    f"Word '{word}' cannot be played with required '{required}' and letters {''.join(ordered)}"
                )
        return cls(
            required=required,
            letters=ordered,
            valid_words=words,
            pangram=normalize_word(document.pangram),
            min_word_length=min_word_length,
            date=document.date,
            themed=document.themed,
            tagline=document.tagline,
        )

    @property
    def letter_set(self) -> FrozenSet[str]:
        return frozenset(self.letters)

    @property
    def target_score(self) -> int:
        return target_score(self.valid_words, self.letters, self.min_word_length)

    @property
    def pangram_title(self) -> str:
        return f"{self.pangram} ({self.required})" if self.pangram else ""

    def score(self, word: str) -> int:
        return score_word(word, self.letters, self.min_word_length)


# ----------------------------------------------------------------------
# Session
# ----------------------------------------------------------------------
class HexiconSession:
    """Found words, running score and input buffer for one puzzle."""

    def __init__(self, puzzle: HexiconPuzzle) -> None:
        self.puzzle = puzzle
        self.letters: List[str] = list(puzzle.letters)
        self.found: Set[str] = set()
        self.score = 0
        self.title_revealed = False
        self.current_entry = ""
        self._letter_set = puzzle.letter_set
        self._target = puzzle.target_score

    @classmethod
    def from_document(cls, document: HexiconDocument) -> "HexiconSession":
        return cls(HexiconPuzzle.from_document(document))

    # ------------------------------------------------------------------
    # Input buffer
    # ------------------------------------------------------------------
    def append(self, char: str) -> ActionResult:
        char = char.lower()
        if char not in self._letter_set:
            return ActionResult.rejected()
        self.current_entry += char
        return ActionResult.ok()

    def backspace(self) -> ActionResult:
        if not self.current_entry:
            return ActionResult.rejected()
        self.current_entry = self.current_entry[:-1]
        return ActionResult.ok()

    def clear_entry(self) -> ActionResult:
        self.current_entry = ""
        return ActionResult.ok()

    def shuffle(self, rng: random.Random) -> List[str]:
        """Reorder the outer letters, keeping the required letter first."""

        ring = [letter for letter in self.letters if letter != self.puzzle.required]
        rng.shuffle(ring)
        self.letters = [self.puzzle.required] + ring
        return list(self.letters)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------
    @property
    def can_submit(self) -> bool:
        return is_submittable(
            self.current_entry, self._letter_set, self.puzzle.required, self.puzzle.min_word_length
        )

    def submit(self) -> ActionResult:
        """Consume the current entry and try to add it to the found words."""

        submittable = self.can_submit
        word = normalize_word(self.current_entry)
        self.clear_entry()
        if not submittable:
            return ActionResult.rejected()
        return self.submit_word(word)

    def submit_word(self, raw: str) -> ActionResult:
        word = normalize_word(raw)
        if not is_submittable(word, self._letter_set, self.puzzle.required, self.puzzle.min_word_length):
            return ActionResult.rejected()
        if word not in self.puzzle.valid_words or word in self.found:
            return ActionResult.rejected()

        points = self.puzzle.score(word)
        self.found.add(word)
        self.score += points
        if word == self.puzzle.pangram:
            self.title_revealed = True
        LOGGER.debug("Accepted %r for %d points (total %d)", word, points, self.score)
        return ActionResult.ok(points)

    def reset(self) -> None:
        self.found.clear()
        self.score = 0
        self.title_revealed = False
        self.current_entry = ""

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------
    @property
    def target_score(self) -> int:
        return self._target

    @property
    def score_ratio(self) -> float:
        return self.score / self._target if self._target > 0 else 0.0

    def progress_buckets(self) -> List[LetterBucket]:
        """Found/total counts per first letter, rebuilt from ``found``."""

        totals = Counter(word[0] for word in self.puzzle.valid_words)
        found = Counter(word[0] for word in self.found if word in self.puzzle.valid_words)
        return [LetterBucket(letter=letter, found=found[letter], total=totals[letter]) for letter in sorted(totals)]

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    def to_snapshot(self, date: str = "") -> Dict[str, Any]:
        return {
            "version": SNAPSHOT_VERSION,
            "date": date or self.puzzle.date,
            "pangram": self.puzzle.pangram,
            "required": self.puzzle.required,
            "found": sorted(self.found, key=lambda word: (len(word), word)),
            "score": self.score,
            "target_score": self._target,
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }

    def is_compatible(self, snapshot: Dict[str, Any]) -> bool:
        pangram = str(snapshot.get("pangram") or "").lower()
        required = str(snapshot.get("required") or "").lower()
        return pangram == self.puzzle.pangram and required == self.puzzle.required

    def restore(self, snapshot: Dict[str, Any]) -> bool:
        """Replay a stored snapshot; returns False when it belongs to another puzzle."""

        if not self.is_compatible(snapshot):
            LOGGER.info("Ignoring hexicon snapshot for a different puzzle")
            return False
        stored = snapshot.get("found") or []
        if not isinstance(stored, list):
            LOGGER.warning("Ignoring hexicon snapshot with malformed found words")
            return False
        found = {normalize_word(word) for word in stored if isinstance(word, str)}
        self.found = {word for word in found if word in self.puzzle.valid_words}
        self.score = sum(self.puzzle.score(word) for word in self.found)
        self.title_revealed = self.puzzle.pangram in self.found
        self.current_entry = ""
        return True
