"""Deterministic, date-seeded letter-set generation for the bee game.

Strategy:
  1. Pangram pass: shuffle the dictionary words with exactly seven distinct
     letters and try each as a letter set, every letter in turn as the
     required one.
  2. Fallback pass: draw random seven-letter sets under a fixed iteration cap.

The first combination whose valid-word count sits inside the playable band
wins. Everything random flows from one generator seeded by the date, so a
date (plus salt) always yields the same puzzle.
"""

from __future__ import annotations

import hashlib
import random
import string
from dataclasses import dataclass, field
from datetime import date as Date
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from ..core.constants import DATE_FORMAT, HEXICON_LETTER_COUNT, HEXICON_MIN_WORD_LENGTH
from ..core.exceptions import GenerationExhaustedError
from ..core.models import HexiconDocument
from ..data.dictionary import WordDictionary
from ..utils.logger import get_logger
from .hexicon import is_pangram, target_score


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    min_word_length: int = HEXICON_MIN_WORD_LENGTH
    min_valid_words: int = 10
    max_valid_words: int = 250
    pangram_attempts: int = 200
    fallback_iterations: int = 5000
    target_fraction: float = 0.3
    salt: Optional[str] = None


@dataclass
class GeneratedPuzzle:
    date: str
    seed: str
    required: str
    letters: List[str]
    min_word_length: int
    target_score: int
    words: List[str] = field(default_factory=list)
    pangram: str = ""

    def to_document(self) -> HexiconDocument:
        return HexiconDocument(
            date=self.date,
            pangram=self.pangram,
            letters=list(self.letters),
            required=self.required,
            words=list(self.words),
        )


def seed_string(day: Date, salt: Optional[str] = None) -> str:
    stamp = day.strftime(DATE_FORMAT)
    return stamp if salt is None else f"{stamp}:{salt}"


def stable_seed(text: str) -> int:
    """First four bytes of the SHA-256 digest as a little-endian signed int."""

    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "little", signed=True)


def round_half_away(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


class PuzzleGenerator:
    """Picks a playable letter set for a date from a word dictionary."""

    def __init__(self, dictionary: WordDictionary, config: Optional[GeneratorConfig] = None) -> None:
        self.dictionary = dictionary
        self.config = config or GeneratorConfig()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate_for_date(self, day: Date, salt: Optional[str] = None) -> GeneratedPuzzle:
        salt = salt if salt is not None else self.config.salt
        seed_text = seed_string(day, salt)
        rng = random.Random(stable_seed(seed_text))
        min_len = self.config.min_word_length

        candidates = self.dictionary.pangram_candidates(min_len, HEXICON_LETTER_COUNT)
        rng.shuffle(candidates)
        LOGGER.info(
            "Generating puzzle for %s from %d pangram candidates", seed_text, len(candidates)
        )
        for word in candidates[: self.config.pangram_attempts]:
            letters = list(dict.fromkeys(word))
            puzzle = self._try_letter_set(letters, rng, day, seed_text, pangram=word)
            if puzzle is not None:
                return puzzle

        LOGGER.info("No pangram-based set qualified; falling back to random letter sets")
        for _ in range(self.config.fallback_iterations):
            letters = self._random_letter_set(rng)
            puzzle = self._try_letter_set(letters, rng, day, seed_text)
            if puzzle is not None:
                return puzzle

        raise GenerationExhaustedError(f"Could not find a playable set for {seed_text}")

    def valid_words(self, letters: Sequence[str], required: str) -> List[str]:
        return self.dictionary.words_within(letters, required, self.config.min_word_length)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _try_letter_set(
        self,
        letters: List[str],
        rng: random.Random,
        day: Date,
        seed_text: str,
        pangram: Optional[str] = None,
    ) -> Optional[GeneratedPuzzle]:
        order = list(letters)
        rng.shuffle(order)
        for required in order:
            valid = self.valid_words(letters, required)
            if not self.config.min_valid_words <= len(valid) <= self.config.max_valid_words:
                continue
            ring = [letter for letter in letters if letter != required]
            rng.shuffle(ring)
            total = target_score(valid, letters, self.config.min_word_length)
            target = round_half_away(Decimal(total) * Decimal(str(self.config.target_fraction)))
            chosen_pangram = pangram or next((w for w in valid if is_pangram(w, letters)), "")
            LOGGER.info(
                "Playable set %s (required %r): %d words, target %d",
                "".join(sorted(letters)),
                required,
                len(valid),
                target,
            )
            return GeneratedPuzzle(
                date=day.strftime(DATE_FORMAT),
                seed=seed_text,
                required=required,
                letters=[required] + ring,
                min_word_length=self.config.min_word_length,
                target_score=target,
                words=valid,
                pangram=chosen_pangram if chosen_pangram in valid else "",
            )
        return None

    @staticmethod
    def _random_letter_set(rng: random.Random) -> List[str]:
        letters: List[str] = []
        while len(letters) < HEXICON_LETTER_COUNT:
            letter = rng.choice(string.ascii_lowercase)
            if letter not in letters:
                letters.append(letter)
        return letters
