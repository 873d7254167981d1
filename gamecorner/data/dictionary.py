"""Word list loading and letter-set queries for puzzle generation."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Set

from ..core.exceptions import DictionaryLoadError
from ..utils.logger import get_logger
from .normalization import is_ascii_word, normalize_word


LOGGER = get_logger(__name__)


@dataclass
class DictionaryConfig:
    """Configuration for dictionary loading and filtering."""

    path: Optional[Path | str] = None
    min_length: int = 2
    max_length: int = 24


class WordDictionary:
    """Holds normalized lowercase words, indexed by length and letter set.

    The source is a plain text file with one word per line; blank lines and
    ``#`` comments are ignored. Entries with anything other than A-Z after
    normalization are skipped.
    """

    def __init__(self, config: DictionaryConfig, words: Optional[Iterable[str]] = None) -> None:
        self.config = config
        self._words: Set[str] = set()
        self._by_length: Dict[int, List[str]] = defaultdict(list)
        self._letter_sets: Dict[str, FrozenSet[str]] = {}
        if words is None:
            words = self._read_source()
        self._hydrate(words)

    @classmethod
    def from_words(cls, words: Iterable[str], min_length: int = 2, max_length: int = 24) -> "WordDictionary":
        return cls(DictionaryConfig(min_length=min_length, max_length=max_length), words=words)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def _read_source(self) -> List[str]:
        if self.config.path is None:
            raise DictionaryLoadError("No word list path configured")
        source = Path(self.config.path)
        if not source.exists():
            raise DictionaryLoadError(f"Missing word list: {source}")
        try:
            text = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DictionaryLoadError(str(exc)) from exc
        lines = []
        for line in text.splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            lines.append(line)
        return lines

    def _hydrate(self, words: Iterable[str]) -> None:
        skipped = 0
        for raw in words:
            word = normalize_word(raw)
            if not is_ascii_word(word):
                skipped += 1
                continue
            if len(word) < self.config.min_length or len(word) > self.config.max_length:
                continue
            if word in self._words:
                continue
            self._words.add(word)
            self._by_length[len(word)].append(word)
            self._letter_sets[word] = frozenset(word)
        # Stable iteration order keeps seeded generation reproducible.
        for entries in self._by_length.values():
            entries.sort()
        LOGGER.debug("Loaded %d words (%d skipped)", len(self._words), skipped)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def contains(self, word: str) -> bool:
        return normalize_word(word) in self._words

    def iter_length(self, length: int) -> Iterable[str]:
        return self._by_length.get(length, [])

    def iter_all(self) -> List[str]:
        """All words, sorted by length then alphabetically."""

        return [word for length in sorted(self._by_length) for word in self._by_length[length]]

    def letter_set(self, word: str) -> FrozenSet[str]:
        return self._letter_sets.get(word) or frozenset(normalize_word(word))

    def pangram_candidates(self, min_length: int, distinct_letters: int = 7) -> List[str]:
        """Words of at least ``min_length`` with exactly ``distinct_letters`` letters."""

        return [
            word
            for word in self.iter_all()
            if len(word) >= min_length and len(self._letter_sets[word]) == distinct_letters
        ]

    def words_within(self, letters: Iterable[str], required: str, min_length: int) -> List[str]:
        """Words of at least ``min_length`` spelled from ``letters`` and containing ``required``."""

        allowed = frozenset(letters)
        return [
            word
            for word in self.iter_all()
            if len(word) >= min_length
            and required in self._letter_sets[word]
            and self._letter_sets[word] <= allowed
        ]
