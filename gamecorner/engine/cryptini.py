"""Single cryptic clue guesser with progressive hints."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..core.models import ActionResult, CryptiniDocument
from ..data.normalization import normalize_word
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class CryptiniSession:
    def __init__(self, document: CryptiniDocument) -> None:
        self.clue = document.clue
        self.answer = document.answer
        self.enumeration = document.enumeration
        self.explanation = document.explanation
        self.author = document.author
        self.date = document.date
        self.hints: List[str] = list(dict.fromkeys(document.hints))
        self._answer_norm = normalize_word(document.answer)
        self._alternatives = {normalize_word(alt) for alt in document.alternatives if normalize_word(alt)}
        self.current_entry = ""
        self.solved = False
        self.revealed = False
        self.hints_revealed = 0

    @classmethod
    def from_document(cls, document: CryptiniDocument) -> "CryptiniSession":
        return cls(document)

    def append(self, char: str) -> ActionResult:
        if not char:
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

    def is_answer(self, guess: str) -> bool:
        norm = normalize_word(guess)
        return norm == self._answer_norm or norm in self._alternatives

    def submit(self) -> ActionResult:
        correct = self.is_answer(self.current_entry)
        self.clear_entry()
        if not correct:
            return ActionResult.rejected()
        self.solved = True
        return ActionResult.ok()

    def reveal(self) -> ActionResult:
        self.revealed = True
        self.solved = True
        self.clear_entry()
        return ActionResult.ok()

    @property
    def has_more_hints(self) -> bool:
        return self.hints_revealed < len(self.hints)

    @property
    def visible_hints(self) -> List[str]:
        return self.hints[: self.hints_revealed]

    def reveal_hint(self) -> ActionResult:
        if not self.has_more_hints:
            return ActionResult.rejected()
        self.hints_revealed += 1
        return ActionResult.ok()

    def reset(self) -> None:
        self.solved = False
        self.revealed = False
        self.hints_revealed = 0
        self.clear_entry()

    def to_snapshot(self, date: str = "") -> Dict[str, Any]:
        return {
            "date": date or self.date,
            "solved": self.solved,
            "revealed": self.revealed,
            "hints_revealed": self.hints_revealed,
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }

    def restore(self, snapshot: Dict[str, Any]) -> bool:
        self.solved = bool(snapshot.get("solved", False))
        self.revealed = bool(snapshot.get("revealed", False))
        hints = snapshot.get("hints_revealed")
        hints = hints if isinstance(hints, int) else 0
        self.hints_revealed = min(max(hints, 0), len(self.hints))
        # A solved puzzle shows its answer in the entry box.
        self.current_entry = self.answer if self.solved and not self.revealed else ""
        return True

    @property
    def display_answer(self) -> Optional[str]:
        return self.answer if self.solved else None
