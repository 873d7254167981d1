"""Per-game progress badges computed from stored snapshots."""

from __future__ import annotations

from typing import Any, Callable, Dict, NamedTuple, Tuple

from ..core.constants import LETTERHEAD_MAX_ROWS, Game
from ..utils.logger import get_logger
from .persistence import SnapshotStore


LOGGER = get_logger(__name__)

# Share of the target score at which the bee game counts as complete.
HEXICON_COMPLETE_RATIO = 0.66


class Progress(NamedTuple):
    """``level`` runs 0 (untouched) to 3 (complete); -1 means unknown."""

    level: int
    show_title: bool


UNKNOWN = Progress(-1, False)


def _cryptini(state: Dict[str, Any]) -> Progress:
    if state.get("solved") and not state.get("revealed"):
        return Progress(3, True)
    if state.get("revealed"):
        return Progress(2, True)
    if (state.get("hints_revealed") or 0) > 0:
        return Progress(1, True)
    return Progress(0, True)


def _letterhead(state: Dict[str, Any]) -> Progress:
    guesses = state.get("guesses") or []
    answer = state.get("letterhead")
    if answer and answer in guesses:
        return Progress(3, True)
    if len(guesses) >= LETTERHEAD_MAX_ROWS:
        return Progress(2, True)
    if guesses:
        return Progress(1, False)
    return Progress(0, False)


def _hexicon(state: Dict[str, Any]) -> Progress:
    found = state.get("found") or []
    show_title = bool(state.get("pangram")) and state.get("pangram") in found
    target = state.get("target_score") or 0
    if target > 0 and (state.get("score") or 0) >= target * HEXICON_COMPLETE_RATIO:
        return Progress(3, show_title)
    if found:
        return Progress(1, show_title)
    return Progress(0, False)


def _lunamini(state: Dict[str, Any]) -> Progress:
    if state.get("solved"):
        return Progress(3, True)
    if any(entry for entry in state.get("entries") or []):
        return Progress(1, True)
    return Progress(0, True)


class ProgressChecker:
    """Summarizes a stored snapshot without hydrating the puzzle."""

    _RULES: Dict[str, Tuple[Callable[[Dict[str, Any]], Progress], Progress]] = {
        Game.CRYPTINI.value: (_cryptini, Progress(0, True)),
        Game.LETTERHEAD.value: (_letterhead, Progress(0, False)),
        Game.HEXICON.value: (_hexicon, Progress(0, False)),
        Game.LUNAMINI.value: (_lunamini, Progress(0, True)),
    }

    def __init__(self, snapshots: SnapshotStore) -> None:
        self.snapshots = snapshots

    def progress(self, game: str, key: str) -> Progress:
        game = game.value if isinstance(game, Game) else game
        rule = self._RULES.get(game)
        if rule is None:
            return UNKNOWN
        evaluate, fresh = rule
        state = self.snapshots.load(game, key)
        if state is None:
            return fresh
        try:
            return evaluate(state)
        except (TypeError, ValueError) as exc:
            LOGGER.warning("Cannot summarize %s:%s: %s", game, key, exc)
            return UNKNOWN
