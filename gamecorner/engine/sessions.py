"""Session orchestration: load a document, hydrate an engine, restore, persist.

A :class:`PuzzleSession` owns one engine for one puzzle key. Engine actions
go through :meth:`PuzzleSession.run`, which writes a fresh snapshot after
every accepted action; rejected actions never touch storage.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Any, Callable, Dict, Generic, Optional, Protocol, TypeVar

from ..core.constants import DATE_FORMAT, Game
from ..core.exceptions import PuzzleNotFoundError
from ..core.models import ActionResult
from ..io.dates import DateProvider
from ..io.loader import PuzzleLoader
from ..io.persistence import SnapshotStore
from ..utils.logger import get_logger
from .cryptini import CryptiniSession
from .hexicon import HexiconSession
from .letterhead import LetterheadRound
from .mini_grid import MiniCrossword, MiniGridConfig


LOGGER = get_logger(__name__)


class SnapshotEngine(Protocol):
    def to_snapshot(self, date: str = "") -> Dict[str, Any]: ...

    def restore(self, snapshot: Dict[str, Any]) -> bool: ...

    def reset(self) -> None: ...


E = TypeVar("E", bound=SnapshotEngine)


class PuzzleSession(Generic[E]):
    def __init__(self, game: Game, key: str, engine: E, snapshots: SnapshotStore, restored: bool = False) -> None:
        self.game = game
        self.key = key
        self.engine = engine
        self.snapshots = snapshots
        self.restored = restored

    def run(self, action: Callable[..., ActionResult], *args: Any) -> ActionResult:
        """Invoke an engine action and persist when it was accepted.

        ``action`` must return an :class:`ActionResult`; every engine input,
        submit and reveal method does.
        """

        result = action(*args)
        if result.accepted:
            self.save()
        return result

    def save(self) -> None:
        self.snapshots.save(self.game.value, self.key, self.engine.to_snapshot(self.key))

    def reset(self) -> None:
        self.snapshots.clear(self.game.value, self.key)
        self.engine.reset()
        LOGGER.info("Reset %s:%s", self.game.value, self.key)


class SessionFactory:
    """Opens ready-to-play sessions for each game."""

    def __init__(
        self,
        loader: PuzzleLoader,
        snapshots: SnapshotStore,
        dates: DateProvider,
        mini_config: Optional[MiniGridConfig] = None,
    ) -> None:
        self.loader = loader
        self.snapshots = snapshots
        self.dates = dates
        self.mini_config = mini_config or MiniGridConfig()

    def _resolve(self, day: Optional[Date]) -> Date:
        return day or self.dates.today()

    def _restore(self, game: Game, key: str, engine: SnapshotEngine) -> bool:
        saved = self.snapshots.load(game.value, key)
        if saved is None:
            return False
        try:
            restored = engine.restore(saved)
        except (KeyError, TypeError, ValueError) as exc:
            LOGGER.warning("Discarding unusable snapshot %s:%s: %s", game.value, key, exc)
            engine.reset()
            return False
        LOGGER.info("%s %s:%s", "Restored" if restored else "Skipped stale snapshot for", game.value, key)
        return restored

    def open_hexicon(self, day: Optional[Date] = None) -> PuzzleSession[HexiconSession]:
        day = self._resolve(day)
        key = day.strftime(DATE_FORMAT)
        document = self.loader.load_hexicon(day)
        if document is None:
            raise PuzzleNotFoundError(f"No hexicon puzzle found for {key}")
        engine = HexiconSession.from_document(document)
        restored = self._restore(Game.HEXICON, key, engine)
        return PuzzleSession(Game.HEXICON, key, engine, self.snapshots, restored)

    def open_mini(self, day: Optional[Date] = None) -> PuzzleSession[MiniCrossword]:
        day = self._resolve(day)
        key = day.strftime(DATE_FORMAT)
        document = self.loader.load_mini(day)
        if document is None:
            raise PuzzleNotFoundError(f"No mini puzzle found for {key}")
        engine = MiniCrossword.from_document(document, self.mini_config)
        restored = self._restore(Game.LUNAMINI, key, engine)
        return PuzzleSession(Game.LUNAMINI, key, engine, self.snapshots, restored)

    def open_letterhead(self, day: Optional[Date] = None, slug: Optional[str] = None) -> PuzzleSession[LetterheadRound]:
        if slug and slug.strip():
            key = slug.strip()
            document = self.loader.load_special_letterhead(key)
            missing = f"No special letterhead found for '{key}'"
        else:
            day = self._resolve(day)
            key = day.strftime(DATE_FORMAT)
            document = self.loader.load_letterhead(day)
            missing = f"No letterhead found for {key}"
        if document is None:
            raise PuzzleNotFoundError(missing)
        allowed = self.loader.load_allowed_guesses()
        if allowed is None:
            raise PuzzleNotFoundError("Could not load the letterhead allowed guesses list")
        engine = LetterheadRound.from_document(document, allowed)
        restored = self._restore(Game.LETTERHEAD, key, engine)
        return PuzzleSession(Game.LETTERHEAD, key, engine, self.snapshots, restored)

    def open_cryptini(self, day: Optional[Date] = None) -> PuzzleSession[CryptiniSession]:
        day = self._resolve(day)
        key = day.strftime(DATE_FORMAT)
        document = self.loader.load_cryptini(day)
        if document is None:
            raise PuzzleNotFoundError(f"No cryptic found for {key}")
        engine = CryptiniSession.from_document(document)
        restored = self._restore(Game.CRYPTINI, key, engine)
        return PuzzleSession(Game.CRYPTINI, key, engine, self.snapshots, restored)
