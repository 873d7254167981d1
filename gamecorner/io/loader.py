"""Puzzle document retrieval by date or special slug.

Documents live under ``{game}/{YYYY-MM-DD}.json`` and
``{game}/special/{slug}.json`` relative to a source root; the accepted
Letterhead guesses live in ``letterhead/allowed.txt``. Anything missing or
malformed is reported to the caller as ``None``.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from datetime import date as Date
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol, TypeVar

import requests

from ..core.constants import DATE_FORMAT, Game
from ..core.exceptions import DocumentFetchError
from ..core.models import CryptiniDocument, HexiconDocument, LetterheadDocument, MiniDocument
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

PUZZLE_URL_ENV = "GAMECORNER_PUZZLE_URL"
ALLOWED_GUESSES_PATH = "letterhead/allowed.txt"

T = TypeVar("T")


@dataclass
class LoaderConfig:
    timeout_seconds: float = 10.0
    encoding: str = "utf-8"


class PuzzleSource(Protocol):
    def fetch_text(self, relative_path: str) -> Optional[str]:
        """Return the text at ``relative_path`` or ``None`` when absent."""


class DirectoryPuzzleSource:
    """Reads documents from a local directory tree."""

    def __init__(self, root: Path | str, config: Optional[LoaderConfig] = None) -> None:
        self.root = Path(root)
        self.config = config or LoaderConfig()

    def fetch_text(self, relative_path: str) -> Optional[str]:
        path = self.root / relative_path
        if not path.is_file():
            LOGGER.debug("Document missing: %s", path)
            return None
        try:
            return path.read_text(encoding=self.config.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentFetchError(f"Cannot read {path}: {exc}") from exc


class HttpPuzzleSource:
    """Fetches documents relative to a base URL."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        config: Optional[LoaderConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        resolved = base_url or os.environ.get(PUZZLE_URL_ENV)
        if not resolved:
            raise RuntimeError(f"Missing puzzle base URL (pass base_url or set {PUZZLE_URL_ENV})")
        self.base_url = resolved.rstrip("/") + "/"
        self.config = config or LoaderConfig()
        self._session = session or requests.Session()

    def fetch_text(self, relative_path: str) -> Optional[str]:
        url = self.base_url + relative_path.lstrip("/")
        try:
            response = self._session.get(url, timeout=self.config.timeout_seconds)
        except requests.RequestException as exc:
            raise DocumentFetchError(f"Request for {url} failed: {exc}") from exc
        if response.status_code == 404:
            LOGGER.debug("Document missing: %s", url)
            return None
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise DocumentFetchError(f"Request for {url} failed: {exc}") from exc
        response.encoding = response.encoding or self.config.encoding
        return response.text


class PuzzleLoader:
    """Typed access to puzzle documents on top of a :class:`PuzzleSource`."""

    def __init__(self, source: PuzzleSource) -> None:
        self.source = source
        self._allowed_guesses: Optional[List[str]] = None

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------
    def load_hexicon(self, day: Date) -> Optional[HexiconDocument]:
        return self._load(self.dated_path(Game.HEXICON, day), HexiconDocument.from_json)

    def load_mini(self, day: Date) -> Optional[MiniDocument]:
        return self._load(self.dated_path(Game.LUNAMINI, day), MiniDocument.from_json)

    def load_letterhead(self, day: Date) -> Optional[LetterheadDocument]:
        return self._load(self.dated_path(Game.LETTERHEAD, day), LetterheadDocument.from_json)

    def load_special_letterhead(self, slug: str) -> Optional[LetterheadDocument]:
        return self._load(self.special_path(Game.LETTERHEAD, slug), LetterheadDocument.from_json)

    def load_cryptini(self, day: Date) -> Optional[CryptiniDocument]:
        return self._load(self.dated_path(Game.CRYPTINI, day), CryptiniDocument.from_json)

    def load_allowed_guesses(self) -> Optional[List[str]]:
        """Accepted Letterhead guesses, one per line; cached after the first read."""

        if self._allowed_guesses is not None:
            return self._allowed_guesses
        text = self._fetch(ALLOWED_GUESSES_PATH)
        if text is None:
            return None
        self._allowed_guesses = [line.strip() for line in text.splitlines() if line.strip()]
        LOGGER.info("Loaded %d allowed guesses", len(self._allowed_guesses))
        return self._allowed_guesses

    @staticmethod
    def dated_path(game: Game, day: Date) -> str:
        return f"{game.value}/{day.strftime(DATE_FORMAT)}.json"

    @staticmethod
    def special_path(game: Game, slug: str) -> str:
        safe = slug.strip().strip("/")
        if not safe or "/" in safe or safe.startswith("."):
            raise ValueError(f"Invalid special slug: {slug!r}")
        return f"{game.value}/special/{safe}.json"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _fetch(self, relative_path: str) -> Optional[str]:
        try:
            return self.source.fetch_text(relative_path)
        except DocumentFetchError as exc:
            LOGGER.warning("Treating %s as not found: %s", relative_path, exc)
            return None

    def _load(self, relative_path: str, parse: Callable[[Dict[str, Any]], T]) -> Optional[T]:
        text = self._fetch(relative_path)
        if text is None:
            return None
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            LOGGER.warning("Document %s is not valid JSON: %s", relative_path, exc)
            return None
        if not isinstance(payload, dict):
            LOGGER.warning("Document %s is not a JSON object", relative_path)
            return None
        try:
            return parse(payload)
        except (KeyError, TypeError, ValueError) as exc:
            LOGGER.warning("Document %s has an unexpected shape: %s", relative_path, exc)
            return None
