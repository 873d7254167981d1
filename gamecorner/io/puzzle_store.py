"""Writes generated puzzles as documents the loader can serve.

Every accepted generation is stored as ``{root}/hexicon/{date}.json`` in the
same shape :class:`~gamecorner.io.loader.DirectoryPuzzleSource` reads back,
with a small ``generation`` block recording how it was produced.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict

from ..core.constants import Game
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from ..engine.generator import GeneratedPuzzle, GeneratorConfig


LOGGER = get_logger(__name__)

DEFAULT_ARCHIVE_DIR = Path("local_db/puzzles")


class PuzzleArchive:
    """Save generator output as structured JSON documents."""

    def __init__(self, root: Path | str = DEFAULT_ARCHIVE_DIR) -> None:
        self.root = Path(root)

    def save_hexicon(
        self,
        puzzle: "GeneratedPuzzle",
        config: "GeneratorConfig",
        overwrite: bool = False,
    ) -> Path:
        """Persist a generated bee puzzle and return the document path."""

        folder = self.root / Game.HEXICON.value
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / f"{puzzle.date}.json"
        if path.exists() and not overwrite:
            raise FileExistsError(f"Puzzle already exists: {path}")

        doc: Dict[str, Any] = puzzle.to_document().to_json()
        doc["generation"] = {
            "created_at": datetime.now(timezone.utc).isoformat(),
            "seed": puzzle.seed,
            "target_score": puzzle.target_score,
            "min_word_length": puzzle.min_word_length,
            "config": self._serialize_config(config),
        }
        path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        LOGGER.info("Puzzle saved: %s (%d words)", path, len(puzzle.words))
        return path

    @staticmethod
    def _serialize_config(config: "GeneratorConfig") -> Dict[str, Any]:
        return {
            "min_word_length": config.min_word_length,
            "min_valid_words": config.min_valid_words,
            "max_valid_words": config.max_valid_words,
            "pangram_attempts": config.pangram_attempts,
            "fallback_iterations": config.fallback_iterations,
            "target_fraction": config.target_fraction,
            "salt": config.salt,
        }
