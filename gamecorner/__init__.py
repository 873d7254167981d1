"""Puzzle logic engines for a daily word-game collection.

This package exposes the public API surface via:

- ``gamecorner.engine.sessions.SessionFactory``: loads, hydrates, restores and persists sessions.
- ``gamecorner.engine.generator.PuzzleGenerator``: date-seeded letter sets for the bee game.
- ``gamecorner.data.dictionary.WordDictionary``: loads and queries the word list.
"""

from .data.dictionary import DictionaryConfig, WordDictionary
from .engine.generator import GeneratorConfig, PuzzleGenerator
from .engine.sessions import PuzzleSession, SessionFactory

__all__ = [
    "DictionaryConfig",
    "GeneratorConfig",
    "PuzzleGenerator",
    "PuzzleSession",
    "SessionFactory",
    "WordDictionary",
]

__version__ = "0.1.0"
