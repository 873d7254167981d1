"""Shared helpers for word and answer normalization."""

from __future__ import annotations

import re

NON_ASCII_LETTER_RE = re.compile(r"[^A-Za-z]")


def letters_only(text: str) -> str:
    """Return ``text`` with every character that is not a letter removed."""

    if not text:
        return ""
    return "".join(char for char in text.strip() if char.isalpha())


def normalize_word(text: str) -> str:
    """Return the lowercase, letters-only form used for bee-game words."""

    return letters_only(text).lower()


def normalize_answer(text: str) -> str:
    """Return the uppercase, letters-only form used for grid and guess answers."""

    return letters_only(text).upper()


def is_ascii_word(text: str) -> bool:
    """True when ``text`` is non-empty and made of A-Z letters only."""

    return bool(text) and NON_ASCII_LETTER_RE.search(text) is None


__all__ = ["letters_only", "normalize_word", "normalize_answer", "is_ascii_word"]
