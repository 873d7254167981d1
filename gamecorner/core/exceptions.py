"""Custom exception hierarchy for the puzzle engines."""


class GameCornerError(Exception):
    """Base exception for engine and adapter failures."""


class ContentIntegrityError(GameCornerError):
    """Raised when a puzzle document is malformed or contradicts itself."""


class PuzzleNotFoundError(GameCornerError):
    """Raised when no document exists for the requested date or slug."""


class GenerationExhaustedError(GameCornerError):
    """Raised when the generator cannot find a playable letter set."""


class DictionaryLoadError(GameCornerError):
    """Raised when the word list cannot be read."""


class DocumentFetchError(GameCornerError):
    """Raised by a document source when the transport itself fails."""
