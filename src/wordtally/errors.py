# src/wordtally/errors.py
from typing import Optional


class WordTallyError(Exception):
    """Base class for every error raised by the word-frequency pipeline."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class EmptyPathError(WordTallyError, ValueError):
    """A path argument was None, empty or whitespace-only."""


class InputNotFoundError(WordTallyError, FileNotFoundError):
    pass


class OutputDirectoryNotFoundError(WordTallyError, FileNotFoundError):
    pass


class WritePermissionError(WordTallyError, PermissionError):
    pass


class ExtractionError(WordTallyError):
    """Reading or decoding the input file failed."""


class AggregationError(WordTallyError):
    """Counting failed; no partial table is produced."""


class ProcessingError(WordTallyError):
    pass


class WriteError(WordTallyError):
    pass
