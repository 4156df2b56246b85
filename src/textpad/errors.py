"""Error hierarchy shared by the storage, session, and host layers."""

from __future__ import annotations

import os
from typing import Optional, Union

PathLike = Union[str, "os.PathLike[str]"]


class TextpadError(RuntimeError):
    """Base class for every fatal textpad error."""


class FileReadError(TextpadError):
    """Raised when an existing file cannot be decoded as UTF-8 text."""

    def __init__(self, message: str, *, path: PathLike) -> None:
        super().__init__(message)
        self.path = os.fspath(path)


class FileCreateError(TextpadError):
    """Raised when the target file cannot be created."""

    def __init__(self, message: str, *, path: PathLike) -> None:
        super().__init__(message)
        self.path = os.fspath(path)


class FileWriteError(TextpadError):
    """Raised when the buffer cannot be written back, even after a retry."""

    def __init__(self, message: str, *, path: PathLike, retried: bool = False) -> None:
        super().__init__(message)
        self.path = os.fspath(path)
        self.retried = retried


class TerminalError(TextpadError):
    """Raised when the terminal host fails to start, run, or restore."""

    def __init__(self, message: str, *, phase: str, code: Optional[int] = None) -> None:
        super().__init__(message)
        self.phase = phase
        self.code = code


__all__ = [
    "TextpadError",
    "FileReadError",
    "FileCreateError",
    "FileWriteError",
    "TerminalError",
]
