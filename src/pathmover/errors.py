from __future__ import annotations

from pathlib import Path
from typing import Optional


class MoveError(Exception):
    """Base error for the project."""

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        destination: Optional[Path] = None,
        error: Optional[OSError] = None,
    ):
        super().__init__(message)
        self.path = path
        self.destination = destination
        self.error = error


class SourceNotFoundError(MoveError):
    pass


class NotAFileError(MoveError):
    pass


class NotADirectoryError(MoveError):  # noqa: A001
    pass


class UnsupportedPathTypeError(MoveError):
    pass


class ClassificationError(MoveError):
    pass


class DirectoryCreationError(MoveError):
    pass


class DestinationExistsError(MoveError):
    pass


class DestinationInsideSourceError(MoveError):
    pass


class CopyError(MoveError):
    """Read, write or chmod failed while copying; `error` holds the OSError."""


class DeleteError(MoveError):
    """
    The copy succeeded but the source could not be removed.
    The destination is complete; the source is still (partly) on disk.
    """
