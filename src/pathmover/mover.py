from __future__ import annotations

from pathlib import Path
from typing import Optional

from .classifier import PathKind, PathLike, classify_path
from .config import MoveConfig
from .dirs import copy_tree, move_dir
from .errors import SourceNotFoundError, UnsupportedPathTypeError
from .files import copy_file, move_file
from .models import MoveOutcome


def _classify_source(src: Path) -> PathKind:
    kind = classify_path(src)
    if kind is PathKind.MISSING:
        raise SourceNotFoundError(f"Source does not exist: {src}", path=src)
    if kind is PathKind.OTHER:
        raise UnsupportedPathTypeError(f"Neither a file nor a directory: {src}", path=src)
    return kind


def move(source: PathLike, destination: PathLike, cfg: Optional[MoveConfig] = None) -> MoveOutcome:
    """Move a file or a directory, whichever `source` is."""
    src = Path(source)
    if _classify_source(src) is PathKind.FILE:
        return move_file(src, destination, cfg)
    return move_dir(src, destination, cfg)


def copy(source: PathLike, destination: PathLike, cfg: Optional[MoveConfig] = None) -> MoveOutcome:
    src = Path(source)
    if _classify_source(src) is PathKind.FILE:
        return copy_file(src, destination, cfg)
    return copy_tree(src, destination, cfg)
