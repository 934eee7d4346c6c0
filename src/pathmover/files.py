from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from . import copying, fsops
from .classifier import PathKind, PathLike, classify_path
from .config import MoveConfig
from .errors import DeleteError, NotAFileError
from .materialize import ensure_parent
from .models import MoveOutcome, TreeStats

logger = logging.getLogger(__name__)


def _require_file(src: Path):
    kind = classify_path(src)
    if kind is not PathKind.FILE:
        raise NotAFileError(f"Not a file ({kind.value}): {src}", path=src)


def copy_file(source: PathLike, destination: PathLike, cfg: Optional[MoveConfig] = None) -> MoveOutcome:
    cfg = cfg or MoveConfig()
    src, dst = Path(source), Path(destination)
    _require_file(src)
    ensure_parent(dst)
    size = copying.copy_file_data(src, dst, cfg)
    return MoveOutcome(src, dst, PathKind.FILE, "copy", TreeStats(files=1, bytes_copied=size))


def move_file(source: PathLike, destination: PathLike, cfg: Optional[MoveConfig] = None) -> MoveOutcome:
    """
    Move a single file, renaming when possible.

    If the rename fails because `destination` is on another device, the file is
    copied (content and mode), the copy is verified, and only then is `source`
    removed. Any other rename failure is raised unchanged. An existing
    destination file is replaced.
    """
    cfg = cfg or MoveConfig()
    src, dst = Path(source), Path(destination)
    _require_file(src)
    ensure_parent(dst)

    try:
        fsops.rename(src, dst)
        logger.debug(f"Renamed {src} -> {dst}")
        return MoveOutcome(src, dst, PathKind.FILE, "rename")
    except OSError as e:
        if not fsops.is_cross_device(e):
            logger.error(f"Rename {src} -> {dst} failed: {e}")
            raise

    logger.info(f"Cross-device move, copying {src} -> {dst}")
    size = copying.copy_file_data(src, dst, cfg)

    try:
        fsops.remove_file(src)
    except OSError as e:
        logger.error(f"Copied {src} -> {dst} but could not remove the source: {e}")
        raise DeleteError(
            f"Could not remove {src} after copying it to {dst}: {e}", path=src, destination=dst, error=e
        ) from e

    return MoveOutcome(src, dst, PathKind.FILE, "copy", TreeStats(files=1, bytes_copied=size))
