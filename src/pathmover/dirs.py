from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from . import copying, fsops
from .classifier import PathKind, PathLike, classify_path
from .config import MoveConfig
from .errors import (
    DeleteError,
    DestinationExistsError,
    DestinationInsideSourceError,
    MoveError,
    NotADirectoryError,
)
from .materialize import ensure_parent
from .models import MoveOutcome

logger = logging.getLogger(__name__)


def _check_paths(src: Path, dst: Path):
    kind = classify_path(src)
    if kind is not PathKind.DIRECTORY:
        raise NotADirectoryError(f"Not a directory ({kind.value}): {src}", path=src)

    if classify_path(dst) is not PathKind.MISSING:
        raise DestinationExistsError(f"Destination already exists: {dst}", path=src, destination=dst)

    src_abs = Path(os.path.realpath(src))
    dst_abs = Path(os.path.realpath(dst))
    if dst_abs == src_abs or src_abs in dst_abs.parents:
        raise DestinationInsideSourceError(
            f"Destination {dst} is inside source {src}", path=src, destination=dst
        )


def copy_tree(source: PathLike, destination: PathLike, cfg: Optional[MoveConfig] = None) -> MoveOutcome:
    cfg = cfg or MoveConfig()
    src, dst = Path(source), Path(destination)
    _check_paths(src, dst)
    ensure_parent(dst)
    stats = copying.copy_tree_data(src, dst, cfg)
    return MoveOutcome(src, dst, PathKind.DIRECTORY, "copy", stats)


def move_dir(source: PathLike, destination: PathLike, cfg: Optional[MoveConfig] = None) -> MoveOutcome:
    """
    Move a directory tree.

    `destination` must not exist. A plain rename is tried first; across devices
    the tree is copied in full and `source` is deleted only once the copy is
    complete. If the copy fails partway the source stays intact and whatever
    was already copied is left at `destination` for the caller to clean up.
    """
    cfg = cfg or MoveConfig()
    src, dst = Path(source), Path(destination)
    _check_paths(src, dst)
    ensure_parent(dst)

    try:
        fsops.rename(src, dst)
        logger.debug(f"Renamed {src} -> {dst}")
        return MoveOutcome(src, dst, PathKind.DIRECTORY, "rename")
    except OSError as e:
        if not fsops.is_cross_device(e):
            logger.error(f"Rename {src} -> {dst} failed: {e}")
            raise

    logger.info(f"Cross-device move, copying tree {src} -> {dst}")
    try:
        stats = copying.copy_tree_data(src, dst, cfg)
    except MoveError as e:
        logger.error(f"Copying {src} -> {dst} failed, source left in place: {e}")
        raise

    try:
        fsops.remove_tree(src)
    except OSError as e:
        logger.error(f"Copied {src} -> {dst} but could not remove the source: {e}")
        raise DeleteError(
            f"Could not remove {src} after copying it to {dst}: {e}", path=src, destination=dst, error=e
        ) from e

    return MoveOutcome(src, dst, PathKind.DIRECTORY, "copy", stats)
