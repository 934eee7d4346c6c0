from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from .classifier import PathKind, PathLike, classify_path
from .errors import ClassificationError, DirectoryCreationError

logger = logging.getLogger(__name__)


def ensure_dir(path: PathLike) -> List[Path]:
    """
    Create `path` and any missing ancestors, like `mkdir -p`.

    Returns the directories that were actually created, outermost first, so a
    second call on the same path returns an empty list. Existing directories
    are left exactly as they are (mode included).
    """
    target = Path(path)

    missing: List[Path] = []
    probe = target
    while True:
        try:
            kind = classify_path(probe)
        except ClassificationError as e:
            raise DirectoryCreationError(
                f"Cannot inspect {probe}: {e.error}", path=probe, error=e.error
            ) from e
        if kind is PathKind.DIRECTORY:
            break
        if kind is not PathKind.MISSING:
            raise DirectoryCreationError(
                f"Path exists and is not a directory: {probe}", path=probe
            )
        missing.append(probe)
        if probe.parent == probe:
            break
        probe = probe.parent

    created: List[Path] = []
    for d in reversed(missing):
        try:
            d.mkdir()
        except FileExistsError as e:
            # lost a race with another creator; fine as long as it is a directory
            if d.is_dir():
                continue
            raise DirectoryCreationError(
                f"Path exists and is not a directory: {d}", path=d, error=e
            ) from e
        except OSError as e:
            raise DirectoryCreationError(
                f"Cannot create directory {d}: {e}", path=d, error=e
            ) from e
        created.append(d)

    if created:
        logger.info(f"Created directories: {', '.join(str(d) for d in created)}")
    return created


def ensure_parent(path: PathLike) -> List[Path]:
    return ensure_dir(Path(path).parent)
