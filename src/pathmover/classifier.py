from __future__ import annotations

import errno
import enum
import os
import stat
from pathlib import Path
from typing import Union

from .errors import ClassificationError

PathLike = Union[str, "os.PathLike[str]"]

# stat() failures that mean "nothing there" rather than "could not look"
MISSING_ERRNOS = {errno.ENOENT, errno.ENOTDIR}


class PathKind(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"
    MISSING = "missing"
    OTHER = "other"


def classify_path(path: PathLike) -> PathKind:
    p = Path(path)
    try:
        st = os.stat(p)
    except OSError as e:
        if e.errno in MISSING_ERRNOS:
            return PathKind.MISSING
        raise ClassificationError(f"Cannot stat {p}: {e}", path=p, error=e) from e

    if stat.S_ISREG(st.st_mode):
        return PathKind.FILE
    if stat.S_ISDIR(st.st_mode):
        return PathKind.DIRECTORY
    return PathKind.OTHER


def file_mode(path: PathLike) -> int:
    """Permission bits of `path` (symlinks followed)."""
    return stat.S_IMODE(os.stat(path).st_mode)
