from __future__ import annotations

import errno
import os
import shutil
from pathlib import Path

# Windows reports ERROR_NOT_SAME_DEVICE (17) in winerror
WINERROR_NOT_SAME_DEVICE = 17


def rename(src: Path, dst: Path):
    os.replace(src, dst)


def is_cross_device(err: OSError) -> bool:
    if err.errno == errno.EXDEV:
        return True
    return getattr(err, "winerror", None) == WINERROR_NOT_SAME_DEVICE


def set_mode(path: Path, mode: int):
    # os.chmod only toggles the read-only flag on Windows; never an error there
    os.chmod(path, mode)


def remove_file(path: Path):
    os.unlink(path)


def remove_tree(path: Path):
    shutil.rmtree(path)
