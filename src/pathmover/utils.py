from __future__ import annotations

import hashlib
import os
import secrets
import shutil

from pathlib import Path
from typing import Optional, Union

from .fsops import set_mode
from .materialize import ensure_dir, ensure_parent


def random_name(n_bytes: int = 8) -> str:
    return secrets.token_hex(n_bytes)


def create_file(path: Path, data: Union[str, bytes] = b"", mode: Optional[int] = None) -> Path:
    """
    Write `data` to `path`, creating missing parent directories.
    `mode` is applied with chmod afterwards so the umask does not interfere.
    """
    p = Path(path)
    ensure_parent(p)
    if isinstance(data, str):
        data = data.encode("utf-8")
    p.write_bytes(data)
    if mode is not None:
        set_mode(p, mode)
    return p


def create_dir(path: Path, mode: Optional[int] = None) -> Path:
    p = Path(path)
    ensure_dir(p)
    if mode is not None:
        set_mode(p, mode)
    return p


def empty_dir(path: Path) -> Path:
    """Remove everything inside `path`, creating it if missing."""
    p = Path(path)
    ensure_dir(p)
    for entry in os.scandir(p):
        if entry.is_dir(follow_symlinks=False):
            shutil.rmtree(entry.path)
        else:
            os.unlink(entry.path)
    return p


def file_fingerprint_sha256(path: Path, chunk_size: int = 1024 * 1024) -> str:
    """sha256 over the whole file content."""
    h = hashlib.sha256()
    with Path(path).open("rb") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            h.update(chunk)
    return h.hexdigest()
