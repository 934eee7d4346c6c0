from __future__ import annotations

import logging
import os
import shutil
import uuid
from collections import deque
from pathlib import Path
from typing import Deque, FrozenSet, List, Tuple

from . import fsops
from .classifier import PathKind, classify_path, file_mode
from .config import MoveConfig
from .errors import (
    ClassificationError,
    CopyError,
    DestinationExistsError,
    UnsupportedPathTypeError,
)
from .models import TreeStats
from .utils import file_fingerprint_sha256

logger = logging.getLogger(__name__)

BINARY_FLAG = getattr(os, "O_BINARY", 0)


def _discard(path: Path):
    try:
        fsops.remove_file(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove partial copy {path}: {e}")


def _verify(src: Path, dst: Path, expected_size: int, cfg: MoveConfig):
    actual_size = os.stat(dst).st_size
    if actual_size != expected_size:
        raise CopyError(
            f"Size mismatch after copy: {dst} has {actual_size} bytes, expected {expected_size}",
            path=src,
            destination=dst,
        )
    if cfg.verify == "sha256":
        if file_fingerprint_sha256(src, cfg.chunk_size) != file_fingerprint_sha256(dst, cfg.chunk_size):
            raise CopyError(f"Checksum mismatch after copy: {dst}", path=src, destination=dst)


def _temp_sibling(dst: Path) -> Path:
    return dst.with_name(f".{dst.name}.tmp-{uuid.uuid4().hex}")


def _reject_same_file(st: os.stat_result, src: Path, dst: Path):
    try:
        dst_st = os.stat(dst)
    except OSError:
        return
    if os.path.samestat(st, dst_st):
        raise CopyError(f"{src} and {dst} are the same file", path=src, destination=dst)


def copy_file_data(src: Path, dst: Path, cfg: MoveConfig, exclusive: bool = False) -> int:
    """
    Copy the bytes and permission bits of `src` to `dst` and verify the result.

    With `exclusive=True` the data is written straight to `dst` and an existing
    `dst` raises DestinationExistsError. Otherwise it is written to a temporary
    sibling which replaces `dst` only once verified, so an existing `dst` is
    untouched when the copy fails. On failure only the file this call created
    is removed; `src` is never touched. Returns the byte count.
    """
    try:
        st = os.stat(src)
    except OSError as e:
        raise CopyError(f"Cannot read {src}: {e}", path=src, destination=dst, error=e) from e
    _reject_same_file(st, src, dst)

    try:
        fin = open(src, "rb")
    except OSError as e:
        raise CopyError(f"Cannot read {src}: {e}", path=src, destination=dst, error=e) from e

    target = dst if exclusive else _temp_sibling(dst)
    flags = os.O_WRONLY | os.O_CREAT | os.O_EXCL | BINARY_FLAG

    with fin:
        try:
            fd = os.open(target, flags, 0o600)
        except FileExistsError as e:
            raise DestinationExistsError(
                f"Destination already exists: {target}", path=src, destination=dst, error=e
            ) from e
        except OSError as e:
            raise CopyError(f"Cannot create {target}: {e}", path=src, destination=dst, error=e) from e

        done = False
        try:
            with os.fdopen(fd, "wb") as fout:
                shutil.copyfileobj(fin, fout, cfg.chunk_size)
                if cfg.fsync:
                    fout.flush()
                    os.fsync(fout.fileno())
            _verify(src, target, st.st_size, cfg)
            if cfg.preserve_mode:
                fsops.set_mode(target, st.st_mode & 0o7777)
            if target != dst:
                # same directory, so never cross-device
                os.replace(target, dst)
            done = True
        except OSError as e:
            raise CopyError(f"Copy {src} -> {dst} failed: {e}", path=src, destination=dst, error=e) from e
        finally:
            if not done:
                _discard(target)

    logger.debug(f"Copied {src} -> {dst} ({st.st_size} bytes)")
    return st.st_size


def _identity(path: Path) -> Tuple[int, int]:
    st = os.stat(path)
    return (st.st_dev, st.st_ino)


def _make_dir(target: Path, src: Path, cfg: MoveConfig):
    # owner-only until the tree is complete; real modes are applied at the end
    mode = 0o700 if cfg.preserve_mode else 0o777
    try:
        os.mkdir(target, mode)
    except FileExistsError as e:
        raise DestinationExistsError(
            f"Destination already exists: {target}", path=src, destination=target, error=e
        ) from e
    except OSError as e:
        raise CopyError(f"Cannot create directory {target}: {e}", path=src, destination=target, error=e) from e


def copy_tree_data(src_root: Path, dst_root: Path, cfg: MoveConfig) -> TreeStats:
    """
    Recreate the directory tree `src_root` at `dst_root`.

    Walks breadth-first over an explicit queue, in name order, so a failure
    always leaves the same partial destination behind. `dst_root` and every
    path below it must not exist yet. Directory modes are applied deepest
    first once all files are in place.
    """
    try:
        root_mode = file_mode(src_root)
        root_ident = _identity(src_root)
    except OSError as e:
        raise CopyError(f"Cannot read {src_root}: {e}", path=src_root, destination=dst_root, error=e) from e

    _make_dir(dst_root, src_root, cfg)
    dir_modes: List[Tuple[Path, int]] = [(dst_root, root_mode)]
    # each item carries the identities of the directories above it, for cycle checks
    pending: Deque[Tuple[Path, Path, FrozenSet[Tuple[int, int]]]] = deque(
        [(src_root, dst_root, frozenset([root_ident]))]
    )
    n_files = 0
    n_bytes = 0

    while pending:
        src_dir, dst_dir, ancestors = pending.popleft()
        try:
            with os.scandir(src_dir) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise CopyError(f"Cannot list {src_dir}: {e}", path=src_dir, destination=dst_dir, error=e) from e

        for entry in entries:
            src = Path(entry.path)
            target = dst_dir / entry.name
            try:
                kind = classify_path(src)
            except ClassificationError as e:
                raise CopyError(str(e), path=src, destination=target, error=e.error) from e

            if kind is PathKind.DIRECTORY:
                try:
                    ident = _identity(src)
                    mode = file_mode(src)
                except OSError as e:
                    raise CopyError(f"Cannot read {src}: {e}", path=src, destination=target, error=e) from e
                if ident in ancestors:
                    raise CopyError(f"Directory cycle at {src}", path=src, destination=target)
                _make_dir(target, src, cfg)
                dir_modes.append((target, mode))
                pending.append((src, target, ancestors | {ident}))
            elif kind is PathKind.FILE:
                n_bytes += copy_file_data(src, target, cfg, exclusive=True)
                n_files += 1
            elif kind is PathKind.MISSING:
                raise UnsupportedPathTypeError(f"Dangling symbolic link: {src}", path=src, destination=target)
            else:
                raise UnsupportedPathTypeError(
                    f"Neither a file nor a directory: {src}", path=src, destination=target
                )

    if cfg.preserve_mode:
        for d, mode in reversed(dir_modes):
            try:
                fsops.set_mode(d, mode)
            except OSError as e:
                raise CopyError(f"Cannot set mode on {d}: {e}", path=src_root, destination=d, error=e) from e

    logger.debug(f"Copied tree {src_root} -> {dst_root}: {n_files} files, {len(dir_modes)} directories")
    return TreeStats(files=n_files, directories=len(dir_modes), bytes_copied=n_bytes)
