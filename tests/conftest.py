from __future__ import annotations

import errno
import os
import sys
from pathlib import Path

import pytest

from pathmover import fsops
from pathmover.utils import create_dir, create_file, random_name

IS_WINDOWS = sys.platform.startswith("win")

# relative layout of the dummy tree used by the directory tests
TREE_DIRS = ["foo", "bar", "baz", os.path.join("baz", "foo"), os.path.join("baz", "bar", "foo")]
TREE_FILES = [
    os.path.join("bar", "one.txt"),
    os.path.join("bar", "two.bin"),
    os.path.join("baz", "bar", "three.txt"),
    "four",
    "five.md",
]
DIR_MODES = [0o777, 0o775, 0o755, 0o750, 0o700]
FILE_MODES = [0o776, 0o666, 0o644, 0o600, 0o755]


def mode_of(path: Path) -> int:
    return os.stat(path).st_mode & 0o7777


@pytest.fixture
def scratch(tmp_path: Path) -> Path:
    """Per-test scratch directory; nothing is shared between tests."""
    return create_dir(tmp_path / "tmp")


@pytest.fixture
def cross_device(monkeypatch):
    """Make every rename fail the way it does across devices."""
    calls = []

    def fake_rename(src, dst):
        calls.append((src, dst))
        raise OSError(errno.EXDEV, "Invalid cross-device link", str(src))

    monkeypatch.setattr(fsops, "rename", fake_rename)
    return calls


@pytest.fixture(params=["same-device", "cross-device"])
def device_mode(request):
    if request.param == "cross-device":
        request.getfixturevalue("cross_device")
    return request.param


def make_dummy_file(scratch: Path, mode: int = 0o776) -> dict:
    path = scratch / random_name()
    data = random_name(32)
    create_file(path, data, mode)
    return {"path": path, "data": data, "mode": mode}


def make_dummy_tree(scratch: Path) -> dict:
    root = scratch / random_name()
    expected = {}
    for i, rel in enumerate(TREE_DIRS):
        mode = DIR_MODES[i % len(DIR_MODES)]
        create_dir(root / rel, mode)
        expected[rel] = {"mode": mode}
    for i, rel in enumerate(TREE_FILES):
        mode = FILE_MODES[i % len(FILE_MODES)]
        data = random_name(16)
        create_file(root / rel, data, mode)
        expected[rel] = {"mode": mode, "data": data}
    return {"path": root, "map": expected}


def assert_tree_matches(new_root: Path, dummy: dict):
    for rel, info in dummy["map"].items():
        target = new_root / rel
        if "data" in info:
            assert target.is_file()
            assert target.read_text(encoding="utf-8") == info["data"]
        else:
            assert target.is_dir()
        if not IS_WINDOWS:
            assert mode_of(target) == info["mode"]
