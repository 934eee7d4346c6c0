import hashlib

import pytest

from pathmover.utils import create_dir, create_file, empty_dir, file_fingerprint_sha256, random_name

from conftest import IS_WINDOWS, mode_of


def test_random_name_is_unique():
    names = {random_name() for _ in range(100)}
    assert len(names) == 100


def test_create_file_with_mode_and_parents(scratch):
    p = create_file(scratch / "a" / "b.txt", "hello", 0o776)
    assert p.read_text(encoding="utf-8") == "hello"
    if not IS_WINDOWS:
        assert mode_of(p) == 0o776


@pytest.mark.skipif(IS_WINDOWS, reason="mode bits")
def test_create_dir_with_mode(scratch):
    d = create_dir(scratch / "x" / "y", 0o750)
    assert d.is_dir()
    assert mode_of(d) == 0o750


def test_empty_dir(scratch):
    create_file(scratch / "f", "x")
    create_file(scratch / "sub" / "deep" / "g", "y")
    empty_dir(scratch)
    assert scratch.is_dir()
    assert list(scratch.iterdir()) == []


def test_empty_dir_creates_missing(scratch):
    assert empty_dir(scratch / "new").is_dir()


def test_fingerprint(scratch):
    p = create_file(scratch / "data.bin", b"\x00\x01" * 1000)
    assert file_fingerprint_sha256(p, chunk_size=3) == hashlib.sha256(b"\x00\x01" * 1000).hexdigest()
