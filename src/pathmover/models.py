from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .classifier import PathKind


@dataclass(frozen=True)
class TreeStats:
    files: int = 0
    directories: int = 0
    bytes_copied: int = 0


@dataclass(frozen=True)
class MoveOutcome:
    source: Path
    destination: Path
    kind: PathKind
    strategy: str  # "rename" or "copy"
    stats: TreeStats = TreeStats()
