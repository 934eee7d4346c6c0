from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
import yaml


VERIFY_MODES = ("size", "sha256")


@dataclass(frozen=True)
class MoveConfig:
    chunk_size: int = 1024 * 1024
    verify: str = "size"
    fsync: bool = False
    preserve_mode: bool = True
    workers: int = 4


@dataclass(frozen=True)
class LoggingConfig:
    logs_dir: Path = Path("~/.pathmover/logs").expanduser()
    verbose: bool = False


@dataclass(frozen=True)
class AppConfig:
    move: MoveConfig = field(default_factory=MoveConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


DEFAULT_CONFIG = AppConfig()


def _as_path(v: Any) -> Path:
    return Path(str(v)).expanduser()


def load_config(path: Path) -> AppConfig:
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping")

    defaults = MoveConfig()
    m = data.get("move", {}) or {}
    move = MoveConfig(
        chunk_size=int(m.get("chunk_size", defaults.chunk_size)),
        verify=str(m.get("verify", defaults.verify)).lower(),
        fsync=bool(m.get("fsync", defaults.fsync)),
        preserve_mode=bool(m.get("preserve_mode", defaults.preserve_mode)),
        workers=int(m.get("workers", defaults.workers)),
    )
    if move.verify not in VERIFY_MODES:
        raise ValueError(f"move.verify must be one of {VERIFY_MODES}, got {move.verify!r}")
    if move.chunk_size <= 0:
        raise ValueError("move.chunk_size must be positive")
    if move.workers <= 0:
        raise ValueError("move.workers must be positive")

    lg = data.get("logging", {}) or {}
    logging_cfg = LoggingConfig(
        logs_dir=_as_path(lg.get("logs_dir", LoggingConfig().logs_dir)),
        verbose=bool(lg.get("verbose", False)),
    )

    return AppConfig(move=move, logging=logging_cfg)
