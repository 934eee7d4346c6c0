from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import LoggingConfig
from .materialize import ensure_dir

LOG_FILE = "pathmover.log"


def setup_logging(
    logs_dir: Optional[Path] = None,
    verbose: bool = False,
    cfg: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Attach a console handler and a rotating file handler to the `pathmover`
    logger. Every module logs through a child of it, so one call covers the
    whole package. Calling it again replaces the previous handlers.
    """
    cfg = cfg or LoggingConfig()
    logs_dir = Path(logs_dir) if logs_dir is not None else cfg.logs_dir
    verbose = verbose or cfg.verbose

    ensure_dir(logs_dir)
    logger = logging.getLogger("pathmover")
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")

    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if verbose else logging.INFO)
    console.setFormatter(fmt)
    logger.addHandler(console)

    file_handler = RotatingFileHandler(
        logs_dir / LOG_FILE,
        maxBytes=2_000_000,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)

    return logger
