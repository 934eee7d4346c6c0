from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .config import DEFAULT_CONFIG, load_config
from .dirs import move_dir
from .errors import MoveError
from .files import move_file
from .logging_setup import setup_logging
from .models import MoveOutcome
from .mover import copy, move
from .utils import empty_dir

COMMANDS = {
    "move": move,
    "move-file": move_file,
    "move-dir": move_dir,
    "copy": copy,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathmover",
        description="Move files and directories, falling back to copy+delete across devices.",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    for name, help_text in (
        ("move", "Move a file or directory"),
        ("move-file", "Move a single file"),
        ("move-dir", "Move a directory tree"),
        ("copy", "Copy a file or directory tree"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("source")
        p.add_argument("destination")

    empty_p = sub.add_parser("empty", help="Remove everything inside a directory")
    empty_p.add_argument("directory")

    for p in sub.choices.values():
        p.add_argument("--config", help="Path to config.yaml")
        p.add_argument("--verbose", action="store_true", help="Verbose logging")

    return parser


def _result_table(outcome: Optional[MoveOutcome], source: str, destination: str, error: str) -> Table:
    table = Table(title="pathmover")
    table.add_column("Source")
    table.add_column("Destination")
    table.add_column("Kind")
    table.add_column("Strategy")
    table.add_column("Files", justify="right")
    table.add_column("Bytes", justify="right")
    table.add_column("Status")
    table.add_column("Error")

    if outcome is None:
        table.add_row(source, destination, "", "", "", "", "FAILED", error[:80])
    else:
        table.add_row(
            str(outcome.source),
            str(outcome.destination),
            outcome.kind.value,
            outcome.strategy,
            str(outcome.stats.files),
            str(outcome.stats.bytes_copied),
            "OK",
            "",
        )
    return table


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    cfg = load_config(Path(args.config)) if args.config else DEFAULT_CONFIG
    logger = setup_logging(cfg=cfg.logging, verbose=bool(args.verbose))
    console = Console()

    if args.cmd == "empty":
        try:
            empty_dir(Path(args.directory))
        except (MoveError, OSError) as e:
            logger.error(f"Emptying {args.directory} failed: {e}")
            console.print(f"[red]FAILED[/red] {e}")
            return 1
        console.print(f"Emptied {args.directory}")
        return 0

    op = COMMANDS[args.cmd]
    outcome: Optional[MoveOutcome] = None
    error = ""
    try:
        outcome = op(args.source, args.destination, cfg.move)
        logger.info(f"{args.cmd} {outcome.source} -> {outcome.destination} via {outcome.strategy}")
    except (MoveError, OSError) as e:
        logger.error(f"{args.cmd} {args.source} -> {args.destination} failed: {e}")
        error = str(e)

    console.print(_result_table(outcome, args.source, args.destination, error))
    return 0 if outcome is not None else 1


if __name__ == "__main__":
    raise SystemExit(main())
