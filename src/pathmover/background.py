from __future__ import annotations

import asyncio
import functools
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from typing import Callable, Optional

from .classifier import PathLike
from .config import MoveConfig
from .dirs import copy_tree, move_dir
from .files import copy_file, move_file
from .models import MoveOutcome
from .mover import copy, move

# callback(error, outcome): error is None on success, outcome is None on failure
Callback = Callable[[Optional[BaseException], Optional[MoveOutcome]], None]


class MoveExecutor:
    """
    Runs the blocking operations on a thread pool and hands back Futures.

    The Future resolves to the same MoveOutcome, or raises the same exception,
    as the blocking call would. Nothing is locked: moves touching the same
    paths must not be submitted concurrently.
    """

    def __init__(self, cfg: Optional[MoveConfig] = None, max_workers: Optional[int] = None):
        self.cfg = cfg or MoveConfig()
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers or self.cfg.workers,
            thread_name_prefix="pathmover",
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.shutdown()

    def shutdown(self, wait: bool = True):
        self._pool.shutdown(wait=wait)

    def _submit(self, fn, source: PathLike, destination: PathLike, callback: Optional[Callback]) -> Future:
        fut = self._pool.submit(fn, source, destination, self.cfg)
        if callback is not None:

            def _done(f: Future):
                if f.cancelled():
                    callback(CancelledError(), None)
                    return
                err = f.exception()
                callback(err, None if err else f.result())

            fut.add_done_callback(_done)
        return fut

    def move(self, source: PathLike, destination: PathLike, callback: Optional[Callback] = None) -> Future:
        return self._submit(move, source, destination, callback)

    def move_file(self, source: PathLike, destination: PathLike, callback: Optional[Callback] = None) -> Future:
        return self._submit(move_file, source, destination, callback)

    def move_dir(self, source: PathLike, destination: PathLike, callback: Optional[Callback] = None) -> Future:
        return self._submit(move_dir, source, destination, callback)

    def copy(self, source: PathLike, destination: PathLike, callback: Optional[Callback] = None) -> Future:
        return self._submit(copy, source, destination, callback)

    def copy_file(self, source: PathLike, destination: PathLike, callback: Optional[Callback] = None) -> Future:
        return self._submit(copy_file, source, destination, callback)

    def copy_tree(self, source: PathLike, destination: PathLike, callback: Optional[Callback] = None) -> Future:
        return self._submit(copy_tree, source, destination, callback)


async def _run_blocking(fn, source: PathLike, destination: PathLike, cfg: Optional[MoveConfig]) -> MoveOutcome:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(fn, source, destination, cfg))


async def move_async(source: PathLike, destination: PathLike, cfg: Optional[MoveConfig] = None) -> MoveOutcome:
    return await _run_blocking(move, source, destination, cfg)


async def move_file_async(source: PathLike, destination: PathLike, cfg: Optional[MoveConfig] = None) -> MoveOutcome:
    return await _run_blocking(move_file, source, destination, cfg)


async def move_dir_async(source: PathLike, destination: PathLike, cfg: Optional[MoveConfig] = None) -> MoveOutcome:
    return await _run_blocking(move_dir, source, destination, cfg)
