"""
Bounded worker pool for candidate resolution.

Every item is put on an asyncio queue in list order, followed by one stop
sentinel per worker. A fixed number of long-lived worker tasks drain the
queue; ``run`` returns only after the queue has been joined, which is the
single wait barrier of a scan.
"""

import asyncio
import os
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Generic, Optional, TypeVar

from .scan_logger import ScanLogger

T = TypeVar("T")

ProgressCallback = Callable[[int, int], None]


def worker_count(concurrency: int, total: int) -> int:
    """
    Number of workers for a run.

    ``concurrency`` <= 0 means one per CPU. Never more workers than items,
    and always at least one.
    """
    wanted = concurrency if concurrency > 0 else (os.cpu_count() or 1)
    return max(1, min(wanted, total))


class ProgressCounter:
    """Completed-item counter shared by all workers."""

    def __init__(self, total: int, callback: Optional[ProgressCallback] = None) -> None:
        self._total = total
        self._done = 0
        self._callback = callback
        self._lock = asyncio.Lock()

    @property
    def total(self) -> int:
        return self._total

    @property
    def done(self) -> int:
        return self._done

    async def increment(self) -> int:
        async with self._lock:
            self._done += 1
            if self._callback:
                self._callback(self._done, self._total)
            return self._done


class WorkerPool(Generic[T]):
    """
    Runs an async handler over a list of items with bounded concurrency.

    The handler is expected to handle its own errors. If it raises anyway,
    the error is logged and the item still counts as completed, so the
    barrier is always released.
    """

    def __init__(
        self,
        handler: Callable[[T], Awaitable[Any]],
        concurrency: int = 0,
        progress_callback: Optional[ProgressCallback] = None,
        logger: Optional[ScanLogger] = None,
    ) -> None:
        """
        Initialize the pool.

        Args:
            handler: Coroutine function called once per item
            concurrency: Number of workers (<= 0 means one per CPU)
            progress_callback: Called with (done, total) after each item
            logger: Optional logger for handler failures
        """
        self._handler = handler
        self._concurrency = concurrency
        self._progress_callback = progress_callback
        self._logger = logger

    async def run(self, items: Sequence[T]) -> int:
        """
        Handle every item and wait for all of them.

        Returns:
            Number of workers that were started (0 for an empty input)
        """
        total = len(items)
        if total == 0:
            return 0

        workers_needed = worker_count(self._concurrency, total)
        counter = ProgressCounter(total, self._progress_callback)

        queue: "asyncio.Queue[Optional[T]]" = asyncio.Queue()
        for item in items:
            queue.put_nowait(item)
        for _ in range(workers_needed):
            queue.put_nowait(None)

        if self._logger:
            self._logger.debug(
                "WorkerPool",
                "Pool started",
                {"items": total, "workers": workers_needed},
            )

        async def worker() -> None:
            while True:
                item = await queue.get()
                try:
                    if item is None:
                        return
                    try:
                        await self._handler(item)
                    except Exception as e:
                        if self._logger:
                            self._logger.log_error(
                                "WorkerPool",
                                "Handler failed, item counted as done",
                                error=e,
                                additional_data={"item": repr(item)},
                            )
                    await counter.increment()
                finally:
                    queue.task_done()

        workers = [asyncio.create_task(worker()) for _ in range(workers_needed)]
        await queue.join()
        await asyncio.gather(*workers)

        if self._logger:
            self._logger.debug(
                "WorkerPool",
                "Pool finished",
                {"items": total, "done": counter.done},
            )
        return workers_needed
