from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Dict

logger = logging.getLogger(__name__)


class ScanScheduler:
    """Runs at most one scan per document; a newer scan cancels the older one."""

    def __init__(self) -> None:
        self._tasks: Dict[str, asyncio.Task[None]] = {}

    def schedule(self, uri: str, job: Callable[[], Awaitable[None]]) -> asyncio.Task[None]:
        self.cancel(uri)
        task = asyncio.get_running_loop().create_task(job(), name=f"scan:{uri}")
        self._tasks[uri] = task
        task.add_done_callback(lambda finished: self._forget(uri, finished))
        return task

    def cancel(self, uri: str) -> None:
        task = self._tasks.pop(uri, None)
        if task is not None and not task.done():
            task.cancel()

    async def join(self) -> None:
        while self._tasks:
            await asyncio.gather(*self._tasks.values(), return_exceptions=True)

    async def stop(self) -> None:
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    def _forget(self, uri: str, task: asyncio.Task[None]) -> None:
        if self._tasks.get(uri) is task:
            del self._tasks[uri]
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Scan for %s crashed", uri, exc_info=exc)
