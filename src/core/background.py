"""Detached background work that must not block a request's response."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)


class BackgroundTaskRunner:
    """Runs fire-and-forget coroutines on the current event loop.

    Submitted work is never awaited by the caller. Every task gets its own
    error boundary: exceptions are logged and dropped, never re-raised.
    Strong references are kept until a task finishes so the loop cannot
    garbage-collect it mid-flight.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    def submit(self, coro: Coroutine[Any, Any, Any], name: str) -> asyncio.Task:
        """Schedule a coroutine without waiting for it.

        Args:
            coro: The coroutine to run.
            name: Short label used in log lines.

        Returns:
            asyncio.Task: The scheduled task.
        """
        task = asyncio.create_task(self._run(coro, name), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug("Background task submitted: %s", name)
        return task

    async def _run(self, coro: Coroutine[Any, Any, Any], name: str) -> None:
        try:
            await coro
        except Exception:
            logger.exception("Background task %s failed", name)
        else:
            logger.debug("Background task finished: %s", name)

    @property
    def pending(self) -> int:
        """Number of tasks still running."""
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait until every submitted task, including ones submitted meanwhile, is done."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


# Global singleton instance
_task_runner: BackgroundTaskRunner | None = None


def get_task_runner() -> BackgroundTaskRunner:
    """Get or create the global background task runner."""
    global _task_runner
    if _task_runner is None:
        _task_runner = BackgroundTaskRunner()
    return _task_runner


async def shutdown_task_runner() -> None:
    """Wait for in-flight background work. Call at app shutdown."""
    global _task_runner
    if _task_runner:
        if _task_runner.pending:
            logger.info("Waiting for %d background tasks", _task_runner.pending)
        await _task_runner.drain()
        _task_runner = None
