"""Unit tests for the background task runner."""

import asyncio
import logging

import pytest

from src.core import background
from src.core.background import BackgroundTaskRunner, get_task_runner, shutdown_task_runner


class TestBackgroundTaskRunner:
    """Tests for BackgroundTaskRunner."""

    @pytest.mark.asyncio
    async def test_submit_does_not_wait(self) -> None:
        """Test that submit returns before the work runs."""
        runner = BackgroundTaskRunner()
        started = asyncio.Event()
        release = asyncio.Event()

        async def work() -> None:
            started.set()
            await release.wait()

        runner.submit(work(), name="work")
        assert runner.pending == 1

        await started.wait()
        release.set()
        await runner.drain()

        assert runner.pending == 0

    @pytest.mark.asyncio
    async def test_failures_are_logged_not_raised(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that an exception inside a task stays inside the task."""
        runner = BackgroundTaskRunner()

        async def broken() -> None:
            raise RuntimeError("cascade exploded")

        with caplog.at_level(logging.ERROR, logger="src.core.background"):
            task = runner.submit(broken(), name="broken")
            await runner.drain()

        assert task.exception() is None
        assert "Background task broken failed" in caplog.text
        assert "cascade exploded" in caplog.text

    @pytest.mark.asyncio
    async def test_drain_waits_for_tasks_submitted_while_draining(self) -> None:
        """Test that work spawned by other background work is awaited too."""
        runner = BackgroundTaskRunner()
        done: list[str] = []

        async def child() -> None:
            await asyncio.sleep(0)
            done.append("child")

        async def parent() -> None:
            runner.submit(child(), name="child")
            done.append("parent")

        runner.submit(parent(), name="parent")
        await runner.drain()

        assert done == ["parent", "child"]

    @pytest.mark.asyncio
    async def test_one_failure_does_not_affect_others(self) -> None:
        """Test that tasks are isolated from each other."""
        runner = BackgroundTaskRunner()
        done: list[str] = []

        async def broken() -> None:
            raise ValueError("nope")

        async def fine() -> None:
            done.append("fine")

        runner.submit(broken(), name="broken")
        runner.submit(fine(), name="fine")
        await runner.drain()

        assert done == ["fine"]


class TestTaskRunnerSingleton:
    """Tests for the module-level runner."""

    def test_get_task_runner_returns_singleton(self) -> None:
        """Test that the same runner is returned each time."""
        assert get_task_runner() is get_task_runner()

    @pytest.mark.asyncio
    async def test_shutdown_drains_and_resets(self) -> None:
        """Test that shutdown waits for pending work and drops the runner."""
        runner = get_task_runner()
        done: list[bool] = []

        async def work() -> None:
            await asyncio.sleep(0)
            done.append(True)

        runner.submit(work(), name="work")
        await shutdown_task_runner()

        assert done == [True]
        assert background._task_runner is None
