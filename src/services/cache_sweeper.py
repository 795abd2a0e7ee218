"""Background sweeps for expired tour-cache rows and sessions.

Each job is an ``asyncio`` task that sleeps for its interval and then
runs its sweep.  Jobs are started from the FastAPI lifespan and cancelled
on shutdown.  A failing sweep is logged and retried at the next interval;
it never kills the loop.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from src.utils.logging import get_logger


@dataclass(frozen=True)
class SweepJob:
    """A named sweep and how often (in seconds) to run it."""

    name: str
    interval: float
    sweep: Callable[[], Awaitable[int]]


class PeriodicSweeper:
    """Runs :class:`SweepJob` loops as asyncio tasks."""

    def __init__(self, jobs: list[SweepJob]) -> None:
        self._jobs = jobs
        self._tasks: list[asyncio.Task[None]] = []
        self._logger = get_logger(__name__)

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    def start(self) -> None:
        if self.running:
            return
        self._tasks = [
            asyncio.create_task(self._run(job), name=f"sweep:{job.name}") for job in self._jobs
        ]
        self._logger.info("sweeper_started", jobs=[job.name for job in self._jobs])

    async def stop(self) -> None:
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        self._logger.info("sweeper_stopped")

    async def run_once(self) -> dict[str, int]:
        """Run every sweep immediately and return the rows removed per job."""
        return {job.name: await self._sweep(job) for job in self._jobs}

    async def _run(self, job: SweepJob) -> None:
        while True:
            await asyncio.sleep(job.interval)
            await self._sweep(job)

    async def _sweep(self, job: SweepJob) -> int:
        try:
            removed = await job.sweep()
        except Exception as exc:
            self._logger.exception("sweep_failed", job=job.name, error_type=type(exc).__name__)
            return 0
        self._logger.debug("sweep_completed", job=job.name, removed=removed)
        return removed
