# src/batch_pacer/cli/main.py

"""
CLI entrypoint (demo batch).

Initializes logging, builds a Scheduler from settings, then runs a batch of
simulated jobs and logs progress/ETA as they complete.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any

from ..config import Settings, get_settings
from ..logging_setup import setup_logging
from ..tasks.task_models import TaskStatus
from ..tasks.task_scheduler import Scheduler

logger = logging.getLogger(__name__)

DEMO_FAILURE_RATE = 0.1


def create_scheduler(*, settings: Settings | None = None) -> Scheduler:
    """Build a Scheduler from settings (falls back to get_settings())."""
    if settings is None:
        settings = get_settings()
    return Scheduler(settings.concurrency, window_size=settings.window_size)


class DemoJobError(RuntimeError):
    pass


async def _simulated_job(index: int, delay: float, fail: bool) -> int:
    await asyncio.sleep(delay)
    if fail:
        raise DemoJobError(f"job {index} failed")
    return index


async def run_demo(settings: Settings, *, seed: int | None = None) -> Scheduler:
    """Submit settings.demo_items simulated jobs, wait for them and return the scheduler."""
    rng = random.Random(seed)
    scheduler = create_scheduler(settings=settings)

    def on_done(status: TaskStatus, result: Any, tag: Any) -> None:
        logger.info(
            "%s done: %d completed, %d queued, ~%.2fs/item, ETA %.2fs",
            tag,
            status.process_count,
            status.remain_count,
            status.process,
            status.remain,
        )

    def on_error(status: TaskStatus, error: BaseException, tag: Any) -> None:
        logger.warning("%s failed: %s (%d queued)", tag, error, status.remain_count)

    scheduler.on_completion(on_done)
    scheduler.on_error(on_error)

    for i in range(settings.demo_items):
        delay = rng.uniform(0.0, settings.demo_max_delay)
        fail = rng.random() < DEMO_FAILURE_RATE
        scheduler.submit(lambda i=i, delay=delay, fail=fail: _simulated_job(i, delay, fail), tag=f"job-{i}")

    await scheduler.drain()

    logger.info(
        "Batch finished: %d ok, %d failed in %.2fs (limit=%d)",
        scheduler.completed_count,
        scheduler.failed_count,
        scheduler.elapsed,
        scheduler.concurrency_limit,
    )
    return scheduler


def main() -> None:
    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s demo (%d items)...", settings.app_name, settings.demo_items)

    try:
        asyncio.run(run_demo(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")


if __name__ == "__main__":
    main()
