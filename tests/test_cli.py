# tests/test_cli.py

from __future__ import annotations

import logging

import pytest

from batch_pacer.cli.main import create_scheduler, run_demo
from batch_pacer.logging_setup import setup_logging


def test_create_scheduler_uses_settings(settings) -> None:
    scheduler = create_scheduler(settings=settings)
    assert scheduler.concurrency_limit == 2


@pytest.mark.asyncio
async def test_run_demo_accounts_for_every_item(settings) -> None:
    scheduler = await run_demo(settings, seed=3)

    assert scheduler.is_idle
    assert scheduler.completed_count + scheduler.failed_count == settings.demo_items


@pytest.mark.asyncio
async def test_run_demo_with_empty_batch(settings) -> None:
    settings.demo_items = 0
    scheduler = await run_demo(settings, seed=1)
    assert scheduler.completed_count == 0


def test_setup_logging_writes_everything_to_file(tmp_path, restore_root_logging) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs", console_level=logging.INFO)

    logging.getLogger("batch_pacer.tests").debug("debug line")
    logging.getLogger("some.thirdparty").warning("noisy line")
    for h in logging.getLogger().handlers:
        h.flush()

    text = log_file.read_text("utf-8")
    assert log_file.name == "pacer.log"
    assert "debug line" in text
    assert "noisy line" in text
