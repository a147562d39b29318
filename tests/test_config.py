# tests/test_config.py

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

from batch_pacer.config import Settings, get_settings

_KEYS = (
    "APP_NAME",
    "LOG_LEVEL",
    "LOG_DIR",
    "CONCURRENCY",
    "WINDOW_SIZE",
    "DEMO_ITEMS",
    "DEMO_MAX_DELAY",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for k in _KEYS:
        monkeypatch.delenv(f"PACER_{k}", raising=False)
    return monkeypatch


def test_defaults(clean_env) -> None:
    s = Settings.from_env()
    assert s.app_name == "batch-pacer"
    assert s.log_level == "INFO"
    assert s.log_dir == Path(".local/pacer")
    assert s.concurrency == 3
    assert s.window_size == 10
    assert s.demo_items == 20
    assert s.demo_max_delay == pytest.approx(0.5)


def test_values_from_env(clean_env, tmp_path: Path) -> None:
    clean_env.setenv("PACER_APP_NAME", "nightly-export")
    clean_env.setenv("PACER_LOG_LEVEL", "debug")
    clean_env.setenv("PACER_LOG_DIR", str(tmp_path))
    clean_env.setenv("PACER_CONCURRENCY", "8")
    clean_env.setenv("PACER_WINDOW_SIZE", "25")
    clean_env.setenv("PACER_DEMO_ITEMS", "5")

    s = Settings.from_env()
    assert s.app_name == "nightly-export"
    assert s.log_level == "DEBUG"
    assert s.log_dir == tmp_path
    assert s.concurrency == 8
    assert s.window_size == 25
    assert s.demo_items == 5


@pytest.mark.parametrize("raw", ["0", "-4", "many", ""])
def test_bad_or_non_positive_numbers_fall_back(clean_env, raw: str) -> None:
    clean_env.setenv("PACER_CONCURRENCY", raw)
    clean_env.setenv("PACER_WINDOW_SIZE", raw)

    s = Settings.from_env()
    assert s.concurrency == 3
    assert s.window_size == 10


def test_settings_are_frozen() -> None:
    s = get_settings()
    with pytest.raises(AttributeError):
        s.concurrency = 99  # type: ignore[misc]


def test_importing_the_library_does_not_touch_the_environment(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("PACER_CONCURRENCY=42\nSTRAY_SECRET=leaked\n", "utf-8")
    src = Path(__file__).resolve().parents[1] / "src"
    env = {k: v for k, v in os.environ.items() if not k.startswith("PACER_") and k != "STRAY_SECRET"}
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(src), env.get("PYTHONPATH")]))

    code = (
        "import os, sys\n"
        "import batch_pacer\n"
        "print('batch_pacer.config' in sys.modules, 'dotenv' in sys.modules, 'STRAY_SECRET' in os.environ)\n"
    )
    out = subprocess.run(
        [sys.executable, "-c", code],
        cwd=tmp_path,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )
    assert out.stdout.split() == ["False", "False", "False"]
