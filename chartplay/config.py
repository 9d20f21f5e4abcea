"""Harness configuration with environment-backed defaults."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from .waiting import WaitPolicy

DEFAULT_DATA_ROOT = "http://localhost:6006/node_modules/@fizz/chart-data/data/"
DEFAULT_STORYBOOK_URL = "http://localhost:6006"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off"}


@dataclass(slots=True)
class HarnessConfig:
    """Settings shared by every runner created for one story invocation."""

    data_root: str = field(default_factory=lambda: os.getenv("CHARTPLAY_DATA_ROOT", DEFAULT_DATA_ROOT))
    storybook_url: str = field(
        default_factory=lambda: os.getenv("CHARTPLAY_STORYBOOK_URL", DEFAULT_STORYBOOK_URL)
    )
    storage_root: Path = field(
        default_factory=lambda: Path(os.getenv("CHARTPLAY_STORAGE_ROOT", "artifacts/stories"))
    )
    wait_timeout: float = field(default_factory=lambda: _env_float("CHARTPLAY_WAIT_TIMEOUT", 2.0))
    wait_interval: float = field(default_factory=lambda: _env_float("CHARTPLAY_WAIT_INTERVAL", 0.05))
    request_timeout: float = field(default_factory=lambda: _env_float("CHARTPLAY_REQUEST_TIMEOUT", 10.0))
    headless: bool = field(default_factory=lambda: _env_bool("CHARTPLAY_HEADLESS", True))
    chart_test_id: str = "para-chart"
    live_region_test_id: str = "sr-status"
    entry_keys: Sequence[str] = ("{ArrowRight}", "{ArrowRight}")
    query_key: str = "q"
    advance_key: str = "{ArrowRight}"

    def wait_policy(self) -> WaitPolicy:
        return WaitPolicy(timeout=self.wait_timeout, interval=self.wait_interval)


__all__ = ["HarnessConfig", "DEFAULT_DATA_ROOT", "DEFAULT_STORYBOOK_URL"]
