"""Telemetry interfaces for structured suite events."""
from __future__ import annotations

import logging
from typing import Dict


class TelemetrySink:
    """Base class for sinks that consume runner events."""

    def emit(self, event: str, payload: Dict[str, object]) -> None:  # pragma: no cover - interface only
        raise NotImplementedError


class NoOpTelemetry(TelemetrySink):
    """Telemetry sink that ignores all events."""

    def emit(self, event: str, payload: Dict[str, object]) -> None:  # pragma: no cover - intentionally empty
        return


class LoggingTelemetry(TelemetrySink):
    """Forwards events to a logger, one line per event."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.logger = logger or logging.getLogger("chartplay.events")
        self.level = level

    def emit(self, event: str, payload: Dict[str, object]) -> None:
        details = " ".join(f"{key}={value}" for key, value in sorted(payload.items()))
        self.logger.log(self.level, "%s %s", event, details)


__all__ = ["TelemetrySink", "NoOpTelemetry", "LoggingTelemetry"]
