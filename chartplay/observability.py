"""JSONL event log and per-story summaries for runner telemetry."""
from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from .telemetry import TelemetrySink

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class SuiteObservability(TelemetrySink):
    """Writes runner events under ``<storage_root>/<story_id>/observability``."""

    def __init__(
        self,
        storage_root: Path | str = "artifacts/stories",
        *,
        forward_to: Optional[TelemetrySink] = None,
    ) -> None:
        self.storage_root = Path(storage_root)
        self._summaries: Dict[str, Dict[str, Any]] = {}
        self._forward_to = forward_to

    # ------------------------------------------------------------------ public
    def emit(self, event: str, payload: Dict[str, object]) -> None:
        story_id = str(payload.get("story_id") or "")
        if not story_id:
            logger.debug("Telemetry event %s missing story_id; dropping", event)
            return

        entry = dict(payload)
        entry.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
        entry["event"] = event
        self._append_log(story_id, entry)

        summary = self._summaries.setdefault(
            story_id,
            {"story_id": story_id, "passed": [], "failed": None, "status": "Running"},
        )
        self._update_summary(summary, entry)
        self._persist_summary(story_id, summary)
        self._forward(event, entry)

    def summary(self, story_id: str) -> Dict[str, Any] | None:
        return self._summaries.get(story_id)

    def story_dir(self, story_id: str) -> Path:
        return self.storage_root / _UNSAFE_CHARS.sub("-", story_id) / "observability"

    # ---------------------------------------------------------------- internal
    def _append_log(self, story_id: str, entry: Dict[str, object]) -> None:
        logs_path = self.story_dir(story_id) / "logs.jsonl"
        logs_path.parent.mkdir(parents=True, exist_ok=True)
        with logs_path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(entry) + "\n")

    def _update_summary(self, summary: Dict[str, Any], entry: Dict[str, object]) -> None:
        event = entry.get("event", "")
        summary["runner"] = entry.get("runner", summary.get("runner"))
        if event == "manifest.loaded":
            summary["manifest"] = entry.get("path")
        elif event == "case.passed":
            summary["passed"].append(entry.get("case"))
        elif event == "case.failed":
            summary["failed"] = {
                "case": entry.get("case"),
                "error": entry.get("error"),
                "exception": entry.get("exception"),
            }
        elif event == "suite.completed":
            summary["status"] = "Completed"
            summary["duration_ms"] = entry.get("duration_ms")
        elif event == "suite.failed":
            summary["status"] = "Failed"
        elif event == "suite.skipped":
            summary["status"] = "Skipped"
            summary["reason"] = entry.get("reason")

    def _persist_summary(self, story_id: str, summary: Dict[str, Any]) -> None:
        summary_path = self.story_dir(story_id) / "summary.json"
        summary_path.write_text(json.dumps(summary, indent=2), encoding="utf-8")

    def _forward(self, event: str, entry: Dict[str, object]) -> None:
        if not self._forward_to:
            return
        try:
            self._forward_to.emit(event, dict(entry))
        except Exception:  # pragma: no cover - telemetry best effort
            logger.warning("Failed to forward event %s", event, exc_info=True)


__all__ = ["SuiteObservability"]
