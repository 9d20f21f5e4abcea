"""Story play callbacks: build the family runner, load its manifest, run it."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .dom import Canvas, UserEvent
from .expect import expect as default_expect
from .families import build_runner
from .runner import ExpectFunction, TestRunner

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StoryInvocation:
    """A story to play: which manifest it renders and as which chart type."""

    story_id: str
    manifest_path: str
    chart_type: str
    title: str = ""
    name: str = ""


async def play(
    story: StoryInvocation,
    canvas: Canvas,
    user_event: UserEvent,
    expect: ExpectFunction = default_expect,
    **runner_kwargs: Any,
) -> TestRunner:
    runner_kwargs.setdefault("story_id", story.story_id)
    runner = build_runner(story.chart_type, canvas, user_event, expect, **runner_kwargs)
    logger.info("playing %s with %s", story.story_id, type(runner).__name__)
    await runner.load_manifest(story.manifest_path)
    await runner.run()
    return runner


__all__ = ["StoryInvocation", "play"]
