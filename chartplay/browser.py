"""Playwright implementations of the canvas, element and keyboard capabilities.

Playwright's CSS and role locators pierce open shadow roots, so lookups
inside the chart's shadow tree are plain locators chained from the chart.
"""
from __future__ import annotations

import logging
import re
from typing import Any, List, Optional
from urllib.parse import urlencode

from playwright.async_api import Locator, Page, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .config import HarnessConfig
from .dom import Canvas, ChartElement, ShadowNode, UserEvent
from .expect import ExpectationError, expect
from .stories import StoryInvocation, play
from .telemetry import TelemetrySink

logger = logging.getLogger(__name__)

_KEY_TOKEN = re.compile(r"\{\{|\{([^{}]+)\}|(.)", re.DOTALL)

VIEW_MODEL_SCRIPT = "el => Boolean(el.paraView && el.paraView.documentView)"


async def _wait_attached(locator: Locator, timeout_ms: float, description: str) -> None:
    try:
        await locator.wait_for(state="attached", timeout=timeout_ms)
    except PlaywrightTimeoutError as exc:
        raise ExpectationError(f"{description} not found within {timeout_ms:.0f}ms") from exc


def parse_key_sequence(sequence: str) -> List[str]:
    """Split ``"{ArrowRight}q"`` into Playwright key names ``["ArrowRight", "q"]``."""

    keys: List[str] = []
    for match in _KEY_TOKEN.finditer(sequence):
        named, char = match.group(1), match.group(2)
        if named is not None:
            keys.append(named)
        elif char is not None:
            keys.append(char)
        else:
            keys.append("{")
    return keys


class PlaywrightShadowNode(ShadowNode):
    def __init__(self, locator: Locator) -> None:
        self.locator = locator

    async def focus(self) -> None:
        await self.locator.focus()

    async def text_content(self) -> Optional[str]:
        return await self.locator.text_content()

    async def get_attribute(self, name: str) -> Optional[str]:
        return await self.locator.get_attribute(name)

    async def query_text(self, selector: str) -> Optional[str]:
        child = self.locator.locator(selector)
        if await child.count() == 0:
            return None
        return await child.first.text_content()


class PlaywrightChartElement(ChartElement):
    def __init__(self, locator: Locator, timeout_ms: float) -> None:
        self.locator = locator
        self.timeout_ms = timeout_ms

    async def has_view_model(self) -> bool:
        return bool(await self.locator.evaluate(VIEW_MODEL_SCRIPT))

    async def find_by_shadow_role(self, role: str) -> ShadowNode:
        node = self.locator.get_by_role(role).first
        await _wait_attached(node, self.timeout_ms, f"shadow role {role!r}")
        return PlaywrightShadowNode(node)

    async def find_by_shadow_test_id(self, test_id: str) -> ShadowNode:
        node = self.locator.get_by_test_id(test_id).first
        await _wait_attached(node, self.timeout_ms, f"shadow test id {test_id!r}")
        return PlaywrightShadowNode(node)


class PlaywrightCanvas(Canvas):
    def __init__(self, root: Locator, timeout_ms: float) -> None:
        self.root = root
        self.timeout_ms = timeout_ms

    async def find_by_test_id(self, test_id: str) -> ChartElement:
        element = self.root.get_by_test_id(test_id).first
        await _wait_attached(element, self.timeout_ms, f"test id {test_id!r}")
        return PlaywrightChartElement(element, self.timeout_ms)


class PlaywrightUserEvent(UserEvent):
    def __init__(self, page: Page) -> None:
        self.page = page

    async def keyboard(self, key_sequence: str) -> None:
        for key in parse_key_sequence(key_sequence):
            await self.page.keyboard.press(key)


def story_url(config: HarnessConfig, story_id: str) -> str:
    query = urlencode({"id": story_id, "viewMode": "story"})
    return f"{config.storybook_url.rstrip('/')}/iframe.html?{query}"


async def open_story(page: Page, config: HarnessConfig, story_id: str) -> PlaywrightCanvas:
    url = story_url(config, story_id)
    logger.info("opening story %s", url)
    await page.goto(url, wait_until="networkidle")
    return PlaywrightCanvas(page.locator("#storybook-root"), config.wait_timeout * 1000)


async def play_in_browser(
    story: StoryInvocation,
    config: HarnessConfig,
    *,
    telemetry: TelemetrySink | None = None,
    **runner_kwargs: Any,
) -> None:
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=config.headless)
        try:
            page = await browser.new_page()
            canvas = await open_story(page, config, story.story_id)
            await play(
                story,
                canvas,
                PlaywrightUserEvent(page),
                expect,
                config=config,
                telemetry=telemetry,
                **runner_kwargs,
            )
        finally:
            await browser.close()


__all__ = [
    "PlaywrightCanvas",
    "PlaywrightChartElement",
    "PlaywrightShadowNode",
    "PlaywrightUserEvent",
    "parse_key_sequence",
    "story_url",
    "open_story",
    "play_in_browser",
]
