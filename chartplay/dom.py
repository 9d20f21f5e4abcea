"""Capability interfaces the runners use to query and drive a rendered chart."""
from __future__ import annotations

from typing import Optional


class ShadowNode:
    """An element inside the chart's shadow tree."""

    async def focus(self) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    async def text_content(self) -> Optional[str]:  # pragma: no cover - interface only
        raise NotImplementedError

    async def get_attribute(self, name: str) -> Optional[str]:  # pragma: no cover - interface only
        raise NotImplementedError

    async def query_text(self, selector: str) -> Optional[str]:  # pragma: no cover - interface only
        """Text of the first descendant matching ``selector``, or ``None``."""
        raise NotImplementedError


class ChartElement:
    """The chart's root element, scoped for shadow-aware lookups."""

    is_connected: bool = True

    async def has_view_model(self) -> bool:  # pragma: no cover - interface only
        raise NotImplementedError

    async def find_by_shadow_role(self, role: str) -> ShadowNode:  # pragma: no cover - interface only
        raise NotImplementedError

    async def find_by_shadow_test_id(self, test_id: str) -> ShadowNode:  # pragma: no cover - interface only
        raise NotImplementedError


class Canvas:
    """Query root for the rendered story."""

    async def find_by_test_id(self, test_id: str) -> ChartElement:  # pragma: no cover - interface only
        raise NotImplementedError


class UserEvent:
    """Simulated user input; keys use ``{Name}`` for named keys."""

    async def keyboard(self, key_sequence: str) -> None:  # pragma: no cover - interface only
        raise NotImplementedError


__all__ = ["Canvas", "ChartElement", "ShadowNode", "UserEvent"]
