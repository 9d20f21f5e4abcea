"""Runner subtypes for each chart family and the chart-type lookup table."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type

from .dom import Canvas, UserEvent
from .registry import cases
from .runner import ExpectFunction, TestRunner

logger = logging.getLogger(__name__)


class UnknownChartTypeError(LookupError):
    """Raised when no runner is registered for a chart type."""

    def __init__(self, chart_type: str) -> None:
        super().__init__(f"No test runner for chart type {chart_type!r}")
        self.chart_type = chart_type


@cases("keyboard_navigation")
class SeriesNavigationTestRunner(TestRunner):
    """Adds arrow-key navigation through the first series' data points."""

    family = "series"

    async def keyboard_navigation(self) -> None:
        chart = await self.find_chart()
        application = await chart.find_by_shadow_role("application")
        await application.focus()
        for key in self.config.entry_keys:
            await self.user_event.keyboard(key)
        live_region = await chart.find_by_shadow_test_id(self.config.live_region_test_id)

        for record in self.manifest.first_series_records():

            async def announces_record() -> Optional[str]:
                text = await live_region.query_text("div")
                self.expect(text).to_contain(record.label)
                return text

            announcement = await self.wait_for(announces_record)
            await self.user_event.keyboard(self.config.query_key)

            async def announcement_changed() -> None:
                updated = await live_region.query_text("div")
                self.expect(announcement).not_.to_be(updated)

            await self.wait_for(announcement_changed)
            await self.user_event.keyboard(self.config.advance_key)


class BarTestRunner(SeriesNavigationTestRunner):
    family = "bar"


class ColumnTestRunner(BarTestRunner):
    family = "column"


class LollipopTestRunner(BarTestRunner):
    family = "lollipop"


class LineTestRunner(SeriesNavigationTestRunner):
    family = "line"


class SteplineTestRunner(LineTestRunner):
    family = "stepline"


class ScatterTestRunner(SeriesNavigationTestRunner):
    family = "scatter"


class WaterfallTestRunner(SeriesNavigationTestRunner):
    family = "waterfall"


class HistogramTestRunner(TestRunner):
    family = "histogram"


class PieTestRunner(TestRunner):
    family = "pie"


class DonutTestRunner(PieTestRunner):
    family = "donut"


class HeatmapTestRunner(TestRunner):
    """Heat maps have no keyboard model in the chart yet; every case is skipped."""

    family = "heatmap"

    async def run(self) -> None:
        logger.warning("%s charts are not yet supported; skipping story %s", self.family, self.story_id or "-")
        self._emit("suite.skipped", {"reason": "unsupported_family", "family": self.family})


FAMILY_RUNNERS: Dict[str, Type[TestRunner]] = {
    runner.family: runner
    for runner in (
        BarTestRunner,
        ColumnTestRunner,
        LollipopTestRunner,
        LineTestRunner,
        SteplineTestRunner,
        ScatterTestRunner,
        WaterfallTestRunner,
        HistogramTestRunner,
        PieTestRunner,
        DonutTestRunner,
        HeatmapTestRunner,
    )
}


def runner_for(chart_type: str) -> Type[TestRunner]:
    try:
        return FAMILY_RUNNERS[chart_type.strip().lower()]
    except KeyError:
        raise UnknownChartTypeError(chart_type) from None


def build_runner(
    chart_type: str,
    canvas: Canvas,
    user_event: UserEvent,
    expect: ExpectFunction,
    **kwargs: Any,
) -> TestRunner:
    return runner_for(chart_type)(canvas, user_event, expect, **kwargs)


__all__ = [
    "FAMILY_RUNNERS",
    "UnknownChartTypeError",
    "runner_for",
    "build_runner",
    "SeriesNavigationTestRunner",
    "BarTestRunner",
    "ColumnTestRunner",
    "LollipopTestRunner",
    "LineTestRunner",
    "SteplineTestRunner",
    "ScatterTestRunner",
    "WaterfallTestRunner",
    "HistogramTestRunner",
    "PieTestRunner",
    "DonutTestRunner",
    "HeatmapTestRunner",
]
