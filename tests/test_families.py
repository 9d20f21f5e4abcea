import asyncio

import pytest

from chartplay.config import HarnessConfig
from chartplay.expect import ExpectationError, expect
from chartplay.families import (
    FAMILY_RUNNERS,
    BarTestRunner,
    HeatmapTestRunner,
    LineTestRunner,
    UnknownChartTypeError,
    build_runner,
    runner_for,
)
from chartplay.manifest import Manifest, ManifestError

from fakes import FakeCanvas, FakeChart, FakeUserEvent, RecordingExpect, StaticLoader, manifest_dict

FAST = HarnessConfig(wait_timeout=0.2, wait_interval=0.01)
RECORDS = [("2019", "10"), ("2020", "12")]


def _bar_runner(chart: FakeChart, expect_fn=expect) -> BarTestRunner:
    runner = BarTestRunner(FakeCanvas(chart), FakeUserEvent(chart), expect_fn, config=FAST)
    runner.manifest = Manifest.from_dict(manifest_dict("Revenue 2020", RECORDS))
    return runner


def test_keyboard_navigation_announces_each_record() -> None:
    chart = FakeChart("Revenue 2020", RECORDS)
    runner = _bar_runner(chart)

    asyncio.run(runner.keyboard_navigation())

    assert chart.focused
    assert chart.announcements == [
        "Revenue 2020, entered chart",
        "2019, 10. Point 1 of 2",
        "Current point 2019, compared to series average",
        "2020, 12. Point 2 of 2",
        "Current point 2020, compared to series average",
        "End of series",
    ]
    assert chart.keys == [
        "{ArrowRight}",
        "{ArrowRight}",
        "q",
        "{ArrowRight}",
        "q",
        "{ArrowRight}",
    ]


def test_keyboard_navigation_fails_when_announcement_is_wrong() -> None:
    chart = FakeChart("Revenue 2020", [("2019", "10"), ("2020", "99")])
    runner = _bar_runner(chart)

    with pytest.raises(ExpectationError, match="2020, 12"):
        asyncio.run(runner.keyboard_navigation())

    assert chart.keys.count("q") == 1


def test_keyboard_navigation_fails_when_query_key_is_silent() -> None:
    chart = FakeChart("Revenue 2020", RECORDS)
    chart.press = _ignore_query(chart.press)
    runner = _bar_runner(chart)

    with pytest.raises(ExpectationError, match="expected not"):
        asyncio.run(runner.keyboard_navigation())


def _ignore_query(press):
    def wrapped(key: str) -> None:
        if key == "q":
            return
        press(key)

    return wrapped


def test_series_without_records_fails_at_load() -> None:
    chart = FakeChart("Revenue 2020", RECORDS)
    manifest = {"datasets": [{"title": "Revenue 2020", "series": [{"key": "Revenue"}]}]}
    runner = BarTestRunner(
        FakeCanvas(chart),
        FakeUserEvent(chart),
        expect,
        config=FAST,
        loader=StaticLoader({"m.json": manifest}),
    )

    with pytest.raises(ManifestError, match="series 0 has no records"):
        asyncio.run(runner.load_manifest("m.json"))
    assert chart.keys == []


def test_bar_run_includes_inherited_cases_first() -> None:
    chart = FakeChart("Revenue 2020", RECORDS)
    recorder = RecordingExpect()
    runner = _bar_runner(chart, recorder)

    asyncio.run(runner.run())

    assert recorder.values[0].__class__.__name__ == "FakeChartElement"
    assert recorder.values[-1] is not None
    assert chart.announcements[-1] == "End of series"


def test_heatmap_run_skips_every_case() -> None:
    chart = FakeChart("Heat", RECORDS)
    canvas = FakeCanvas(chart)
    user_event = FakeUserEvent(chart)
    recorder = RecordingExpect()
    runner = HeatmapTestRunner(canvas, user_event, recorder, config=FAST)

    asyncio.run(runner.run())

    assert recorder.values == []
    assert canvas.lookups == []
    assert user_event.sequences == []


def test_runner_lookup_by_chart_type() -> None:
    assert runner_for("bar") is BarTestRunner
    assert runner_for(" Line ") is LineTestRunner
    assert set(FAMILY_RUNNERS) >= {
        "bar",
        "column",
        "lollipop",
        "line",
        "stepline",
        "scatter",
        "waterfall",
        "histogram",
        "donut",
        "heatmap",
    }
    with pytest.raises(UnknownChartTypeError):
        runner_for("venn")


def test_build_runner_passes_options_through() -> None:
    runner = build_runner("waterfall", FakeCanvas(None), FakeUserEvent(None), expect, story_id="wf--59")

    assert runner.family == "waterfall"
    assert runner.story_id == "wf--59"
    assert "keyboard_navigation" in runner.test_cases
