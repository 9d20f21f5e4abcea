import asyncio

import pytest

from chartplay.config import HarnessConfig
from chartplay.expect import ExpectationError
from chartplay.families import DonutTestRunner, UnknownChartTypeError
from chartplay.stories import StoryInvocation, play

from fakes import FakeCanvas, FakeChart, FakeUserEvent, StaticLoader, manifest_dict

FAST = HarnessConfig(wait_timeout=0.2, wait_interval=0.01)


def test_play_builds_family_runner_and_runs_it() -> None:
    story = StoryInvocation(
        story_id="ai-enhanced-charts-pastry-charts-donut-charts--ai-chart-47",
        manifest_path="manifests/pie-manifest-dark-matter.json",
        chart_type="donut",
        title="AI-enhanced Charts/Pastry Charts/Donut Charts",
        name="Division of energy in the Universe (47)",
    )
    chart = FakeChart("Division of energy in the Universe", [("Dark energy", "68")])
    loader = StaticLoader(
        {story.manifest_path: manifest_dict("Division of energy in the Universe", [("Dark energy", "68")])}
    )

    runner = asyncio.run(play(story, FakeCanvas(chart), FakeUserEvent(chart), config=FAST, loader=loader))

    assert isinstance(runner, DonutTestRunner)
    assert runner.story_id == story.story_id
    assert loader.requested == [story.manifest_path]
    assert chart.keys == []


def test_play_surfaces_assertion_failures() -> None:
    story = StoryInvocation(story_id="bar--1", manifest_path="m.json", chart_type="bar")
    chart = FakeChart("Something else", [("2019", "10")])
    loader = StaticLoader({"m.json": manifest_dict("Revenue 2020", [("2019", "10")])})

    with pytest.raises(ExpectationError):
        asyncio.run(play(story, FakeCanvas(chart), FakeUserEvent(chart), config=FAST, loader=loader))


def test_play_rejects_unknown_chart_type() -> None:
    story = StoryInvocation(story_id="venn--1", manifest_path="m.json", chart_type="venn")

    with pytest.raises(UnknownChartTypeError):
        asyncio.run(play(story, FakeCanvas(None), FakeUserEvent(None)))
