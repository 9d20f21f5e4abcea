"""Command-line interface for playing chart stories."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .config import HarnessConfig
from .families import FAMILY_RUNNERS, UnknownChartTypeError, runner_for
from .manifest import ManifestError
from .observability import SuiteObservability
from .registry import REGISTRY
from .stories import StoryInvocation
from .telemetry import LoggingTelemetry


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run chart story interaction tests")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    cases_parser = subparsers.add_parser("cases", help="List the test cases a chart type runs")
    cases_parser.add_argument("chart_type", help=f"One of: {', '.join(sorted(FAMILY_RUNNERS))}")

    play_parser = subparsers.add_parser("play", help="Open a story in Chromium and run its tests")
    play_parser.add_argument("story_id", help="Storybook story id, e.g. basic-charts-bar-charts--chart-2")
    play_parser.add_argument("--chart-type", required=True, help="Chart type selecting the runner")
    play_parser.add_argument("--manifest", required=True, help="Manifest path relative to the data root")
    play_parser.add_argument("--storybook-url", help="Storybook base URL (default: $CHARTPLAY_STORYBOOK_URL)")
    play_parser.add_argument("--data-root", help="Manifest data root URL (default: $CHARTPLAY_DATA_ROOT)")
    play_parser.add_argument(
        "--storage-root",
        type=Path,
        help="Directory where story logs are written (default: artifacts/stories)",
    )
    play_parser.add_argument("--timeout", type=float, help="Polling timeout in seconds")
    play_parser.add_argument("--headed", action="store_true", help="Show the browser window")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> HarnessConfig:
    config = HarnessConfig()
    if args.storybook_url:
        config.storybook_url = args.storybook_url
    if args.data_root:
        config.data_root = args.data_root
    if args.storage_root:
        config.storage_root = args.storage_root
    if args.timeout is not None:
        config.wait_timeout = args.timeout
    if args.headed:
        config.headless = False
    return config


def list_cases(chart_type: str) -> int:
    try:
        runner = runner_for(chart_type)
    except UnknownChartTypeError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    payload = {
        "chart_type": chart_type,
        "runner": runner.__name__,
        "cases": list(REGISTRY.resolve(runner)),
    }
    print(json.dumps(payload, indent=2))
    return 0


def play_story(args: argparse.Namespace) -> int:
    from .browser import play_in_browser

    config = build_config(args)
    story = StoryInvocation(story_id=args.story_id, manifest_path=args.manifest, chart_type=args.chart_type)
    try:
        runner_for(story.chart_type)
    except UnknownChartTypeError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    telemetry = SuiteObservability(config.storage_root, forward_to=LoggingTelemetry())
    try:
        asyncio.run(play_in_browser(story, config, telemetry=telemetry))
    except ManifestError as exc:
        print(f"Fixture error: {exc}", file=sys.stderr)
        return 2
    except AssertionError as exc:
        print(f"Story {story.story_id} failed: {exc}", file=sys.stderr)
        return 1
    summary = telemetry.summary(story.story_id) or {"story_id": story.story_id}
    print(json.dumps(summary, indent=2))
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.command == "cases":
        code = list_cases(args.chart_type)
    else:
        code = play_story(args)
    if code:
        raise SystemExit(code)


if __name__ == "__main__":  # pragma: no cover
    main()
