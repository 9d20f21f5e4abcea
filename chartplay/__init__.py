"""Interaction test harness for ParaCharts stories."""
from .config import HarnessConfig
from .expect import ExpectationError, expect
from .families import FAMILY_RUNNERS, UnknownChartTypeError, build_runner, runner_for
from .manifest import Manifest, ManifestError, ManifestLoader
from .registry import REGISTRY, RegistrationError, TestRegistry
from .runner import TestRunner
from .stories import StoryInvocation, play
from .waiting import WaitPolicy, wait_for

__all__ = [
    "HarnessConfig",
    "expect",
    "ExpectationError",
    "FAMILY_RUNNERS",
    "UnknownChartTypeError",
    "build_runner",
    "runner_for",
    "Manifest",
    "ManifestError",
    "ManifestLoader",
    "REGISTRY",
    "RegistrationError",
    "TestRegistry",
    "TestRunner",
    "StoryInvocation",
    "play",
    "WaitPolicy",
    "wait_for",
]
