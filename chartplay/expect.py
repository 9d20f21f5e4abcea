"""Fluent value matchers used by runner test cases."""
from __future__ import annotations

from typing import Any


class ExpectationError(AssertionError):
    """Raised when a matcher does not hold."""


_MISSING = object()


class Expectation:
    """Matchers over a single value; ``not_`` flips every matcher."""

    def __init__(self, actual: Any, *, negated: bool = False) -> None:
        self.actual = actual
        self._negated = negated

    @property
    def not_(self) -> "Expectation":
        return Expectation(self.actual, negated=not self._negated)

    def _check(self, passed: bool, message: str) -> None:
        if passed == self._negated:
            prefix = "expected not " if self._negated else "expected "
            raise ExpectationError(f"{prefix}{message}")

    def to_be(self, expected: Any) -> None:
        self._check(self.actual == expected, f"{self.actual!r} to be {expected!r}")

    def to_contain(self, item: Any) -> None:
        try:
            contained = item in self.actual
        except TypeError:
            contained = False
        self._check(contained, f"{self.actual!r} to contain {item!r}")

    def to_be_truthy(self) -> None:
        self._check(bool(self.actual), f"{self.actual!r} to be truthy")

    def to_be_defined(self) -> None:
        self._check(self.actual is not None, f"{self.actual!r} to be defined")

    def to_be_in_the_document(self) -> None:
        connected = getattr(self.actual, "is_connected", _MISSING)
        present = self.actual is not None and connected is not False
        self._check(present, f"{self.actual!r} to be in the document")


def expect(actual: Any) -> Expectation:
    return Expectation(actual)


__all__ = ["expect", "Expectation", "ExpectationError"]
