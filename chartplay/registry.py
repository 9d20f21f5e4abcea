"""Per-type ordered registration of runner test cases.

Each runner type owns a tuple of case names (method names on the type).
The first ``register`` call for a type copies the resolved list of its
nearest registered ancestor, so subclasses run inherited cases first and
their own cases after, in the order they were registered.

Registered ancestors must form a single chain. A type that inherits
cases from two unrelated registered bases is rejected rather than
resolved to whichever base comes first in its MRO.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)


class RegistrationError(Exception):
    """Raised when a test case cannot be registered for a type."""


class TestRegistry:
    """Maps suite types to their ordered test case names."""

    __test__ = False  # keep pytest from collecting this class

    def __init__(self) -> None:
        self._tables: Dict[type, Tuple[str, ...]] = {}

    def register(self, suite_type: type, case_id: str) -> None:
        if not isinstance(suite_type, type):
            raise RegistrationError(f"suite_type must be a class, got {suite_type!r}")
        if not callable(getattr(suite_type, case_id, None)):
            raise RegistrationError(f"{suite_type.__name__} has no test case method {case_id!r}")
        current = self.resolve(suite_type)
        if case_id in current:
            raise RegistrationError(f"{case_id!r} is already registered for {suite_type.__name__}")
        self._tables[suite_type] = current + (case_id,)
        logger.debug("registered %s.%s", suite_type.__name__, case_id)

    def resolve(self, suite_type: type) -> Tuple[str, ...]:
        owners = [klass for klass in suite_type.__mro__ if klass in self._tables]
        if not owners:
            return ()
        nearest = owners[0]
        for other in owners[1:]:
            if not issubclass(nearest, other):
                raise RegistrationError(
                    f"{suite_type.__name__} inherits cases from both {nearest.__name__} and {other.__name__}"
                )
        return self._tables[nearest]

    def owns(self, suite_type: type) -> bool:
        """Whether ``suite_type`` registered cases of its own."""

        return suite_type in self._tables

    def cases(self, *case_ids: str) -> Callable[[T], T]:
        """Class decorator that registers ``case_ids`` in order."""

        def apply(suite_type: T) -> T:
            for case_id in case_ids:
                self.register(suite_type, case_id)
            return suite_type

        return apply


REGISTRY = TestRegistry()


def register(suite_type: type, case_id: str) -> None:
    REGISTRY.register(suite_type, case_id)


def resolve(suite_type: type) -> Tuple[str, ...]:
    return REGISTRY.resolve(suite_type)


def cases(*case_ids: str) -> Callable[[T], T]:
    return REGISTRY.cases(*case_ids)


__all__ = ["TestRegistry", "RegistrationError", "REGISTRY", "register", "resolve", "cases"]
