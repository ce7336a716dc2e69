"""Core dataclasses shared across suitekit subsystems."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple, Union


PredicateLike = Union[bool, Callable[[], Any]]
FixtureFactory = Callable[[], Any]  # class or any zero-argument callable


class Status(str, enum.Enum):
    """Final status of a single test case."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Predicate:
    """Enablement condition evaluated when the run reaches a suite or case."""

    condition: Callable[[], Any]
    label: str = ""

    def __call__(self) -> bool:
        result = self.condition()
        # `enabled=disabled` passes the factory itself; evaluate what it builds
        while isinstance(result, Predicate):
            result = result.condition()
        return bool(result)

    @classmethod
    def coerce(cls, value: "PredicateLike | Predicate") -> "Predicate":
        if isinstance(value, Predicate):
            return value
        if isinstance(value, bool):
            return cls(condition=(lambda: value), label="enabled" if value else "disabled")
        if callable(value):
            return cls(condition=value, label=getattr(value, "__name__", "predicate"))
        raise TypeError(f"Enablement must be a bool or a callable, got {type(value).__name__}")


ALWAYS = Predicate.coerce(True)


def disabled() -> Predicate:
    """Predicate that always skips."""

    return Predicate.coerce(False)


def enabled_if(condition: PredicateLike) -> Predicate:
    return Predicate.coerce(condition)


@dataclass(frozen=True)
class TestCase:
    """A named test body registered inside a suite."""

    __test__ = False  # keep pytest from collecting this class

    suite: str
    name: str
    body: Callable[..., Any]
    enabled: Predicate = ALWAYS
    fixture: Optional[FixtureFactory] = None
    tags: Tuple[str, ...] = tuple()
    description: str = ""

    def identifier(self) -> str:
        return f"{self.suite}/{self.name}"

    def invoke(self, fixture: Any = None) -> Any:
        if self.fixture is None:
            return self.body()
        return self.body(fixture)


@dataclass(frozen=True)
class Suite:
    """Ordered collection of test cases sharing an enablement predicate."""

    name: str
    cases: Tuple[TestCase, ...] = tuple()
    enabled: Predicate = ALWAYS
    fixture: Optional[FixtureFactory] = None
    tags: Tuple[str, ...] = tuple()
    description: str = ""

    def case_names(self) -> Tuple[str, ...]:
        return tuple(case.name for case in self.cases)


@dataclass(frozen=True)
class Outcome:
    """Recorded result of one test case."""

    suite: str
    test: str
    status: Status
    messages: Tuple[str, ...] = tuple()
    detail: str = ""
    duration_s: float = 0.0

    def identifier(self) -> str:
        return f"{self.suite}/{self.test}"

    @property
    def passed(self) -> bool:
        return self.status is Status.PASSED


@dataclass(frozen=True)
class Selection:
    """Filters applied to the registry before a run."""

    patterns: Tuple[str, ...] = tuple()
    tags: Tuple[str, ...] = tuple()
    skip_tags: Tuple[str, ...] = tuple()
    force_enable: Tuple[str, ...] = field(default_factory=tuple)
