"""Suite registry implementation."""
from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from suitekit.core.errors import DuplicateNameError, RegistrationClosedError
from suitekit.core.models import FixtureFactory, Predicate, PredicateLike, Suite, TestCase

if TYPE_CHECKING:  # pragma: no cover
    from .declarations import TestSuite

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class _SuiteEntry:
    name: str
    enabled: Predicate
    fixture: Optional[FixtureFactory]
    tags: Tuple[str, ...]
    description: str
    cases: List[TestCase] = dataclasses.field(default_factory=list)

    def freeze(self) -> Suite:
        cases = tuple(
            case if case.fixture is not None else dataclasses.replace(case, fixture=self.fixture)
            for case in self.cases
        )
        return Suite(
            name=self.name,
            cases=cases,
            enabled=self.enabled,
            fixture=self.fixture,
            tags=self.tags,
            description=self.description,
        )


class SuiteRegistry:
    """Ordered catalog of suites and their test cases.

    The registry is append-only until :meth:`freeze` is called; afterwards it
    is read-only and every mutation raises :class:`RegistrationClosedError`.
    """

    def __init__(self) -> None:
        self._suites: Dict[str, _SuiteEntry] = {}
        self._frozen = False
        self._revision = 0

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def revision(self) -> int:
        return self._revision

    def declare_suite(
        self,
        name: str,
        *,
        enabled: PredicateLike | Predicate = True,
        fixture: Optional[FixtureFactory] = None,
        tags: Sequence[str] = (),
        description: str = "",
    ) -> None:
        self._ensure_open()
        _require_name(name, "suite")
        if name in self._suites:
            raise DuplicateNameError(f"Suite '{name}' already registered")
        self._suites[name] = _SuiteEntry(
            name=name,
            enabled=Predicate.coerce(enabled),
            fixture=fixture,
            tags=tuple(str(tag) for tag in tags),
            description=description,
        )
        self._revision += 1
        logger.debug("declared suite %s", name)

    def register(
        self,
        suite_name: str,
        test_name: str,
        body: Callable[..., Any],
        enabled: PredicateLike | Predicate = True,
        *,
        fixture: Optional[FixtureFactory] = None,
        tags: Sequence[str] = (),
        description: str = "",
    ) -> TestCase:
        """Append a test case to ``suite_name``, creating the suite if needed."""

        self._ensure_open()
        _require_name(suite_name, "suite")
        _require_name(test_name, "test")
        if not callable(body):
            raise TypeError(f"Body of test '{suite_name}/{test_name}' is not callable")
        entry = self._suites.get(suite_name)
        if entry is not None and any(case.name == test_name for case in entry.cases):
            raise DuplicateNameError(f"Test '{suite_name}/{test_name}' already registered")
        case = TestCase(
            suite=suite_name,
            name=test_name,
            body=body,
            enabled=Predicate.coerce(enabled),
            fixture=fixture,
            tags=tuple(str(tag) for tag in tags),
            description=description,
        )
        if entry is None:
            entry = _SuiteEntry(name=suite_name, enabled=Predicate.coerce(True), fixture=None, tags=(), description="")
            self._suites[suite_name] = entry
        entry.cases.append(case)
        self._revision += 1
        logger.debug("registered test %s", case.identifier())
        return case

    def add_suite(self, declaration: "TestSuite") -> Suite:
        """Register a whole declared suite in its declaration order."""

        self.declare_suite(
            declaration.name,
            enabled=declaration.enabled,
            fixture=declaration.fixture,
            tags=declaration.tags,
            description=declaration.description,
        )
        for spec in declaration.cases():
            self.register(
                declaration.name,
                spec.name,
                spec.body,
                spec.enabled,
                fixture=spec.fixture,
                tags=spec.tags,
                description=spec.description,
            )
        return self.get(declaration.name)

    def freeze(self) -> None:
        if not self._frozen:
            logger.debug("registry frozen with %d suite(s)", len(self._suites))
        self._frozen = True

    def reset(self) -> None:
        self._suites.clear()
        self._frozen = False
        self._revision += 1

    def get(self, name: str) -> Suite:
        try:
            return self._suites[name].freeze()
        except KeyError as exc:  # pragma: no cover - simple error path
            raise KeyError(f"Suite '{name}' is not registered") from exc

    def suites(self) -> Tuple[Suite, ...]:
        return tuple(entry.freeze() for entry in self._suites.values())

    def names(self) -> Tuple[str, ...]:
        return tuple(self._suites.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._suites

    def __iter__(self) -> Iterator[Suite]:
        return iter(self.suites())

    def __len__(self) -> int:
        return len(self._suites)

    def _ensure_open(self) -> None:
        if self._frozen:
            raise RegistrationClosedError("Registry is frozen; registration must finish before execution")


def _require_name(value: Any, kind: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{kind} name must be a non-empty string")
    if "/" in value:
        raise ValueError(f"{kind} name '{value}' cannot contain '/'")


registry = SuiteRegistry()


def register(
    suite_name: str,
    test_name: str,
    body: Callable[..., Any],
    enabled: PredicateLike | Predicate = True,
    **kwargs: Any,
) -> TestCase:
    return registry.register(suite_name, test_name, body, enabled, **kwargs)


def declare_suite(name: str, **kwargs: Any) -> None:
    registry.declare_suite(name, **kwargs)


def add_suite(declaration: "TestSuite") -> Suite:
    return registry.add_suite(declaration)


def clear_registry() -> None:
    registry.reset()
