"""Declarative suite definitions collected without touching a registry."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from suitekit.core.errors import DuplicateNameError
from suitekit.core.models import FixtureFactory, Predicate, PredicateLike


@dataclass(frozen=True)
class CaseSpec:
    name: str
    body: Callable[..., Any]
    enabled: Predicate
    fixture: Optional[FixtureFactory] = None
    tags: Tuple[str, ...] = tuple()
    description: str = ""


class TestSuite:
    """A suite declared in a test module.

    Decorating functions with :meth:`case` only records them here. The test
    module hands the declaration to a registry from its ``register`` hook::

        empty_tests = TestSuite("empty_tests", fixture=BasicSetup, enabled=disabled())

        @empty_tests.case()
        def empty_test_case_1(fixture):
            message("Hello world!")

        def register(registry):
            registry.add_suite(empty_tests)
    """

    __test__ = False  # keep pytest from collecting this class

    def __init__(
        self,
        name: str,
        *,
        fixture: Optional[FixtureFactory] = None,
        enabled: PredicateLike | Predicate = True,
        tags: Sequence[str] = (),
        description: str = "",
    ) -> None:
        self.name = name
        self.fixture = fixture
        self.enabled = Predicate.coerce(enabled)
        self.tags = tuple(str(tag) for tag in tags)
        self.description = description
        self._cases: List[CaseSpec] = []

    def case(
        self,
        name: Optional[str] = None,
        *,
        enabled: PredicateLike | Predicate = True,
        fixture: Optional[FixtureFactory] = None,
        tags: Sequence[str] = (),
        description: Optional[str] = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator declaring a test case; the function name is the default name."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.add_case(
                name or func.__name__,
                func,
                enabled=enabled,
                fixture=fixture,
                tags=tags,
                description=description if description is not None else (func.__doc__ or "").strip(),
            )
            return func

        return decorator

    def add_case(
        self,
        name: str,
        body: Callable[..., Any],
        *,
        enabled: PredicateLike | Predicate = True,
        fixture: Optional[FixtureFactory] = None,
        tags: Sequence[str] = (),
        description: str = "",
    ) -> CaseSpec:
        if any(existing.name == name for existing in self._cases):
            raise DuplicateNameError(f"Test '{self.name}/{name}' already declared")
        spec = CaseSpec(
            name=name,
            body=body,
            enabled=Predicate.coerce(enabled),
            fixture=fixture,
            tags=tuple(str(tag) for tag in tags),
            description=description,
        )
        self._cases.append(spec)
        return spec

    def cases(self) -> Tuple[CaseSpec, ...]:
        return tuple(self._cases)

    def __len__(self) -> int:
        return len(self._cases)
