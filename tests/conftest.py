from __future__ import annotations

from typing import Iterator, List

import pytest

from suitekit.registry import SuiteRegistry, clear_registry


@pytest.fixture(autouse=True)
def fresh_global_registry() -> Iterator[None]:
    """The global registry is process-scoped; give every test its own run."""

    clear_registry()
    yield
    clear_registry()


@pytest.fixture
def suite_registry() -> SuiteRegistry:
    return SuiteRegistry()


@pytest.fixture
def events() -> List[str]:
    return []


def make_fixture(events: List[str], *, fail_setup: bool = False, fail_teardown: bool = False) -> type:
    """Fixture class appending its lifecycle steps to ``events``."""

    class Tracked:
        def __init__(self) -> None:
            events.append("construct")

        def setup(self) -> None:
            events.append("setup")
            if fail_setup:
                raise RuntimeError("no database")

        def teardown(self) -> None:
            events.append("teardown")
            if fail_teardown:
                raise RuntimeError("leak")

    return Tracked


@pytest.fixture
def tracked_fixture(events: List[str]):
    def factory(*, fail_setup: bool = False, fail_teardown: bool = False) -> type:
        return make_fixture(events, fail_setup=fail_setup, fail_teardown=fail_teardown)

    return factory
