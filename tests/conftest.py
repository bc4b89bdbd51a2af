"""Shared fixtures for costlens tests."""

from collections.abc import Callable
from datetime import datetime, timedelta

import pytest

from costlens.costs.types import CostEntry, CostFacet, SourceLocation


@pytest.fixture
def make_entry() -> Callable[..., CostEntry]:
    """Factory for cost entries with sensible defaults."""

    def _make(
        method_name: str = "foo",
        polynomial: str = "n",
        parameter_types: list[str] | None = None,
        degree: int | None = 1,
        entry_id: str | None = None,
        line: int = 1,
    ) -> CostEntry:
        types = parameter_types or []
        return CostEntry(
            id=entry_id or f"Foo.java:Foo.{method_name}({','.join(types)}):void",
            method_name=method_name,
            parameter_types=types,
            loc=SourceLocation(file="Foo.java", line=line),
            alloc_cost=CostFacet(polynomial="0", degree=0, big_o="O(1)"),
            exec_cost=CostFacet(polynomial=polynomial, degree=degree, big_o="O(n)"),
        )

    return _make


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, 0)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def clock() -> StepClock:
    return StepClock()
