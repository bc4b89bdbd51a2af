"""Cost entry models.

One CostEntry per analyzed method per analysis run. Entries are mutable:
the history tracker stamps them and the classifier attaches change causes.

Serialize with ``entry.model_dump(mode="json")``; restore with
``CostEntry.model_validate(data)``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from costlens.java.types import method_identity


class CostFacet(BaseModel):
    """One cost dimension (allocation or execution) of a method.

    Attributes:
        polynomial: Cost polynomial as text, multiplication written as ``*``.
        degree: Polynomial degree; None when the cost is unbounded.
        big_o: Human-readable asymptotic class, e.g. ``O(n)``.

    """

    polynomial: str
    degree: int | None = None
    big_o: str = ""

    @property
    def is_constant(self) -> bool:
        return self.degree == 0


class SourceLocation(BaseModel):
    """Declaration site reported by the analyzer (1-based line)."""

    file: str
    line: int


class TraceStep(BaseModel):
    """One step of the analyzer's explanation of a cost bound."""

    level: int = 0
    file: str | None = None
    line: int | None = None
    column: int | None = None
    description: str = ""


class CostEntry(BaseModel):
    """Measured cost of one method in one analysis run.

    Attributes:
        id: Structural key, stable for the same method across runs.
        method_name: Method name as reported by the analyzer.
        parameter_types: Simple parameter type names, in order.
        loc: Declaration site.
        alloc_cost: Allocation cost.
        exec_cost: Execution cost.
        timestamp: When the entry entered the history; None until then.
        change_cause_methods: Occurrences blamed for the latest change, if any.
        trace: Analyzer trace for the execution cost.

    """

    id: str
    method_name: str
    parameter_types: list[str] = Field(default_factory=list)
    loc: SourceLocation
    alloc_cost: CostFacet
    exec_cost: CostFacet
    timestamp: datetime | None = None
    change_cause_methods: list[str] | None = None
    trace: list[TraceStep] = Field(default_factory=list)

    @property
    def identity(self) -> str:
        """Identity key shared with method declarations, e.g. ``foo(int)``."""
        return method_identity(self.method_name, self.parameter_types)
