"""Core data types for method declaration extraction.

Defines Position, Range, MethodDeclaration and TypeExtensions as produced by
the declaration extractor, plus the method identity key shared by the
classifier and the cost history.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

_QUALIFIER = re.compile(r"^.*[.$]")


@dataclass(frozen=True, slots=True)
class Position:
    """Zero-based line/column position in a text snapshot."""

    line: int
    character: int


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open span between two positions of one text snapshot."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class MethodDeclaration:
    """A method declaration site found in source text.

    Attributes:
        name: Method identifier.
        parameter_types: Declared parameter types after generic bound
            substitution, in declaration order.
        declaration_range: Span of the whole declaration header.
        name_range: Span of just the identifier token.

    """

    name: str
    parameter_types: tuple[str, ...]
    declaration_range: Range
    name_range: Range

    @property
    def identity(self) -> str:
        """Identity key, e.g. ``foo(int,String)``."""
        return method_identity(self.name, self.parameter_types)


@dataclass
class TypeExtensions:
    """Generic type-parameter bounds declared by the classes of one snapshot.

    ``class Box<A extends Number>`` records ``A → Number``. Parameters with
    more than one bound (``A extends B & C``) are not resolved and are listed
    in ``unresolved`` instead.
    """

    bounds: dict[str, str] = field(default_factory=dict)
    unresolved: set[str] = field(default_factory=set)

    def resolve(self, type_name: str) -> str:
        """Substitute a bounded type parameter, keeping any array suffix."""
        base, sep, suffix = type_name.partition("[")
        bound = self.bounds.get(base)
        if bound is None:
            return type_name
        return f"{bound}{sep}{suffix}"


def simple_type_name(type_name: str) -> str:
    """Strip package and outer-class qualifiers, keeping any array suffix.

    ``java.util.Map$Entry[]`` and ``Map.Entry[]`` both become ``Entry[]``.
    """
    return _QUALIFIER.sub("", type_name.strip())


def method_identity(name: str, parameter_types: Iterable[str]) -> str:
    """Serialize a method identity as ``name(type1,type2,...)``."""
    return f"{name}({','.join(parameter_types)})"
