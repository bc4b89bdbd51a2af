"""Registry of method names known to have non-constant execution cost.

Names, not full identities: a call site only shows the callee's name, so
every overload of a non-constant method is treated as non-constant.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from costlens.costs.types import CostEntry

__all__ = ["NonConstantRegistry"]

logger = logging.getLogger(__name__)


class NonConstantRegistry:
    """Mutable set of non-constant method names consulted by the classifier.

    Usage:
        registry = NonConstantRegistry()
        registry.record_costs(entries)      # after an analysis run
        "sort" in registry                  # during classification
        registry.reset_for_file(["sort"])   # before re-analyzing one file

    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: set[str] = set(names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def names(self) -> frozenset[str]:
        """Snapshot of the registered names."""
        return frozenset(self._names)

    def add(self, name: str) -> None:
        self._names.add(name)

    def record_costs(self, entries: Iterable[CostEntry]) -> int:
        """Register the names of entries whose execution cost is not constant.

        Args:
            entries: Cost entries of one analysis run.

        Returns:
            Number of names newly registered.

        """
        before = len(self._names)
        for entry in entries:
            if not entry.exec_cost.is_constant:
                self._names.add(entry.method_name)
        added = len(self._names) - before
        logger.debug("Registered %d non-constant methods (%d total)", added, len(self._names))
        return added

    def reset_all(self) -> None:
        """Forget every name (a project-wide analysis replaces all data)."""
        self._names.clear()
        logger.debug("Non-constant registry reset")

    def reset_for_file(self, method_names: Iterable[str]) -> None:
        """Forget only the given names (one file is about to be re-analyzed).

        Args:
            method_names: Names of the methods declared in that file.

        """
        for name in method_names:
            self._names.discard(name)
