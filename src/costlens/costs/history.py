"""Per-method cost history.

Keeps, for every cost entry id, the entries whose execution polynomial
differed from the one recorded before them, newest first. Re-analysis runs
that leave the polynomial unchanged leave no trace.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from costlens.costs.types import CostEntry

logger = logging.getLogger(__name__)


def _get_now() -> datetime:
    return datetime.now(UTC)


class CostHistoryTracker:
    """Tracker for cost entries across analysis runs.

    Example:
        >>> tracker = CostHistoryTracker()
        >>> tracker.update(entries_run_1)
        >>> tracker.update(entries_run_2)   # unchanged costs are not appended
        >>> tracker.history(entry_id)[0]    # newest entry

    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        """Initialize an empty tracker.

        Args:
            clock: Source of timestamps; current UTC time if None.

        """
        self._clock = clock or _get_now
        self._histories: dict[str, list[CostEntry]] = {}

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._histories

    def __len__(self) -> int:
        return len(self._histories)

    def ids(self) -> list[str]:
        return list(self._histories)

    def history(self, entry_id: str) -> list[CostEntry]:
        """Entries recorded for entry_id, newest first (empty if unknown)."""
        return list(self._histories.get(entry_id, ()))

    def head(self, entry_id: str) -> CostEntry | None:
        """Newest entry recorded for entry_id, or None."""
        entries = self._histories.get(entry_id)
        return entries[0] if entries else None

    def update(self, entries: Iterable[CostEntry]) -> list[CostEntry]:
        """Record the entries of one analysis run.

        An entry is stamped and prepended to its history when the history is
        empty or its head has a different execution polynomial; otherwise it
        is discarded.

        Args:
            entries: Cost entries of the current run.

        Returns:
            The entries that were appended.

        """
        now = self._clock()
        appended: list[CostEntry] = []
        for entry in entries:
            history = self._histories.setdefault(entry.id, [])
            if history and history[0].exec_cost.polynomial == entry.exec_cost.polynomial:
                continue

            stamp = now
            if history and history[0].timestamp is not None and history[0].timestamp > stamp:
                stamp = history[0].timestamp
            entry.timestamp = stamp
            history.insert(0, entry)
            appended.append(entry)

        logger.debug("History updated: %d new entries", len(appended))
        return appended

    def attach_change_causes(self, entry_id: str, causes: list[str] | None) -> bool:
        """Set the change causes of the newest entry for entry_id.

        Returns:
            True if a history exists for entry_id.

        """
        head = self.head(entry_id)
        if head is None:
            return False
        head.change_cause_methods = causes
        return True

    def clear(self) -> None:
        self._histories.clear()
        logger.debug("Cost history cleared")
