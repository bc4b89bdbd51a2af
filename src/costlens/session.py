"""Session state for change-aware cost tracking.

CostSession owns everything that lives across save events: per-file
snapshot texts, per-file current cost entries, the non-constant registry,
the cost history and the significant-change signal. Create one per editor
session; tests create isolated instances.

Save/analysis cycle:
    session.apply_analysis(path, entries, text=source)    # first analysis
    result = session.check_significant_change(path, saved)
    if result.is_significant:
        session.apply_analysis(path, fresh_entries, text=saved)

All public operations are serialized through one re-entrant lock, so a
host that delivers events from several threads still sees them one at a
time.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from datetime import datetime

from costlens.changes.classifier import (
    SignificanceClassifier,
    SignificanceResult,
    attach_change_causes,
)
from costlens.changes.events import SignificantChangeSignal
from costlens.changes.registry import NonConstantRegistry
from costlens.core.config import CostLensConfig
from costlens.costs.history import CostHistoryTracker
from costlens.costs.types import CostEntry
from costlens.java.declarations import find_method_declarations, get_generic_type_extensions
from costlens.java.types import MethodDeclaration

__all__ = ["CostSession"]

logger = logging.getLogger(__name__)


class CostSession:
    """Injectable state container for one editor session.

    Attributes:
        config: Current configuration (replaced on whitelist changes).
        registry: Non-constant method names.
        history: Per-method cost history.
        signal: Fired after every classification pass.

    """

    def __init__(
        self,
        config: CostLensConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize an empty session.

        Args:
            config: Configuration; defaults if None.
            clock: Timestamp source for history entries.

        """
        self._lock = threading.RLock()
        self.registry = NonConstantRegistry()
        self.history = CostHistoryTracker(clock=clock)
        self.signal = SignificantChangeSignal()
        self._classifier = SignificanceClassifier(self.registry, config, self.signal)
        self._snapshots: dict[str, str] = {}
        self._costs: dict[str, list[CostEntry]] = {}
        self._causes: dict[str, dict[str, list[str]]] = {}

    @property
    def config(self) -> CostLensConfig:
        return self._classifier.config

    @config.setter
    def config(self, value: CostLensConfig) -> None:
        with self._lock:
            self._classifier.config = value

    # ------------------------------------------------------------------
    # Snapshots and declarations
    # ------------------------------------------------------------------

    def record_snapshot(self, file: str, text: str) -> None:
        """Remember text as the snapshot the file's costs refer to."""
        with self._lock:
            self._snapshots[file] = text

    def snapshot(self, file: str) -> str | None:
        with self._lock:
            return self._snapshots.get(file)

    def costs(self, file: str) -> list[CostEntry]:
        """Current cost entries of file (empty if never analyzed)."""
        with self._lock:
            return list(self._costs.get(file, ()))

    def find_method_declarations(self, file: str, text: str) -> list[MethodDeclaration]:
        """Extract declarations from text.

        Generic bounds come from the file's recorded snapshot when there is
        one, so identities keep matching the analyzed costs while editing.
        """
        with self._lock:
            bounds_source = self._snapshots.get(file, text)
        return find_method_declarations(text, get_generic_type_extensions(bounds_source))

    # ------------------------------------------------------------------
    # Save / analysis cycle
    # ------------------------------------------------------------------

    def check_significant_change(self, file: str, saved_text: str) -> SignificanceResult:
        """Classify the edit between file's snapshot and saved_text.

        Causes are attached to the file's current cost entries and to the
        newest history entry of each, and kept until the next
        apply_analysis() of the file consumes them.

        Args:
            file: Source file path.
            saved_text: Text just saved.

        Returns:
            SignificanceResult; not significant if no snapshot exists yet.

        """
        with self._lock:
            previous = self._snapshots.get(file)
            if previous is None:
                logger.debug("No snapshot for %s, skipping change check", file)
                return SignificanceResult()

            result = self._classifier.check(
                previous, saved_text, self._costs.get(file, ()), self.history
            )
            self._causes[file] = result.causes
            logger.info(
                "Change check for %s: %s",
                file,
                "significant" if result.is_significant else "not significant",
            )
            return result

    def apply_analysis(
        self,
        file: str,
        entries: Sequence[CostEntry],
        text: str | None = None,
        project_wide: bool = False,
    ) -> list[CostEntry]:
        """Take in the cost entries of a fresh analysis of file.

        Args:
            file: Analyzed source file path.
            entries: Fresh cost entries for the file.
            text: Source text that was analyzed; becomes the new snapshot.
            project_wide: True if the analysis replaced all project data,
                which resets the whole registry instead of the file's names.

        Returns:
            Entries appended to the history.

        """
        with self._lock:
            if text is not None:
                self._snapshots[file] = text

            if project_wide:
                self.registry.reset_all()
            else:
                self.registry.reset_for_file(e.method_name for e in self._costs.get(file, ()))
            self.registry.record_costs(entries)

            attach_change_causes(entries, self._causes.pop(file, {}))
            self._costs[file] = list(entries)
            appended = self.history.update(entries)
            logger.info(
                "Applied analysis of %s: %d entries, %d history changes",
                file,
                len(entries),
                len(appended),
            )
            return appended

    # ------------------------------------------------------------------
    # Whitelist and lifecycle
    # ------------------------------------------------------------------

    def whitelist_method(self, method_name: str) -> None:
        with self._lock:
            self._classifier.config = self.config.with_whitelisted(method_name)

    def unwhitelist_method(self, method_name: str) -> None:
        with self._lock:
            self._classifier.config = self.config.without_whitelisted(method_name)

    def disable(self) -> None:
        """Forget all session state. Subscribers stay registered."""
        with self._lock:
            self._snapshots.clear()
            self._costs.clear()
            self._causes.clear()
            self.registry.reset_all()
            self.history.clear()
            logger.info("Session state cleared")
