"""Significance classification of source edits.

Decides whether an edit is likely to change a method's measured cost, so
the caller knows when re-running the cost analyzer is worthwhile. An edit
is significant when an added or removed line contains:

- a ``while (...)`` or ``for (...)`` loop header, or
- a call to a method registered as non-constant and not whitelisted.

Each such occurrence is attributed to the method whose declaration header
precedes it in the diff. The heuristic errs towards false positives: a
spurious re-analysis costs seconds, a missed one leaves stale costs.

Pipeline: diff_lines() → strip_declarations() → scan_occurrences() → attribution
"""

from __future__ import annotations

import logging
from collections.abc import Container, Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from costlens.changes.diff import DiffSegment, diff_lines
from costlens.changes.events import SignificantChangeSignal
from costlens.changes.registry import NonConstantRegistry
from costlens.core.config import CostLensConfig
from costlens.java.declarations import get_generic_type_extensions, get_parameter_types
from costlens.java.patterns import (
    LOOP_KEYWORDS,
    iter_declaration_matches,
    occurrence_name,
    scan_occurrences,
    strip_declarations,
)
from costlens.java.types import TypeExtensions, method_identity

if TYPE_CHECKING:
    from costlens.costs.history import CostHistoryTracker
    from costlens.costs.types import CostEntry

logger = logging.getLogger(__name__)

# Cause map key for occurrences with no declaration before them
UNATTRIBUTED = ""


@dataclass
class SignificanceResult:
    """Outcome of one classification pass.

    Attributes:
        is_significant: True if any occurrence was judged cost-relevant.
        causes: Enclosing method identity → literal occurrence texts, without
            duplicates, in discovery order. Occurrences with no enclosing
            declaration are keyed by UNATTRIBUTED.

    """

    is_significant: bool = False
    causes: dict[str, list[str]] = field(default_factory=dict)


def classify_change(
    previous_text: str,
    new_text: str,
    non_constant: Container[str],
    whitelist: Iterable[str] = (),
    type_extensions: TypeExtensions | None = None,
) -> SignificanceResult:
    """Classify the edit from previous_text to new_text.

    Args:
        previous_text: Snapshot the current costs were measured on.
        new_text: Saved text.
        non_constant: Names of methods with non-constant cost.
        whitelist: Method names whose calls never count. Loops always count.
        type_extensions: Generic bounds of previous_text; derived if None.

    Returns:
        SignificanceResult with the cause map.

    """
    if type_extensions is None:
        type_extensions = get_generic_type_extensions(previous_text)
    exempt = frozenset(whitelist)

    segments = diff_lines(previous_text, new_text)
    result = SignificanceResult()

    for index, segment in enumerate(segments):
        if not segment.changed:
            continue
        occurrences = scan_occurrences(strip_declarations(segment.value))
        if not occurrences:
            continue

        containing = _enclosing_method(segments[:index], type_extensions)
        for occurrence in occurrences:
            before = segment.value.partition(occurrence)[0]
            containing = _last_declaration(before, type_extensions) or containing

            name = occurrence_name(occurrence)
            if name not in LOOP_KEYWORDS and (name not in non_constant or name in exempt):
                continue

            cause_list = result.causes.setdefault(containing, [])
            if occurrence not in cause_list:
                cause_list.append(occurrence)
                logger.debug(
                    "Significant %s change in %s: %s",
                    segment.state,
                    containing or "<unknown method>",
                    occurrence,
                )
            result.is_significant = True

    return result


def attach_change_causes(
    entries: Iterable[CostEntry],
    causes: dict[str, list[str]],
    history: CostHistoryTracker | None = None,
) -> None:
    """Attach cause lists to cost entries and their newest history entries.

    Entries whose identity has no causes get None.

    Args:
        entries: Cost entries of the classified file.
        causes: Cause map from classify_change().
        history: Tracker whose head entries should receive the same causes.

    """
    for entry in entries:
        entry_causes = causes.get(entry.identity)
        entry.change_cause_methods = list(entry_causes) if entry_causes else None
        if history is not None:
            history.attach_change_causes(entry.id, entry.change_cause_methods)


class SignificanceClassifier:
    """Classifier bound to a registry, a whitelist and a notification signal.

    Usage:
        classifier = SignificanceClassifier(registry, config)
        classifier.signal.subscribe(refresh)
        result = classifier.check(previous, saved, entries, history)

    """

    def __init__(
        self,
        registry: NonConstantRegistry,
        config: CostLensConfig | None = None,
        signal: SignificantChangeSignal | None = None,
    ) -> None:
        self.registry = registry
        self.config = config or CostLensConfig()
        self.signal = signal or SignificantChangeSignal()

    def check(
        self,
        previous_text: str | None,
        new_text: str,
        entries: Sequence[CostEntry] = (),
        history: CostHistoryTracker | None = None,
    ) -> SignificanceResult:
        """Classify an edit, attribute causes and notify subscribers.

        Args:
            previous_text: Last analyzed snapshot; None if there is none yet.
            new_text: Saved text.
            entries: Current cost entries of the file.
            history: Cost history to annotate.

        Returns:
            SignificanceResult; not significant without a previous snapshot.

        """
        if previous_text is None:
            logger.debug("No previous snapshot, nothing to compare")
            return SignificanceResult()

        result = classify_change(
            previous_text,
            new_text,
            self.registry,
            self.config.method_whitelist,
        )
        attach_change_causes(entries, result.causes, history)
        self.signal.fire()
        return result


def _enclosing_method(segments: Sequence[DiffSegment], type_extensions: TypeExtensions) -> str:
    """Identity of the last declaration across segments, or UNATTRIBUTED."""
    containing = UNATTRIBUTED
    for segment in segments:
        containing = _last_declaration(segment.value, type_extensions) or containing
    return containing


def _last_declaration(text: str, type_extensions: TypeExtensions) -> str | None:
    identity = None
    for match in iter_declaration_matches(text):
        identity = method_identity(
            match.group(1), get_parameter_types(match.group(0), type_extensions)
        )
    return identity
