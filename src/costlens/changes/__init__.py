"""Change detection: line diffs, non-constant registry and significance classification.

Pipeline: diff_lines() → classify_change() → attach_change_causes()
"""

from costlens.changes.classifier import (
    UNATTRIBUTED,
    SignificanceClassifier,
    SignificanceResult,
    attach_change_causes,
    classify_change,
)
from costlens.changes.diff import DiffSegment, diff_lines
from costlens.changes.events import SignificantChangeSignal
from costlens.changes.registry import NonConstantRegistry

__all__ = [
    "UNATTRIBUTED",
    "DiffSegment",
    "NonConstantRegistry",
    "SignificanceClassifier",
    "SignificanceResult",
    "SignificantChangeSignal",
    "attach_change_causes",
    "classify_change",
    "diff_lines",
]
