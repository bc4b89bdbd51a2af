"""costlens - change-aware method cost tracking.

Detects edits that are likely to change a method's measured cost and keeps
a per-method history of cost measurements annotated with probable causes.

Pipeline: find_method_declarations() → classify_change() → CostHistoryTracker.update()
"""

from costlens.changes.classifier import SignificanceResult, classify_change
from costlens.costs.history import CostHistoryTracker
from costlens.costs.types import CostEntry
from costlens.java.declarations import find_method_declarations
from costlens.session import CostSession

__version__ = "0.1.0"

__all__ = [
    "CostEntry",
    "CostHistoryTracker",
    "CostSession",
    "SignificanceResult",
    "classify_change",
    "find_method_declarations",
]
